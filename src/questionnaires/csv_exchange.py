"""Export and import of a questionnaire's questions as CSV."""

import csv
import io
import typing as t

import structlog
from django.core.exceptions import ValidationError

from .exceptions import CsvFormatError, QuestionnaireException
from .models import Question, Questionnaire
from .question_types import build_question
from .service.questionnaire_service import BatchResult, ItemError, ensure_unlocked

logger = structlog.get_logger(__name__)

CSV_HEADER = ("seq", "txt", "type", "weight", "size", "alternatives", "max_label", "min_label")
# Columns that override the type defaults when the cell is not empty.
OPTIONAL_COLUMNS = ("weight", "size", "alternatives", "max_label", "min_label")


def export_questions(questionnaire: Questionnaire, stream: t.TextIO) -> None:
    """Write the questionnaire's questions to ``stream`` in sequence order."""
    writer = csv.writer(stream)
    writer.writerow(CSV_HEADER)
    for question in Question.objects.for_questionnaire(questionnaire.pk):
        writer.writerow(
            [
                question.seq,
                question.txt,
                question.question_type,
                "" if question.weight is None else question.weight,
                question.size or "",
                question.alternatives or "",
                question.max_label or "",
                question.min_label or "",
            ]
        )


def export_csv(questionnaire: Questionnaire) -> str:
    buffer = io.StringIO()
    export_questions(questionnaire, buffer)
    return buffer.getvalue()


def import_questions(questionnaire: Questionnaire, content: str) -> BatchResult:
    """Create one question per CSV row.

    Rows are stored one at a time. Rows that fail are reported by their
    1-based row number and the rows before them are kept.

    Raises:
        CsvFormatError: if the file is not valid CSV or its header lacks the ``txt`` or ``type`` column.
        LockedStateError: if the questionnaire is a quiz somebody has taken.
    """
    ensure_unlocked(questionnaire)
    reader = csv.DictReader(io.StringIO(content))
    try:
        columns = set(reader.fieldnames or ())
        rows = list(reader)
    except csv.Error as e:
        raise CsvFormatError(f"The CSV file could not be read: {e}.") from e
    if missing := {"txt", "type"} - columns:
        raise CsvFormatError(f"The CSV file is missing the columns: {', '.join(sorted(missing))}.")

    first_seq = questionnaire.questions.count() + 1
    result = BatchResult()
    for row_number, row in enumerate(rows, start=1):
        fields: dict[str, t.Any] = {
            "questionnaire": questionnaire,
            "txt": (row.get("txt") or "").strip(),
            "seq": (row.get("seq") or "").strip() or first_seq + row_number - 1,
            "break_before": True,
        }
        for column in OPTIONAL_COLUMNS:
            if value := (row.get(column) or "").strip():
                fields[column] = value
        try:
            question = build_question((row.get("type") or "").strip(), **fields)
            question.save()
        except (QuestionnaireException, ValidationError) as e:
            message = "; ".join(e.messages) if isinstance(e, ValidationError) else str(e)
            logger.warning("csv_row_import_failed", questionnaire_id=questionnaire.pk, row=row_number, error=message)
            result.errors.append(ItemError(index=row_number, kind=type(e).__name__, message=message))
            continue
        result.created.append(question)

    logger.info(
        "questions_imported",
        questionnaire_id=questionnaire.pk,
        created=len(result.created),
        failed=len(result.errors),
    )
    return result
