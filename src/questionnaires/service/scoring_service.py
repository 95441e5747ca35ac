import structlog

from assignments.models import Assignment
from questionnaires.models import Scores

logger = structlog.get_logger(__name__)


def assignment_total_score(assignment: Assignment, scores: Scores) -> float:
    """Sum of the weighted scores of every questionnaire used by the assignment."""
    total = 0.0
    links = assignment.assignment_questionnaires.select_related("questionnaire")
    for link in links:
        total += link.questionnaire.get_weighted_score(assignment, scores)
    logger.debug("assignment_total_score_computed", assignment_id=assignment.pk, total=total)
    return total
