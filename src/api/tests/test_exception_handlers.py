"""Tests for the API exception handlers."""

import orjson
from django.core.exceptions import ValidationError
from django.test import RequestFactory

from api.exception_handlers import handle_django_validation_error, handle_questionnaire_error, obfuscate
from questionnaires.exceptions import MissingNameError


def test_obfuscate_hides_sensitive_keys() -> None:
    data = {"Authorization": "Bearer abc", "name": "Design Review"}

    assert obfuscate(data) == {"Authorization": "********", "name": "Design Review"}
    assert data["Authorization"] == "Bearer abc"


def test_obfuscate_passes_non_dicts_through() -> None:
    assert obfuscate(["a"]) == ["a"]  # type: ignore[arg-type]


def test_field_validation_errors(rf: RequestFactory) -> None:
    """Test that field errors are keyed by field."""
    exc = ValidationError({"name": "Questionnaire names must be unique."})

    response = handle_django_validation_error(rf.post("/api/questionnaires/"), exc)

    assert response.status_code == 400
    assert orjson.loads(response.content) == {"errors": {"name": ["Questionnaire names must be unique."]}}


def test_plain_validation_errors(rf: RequestFactory) -> None:
    """Test that errors without a field are reported as non-field errors."""
    response = handle_django_validation_error(rf.post("/api/questionnaires/"), ValidationError("Broken."))

    assert orjson.loads(response.content) == {"errors": {"__all__": ["Broken."]}}


def test_questionnaire_errors_carry_their_message(rf: RequestFactory) -> None:
    response = handle_questionnaire_error(
        rf.post("/api/questionnaires/"), MissingNameError("A rubric or survey must have a title.")
    )

    assert response.status_code == 400
    assert orjson.loads(response.content) == {"detail": "A rubric or survey must have a title."}
