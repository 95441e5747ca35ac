"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from accounts.exceptions import OwnershipResolutionError
from navigation.exceptions import NavigationException
from questionnaires.exceptions import LockedStateError, QuestionnaireException, ReferentialIntegrityError

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    json_payload = None
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            json_payload = obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:  # pragma: no cover
            json_payload = None
    logger.exception(
        "internal_server_error",
        method=request.method,
        path=request.path,
        headers=obfuscate(dict(request.headers)),
        payload=json_payload,
        user=str(request.user) if getattr(request, "user", None) else None,
    )
    data = {"detail": "Internal Server Error."}
    is_staff = getattr(request, "user", None) and request.user.is_staff
    if settings.DEBUG or is_staff:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.info("validation_error", path=request.path)
    if hasattr(exc, "error_dict"):
        error_dict = exc.message_dict
    else:
        error_dict = {NON_FIELD_ERRORS: exc.messages}
    return Response(status=400, data={"errors": error_dict})


def handle_questionnaire_error(
    request: HttpRequest, exc: QuestionnaireException | t.Type[QuestionnaireException]
) -> Response:
    """Handle a questionnaire error. The message is meant for the user."""
    logger.info("questionnaire_error", path=request.path, error=type(exc).__name__)
    return Response(status=400, data={"detail": str(exc)})


def handle_locked_state_error(request: HttpRequest, exc: LockedStateError | t.Type[LockedStateError]) -> Response:
    """Handle an edit of a quiz that was already taken."""
    return Response(status=409, data={"detail": str(exc)})


def handle_referential_integrity_error(
    request: HttpRequest, exc: ReferentialIntegrityError | t.Type[ReferentialIntegrityError]
) -> Response:
    """Handle a deletion of a questionnaire that is still in use."""
    return Response(status=409, data={"detail": str(exc)})


def handle_navigation_error(request: HttpRequest, exc: NavigationException | t.Type[NavigationException]) -> Response:
    """Handle a navigation placement error."""
    logger.warning("navigation_error", path=request.path, error=str(exc))
    return Response(status=400, data={"detail": str(exc)})


def handle_ownership_resolution_error(
    request: HttpRequest, exc: OwnershipResolutionError | t.Type[OwnershipResolutionError]
) -> Response:
    """Handle a user that cannot own what they tried to create."""
    return Response(status=403, data={"detail": str(exc)})


SENSITIVE_KEYS = {"password", "token", "x-api-key", "authorization", "authentication", "cookie"}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    if not isinstance(data, dict):
        return data
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
