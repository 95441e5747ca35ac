from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from accounts.exceptions import OwnershipResolutionError
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from navigation.exceptions import NavigationException
from questionnaires.controllers import QuestionnaireController, QuizController
from questionnaires.exceptions import LockedStateError, QuestionnaireException, ReferentialIntegrityError

from .exception_handlers import (
    handle_django_validation_error,
    handle_general_exception,
    handle_locked_state_error,
    handle_navigation_error,
    handle_ownership_resolution_error,
    handle_questionnaire_error,
    handle_referential_integrity_error,
)

api = NinjaExtraAPI(
    title="Peer Review API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Peer Review API {settings.VERSION}",
    app_name=f"peerreview-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, ResponseOk()


api.register_controllers(
    QuestionnaireController,
    QuizController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    QuestionnaireException: handle_questionnaire_error,
    LockedStateError: handle_locked_state_error,
    ReferentialIntegrityError: handle_referential_integrity_error,
    NavigationException: handle_navigation_error,
    OwnershipResolutionError: handle_ownership_resolution_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
