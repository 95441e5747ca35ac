"""Custom exceptions for the navigation app."""


class NavigationException(Exception):
    """Base exception for the navigation app."""


class PlacementError(NavigationException):
    """Raised when a questionnaire cannot be placed in the navigation tree."""
