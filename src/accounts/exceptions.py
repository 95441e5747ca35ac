"""Custom exceptions for the accounts app."""


class AccountsException(Exception):
    """Base exception for the accounts app."""


class OwnershipResolutionError(AccountsException):
    """Raised when no owner can be resolved for the acting user."""
