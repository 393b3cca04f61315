"""Typed, user-visible failures raised by storefront operations.

Each error carries a stable machine-readable ``code``. Missing records surface
as protean's ``ObjectNotFoundError`` and bad input as protean's
``ValidationError``; the HTTP layer maps those two alongside the errors below.
"""


class StorefrontError(Exception):
    """Base class for storefront failures."""

    code = "STOREFRONT_ERROR"
    default_message = "The operation could not be completed."

    def __init__(self, message=None, **context):
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)


class Forbidden(StorefrontError):
    code = "FORBIDDEN"
    default_message = "You are not authorized to perform this action."


class AlreadyReviewed(Forbidden):
    code = "ALREADY_REVIEWED"
    default_message = "You have already reviewed this product."


class Unauthenticated(StorefrontError):
    code = "UNAUTHENTICATED"
    default_message = "User not authenticated."


class BadCredentials(StorefrontError):
    code = "BAD_CREDENTIALS"
    default_message = "Incorrect credentials. Please try again."


class InsufficientStock(StorefrontError):
    code = "INSUFFICIENT_STOCK"
    default_message = "Insufficient stock."


class ExternalServiceFailure(StorefrontError):
    code = "EXTERNAL_SERVICE_FAILURE"
    default_message = "An external service failed to complete the request."
