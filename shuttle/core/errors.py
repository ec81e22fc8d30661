"""Domain error taxonomy for the quote and booking pipeline.

Every error carries the HTTP status it maps to, a machine-readable kind and
a non-technical message safe to show to customers. ``detail`` holds the
internal diagnostic text and is only exposed when ``settings.DEBUG`` is on.
"""
from typing import List, Optional

from shuttle.core.enums import ErrorKind


class ShuttleError(Exception):
    status_code: int = 500
    kind: ErrorKind = ErrorKind.UNKNOWN_QUOTE_ERROR
    default_message: str = "Something went wrong. Please try again or contact support."

    def __init__(self, user_message: Optional[str] = None, detail: Optional[str] = None):
        self.user_message = user_message or self.default_message
        self.detail = detail
        super().__init__(detail or self.user_message)


class AddressNotFound(ShuttleError):
    status_code = 404
    kind = ErrorKind.ADDRESS_NOT_FOUND

    def __init__(self, field: str, address: str):
        self.field = field
        self.address = address
        label = "pickup" if field == "pickup" else "drop-off"
        super().__init__(
            f'Could not find {label} address: "{address}". '
            "Please check the address and try again.",
            detail=f"geocoder returned no match for {field}={address!r}",
        )


class RouteError(ShuttleError):
    status_code = 422
    kind = ErrorKind.ROUTE_ERROR
    default_message = (
        "No route found between the specified addresses. "
        "Please check the addresses and try again."
    )

    def __init__(self, detail: str, upstream_status: Optional[int] = None):
        self.upstream_status = upstream_status
        super().__init__(detail=detail)


class AuthConfigError(ShuttleError):
    status_code = 500
    kind = ErrorKind.AUTH_CONFIG_ERROR
    default_message = "Routing service authentication failed. Please contact support."


class TransportError(ShuttleError):
    status_code = 503
    kind = ErrorKind.TRANSPORT_ERROR
    default_message = "Network error. Please check your internet connection and try again."


class UnknownQuoteError(ShuttleError):
    status_code = 500
    kind = ErrorKind.UNKNOWN_QUOTE_ERROR
    default_message = "Failed to calculate route"


class FieldValidationError(ShuttleError):
    status_code = 400
    kind = ErrorKind.VALIDATION_ERROR

    MISSING_FIELDS = "missing_fields"
    INVALID_EMAIL = "invalid_email"
    INVALID_NUMBER = "invalid_number"
    INVALID_REQUEST = "invalid_request"

    def __init__(self, reason: str, fields: Optional[List[str]] = None, message: Optional[str] = None):
        self.reason = reason
        self.fields = list(fields or [])
        super().__init__(message, detail=f"{reason}: {', '.join(self.fields)}")

    @classmethod
    def missing(cls, fields: List[str]) -> "FieldValidationError":
        return cls(
            cls.MISSING_FIELDS,
            fields,
            f"Missing required fields: {', '.join(fields)}",
        )

    @classmethod
    def invalid_email(cls) -> "FieldValidationError":
        return cls(cls.INVALID_EMAIL, ["email"], "Invalid email address format")

    @classmethod
    def invalid_number(cls, fields: List[str]) -> "FieldValidationError":
        return cls(
            cls.INVALID_NUMBER,
            fields,
            f"Invalid numeric value for: {', '.join(fields)}",
        )

    @classmethod
    def invalid_request(cls, fields: List[str]) -> "FieldValidationError":
        return cls(
            cls.INVALID_REQUEST,
            fields,
            f"Please check the following fields and try again: {', '.join(fields)}",
        )


class ConfigError(ShuttleError):
    status_code = 400
    kind = ErrorKind.CONFIG_ERROR
    default_message = "Unsupported trip options. Please refresh the page and try again."


class NotificationError(ShuttleError):
    status_code = 502
    kind = ErrorKind.NOTIFICATION_ERROR
    default_message = "Failed to send quote email. Please try again or contact support."


class ServiceNotConfigured(ShuttleError):
    status_code = 500
    kind = ErrorKind.SERVICE_NOT_CONFIGURED


class RateLimitExceeded(ShuttleError):
    status_code = 429
    kind = ErrorKind.RATE_LIMITED
    default_message = "Too many requests. Please wait a few minutes and try again."
