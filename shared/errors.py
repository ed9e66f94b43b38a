"""
Shared error handling for the Checkout Access Layer.

Every failure the service can report is a ``CheckoutException`` carrying
the HTTP status it maps to. Authentication failures are rendered as plain
text, everything else as ``{"error": message}``.
"""

from typing import Dict, Any, Optional

from fastapi.responses import JSONResponse, PlainTextResponse, Response


class CheckoutException(Exception):
    """Base exception for Checkout Access Layer services."""

    status_code: int = 500
    plain_text: bool = False

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> Response:
        """Convert to an HTTP response. Details stay server-side."""
        if self.plain_text:
            return PlainTextResponse(self.message, status_code=self.status_code)
        return JSONResponse(status_code=self.status_code, content={"error": self.message})


class AuthenticationRequiredError(CheckoutException):
    """No credential was supplied."""

    status_code = 403
    plain_text = True

    def __init__(self, message: str = "Authorization header required", details: Optional[Dict[str, Any]] = None):
        super().__init__("AUTHENTICATION_REQUIRED", message, details)


class MalformedCredentialError(CheckoutException):
    """A credential was supplied but could not be parsed."""

    status_code = 403
    plain_text = True

    def __init__(self, message: str = "Malformed authorization header", details: Optional[Dict[str, Any]] = None):
        super().__init__("MALFORMED_CREDENTIAL", message, details)


class InvalidCredentialError(CheckoutException):
    """The credential failed signature or claim verification."""

    status_code = 401
    plain_text = True

    def __init__(self, message: str = "Invalid or expired token", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_CREDENTIAL", message, details)


class ValidationError(CheckoutException):
    """Validation-related errors."""

    status_code = 400

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class ProviderError(CheckoutException):
    """The payment provider call failed."""

    status_code = 500

    def __init__(self, provider: str, message: str = "No se pudo crear la preferencia de pago",
                 details: Optional[Dict[str, Any]] = None):
        self.provider = provider
        super().__init__("PROVIDER_ERROR", message, details)
