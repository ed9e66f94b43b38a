"""
Bearer token verification for the Checkout service.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Protocol

from fastapi import Header
from jose import jwt
from jose.exceptions import JWTError

from shared.config import BaseConfig
from shared.logging import get_logger, set_user_context
from shared.errors import (
    AuthenticationRequiredError,
    CheckoutException,
    InvalidCredentialError,
    MalformedCredentialError,
)


class RejectionReason(str, Enum):
    """Why a request was not admitted."""
    AUTHENTICATION_REQUIRED = "authentication_required"
    MALFORMED_CREDENTIAL = "malformed_credential"
    INVALID_CREDENTIAL = "invalid_credential"


_ERRORS = {
    RejectionReason.AUTHENTICATION_REQUIRED: AuthenticationRequiredError,
    RejectionReason.MALFORMED_CREDENTIAL: MalformedCredentialError,
    RejectionReason.INVALID_CREDENTIAL: InvalidCredentialError,
}


@dataclass(frozen=True)
class VerifiedIdentity:
    """Decoded claims of a token that passed verification."""
    claims: Dict[str, Any] = field(default_factory=dict)

    @property
    def subject(self) -> Optional[str]:
        return self.claims.get("sub")


@dataclass(frozen=True)
class VerificationResult:
    """Either an admitted identity or a rejection reason, never both."""
    identity: Optional[VerifiedIdentity] = None
    reason: Optional[RejectionReason] = None
    error: Optional[str] = None

    @classmethod
    def authorized(cls, claims: Dict[str, Any]) -> "VerificationResult":
        return cls(identity=VerifiedIdentity(claims=claims))

    @classmethod
    def rejected(cls, reason: RejectionReason, error: Optional[str] = None) -> "VerificationResult":
        return cls(reason=reason, error=error)

    @property
    def admitted(self) -> bool:
        return self.identity is not None

    def to_exception(self) -> CheckoutException:
        """Exception matching the rejection reason."""
        details = {"error": self.error} if self.error else {}
        return _ERRORS[self.reason](details=details)


class TokenDecoder(Protocol):
    """Verifies a raw token and returns its claims.

    Implementations raise ``InvalidCredentialError`` on any failure.
    """

    def decode(self, token: str) -> Dict[str, Any]:
        ...


class JoseTokenDecoder:
    """Shared-secret JWT decoder backed by python-jose."""

    def __init__(self, secret: str, algorithm: str = "HS256",
                 issuer: Optional[str] = None, audience: Optional[str] = None):
        self.secret = secret
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_config(cls, config: BaseConfig) -> "JoseTokenDecoder":
        return cls(
            config.jwt_secret,
            algorithm=config.jwt_algorithm,
            issuer=config.jwt_issuer,
            audience=config.jwt_audience,
        )

    def decode(self, token: str) -> Dict[str, Any]:
        if not self.secret:
            # HMAC with an empty key proves nothing
            raise InvalidCredentialError(details={"error": "signing secret not configured"})

        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={
                    "verify_exp": True,
                    "require_exp": True,
                    "require_iss": self.issuer is not None,
                    "verify_aud": self.audience is not None,
                },
            )
        except JWTError as e:
            raise InvalidCredentialError(details={"error": str(e)})


class TokenVerifier:
    """Gates requests on an ``Authorization: Bearer <token>`` header."""

    def __init__(self, decoder: TokenDecoder):
        self.decoder = decoder
        self.logger = get_logger("checkout.token_verifier")

    def verify(self, authorization: Optional[str]) -> VerificationResult:
        """Classify an authorization header value."""
        if not authorization:
            return VerificationResult.rejected(RejectionReason.AUTHENTICATION_REQUIRED)

        parts = authorization.split()
        if len(parts) < 2 or parts[0].lower() != "bearer":
            return VerificationResult.rejected(
                RejectionReason.MALFORMED_CREDENTIAL,
                "expected 'Bearer <token>'"
            )

        try:
            claims = self.decoder.decode(parts[1])
        except InvalidCredentialError as e:
            return VerificationResult.rejected(
                RejectionReason.INVALID_CREDENTIAL,
                e.details.get("error", e.message)
            )

        return VerificationResult.authorized(claims)

    async def authenticate(self, authorization: Optional[str] = Header(None)) -> VerifiedIdentity:
        """FastAPI dependency returning the caller identity or raising."""
        result = self.verify(authorization)

        if not result.admitted:
            self.logger.warning(
                "Request rejected",
                reason=result.reason.value,
                error=result.error
            )
            raise result.to_exception()

        set_user_context(result.identity.subject)
        self.logger.info("Request authenticated", sub=result.identity.subject)
        return result.identity
