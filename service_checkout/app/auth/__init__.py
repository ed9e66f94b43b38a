"""
Bearer token verification.

The verifier classifies the ``Authorization`` header into one of three
rejections (no credential, unparsable credential, credential that fails
signature or claim checks) or admits the request with its decoded claims.
Signature checks are delegated to a ``TokenDecoder``; the production
decoder verifies HS256 tokens against the shared secret from config.
"""

from .token_verifier import (
    JoseTokenDecoder,
    RejectionReason,
    TokenDecoder,
    TokenVerifier,
    VerificationResult,
    VerifiedIdentity,
)

__all__ = [
    "JoseTokenDecoder",
    "RejectionReason",
    "TokenDecoder",
    "TokenVerifier",
    "VerificationResult",
    "VerifiedIdentity",
]
