"""
Firebase Auth ID token verifier.

Implements IdTokenVerifier with PyJWT. Tokens are RS256 JWTs signed by
Google's securetoken service account; signing keys are fetched from the
public JWKS endpoint and cached.

Revocation is not checked: that requires the Firebase Admin API.
"""

import logging

import jwt

from oncall.domain.entities import VerifiedToken
from oncall.domain.ports import IdTokenVerifier, InvalidIdTokenError

logger = logging.getLogger(__name__)

SECURETOKEN_JWKS_URL = (
    "https://www.googleapis.com/service_accounts/v1/jwk/"
    "securetoken@system.gserviceaccount.com"
)
SECURETOKEN_ISSUER = "https://securetoken.google.com/"
JWKS_CACHE_SECONDS = 3600
MAX_UID_LENGTH = 128


class FirebaseIdTokenVerifier(IdTokenVerifier):
    """Verifies Firebase Auth ID tokens for one Firebase project.

    Checks signature, expiry, audience (the project ID), issuer and
    subject. Returns the subject as the caller's UID.
    """

    def __init__(
        self,
        project_id: str,
        jwks_client: jwt.PyJWKClient | None = None,
        leeway: float = 0.0,
    ) -> None:
        if not project_id:
            raise ValueError("project_id is required")
        self._project_id = project_id
        self._issuer = SECURETOKEN_ISSUER + project_id
        self._leeway = leeway
        self._jwks_client = jwks_client or jwt.PyJWKClient(
            SECURETOKEN_JWKS_URL, cache_keys=True, lifespan=JWKS_CACHE_SECONDS
        )

    @property
    def project_id(self) -> str:
        return self._project_id

    def verify(self, token: str) -> VerifiedToken:
        """Verify a Firebase ID token.

        Raises:
            InvalidIdTokenError: With a readable reason on any failure.
        """
        try:
            signing_key = self._jwks_client.get_signing_key_from_jwt(token)
        except jwt.PyJWTError as exc:
            raise InvalidIdTokenError(f"unable to resolve signing key: {exc}") from exc

        try:
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                audience=self._project_id,
                issuer=self._issuer,
                leeway=self._leeway,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidIdTokenError("token has expired") from exc
        except jwt.InvalidAudienceError as exc:
            raise InvalidIdTokenError("token audience mismatch") from exc
        except jwt.InvalidIssuerError as exc:
            raise InvalidIdTokenError("token issuer mismatch") from exc
        except jwt.PyJWTError as exc:
            raise InvalidIdTokenError(f"token validation failed: {exc}") from exc

        uid = claims.get("sub")
        if not isinstance(uid, str) or not uid:
            raise InvalidIdTokenError("token has an empty subject")
        if len(uid) > MAX_UID_LENGTH:
            raise InvalidIdTokenError("token subject is too long")

        logger.debug("Verified ID token for project=%s", self._project_id)
        return VerifiedToken(uid=uid, claims=claims)
