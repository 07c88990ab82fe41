"""Auth0 JWT Authentication backend for Django REST Framework.

Auth0 is the managed identity provider for dashboard users.  Tokens are
verified with PyJWT (RS256 by default) against the tenant's JWKS, which
``PyJWKClient`` caches in memory for five minutes.

Security decisions
------------------
* **Fail Closed**: any decode / validation error returns 401.
* ``algorithms`` comes from configuration, never from the incoming token.
* Audience **and** issuer are always validated.
* Tokens issued by someone else are left to the next backend (SimpleJWT).
"""

import jwt as pyjwt
import structlog
from decouple import config
from jwt import PyJWKClient
from jwt.exceptions import PyJWTError

from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

logger = structlog.get_logger(__name__)

AUTH0_DOMAIN = config("AUTH0_DOMAIN", default="")
AUTH0_AUDIENCE = config("AUTH0_AUDIENCE", default="")
AUTH0_ALGORITHM = config("AUTH0_ALGORITHM", default="RS256")
AUTH0_EMAIL_CLAIM = config("AUTH0_EMAIL_CLAIM", default="email")

_ISSUER = f"https://{AUTH0_DOMAIN}/" if AUTH0_DOMAIN else ""
_JWKS_URL = f"https://{AUTH0_DOMAIN}/.well-known/jwks.json" if AUTH0_DOMAIN else ""

_jwks_client: PyJWKClient | None = None

if _JWKS_URL:
    _jwks_client = PyJWKClient(
        _JWKS_URL,
        cache_jwk_set=True,
        lifespan=300,
    )

_AUTH0_ENABLED = bool(_jwks_client and AUTH0_AUDIENCE and _ISSUER)


class Auth0User:
    """Principal for requests authenticated via Auth0.

    No local ``User`` row is required.  ``email`` is what ends up in the
    ``created_by`` / ``updated_by`` audit fields.
    """

    is_authenticated = True
    is_active = True

    def __init__(self, payload: dict):
        self.payload = payload
        self.sub: str = payload.get("sub", "")
        self.email: str = payload.get(AUTH0_EMAIL_CLAIM, "") or ""

    def __str__(self) -> str:
        return self.email or self.sub


class Auth0JSONWebTokenAuthentication(BaseAuthentication):
    """DRF authentication class that validates Auth0 JWT Bearer tokens."""

    keyword = "Bearer"

    def authenticate(self, request):
        """Return ``(Auth0User, token)`` or ``None`` (no credentials)."""
        header = request.META.get("HTTP_AUTHORIZATION", "")
        if not header:
            return None

        token = self._extract_token(header)

        if not _AUTH0_ENABLED or not self._token_has_auth0_issuer(token):
            return None

        user = Auth0User(self._decode_token(token))
        logger.info("auth.jwt_authenticated", sub=user.sub)
        return (user, token)

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'

    @staticmethod
    def _extract_token(header: str) -> str:
        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise AuthenticationFailed("Invalid Authorization header format.")
        return parts[1]

    @staticmethod
    def _token_has_auth0_issuer(token: str) -> bool:
        try:
            payload = pyjwt.decode(
                token,
                options={
                    "verify_signature": False,
                    "verify_aud": False,
                    "verify_iss": False,
                },
            )
        except PyJWTError:
            return False
        return payload.get("iss") == _ISSUER

    @staticmethod
    def _decode_token(token: str) -> dict:
        if not _jwks_client:
            raise AuthenticationFailed("Auth0 is not configured (AUTH0_DOMAIN missing).")
        try:
            signing_key = _jwks_client.get_signing_key_from_jwt(token)
            return pyjwt.decode(
                token,
                signing_key.key,
                algorithms=[AUTH0_ALGORITHM],
                audience=AUTH0_AUDIENCE,
                issuer=_ISSUER,
            )
        except PyJWTError as exc:
            logger.warning("auth.jwt_validation_failed", error=str(exc))
            raise AuthenticationFailed(f"Token validation failed: {exc}") from exc
