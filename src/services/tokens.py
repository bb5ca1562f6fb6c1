"""Issuing and verifying signed access tokens.

Tokens use the JWT compact form (``header.payload.signature``, each segment
base64url-encoded) signed with an HMAC algorithm. The claims carry only the
user id (``sub``) and an absolute expiry (``exp``, Unix seconds). Tokens are
never stored; a token is valid exactly when its signature matches the
configured secret and its expiry lies in the future, so changing the secret
invalidates every token issued before the change.
"""

import hmac
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwk, jwt
from jose.utils import base64url_encode

DEFAULT_TOKEN_TTL = timedelta(hours=24)


class TokenError(Exception):
    """Base class for token verification failures."""


class MalformedTokenError(TokenError):
    """The token is not three segments or does not decode to valid claims."""


class SignatureInvalidError(TokenError):
    """The token's signature does not match the signing secret."""


class TokenExpiredError(TokenError):
    """The token's expiry is not after the verification time."""


class TokenService:
    """Issues and verifies access tokens with a single shared secret.

    One instance is built at startup and shared by the login handler (issuer)
    and the auth gateway (verifier), so both always use the same secret.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        if ttl <= timedelta(0):
            raise ValueError("Token lifetime must be positive")
        self._secret = secret
        self._key = jwk.construct(secret, algorithm)
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(
        self,
        user_id: int,
        now: datetime | None = None,
        ttl: timedelta | None = None,
    ) -> str:
        """Create a signed token for ``user_id`` expiring at ``now + ttl``."""
        now = now or datetime.now(UTC)
        lifetime = self.ttl if ttl is None else ttl
        claims = {
            "sub": str(user_id),
            "exp": (now + lifetime).timestamp(),
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str, now: datetime | None = None) -> int:
        """Verify ``token`` and return the user id it asserts.

        The signature is checked before anything else is decoded, so a token
        with any altered payload or signature character is reported as
        ``SignatureInvalidError`` rather than ``MalformedTokenError``.
        """
        now = now or datetime.now(UTC)

        segments = token.split(".")
        if len(segments) != 3 or not all(segments):
            raise MalformedTokenError("Token must have three dot-separated segments")

        signing_input, signature = token.rsplit(".", 1)
        expected = base64url_encode(self._key.sign(signing_input.encode("utf-8")))
        if not hmac.compare_digest(expected, signature.encode("utf-8")):
            raise SignatureInvalidError("Token signature does not match")

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise MalformedTokenError(f"Token claims could not be decoded: {e}") from e

        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedTokenError("Token has no valid subject") from e

        expires_at = claims.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, int | float):
            raise MalformedTokenError("Token has no valid expiry")

        if now.timestamp() >= expires_at:
            raise TokenExpiredError("Token has expired")

        return user_id
