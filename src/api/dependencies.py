"""FastAPI dependencies for authentication."""

import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from fastapi.security import APIKeyHeader

from src.config import get_settings
from src.services.tokens import (
    MalformedTokenError,
    SignatureInvalidError,
    TokenExpiredError,
    TokenService,
)

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"

authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer token issued by POST /login",
)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller of a protected endpoint."""

    user_id: int


@lru_cache
def get_token_service() -> TokenService:
    """Get the process-wide token service built from settings."""
    settings = get_settings()
    return TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.jwt_expiration_minutes),
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": BEARER_SCHEME},
    )


def authenticate(
    authorization: str | None,
    tokens: TokenService,
    now: datetime | None = None,
) -> Identity:
    """Turn a raw Authorization header value into an Identity.

    Raises a 401 HTTPException for a missing header, a header that is not
    exactly ``Bearer <token>``, and for every token verification failure.
    The identity store is never consulted; the token's subject is trusted.
    """
    if not authorization:
        logger.info("Authorization header missing")
        raise _unauthorized("Authorization header required")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        logger.info("Invalid Authorization header format")
        raise _unauthorized("Invalid Authorization header format")

    try:
        user_id = tokens.verify(parts[1], now)
    except SignatureInvalidError:
        logger.warning("Invalid token signature")
        raise _unauthorized("Invalid token") from None
    except TokenExpiredError:
        logger.info("Expired token presented")
        raise _unauthorized("Token expired") from None
    except MalformedTokenError as e:
        logger.info(f"Token parsing error: {e}")
        raise _unauthorized("Invalid token") from None

    return Identity(user_id=user_id)


def get_current_identity(
    authorization: Annotated[str | None, Depends(authorization_header)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Identity:
    """Require a valid bearer token and return the caller's identity."""
    return authenticate(authorization, tokens)


class AuthenticatedRoute(APIRoute):
    """Route that rejects unauthenticated requests before reading the body.

    FastAPI parses the request body before it resolves dependencies, so a
    protected route relying on ``get_current_identity`` alone would answer a
    malformed body with 400 to a caller who has no token at all.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        route_handler = super().get_route_handler()

        async def authenticated_route_handler(request: Request) -> Response:
            try:
                authenticate(request.headers.get("Authorization"), get_token_service())
            except HTTPException as e:
                return JSONResponse(
                    status_code=e.status_code,
                    content={"detail": e.detail},
                    headers=e.headers,
                )
            return await route_handler(request)

        return authenticated_route_handler
