"""JWT Bearer authentication middleware."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from eventcatalog.config import settings

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"


def decode_token(token: str) -> dict:
    from jose import JWTError, jwt

    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError as exc:
        logger.debug("JWT decode failed: %s", exc)
        raise ValueError(f"Invalid token: {exc}") from exc


class AuthMiddleware(BaseHTTPMiddleware):
    """Validate a Bearer token and attach the caller to request.state.user.

    Requests without a usable token continue as anonymous; routes that need a
    caller depend on ``get_current_user``.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        auth_header = request.headers.get("authorization", "")
        if auth_header.startswith("Bearer "):
            request.state.user = self._validate_jwt(auth_header[7:])
        else:
            request.state.user = {"sub": ANONYMOUS}
        return await call_next(request)

    @staticmethod
    def _validate_jwt(token: str) -> dict:
        try:
            payload = decode_token(token)
        except ValueError:
            return {"sub": ANONYMOUS, "_auth_error": "Invalid token"}

        if payload.get("type") != "access":
            return {"sub": ANONYMOUS, "_auth_error": "Not an access token"}

        return {
            "sub": payload.get("sub", ""),
            "email": payload.get("email", ""),
        }
