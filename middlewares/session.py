from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from config.settings import settings
from dependencies.security import set_session_cookie, verify_session_token


class SessionRefreshMiddleware(BaseHTTPMiddleware):
    """Re-issues the session cookie on each authenticated request (sliding expiry)"""

    async def dispatch(self, request: Request, call_next):
        payload = verify_session_token(request.cookies.get(settings.SESSION_COOKIE_NAME))
        response = await call_next(request)

        # the route may have logged the user out or issued a new cookie already
        already_set = any(
            name == b"set-cookie" and value.startswith(settings.SESSION_COOKIE_NAME.encode() + b"=")
            for name, value in response.raw_headers
        )
        if payload is not None and not already_set:
            set_session_cookie(response, int(payload["userId"]))
        return response
