"""
Origin allow-list enforcement for cross-origin requests.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from utils.constants import CORS_REJECTED_BODY
from utils.logger import app_logger


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests whose Origin header is not allow-listed.

    Requests without an Origin header (curl, mobile apps, same-origin) pass.
    """

    def __init__(self, app, allowed_origins: list[str]):
        super().__init__(app)
        self.allowed_origins = set(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        """
        Check the Origin header before the request reaches any route.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response from next handler or 403 response
        """
        origin = request.headers.get("origin")

        if origin and origin not in self.allowed_origins:
            app_logger.warning(
                f"CORS blocked request from origin: {origin}",
                extra={"origin": origin, "ip": request.client.host if request.client else "unknown"}
            )
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content=CORS_REJECTED_BODY,
            )

        return await call_next(request)
