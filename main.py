"""
PsyCanvas backend - FastAPI application answering mental health study questions
with citation-aware completions from a remote language model.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Config
from routes import chat, health
from services.completion import CompletionGateway
from utils.http_client import HTTPClientManager
from utils.logger import app_logger, configure_file_logging, detach_handlers
from utils.origin_guard import OriginGuardMiddleware
from utils.rate_limiter import RateLimiter, RateLimitMiddleware


def create_app(
    completion_gateway: CompletionGateway | None = None,
    rate_limiter: RateLimiter | None = None,
    allowed_origins: list[str] | None = None,
    log_dir: str | None = None,
) -> FastAPI:
    """
    Build the application with its services.

    Args:
        completion_gateway: Gateway to use instead of one built from configuration
        rate_limiter: Limiter for /api/* paths (a fresh one by default)
        allowed_origins: CORS allow-list (Config.ALLOWED_ORIGINS by default)
        log_dir: Directory for the error and combined log files

    Returns:
        Configured FastAPI application
    """
    origins = allowed_origins if allowed_origins is not None else Config.ALLOWED_ORIGINS

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager for startup and shutdown events."""
        file_handlers = configure_file_logging(app_logger, log_dir or Config.LOG_DIR)

        http_clients = None
        if completion_gateway is None:
            http_clients = HTTPClientManager()
            app.state.completion_gateway = CompletionGateway.from_config(http_clients.get_api_client())
        else:
            app.state.completion_gateway = completion_gateway

        app_logger.info(
            f"PsyCanvas backend started on port {Config.PORT}",
            extra={"port": Config.PORT, "appEnv": Config.APP_ENV, "allowedOrigins": origins}
        )
        try:
            yield
        finally:
            if http_clients is not None:
                await app.state.completion_gateway.close()
                await http_clients.close_all()
            detach_handlers(app_logger, file_handlers)

    app = FastAPI(title=Config.APP_TITLE, lifespan=lifespan)
    app.state.rate_limiter = rate_limiter or RateLimiter()

    app.add_middleware(RateLimitMiddleware, limiter=app.state.rate_limiter)
    app.add_middleware(OriginGuardMiddleware, allowed_origins=origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(chat.router, tags=["chat"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=Config.PORT)
