"""
Route handlers for liveness checks.
"""
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from utils.constants import ROOT_MESSAGE

router = APIRouter()


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health")
async def health():
    """Health check endpoint to verify the service is running."""
    return {"status": "ok", "timestamp": utc_timestamp()}


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Root endpoint."""
    return ROOT_MESSAGE
