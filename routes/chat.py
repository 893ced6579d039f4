"""
Route handlers for chat operations.
Handles the /api/chat endpoint.
"""
import json
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from models.api_models import ChatAnswer, ErrorResponse
from models.errors import CompletionError, ValidationFailed
from services.chat_service import ChatService
from services.completion import CompletionGateway
from services.response_classifier import ResponseClassifier
from utils.constants import ValidationMessages
from utils.logger import app_logger

router = APIRouter()


def get_completion_gateway(request: Request) -> CompletionGateway:
    """Resolve the gateway constructed during application startup."""
    return request.app.state.completion_gateway


async def read_payload(request: Request):
    """Decode the JSON body; an empty body counts as an empty object."""
    body = await request.body()
    if not body:
        return {}
    try:
        return json.loads(body)
    except ValueError as e:
        raise ValidationFailed([ValidationMessages.BODY_NOT_JSON]) from e


def elapsed_ms(start_time: float) -> str:
    """Format elapsed time since start_time."""
    return f"{int((time.perf_counter() - start_time) * 1000)}ms"


@router.post(
    "/api/chat",
    response_model=ChatAnswer,
    responses={
        400: {"model": ErrorResponse},
        408: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def chat(request: Request, gateway: CompletionGateway = Depends(get_completion_gateway)):
    """
    Answer a mental health study question with citations in the requested style.
    """
    start_time = time.perf_counter()
    client_ip = request.client.host if request.client else "unknown"

    try:
        chat_request = ChatService.validate_request(await read_payload(request))
    except ValidationFailed as e:
        app_logger.warning(
            "Validation error in /api/chat",
            extra={"errors": e.details, "ip": client_ip}
        )
        status_code, body = ResponseClassifier.validation_failure(e)
        return JSONResponse(status_code=status_code, content=body)

    app_logger.info(
        "Processing chat request",
        extra={
            "ip": client_ip,
            "questionLength": len(chat_request.question),
            "citationStyle": chat_request.citation_style,
            "citationMode": chat_request.citation_mode,
            "recency": chat_request.recency,
            "materialsCount": len(chat_request.materials),
        }
    )

    system_prompt = ChatService.build_system_prompt(chat_request)

    try:
        answer = await gateway.generate(system_prompt, chat_request.question)
    except CompletionError as e:
        app_logger.error(
            f"Completion failed in /api/chat ({e.kind.value})",
            exc_info=e,
            extra={
                "ip": client_ip,
                "duration": elapsed_ms(start_time),
                "kind": e.kind.value,
                "error": e.message,
            }
        )
        status_code, body = ResponseClassifier.completion_failure(e)
        return JSONResponse(status_code=status_code, content=body)

    app_logger.info(
        "Chat request completed successfully",
        extra={"ip": client_ip, "duration": elapsed_ms(start_time)}
    )
    status_code, body = ResponseClassifier.success(answer)
    return JSONResponse(status_code=status_code, content=body)
