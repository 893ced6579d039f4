"""
Completion gateway: one bounded call to the remote language model per request.
"""
import asyncio

import httpx
import openai

from config import Config
from models.errors import CompletionError, CompletionErrorKind
from utils.constants import ErrorPatterns


class CompletionGateway:
    """Issues chat-completion calls and reports failures as typed CompletionErrors."""

    # Checked in order; APITimeoutError subclasses APIConnectionError
    ERROR_KINDS = (
        (openai.APITimeoutError, CompletionErrorKind.TIMEOUT),
        (openai.APIConnectionError, CompletionErrorKind.UNREACHABLE),
        (openai.AuthenticationError, CompletionErrorKind.MISCONFIGURED),
        (openai.PermissionDeniedError, CompletionErrorKind.MISCONFIGURED),
        (openai.RateLimitError, CompletionErrorKind.THROTTLED),
        (openai.NotFoundError, CompletionErrorKind.BAD_MODEL_CONFIG),
        (openai.BadRequestError, CompletionErrorKind.BAD_MODEL_CONFIG),
        (openai.UnprocessableEntityError, CompletionErrorKind.BAD_MODEL_CONFIG),
        (httpx.TimeoutException, CompletionErrorKind.TIMEOUT),
        (httpx.TransportError, CompletionErrorKind.UNREACHABLE),
        (ConnectionError, CompletionErrorKind.UNREACHABLE),
    )

    def __init__(self, client: openai.AsyncOpenAI, model: str = Config.OPENAI_MODEL,
                 timeout: float = Config.COMPLETION_TIMEOUT):
        self._client = client
        self._model = model
        self._timeout = timeout

    @classmethod
    def from_config(cls, http_client: httpx.AsyncClient | None = None) -> "CompletionGateway":
        """
        Build a gateway from application configuration.

        Args:
            http_client: Shared httpx client to send requests through

        Returns:
            CompletionGateway with automatic retries disabled
        """
        client = openai.AsyncOpenAI(
            # AsyncOpenAI rejects an empty key at construction; a placeholder fails per request with 401
            api_key=Config.OPENAI_API_KEY or "missing-api-key",
            base_url=Config.OPENAI_BASE_URL,
            timeout=Config.COMPLETION_TIMEOUT,
            max_retries=0,
            http_client=http_client,
        )
        return cls(client)

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, system_prompt: str, question: str) -> str:
        """
        Generate an answer for the question under the given system instruction.

        The call is cancelled once the timeout elapses; its result is discarded.

        Args:
            system_prompt: Rendered system instruction
            question: The user's question

        Returns:
            Generated answer text

        Raises:
            CompletionError: On timeout or any provider/transport failure
        """
        try:
            return await asyncio.wait_for(
                self._request_completion(system_prompt, question),
                timeout=self._timeout
            )
        except asyncio.TimeoutError as e:
            raise CompletionError(CompletionErrorKind.TIMEOUT, "Request timeout") from e
        except CompletionError:
            raise
        except Exception as e:
            raise CompletionError(self.classify_exception(e), str(e)) from e

    async def close(self) -> None:
        """Release the underlying API client."""
        await self._client.close()

    async def _request_completion(self, system_prompt: str, question: str) -> str:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": question},
            ],
        )
        if not response.choices:
            raise CompletionError(CompletionErrorKind.UNKNOWN, "Completion returned no choices")
        return response.choices[0].message.content or ""

    @classmethod
    def classify_exception(cls, error: BaseException) -> CompletionErrorKind:
        """
        Map an exception to a completion error kind.

        Typed SDK and transport errors are matched first; anything else falls
        back to matching fragments of the error message.
        """
        for error_type, kind in cls.ERROR_KINDS:
            if isinstance(error, error_type):
                return kind

        status_code = getattr(error, "status_code", None)
        if status_code == 401:
            return CompletionErrorKind.MISCONFIGURED
        if status_code == 429:
            return CompletionErrorKind.THROTTLED

        return cls.classify_message(str(error))

    @staticmethod
    def classify_message(message: str) -> CompletionErrorKind:
        """Best-effort classification of an untyped error message."""
        text = message.lower()

        if any(pattern in text for pattern in ErrorPatterns.UNREACHABLE):
            return CompletionErrorKind.UNREACHABLE
        if any(pattern in text for pattern in ErrorPatterns.MISCONFIGURED):
            return CompletionErrorKind.MISCONFIGURED
        if any(pattern in text for pattern in ErrorPatterns.THROTTLED):
            return CompletionErrorKind.THROTTLED
        if any(pattern in text for pattern in ErrorPatterns.BAD_MODEL_CONFIG):
            return CompletionErrorKind.BAD_MODEL_CONFIG

        return CompletionErrorKind.UNKNOWN
