import logging
from typing import Iterator

import openai
from openai import OpenAI

from alphacard.advisor.prompt import build_messages
from alphacard.config import Settings
from alphacard.schemas.requests import AdvisorRequest

logger = logging.getLogger(__name__)


class AdvisorError(RuntimeError):
    status_code = 500
    message = "AI service temporarily unavailable"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class AdvisorConfigError(AdvisorError):
    message = "AI_GATEWAY_API_KEY is not configured"


class AdvisorRateLimitedError(AdvisorError):
    status_code = 429
    message = "Rate limit exceeded. Please try again in a moment."


class AdvisorCreditsDepletedError(AdvisorError):
    status_code = 402
    message = "AI credits depleted. Please add funds to continue."


class AdvisorUnavailableError(AdvisorError):
    pass


class AdvisorClient:
    """Streams chat completions from an OpenAI-compatible gateway."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        timeout_s: float = 60.0,
        client: OpenAI | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.timeout_s = timeout_s
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "AdvisorClient":
        return cls(
            api_key=settings.ai_gateway_api_key,
            base_url=settings.ai_gateway_url,
            model=settings.ai_model,
            timeout_s=settings.advisor_timeout_s,
        )

    def _openai(self) -> OpenAI:
        if self._client is None:
            if not self.api_key.strip():
                raise AdvisorConfigError()
            self._client = OpenAI(api_key=self.api_key, base_url=self.base_url, timeout=self.timeout_s)
        return self._client

    def open_stream(self, request: AdvisorRequest) -> Iterator[str]:
        """Start a completion and return an iterator over its content deltas.

        Gateway errors surface here, before the first chunk is read, so
        callers can still answer with a proper status code.
        """
        try:
            stream = self._openai().chat.completions.create(
                model=self.model,
                messages=build_messages(request),
                stream=True,
            )
        except openai.RateLimitError as exc:
            raise AdvisorRateLimitedError() from exc
        except openai.APIStatusError as exc:
            if exc.status_code == 402:
                raise AdvisorCreditsDepletedError() from exc
            logger.error("AI gateway error: %s %s", exc.status_code, exc.message)
            raise AdvisorUnavailableError() from exc
        except openai.APIError as exc:
            logger.error("AI gateway unreachable: %s", exc)
            raise AdvisorUnavailableError() from exc

        return self._deltas(stream)

    def _deltas(self, stream) -> Iterator[str]:
        try:
            for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except openai.APIError as exc:
            logger.error("AI gateway stream interrupted: %s", exc)
        finally:
            stream.close()

    def complete(self, request: AdvisorRequest) -> str:
        return "".join(self.open_stream(request))
