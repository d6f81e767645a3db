import asyncio
import logging
from typing import Optional

import openai
from openai import AsyncOpenAI

from . import config
from .errors import ModelRuntimeError, ModelTimeoutError

logger = logging.getLogger(__name__)


class ModelClient:
    """Sends a single prompt to the local model runtime's chat endpoint.

    The runtime is reached through its OpenAI-compatible API (Ollama and vLLM
    both serve one under ``/v1``). Each call is bounded by ``timeout`` seconds
    of wall-clock time; when it elapses the pending request is cancelled and
    ``ModelTimeoutError`` is raised. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str = config.MODEL_BASE_URL,
        model: str = config.MODEL_NAME,
        api_key: str = config.MODEL_API_KEY,
        timeout: float = config.MODEL_TIMEOUT_SECONDS,
        temperature: float = config.MODEL_TEMPERATURE,
        num_ctx: int = config.MODEL_NUM_CTX,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self.num_ctx = num_ctx
        self.client = client or AsyncOpenAI(base_url=base_url, api_key=api_key, timeout=timeout, max_retries=0)

    async def _create(self, prompt: str):
        return await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            response_format={"type": "json_object"},
            extra_body={
                "options": {"num_ctx": self.num_ctx},
            },
        )

    async def complete(self, prompt: str) -> str:
        try:
            resp = await asyncio.wait_for(self._create(prompt), timeout=self.timeout)
        except (asyncio.TimeoutError, openai.APITimeoutError) as e:
            logger.error(f"Model runtime timed out after {self.timeout:g}s")
            raise ModelTimeoutError(f"AI took too long to respond (timeout after {self.timeout:g}s).") from e
        except openai.APIStatusError as e:
            logger.error(f"Model runtime status error: {e.status_code} - {e.message}", exc_info=True)
            raise ModelRuntimeError(f"Model runtime error ({e.status_code}): {e.message}") from e
        except openai.APIConnectionError as e:
            logger.error(f"Model runtime connection error: {e}", exc_info=True)
            raise ModelRuntimeError(f"Failed to reach model runtime: {e}") from e
        except openai.OpenAIError as e:
            logger.error(f"Model runtime client error ({type(e).__name__}): {e}", exc_info=True)
            raise ModelRuntimeError(f"Model runtime error: {e}") from e

        # a runtime that answers 2xx with a non-JSON body comes back as plain text
        choices = getattr(resp, "choices", None)
        if not isinstance(choices, list):
            logger.error(f"Model runtime returned {type(resp).__name__} instead of a chat completion: {str(resp)[:200]}")
            raise ModelRuntimeError("Model runtime returned an unexpected response.")
        if not choices:
            return ""
        content = getattr(getattr(choices[0], "message", None), "content", None)
        if content is not None and not isinstance(content, str):
            raise ModelRuntimeError("Model runtime returned an unexpected response.")
        return content or ""
