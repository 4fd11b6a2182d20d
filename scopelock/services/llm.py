"""Shared LLM client: OpenAI chat completions, or any OpenAI-compatible gateway."""
import time
import logging
from functools import lru_cache
from openai import OpenAI
from scopelock.config import settings

logger = logging.getLogger(__name__)


class LLMClient:
    """Thin wrapper that sends one user prompt and returns the reply text."""

    def __init__(self, api_key: str, model: str, base_url: str | None = None):
        self.model = model
        self._client = OpenAI(api_key=api_key, base_url=base_url)

    def complete(self, prompt: str, max_tokens: int = 2048, temperature: float = 0.7) -> str:
        prompt_preview = prompt[:120].replace("\n", " ")
        logger.info(
            "LLM call → model=%s  max_tokens=%d  temperature=%.2f  prompt='%s…'",
            self.model, max_tokens, temperature, prompt_preview,
        )

        t0 = time.perf_counter()
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
            text = response.choices[0].message.content if response.choices else None
            elapsed = time.perf_counter() - t0

            usage = response.usage
            tokens_info = ""
            if usage:
                tokens_info = f"  tokens(in={usage.prompt_tokens}, out={usage.completion_tokens})"

            logger.info("LLM done ← %.1fs  len=%d%s", elapsed, len(text or ""), tokens_info)
            logger.debug("LLM response (first 300 chars): %s", (text or "")[:300])

            return text or ""

        except Exception as e:
            elapsed = time.perf_counter() - t0
            logger.error("LLM error after %.1fs: %s: %s", elapsed, type(e).__name__, e)
            raise


@lru_cache
def get_llm() -> LLMClient:
    """Dependency returning the process-wide LLM client."""
    return LLMClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.LLM_MODEL,
        base_url=settings.LLM_BASE_URL,
    )
