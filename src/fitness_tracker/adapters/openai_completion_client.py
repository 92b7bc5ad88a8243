"""OpenAI Chat Completions client for text extraction."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from fitness_tracker.errors import ConfigError
from fitness_tracker.services.extraction import CompletionClient


@dataclass
class OpenAICompletionClient(CompletionClient):
    """Completion client backed by the OpenAI Chat Completions API."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls, api_key: str, timeout_seconds: float = 15.0
    ) -> "OpenAICompletionClient":
        """Create an OpenAI completion client."""
        return cls(client=AsyncOpenAI(api_key=api_key, timeout=timeout_seconds))

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Call the chat completions endpoint and return the reply text."""
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except OpenAIError as exc:
            raise ConfigError(f"OpenAI API error: {exc}") from exc
        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
