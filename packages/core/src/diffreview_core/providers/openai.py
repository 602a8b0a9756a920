from __future__ import annotations

from openai import AsyncOpenAI

from diffreview_core.providers.base import BaseReviewer


class OpenAIReviewer(BaseReviewer):
    DEFAULT_MODEL = "gpt-4o"

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, client=None):
        super().__init__(model)
        self.client = client if client is not None else AsyncOpenAI(api_key=api_key)

    async def _call_api(self, prompt: str) -> str | None:
        response = await self.client.chat.completions.create(
            model=self.model,
            response_format={"type": "json_object"},
            messages=[{"role": "system", "content": prompt}],
            **self.model_parameters,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        await self.client.close()
