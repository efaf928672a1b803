"""ClaudeAdapter — Anthropic Claude vision backend."""
from typing import Optional

from anthropic import AsyncAnthropic

from nutrition_decoder.constants import BACKEND_CLAUDE, CLAUDE_DEFAULT_MODEL, CLAUDE_MAX_TOKENS
from nutrition_decoder.models import AnalysisRequest
from nutrition_decoder.prompts import CLAUDE_INSTRUCTION
from nutrition_decoder.vision.client import AnalysisBackend


class ClaudeAdapter(AnalysisBackend):
    name = BACKEND_CLAUDE
    default_model = CLAUDE_DEFAULT_MODEL
    instruction = CLAUDE_INSTRUCTION

    async def _generate(self, request: AnalysisRequest) -> Optional[str]:
        client = AsyncAnthropic(api_key=self._api_key, max_retries=0)
        message = await client.messages.create(
            model=request.model,
            max_tokens=CLAUDE_MAX_TOKENS,
            messages=[
                {
                    "role": "user",
                    "content": [
                        *(image.to_wire() for image in request.images),
                        {"type": "text", "text": request.instruction},
                    ],
                }
            ],
        )
        match message.content:
            case [first, *_]:
                return first.text
            case _:
                return None
