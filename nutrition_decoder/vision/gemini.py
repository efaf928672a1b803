"""GeminiAdapter — Google Gemini vision backend."""
from typing import Optional

from google.genai import Client, types

from nutrition_decoder.constants import BACKEND_GEMINI, GEMINI_DEFAULT_MODEL
from nutrition_decoder.models import AnalysisRequest
from nutrition_decoder.prompts import GEMINI_INSTRUCTION
from nutrition_decoder.vision.client import AnalysisBackend


class GeminiAdapter(AnalysisBackend):
    name = BACKEND_GEMINI
    default_model = GEMINI_DEFAULT_MODEL
    instruction = GEMINI_INSTRUCTION

    _client: Optional[Client] = None

    def _get_client(self) -> Client:
        # One client per adapter; its connection pool is shared across analyses.
        if self._client is None:
            self._client = Client(api_key=self._api_key)
        return self._client

    async def _generate(self, request: AnalysisRequest) -> Optional[str]:
        client = self._get_client()
        parts = [types.Part.from_text(text=request.instruction)] + [
            types.Part.from_bytes(data=image.raw_bytes(), mime_type=image.media_type)
            for image in request.images
        ]
        response = await client.aio.models.generate_content(
            model=request.model,
            contents=parts,
        )
        return response.text
