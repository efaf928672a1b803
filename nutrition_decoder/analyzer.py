"""NutritionAnalyzer — the pipeline, transport-agnostic.

prepare images → build request → one backend call → parse result.
"""
import logging
import time
from typing import Optional

from nutrition_decoder.constants import MSG_ANALYSIS_DONE, MSG_ANALYSIS_START
from nutrition_decoder.models import AnalysisResult, EncodedImage, SourceImage
from nutrition_decoder.parser import parse
from nutrition_decoder.preprocess import ImagePreprocessor
from nutrition_decoder.request_builder import build
from nutrition_decoder.vision.client import AnalysisBackend

logger = logging.getLogger(__name__)


class NutritionAnalyzer:

    def __init__(
        self,
        backend: AnalysisBackend,
        preprocessor: Optional[ImagePreprocessor] = None,
    ) -> None:
        self._backend = backend
        self._preprocessor = preprocessor or ImagePreprocessor()

    @property
    def backend(self) -> AnalysisBackend:
        return self._backend

    async def analyze_sources(
        self, sources: list[SourceImage], model: Optional[str] = None
    ) -> AnalysisResult:
        """Prepare raw uploads, then analyze them as one request."""
        encoded = await self._preprocessor.prepare_batch(sources)
        return await self.analyze_encoded(encoded, model)

    async def analyze_encoded(
        self, images: list[EncodedImage], model: Optional[str] = None
    ) -> AnalysisResult:
        """Analyze images that were already prepared (e.g. by an HTTP client)."""
        request = build(images, self._backend.instruction, model or self._backend.model)
        logger.info(MSG_ANALYSIS_START, self._backend.name, request.model, len(request.images))
        start = time.time()
        raw = await self._backend.analyze(request)
        result = parse(raw)
        logger.info(MSG_ANALYSIS_DONE, time.time() - start, result.product_name)
        return result
