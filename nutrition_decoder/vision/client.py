"""AnalysisBackend — abstract base for vision model vendors.

Every vendor shares one contract: take an AnalysisRequest, make exactly one
call to the provider within the configured time bound, and return the raw
text the model produced. Provider failures of any kind surface as
BackendError; a missing credential surfaces as ConfigurationError before any
network traffic.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from nutrition_decoder.constants import (
    ANALYSIS_TIMEOUT,
    ERR_EMPTY_RESPONSE,
    ERR_MISSING_API_KEY,
    ERR_TIMEOUT,
)
from nutrition_decoder.errors import AnalysisError, BackendError, ConfigurationError
from nutrition_decoder.models import AnalysisRequest

logger = logging.getLogger(__name__)


class AnalysisBackend(ABC):
    name: str
    default_model: str
    instruction: str

    def __init__(
        self,
        api_key: Optional[str],
        model: Optional[str] = None,
        timeout: int = ANALYSIS_TIMEOUT,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self.model = model or self.default_model

    async def analyze(self, request: AnalysisRequest) -> str:
        """Send the request to the provider and return its stripped text. Raises on failure."""
        match self._api_key:
            case None | "":
                raise ConfigurationError(ERR_MISSING_API_KEY)
            case _:
                pass

        try:
            text = await asyncio.wait_for(self._generate(request), timeout=self._timeout)
        except AnalysisError:
            raise
        except asyncio.TimeoutError as exc:
            raise BackendError(ERR_TIMEOUT % self._timeout) from exc
        except Exception as exc:
            logger.debug("%s provider error", self.name, exc_info=True)
            raise BackendError(str(exc) or type(exc).__name__) from exc

        match (text or "").strip():
            case "":
                raise BackendError(ERR_EMPTY_RESPONSE)
            case stripped:
                return stripped

    @abstractmethod
    async def _generate(self, request: AnalysisRequest) -> Optional[str]:
        """Make the single provider call and return the model's text."""
        ...
