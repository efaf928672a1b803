"""Pick the vision backend named by configuration."""
from nutrition_decoder.config import Config
from nutrition_decoder.constants import BACKEND_CLAUDE, BACKEND_GEMINI
from nutrition_decoder.vision.claude import ClaudeAdapter
from nutrition_decoder.vision.client import AnalysisBackend
from nutrition_decoder.vision.gemini import GeminiAdapter


def create_backend(config: Config) -> AnalysisBackend:
    match config.backend:
        case b if b == BACKEND_GEMINI:
            return GeminiAdapter(config.gemini_api_key, config.model, config.timeout)
        case b if b == BACKEND_CLAUDE:
            return ClaudeAdapter(config.claude_api_key, config.model, config.timeout)
        case other:
            raise ValueError(f"Unknown analysis backend: {other}")
