from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from nutrition_decoder.constants import (
    ANALYSIS_TIMEOUT,
    BACKEND_GEMINI,
    BACKENDS,
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    JPEG_QUALITY,
    MAX_IMAGE_EDGE,
)


@dataclass(frozen=True)
class Config:
    backend: str
    gemini_api_key: Optional[str]
    claude_api_key: Optional[str]
    model: Optional[str]
    timeout: int
    max_image_edge: int
    jpeg_quality: int
    log_level: str
    api_host: str
    api_port: int
    telegram_bot_token: Optional[str] = None
    allowed_chat_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        backend = os.getenv("ANALYSIS_BACKEND", BACKEND_GEMINI).strip().lower()
        gemini_api_key = os.getenv("GEMINI_API_KEY") or None
        claude_api_key = (
            os.getenv("CLAUDE_API_KEY") or os.getenv("ANTHROPIC_API_KEY") or None
        )
        model = os.getenv("ANALYSIS_MODEL") or None
        timeout = os.getenv("ANALYSIS_TIMEOUT", str(ANALYSIS_TIMEOUT))
        max_edge = os.getenv("MAX_IMAGE_EDGE", str(MAX_IMAGE_EDGE))
        quality = os.getenv("JPEG_QUALITY", str(JPEG_QUALITY))
        log_level = os.getenv("LOG_LEVEL", "INFO")
        api_host = os.getenv("API_HOST", DEFAULT_API_HOST)
        api_port = os.getenv("API_PORT", str(DEFAULT_API_PORT))
        telegram_bot_token = os.getenv("TELEGRAM_BOT_TOKEN") or None
        allowed_chat_id = os.getenv("ALLOWED_CHAT_ID") or None

        return cls._validate(
            backend=backend,
            gemini_api_key=gemini_api_key,
            claude_api_key=claude_api_key,
            model=model,
            timeout=_as_int("ANALYSIS_TIMEOUT", timeout),
            max_image_edge=_as_int("MAX_IMAGE_EDGE", max_edge),
            jpeg_quality=_as_int("JPEG_QUALITY", quality),
            log_level=log_level,
            api_host=api_host,
            api_port=_as_int("API_PORT", api_port),
            telegram_bot_token=telegram_bot_token,
            allowed_chat_id=allowed_chat_id,
        )

    @staticmethod
    def _validate(
        backend: str,
        gemini_api_key: Optional[str],
        claude_api_key: Optional[str],
        model: Optional[str],
        timeout: int,
        max_image_edge: int,
        jpeg_quality: int,
        log_level: str,
        api_host: str,
        api_port: int,
        telegram_bot_token: Optional[str],
        allowed_chat_id: Optional[str],
    ) -> "Config":
        match backend:
            case b if b in BACKENDS:
                pass
            case _:
                raise ValueError(
                    f"ANALYSIS_BACKEND must be one of {', '.join(BACKENDS)} (got {backend!r})"
                )

        match timeout > 0:
            case False:
                raise ValueError("ANALYSIS_TIMEOUT must be a positive number of seconds")
            case True:
                pass

        match max_image_edge > 0:
            case False:
                raise ValueError("MAX_IMAGE_EDGE must be positive")
            case True:
                pass

        match 1 <= jpeg_quality <= 95:
            case False:
                raise ValueError("JPEG_QUALITY must be between 1 and 95")
            case True:
                pass

        return Config(
            backend=backend,
            gemini_api_key=gemini_api_key,
            claude_api_key=claude_api_key,
            model=model,
            timeout=timeout,
            max_image_edge=max_image_edge,
            jpeg_quality=jpeg_quality,
            log_level=log_level,
            api_host=api_host,
            api_port=api_port,
            telegram_bot_token=telegram_bot_token,
            allowed_chat_id=allowed_chat_id,
        )


def _as_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None
