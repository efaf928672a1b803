"""Entry points — wire Config → backend → NutritionAnalyzer → HTTP API or Telegram bot."""
import logging

import uvicorn
from rich.logging import RichHandler

from nutrition_decoder.analyzer import NutritionAnalyzer
from nutrition_decoder.chat import LabelChat
from nutrition_decoder.config import Config
from nutrition_decoder.constants import MSG_API_STARTING, MSG_BOT_STARTING
from nutrition_decoder.preprocess import ImagePreprocessor
from nutrition_decoder.server import create_app
from nutrition_decoder.telegram.client import TelegramClient
from nutrition_decoder.vision.factory import create_backend

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def _build_analyzer(config: Config) -> NutritionAnalyzer:
    return NutritionAnalyzer(
        create_backend(config),
        ImagePreprocessor(max_edge=config.max_image_edge, quality=config.jpeg_quality),
    )


def serve() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger.info(MSG_API_STARTING, config.api_host, config.api_port, config.backend)
    app = create_app(_build_analyzer(config))
    uvicorn.run(app, host=config.api_host, port=config.api_port, log_config=None)


def bot() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger.info(MSG_BOT_STARTING, config.backend)
    client = TelegramClient(config, LabelChat(_build_analyzer(config)))
    client.run()


if __name__ == "__main__":
    serve()
