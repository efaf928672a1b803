"""LabelChat — chat-driven analysis flow, transport-agnostic."""
import logging

from nutrition_decoder.analyzer import NutritionAnalyzer
from nutrition_decoder.constants import (
    ERR_UNEXPECTED,
    MSG_ANALYSIS_ERROR,
    MSG_ANALYSIS_FAILED,
    MSG_BUSY,
    MSG_FINISH_FIRST,
    MSG_IMAGE_QUEUED,
    MSG_NO_IMAGES_YET,
    MSG_REMOVE_OUT_OF_RANGE,
    MSG_REMOVE_USAGE,
    MSG_REMOVED,
    MSG_SESSION_RESET,
    MSG_STATUS,
)
from nutrition_decoder.errors import AnalysisError
from nutrition_decoder.models import SourceImage
from nutrition_decoder.render import render_card
from nutrition_decoder.session import SessionRegistry, Step

logger = logging.getLogger(__name__)


class LabelChat:
    """Maps chat events onto one AnalysisSession per sender and returns the reply text."""

    def __init__(self, analyzer: NutritionAnalyzer, sessions: SessionRegistry | None = None) -> None:
        self._analyzer = analyzer
        self._sessions = sessions or SessionRegistry()

    def handle_image(self, sender: str, image: SourceImage) -> str:
        session = self._sessions.get(sender)
        match session.step:
            case Step.ANALYZING:
                return MSG_BUSY
            case Step.RESULT:
                return MSG_FINISH_FIRST
            case Step.HOME:
                return MSG_IMAGE_QUEUED % session.add_image(image)

    async def handle_analyze(self, sender: str) -> str:
        session = self._sessions.get(sender)
        match (session.step, session.images):
            case (Step.ANALYZING, _):
                return MSG_BUSY
            case (Step.RESULT, _):
                return MSG_FINISH_FIRST
            case (Step.HOME, []):
                return MSG_NO_IMAGES_YET
            case _:
                pass

        images = session.begin()
        try:
            result = await self._analyzer.analyze_sources(images)
        except AnalysisError as exc:
            logger.error(MSG_ANALYSIS_FAILED, exc)
            session.fail(str(exc))
            return MSG_ANALYSIS_ERROR % exc
        except Exception:
            logger.exception(MSG_ANALYSIS_FAILED, ERR_UNEXPECTED)
            session.fail(ERR_UNEXPECTED)
            return MSG_ANALYSIS_ERROR % ERR_UNEXPECTED
        session.succeed(result)
        return render_card(result)

    def handle_remove(self, sender: str, args: str) -> str:
        session = self._sessions.get(sender)
        match (session.step, args.strip()):
            case (Step.ANALYZING, _):
                return MSG_BUSY
            case (Step.RESULT, _):
                return MSG_FINISH_FIRST
            case (_, raw) if raw.isdigit():
                number = int(raw)
            case _:
                return MSG_REMOVE_USAGE

        match 1 <= number <= len(session.images):
            case False:
                return MSG_REMOVE_OUT_OF_RANGE % number
            case True:
                session.remove_image(number - 1)
                return MSG_REMOVED % (number, len(session.images))

    def handle_new(self, sender: str) -> str:
        self._sessions.get(sender).reset()
        return MSG_SESSION_RESET

    def handle_status(self, sender: str) -> str:
        session = self._sessions.get(sender)
        backend = self._analyzer.backend
        return MSG_STATUS % (
            backend.name,
            backend.model,
            session.step.value,
            len(session.images),
            session.last_error or "-",
        )
