"""AnalysisSession — the capture → analyzing → result flow for one user."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from nutrition_decoder.constants import ERR_NO_IMAGES
from nutrition_decoder.errors import StateTransitionError, ValidationError
from nutrition_decoder.models import AnalysisResult, SourceImage


class Step(str, Enum):
    HOME = "home"
    ANALYZING = "analyzing"
    RESULT = "result"


@dataclass
class AnalysisSession:
    step: Step = Step.HOME
    images: list[SourceImage] = field(default_factory=list)
    result: Optional[AnalysisResult] = None
    last_error: Optional[str] = None

    def add_image(self, image: SourceImage) -> int:
        """Queue an image for the next analysis and return the queue size."""
        self._require(Step.HOME, "add_image")
        self.images.append(image)
        self.last_error = None
        return len(self.images)

    def remove_image(self, index: int) -> SourceImage:
        self._require(Step.HOME, "remove_image")
        return self.images.pop(index)

    def begin(self) -> list[SourceImage]:
        """home → analyzing. Returns a snapshot of the queued images."""
        self._require(Step.HOME, "begin")
        match self.images:
            case []:
                raise ValidationError(ERR_NO_IMAGES)
            case queued:
                self.step = Step.ANALYZING
                return list(queued)

    def succeed(self, result: AnalysisResult) -> None:
        """analyzing → result."""
        self._require(Step.ANALYZING, "succeed")
        self.result = result
        self.step = Step.RESULT

    def fail(self, message: str) -> None:
        """analyzing → home. Queued images are discarded."""
        self._require(Step.ANALYZING, "fail")
        self.images.clear()
        self.result = None
        self.last_error = message
        self.step = Step.HOME

    def reset(self) -> None:
        self.images.clear()
        self.result = None
        self.last_error = None
        self.step = Step.HOME

    def _require(self, expected: Step, action: str) -> None:
        match self.step == expected:
            case True:
                return
            case False:
                raise StateTransitionError(
                    f"{action} needs step {expected.value}, session is {self.step.value}"
                )


class SessionRegistry:
    """In-memory sessions keyed by chat. Nothing survives a restart."""

    def __init__(self) -> None:
        self._sessions: dict[str, AnalysisSession] = {}

    def get(self, key: str) -> AnalysisSession:
        return self._sessions.setdefault(key, AnalysisSession())
