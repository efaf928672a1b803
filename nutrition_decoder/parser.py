"""ResponseParser — turn the model's raw text into an AnalysisResult."""
import json
from functools import reduce

from nutrition_decoder.constants import ERR_NOT_JSON, ERR_NOT_OBJECT, FENCE_MARKERS
from nutrition_decoder.errors import ParseError
from nutrition_decoder.models import AnalysisResult


def strip_fences(text: str) -> str:
    """Remove every ```json and ``` marker, then surrounding whitespace.

    Exact substring matches only; "```json" goes first so its tag never survives
    as a stray "json" token.
    """
    return reduce(lambda acc, marker: acc.replace(marker, ""), FENCE_MARKERS, text).strip()


def parse(raw: str) -> AnalysisResult:
    match raw:
        case str():
            text = strip_fences(raw)
        case _:
            raise ParseError(ERR_NOT_JSON % type(raw).__name__)

    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError) as exc:
        raise ParseError(ERR_NOT_JSON % exc) from exc

    match data:
        case dict():
            return AnalysisResult.from_dict(data)
        case _:
            raise ParseError(ERR_NOT_OBJECT)
