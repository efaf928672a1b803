"""AnalysisRequestBuilder — pure assembly of the outbound analysis request."""
from typing import Any, Iterable

from nutrition_decoder.constants import DEFAULT_SOURCE_MEDIA_TYPE, ERR_NO_IMAGES
from nutrition_decoder.errors import ValidationError
from nutrition_decoder.models import AnalysisRequest, EncodedImage


def build(
    encoded_images: Iterable[EncodedImage],
    instruction: str,
    model: str,
) -> AnalysisRequest:
    images = tuple(encoded_images)
    match images:
        case ():
            raise ValidationError(ERR_NO_IMAGES)
        case _:
            return AnalysisRequest(images=images, instruction=instruction, model=model)


def images_from_wire(items: Iterable[Any] | None) -> list[EncodedImage]:
    """Convert HTTP `images` entries into EncodedImage, skipping entries without data."""
    return [
        EncodedImage(
            data=source["data"],
            media_type=source.get("media_type") or DEFAULT_SOURCE_MEDIA_TYPE,
        )
        for source in map(_source_of, items or [])
        if source is not None and source.get("data")
    ]


def _source_of(item: Any) -> dict[str, Any] | None:
    match item:
        case {"source": dict() as source}:
            return source
        case _:
            return None
