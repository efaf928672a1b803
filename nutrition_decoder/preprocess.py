"""ImagePreprocessor — downscale and re-encode label photos before upload."""
import asyncio
import base64
import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

from nutrition_decoder.constants import (
    ERR_DECODE,
    ERR_EMPTY_IMAGE,
    JPEG_QUALITY,
    MAX_IMAGE_EDGE,
    MSG_PREPARED,
    OUTPUT_FORMAT,
    OUTPUT_MEDIA_TYPE,
)
from nutrition_decoder.errors import DecodeError
from nutrition_decoder.models import EncodedImage, SourceImage

logger = logging.getLogger(__name__)


def target_size(width: int, height: int, max_edge: int = MAX_IMAGE_EDGE) -> tuple[int, int]:
    """Scale (width, height) so the longer edge is max_edge. Smaller images keep their size."""
    longest = max(width, height)
    match longest > max_edge:
        case False:
            return (width, height)
        case True:
            scale = max_edge / longest
            return (
                max(1, round(width * scale)),
                max(1, round(height * scale)),
            )


class ImagePreprocessor:

    def __init__(self, max_edge: int = MAX_IMAGE_EDGE, quality: int = JPEG_QUALITY) -> None:
        self._max_edge = max_edge
        self._quality = quality

    async def prepare(self, source: SourceImage) -> EncodedImage:
        """Decode, resize and JPEG-encode one image off the event loop."""
        return await asyncio.to_thread(self._encode, source)

    async def prepare_batch(self, sources: list[SourceImage]) -> list[EncodedImage]:
        """Prepare every image concurrently. One failure fails the whole batch."""
        return list(await asyncio.gather(*map(self.prepare, sources)))

    def _encode(self, source: SourceImage) -> EncodedImage:
        match source.data:
            case b"" | None:
                raise DecodeError(ERR_EMPTY_IMAGE)
            case _:
                pass

        try:
            with Image.open(io.BytesIO(source.data)) as img:
                img.load()
                upright = ImageOps.exif_transpose(img)
                size = target_size(*upright.size, max_edge=self._max_edge)
                resized = upright.convert("RGB").resize(size, Image.Resampling.LANCZOS)
                original_size = img.size
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            raise DecodeError(ERR_DECODE % exc) from exc

        buffer = io.BytesIO()
        resized.save(buffer, format=OUTPUT_FORMAT, quality=self._quality)
        payload = buffer.getvalue()
        logger.debug(MSG_PREPARED, *original_size, *size, len(payload))
        return EncodedImage(
            data=base64.standard_b64encode(payload).decode(),
            media_type=OUTPUT_MEDIA_TYPE,
        )
