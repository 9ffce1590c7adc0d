"""
Produce and store derivative bytes
"""
import io
import logging
import posixpath
from typing import Mapping, Tuple

import filetype
from PIL import Image, ImageOps

from . import paths, schemas
from .backends.base import Backend
from .exceptions import BackendError, TransformFailure, UnsupportedAction
from .extensions import MIME_EXTENSIONS, extension_for

logger = logging.getLogger("resizeio")

QUALITY = 75
FALLBACK_CONTENT_TYPE = "application/octet-stream"
JPEG_MODES = ("RGB", "L", "CMYK")


def sniff_content_type(data: bytes) -> str:
    kind = filetype.guess(data)
    if kind is None:
        return FALLBACK_CONTENT_TYPE
    return kind.mime


def bounding_box(spec: schemas.TransformSpec, size: Tuple[int, int]) -> Tuple[int, int]:
    """
    Box the image is scaled into.  Never larger than the image itself, so
    nothing is ever upscaled.
    """
    width = spec.width if spec.width and spec.width > 0 else None
    height = spec.height if spec.height and spec.height > 0 else None
    if spec.action == schemas.Action.FIT.value:
        width = width or height
        height = height or width
    box_width = min(width or size[0], size[0])
    box_height = min(height or size[1], size[1])
    return box_width, box_height


def transform(data: bytes, spec: schemas.TransformSpec, extension: str) -> bytes:
    image_format = Image.registered_extensions().get("." + extension.lower())
    if image_format is None:
        raise TransformFailure(f"No encoder for .{extension}")

    with Image.open(io.BytesIO(data)) as source:
        image = ImageOps.exif_transpose(source)
        image.thumbnail(bounding_box(spec, image.size), Image.Resampling.LANCZOS)
        if image_format == "JPEG" and image.mode not in JPEG_MODES:
            image = image.convert("RGB")
        out = io.BytesIO()
        image.save(out, format=image_format, quality=QUALITY)
    return out.getvalue()


class DerivativeGenerator:
    def __init__(
        self,
        backend: Backend,
        browser_cache: int,
        extensions: Mapping[str, str] = MIME_EXTENSIONS,
    ):
        self.backend = backend
        self.browser_cache = browser_cache
        self.extensions = extensions

    def output_extension(self, source_path: str, content_type: str) -> str:
        sniffed = extension_for(content_type, self.extensions)
        nominal = paths.extension(source_path)
        # the nominal extension wins whenever the source has one
        chosen = nominal or sniffed
        if not chosen:
            raise TransformFailure(f"Cannot pick an extension for {source_path}")
        if sniffed and chosen.lower() != sniffed:
            logger.debug(
                "%s sniffed as %s, keeping .%s", source_path, content_type, chosen
            )
        return chosen

    def generate(
        self,
        source_path: str,
        spec: schemas.TransformSpec,
        provisional_path: str,
    ) -> schemas.GeneratedDerivative:
        if spec.action not in (schemas.Action.FIT.value, schemas.Action.RESIZE.value):
            raise UnsupportedAction(f"{spec.action} is not a supported action")
        try:
            data = self.backend.get(source_path)
            content_type = sniff_content_type(data)
            extension = self.output_extension(source_path, content_type)
            encoded = transform(data, spec, extension)
            target_path = paths.replace_extension(provisional_path, extension)
            options = schemas.make_upload_options(
                posixpath.basename(target_path), content_type, self.browser_cache
            )
            self.backend.put(target_path, encoded, options)
        except (BackendError, OSError, ValueError, Image.DecompressionBombError) as e:
            raise TransformFailure(f"{source_path}: {e}") from e
        logger.info("generated %s from %s", target_path, source_path)
        return schemas.GeneratedDerivative(path=target_path, content_type=content_type)
