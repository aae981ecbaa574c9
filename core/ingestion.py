"""Image ingestion: resolve caller-supplied image input and store previews.

Callers may hand over an image in one of several encodings. The resolver
strategies below are tried in a fixed order and each returns bytes or
``None``; they touch nothing but the optional client path, so they can be
tested without a vault. :class:`ImageIngestor` then writes the original under
``images/<YYYY>-<MM>/`` and a bounded Pillow thumbnail under ``thumbnails/``.

Updates:
  v0.3.0 - 2026-10-15 - Parse data-URL MIME types from the header only.
  v0.2.0 - 2026-10-11 - Split input resolution into ordered resolver strategies.
  v0.1.0 - 2026-10-07 - Initial ingestion helper with Pillow thumbnails.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import os
import re
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath
from urllib.parse import unquote_to_bytes

from PIL import Image, ImageOps, UnidentifiedImageError

from .assets import IMAGES_DIR, THUMBNAILS_DIR, AssetStore
from .exceptions import AssetStorageError, InvalidImageInputError

logger = logging.getLogger("prompt_vault.ingestion")

DEFAULT_EXTENSION = "png"
DEFAULT_THUMBNAIL_SIZE = 300
VECTOR_EXTENSIONS = frozenset({"svg"})

MIME_EXTENSIONS: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
    "image/svg+xml": "svg",
}

_FILE_SCHEME = "file://"
_WINDOWS_DRIVE_URL = re.compile(r"^/[A-Za-z]:")

MISSING_IMAGE_MESSAGE = (
    "No image data was received. Select the file again and retry."
)


@dataclass(slots=True, frozen=True)
class ImageInput:
    """Image supplied alongside a new prompt in any supported encoding."""

    data: bytes | None = None
    path: str | None = None
    data_url: str | None = None
    filename: str | None = None
    has_image: bool = False

    @property
    def expects_image(self) -> bool:
        """Return True when the caller signalled that an image should be stored."""
        return (
            self.has_image
            or self.data is not None
            or bool(self.path)
            or bool(self.data_url)
        )


@dataclass(slots=True, frozen=True)
class IngestedImage:
    """Root-relative locations of a stored original and its preview."""

    image_path: str
    thumbnail_path: str


ImageResolver = Callable[[ImageInput], "bytes | None"]


# ---------------------------------------------------------------------------
# Resolver strategies
# ---------------------------------------------------------------------------


def percent_decode(text: str) -> bytes:
    """Decode ``%XX`` escapes and ``+`` as space into literal bytes."""
    return unquote_to_bytes(text.replace("+", " "))


def _b64decode(text: str) -> bytes | None:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        return None


def resolve_raw_bytes(source: ImageInput) -> bytes | None:
    """Return bytes passed directly by the caller."""
    return source.data or None


def resolve_data_url(source: ImageInput) -> bytes | None:
    """Decode ``data:`` URLs (base64 or percent-encoded) or bare base64 text."""
    data_url = source.data_url
    if not data_url:
        return None
    header, separator, payload = data_url.partition(",")
    if not separator:
        return _b64decode(data_url) or None
    if ";base64" in header:
        decoded = _b64decode(payload)
        if decoded is None:
            return source.data or None
        return decoded or None
    return percent_decode(payload) or None


def normalise_fs_path(path: str) -> str | None:
    """Return a native path for ``file://`` URLs, or None for plain paths."""
    text = path.strip()
    if not text.startswith(_FILE_SCHEME):
        return None
    rest = text[len(_FILE_SCHEME):]
    if _WINDOWS_DRIVE_URL.match(rest):
        rest = rest[1:]
    return os.path.normpath(rest)


def resolve_file_path(source: ImageInput) -> bytes | None:
    """Read the client-supplied path, retrying once with a normalised form."""
    if not source.path:
        return None
    candidates = [source.path]
    normalised = normalise_fs_path(source.path)
    if normalised and normalised != source.path:
        candidates.append(normalised)
    for candidate in candidates:
        try:
            data = Path(candidate).read_bytes()
        except OSError as exc:
            logger.debug("Unable to read image path %s: %s", candidate, exc)
            continue
        if data:
            return data
    return None


IMAGE_RESOLVERS: tuple[ImageResolver, ...] = (
    resolve_raw_bytes,
    resolve_data_url,
    resolve_file_path,
)


def resolve_image_bytes(
    source: ImageInput,
    resolvers: Sequence[ImageResolver] = IMAGE_RESOLVERS,
) -> bytes | None:
    """Return the first non-empty payload produced by *resolvers*."""
    for resolver in resolvers:
        data = resolver(source)
        if data:
            return data
    return None


# ---------------------------------------------------------------------------
# Extension resolution
# ---------------------------------------------------------------------------


def data_url_mime(data_url: str | None) -> str | None:
    """Return the MIME type declared in a ``data:`` URL header."""
    if not data_url or not data_url.startswith("data:"):
        return None
    header = data_url[len("data:"):].partition(",")[0]
    mime = header.split(";", 1)[0].strip().lower()
    return mime or None


def _suffix(name: str | None) -> str | None:
    if not name:
        return None
    base, dot, extension = name.strip().rpartition(".")
    if not dot or not base.strip("/\\") or not extension:
        return None
    if "/" in extension or "\\" in extension:
        return None
    return extension


def resolve_image_extension(source: ImageInput) -> str:
    """Pick a file extension from the filename, path, data-URL MIME, or default."""
    for candidate in (_suffix(source.filename), _suffix(source.path)):
        if candidate:
            return candidate.lower()
    if source.data_url and source.data_url.startswith("data:"):
        mime = data_url_mime(source.data_url)
        return MIME_EXTENSIONS.get(mime or "", DEFAULT_EXTENSION)
    return DEFAULT_EXTENSION


# ---------------------------------------------------------------------------
# Materialisation
# ---------------------------------------------------------------------------


class ImageIngestor:
    """Write originals and thumbnails under the asset root."""

    def __init__(
        self,
        assets: AssetStore,
        *,
        thumbnail_size: int = DEFAULT_THUMBNAIL_SIZE,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._assets = assets
        self._thumbnail_size = thumbnail_size
        self._clock = clock

    def ingest_input(self, source: ImageInput) -> IngestedImage | None:
        """Resolve *source* and store it; None when no image was expected."""
        data = resolve_image_bytes(source)
        if data is None:
            if source.expects_image:
                raise InvalidImageInputError(MISSING_IMAGE_MESSAGE)
            return None
        return self.ingest(data, resolve_image_extension(source))

    def ingest(self, data: bytes, extension: str) -> IngestedImage:
        """Store *data* as an original plus preview and return relative paths."""
        extension = extension.lower().lstrip(".") or DEFAULT_EXTENSION
        identifier = str(uuid.uuid4())
        month_dir = self._clock().strftime("%Y-%m")
        image_rel = str(PurePosixPath(IMAGES_DIR, month_dir, f"{identifier}.{extension}"))
        self._assets.write_bytes(image_rel, data)

        if extension in VECTOR_EXTENSIONS:
            return IngestedImage(image_path=image_rel, thumbnail_path=image_rel)

        thumbnail = self._render_thumbnail(data, extension)
        if thumbnail is None:
            return IngestedImage(image_path=image_rel, thumbnail_path=image_rel)

        thumb_rel = str(PurePosixPath(THUMBNAILS_DIR, f"{identifier}_thumb.{extension}"))
        try:
            self._assets.write_bytes(thumb_rel, thumbnail)
        except AssetStorageError:
            self._assets.remove_quietly(image_rel)
            raise
        return IngestedImage(image_path=image_rel, thumbnail_path=thumb_rel)

    def discard(self, ingested: IngestedImage | None) -> None:
        """Best-effort removal of files written by :meth:`ingest`."""
        if ingested is None:
            return
        self._assets.remove_quietly(ingested.image_path, ingested.thumbnail_path)

    def _render_thumbnail(self, data: bytes, extension: str) -> bytes | None:
        """Return encoded preview bytes, or None when Pillow cannot handle them."""
        bounds = (self._thumbnail_size, self._thumbnail_size)
        try:
            with Image.open(io.BytesIO(data)) as source:
                source.load()
                source_format = source.format
                preview = ImageOps.contain(source, bounds, Image.Resampling.LANCZOS)
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
            logger.info("Image decode failed; using original as thumbnail: %s", exc)
            return None

        save_format = (
            Image.registered_extensions().get(f".{extension}")
            or source_format
            or "PNG"
        )
        if save_format == "JPEG" and preview.mode not in ("RGB", "L", "CMYK"):
            preview = preview.convert("RGB")
        buffer = io.BytesIO()
        try:
            preview.save(buffer, format=save_format)
        except (OSError, ValueError, KeyError) as exc:
            logger.warning("Thumbnail encoding as %s failed; using original: %s", save_format, exc)
            return None
        return buffer.getvalue()


__all__ = [
    "DEFAULT_EXTENSION",
    "DEFAULT_THUMBNAIL_SIZE",
    "IMAGE_RESOLVERS",
    "ImageIngestor",
    "ImageInput",
    "IngestedImage",
    "MIME_EXTENSIONS",
    "data_url_mime",
    "normalise_fs_path",
    "percent_decode",
    "resolve_data_url",
    "resolve_file_path",
    "resolve_image_bytes",
    "resolve_image_extension",
    "resolve_raw_bytes",
]
