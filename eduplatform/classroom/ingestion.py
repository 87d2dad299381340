"""
Ingestion - turn uploaded files into inline content references and back.

Uploads are read to completion and encoded as data URLs before a course is
written, so a failed read never leaves a half-saved course. Several uploads
are read concurrently; the resulting materials keep the input order.

An upload is either a filesystem path or a file-like object with a
``name`` and ``getvalue()`` or ``read()`` (Streamlit's UploadedFile, an
io.BytesIO with a name set, ...). An optional ``type`` attribute is used
as the MIME type.
"""

import asyncio
import base64
import binascii
import io
import logging
import mimetypes
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional
from urllib.parse import unquote_to_bytes

from eduplatform.errors import IngestionError, PlatformError, ValidationError
from eduplatform.schemas import Material


logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

_DATA_URL = re.compile(r"^data:(?P<mime>[^;,]*)(?P<params>(?:;[^;,]*)*),(?P<data>.*)$", re.DOTALL)


@dataclass
class MaterialDownload:
    """A stored material converted back into a named byte stream."""
    filename: str
    mime_type: str
    stream: io.BytesIO

    def getvalue(self) -> bytes:
        return self.stream.getvalue()


# -----------------------------------------------------------------------------
# Data URLs
# -----------------------------------------------------------------------------

def encode_data_url(data: bytes, mime_type: str) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{payload}"


def decode_data_url(content: str) -> tuple[str, bytes]:
    """
    Split a data URL into (mime_type, bytes).

    Raises:
        ValidationError: not a data URL, or a corrupt base64 payload
    """
    match = _DATA_URL.match(content or "")
    if not match:
        raise ValidationError("Malformed content reference")

    mime_type = match.group("mime") or "text/plain"
    data = match.group("data")
    if ";base64" in match.group("params"):
        try:
            return mime_type, base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(f"Corrupt content reference: {e}") from e
    return mime_type, unquote_to_bytes(data)


def open_material(material: Material) -> MaterialDownload:
    """Decode a stored material into a stream named by its original filename."""
    mime_type, data = decode_data_url(material.content)
    return MaterialDownload(
        filename=material.name,
        mime_type=material.mime_type or mime_type,
        stream=io.BytesIO(data),
    )


# -----------------------------------------------------------------------------
# Reading uploads
# -----------------------------------------------------------------------------

def _guess_mime_type(name: str) -> str:
    mime_type, _ = mimetypes.guess_type(name)
    return mime_type or DEFAULT_MIME_TYPE


def _read_upload(upload: Any) -> tuple[str, str, bytes]:
    """Read an upload synchronously, returning (name, mime_type, data)."""
    if isinstance(upload, (str, Path)):
        path = Path(upload)
        return path.name, _guess_mime_type(path.name), path.read_bytes()

    name = getattr(upload, "name", None)
    if not name:
        raise IngestionError("Upload has no file name")
    if hasattr(upload, "getvalue"):
        data = upload.getvalue()
    elif hasattr(upload, "read"):
        data = upload.read()
    else:
        raise IngestionError(f"Cannot read upload {name!r}")
    if isinstance(data, str):
        data = data.encode("utf-8")

    name = Path(str(name)).name
    mime_type = getattr(upload, "type", None) or _guess_mime_type(name)
    return name, mime_type, data


async def _read(upload: Any) -> tuple[str, str, bytes]:
    try:
        return await asyncio.to_thread(_read_upload, upload)
    except PlatformError:
        raise
    except Exception as e:
        raise IngestionError(f"Could not read {getattr(upload, 'name', upload)}: {e}") from e


async def ingest_material(upload: Any) -> Material:
    """
    Read one upload into a Material.

    Raises:
        IngestionError: the file could not be read
    """
    name, mime_type, data = await _read(upload)
    logger.debug(f"Ingested {name} ({mime_type}, {len(data)} bytes)")
    return Material(
        id=uuid.uuid4().hex,
        name=name,
        mime_type=mime_type,
        content=encode_data_url(data, mime_type),
        size_bytes=len(data),
    )


async def ingest_materials(uploads: Iterable[Any]) -> list[Material]:
    """
    Read several uploads concurrently.

    All reads must finish before this returns; the result follows input
    order. The first failure is raised as IngestionError.
    """
    uploads = list(uploads)
    if not uploads:
        return []
    materials = await asyncio.gather(*(ingest_material(u) for u in uploads))
    logger.info(f"Ingested {len(materials)} material(s)")
    return list(materials)


async def ingest_thumbnail(upload: Optional[Any]) -> Optional[str]:
    """
    Read an image upload into a data URL.

    Raises:
        IngestionError: the file could not be read
        ValidationError: the upload is not an image
    """
    if upload is None:
        return None
    name, mime_type, data = await _read(upload)
    if not mime_type.startswith("image/"):
        raise ValidationError(f"Thumbnail {name} is not an image")
    return encode_data_url(data, mime_type)


async def ingest_uploads(
    thumbnail: Optional[Any] = None,
    materials: Iterable[Any] = (),
) -> tuple[Optional[str], list[Material]]:
    """Read a course form's thumbnail and materials together."""
    thumbnail_url, ingested = await asyncio.gather(
        ingest_thumbnail(thumbnail), ingest_materials(materials)
    )
    return thumbnail_url, ingested
