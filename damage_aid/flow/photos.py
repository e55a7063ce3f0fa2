"""
Photo Ingestion — Files to Data URIs

Reads run concurrently and may finish in any order. Each read is tagged
with its position so the returned list always matches the input order.
The first failed read propagates.
"""

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path
from typing import List, Sequence, Tuple, Union


logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
IMAGE_DATA_URI_PREFIX = "data:image/"


def encode_data_uri(content: bytes, mime_type: str) -> str:
    """Encode raw bytes as a base64 data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def is_image_data_uri(value: str) -> bool:
    """True for 'data:image/<subtype>;base64,<payload>' strings."""
    if not value.startswith(IMAGE_DATA_URI_PREFIX):
        return False
    header, sep, payload = value.partition(",")
    return bool(sep) and header.endswith(";base64") and bool(payload)


async def read_photo(path: Union[str, Path]) -> str:
    """Read one file into a data URI without blocking the event loop."""
    path = Path(path)
    content = await asyncio.to_thread(path.read_bytes)
    mime_type = mimetypes.guess_type(path.name)[0] or DEFAULT_MIME_TYPE
    return encode_data_uri(content, mime_type)


async def _read_tagged(index: int, path: Union[str, Path]) -> Tuple[int, str]:
    return index, await read_photo(path)


async def read_photos(paths: Sequence[Union[str, Path]]) -> List[str]:
    """
    Read several files concurrently.

    Args:
        paths: Files in upload order

    Returns:
        Data URIs in the same order as paths, regardless of which read
        finished first

    Raises:
        OSError: A file could not be read
    """
    results: List[str] = [""] * len(paths)
    tagged = await asyncio.gather(
        *(_read_tagged(index, path) for index, path in enumerate(paths))
    )

    for index, data_uri in tagged:
        results[index] = data_uri

    logger.info(f"Read {len(results)} photo(s)")
    return results
