"""
Source addressing and acquisition of raw image bytes.

Images can be addressed in three ways:

- by a bare filename, resolved below the configured images directory
  (``images/`` in the working directory by default)
- by a full file path
- by a http(s) URL
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from urllib.error import URLError
from urllib.request import urlopen

import filetype

from .config import Settings, settings as default_settings
from .exceptions import AcquisitionError, DecodeError
from .pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


class SourceMode(Enum):
    """How a source descriptor is interpreted."""

    RELATIVE = "relative"  # Filename below the images directory
    FULL_PATH = "full_path"  # Complete file path
    URL = "url"  # http(s) URL


def resolve_source(
    source: str,
    full_dir: bool = False,
    url: bool = False,
    settings: Settings | None = None,
) -> tuple[SourceMode, str]:
    """
    Determines the addressing mode and the resolved descriptor of a source.

    :param source: Filename, full path or URL
    :param full_dir: True if source is a full path
    :param url: True if source is a URL
    :param settings: The settings to use, the module settings by default
    :return: The mode and the resolved descriptor (absolute path or URL)
    """
    settings = settings or default_settings
    if full_dir and url:
        raise ValueError("full_dir and url can not be combined")
    if url:
        return SourceMode.URL, source
    if full_dir:
        return SourceMode.FULL_PATH, source
    return SourceMode.RELATIVE, str((settings.IMAGES_DIR / source).absolute())


def fetch_bytes(
    descriptor: str, mode: SourceMode, timeout: float | None = None
) -> bytes:
    """
    Loads the raw image data from a file or URL.

    :param descriptor: The resolved path or URL
    :param mode: The addressing mode
    :param timeout: Network timeout in seconds, the configured one by default
    :return: The image data

    Raises an AcquisitionError if the data could not be received
    """
    logger.debug("Fetching %s (%s)", descriptor, mode.value)
    if mode == SourceMode.URL:
        timeout = timeout if timeout is not None else default_settings.FETCH_TIMEOUT
        try:
            with urlopen(descriptor, timeout=timeout) as response:
                data = response.read()
        except (URLError, OSError, ValueError) as e:
            raise AcquisitionError(f"Download of {descriptor} failed: {e}") from e
    else:
        path = Path(descriptor)
        if not path.is_file():
            raise AcquisitionError(f"File not found: {descriptor}")
        try:
            data = path.read_bytes()
        except OSError as e:
            raise AcquisitionError(f"File {descriptor} could not be read: {e}") from e
    if not data:
        raise AcquisitionError(f"No image data received from {descriptor}")
    return data


def decode_bytes(data: bytes) -> PixelBuffer:
    """
    Decodes raw image data.

    :param data: The encoded image
    :return: The decoded, possibly multi-frame buffer

    Raises a DecodeError if the data is not a supported image
    """
    kind = filetype.guess(data)
    if kind is not None and not kind.mime.startswith("image/"):
        raise DecodeError(f"Unsupported content type {kind.mime}")
    return PixelBuffer.from_bytes(data)
