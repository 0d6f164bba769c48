"""Reading bencoded data from files, URLs and streams.

Any failure to obtain the raw bytes is reported as ``SourceReadError``,
kept distinct from the decode errors raised for malformed content.
"""

from __future__ import annotations

import http.client
import logging
import os
import urllib.request
from pathlib import Path
from typing import Any, BinaryIO, Union
from urllib.parse import urlparse

from ccbencode.core.decoder import decode
from ccbencode.core.value import Value
from ccbencode.models import SourceConfig
from ccbencode.utils.exceptions import SourceReadError

logger = logging.getLogger(__name__)

Source = Union[bytes, bytearray, memoryview, str, "os.PathLike[str]", BinaryIO]

_URL_SCHEMES = ("http", "https")


def read_source(source: Source, config: SourceConfig | None = None) -> bytes:
    """Read all bytes from ``source``.

    Args:
        source: Raw bytes, a filesystem path, an http(s) URL, or a binary
            file-like object
        config: Source limits; when omitted, the global configuration if
            one was installed with init_config() or set_config(), otherwise
            the defaults

    Returns:
        The complete byte content of the source

    Raises:
        SourceReadError: If the bytes cannot be obtained

    """
    if config is None:
        from ccbencode.config.config import current_source_config

        config = current_source_config()

    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        _check_size(len(data), config, "<bytes>")
        return data

    if hasattr(source, "read"):
        return _read_stream(source, config, _describe_stream(source))

    try:
        location = os.fspath(source)
    except TypeError as e:
        msg = f"Unsupported source type: {type(source).__name__}"
        raise SourceReadError(msg, details={"source": repr(source)}) from e
    if _is_url(location):
        return _read_from_url(location, config)
    if "://" in location:
        msg = f"Unsupported URL scheme: {urlparse(location).scheme}"
        raise SourceReadError(msg, details={"source": location})
    return _read_from_file(Path(location), config)


def load(source: Source, config: SourceConfig | None = None) -> Value:
    """Read ``source`` and decode the bencode value it holds."""
    return decode(read_source(source, config))


def _is_url(location: str) -> bool:
    return location.startswith(tuple(f"{scheme}://" for scheme in _URL_SCHEMES))


def _describe_stream(stream: Any) -> str:
    return str(getattr(stream, "name", "<stream>"))


def _read_from_file(path: Path, config: SourceConfig) -> bytes:
    try:
        with open(path, "rb") as f:
            data = _read_limited(f, config.max_source_bytes)
    except (OSError, ValueError) as e:
        msg = f"Couldn't read {path}: {e}"
        raise SourceReadError(msg, details={"source": str(path)}) from e
    _check_size(len(data), config, str(path))
    logger.debug("Read %d bytes from %s", len(data), path)
    return data


def _read_from_url(url: str, config: SourceConfig) -> bytes:
    try:
        with urllib.request.urlopen(url, timeout=config.url_timeout) as response:  # noqa: S310
            data = _read_limited(response, config.max_source_bytes)
    except (OSError, ValueError, http.client.HTTPException) as e:
        msg = f"Couldn't fetch {url}: {e}"
        raise SourceReadError(msg, details={"source": url}) from e
    _check_size(len(data), config, url)
    logger.debug("Fetched %d bytes from %s", len(data), url)
    return data


def _read_stream(stream: Any, config: SourceConfig, name: str) -> bytes:
    try:
        data = _read_limited(stream, config.max_source_bytes)
    except (OSError, ValueError) as e:
        msg = f"Couldn't read {name}: {e}"
        raise SourceReadError(msg, details={"source": name}) from e
    if isinstance(data, str):
        msg = f"Stream {name} is in text mode; a binary stream is required"
        raise SourceReadError(msg, details={"source": name})
    data = bytes(data)
    _check_size(len(data), config, name)
    logger.debug("Read %d bytes from %s", len(data), name)
    return data


def _read_limited(stream: Any, limit: int | None) -> Any:
    # One byte past the limit is enough to tell an oversized source apart.
    if limit is None:
        return stream.read()
    return stream.read(limit + 1)


def _check_size(size: int, config: SourceConfig, name: str) -> None:
    limit = config.max_source_bytes
    if limit is not None and size > limit:
        msg = f"Source {name} exceeds the {limit} byte limit"
        raise SourceReadError(msg, details={"source": name, "limit": limit})
