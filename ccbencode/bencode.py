"""Bencoding module for BitTorrent metadata.

This module provides a convenient interface to the core bencode functionality.
"""

from __future__ import annotations

from ccbencode.core.decoder import BencodeDecoder, decode
from ccbencode.core.encoder import BencodeEncoder, encode
from ccbencode.core.source import load, read_source
from ccbencode.core.value import (
    ByteString,
    Dict,
    Integer,
    List,
    Value,
    to_python,
    to_value,
)
from ccbencode.utils.exceptions import (
    BencodeDecodeError,
    BencodeEncodeError,
    BencodeError,
    BencodeErrorKind,
    DictKeyNotTextError,
    MalformedIntegerError,
    MalformedStringLengthError,
    SourceReadError,
    UnexpectedEndError,
    UnexpectedTerminatorError,
    UnknownTagError,
)

__all__ = [
    "BencodeDecodeError",
    "BencodeDecoder",
    "BencodeEncodeError",
    "BencodeEncoder",
    "BencodeError",
    "BencodeErrorKind",
    "ByteString",
    "Dict",
    "DictKeyNotTextError",
    "Integer",
    "List",
    "MalformedIntegerError",
    "MalformedStringLengthError",
    "SourceReadError",
    "UnexpectedEndError",
    "UnexpectedTerminatorError",
    "UnknownTagError",
    "Value",
    "decode",
    "encode",
    "load",
    "read_source",
    "to_python",
    "to_value",
]
