"""Core codec: value model, decoder, encoder and source adapter."""

from __future__ import annotations

from ccbencode.core.decoder import BencodeDecoder, ByteCursor, decode
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

__all__ = [
    "BencodeDecoder",
    "BencodeEncoder",
    "ByteCursor",
    "ByteString",
    "Dict",
    "Integer",
    "List",
    "Value",
    "decode",
    "encode",
    "load",
    "read_source",
    "to_python",
    "to_value",
]
