"""Bencode decoder.

Single-pass parser over a byte cursor. One byte of lookahead is
enough for the whole grammar: the decoder never backtracks and aborts on
the first invalid byte with a ``BencodeDecodeError`` subclass naming the
rule that was violated.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable

from ccbencode.core.value import INT64_MAX, INT64_MIN, ByteString, Dict, Integer, List, Value
from ccbencode.utils.exceptions import (
    BencodeDecodeError,
    DictKeyNotTextError,
    MalformedIntegerError,
    MalformedStringLengthError,
    UnexpectedEndError,
    UnexpectedTerminatorError,
    UnknownTagError,
)

logger = logging.getLogger(__name__)

DICT_TAG = ord("d")
INT_TAG = ord("i")
LIST_TAG = ord("l")
END = ord("e")
COLON = ord(":")
MINUS = ord("-")
ZERO = ord("0")
NINE = ord("9")

_INTEGER_BODY = re.compile(rb"-?[0-9]+")


def _is_digit(byte: int) -> bool:
    return ZERO <= byte <= NINE


class ByteCursor:
    """Forward-only cursor over a complete byte sequence."""

    def __init__(self, data: bytes):
        """Initialize cursor at offset 0."""
        self.data = data
        self.pos = 0

    def peek(self) -> int | None:
        """Return the next byte without consuming it, or None at end of input."""
        if self.pos < len(self.data):
            return self.data[self.pos]
        return None

    def next(self) -> int | None:
        """Consume and return the next byte, or None at end of input."""
        if self.pos < len(self.data):
            byte = self.data[self.pos]
            self.pos += 1
            return byte
        return None

    def take(self, count: int) -> bytes:
        """Consume exactly ``count`` bytes.

        Raises:
            UnexpectedEndError: If fewer than ``count`` bytes remain

        """
        end = self.pos + count
        if end > len(self.data):
            msg = (
                f"Input ended after {len(self.data) - self.pos} of "
                f"{count} string bytes"
            )
            raise UnexpectedEndError(msg, position=len(self.data))
        chunk = self.data[self.pos : end]
        self.pos = end
        return chunk


class _Container:
    """A list or dictionary whose closing ``e`` has not been read yet."""

    __slots__ = ("is_dict", "items", "key")

    def __init__(self, is_dict: bool):
        self.is_dict = is_dict
        self.items: list[Any] = []
        self.key: str | None = None

    @property
    def expects_key(self) -> bool:
        return self.is_dict and self.key is None

    def add(self, value: Value) -> None:
        if self.is_dict:
            self.items.append((self.key, value))
            self.key = None
        else:
            self.items.append(value)

    def build(self) -> Value:
        if self.is_dict:
            return Dict(tuple(self.items))
        return List(tuple(self.items))


class BencodeDecoder:
    """Decoder for a single bencode value.

    Open containers are kept on an explicit stack, so nesting depth is
    bounded by memory rather than by the interpreter's recursion limit.
    """

    def __init__(self, data: bytes):
        """Initialize decoder with the complete input."""
        self._cursor = ByteCursor(data)
        self._stack: list[_Container] = []
        self._readers: dict[int, Callable[[], Value | None]] = {
            DICT_TAG: self._open_dict,
            INT_TAG: self._read_integer,
            LIST_TAG: self._open_list,
        }

    @property
    def pos(self) -> int:
        """Offset of the first byte not yet consumed."""
        return self._cursor.pos

    def decode(self) -> Value:
        """Decode the value starting at the current position."""
        self._stack = []
        stack = self._stack
        while True:
            if stack and self._at_container_end(stack[-1]):
                value = stack.pop().build()
            else:
                if stack and stack[-1].expects_key:
                    stack[-1].key = self._read_key()
                started = self._read_value()
                if started is None:
                    continue
                value = started

            if not stack:
                return value
            stack[-1].add(value)

    def _read_value(self) -> Value | None:
        """Read a scalar, or open a container and return None."""
        byte = self._cursor.peek()
        if byte is None:
            msg = "Input ended where a value was expected"
            raise UnexpectedEndError(msg, position=self.pos)
        reader = self._readers.get(byte)
        if reader is not None:
            return reader()
        if _is_digit(byte):
            return ByteString(self._read_string())
        if byte == END:
            msg = "End marker found where a value was expected"
            raise UnexpectedTerminatorError(msg, position=self.pos)
        msg = f"Unrecognized byte 0x{byte:02x}"
        raise UnknownTagError(msg, position=self.pos)

    def _open_dict(self) -> None:
        self._cursor.next()  # 'd'
        self._stack.append(_Container(is_dict=True))

    def _open_list(self) -> None:
        self._cursor.next()  # 'l'
        self._stack.append(_Container(is_dict=False))

    def _at_container_end(self, container: _Container) -> bool:
        byte = self._cursor.peek()
        if byte == END:
            self._cursor.next()
            return True
        if byte is None:
            kind = "dictionary" if container.is_dict else "list"
            msg = f"Input ended inside a {kind}"
            raise UnexpectedEndError(msg, position=self.pos)
        return False

    def _read_key(self) -> str:
        key_pos = self.pos
        raw_key = self._read_string()
        try:
            return raw_key.decode("utf-8")
        except UnicodeDecodeError as e:
            msg = f"Dictionary key {raw_key!r} is not valid UTF-8 text"
            raise DictKeyNotTextError(msg, position=key_pos) from e

    def _read_integer(self) -> Integer:
        start = self.pos
        self._cursor.next()  # 'i'
        body = bytearray()
        while True:
            byte_pos = self.pos
            byte = self._cursor.next()
            if byte is None:
                msg = "Input ended inside an integer"
                raise UnexpectedEndError(msg, position=byte_pos)
            if byte == END:
                if not body:
                    msg = "Integer has no digits"
                    raise UnexpectedTerminatorError(msg, position=byte_pos)
                break
            if byte == MINUS and self._cursor.peek() == ZERO:
                msg = "Negative zero is not a valid integer"
                raise MalformedIntegerError(msg, position=byte_pos)
            if not body and byte == ZERO:
                following = self._cursor.peek()
                if following is not None and following != END:
                    msg = "Integer has a leading zero"
                    raise MalformedIntegerError(msg, position=byte_pos)
            body.append(byte)

        if not _INTEGER_BODY.fullmatch(body):
            msg = f"Invalid integer body {bytes(body)!r}"
            raise MalformedIntegerError(msg, position=start)
        value = int(bytes(body))
        if not INT64_MIN <= value <= INT64_MAX:
            msg = f"Integer {value} overflows a signed 64-bit integer"
            raise MalformedIntegerError(msg, position=start)
        return Integer(value)

    def _read_string(self) -> bytes:
        first_pos = self.pos
        first = self._cursor.next()
        if first is None:
            msg = "Input ended where a string length was expected"
            raise UnexpectedEndError(msg, position=first_pos)
        if first == ZERO:
            separator = self._cursor.next()
            if separator is None:
                msg = "Input ended inside a string length"
                raise UnexpectedEndError(msg, position=self.pos)
            if separator != COLON:
                msg = "String length has a leading zero"
                raise MalformedStringLengthError(msg, position=first_pos)
            return b""
        if not _is_digit(first):
            msg = f"Invalid string length byte 0x{first:02x}"
            raise MalformedStringLengthError(msg, position=first_pos)

        length = first - ZERO
        while True:
            byte_pos = self.pos
            byte = self._cursor.next()
            if byte is None:
                msg = "Input ended inside a string length"
                raise UnexpectedEndError(msg, position=byte_pos)
            if byte == COLON:
                break
            if not _is_digit(byte):
                msg = f"Invalid string length byte 0x{byte:02x}"
                raise MalformedStringLengthError(msg, position=byte_pos)
            length = length * 10 + (byte - ZERO)
        return self._cursor.take(length)


def decode(data: bytes | bytearray | memoryview) -> Value:
    """Decode one bencode value from ``data``.

    Bytes following the first complete value are not inspected; use
    ``BencodeDecoder.pos`` to find out how much input was consumed.

    Raises:
        TypeError: If ``data`` is not bytes-like
        BencodeDecodeError: If ``data`` is not valid bencode

    """
    if isinstance(data, (bytearray, memoryview)):
        data = bytes(data)
    elif not isinstance(data, bytes):
        msg = f"decode() expects bytes, got {type(data).__name__}"
        raise TypeError(msg)

    decoder = BencodeDecoder(data)
    try:
        return decoder.decode()
    except BencodeDecodeError as e:
        logger.debug("Bencode decode failed (%s): %s", e.kind.value, e)
        raise
