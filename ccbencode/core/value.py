"""Bencode value model.

A decoded bencode document is a tree of four immutable node types:
``ByteString``, ``Integer``, ``List`` and ``Dict``. Nodes validate their
contents on construction, so a value that exists can always be encoded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Union

from ccbencode.utils.exceptions import BencodeEncodeError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class ByteString:
    """Arbitrary sequence of bytes."""

    data: bytes

    def __post_init__(self) -> None:
        """Normalize bytes-like payloads to ``bytes``."""
        if isinstance(self.data, (bytearray, memoryview)):
            object.__setattr__(self, "data", bytes(self.data))
        elif not isinstance(self.data, bytes):
            msg = f"ByteString payload must be bytes, got {type(self.data).__name__}"
            raise TypeError(msg)

    @classmethod
    def from_text(cls, text: str) -> ByteString:
        """Create a byte string holding the UTF-8 encoding of ``text``."""
        return cls(text.encode("utf-8"))

    def text(self) -> str:
        """Return the payload decoded as UTF-8.

        Raises:
            UnicodeDecodeError: If the payload is not valid UTF-8

        """
        return self.data.decode("utf-8")

    def __len__(self) -> int:
        return len(self.data)

    def to_python(self) -> bytes:
        """Return the payload."""
        return self.data


@dataclass(frozen=True)
class Integer:
    """Signed 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        """Reject non-integers and values outside the signed 64-bit range."""
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            msg = f"Integer value must be int, got {type(self.value).__name__}"
            raise TypeError(msg)
        if not INT64_MIN <= self.value <= INT64_MAX:
            msg = f"Integer value {self.value} is outside the signed 64-bit range"
            raise ValueError(msg)

    def __int__(self) -> int:
        return self.value

    def to_python(self) -> int:
        """Return the integer."""
        return self.value


@dataclass(frozen=True)
class List:
    """Ordered sequence of values."""

    elements: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        """Store elements as a tuple and check their types."""
        elements = tuple(self.elements)
        for element in elements:
            if not isinstance(element, VALUE_TYPES):
                msg = f"List element must be a bencode value, got {type(element).__name__}"
                raise TypeError(msg)
        object.__setattr__(self, "elements", elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.elements)

    def __getitem__(self, index: int) -> Value:
        return self.elements[index]

    def to_python(self) -> list[Any]:
        """Return the elements as a list of native values."""
        return [element.to_python() for element in self.elements]


@dataclass(frozen=True)
class Dict:
    """Ordered sequence of (text key, value) pairs.

    Keys are not required to be unique; pairs keep the order in which they
    were decoded or given so re-encoding reproduces the original bytes.
    """

    pairs: tuple[tuple[str, Value], ...] = ()

    def __post_init__(self) -> None:
        """Store pairs as a tuple and check key and value types."""
        pairs = []
        for pair in self.pairs:
            key, value = pair
            if not isinstance(key, str):
                msg = f"Dict key must be str, got {type(key).__name__}"
                raise TypeError(msg)
            if not _is_utf8_text(key):
                msg = f"Dict key {key!r} cannot be encoded as UTF-8"
                raise ValueError(msg)
            if not isinstance(value, VALUE_TYPES):
                msg = f"Dict value for {key!r} must be a bencode value, got {type(value).__name__}"
                raise TypeError(msg)
            pairs.append((key, value))
        object.__setattr__(self, "pairs", tuple(pairs))

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self.pairs)

    def __getitem__(self, key: str) -> Value:
        missing = object()
        value = self.get(key, missing)
        if value is missing:
            raise KeyError(key)
        return value

    def keys(self) -> list[str]:
        """Return keys in stored order, duplicates included."""
        return [key for key, _ in self.pairs]

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of the last pair with ``key``, or ``default``."""
        for k, value in reversed(self.pairs):
            if k == key:
                return value
        return default

    def to_python(self) -> dict[str, Any]:
        """Return a native dict; a later duplicate key overrides an earlier one."""
        return {key: value.to_python() for key, value in self.pairs}


Value = Union[ByteString, Integer, List, Dict]
VALUE_TYPES = (ByteString, Integer, List, Dict)


def to_value(obj: Any) -> Value:
    """Convert native Python data into a bencode value.

    ``bytes``-like objects and ``str`` become byte strings, ``int`` becomes an
    integer, ``list``/``tuple`` become lists and ``dict`` becomes a dict whose
    keys are ``str`` or UTF-8 ``bytes``. Values pass through unchanged.

    Raises:
        BencodeEncodeError: If ``obj`` has no bencode representation

    """
    if isinstance(obj, VALUE_TYPES):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return ByteString(bytes(obj))
    if isinstance(obj, str):
        if not _is_utf8_text(obj):
            msg = f"String {obj!r} cannot be encoded as UTF-8"
            raise BencodeEncodeError(msg)
        return ByteString.from_text(obj)
    if isinstance(obj, int) and not isinstance(obj, bool):
        if not INT64_MIN <= obj <= INT64_MAX:
            msg = f"Integer {obj} is outside the signed 64-bit range"
            raise BencodeEncodeError(msg)
        return Integer(obj)
    if isinstance(obj, (list, tuple)):
        return List(tuple(to_value(item) for item in obj))
    if isinstance(obj, dict):
        return Dict(tuple((_to_key(key), to_value(value)) for key, value in obj.items()))
    msg = f"Cannot bencode object of type {type(obj).__name__}"
    raise BencodeEncodeError(msg)


def _to_key(key: Any) -> str:
    if isinstance(key, str):
        if not _is_utf8_text(key):
            msg = f"Dict key {key!r} cannot be encoded as UTF-8"
            raise BencodeEncodeError(msg)
        return key
    if isinstance(key, (bytes, bytearray)):
        try:
            return bytes(key).decode("utf-8")
        except UnicodeDecodeError as e:
            msg = f"Dict key {bytes(key)!r} is not valid UTF-8 text"
            raise BencodeEncodeError(msg) from e
    msg = f"Dict key must be str or bytes, got {type(key).__name__}"
    raise BencodeEncodeError(msg)


def to_python(value: Value) -> Any:
    """Convert a bencode value into native Python data."""
    return value.to_python()


def _is_utf8_text(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
