"""Exception hierarchy for ccbencode.

Every failure of the codec is reported as one of these exceptions. Each
bencode failure maps to exactly one ``BencodeErrorKind`` so callers can
tell which validation rule was violated without re-scanning the input.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar


class BencodeErrorKind(str, Enum):
    """Kinds of bencode failures."""

    SOURCE_READ_FAILED = "source_read_failed"
    UNEXPECTED_END = "unexpected_end"
    UNKNOWN_TAG = "unknown_tag"
    UNEXPECTED_TERMINATOR = "unexpected_terminator"
    MALFORMED_INTEGER = "malformed_integer"
    MALFORMED_STRING_LENGTH = "malformed_string_length"
    DICT_KEY_NOT_TEXT = "dict_key_not_text"


class CodecError(Exception):
    """Base exception for all ccbencode errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize codec error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(CodecError):
    """Data validation errors."""


class ConfigurationError(ValidationError):
    """Configuration validation errors."""


class BencodeError(ValidationError):
    """Bencode encoding/decoding errors."""

    kind: ClassVar[BencodeErrorKind | None] = None

    def __init__(
        self,
        message: str,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize bencode error.

        Args:
            message: Human readable description
            position: Byte offset in the input where the problem was detected
            details: Extra diagnostic fields

        """
        details = dict(details or {})
        if position is not None:
            details["position"] = position
        super().__init__(message, details)
        self.position = position


class SourceReadError(BencodeError):
    """Reading the raw bytes from the external source failed."""

    kind = BencodeErrorKind.SOURCE_READ_FAILED


class BencodeDecodeError(BencodeError):
    """Base class for malformed bencode input."""


class UnexpectedEndError(BencodeDecodeError):
    """Input ended while a construct was still open."""

    kind = BencodeErrorKind.UNEXPECTED_END


class UnknownTagError(BencodeDecodeError):
    """A byte did not open any known construct."""

    kind = BencodeErrorKind.UNKNOWN_TAG


class UnexpectedTerminatorError(BencodeDecodeError):
    """An ``e`` marker appeared where a value was expected."""

    kind = BencodeErrorKind.UNEXPECTED_TERMINATOR


class MalformedIntegerError(BencodeDecodeError):
    """Integer body is not a canonical signed 64-bit decimal."""

    kind = BencodeErrorKind.MALFORMED_INTEGER


class MalformedStringLengthError(BencodeDecodeError):
    """Byte string length prefix is invalid."""

    kind = BencodeErrorKind.MALFORMED_STRING_LENGTH


class DictKeyNotTextError(BencodeDecodeError):
    """Dictionary key is not valid UTF-8 text."""

    kind = BencodeErrorKind.DICT_KEY_NOT_TEXT


class BencodeEncodeError(BencodeError):
    """Native Python data cannot be represented as a bencode value."""
