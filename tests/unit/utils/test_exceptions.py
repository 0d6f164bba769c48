"""Tests for the exception hierarchy."""

import pytest

pytestmark = [pytest.mark.unit]

from ccbencode.utils.exceptions import (
    BencodeDecodeError,
    BencodeEncodeError,
    BencodeError,
    BencodeErrorKind,
    CodecError,
    ConfigurationError,
    DictKeyNotTextError,
    MalformedIntegerError,
    MalformedStringLengthError,
    SourceReadError,
    UnexpectedEndError,
    UnexpectedTerminatorError,
    UnknownTagError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test cases for the error taxonomy."""

    def test_every_kind_has_one_class(self):
        """Test each error kind is carried by exactly one exception class."""
        classes = [
            SourceReadError,
            UnexpectedEndError,
            UnknownTagError,
            UnexpectedTerminatorError,
            MalformedIntegerError,
            MalformedStringLengthError,
            DictKeyNotTextError,
        ]
        assert {cls.kind for cls in classes} == set(BencodeErrorKind)

    def test_decode_errors_are_bencode_errors(self):
        """Test decode errors share a base and are not source errors."""
        assert issubclass(UnexpectedEndError, BencodeDecodeError)
        assert issubclass(BencodeDecodeError, BencodeError)
        assert not issubclass(SourceReadError, BencodeDecodeError)
        assert issubclass(BencodeError, ValidationError)
        assert issubclass(ConfigurationError, CodecError)
        assert BencodeEncodeError.kind is None

    def test_message_and_details(self):
        """Test the string form includes details."""
        error = UnknownTagError("Unrecognized byte 0x78", position=3)
        assert error.message == "Unrecognized byte 0x78"
        assert error.position == 3
        assert str(error) == "Unrecognized byte 0x78 (Details: {'position': 3})"

    def test_plain_message(self):
        """Test errors without details render only the message."""
        assert str(CodecError("boom")) == "boom"
