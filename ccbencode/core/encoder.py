"""Bencode encoder.

Serializes a value tree into canonical bencode. Dictionary pairs are
written in their stored order; keys are neither sorted nor deduplicated.
"""

from __future__ import annotations

from typing import Any

from ccbencode.core.value import ByteString, Dict, Integer, List, Value, to_value


class BencodeEncoder:
    """Encoder for bencode values."""

    def encode(self, value: Value | Any) -> bytes:
        """Encode a value, or native Python data convertible to one.

        Args:
            value: A bencode value, or bytes/str/int/list/tuple/dict data

        Returns:
            Bencoded bytes

        Raises:
            BencodeEncodeError: If native data has no bencode representation

        """
        chunks: list[bytes] = []
        self._encode_value(to_value(value), chunks)
        return b"".join(chunks)

    def _encode_value(self, value: Value, chunks: list[bytes]) -> None:
        # Containers push their closing byte and then their children in
        # reverse, so popping yields the output in order without recursion.
        pending: list[Value | bytes] = [value]
        while pending:
            item = pending.pop()
            if isinstance(item, bytes):
                chunks.append(item)
            elif isinstance(item, ByteString):
                self._encode_bytes(item.data, chunks)
            elif isinstance(item, Integer):
                chunks.append(b"i%de" % item.value)
            elif isinstance(item, List):
                chunks.append(b"l")
                pending.append(b"e")
                pending.extend(reversed(item.elements))
            else:
                self._push_dict(item, chunks, pending)

    @staticmethod
    def _push_dict(value: Dict, chunks: list[bytes], pending: list[Value | bytes]) -> None:
        chunks.append(b"d")
        pending.append(b"e")
        for key, item in reversed(value.pairs):
            raw_key = key.encode("utf-8")
            pending.append(item)
            pending.append(b"%d:%s" % (len(raw_key), raw_key))

    @staticmethod
    def _encode_bytes(data: bytes, chunks: list[bytes]) -> None:
        chunks.append(b"%d:" % len(data))
        chunks.append(data)


_encoder = BencodeEncoder()


def encode(value: Value | Any) -> bytes:
    """Encode a value to bencode bytes."""
    return _encoder.encode(value)
