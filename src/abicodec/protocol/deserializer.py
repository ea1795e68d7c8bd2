"""Region reader for the 32-byte-word ABI layout.

Uses memoryview for zero-copy slicing. Readers created from one payload
share a high-water mark so the top-level decode can reject unread bytes.
"""

from __future__ import annotations

from ..exc import DecodingError
from .constants import WORD_SIZE


class Reader:
    """Sequential reader over one region of a payload.

    ``base`` is the start of the enclosing region; pointer offsets read
    inside the region are relative to it.
    """

    def __init__(
        self,
        data: bytes | bytearray | memoryview,
        base: int = 0,
        pos: int | None = None,
        _extent: list[int] | None = None,
    ) -> None:
        self._data = data if isinstance(data, memoryview) else memoryview(data)
        self.base = base
        self.pos = base if pos is None else pos
        self._extent = _extent if _extent is not None else [0]

    def __len__(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return len(self._data) - self.pos

    def read(self, n: int) -> bytes:
        end = self.pos + n
        if n < 0 or end > len(self._data):
            raise DecodingError(
                f"unexpected end of data: need {n} bytes at offset {self.pos}, "
                f"have {self.remaining}"
            )
        result = bytes(self._data[self.pos:end])
        self.pos = end
        if end > self._extent[0]:
            self._extent[0] = end
        return result

    def read_word(self) -> bytes:
        return self.read(WORD_SIZE)

    def read_uint(self) -> int:
        """Read one word as an unsigned big-endian integer."""
        return int.from_bytes(self.read_word(), 'big')

    def region(self) -> Reader:
        """Reader for a nested region starting at the current position."""
        return Reader(self._data, base=self.pos, _extent=self._extent)

    def jump(self, offset: int) -> Reader:
        """Reader for the region a pointer ``offset`` refers to."""
        target = self.base + offset
        if target > len(self._data):
            raise DecodingError(
                f"pointer offset {offset} outside of data (length {len(self._data)})"
            )
        return Reader(self._data, base=target, _extent=self._extent)

    def finish(self) -> None:
        """Fail if any trailing bytes of the payload were never read."""
        unread = len(self._data) - self._extent[0]
        if unread > 0:
            raise DecodingError(f"{unread} unread bytes at end of data")
