"""Head/tail writer for the 32-byte-word ABI layout.

Uses a pre-allocated bytearray for the head and an appended tail for
out-of-line (dynamic) values.
"""

from __future__ import annotations

from ..exc import EncodingError
from .constants import WORD_SIZE


class Writer:
    """Build one head/tail region.

    The head has a fixed size known up front (one word per dynamic member,
    the inline size for static members). Dynamic members are appended to
    the tail and referenced from the head by an offset relative to the
    start of the region.
    """

    def __init__(self, head_size: int) -> None:
        self._head_size = head_size
        self._buf = bytearray(head_size)
        self._pos = 0
        self._tail = bytearray()

    def _ensure(self, n: int) -> None:
        """Ensure at least n bytes are available at _pos."""
        needed = self._pos + n
        if needed > len(self._buf):
            self._buf.extend(b'\x00' * (needed - len(self._buf)))

    def write(self, data: bytes | bytearray) -> None:
        """Write raw bytes into the head."""
        n = len(data)
        self._ensure(n)
        self._buf[self._pos:self._pos + n] = data
        self._pos += n

    def write_word(self, value: int) -> None:
        """Write an unsigned integer as one big-endian word."""
        self.write(value.to_bytes(WORD_SIZE, 'big'))

    def write_pointer(self, payload: bytes) -> None:
        """Append ``payload`` to the tail and write its offset into the head."""
        self.write_word(self._head_size + len(self._tail))
        self._tail.extend(payload)

    @property
    def position(self) -> int:
        return self._pos

    def finish(self) -> bytes:
        """Return head + tail. The head must be completely written."""
        if self._pos != self._head_size:
            raise EncodingError(
                f"head size mismatch: wrote {self._pos} bytes, expected {self._head_size}"
            )
        return bytes(self._buf[:self._pos]) + bytes(self._tail)
