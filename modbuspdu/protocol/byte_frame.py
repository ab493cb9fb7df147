"""
ByteFrame - bounds-checked reader and builder for PDU byte frames.

Modbus PDUs are laid out big-endian with no padding. This module provides
the two halves of that layout:

- ByteFrame: a cursor over an immutable snapshot of received bytes
- FrameBuilder: writes fields into a freshly allocated, exactly sized buffer

Key features:
- Position tracking with peek operations for lookahead
- 8-bit and 16-bit big-endian fields
- Every short read raises TruncatedFrameError; nothing is padded or guessed

Example:
    >>> frame = ByteFrame(b"\\x47\\x12\\x02\\x00\\x02")
    >>> frame.read_uint8()
    71
    >>> frame.read_uint8()
    18
    >>> frame.read_bytes(frame.read_uint8())
    b'\\x00\\x02'
"""

from __future__ import annotations

from modbuspdu.exceptions import ProtocolError, TruncatedFrameError


def format_frame(data: bytes | bytearray | memoryview) -> str:
    """
    Format frame bytes as space-separated uppercase hex.

    Example:
        >>> format_frame(b"\\x47\\x12\\x02")
        '47 12 02'
    """
    return bytes(data).hex(" ").upper()


class ByteFrame:
    """
    Reader for decoding a received PDU.

    The frame takes its own copy of the input, so later changes to a
    caller's bytearray never leak into a decoded message.

    Attributes:
        position: Current read position in bytes.
        remaining: Number of bytes left to read.
        data: The underlying frame bytes.

    Example:
        >>> frame = ByteFrame(b"\\x41\\x01\\x00\\x10")
        >>> frame.expect_function_code(0x41)
        >>> frame.read_uint8()
        1
        >>> frame.read_uint16()
        16
    """

    __slots__ = ("_data", "_position")

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._position = 0

    @property
    def position(self) -> int:
        """Current position in bytes (0-indexed)."""
        return self._position

    @property
    def remaining(self) -> int:
        """Number of bytes remaining to read."""
        return len(self._data) - self._position

    @property
    def data(self) -> bytes:
        """The underlying frame bytes."""
        return self._data

    def is_at_end(self) -> bool:
        """Check if the reader has consumed the whole frame."""
        return self._position >= len(self._data)

    def require(self, size: int) -> None:
        """
        Verify that the whole frame is at least ``size`` bytes long.

        Used to enforce a message's minimum length before any field is
        interpreted.

        Raises:
            TruncatedFrameError: If the frame is shorter than ``size``.
        """
        if len(self._data) < size:
            raise TruncatedFrameError(
                "Frame too short",
                expected=size,
                actual=len(self._data),
            )

    def _check_bounds(self, count: int, operation: str) -> None:
        """Verify sufficient data is available for operation."""
        if self._position + count > len(self._data):
            raise TruncatedFrameError(
                f"Cannot {operation} at position {self._position}",
                expected=self._position + count,
                actual=len(self._data),
            )

    # ===== Field Reading =====

    def read_uint8(self) -> int:
        """
        Read a single unsigned byte and advance position.

        Raises:
            TruncatedFrameError: If the frame is exhausted.
        """
        self._check_bounds(1, "read uint8")
        value = self._data[self._position]
        self._position += 1
        return value

    def read_uint16(self) -> int:
        """
        Read an unsigned 16-bit big-endian value and advance position.

        Raises:
            TruncatedFrameError: If fewer than 2 bytes remain.
        """
        self._check_bounds(2, "read uint16")
        high = self._data[self._position]
        low = self._data[self._position + 1]
        self._position += 2
        # Big-endian: high byte first, low byte second
        return (high << 8) | low

    def read_bytes(self, count: int) -> bytes:
        """
        Read ``count`` raw bytes and advance position.

        Raises:
            TruncatedFrameError: If fewer than ``count`` bytes remain.
        """
        if count < 0:
            raise ValueError(f"Byte count must be non-negative, got {count}")
        self._check_bounds(count, f"read {count} bytes")
        chunk = self._data[self._position : self._position + count]
        self._position += count
        return chunk

    def read_remaining(self) -> bytes:
        """Read all remaining bytes and advance to the end."""
        return self.read_bytes(self.remaining)

    # ===== Peek Operations (No Position Advance) =====

    def peek_uint8(self, offset: int = 0) -> int:
        """
        Read a byte at ``offset`` from the current position without advancing.

        Raises:
            TruncatedFrameError: If the offset is past the end of the frame.
        """
        index = self._position + offset
        if index < 0 or index >= len(self._data):
            raise TruncatedFrameError(
                f"Peek offset {offset} out of bounds",
                expected=index + 1,
                actual=len(self._data),
            )
        return self._data[index]

    # ===== Protocol Helpers =====

    def expect_function_code(self, code: int) -> None:
        """
        Read the function code byte and check it against ``code``.

        Raises:
            TruncatedFrameError: If the frame is empty.
            ProtocolError: If the byte is a different function code.
        """
        received = self.read_uint8()
        if received != code:
            raise ProtocolError(
                "Invalid function code",
                expected=code,
                received=received,
            )

    def __repr__(self) -> str:
        return f"ByteFrame(pos={self._position}, remaining={self.remaining}, total={len(self._data)})"

    def __len__(self) -> int:
        """Return total length in bytes."""
        return len(self._data)


class FrameBuilder:
    """
    Writer for encoding a PDU into an exactly sized buffer.

    The builder allocates ``size`` bytes up front and fills them
    sequentially. ``to_bytes()`` only succeeds once every byte has been
    written, so an encoder cannot return a frame with stale padding.

    Example:
        >>> builder = FrameBuilder(3)
        >>> builder.write_uint8(0x41)
        >>> builder.write_uint16(0x0110)
        >>> builder.to_bytes()
        b'A\\x01\\x10'
    """

    __slots__ = ("_buffer", "_position")

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"Frame size must be non-negative, got {size}")
        self._buffer = bytearray(size)
        self._position = 0

    @property
    def position(self) -> int:
        """Number of bytes written so far."""
        return self._position

    @property
    def size(self) -> int:
        """Total size of the frame being built."""
        return len(self._buffer)

    def _check_space(self, count: int) -> None:
        if self._position + count > len(self._buffer):
            raise ValueError(
                f"Frame overflow: writing {count} bytes at position {self._position} "
                f"exceeds frame size {len(self._buffer)}"
            )

    def write_uint8(self, value: int) -> None:
        """
        Write an unsigned byte.

        Raises:
            ValueError: If value is not in range 0-255 or the frame is full.
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte value must be 0-255, got {value}")
        self._check_space(1)
        self._buffer[self._position] = value
        self._position += 1

    def write_uint16(self, value: int) -> None:
        """
        Write an unsigned 16-bit value, big-endian.

        Raises:
            ValueError: If value is not in range 0-65535 or the frame is full.
        """
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"UInt16 value must be 0-65535, got {value}")
        self._check_space(2)
        self._buffer[self._position] = (value >> 8) & 0xFF
        self._buffer[self._position + 1] = value & 0xFF
        self._position += 2

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """
        Write raw bytes.

        Raises:
            ValueError: If the data does not fit in the remaining space.
        """
        count = len(data)
        self._check_space(count)
        self._buffer[self._position : self._position + count] = data
        self._position += count

    def to_bytes(self) -> bytes:
        """
        Return the finished frame.

        Raises:
            ValueError: If fewer bytes were written than the frame size.
        """
        if self._position != len(self._buffer):
            raise ValueError(
                f"Frame incomplete: wrote {self._position} of {len(self._buffer)} bytes"
            )
        return bytes(self._buffer)

    def __repr__(self) -> str:
        return f"FrameBuilder(written={self._position}, size={len(self._buffer)})"
