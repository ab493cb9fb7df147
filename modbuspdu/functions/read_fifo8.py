"""
Read FIFO8 (function code 0x41).

Reads up to ``quantity`` bytes from an 8-bit FIFO identified by a
one-byte id.

Request layout::

    [0x41][id:1][quantity:1]

Response layout::

    [0x41][more:1][count:1][values:count]

``more`` is 1 when bytes remain in the FIFO after this read, 0 otherwise.
A response may carry zero bytes when the FIFO is empty.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field, field_validator

from modbuspdu.functions.base import (
    Request,
    Response,
    coerce_byte_values,
    describe_values,
)
from modbuspdu.functions.registry import register_request
from modbuspdu.protocol.byte_frame import ByteFrame, FrameBuilder
from modbuspdu.protocol.constants import FunctionCode, ProtocolConstants


class ReadFifo8Response(Response):
    """
    Bytes read from an 8-bit FIFO.

    Attributes:
        more: Whether the FIFO still holds unread bytes.
        values: Bytes read, 0 to MAX_VALUES long.

    Example:
        >>> res = ReadFifo8Response.from_buffer(b"\\x41\\x01\\x02\\xAA\\xBB")
        >>> res.more, res.values
        (True, b'\\xaa\\xbb')
    """

    function_code: ClassVar[FunctionCode] = FunctionCode.READ_FIFO8

    MAX_VALUES: ClassVar[int] = ProtocolConstants.MAX_FIFO8_BYTES

    more: bool = Field(default=False, description="More bytes remain in the FIFO")
    values: bytes = Field(default=b"", description="Bytes read")

    @field_validator("values", mode="before")
    @classmethod
    def coerce_values(cls, v: Any) -> bytes:
        return coerce_byte_values(v)

    @field_validator("values")
    @classmethod
    def validate_values_length(cls, v: bytes) -> bytes:
        if len(v) > cls.MAX_VALUES:
            raise ValueError(f"must contain at most {cls.MAX_VALUES} bytes, got {len(v)}")
        return v

    def to_buffer(self) -> bytes:
        builder = FrameBuilder(3 + len(self.values))
        builder.write_uint8(self.function_code)
        builder.write_uint8(1 if self.more else 0)
        builder.write_uint8(len(self.values))
        builder.write_bytes(self.values)
        return builder.to_bytes()

    @classmethod
    def from_buffer(cls, frame: bytes | bytearray | memoryview) -> ReadFifo8Response:
        """
        Decode a Read FIFO8 response.

        Any non-zero ``more`` byte is read as True.

        Raises:
            TruncatedFrameError: If the frame is shorter than 3 bytes or
                shorter than ``3 + count``.
            ProtocolError: If byte 0 is not 0x41.
        """
        reader = ByteFrame(frame)
        reader.require(3)
        reader.expect_function_code(cls.function_code)
        more = reader.read_uint8() != 0
        count = reader.read_uint8()
        return cls(more=more, values=reader.read_bytes(count))

    def __str__(self) -> str:
        suffix = " (more available)" if self.more else ""
        return (
            f"0x{self.function_code:02X} (RES) {len(self.values)} bytes read from FIFO"
            f"{suffix}: {describe_values(self.values)}"
        )


@register_request
class ReadFifo8Request(Request):
    """
    Read bytes from an 8-bit FIFO.

    Attributes:
        id: FIFO identifier (0-255).
        quantity: Maximum number of bytes to read, 1 to MAX_QUANTITY.
    """

    function_code: ClassVar[FunctionCode] = FunctionCode.READ_FIFO8
    response_type: ClassVar[type[Response]] = ReadFifo8Response

    MIN_QUANTITY: ClassVar[int] = 1
    MAX_QUANTITY: ClassVar[int] = ProtocolConstants.MAX_FIFO8_BYTES

    id: int = Field(ge=0, le=0xFF, strict=True, description="FIFO identifier")
    quantity: int = Field(strict=True, description="Maximum number of bytes to read")

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v: int) -> int:
        if not cls.MIN_QUANTITY <= v <= cls.MAX_QUANTITY:
            raise ValueError(f"must be {cls.MIN_QUANTITY}-{cls.MAX_QUANTITY}, got {v}")
        return v

    def to_buffer(self) -> bytes:
        builder = FrameBuilder(3)
        builder.write_uint8(self.function_code)
        builder.write_uint8(self.id)
        builder.write_uint8(self.quantity)
        return builder.to_bytes()

    @classmethod
    def from_buffer(cls, frame: bytes | bytearray | memoryview) -> ReadFifo8Request:
        """
        Decode a Read FIFO8 request.

        Raises:
            TruncatedFrameError: If the frame is shorter than 3 bytes.
            ProtocolError: If byte 0 is not 0x41.
            ValidationError: If the quantity is out of range.
        """
        reader = ByteFrame(frame)
        reader.require(3)
        reader.expect_function_code(cls.function_code)
        fifo_id = reader.read_uint8()
        return cls(id=fifo_id, quantity=reader.read_uint8())

    def __str__(self) -> str:
        return f"0x{self.function_code:02X} (REQ) Read up to {self.quantity} bytes from FIFO 0x{self.id:02X}"
