"""
Write FIFO8 (function code 0x47).

Writes a run of bytes to an 8-bit FIFO identified by a one-byte id.

Request layout::

    [0x47][id:1][count:1][values:count]

Response layout::

    [0x47][quantity:1]

where ``quantity`` is the number of bytes the device accepted.
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


class WriteFifo8Response(Response):
    """
    Acknowledgment of a Write FIFO8 request.

    Example:
        >>> WriteFifo8Response.from_buffer(b"\\x47\\x01").quantity
        1
    """

    function_code: ClassVar[FunctionCode] = FunctionCode.WRITE_FIFO8

    quantity: int = Field(ge=0, le=0xFF, strict=True, description="Number of bytes written")

    def to_buffer(self) -> bytes:
        builder = FrameBuilder(2)
        builder.write_uint8(self.function_code)
        builder.write_uint8(self.quantity)
        return builder.to_bytes()

    @classmethod
    def from_buffer(cls, frame: bytes | bytearray | memoryview) -> WriteFifo8Response:
        reader = ByteFrame(frame)
        reader.require(2)
        reader.expect_function_code(cls.function_code)
        return cls(quantity=reader.read_uint8())

    def __str__(self) -> str:
        return f"0x{self.function_code:02X} (RES) {self.quantity} bytes written to FIFO"


@register_request
class WriteFifo8Request(Request):
    """
    Write bytes to an 8-bit FIFO.

    Attributes:
        id: FIFO identifier (0-255).
        values: Bytes to write, MIN_VALUES to MAX_VALUES long.

    Example:
        >>> req = WriteFifo8Request(id=0x12, values=[0x00, 0x02])
        >>> req.to_buffer()
        b'G\\x12\\x02\\x00\\x02'
        >>> req.create_response(b"\\x47\\x02").quantity
        2
    """

    function_code: ClassVar[FunctionCode] = FunctionCode.WRITE_FIFO8
    response_type: ClassVar[type[Response]] = WriteFifo8Response

    MIN_VALUES: ClassVar[int] = 1
    MAX_VALUES: ClassVar[int] = ProtocolConstants.MAX_FIFO8_BYTES

    id: int = Field(ge=0, le=0xFF, strict=True, description="FIFO identifier")
    values: bytes = Field(description="Bytes to write")

    @field_validator("values", mode="before")
    @classmethod
    def coerce_values(cls, v: Any) -> bytes:
        return coerce_byte_values(v)

    @field_validator("values")
    @classmethod
    def validate_values_length(cls, v: bytes) -> bytes:
        if not cls.MIN_VALUES <= len(v) <= cls.MAX_VALUES:
            raise ValueError(
                f"must contain {cls.MIN_VALUES}-{cls.MAX_VALUES} bytes, got {len(v)}"
            )
        return v

    def to_buffer(self) -> bytes:
        builder = FrameBuilder(3 + len(self.values))
        builder.write_uint8(self.function_code)
        builder.write_uint8(self.id)
        builder.write_uint8(len(self.values))
        builder.write_bytes(self.values)
        return builder.to_bytes()

    @classmethod
    def from_buffer(cls, frame: bytes | bytearray | memoryview) -> WriteFifo8Request:
        """
        Decode a Write FIFO8 request.

        Bytes past ``3 + count`` are ignored.

        Raises:
            TruncatedFrameError: If the frame is shorter than 4 bytes or
                shorter than ``3 + count``.
            ProtocolError: If byte 0 is not 0x47.
            ValidationError: If the frame announces a count of zero.
        """
        reader = ByteFrame(frame)
        reader.require(4)
        reader.expect_function_code(cls.function_code)
        fifo_id = reader.read_uint8()
        count = reader.read_uint8()
        return cls(id=fifo_id, values=reader.read_bytes(count))

    def __str__(self) -> str:
        return (
            f"0x{self.function_code:02X} (REQ) Write {len(self.values)} bytes "
            f"to FIFO 0x{self.id:02X}: {describe_values(self.values)}"
        )
