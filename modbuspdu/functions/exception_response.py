"""
Exception response, the uniform fault reply of every operation.

Wire layout::

    [functionCode | 0x80 : 1][exceptionCode : 1]

The function code is stored with the exception flag cleared, so ``code``
reports the operation that failed.
"""

from __future__ import annotations

from pydantic import Field

from modbuspdu.exceptions import ProtocolError
from modbuspdu.functions.base import Message, ResponseKind
from modbuspdu.protocol.byte_frame import ByteFrame, FrameBuilder
from modbuspdu.protocol.constants import (
    EXCEPTION_MESSAGES,
    ExceptionCode,
    ProtocolConstants,
    is_exception_code,
    strip_exception_flag,
)


class ExceptionResponse(Message):
    """
    Peer-reported fault for any operation.

    This is a successfully decoded reply, not an error: callers tell it
    apart from a normal Response by ``kind``.

    Example:
        >>> res = ExceptionResponse.from_buffer(b"\\xC7\\x02")
        >>> res.code, res.exception_code
        (71, 2)
        >>> res.exception
        <ExceptionCode.ILLEGAL_DATA_ADDRESS: 2>
    """

    function_code: int = Field(ge=0, le=ProtocolConstants.FUNCTION_CODE_MASK, strict=True)
    exception_code: int = Field(ge=0, le=0xFF, strict=True)

    @property
    def code(self) -> int:
        """Function code of the failed operation, exception flag cleared."""
        return self.function_code

    @property
    def kind(self) -> ResponseKind:
        return ResponseKind.EXCEPTION

    @property
    def is_exception(self) -> bool:
        return True

    @property
    def exception(self) -> ExceptionCode | None:
        """The exception code as an enum member, or None if not a standard code."""
        try:
            return ExceptionCode(self.exception_code)
        except ValueError:
            return None

    @property
    def message(self) -> str:
        """Human-readable description of the exception code."""
        return EXCEPTION_MESSAGES.get(self.exception_code, "Unknown exception")

    def to_buffer(self) -> bytes:
        builder = FrameBuilder(2)
        builder.write_uint8(self.function_code | ProtocolConstants.EXCEPTION_FLAG)
        builder.write_uint8(self.exception_code)
        return builder.to_bytes()

    @classmethod
    def from_buffer(cls, frame: bytes | bytearray | memoryview) -> ExceptionResponse:
        """
        Decode an exception response.

        Raises:
            TruncatedFrameError: If the frame is shorter than 2 bytes.
            ProtocolError: If byte 0 does not carry the exception flag.
        """
        reader = ByteFrame(frame)
        reader.require(2)

        flagged_code = reader.read_uint8()
        if not is_exception_code(flagged_code):
            raise ProtocolError(
                f"Function code 0x{flagged_code:02X} is missing the exception flag",
                expected=flagged_code | ProtocolConstants.EXCEPTION_FLAG,
                received=flagged_code,
            )

        return cls(
            function_code=strip_exception_flag(flagged_code),
            exception_code=reader.read_uint8(),
        )

    def __str__(self) -> str:
        return f"0x{self.function_code:02X} (EXC) 0x{self.exception_code:02X}: {self.message}"
