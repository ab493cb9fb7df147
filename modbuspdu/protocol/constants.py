"""
Modbus function codes, exception codes and protocol constants.

Function codes follow the public Modbus application protocol, extended
with the 8-bit FIFO operations used by the device family this library
talks to.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class FunctionCode(IntEnum):
    """
    Modbus function codes.

    Function codes are single bytes that identify the operation carried by
    a PDU. Valid codes occupy the low 7 bits; the high bit is reserved for
    flagging exception replies (see ProtocolConstants.EXCEPTION_FLAG).
    They are grouped by function:
    - 0x01-0x17: Public Modbus data access and diagnostics
    - 0x2B: Encapsulated interface transport
    - 0x41, 0x47: 8-bit FIFO extensions
    """

    # ===== Bit Access =====

    READ_COILS = 0x01
    """Read a range of coils."""

    READ_DISCRETE_INPUTS = 0x02
    """Read a range of discrete inputs."""

    WRITE_SINGLE_COIL = 0x05
    """Write a single coil."""

    WRITE_MULTIPLE_COILS = 0x0F
    """Write a range of coils."""

    # ===== Register Access =====

    READ_HOLDING_REGISTERS = 0x03
    """Read a range of holding registers."""

    READ_INPUT_REGISTERS = 0x04
    """Read a range of input registers."""

    WRITE_SINGLE_REGISTER = 0x06
    """Write a single holding register."""

    WRITE_MULTIPLE_REGISTERS = 0x10
    """Write a range of holding registers."""

    MASK_WRITE_REGISTER = 0x16
    """AND/OR mask a holding register."""

    READ_WRITE_MULTIPLE_REGISTERS = 0x17
    """Write then read holding registers in one transaction."""

    READ_FIFO_QUEUE = 0x18
    """Read a 16-bit FIFO queue of registers."""

    # ===== File Record Access =====

    READ_FILE_RECORD = 0x14
    """Read file record groups."""

    WRITE_FILE_RECORD = 0x15
    """Write file record groups."""

    # ===== Diagnostics =====

    READ_EXCEPTION_STATUS = 0x07
    """Read the eight exception status outputs (serial line only)."""

    DIAGNOSTICS = 0x08
    """Serial line diagnostics."""

    GET_COMM_EVENT_COUNTER = 0x0B
    """Get communication event counter (serial line only)."""

    GET_COMM_EVENT_LOG = 0x0C
    """Get communication event log (serial line only)."""

    REPORT_SERVER_ID = 0x11
    """Report server id (serial line only)."""

    ENCAPSULATED_INTERFACE_TRANSPORT = 0x2B
    """MEI transport, e.g. read device identification."""

    # ===== 8-bit FIFO Extensions =====

    READ_FIFO8 = 0x41
    """Read bytes from an 8-bit FIFO."""

    WRITE_FIFO8 = 0x47
    """Write bytes to an 8-bit FIFO."""


class ExceptionCode(IntEnum):
    """
    Modbus exception codes.

    Carried in byte 1 of an exception response. The meaning is defined by
    the responding device; these are the codes of the public protocol.
    """

    ILLEGAL_FUNCTION = 0x01
    """Function code not supported by the server."""

    ILLEGAL_DATA_ADDRESS = 0x02
    """Target address or id not valid on the server."""

    ILLEGAL_DATA_VALUE = 0x03
    """A value in the request is not acceptable to the server."""

    SERVER_DEVICE_FAILURE = 0x04
    """Unrecoverable error while performing the action."""

    ACKNOWLEDGE = 0x05
    """Request accepted, long-running processing in progress."""

    SERVER_DEVICE_BUSY = 0x06
    """Server is processing a long-duration command."""

    NEGATIVE_ACKNOWLEDGE = 0x07
    """Server cannot perform the program function."""

    MEMORY_PARITY_ERROR = 0x08
    """Parity error while reading extended memory."""

    GATEWAY_PATH_UNAVAILABLE = 0x0A
    """Gateway could not allocate a path to the target."""

    GATEWAY_TARGET_DEVICE_FAILED_TO_RESPOND = 0x0B
    """No response obtained from the gateway target."""


class ProtocolConstants:
    """
    Modbus PDU constants.

    Contains the exception-flag convention, frame size limits and the
    default reply timeout used by the client.
    """

    # ===== Function Code Flags =====

    EXCEPTION_FLAG: Final[int] = 0x80
    """High bit OR'd onto the function code of an exception reply."""

    FUNCTION_CODE_MASK: Final[int] = 0x7F
    """Mask that strips the exception flag from a function code."""

    # ===== Frame Sizes =====

    MAX_PDU_SIZE: Final[int] = 253
    """Maximum PDU size in bytes (function code included)."""

    MAX_FIFO8_BYTES: Final[int] = 250
    """Maximum number of payload bytes in one FIFO transfer."""

    # ===== Timing (in seconds) =====

    DEFAULT_TIMEOUT: Final[float] = 1.0
    """Default reply timeout in seconds."""


EXCEPTION_MESSAGES: Final[dict[int, str]] = {
    ExceptionCode.ILLEGAL_FUNCTION: "Illegal function",
    ExceptionCode.ILLEGAL_DATA_ADDRESS: "Illegal data address",
    ExceptionCode.ILLEGAL_DATA_VALUE: "Illegal data value",
    ExceptionCode.SERVER_DEVICE_FAILURE: "Server device failure",
    ExceptionCode.ACKNOWLEDGE: "Acknowledge",
    ExceptionCode.SERVER_DEVICE_BUSY: "Server device busy",
    ExceptionCode.NEGATIVE_ACKNOWLEDGE: "Negative acknowledge",
    ExceptionCode.MEMORY_PARITY_ERROR: "Memory parity error",
    ExceptionCode.GATEWAY_PATH_UNAVAILABLE: "Gateway path unavailable",
    ExceptionCode.GATEWAY_TARGET_DEVICE_FAILED_TO_RESPOND: "Gateway target device failed to respond",
}
"""Human-readable message per exception code."""


def is_exception_code(code: int) -> bool:
    """Check whether a function code byte carries the exception flag."""
    return (code & ProtocolConstants.EXCEPTION_FLAG) != 0


def strip_exception_flag(code: int) -> int:
    """
    Clear the exception flag from a function code byte.

    Example:
        >>> strip_exception_flag(0xC7)
        71
    """
    return code & ProtocolConstants.FUNCTION_CODE_MASK
