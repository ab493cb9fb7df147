"""
Protocol layer for Modbus PDU encoding.

This module contains the low-level protocol handling:
- Function codes, exception codes and protocol constants
- Bounds-checked big-endian frame reading and building
"""

from modbuspdu.protocol.byte_frame import ByteFrame, FrameBuilder, format_frame
from modbuspdu.protocol.constants import (
    EXCEPTION_MESSAGES,
    ExceptionCode,
    FunctionCode,
    ProtocolConstants,
    is_exception_code,
    strip_exception_flag,
)

__all__ = [
    # Constants
    "FunctionCode",
    "ExceptionCode",
    "ProtocolConstants",
    "EXCEPTION_MESSAGES",
    "is_exception_code",
    "strip_exception_flag",
    # Frames
    "ByteFrame",
    "FrameBuilder",
    "format_frame",
]
