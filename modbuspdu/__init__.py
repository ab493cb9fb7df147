"""
modbuspdu - Python library for encoding and decoding Modbus PDUs.

This library turns validated request objects into wire-format PDUs and
turns reply PDUs back into typed responses, including the uniform
exception response a device sends when it rejects a request.

Example:
    >>> from modbuspdu import WriteFifo8Request, ResponseKind
    >>>
    >>> request = WriteFifo8Request(id=0x12, values=[0x00, 0x02])
    >>> request.to_buffer()
    b'G\\x12\\x02\\x00\\x02'
    >>> response = request.create_response(b"\\xC7\\x02")
    >>> response.kind is ResponseKind.EXCEPTION
    True
    >>> response.code, response.exception_code
    (71, 2)
"""

from modbuspdu.client import ModbusClient
from modbuspdu.exceptions import (
    ModbusPduError,
    ProtocolError,
    TimeoutError,
    TransportError,
    TruncatedFrameError,
    ValidationError,
)
from modbuspdu.functions import (
    ExceptionResponse,
    ReadFifo8Request,
    ReadFifo8Response,
    Request,
    Response,
    ResponseKind,
    WriteFifo8Request,
    WriteFifo8Response,
    decode_request,
)
from modbuspdu.protocol.constants import ExceptionCode, FunctionCode
from modbuspdu.transport import AbstractTransport, MockTransport

__version__ = "0.1.0"
__all__ = [
    # Client
    "ModbusClient",
    # Messages
    "Request",
    "Response",
    "ResponseKind",
    "ExceptionResponse",
    "WriteFifo8Request",
    "WriteFifo8Response",
    "ReadFifo8Request",
    "ReadFifo8Response",
    "decode_request",
    # Codes
    "FunctionCode",
    "ExceptionCode",
    # Exceptions
    "ModbusPduError",
    "ValidationError",
    "ProtocolError",
    "TruncatedFrameError",
    "TransportError",
    "TimeoutError",
    # Transport
    "AbstractTransport",
    "MockTransport",
    # Version
    "__version__",
]
