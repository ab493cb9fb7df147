"""
Modbus function messages.

Each supported operation is a Request/Response pair sharing one
FunctionCode. Importing this package registers every Request class with
the function code registry.
"""

from modbuspdu.functions.base import Message, Request, Response, ResponseKind
from modbuspdu.functions.exception_response import ExceptionResponse
from modbuspdu.functions.read_fifo8 import ReadFifo8Request, ReadFifo8Response
from modbuspdu.functions.registry import (
    decode_request,
    register_request,
    registered_codes,
    request_type,
)
from modbuspdu.functions.write_fifo8 import WriteFifo8Request, WriteFifo8Response

__all__ = [
    # Base
    "Message",
    "Request",
    "Response",
    "ResponseKind",
    "ExceptionResponse",
    # Operations
    "ReadFifo8Request",
    "ReadFifo8Response",
    "WriteFifo8Request",
    "WriteFifo8Response",
    # Registry
    "register_request",
    "request_type",
    "registered_codes",
    "decode_request",
]
