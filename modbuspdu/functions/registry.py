"""
Function code registry.

Maps each FunctionCode to the Request class that implements it, so a
responder can decode an incoming request without knowing its type in
advance. Request classes add themselves with the ``register_request``
decorator.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from modbuspdu.exceptions import ProtocolError, TruncatedFrameError
from modbuspdu.functions.base import Request
from modbuspdu.protocol.constants import FunctionCode, is_exception_code

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=type[Request])

_request_types: dict[int, type[Request]] = {}


def register_request(klass: R) -> R:
    """
    Register a Request class under its function code.

    Raises:
        ValueError: If another class is already registered for the code.
    """
    code = klass.function_code
    existing = _request_types.get(code)
    if existing is not None and existing is not klass:
        raise ValueError(
            f"Function code 0x{code:02X} already registered to {existing.__name__}"
        )
    _request_types[code] = klass
    return klass


def request_type(code: int) -> type[Request] | None:
    """Get the Request class registered for a function code, if any."""
    return _request_types.get(code)


def registered_codes() -> list[FunctionCode]:
    """Get all function codes with a registered Request class, sorted."""
    return sorted(FunctionCode(code) for code in _request_types)


def decode_request(frame: bytes | bytearray | memoryview) -> Request:
    """
    Decode any registered request from its wire layout.

    Args:
        frame: Raw request PDU, function code first.

    Returns:
        The decoded request instance.

    Raises:
        TruncatedFrameError: If the frame is empty or shorter than its layout.
        ProtocolError: If the function code is flagged or not registered.
    """
    if not frame:
        raise TruncatedFrameError("Request frame is empty", expected=1, actual=0)

    code = frame[0]
    if is_exception_code(code):
        raise ProtocolError(f"Exception-flagged code 0x{code:02X} is not a request", received=code)

    klass = _request_types.get(code)
    if klass is None:
        raise ProtocolError(f"Unsupported function code 0x{code:02X}", received=code)

    request = klass.from_buffer(frame)
    logger.debug("Decoded %s from %d-byte frame", klass.__name__, len(frame))
    return request
