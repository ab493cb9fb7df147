"""
Base classes for Modbus request and response messages.

Every operation is a Request/Response pair of immutable pydantic models
sharing one FunctionCode. The base classes carry the common codec
interface (``code``, ``to_buffer``, ``from_buffer``, ``from_options``) and
the dispatch rule that turns a raw reply into either the operation's
Response or an ExceptionResponse.

Design principles:
- Messages are frozen after construction and validated eagerly
- pydantic errors are converted to modbuspdu.exceptions.ValidationError
- Encoding returns a freshly allocated, exactly sized ``bytes``
- Decoded replies expose a ``kind`` discriminant for matching
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar, Union

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from modbuspdu.exceptions import ProtocolError, TruncatedFrameError, ValidationError
from modbuspdu.protocol.byte_frame import format_frame
from modbuspdu.protocol.constants import FunctionCode, ProtocolConstants

if TYPE_CHECKING:
    from modbuspdu.functions.exception_response import ExceptionResponse

logger = logging.getLogger(__name__)

M = TypeVar("M", bound="Message")

ByteValues = Union[bytes, bytearray, memoryview, list[int], tuple[int, ...]]
"""Accepted input types for a byte payload field."""


def coerce_byte_values(value: Any) -> bytes:
    """
    Normalize a byte payload to an owned ``bytes`` copy.

    Used as a ``mode="before"`` field validator so that callers can pass
    bytes, bytearray, memoryview or a list/tuple of ints.

    Raises:
        ValueError: If the value is not a byte buffer or a list/tuple of
            ints in range 0-255.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(
            f"must be bytes or a list of byte values, not {type(value).__name__}"
        )
    for index, item in enumerate(value):
        if isinstance(item, bool) or not isinstance(item, int):
            raise ValueError(f"item {index} must be an int, not {type(item).__name__}")
        if not 0 <= item <= 0xFF:
            raise ValueError(f"item {index} must be 0-255, got {item}")
    return bytes(value)


class ResponseKind(Enum):
    """Discriminant of a decoded reply."""

    NORMAL = auto()
    """The peer performed the operation."""

    EXCEPTION = auto()
    """The peer reported a fault with an exception response."""


class Message(BaseModel, ABC):
    """
    Common base of every PDU message.

    Subclasses declare their fields as pydantic fields and implement the
    wire layout in ``to_buffer`` and ``from_buffer``. Fields may be passed
    positionally in declaration order, so ``WriteFifo8Request(0x12, b"\\x00")``
    equals ``WriteFifo8Request(id=0x12, values=b"\\x00")``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, *args: Any, **data: Any) -> None:
        if args:
            names = list(type(self).model_fields)
            if len(args) > len(names):
                raise TypeError(
                    f"{type(self).__name__} takes at most {len(names)} positional "
                    f"arguments ({len(args)} given)"
                )
            for name, value in zip(names, args):
                if name in data:
                    raise TypeError(
                        f"{type(self).__name__} got multiple values for argument {name!r}"
                    )
                data[name] = value
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, type(self).__name__) from None

    @classmethod
    def model_validate(cls: type[M], obj: Any, *args: Any, **kwargs: Any) -> M:
        """
        Validate a mapping or object into a message.

        Raises:
            ValidationError: If validation fails, as for direct construction.
        """
        try:
            return super().model_validate(obj, *args, **kwargs)
        except PydanticValidationError as e:
            # The error raised by __init__ arrives wrapped as a value_error
            for item in e.errors(include_url=False):
                cause = item.get("ctx", {}).get("error")
                if isinstance(cause, ValidationError):
                    raise cause from None
            raise ValidationError.from_pydantic(e, cls.__name__) from None

    @property
    @abstractmethod
    def code(self) -> int:
        """The function code this message reports."""
        ...

    @abstractmethod
    def to_buffer(self) -> bytes:
        """Encode the message into its wire layout."""
        ...

    @classmethod
    @abstractmethod
    def from_buffer(cls: type[M], frame: bytes | bytearray | memoryview) -> M:
        """
        Decode a message from its wire layout.

        Raises:
            TruncatedFrameError: If the frame is shorter than the layout requires.
            ProtocolError: If byte 0 is not this message's function code.
        """
        ...

    @classmethod
    def from_options(cls: type[M], options: Mapping[str, Any]) -> M:
        """
        Build a message from a configuration record.

        Unknown keys are rejected like any other invalid field.

        Args:
            options: Mapping with one entry per field, e.g.
                ``{"id": 1, "values": b"\\x00\\x10"}``.

        Raises:
            ValidationError: If a field is missing or invalid.
        """
        return cls(**dict(options))


class Response(Message):
    """
    Confirmed-success reply of one operation.

    Subclasses set ``function_code`` to the operation's code.
    """

    function_code: ClassVar[FunctionCode]

    @property
    def code(self) -> int:
        return self.function_code

    @property
    def kind(self) -> ResponseKind:
        return ResponseKind.NORMAL

    @property
    def is_exception(self) -> bool:
        return False


class Request(Message):
    """
    Request of one operation.

    Subclasses set ``function_code`` and ``response_type`` and implement
    the request layout. ``create_response`` is shared by all operations.
    """

    function_code: ClassVar[FunctionCode]
    response_type: ClassVar[type[Response]]

    @property
    def code(self) -> int:
        return self.function_code

    def create_response(
        self,
        reply: bytes | bytearray | memoryview,
    ) -> Response | ExceptionResponse:
        """
        Decode the reply to this request.

        Byte 0 of the reply decides the variant:
        - this request's code with the exception flag set: ExceptionResponse
        - this request's code: the operation's Response
        - anything else: the reply belongs to another operation

        Args:
            reply: Raw reply PDU received from the peer.

        Returns:
            The decoded Response or ExceptionResponse. Check ``kind`` to
            tell them apart.

        Raises:
            TruncatedFrameError: If the reply is empty or shorter than its layout.
            ProtocolError: If the reply's function code does not match.
        """
        from modbuspdu.functions.exception_response import ExceptionResponse

        if not reply:
            raise TruncatedFrameError("Reply is empty", expected=1, actual=0)

        reply_code = reply[0]

        if reply_code == self.function_code | ProtocolConstants.EXCEPTION_FLAG:
            response: Response | ExceptionResponse = ExceptionResponse.from_buffer(reply)
        elif reply_code == self.function_code:
            response = self.response_type.from_buffer(reply)
        else:
            raise ProtocolError(
                f"Reply does not match {type(self).__name__}",
                expected=self.function_code,
                received=reply_code,
            )

        logger.debug("Decoded %s reply to 0x%02X: %s", response.kind.name, self.function_code, response)
        return response


def describe_values(values: bytes) -> str:
    """Render a payload for ``__str__`` output."""
    return format_frame(values) if values else "<empty>"
