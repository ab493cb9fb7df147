"""
Exception hierarchy for modbuspdu.

All exceptions inherit from ModbusPduError, providing a clean hierarchy
for error handling. The design follows these principles:

1. Parameter validation errors are distinct from wire decoding errors
2. Decoding errors carry the expected and observed values for debugging
3. A peer-reported exception response is a decoded message, never an error
4. Transport failures are kept apart from codec failures
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import pydantic


class ModbusPduError(Exception):
    """
    Base exception for all modbuspdu errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch all modbuspdu errors with a single except clause.
    """

    pass


class ValidationError(ModbusPduError, ValueError):
    """
    Invalid application-level parameters.

    Raised at construction time when a message is built with values that
    violate the protocol constraints, such as:
    - Target id outside 0-255
    - Empty payload or payload longer than the operation allows
    - Payload items that are not byte values

    The ``errors`` attribute holds the structured error list produced by
    the validator, one entry per offending field.
    """

    def __init__(
        self,
        message: str,
        *,
        model_name: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.model_name = model_name
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, error: pydantic.ValidationError, model_name: str) -> ValidationError:
        """
        Build from a pydantic validation error.

        Args:
            error: The error raised by pydantic.
            model_name: Name of the message class being validated.

        Returns:
            ValidationError carrying one message line per failed field.
        """
        details = error.errors(include_url=False)
        lines = []
        for item in details:
            location = ".".join(str(part) for part in item["loc"]) or "input"
            lines.append(f"{location}: {item['msg']}")
        return cls(
            f"Invalid {model_name}: " + "; ".join(lines),
            model_name=model_name,
            errors=details,
        )


class ProtocolError(ModbusPduError):
    """
    Function code mismatch.

    Raised when a frame's function code does not match the operation that
    is decoding it, in either direction:
    - A request frame decoded by the wrong request type
    - A reply that does not correspond to the request that was sent
    - A function code with no registered operation
    """

    def __init__(
        self,
        message: str,
        *,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.received is not None:
            return f"{base} (expected 0x{self.expected:02X}, got 0x{self.received:02X})"
        return base


class TruncatedFrameError(ModbusPduError):
    """
    Frame shorter than its declared or implied length.

    Raised during decoding when the buffer ends before a fixed field or
    before the number of payload bytes announced by a count field.
    Decoding never pads or guesses the missing bytes.
    """

    def __init__(
        self,
        message: str = "Frame is truncated",
        *,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.actual is not None:
            return f"{base} (need {self.expected} bytes, have {self.actual})"
        return base


class TransportError(ModbusPduError):
    """
    Transport-level error.

    Raised for low-level transport issues:
    - Sending on a closed transport
    - Opening a transport twice
    - I/O failures reported by the link
    """

    pass


class TimeoutError(ModbusPduError):  # noqa: A001 - intentionally shadows builtin
    """
    Reply timeout.

    Raised by a transport when no reply arrives within the expected time.
    """

    def __init__(
        self,
        message: str = "Communication timeout",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.1f}s)"
        return base
