"""
Abstract transport interface for exchanging Modbus PDUs.

This module defines the abstract base class for all transport
implementations. The codec layer never performs I/O itself: a transport
takes a request PDU, delivers it to the peer and returns the reply PDU.

The transport layer is responsible for:
- Opening/closing the physical connection
- Link-layer framing (addressing, checksums, MBAP headers)
- Request/reply correlation and timeout handling

Implementations:
- MockTransport: in-memory transport for testing without hardware
- ScriptedMockTransport: mock with an ordered request/reply script
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType


class AbstractTransport(ABC):
    """
    Abstract base class for PDU transports.

    Transports support async context manager protocol for safe resource
    management:

        async with SomeTransport(...) as transport:
            reply = await transport.send(request.to_buffer())

    Attributes:
        is_open: Whether the transport connection is currently open.
        port_name: Identifier for the transport (e.g. serial port or host).
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """
        Check if the transport connection is currently open.

        Returns:
            True if connected and ready for I/O, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def port_name(self) -> str:
        """
        Get the transport identifier.

        Returns:
            Port name or identifier string (e.g., "/dev/ttyUSB0", "10.0.0.5:502").
        """
        ...

    @abstractmethod
    async def open(self) -> None:
        """
        Open the transport connection.

        Raises:
            TransportError: If the connection cannot be established.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """
        Close the transport connection.

        Safe to call multiple times (idempotent). After closing, the
        transport can be reopened with open().
        """
        ...

    @abstractmethod
    async def send(self, pdu: bytes, timeout: float | None = None) -> bytes:
        """
        Send a request PDU and wait for the reply PDU.

        Args:
            pdu: Encoded request, function code first.
            timeout: Reply timeout in seconds. None uses transport default.

        Returns:
            The reply PDU with any link-layer framing removed.

        Raises:
            TimeoutError: If no reply arrives before the timeout.
            TransportError: If the transport is not open or I/O fails.
        """
        ...

    async def __aenter__(self) -> AbstractTransport:
        """Async context manager entry - opens the transport."""
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit - closes the transport."""
        await self.close()
