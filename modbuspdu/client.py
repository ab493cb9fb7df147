"""
Modbus PDU client.

This module provides a thin client that sends one request over a
transport and decodes the reply through the request's own dispatch rule.
The client does not retry and does not sequence requests; those policies
belong to the caller or the transport.

Example:
    >>> from modbuspdu import ModbusClient, ResponseKind
    >>> from modbuspdu.transport import MockTransport
    >>>
    >>> async def main():
    ...     transport = MockTransport()
    ...     transport.add_reply(b"\\x47\\x02")
    ...     async with ModbusClient(transport) as client:
    ...         response = await client.write_fifo8(0x01, b"\\x00\\x01")
    ...         match response.kind:
    ...             case ResponseKind.NORMAL:
    ...                 print(response.quantity)
    ...             case ResponseKind.EXCEPTION:
    ...                 print(response.message)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from modbuspdu.exceptions import TransportError
from modbuspdu.functions.base import ResponseKind
from modbuspdu.functions.read_fifo8 import ReadFifo8Request
from modbuspdu.functions.write_fifo8 import WriteFifo8Request
from modbuspdu.protocol.byte_frame import format_frame
from modbuspdu.protocol.constants import ProtocolConstants

if TYPE_CHECKING:
    from modbuspdu.functions.base import ByteValues, Request, Response
    from modbuspdu.functions.exception_response import ExceptionResponse
    from modbuspdu.transport.abc import AbstractTransport

# Module logger
logger = logging.getLogger(__name__)


class ModbusClient:
    """
    Client for exchanging Modbus PDUs with a device.

    Attributes:
        transport: The underlying transport layer.
        timeout: Reply timeout passed to the transport on every send.

    Example:
        >>> client = ModbusClient(transport, timeout=0.5)
        >>> response = await client.execute(
        ...     WriteFifo8Request(id=0x01, values=b"\\x13\\x37")
        ... )
    """

    def __init__(
        self,
        transport: AbstractTransport,
        timeout: float = ProtocolConstants.DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize the client.

        Args:
            transport: Transport layer for communication.
            timeout: Reply timeout in seconds.
        """
        self._transport = transport
        self._timeout = timeout

    @property
    def transport(self) -> AbstractTransport:
        """Get the underlying transport."""
        return self._transport

    @property
    def timeout(self) -> float:
        """Get the reply timeout in seconds."""
        return self._timeout

    async def execute(self, request: Request) -> Response | ExceptionResponse:
        """
        Send a request and decode its reply.

        Args:
            request: Validated request to send.

        Returns:
            The operation's Response, or an ExceptionResponse when the
            device reports a fault. Check ``kind`` to tell them apart.

        Raises:
            TransportError: If the transport is closed or fails.
            TimeoutError: If the device does not reply in time.
            TruncatedFrameError: If the reply is shorter than its layout.
            ProtocolError: If the reply belongs to another function code.
        """
        if not self._transport.is_open:
            raise TransportError(f"Transport {self._transport.port_name} is not open")

        pdu = request.to_buffer()
        logger.debug("Sending %s: %s", type(request).__name__, format_frame(pdu))

        reply = await self._transport.send(pdu, self._timeout)
        logger.debug("Received reply: %s", format_frame(reply))

        response = request.create_response(reply)
        if response.kind is ResponseKind.EXCEPTION:
            logger.warning(
                "Device reported exception 0x%02X for function 0x%02X: %s",
                response.exception_code,
                response.code,
                response.message,
            )
        return response

    async def write_fifo8(
        self,
        fifo_id: int,
        values: ByteValues,
    ) -> Response | ExceptionResponse:
        """
        Write bytes to an 8-bit FIFO.

        Args:
            fifo_id: FIFO identifier (0-255).
            values: 1 to 250 bytes to write.

        Returns:
            WriteFifo8Response or ExceptionResponse.

        Raises:
            ValidationError: If the id or values are out of range.
        """
        return await self.execute(WriteFifo8Request(id=fifo_id, values=values))

    async def read_fifo8(
        self,
        fifo_id: int,
        quantity: int,
    ) -> Response | ExceptionResponse:
        """
        Read up to ``quantity`` bytes from an 8-bit FIFO.

        Args:
            fifo_id: FIFO identifier (0-255).
            quantity: Maximum number of bytes to read (1-250).

        Returns:
            ReadFifo8Response or ExceptionResponse.

        Raises:
            ValidationError: If the id or quantity are out of range.
        """
        return await self.execute(ReadFifo8Request(id=fifo_id, quantity=quantity))

    async def __aenter__(self) -> ModbusClient:
        """Async context manager entry - opens the transport if needed."""
        if not self._transport.is_open:
            await self._transport.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - closes the transport."""
        if self._transport.is_open:
            await self._transport.close()

    def __repr__(self) -> str:
        status = "open" if self._transport.is_open else "closed"
        return f"ModbusClient(transport={self._transport.port_name!r}, {status})"
