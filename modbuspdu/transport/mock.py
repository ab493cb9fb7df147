"""
Mock transport for testing.

This module provides a mock transport implementation that allows testing
request/reply handling without a device. Replies can be pre-configured or
generated from the request with a callback function.

Example:
    >>> from modbuspdu.transport import MockTransport
    >>> from modbuspdu import ModbusClient
    >>>
    >>> mock = MockTransport()
    >>> mock.add_reply(bytes([0x47, 0x02]))
    >>>
    >>> async with ModbusClient(mock) as client:
    ...     response = await client.write_fifo8(0x01, b"\\x00\\x01")
"""

from __future__ import annotations

from collections import deque
from typing import Callable

from modbuspdu.exceptions import TimeoutError, TransportError
from modbuspdu.transport.abc import AbstractTransport


class MockTransport(AbstractTransport):
    """
    Mock transport for testing without hardware.

    Every ``send`` records the request and returns the next reply: the
    callback's result if a callback is set and returns bytes, otherwise the
    next queued reply.

    Attributes:
        sent_data: List of all request PDUs sent through the transport.

    Example:
        >>> mock = MockTransport()
        >>> mock.add_reply(b"\\xC7\\x02")
        >>>
        >>> async with mock:
        ...     reply = await mock.send(b"\\x47\\x01\\x01\\x00")
        ...     assert reply == b"\\xC7\\x02"
        ...     assert mock.sent_data == [b"\\x47\\x01\\x01\\x00"]
    """

    def __init__(
        self,
        port_name: str = "mock://test",
        default_timeout: float = 1.0,
    ) -> None:
        """
        Initialize the mock transport.

        Args:
            port_name: Identifier for the mock transport.
            default_timeout: Timeout reported when no reply is available.
        """
        self._port_name = port_name
        self._default_timeout = default_timeout
        self._is_open = False
        self._replies: deque[bytes] = deque()
        self._sent_data: list[bytes] = []
        self._reply_callback: Callable[[bytes], bytes | None] | None = None

    @property
    def is_open(self) -> bool:
        """Check if the mock transport is open."""
        return self._is_open

    @property
    def port_name(self) -> str:
        """Get the mock port name."""
        return self._port_name

    @property
    def sent_data(self) -> list[bytes]:
        """Get all request PDUs sent through the transport."""
        return self._sent_data.copy()

    @property
    def last_sent(self) -> bytes | None:
        """Get the most recently sent request PDU."""
        return self._sent_data[-1] if self._sent_data else None

    @property
    def pending_replies(self) -> int:
        """Number of queued replies not yet returned."""
        return len(self._replies)

    def add_reply(self, reply: bytes) -> None:
        """
        Queue a reply.

        Replies are returned in FIFO order, one per send.

        Args:
            reply: Reply PDU to return on the next send.
        """
        self._replies.append(bytes(reply))

    def add_replies(self, *replies: bytes) -> None:
        """
        Queue multiple replies.

        Args:
            *replies: Reply PDUs to add in order.
        """
        for reply in replies:
            self.add_reply(reply)

    def set_reply_callback(
        self,
        callback: Callable[[bytes], bytes | None] | None,
    ) -> None:
        """
        Set a callback to generate replies from requests.

        The callback receives the request PDU and should return the reply.
        If it returns None, the next queued reply is used instead.

        Args:
            callback: Function that takes request bytes and returns reply bytes.
        """
        self._reply_callback = callback

    def clear(self) -> None:
        """Clear all sent data and pending replies."""
        self._sent_data.clear()
        self._replies.clear()

    async def open(self) -> None:
        """Open the mock transport."""
        if self._is_open:
            raise TransportError("Mock transport already open")
        self._is_open = True

    async def close(self) -> None:
        """Close the mock transport."""
        self._is_open = False

    async def send(self, pdu: bytes, timeout: float | None = None) -> bytes:
        """
        Record the request and return the next reply.

        Args:
            pdu: Request PDU.
            timeout: Reply timeout (only reported in the TimeoutError).

        Returns:
            Reply PDU.

        Raises:
            TimeoutError: If no reply is available.
            TransportError: If transport is not open.
        """
        if not self._is_open:
            raise TransportError("Mock transport not open")

        self._sent_data.append(bytes(pdu))

        if self._reply_callback:
            reply = self._reply_callback(bytes(pdu))
            if reply is not None:
                return bytes(reply)

        if self._replies:
            return self._replies.popleft()

        raise TimeoutError(
            "No mock reply available",
            timeout_seconds=timeout if timeout is not None else self._default_timeout,
        )

    def assert_sent(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that a specific request PDU was sent.

        Args:
            expected: Expected bytes.
            index: Index in sent_data list (-1 for last).

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._sent_data:
            raise AssertionError("No data sent through mock transport")

        actual = self._sent_data[index]
        if actual != expected:
            raise AssertionError(f"Sent data mismatch: expected {expected!r}, got {actual!r}")

    def assert_send_count(self, expected: int) -> None:
        """
        Assert number of send operations.

        Args:
            expected: Expected number of sends.

        Raises:
            AssertionError: If count doesn't match.
        """
        actual = len(self._sent_data)
        if actual != expected:
            raise AssertionError(f"Send count mismatch: expected {expected}, got {actual}")


class ScriptedMockTransport(MockTransport):
    """
    Mock transport with scripted request/reply pairs.

    Each send consumes the next script step. A step with an expected
    request fails the test if a different PDU is sent.

    Example:
        >>> mock = ScriptedMockTransport()
        >>> mock.expect(request=b"\\x47\\x01\\x01\\x00", reply=b"\\x47\\x01")
        >>> mock.expect(reply=b"\\xC7\\x06")
    """

    def __init__(self, port_name: str = "mock://scripted") -> None:
        super().__init__(port_name)
        self._script: list[tuple[bytes | None, bytes]] = []
        self._script_index = 0

    def expect(
        self,
        reply: bytes,
        request: bytes | None = None,
    ) -> None:
        """
        Add an expected request/reply pair.

        Args:
            reply: Reply to return.
            request: Expected request (None to match any).
        """
        self._script.append((request, bytes(reply)))

    async def send(self, pdu: bytes, timeout: float | None = None) -> bytes:
        """Send with script validation."""
        if not self._is_open:
            raise TransportError("Mock transport not open")

        self._sent_data.append(bytes(pdu))

        if self._script_index >= len(self._script):
            raise TimeoutError(
                f"Script exhausted after {len(self._script)} steps",
                timeout_seconds=timeout if timeout is not None else self._default_timeout,
            )

        expected_request, reply = self._script[self._script_index]
        if expected_request is not None and pdu != expected_request:
            raise AssertionError(
                f"Script mismatch at step {self._script_index}: "
                f"expected {expected_request!r}, got {pdu!r}"
            )

        self._script_index += 1
        return reply

    def reset_script(self) -> None:
        """Reset script to beginning."""
        self._script_index = 0

    def clear_script(self) -> None:
        """Clear all scripted expectations."""
        self._script.clear()
        self._script_index = 0
