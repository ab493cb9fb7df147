"""
Transport layer for Modbus PDU exchange.

This package defines the interface the client uses to move PDUs to and
from a device. Link-layer framing belongs to concrete transports.

Available transports:
- MockTransport: Mock transport for testing without hardware
- ScriptedMockTransport: Mock transport with an ordered request/reply script

Testing Example:
    >>> from modbuspdu.transport import MockTransport
    >>> mock = MockTransport()
    >>> mock.add_reply(bytes([0x47, 0x01]))
"""

from modbuspdu.transport.abc import AbstractTransport
from modbuspdu.transport.mock import MockTransport, ScriptedMockTransport

__all__ = [
    "AbstractTransport",
    "MockTransport",
    "ScriptedMockTransport",
]
