"""Tests for ModbusClient."""

import logging

import pytest

from modbuspdu import ModbusClient, ResponseKind
from modbuspdu.exceptions import ProtocolError, TimeoutError, TransportError, ValidationError
from modbuspdu.functions import (
    ExceptionResponse,
    ReadFifo8Response,
    WriteFifo8Request,
    WriteFifo8Response,
)
from modbuspdu.protocol.constants import ExceptionCode
from modbuspdu.transport.mock import MockTransport, ScriptedMockTransport


class TestModbusClient:
    """Tests for ModbusClient class."""

    @pytest.fixture
    def mock_transport(self):
        """Create a MockTransport instance."""
        return MockTransport()

    @pytest.fixture
    def client(self, mock_transport):
        """Create a ModbusClient with mock transport."""
        return ModbusClient(mock_transport, timeout=0.5)

    def test_initial_state(self, client, mock_transport):
        """Test client exposes its transport and timeout."""
        assert client.transport is mock_transport
        assert client.timeout == 0.5
        assert repr(client) == "ModbusClient(transport='mock://test', closed)"

    @pytest.mark.asyncio
    async def test_execute_normal_response(self, client, mock_transport):
        """Test a request answered with a normal response."""
        mock_transport.add_reply(bytes([0x47, 0x02]))

        async with client:
            response = await client.execute(WriteFifo8Request(id=0x12, values=[0x00, 0x02]))

        mock_transport.assert_sent(bytes([0x47, 0x12, 0x02, 0x00, 0x02]))
        assert isinstance(response, WriteFifo8Response)
        assert response.kind is ResponseKind.NORMAL
        assert response.quantity == 2

    @pytest.mark.asyncio
    async def test_execute_exception_response(self, client, mock_transport, caplog):
        """Test that a device fault is returned, not raised."""
        mock_transport.add_reply(bytes([0xC7, 0x02]))

        with caplog.at_level(logging.WARNING, logger="modbuspdu.client"):
            async with client:
                response = await client.write_fifo8(0x01, b"\x00\x01")

        assert isinstance(response, ExceptionResponse)
        assert response.kind is ResponseKind.EXCEPTION
        assert response.exception is ExceptionCode.ILLEGAL_DATA_ADDRESS
        assert "Illegal data address" in caplog.text

    @pytest.mark.asyncio
    async def test_read_fifo8(self, client, mock_transport):
        """Test the read helper."""
        mock_transport.add_reply(bytes([0x41, 0x00, 0x02, 0xDE, 0xAD]))

        async with client:
            response = await client.read_fifo8(0x03, 16)

        mock_transport.assert_sent(bytes([0x41, 0x03, 0x10]))
        assert isinstance(response, ReadFifo8Response)
        assert response.values == b"\xde\xad"
        assert response.more is False

    @pytest.mark.asyncio
    async def test_execute_when_closed_raises(self, client, mock_transport):
        """Test that execute requires an open transport."""
        with pytest.raises(TransportError):
            await client.write_fifo8(0x01, b"\x00")
        mock_transport.assert_send_count(0)

    @pytest.mark.asyncio
    async def test_invalid_parameters_not_sent(self, client, mock_transport):
        """Test that validation fails before anything is sent."""
        async with client:
            with pytest.raises(ValidationError):
                await client.write_fifo8(0x01, b"")
            with pytest.raises(ValidationError):
                await client.read_fifo8(0x01, 0)
        mock_transport.assert_send_count(0)

    @pytest.mark.asyncio
    async def test_mismatched_reply_raises(self, client, mock_transport):
        """Test that a reply for another function is a protocol error."""
        mock_transport.add_reply(bytes([0x03, 0x02, 0x00, 0x01]))

        async with client:
            with pytest.raises(ProtocolError):
                await client.write_fifo8(0x01, b"\x00")

    @pytest.mark.asyncio
    async def test_timeout_propagates(self, client):
        """Test that a missing reply raises TimeoutError with the client timeout."""
        async with client:
            with pytest.raises(TimeoutError) as exc_info:
                await client.write_fifo8(0x01, b"\x00")
        assert exc_info.value.timeout_seconds == 0.5

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, client, mock_transport):
        """Test that leaving the context closes the transport."""
        async with client:
            assert mock_transport.is_open
            assert "open" in repr(client)
        assert not mock_transport.is_open

    @pytest.mark.asyncio
    async def test_context_manager_keeps_open_transport(self, mock_transport):
        """Test entering with an already open transport."""
        await mock_transport.open()
        async with ModbusClient(mock_transport):
            assert mock_transport.is_open
        assert not mock_transport.is_open

    @pytest.mark.asyncio
    async def test_scripted_exchange(self):
        """Test a write followed by a busy fault."""
        transport = ScriptedMockTransport()
        transport.expect(request=bytes([0x47, 0x01, 0x01, 0x13]), reply=bytes([0x47, 0x01]))
        transport.expect(request=bytes([0x47, 0x01, 0x01, 0x37]), reply=bytes([0xC7, 0x06]))

        async with ModbusClient(transport) as client:
            first = await client.write_fifo8(0x01, b"\x13")
            second = await client.write_fifo8(0x01, b"\x37")

        assert first.kind is ResponseKind.NORMAL
        assert second.kind is ResponseKind.EXCEPTION
        assert second.exception is ExceptionCode.SERVER_DEVICE_BUSY
