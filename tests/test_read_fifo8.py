"""Tests for the Read FIFO8 request/response pair."""

import pytest

from modbuspdu.exceptions import ProtocolError, TruncatedFrameError, ValidationError
from modbuspdu.functions import ExceptionResponse, ReadFifo8Request, ReadFifo8Response, ResponseKind


class TestReadFifo8Request:
    """Tests for ReadFifo8Request."""

    def test_code(self):
        assert ReadFifo8Request(id=0x01, quantity=10).code == 0x41

    @pytest.mark.parametrize("quantity", [0, 251, -1])
    def test_invalid_quantity_raises(self, quantity):
        """Test that quantities outside 1-250 are rejected."""
        with pytest.raises(ValidationError):
            ReadFifo8Request(id=0x01, quantity=quantity)

    @pytest.mark.parametrize("fifo_id", [-1, 256])
    def test_invalid_id_raises(self, fifo_id):
        with pytest.raises(ValidationError):
            ReadFifo8Request(id=fifo_id, quantity=1)

    @pytest.mark.parametrize("quantity", [True, "4", 4.0])
    def test_quantity_must_be_int(self, quantity):
        with pytest.raises(ValidationError):
            ReadFifo8Request(id=0x01, quantity=quantity)

    def test_positional_construction(self):
        assert ReadFifo8Request(0x12, 250).to_buffer() == bytes([0x41, 0x12, 0xFA])

    def test_to_buffer(self):
        """Test the exact frame layout."""
        assert ReadFifo8Request(id=0x12, quantity=250).to_buffer() == bytes([0x41, 0x12, 0xFA])

    def test_from_buffer(self):
        req = ReadFifo8Request.from_buffer(bytes([0x41, 0x07, 0x10]))
        assert req.id == 0x07
        assert req.quantity == 0x10

    def test_from_buffer_too_short(self):
        with pytest.raises(TruncatedFrameError):
            ReadFifo8Request.from_buffer(bytes([0x41, 0x07]))

    def test_from_buffer_invalid_function_code(self):
        with pytest.raises(ProtocolError):
            ReadFifo8Request.from_buffer(bytes([0x47, 0x07, 0x10]))

    def test_from_buffer_zero_quantity(self):
        """Test that a zero quantity on the wire fails validation."""
        with pytest.raises(ValidationError):
            ReadFifo8Request.from_buffer(bytes([0x41, 0x07, 0x00]))

    def test_from_options(self):
        req = ReadFifo8Request.from_options({"id": 3, "quantity": 4})
        assert req == ReadFifo8Request(id=3, quantity=4)

    def test_str(self):
        assert str(ReadFifo8Request(id=0x01, quantity=8)) == "0x41 (REQ) Read up to 8 bytes from FIFO 0x01"


class TestReadFifo8Response:
    """Tests for ReadFifo8Response."""

    def test_from_buffer(self):
        """Test decoding a response with more bytes pending."""
        res = ReadFifo8Response.from_buffer(bytes([0x41, 0x01, 0x02, 0xAA, 0xBB]))
        assert res.more is True
        assert res.values == b"\xaa\xbb"

    def test_from_buffer_empty_fifo(self):
        """Test that a response may carry no bytes."""
        res = ReadFifo8Response.from_buffer(bytes([0x41, 0x00, 0x00]))
        assert res.more is False
        assert res.values == b""

    def test_from_buffer_nonzero_more_flag(self):
        """Test that any non-zero more byte reads as True."""
        assert ReadFifo8Response.from_buffer(bytes([0x41, 0x05, 0x00])).more is True

    def test_from_buffer_shorter_than_count(self):
        with pytest.raises(TruncatedFrameError):
            ReadFifo8Response.from_buffer(bytes([0x41, 0x00, 0x03, 0x01]))

    def test_from_buffer_too_short(self):
        with pytest.raises(TruncatedFrameError):
            ReadFifo8Response.from_buffer(bytes([0x41, 0x00]))

    def test_to_buffer(self):
        res = ReadFifo8Response(more=True, values=[0x01, 0x02])
        assert res.to_buffer() == bytes([0x41, 0x01, 0x02, 0x01, 0x02])

    def test_to_buffer_defaults(self):
        assert ReadFifo8Response().to_buffer() == bytes([0x41, 0x00, 0x00])

    def test_too_many_values(self):
        with pytest.raises(ValidationError):
            ReadFifo8Response(values=bytes(251))

    @pytest.mark.parametrize("values", [2, {1: 2}, {1, 2}])
    def test_non_byte_values(self, values):
        """Test that non-buffer payloads are rejected."""
        with pytest.raises(ValidationError):
            ReadFifo8Response(values=values)

    def test_kind(self):
        res = ReadFifo8Response()
        assert res.kind is ResponseKind.NORMAL
        assert res.is_exception is False
        assert res.code == 0x41

    def test_str(self):
        text = str(ReadFifo8Response(more=True, values=b"\x01"))
        assert "0x41" in text
        assert "more available" in text


class TestReadFifo8CreateResponse:
    """Tests for dispatching replies to a Read FIFO8 request."""

    @pytest.fixture
    def request_(self):
        return ReadFifo8Request(id=0x01, quantity=4)

    def test_normal_reply(self, request_):
        res = request_.create_response(bytes([0x41, 0x00, 0x01, 0x7F]))
        assert isinstance(res, ReadFifo8Response)
        assert res.values == b"\x7f"

    def test_exception_reply(self, request_):
        res = request_.create_response(bytes([0xC1, 0x03]))
        assert isinstance(res, ExceptionResponse)
        assert res.code == 0x41
        assert res.exception_code == 3

    def test_write_fifo8_reply_rejected(self, request_):
        """Test that a Write FIFO8 reply does not satisfy a read."""
        with pytest.raises(ProtocolError):
            request_.create_response(bytes([0x47, 0x01]))
