"""Tests for the function code registry."""

from typing import ClassVar

import pytest

from modbuspdu.exceptions import ProtocolError, TruncatedFrameError
from modbuspdu.functions import (
    ReadFifo8Request,
    WriteFifo8Request,
    WriteFifo8Response,
    decode_request,
    register_request,
    registered_codes,
    request_type,
)
from modbuspdu.protocol.constants import FunctionCode


class TestRegistry:
    """Tests for request registration and lookup."""

    def test_builtin_requests_registered(self):
        assert request_type(0x47) is WriteFifo8Request
        assert request_type(FunctionCode.READ_FIFO8) is ReadFifo8Request

    def test_unknown_code(self):
        assert request_type(0x03) is None

    def test_registered_codes(self):
        codes = registered_codes()
        assert FunctionCode.READ_FIFO8 in codes
        assert FunctionCode.WRITE_FIFO8 in codes
        assert codes == sorted(codes)

    def test_reregister_same_class(self):
        """Test that registering a class twice is harmless."""
        assert register_request(WriteFifo8Request) is WriteFifo8Request

    def test_conflicting_registration_raises(self):
        """Test that a second class cannot claim a taken code."""

        class OtherWriteFifo8(WriteFifo8Request):
            function_code: ClassVar[FunctionCode] = FunctionCode.WRITE_FIFO8
            response_type: ClassVar[type] = WriteFifo8Response

        with pytest.raises(ValueError, match="already registered"):
            register_request(OtherWriteFifo8)
        assert request_type(0x47) is WriteFifo8Request


class TestDecodeRequest:
    """Tests for decode_request function."""

    def test_decode_write_fifo8(self):
        req = decode_request(bytes([0x47, 0x12, 0x02, 0x00, 0x02]))
        assert req == WriteFifo8Request(id=0x12, values=b"\x00\x02")

    def test_decode_read_fifo8(self):
        req = decode_request(bytes([0x41, 0x01, 0x05]))
        assert isinstance(req, ReadFifo8Request)
        assert req.quantity == 5

    def test_empty_frame(self):
        with pytest.raises(TruncatedFrameError):
            decode_request(b"")

    def test_unsupported_code(self):
        with pytest.raises(ProtocolError, match="Unsupported"):
            decode_request(bytes([0x03, 0x00, 0x00, 0x00, 0x01]))

    def test_exception_flagged_code(self):
        with pytest.raises(ProtocolError):
            decode_request(bytes([0xC7, 0x02]))

    def test_truncated_registered_request(self):
        with pytest.raises(TruncatedFrameError):
            decode_request(bytes([0x47, 0x12]))
