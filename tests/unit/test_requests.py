"""
Unit tests for the delivery call wrapper
"""
from unittest.mock import Mock

import pytest

from conftest import build_pack
from stickerpack.sticker.error import ErrorCode, InvalidPackError, PlatformError, HOST_ERROR_CODES
from stickerpack.sticker.requests import send_request, send_to_host


class TestSendRequest:
    def test_success(self):
        func = Mock(return_value="ok")

        assert send_request(func, {"identifier": "valid_pack"}) == "ok"
        func.assert_called_once_with({"identifier": "valid_pack"})

    @pytest.mark.parametrize("code", sorted(HOST_ERROR_CODES))
    def test_known_codes(self, code):
        func = Mock(side_effect=PlatformError(code, "host said no"))

        with pytest.raises(InvalidPackError) as exc_info:
            send_request(func, {})

        assert exc_info.value.code.value == code
        assert exc_info.value.message == "host said no"

    def test_codes_are_case_insensitive(self):
        func = Mock(side_effect=PlatformError("already_added", "pack already added"))

        with pytest.raises(InvalidPackError) as exc_info:
            send_request(func, {})

        assert exc_info.value.code == ErrorCode.ALREADY_ADDED

    def test_missing_message_falls_back_to_code(self):
        func = Mock(side_effect=PlatformError("CANCELLED"))

        with pytest.raises(InvalidPackError) as exc_info:
            send_request(func, {})

        assert exc_info.value.message == "CANCELLED"

    def test_unknown_code_reraised_unchanged(self):
        original = PlatformError("SOMETHING_NEW", "unexpected")
        func = Mock(side_effect=original)

        with pytest.raises(PlatformError) as exc_info:
            send_request(func, {})

        assert exc_info.value is original

    def test_validation_only_codes_not_accepted_from_host(self):
        """INVALID_URL and friends are produced locally, the host never sends them"""
        func = Mock(side_effect=PlatformError("INVALID_URL", "bad"))

        with pytest.raises(PlatformError):
            send_request(func, {})

    def test_other_exceptions_untouched(self):
        func = Mock(side_effect=ConnectionError("bridge down"))

        with pytest.raises(ConnectionError):
            send_request(func, {})

    def test_host_codes(self):
        assert len(HOST_ERROR_CODES) == 11
        assert "NUM_OUTSIDE_ALLOWABLE_RANGE" in HOST_ERROR_CODES

    def test_image_too_big_is_fatal(self):
        func = Mock(side_effect=PlatformError("IMAGE_TOO_BIG", "too big"))

        with pytest.raises(InvalidPackError) as exc_info:
            send_request(func, {})

        assert exc_info.value.fatal


class TestSendToHost:
    def test_valid_pack_sent(self, valid_pack, asset_loader):
        func = Mock(return_value=None)

        send_to_host(valid_pack, func, asset_loader, image_data_version="2")

        payload = func.call_args[0][0]
        assert payload["identifier"] == "valid_pack"
        assert payload["imageDataVersion"] == "2"
        assert len(payload["stickers"]) == 5

    def test_invalid_pack_not_sent(self, asset_loader):
        func = Mock()

        with pytest.raises(InvalidPackError):
            send_to_host(build_pack(sticker_count=2), func, asset_loader)

        func.assert_not_called()
