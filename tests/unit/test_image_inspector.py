"""
Unit tests for the Pillow image helpers and the webp inspector
"""

import pytest

from conftest import make_animated_webp, make_image, png_header
from stickerpack.sticker.error import ErrorCode, InvalidPackError
from stickerpack.utils.helpers.image import ImageFile, NoopImageInspector, WebpImageInspector, get_image_size
from stickerpack.validation.limits import ValidationLimits


@pytest.fixture
def inspector():
    return WebpImageInspector()


@pytest.fixture
def limits():
    return ValidationLimits()


def inspect(inspector, data, animated, limits):
    inspector.inspect("valid_pack", "sticker.webp", data, animated, limits)


def assert_inspection_fails(inspector, data, animated, limits, code):
    with pytest.raises(InvalidPackError) as exc_info:
        inspect(inspector, data, animated, limits)

    assert exc_info.value.code == code
    assert "valid_pack" in exc_info.value.message
    assert "sticker.webp" in exc_info.value.message
    return exc_info.value


class TestImageFile:
    def test_size(self):
        assert get_image_size(make_image(30, 40)) == (30, 40)

    def test_not_an_image(self):
        with pytest.raises(OSError):
            get_image_size(b"garbage")

    def test_static_webp(self):
        with ImageFile(make_image(512, 512, image_format="WEBP")) as image:
            assert image.format == "WEBP"
            assert image.frame_count == 1

    def test_animated_webp_frames(self):
        with ImageFile(make_animated_webp(frame_count=3, duration=100)) as image:
            assert image.frame_count == 3
            assert image.frame_durations() == [100, 100, 100]


class TestNoopInspector:
    def test_accepts_anything(self, limits):
        NoopImageInspector().inspect("valid_pack", "sticker.webp", b"garbage", True, limits)


class TestWebpInspector:
    def test_static_sticker(self, inspector, limits):
        inspect(inspector, make_image(512, 512, image_format="WEBP"), False, limits)

    def test_animated_sticker(self, inspector, limits):
        inspect(inspector, make_animated_webp(), True, limits)

    def test_not_decodable(self, inspector, limits):
        assert_inspection_fails(inspector, b"garbage", False, limits, ErrorCode.UNSUPPORTED_IMAGE_FORMAT)

    def test_huge_declared_dimensions(self, inspector, limits):
        error = assert_inspection_fails(inspector, png_header(20000, 20000), False, limits,
                                        ErrorCode.INCORRECT_IMAGE_SIZE)
        assert "512x512" in error.message

    def test_png_rejected(self, inspector, limits):
        error = assert_inspection_fails(inspector, make_image(512, 512), False, limits,
                                        ErrorCode.UNSUPPORTED_IMAGE_FORMAT)
        assert "PNG" in error.message

    @pytest.mark.parametrize("size", [(256, 512), (512, 256)])
    def test_wrong_dimensions(self, inspector, limits, size):
        data = make_image(size[0], size[1], image_format="WEBP")
        assert_inspection_fails(inspector, data, False, limits, ErrorCode.INCORRECT_IMAGE_SIZE)

    def test_static_sticker_in_animated_pack(self, inspector, limits):
        error = assert_inspection_fails(inspector, make_image(512, 512, image_format="WEBP"), True, limits,
                                        ErrorCode.UNSUPPORTED_IMAGE_FORMAT)
        assert "should animate" in error.message

    def test_animated_sticker_in_static_pack(self, inspector, limits):
        assert_inspection_fails(inspector, make_animated_webp(), False, limits,
                                ErrorCode.ANIMATED_IMAGES_NOT_SUPPORTED)

    def test_frame_too_short(self, inspector, limits):
        error = assert_inspection_fails(inspector, make_animated_webp(duration=5), True, limits,
                                        ErrorCode.UNSUPPORTED_IMAGE_FORMAT)
        assert "frame duration limit is 8" in error.message

    def test_animation_too_long(self, inspector, limits):
        data = make_animated_webp(frame_count=4, duration=3000)
        error = assert_inspection_fails(inspector, data, True, limits, ErrorCode.UNSUPPORTED_IMAGE_FORMAT)
        assert "10000 ms" in error.message

    def test_frame_duration_boundary(self, limits):
        WebpImageInspector.check_frame_durations([8, 8, 20], "valid_pack", "sticker.webp", limits)

        with pytest.raises(InvalidPackError):
            WebpImageInspector.check_frame_durations([8, 7], "valid_pack", "sticker.webp", limits)

    def test_custom_sticker_size(self, inspector):
        limits = ValidationLimits(image_width=256, image_height=256)
        inspect(inspector, make_image(256, 256, image_format="WEBP"), False, limits)
