"""
Pytest configuration and shared fixtures for the sticker pack validator tests
"""
import io
import struct
import zlib

import pytest
from PIL import Image

from stickerpack.assets.loader import MemoryAssetLoader
from stickerpack.models.pack import StickerPack, Sticker
from stickerpack.validation.validator import PackValidator

KB = 1024
PACK_IDENTIFIER = "valid_pack"
STICKER_COUNT = 5


def make_image(width, height, image_format="PNG", pad_to=None, color=(255, 0, 0, 255)):
    """Encode a plain image; `pad_to` appends zero bytes after the image data so the
    asset weighs exactly that many bytes (decoders only read the header we care about)"""
    buffer = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buffer, image_format)
    data = buffer.getvalue()

    if pad_to is not None:
        assert len(data) <= pad_to, "encoded image already larger than the requested size"
        data += b"\0" * (pad_to - len(data))

    return data


def png_header(width, height):
    """A PNG that only declares its size: IHDR, an empty IDAT and IEND, no pixel data"""
    def chunk(chunk_type, payload):
        crc = zlib.crc32(chunk_type + payload) & 0xffffffff
        return struct.pack(">I", len(payload)) + chunk_type + payload + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IDAT", b"") + chunk(b"IEND", b"")


def make_animated_webp(frame_count=3, duration=100, size=(512, 512)):
    colors = [(255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255), (255, 255, 0, 255)]
    frames = [Image.new("RGBA", size, colors[i % len(colors)]) for i in range(frame_count)]

    buffer = io.BytesIO()
    frames[0].save(
        buffer,
        "WEBP",
        save_all=True,
        append_images=frames[1:],
        duration=duration,
        loop=0,
        lossless=True
    )
    return buffer.getvalue()


def build_pack(identifier=PACK_IDENTIFIER, sticker_count=STICKER_COUNT, emojis=("😀", "🎉"), **kwargs):
    stickers = [Sticker("sticker_{}.webp".format(i), list(emojis)) for i in range(sticker_count)]
    fields = dict(
        identifier=identifier,
        name="Pack",
        publisher="Acme",
        tray_image_file="tray.png",
        stickers=stickers,
    )
    fields.update(kwargs)

    return StickerPack(**fields)


def build_loader(pack, tray_image=None, sticker_data=None):
    loader = MemoryAssetLoader()
    loader.add(pack.identifier, pack.tray_image_file, tray_image or make_image(256, 256, pad_to=40 * KB))
    for sticker in pack.stickers:
        loader.add(pack.identifier, sticker.image_file_name, sticker_data or make_image(512, 512, pad_to=30 * KB))

    return loader


@pytest.fixture
def valid_pack():
    """Five stickers with two emojis each, static pack"""
    return build_pack()


@pytest.fixture
def asset_loader(valid_pack):
    """40 KB 256x256 tray image and 30 KB stickers"""
    return build_loader(valid_pack)


@pytest.fixture
def validator():
    return PackValidator()
