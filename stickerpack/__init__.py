import logging

from .assets import AssetLoader, FileSystemAssetLoader, MemoryAssetLoader
from .models import StickerPack, Sticker, image_from_asset, image_from_file
from .sticker.error import ErrorCode, InvalidPackError, PlatformError, AssetNotFoundError
from .sticker.requests import send_request, send_to_host
from .utils.helpers.image import ImageInspector, NoopImageInspector, WebpImageInspector
from .validation import PackValidator, ValidationLimits, validate_pack

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = '1.0.0'
