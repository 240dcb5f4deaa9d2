import inspect
import logging
from contextlib import contextmanager
from typing import Callable, Optional

from PIL import Image

from ..assets.loader import AssetLoader
from ..models.pack import StickerPack, Sticker
from ..sticker.error import ErrorCode, InvalidPackError, AssetNotFoundError
from ..utils import utils
from ..utils.helpers.image import ImageInspector, NoopImageInspector, get_image_size
from . import checks
from .limits import ValidationLimits

logger = logging.getLogger(__name__)

# loaders signal a missing/unreadable asset with one of these
ASSET_ERRORS = (AssetNotFoundError, OSError)


def tray_image_not_found(pack: StickerPack) -> InvalidPackError:
    return InvalidPackError(
        ErrorCode.FILE_NOT_FOUND,
        "Cannot open tray image, {}, sticker pack identifier: {}".format(
            utils.clean_asset_name(pack.tray_image_file), pack.identifier
        )
    )


def sticker_file_not_found(identifier: str, file_name: str, error: Exception) -> InvalidPackError:
    return InvalidPackError(
        ErrorCode.FILE_NOT_FOUND,
        "cannot open sticker file: sticker pack identifier: {}, filename: {}\n\n{}".format(
            identifier, utils.clean_asset_name(file_name), utils.clean_asset_name(str(error))
        )
    )


@contextmanager
def loading_asset(not_found: Callable[[Exception], InvalidPackError]):
    """Turns a loader failure raised inside the block into the FILE_NOT_FOUND error built by `not_found`"""
    try:
        yield
    except ASSET_ERRORS as e:
        logger.debug('asset loading failed: %s', str(e))
        raise not_found(e)


class PackValidator:
    """Checks a sticker pack against the host app's rules.

    Every check raises `InvalidPackError` and the first failure stops the validation, so the
    order of the checks below is part of the behaviour: cheap string checks come first, asset
    loading last. The validator keeps no state between calls.
    """

    def __init__(self, limits: Optional[ValidationLimits] = None, inspector: Optional[ImageInspector] = None):
        self.limits = limits or ValidationLimits()
        self.inspector = inspector or NoopImageInspector()

    def validate(self, pack: StickerPack, asset_loader: AssetLoader):
        logger.info('validating %s', pack)

        try:
            self.check_pack_fields(pack)

            with loading_asset(lambda e: tray_image_not_found(pack)):
                tray_image = asset_loader.fetch(pack.identifier, pack.tray_image_file)
            self.check_tray_image(pack, tray_image)

            self.check_sticker_count(pack)
            for sticker in pack.stickers:
                self.validate_sticker(pack.identifier, sticker, pack.animated_sticker_pack, asset_loader)
        except InvalidPackError as e:
            logger.info('pack %s rejected (%s): %s', pack.identifier, e.code.value, e.message)
            raise

        logger.info('pack %s is valid', pack.identifier)

    async def validate_async(self, pack: StickerPack, asset_loader):
        """Same as `validate()`, for loaders whose `fetch()` is a coroutine. Assets are still
        loaded one at a time, in the same order"""
        logger.info('validating %s', pack)

        try:
            self.check_pack_fields(pack)

            with loading_asset(lambda e: tray_image_not_found(pack)):
                tray_image = await self._fetch_async(asset_loader, pack.identifier, pack.tray_image_file)
            self.check_tray_image(pack, tray_image)

            self.check_sticker_count(pack)
            for sticker in pack.stickers:
                self.check_sticker(pack.identifier, sticker)
                file_name = sticker.image_file_name
                with self.loading_sticker(pack.identifier, file_name):
                    data = await self._fetch_async(asset_loader, pack.identifier, file_name)
                self.check_sticker_asset(pack.identifier, file_name, pack.animated_sticker_pack, data)
        except InvalidPackError as e:
            logger.info('pack %s rejected (%s): %s', pack.identifier, e.code.value, e.message)
            raise

        logger.info('pack %s is valid', pack.identifier)

    @staticmethod
    def loading_sticker(identifier: str, file_name: str):
        return loading_asset(lambda e: sticker_file_not_found(identifier, file_name, e))

    @staticmethod
    async def _fetch_async(asset_loader, identifier: str, handle: str) -> bytes:
        result = asset_loader.fetch(identifier, handle)
        if inspect.isawaitable(result):
            result = await result

        return result

    def check_pack_fields(self, pack: StickerPack):
        identifier = pack.identifier
        char_count_max = self.limits.char_count_max

        if not identifier:
            raise InvalidPackError(ErrorCode.EMPTY_STRING, "sticker pack identifier is empty")
        if len(identifier) > char_count_max:
            raise InvalidPackError(
                ErrorCode.STRING_TOO_LONG,
                "sticker pack identifier cannot exceed {} characters".format(char_count_max)
            )
        checks.check_string_validity(identifier)

        for field_name, value in (("publisher", pack.publisher), ("name", pack.name)):
            if not value:
                raise InvalidPackError(
                    ErrorCode.EMPTY_STRING,
                    "sticker pack {} is empty, sticker pack identifier: {}".format(field_name, identifier)
                )
            if len(value) > char_count_max:
                raise InvalidPackError(
                    ErrorCode.STRING_TOO_LONG,
                    "sticker pack {} cannot exceed {} characters, sticker pack identifier: {}".format(
                        field_name, char_count_max, identifier
                    )
                )

        if not pack.tray_image_file:
            raise InvalidPackError(
                ErrorCode.EMPTY_STRING,
                "sticker pack tray id is empty, sticker pack identifier: {}".format(identifier)
            )

        websites = (
            ("android play store link", pack.android_play_store_link),
            ("ios app store link", pack.ios_app_store_link),
            ("license agreement link", pack.license_agreement_website),
            ("privacy policy link", pack.privacy_policy_website),
            ("publisher website link", pack.publisher_website),
        )
        for description, url in websites:
            if not url:
                continue

            try:
                valid_url = checks.is_valid_website_url(url)
            except InvalidPackError as e:
                raise InvalidPackError(e.code, "{}, sticker pack identifier: {}".format(e.message, identifier))

            if not valid_url:
                raise InvalidPackError(
                    ErrorCode.INVALID_URL,
                    "Make sure to include http or https in url links, {} is not a valid url: {}, "
                    "sticker pack identifier: {}".format(description, url, identifier)
                )

        if pack.android_play_store_link and not checks.is_url_in_correct_domain(
                pack.android_play_store_link, self.limits.play_store_domain):
            raise InvalidPackError(
                ErrorCode.INVALID_URL,
                "android play store link should use play store domain: {}, sticker pack identifier: {}".format(
                    self.limits.play_store_domain, identifier
                )
            )
        if pack.ios_app_store_link and not checks.is_url_in_correct_domain(
                pack.ios_app_store_link, self.limits.apple_store_domain):
            raise InvalidPackError(
                ErrorCode.INVALID_URL,
                "iOS app store link should use app store domain: {}, sticker pack identifier: {}".format(
                    self.limits.apple_store_domain, identifier
                )
            )

        if pack.publisher_email and not checks.is_valid_email(pack.publisher_email):
            raise InvalidPackError(
                ErrorCode.INVALID_EMAIL,
                "publisher email does not seem valid, email is: {}, sticker pack identifier: {}".format(
                    pack.publisher_email, identifier
                )
            )

    def check_tray_image(self, pack: StickerPack, data: bytes):
        limits = self.limits
        logger.debug('tray image %s: %d bytes', pack.tray_image_file, len(data))

        if len(data) > limits.tray_image_max_bytes:
            raise InvalidPackError(
                ErrorCode.INCORRECT_IMAGE_SIZE,
                "tray image should be less than {} KB, tray image file: {}, sticker pack identifier: {}".format(
                    limits.tray_image_max_kb, pack.tray_image_file, pack.identifier
                )
            )

        try:
            width, height = get_image_size(data)
        except Image.DecompressionBombError as e:
            # the header declares more pixels than Pillow agrees to open
            logger.debug('tray image too large to decode: %s', str(e))
            raise InvalidPackError(
                ErrorCode.INCORRECT_IMAGE_SIZE,
                "tray image height and width should be between {} and {} pixels, tray image file: {}, "
                "sticker pack identifier: {}".format(
                    limits.tray_dimension_min, limits.tray_dimension_max, pack.tray_image_file, pack.identifier
                )
            )
        except (OSError, ValueError) as e:
            logger.debug('cannot decode tray image: %s', str(e))
            raise InvalidPackError(
                ErrorCode.UNSUPPORTED_IMAGE_FORMAT,
                "tray image cannot be decoded, tray image file: {}, sticker pack identifier: {}".format(
                    pack.tray_image_file, pack.identifier
                )
            )
        logger.debug('tray image size: %dx%d', width, height)

        if not limits.tray_dimension_min <= height <= limits.tray_dimension_max:
            raise InvalidPackError(
                ErrorCode.INCORRECT_IMAGE_SIZE,
                "tray image height should between {} and {} pixels, current tray image height is {}, "
                "tray image file: {}, sticker pack identifier: {}".format(
                    limits.tray_dimension_min, limits.tray_dimension_max, height, pack.tray_image_file, pack.identifier
                )
            )
        if not limits.tray_dimension_min <= width <= limits.tray_dimension_max:
            raise InvalidPackError(
                ErrorCode.INCORRECT_IMAGE_SIZE,
                "tray image width should be between {} and {} pixels, current tray image width is {}, "
                "tray image file: {}, sticker pack identifier: {}".format(
                    limits.tray_dimension_min, limits.tray_dimension_max, width, pack.tray_image_file, pack.identifier
                )
            )

    def check_sticker_count(self, pack: StickerPack):
        count = len(pack.stickers)
        if count < self.limits.sticker_count_min or count > self.limits.sticker_count_max:
            raise InvalidPackError(
                ErrorCode.OUTSIDE_ALLOWABLE_RANGE,
                "sticker pack sticker count should be between {} to {} inclusive, it currently has {}, "
                "sticker pack identifier: {}".format(
                    self.limits.sticker_count_min, self.limits.sticker_count_max, count, pack.identifier
                )
            )

    def validate_sticker(self, identifier: str, sticker: Sticker, animated: bool, asset_loader: AssetLoader):
        self.check_sticker(identifier, sticker)
        self.validate_sticker_asset(identifier, sticker.image_file_name, animated, asset_loader)

    def check_sticker(self, identifier: str, sticker: Sticker):
        # too few emojis is reported as TOO_MANY_EMOJIS too: the host app has a single code for both
        if len(sticker.emojis) > self.limits.emoji_max:
            raise InvalidPackError(
                ErrorCode.TOO_MANY_EMOJIS,
                "emoji count exceed limit, sticker pack identifier: {}, filename: {}".format(
                    identifier, sticker.image_file_name
                )
            )
        if len(sticker.emojis) < self.limits.emoji_min:
            raise InvalidPackError(
                ErrorCode.TOO_MANY_EMOJIS,
                "To provide best user experience, please associate at least {} emoji to this sticker, "
                "sticker pack identifier: {}, filename: {}".format(self.limits.emoji_min, identifier, sticker.image_file_name)
            )
        if not sticker.image_file_name:
            raise InvalidPackError(
                ErrorCode.EMPTY_STRING,
                "no file path for sticker, sticker pack identifier: {}".format(identifier)
            )

    def validate_sticker_asset(self, identifier: str, file_name: str, animated: bool, asset_loader: AssetLoader):
        with self.loading_sticker(identifier, file_name):
            data = asset_loader.fetch(identifier, file_name)

        self.check_sticker_asset(identifier, file_name, animated, data)

    def check_sticker_asset(self, identifier: str, file_name: str, animated: bool, data: bytes):
        logger.debug('sticker %s: %d bytes', file_name, len(data))

        if len(data) > self.limits.sticker_max_bytes(animated):
            raise InvalidPackError(
                ErrorCode.IMAGE_TOO_BIG,
                "{} sticker should be less than {}KB, current file is {} KB, sticker pack identifier: {}, "
                "filename: {}".format(
                    "animated" if animated else "static",
                    self.limits.sticker_max_kb(animated),
                    utils.size_kb(data, self.limits.kb_in_bytes),
                    identifier,
                    file_name
                )
            )

        self.inspector.inspect(identifier, file_name, data, animated, self.limits)


def validate_pack(pack: StickerPack, asset_loader: AssetLoader, limits: Optional[ValidationLimits] = None,
                  inspector: Optional[ImageInspector] = None):
    PackValidator(limits=limits, inspector=inspector).validate(pack, asset_loader)
