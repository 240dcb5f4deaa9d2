import logging
from typing import Callable, Optional

from ..assets.loader import AssetLoader
from ..models.pack import StickerPack
from ..validation.validator import PackValidator
from .error import HOST_ERROR_CODES, InvalidPackError, PlatformError

logger = logging.getLogger(__name__)


def raise_exception(platform_error: PlatformError):
    code = HOST_ERROR_CODES.get((platform_error.code or '').upper(), None)
    if code:
        raise InvalidPackError(code, platform_error.message or code.value) from platform_error

    # anything we don't know about goes back to the caller untouched
    logger.info('unknown host error code: %s', platform_error.code)
    raise platform_error


def send_request(func: Callable, request_payload: dict):
    func_name = getattr(func, "__name__", repr(func))
    try:
        result = func(request_payload)
        logger.debug('<%s> successfully executed', func_name)
        return result
    except PlatformError as e:
        logger.error('host exception while trying to execute function <%s>: [%s] %s', func_name, e.code, e.message)
        raise_exception(e)


def send_to_host(pack: StickerPack, func: Callable, asset_loader: AssetLoader,
                 validator: Optional[PackValidator] = None, image_data_version: Optional[str] = None):
    """Validate the pack and, if it passes, hand it over to the host app through `func`"""
    validator = validator or PackValidator()
    validator.validate(pack, asset_loader)

    logger.info('sending pack %s to the host app', pack.identifier)
    return send_request(func, pack.to_payload(image_data_version))
