import logging
import os
from typing import Mapping, Tuple

from ..constants.stickers import HandlePrefix
from ..sticker.error import AssetNotFoundError

logger = logging.getLogger(__name__)


class AssetLoader:
    """Resolves a (pack identifier, asset handle) pair into the raw bytes of the asset.

    Implementations raise `AssetNotFoundError` (or let an `OSError` through) when the asset
    is missing or unreadable.
    """

    def fetch(self, identifier: str, handle: str) -> bytes:
        raise NotImplementedError


class FileSystemAssetLoader(AssetLoader):
    def __init__(self, base_dir='.'):
        self.base_dir = base_dir

    def resolve(self, identifier: str, handle: str) -> str:
        if handle.startswith(HandlePrefix.FILE):
            return handle[len(HandlePrefix.FILE):]
        elif handle.startswith(HandlePrefix.ASSET):
            return os.path.join(self.base_dir, handle[len(HandlePrefix.ASSET):])
        else:
            # sample bundle layout: one directory per pack
            return os.path.join(self.base_dir, identifier, handle)

    def fetch(self, identifier: str, handle: str) -> bytes:
        file_path = self.resolve(identifier, handle)
        logger.debug('reading asset %s', file_path)

        try:
            with open(file_path, 'rb') as f:
                return f.read()
        except FileNotFoundError:
            raise AssetNotFoundError(identifier, handle, 'no such file: {}'.format(file_path))


class MemoryAssetLoader(AssetLoader):
    def __init__(self, assets: Mapping[Tuple[str, str], bytes] = None):
        self.assets = dict(assets) if assets else {}

    def add(self, identifier: str, handle: str, data: bytes):
        self.assets[(identifier, handle)] = data

    def fetch(self, identifier: str, handle: str) -> bytes:
        try:
            return self.assets[(identifier, handle)]
        except KeyError:
            raise AssetNotFoundError(identifier, handle)
