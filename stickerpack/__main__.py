import argparse
import json
import logging
import os
import sys

from .assets.loader import FileSystemAssetLoader
from .config import load_config, DEFAULT_CONFIG_FILE
from .models.pack import StickerPack
from .sticker.error import InvalidPackError
from .utils import utils
from .utils.helpers.image import WebpImageInspector, NoopImageInspector
from .validation.limits import ValidationLimits
from .validation.validator import PackValidator

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='stickerpack', description='validate the sticker packs of a contents.json file')
    parser.add_argument('contents', help='path to the contents.json file')
    parser.add_argument('--assets', default=None, help='assets directory (default: the contents.json directory)')
    parser.add_argument('--config', default=DEFAULT_CONFIG_FILE, help='toml config file')
    parser.add_argument('--logging', default=None, help='logging.json dictConfig file')
    parser.add_argument('--inspect', action='store_true', help='also check the webp frames of every sticker')

    return parser.parse_args(argv)


def load_packs(contents_path: str):
    with open(contents_path, 'r', encoding='utf-8') as f:
        contents = json.load(f)

    return [
        StickerPack.from_dict(
            pack_data,
            android_play_store_link=contents.get('android_play_store_link'),
            ios_app_store_link=contents.get('ios_app_store_link')
        )
        for pack_data in contents.get('sticker_packs', [])
    ]


def main(argv=None):
    args = parse_args(argv)

    if args.logging:
        utils.load_logging_config(args.logging)

    config = load_config(args.config)
    inspect_images = args.inspect or config.section('validator').get('inspect_images', False)

    validator = PackValidator(
        limits=ValidationLimits.from_config(config.section('limits')),
        inspector=WebpImageInspector() if inspect_images else NoopImageInspector()
    )
    base_dir = args.assets or config.section('assets').get('base_dir') or os.path.dirname(os.path.abspath(args.contents))
    asset_loader = FileSystemAssetLoader(base_dir)

    packs = load_packs(args.contents)
    logger.info('loaded %d pack(s) from %s', len(packs), args.contents)

    failed = 0
    for pack in packs:
        try:
            validator.validate(pack, asset_loader)
        except InvalidPackError as e:
            failed += 1
            print('FAIL {} {}: {}'.format(pack.identifier, e.code.value, e.message))
        else:
            print('OK {}'.format(pack.identifier))

    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
