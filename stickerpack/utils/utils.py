import logging.config
import json
import os
from typing import List, Union

import emoji

from ..constants.stickers import PATH_MARKERS


def load_logging_config(file_name='logging.json'):
    with open(file_name, 'r') as f:
        logging_config = json.load(f)

    logging.config.dictConfig(logging_config)


def get_emojis(text, as_list=False) -> Union[List[str], str]:
    emojis = [e["emoji"] for e in emoji.emoji_list(text)]
    if as_list:
        return emojis
    else:
        return ''.join(emojis)


def clean_asset_name(handle: str) -> str:
    """Replace the bridge's flattened path markers with the os path separator, so the internal
    naming never shows up in an error message"""
    for marker in PATH_MARKERS:
        handle = handle.replace(marker, os.sep)

    return handle


def size_kb(data: bytes, kb_in_bytes=1024) -> int:
    return len(data) // kb_in_bytes
