import logging
import os

import toml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = os.environ.get('STICKERPACK_CONFIG', 'config.toml')


class Config(dict):
    """dict with attribute access: `config.limits.get('char_count_max')`, `config.assets.base_dir`"""

    def __getattr__(self, item):
        try:
            value = self[item]
        except KeyError:
            raise AttributeError(item)

        if isinstance(value, dict) and not isinstance(value, Config):
            value = Config(value)
            self[item] = value

        return value

    def section(self, name: str) -> 'Config':
        return getattr(self, name) if name in self else Config()


def load_config(file_path=DEFAULT_CONFIG_FILE) -> Config:
    if not os.path.isfile(file_path):
        logger.debug('config file %s not found, using defaults', file_path)
        return Config()

    logger.debug('loading config from %s', file_path)
    return Config(toml.load(file_path))
