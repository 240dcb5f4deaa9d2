import logging
from typing import Mapping, Optional

from ..constants.stickers import Limits, StoreDomain

logger = logging.getLogger(__name__)


class ValidationLimits:
    """Every threshold the validator enforces. Defaults match what the host app accepts,
    tests and config files can override any of them."""

    def __init__(
            self,
            char_count_max=Limits.CHAR_COUNT_MAX,
            sticker_count_min=Limits.STICKER_SIZE_MIN,
            sticker_count_max=Limits.STICKER_SIZE_MAX,
            emoji_min=Limits.EMOJI_MIN_LIMIT,
            emoji_max=Limits.EMOJI_MAX_LIMIT,
            kb_in_bytes=Limits.KB_IN_BYTES,
            static_sticker_max_kb=Limits.STATIC_STICKER_FILE_LIMIT_KB,
            animated_sticker_max_kb=Limits.ANIMATED_STICKER_FILE_LIMIT_KB,
            tray_image_max_kb=Limits.TRAY_IMAGE_FILE_SIZE_MAX_KB,
            tray_dimension_min=Limits.TRAY_IMAGE_DIMENSION_MIN,
            tray_dimension_max=Limits.TRAY_IMAGE_DIMENSION_MAX,
            image_height=Limits.IMAGE_HEIGHT,
            image_width=Limits.IMAGE_WIDTH,
            animated_frame_duration_min=Limits.ANIMATED_STICKER_FRAME_DURATION_MIN,
            animated_total_duration_max=Limits.ANIMATED_STICKER_TOTAL_DURATION_MAX,
            play_store_domain=StoreDomain.PLAY_STORE,
            apple_store_domain=StoreDomain.APPLE_STORE
    ):
        self.char_count_max = char_count_max
        self.sticker_count_min = sticker_count_min
        self.sticker_count_max = sticker_count_max
        self.emoji_min = emoji_min
        self.emoji_max = emoji_max
        self.kb_in_bytes = kb_in_bytes
        self.static_sticker_max_kb = static_sticker_max_kb
        self.animated_sticker_max_kb = animated_sticker_max_kb
        self.tray_image_max_kb = tray_image_max_kb
        self.tray_dimension_min = tray_dimension_min
        self.tray_dimension_max = tray_dimension_max
        self.image_height = image_height
        self.image_width = image_width
        self.animated_frame_duration_min = animated_frame_duration_min
        self.animated_total_duration_max = animated_total_duration_max
        self.play_store_domain = play_store_domain
        self.apple_store_domain = apple_store_domain

    @classmethod
    def from_config(cls, section: Optional[Mapping] = None):
        if not section:
            return cls()

        known_keys = cls().__dict__.keys()
        unknown_keys = [key for key in section if key not in known_keys]
        if unknown_keys:
            raise ValueError('unknown validation limits: {}'.format(', '.join(sorted(unknown_keys))))

        logger.debug('overriding validation limits: %s', dict(section))
        return cls(**section)

    def sticker_max_bytes(self, animated: bool) -> int:
        return self.sticker_max_kb(animated) * self.kb_in_bytes

    def sticker_max_kb(self, animated: bool) -> int:
        return self.animated_sticker_max_kb if animated else self.static_sticker_max_kb

    @property
    def tray_image_max_bytes(self) -> int:
        return self.tray_image_max_kb * self.kb_in_bytes

    def __repr__(self):
        return 'ValidationLimits({})'.format(', '.join('{}={!r}'.format(k, v) for k, v in self.__dict__.items()))
