class ImageFormat:
    WEBP = "WEBP"


class HandlePrefix:
    ASSET = "assets://"
    FILE = "file://"


class StoreDomain:
    PLAY_STORE = "play.google.com"
    APPLE_STORE = "itunes.apple.com"


class Limits:
    CHAR_COUNT_MAX = 128
    STICKER_SIZE_MIN = 3
    STICKER_SIZE_MAX = 30
    EMOJI_MIN_LIMIT = 1
    EMOJI_MAX_LIMIT = 3
    KB_IN_BYTES = 1024
    STATIC_STICKER_FILE_LIMIT_KB = 100
    ANIMATED_STICKER_FILE_LIMIT_KB = 500
    TRAY_IMAGE_FILE_SIZE_MAX_KB = 50
    TRAY_IMAGE_DIMENSION_MIN = 24
    TRAY_IMAGE_DIMENSION_MAX = 512
    IMAGE_HEIGHT = 512
    IMAGE_WIDTH = 512
    ANIMATED_STICKER_FRAME_DURATION_MIN = 8  # ms
    ANIMATED_STICKER_TOTAL_DURATION_MAX = 10 * 1000  # ms


# tokens the host bridge uses in place of path separators when it flattens asset paths
PATH_MARKERS = ("mzn_ad_", "mzn_fd_")
