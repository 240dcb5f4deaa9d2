import enum


class ErrorCode(enum.Enum):
    EMPTY_STRING = "EMPTY_STRING"
    STRING_TOO_LONG = "STRING_TOO_LONG"
    INVALID_URL = "INVALID_URL"
    INVALID_EMAIL = "INVALID_EMAIL"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    INCORRECT_IMAGE_SIZE = "INCORRECT_IMAGE_SIZE"
    OUTSIDE_ALLOWABLE_RANGE = "NUM_OUTSIDE_ALLOWABLE_RANGE"
    TOO_MANY_EMOJIS = "TOO_MANY_EMOJIS"
    IMAGE_TOO_BIG = "IMAGE_TOO_BIG"
    UNSUPPORTED_IMAGE_FORMAT = "UNSUPPORTED_IMAGE_FORMAT"
    ANIMATED_IMAGES_NOT_SUPPORTED = "ANIMATED_IMAGES_NOT_SUPPORTED"
    ALREADY_ADDED = "ALREADY_ADDED"
    CANCELLED = "CANCELLED"
    OTHER = "OTHER"


# asset-size violations: the host treats them as a hard failure, retrying the same bytes is pointless
FATAL_CODES = frozenset({ErrorCode.IMAGE_TOO_BIG})

# codes the host app can send back when the pack is handed over
HOST_ERROR_CODES = {
    code.value: code for code in (
        ErrorCode.FILE_NOT_FOUND,
        ErrorCode.OUTSIDE_ALLOWABLE_RANGE,
        ErrorCode.UNSUPPORTED_IMAGE_FORMAT,
        ErrorCode.IMAGE_TOO_BIG,
        ErrorCode.INCORRECT_IMAGE_SIZE,
        ErrorCode.ANIMATED_IMAGES_NOT_SUPPORTED,
        ErrorCode.TOO_MANY_EMOJIS,
        ErrorCode.EMPTY_STRING,
        ErrorCode.STRING_TOO_LONG,
        ErrorCode.ALREADY_ADDED,
        ErrorCode.CANCELLED,
    )
}


class InvalidPackError(Exception):
    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def fatal(self) -> bool:
        return self.code in FATAL_CODES

    def __repr__(self):
        return 'InvalidPackError({}, {!r})'.format(self.code.value, self.message)


class PlatformError(Exception):
    """Raised by a host bridge when the host app refuses a request.

    `code` is the raw string code sent by the host, it is matched case-insensitively
    against `HOST_ERROR_CODES`.
    """

    def __init__(self, code: str, message: str = None):
        super().__init__(message or code)
        self.code = code
        self.message = message


class AssetNotFoundError(Exception):
    def __init__(self, identifier: str, handle: str, reason: str = None):
        self.identifier = identifier
        self.handle = handle
        self.reason = reason
        super().__init__(reason or 'asset not found: {}/{}'.format(identifier, handle))
