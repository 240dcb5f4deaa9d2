from .error import ErrorCode, InvalidPackError, PlatformError, AssetNotFoundError
