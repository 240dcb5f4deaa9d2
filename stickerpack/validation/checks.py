import re
from urllib.parse import urlsplit, SplitResult

from ..sticker.error import ErrorCode, InvalidPackError

# [a-zA-Z0-9_-.,' ] plus whitespace, ASCII only
VALID_STRING_PATTERN = re.compile(r"[\w.,'\s-]+", re.ASCII)

EMAIL_ADDRESS_PATTERN = re.compile(
    r"[a-zA-Z0-9+._%\-]{1,256}"
    r"@"
    r"[a-zA-Z0-9][a-zA-Z0-9\-]{0,64}"
    r"(\.[a-zA-Z0-9][a-zA-Z0-9\-]{0,25})+"
)

WEB_SCHEMES = ("http", "https")


def check_string_validity(string: str):
    if not VALID_STRING_PATTERN.fullmatch(string):
        raise InvalidPackError(
            ErrorCode.OTHER,
            string + " contains invalid characters, allowed characters are a to z, A to Z, _ , ' - . and space character"
        )
    if ".." in string:
        raise InvalidPackError(ErrorCode.OTHER, string + " cannot contain ..")


def parse_url(url: str) -> SplitResult:
    """Parse an absolute url, raises INVALID_URL when the string can't be one"""
    try:
        parsed = urlsplit(url)
        # urlsplit only validates the port when it's read
        parsed.port
    except ValueError:
        # eg. an unbalanced ipv6 bracket, a non numeric port
        raise InvalidPackError(ErrorCode.INVALID_URL, "url: {} is malformed".format(url))

    if not parsed.scheme or not parsed.netloc:
        raise InvalidPackError(ErrorCode.INVALID_URL, "url: {} is malformed".format(url))

    return parsed


def is_valid_website_url(url: str) -> bool:
    return parse_url(url).scheme in WEB_SCHEMES


def get_host(parsed: SplitResult) -> str:
    """host component exactly as written: urlsplit's `hostname` lowercases it"""
    host = parsed.netloc.rpartition("@")[2]
    if host.startswith("["):
        return host[:host.find("]") + 1]

    return host.partition(":")[0]


def is_url_in_correct_domain(url: str, domain: str) -> bool:
    return get_host(parse_url(url)) == domain


def is_valid_email(email: str) -> bool:
    return EMAIL_ADDRESS_PATTERN.fullmatch(email) is not None
