"""Tweet lookup package."""

from .client import TweetLookupClient, parse_envelope
from .config import LookupConfig
from .types import LookupFailure, LookupFailureKind, Tweet, TweetLookupResult
from .validation import InvalidIdentifierLength, validate_identifier

__all__ = [
    "InvalidIdentifierLength",
    "LookupConfig",
    "LookupFailure",
    "LookupFailureKind",
    "Tweet",
    "TweetLookupClient",
    "TweetLookupResult",
    "parse_envelope",
    "validate_identifier",
]
