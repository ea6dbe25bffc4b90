"""Remove entries below given directories from the recently-used registry."""

from .models import ApplicationEntry, BookmarkGroup, Container, RegistryDocument, Segment
from .errors import (
    RegistryError,
    RegistryParseError,
    RegistryIOError,
    InvalidArgumentError,
)
from .console import Colors, CustomFormatter, setup_logging
from .registry import RegistryReader, RegistryParser, load_registry
from .atomic import atomic_write, create_backup
from .purger import (
    PurgeResult,
    normalize_prefixes,
    decode_file_uri,
    path_is_under,
    filter_document,
    serialize,
    purge,
)

__all__ = [
    # Models
    "ApplicationEntry",
    "BookmarkGroup",
    "Container",
    "RegistryDocument",
    "Segment",
    # Errors
    "RegistryError",
    "RegistryParseError",
    "RegistryIOError",
    "InvalidArgumentError",
    # Console
    "Colors",
    "CustomFormatter",
    "setup_logging",
    # Loader
    "RegistryReader",
    "RegistryParser",
    "load_registry",
    # Writing
    "atomic_write",
    "create_backup",
    # Purge
    "PurgeResult",
    "normalize_prefixes",
    "decode_file_uri",
    "path_is_under",
    "filter_document",
    "serialize",
    "purge",
]
