#!/usr/bin/env python3
"""Remove recently-used entries below given directories and write the result back."""

import logging
import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Union
from urllib.parse import unquote_to_bytes

from .atomic import atomic_write, create_backup
from .errors import InvalidArgumentError
from .models import BookmarkGroup, Container, RegistryDocument, Segment
from .registry import load_registry

FILE_SCHEME = "file://"
LOCAL_HOSTS = ("", "localhost")


@dataclass
class PurgeResult:
    """Outcome of a purge run."""
    path: Optional[Path]
    removed: List[str] = field(default_factory=list)
    remaining: int = 0
    written: bool = False
    backup_path: Optional[Path] = None


# ============== Paths ==============

def _normalize(path: str) -> str:
    """Lexically normalize a POSIX path. A leading "//" is the same as "/" on Linux."""
    normalized = posixpath.normpath(path)
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def normalize_prefixes(paths: Iterable[Union[str, os.PathLike]]) -> List[PurePosixPath]:
    """
    Validate and normalize the directories to clean.

    Raises InvalidArgumentError if no path is given or one is not absolute.
    """
    prefixes: List[PurePosixPath] = []
    for path in paths:
        path = os.fspath(path)
        if not posixpath.isabs(path):
            raise InvalidArgumentError(f"Not an absolute path: {path!r}")
        prefix = PurePosixPath(_normalize(path))
        if prefix not in prefixes:
            prefixes.append(prefix)

    if not prefixes:
        raise InvalidArgumentError("No directories to clean were given")
    return prefixes


def decode_file_uri(href: str) -> Optional[PurePosixPath]:
    """
    Decode a local file:// URI into a path.

    Returns None for other schemes (trash://, sftp://, ...) and for file URIs
    that name a remote host. Bytes that are not valid UTF-8 are kept as
    surrogate escapes, the same way Python decodes command line arguments.
    """
    if href[:len(FILE_SCHEME)].lower() != FILE_SCHEME:
        return None

    authority, slash, path = href[len(FILE_SCHEME):].partition("/")
    if not slash or authority.lower() not in LOCAL_HOSTS:
        return None

    decoded = os.fsdecode(unquote_to_bytes("/" + path))
    return PurePosixPath(_normalize(decoded))


def path_is_under(path: PurePosixPath, prefix: PurePosixPath) -> bool:
    """True if ``path`` is ``prefix`` or lies below it, compared by component."""
    return path == prefix or prefix in path.parents


def bookmark_matches(bookmark: BookmarkGroup, prefixes: List[PurePosixPath]) -> bool:
    path = decode_file_uri(bookmark.href)
    if path is None:
        logging.debug(f"Keeping non-local entry {bookmark.href}")
        return False
    return any(path_is_under(path, prefix) for prefix in prefixes)


# ============== Filter ==============

def filter_document(
    document: RegistryDocument, prefixes: List[PurePosixPath]
) -> List[BookmarkGroup]:
    """
    Remove bookmarks below any of ``prefixes`` from the document, in place.

    The indentation in front of a removed bookmark goes with it. Folders are
    never removed, even when they end up empty.

    Returns:
        The removed bookmarks in document order.
    """
    removed: List[BookmarkGroup] = []
    _filter_container(document.root, prefixes, removed)
    return removed


def _filter_container(
    container: Container, prefixes: List[PurePosixPath], removed: List[BookmarkGroup]
):
    kept = []
    for child in container.children:
        if isinstance(child, Container):
            _filter_container(child, prefixes, removed)
        elif isinstance(child, BookmarkGroup) and bookmark_matches(child, prefixes):
            logging.debug(f"Removing {child.href}")
            removed.append(child)
            if kept and isinstance(kept[-1], Segment) and kept[-1].is_whitespace():
                kept.pop()
            continue
        kept.append(child)
    container.children[:] = kept


# ============== Serialization ==============

def serialize(document: RegistryDocument) -> bytes:
    """Turn the document back into XBEL bytes."""
    parts = [document.prolog]
    _serialize_container(document.root, parts)
    parts.extend(segment.raw for segment in document.trailer)
    return b"".join(parts)


def _serialize_container(container: Container, parts: List[bytes]):
    parts.append(container.start_tag)
    for child in container.children:
        if isinstance(child, Container):
            _serialize_container(child, parts)
        else:
            parts.append(child.raw)
    parts.append(container.end_tag)


# ============== Purge ==============

def purge(
    paths: Iterable[Union[str, os.PathLike]],
    registry_path: Optional[Path] = None,
    dry_run: bool = False,
    backup: bool = False,
) -> PurgeResult:
    """
    Remove every entry below ``paths`` from the recently-used registry.

    The file is only rewritten when something was removed.

    Returns:
        PurgeResult describing what was (or, with dry_run, would be) removed.
    """
    prefixes = normalize_prefixes(paths)
    logging.debug(f"Cleaning entries below: {', '.join(str(p) for p in prefixes)}")

    document = load_registry(registry_path)
    result = PurgeResult(path=document.path)
    if not document.exists:
        logging.info(f"No registry at {document.path}, nothing to do")
        return result

    removed = filter_document(document, prefixes)
    result.removed = [bookmark.href for bookmark in removed]
    result.remaining = sum(1 for _ in document.bookmarks())

    if not removed:
        logging.info(f"No matching entries in {document.path.name}")
        return result

    if dry_run:
        for href in result.removed:
            logging.info(f"Would remove: {href}")
        return result

    if backup:
        result.backup_path = create_backup(document.path)

    with atomic_write(document.path) as f:
        f.write(serialize(document))
    result.written = True

    logging.info(
        f"Removed {len(removed)} entries from {document.path.name}, "
        f"{result.remaining} left"
    )
    return result
