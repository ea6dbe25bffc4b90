#!/usr/bin/env python3
"""Data models for the recently-used registry (XBEL).

Every object keeps the exact source bytes it was parsed from, so a document
can be written back without reformatting anything the filter did not touch.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union


@dataclass
class Segment:
    """Raw passthrough bytes: whitespace, comments, unmodelled elements."""
    raw: bytes

    def is_whitespace(self) -> bool:
        return not self.raw.strip()


@dataclass
class ApplicationEntry:
    """An application that opened a bookmarked resource."""
    attributes: Dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> Optional[str]:
        return self.attributes.get("name")

    @property
    def exec(self) -> Optional[str]:
        return self.attributes.get("exec")

    @property
    def modified(self) -> Optional[str]:
        # Older writers used "timestamp" (epoch seconds) instead of "modified"
        return self.attributes.get("modified") or self.attributes.get("timestamp")

    @property
    def count(self) -> Optional[int]:
        value = self.attributes.get("count")
        return int(value) if value is not None and value.isdigit() else None


@dataclass
class BookmarkGroup:
    """A single <bookmark> element and everything nested in it."""
    attributes: Dict[str, str] = field(default_factory=dict)
    applications: List[ApplicationEntry] = field(default_factory=list)
    groups: List[str] = field(default_factory=list)
    mime_type: Optional[str] = None
    raw: bytes = b""

    @property
    def href(self) -> str:
        return self.attributes["href"]

    @property
    def added(self) -> Optional[str]:
        return self.attributes.get("added")

    @property
    def modified(self) -> Optional[str]:
        return self.attributes.get("modified")

    @property
    def visited(self) -> Optional[str]:
        return self.attributes.get("visited")

    @property
    def count(self) -> int:
        """Total number of times any application opened the resource."""
        return sum(app.count or 0 for app in self.applications)


@dataclass
class Container:
    """An element that holds bookmarks: the <xbel> root or a <folder>."""
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    start_tag: bytes = b""
    # Children can be Segment, BookmarkGroup or a nested Container
    children: List[Union[Segment, BookmarkGroup, "Container"]] = field(default_factory=list)
    end_tag: bytes = b""

    def bookmarks(self) -> Iterator[BookmarkGroup]:
        """Yield all bookmarks below this container in document order."""
        for child in self.children:
            if isinstance(child, BookmarkGroup):
                yield child
            elif isinstance(child, Container):
                yield from child.bookmarks()


@dataclass
class RegistryDocument:
    """A parsed recently-used.xbel file."""
    root: Container = field(default_factory=lambda: Container(tag="xbel"))
    prolog: bytes = b""
    trailer: List[Segment] = field(default_factory=list)
    path: Optional[Path] = None
    exists: bool = True

    @property
    def version(self) -> Optional[str]:
        return self.root.attributes.get("version")

    def bookmarks(self) -> Iterator[BookmarkGroup]:
        return self.root.bookmarks()
