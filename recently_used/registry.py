#!/usr/bin/env python3
"""Locate and parse the recently-used registry (recently-used.xbel)."""

import logging
import xml.parsers.expat
from pathlib import Path
from typing import Callable, Dict, List, Optional

from xdg import BaseDirectory

from .errors import RegistryIOError, RegistryParseError
from .models import ApplicationEntry, BookmarkGroup, Container, RegistryDocument, Segment


class RegistryReader:
    """Handles locating and reading the registry file."""

    FILENAME = "recently-used.xbel"

    @classmethod
    def get_registry_path(cls) -> Path:
        """Get the path to the registry in the user's XDG data directory."""
        return Path(BaseDirectory.xdg_data_home) / cls.FILENAME

    @classmethod
    def read_data(cls, path: Optional[Path] = None) -> Optional[bytes]:
        """Read the raw registry bytes, or None if there is no registry yet."""
        if path is None:
            path = cls.get_registry_path()

        logging.debug(f"Reading registry {path}")
        try:
            return path.read_bytes()
        except FileNotFoundError:
            logging.debug(f"{path} does not exist, nothing to clean")
            return None
        except OSError as e:
            raise RegistryIOError(f"Cannot read {path}: {e.strerror or e}") from e


class RegistryParser:
    """Parses XBEL data into a RegistryDocument without losing any bytes.

    Expat reports the byte offset at which every event starts. Each piece of
    the document (a start tag, a whitespace run, a whole <bookmark> element)
    is cut from the source at the offset where the following event begins,
    so concatenating the pieces gives back the input exactly.
    """

    ROOT_TAG = "xbel"
    FOLDER_TAG = "folder"
    BOOKMARK_TAG = "bookmark"
    APPLICATION_TAG = "bookmark:application"
    GROUP_TAG = "bookmark:group"
    MIME_TAG = "mime:mime-type"

    def __init__(self, data: bytes):
        self.data = data
        self.document = RegistryDocument()
        self._parser = None
        self._containers: List[Container] = []
        self._root_closed = False
        # Pieces whose end offset is the start of the next event
        self._pending: List[Callable[[int], None]] = []
        self._in_text = False
        # State while inside a <bookmark> element
        self._bookmark: Optional[BookmarkGroup] = None
        self._bookmark_start = 0
        self._bookmark_depth = 0
        self._group_text: Optional[List[str]] = None
        # State while inside an element kept as an opaque segment
        self._opaque: Optional[Segment] = None
        self._opaque_start = 0
        self._opaque_depth = 0

    def parse(self) -> RegistryDocument:
        """Parse the data and return the document."""
        parser = xml.parsers.expat.ParserCreate()
        parser.ordered_attributes = True
        parser.StartElementHandler = self._start_element
        parser.EndElementHandler = self._end_element
        parser.CharacterDataHandler = self._character_data
        parser.CommentHandler = self._markup
        parser.ProcessingInstructionHandler = self._markup
        parser.StartCdataSectionHandler = self._markup
        parser.EndCdataSectionHandler = self._markup
        parser.DefaultHandlerExpand = self._markup
        self._parser = parser

        try:
            parser.Parse(self.data, True)
        except xml.parsers.expat.ExpatError as e:
            raise RegistryParseError(
                f"Malformed registry: {xml.parsers.expat.ErrorString(e.code)}",
                e.lineno,
                e.offset,
                parser.ErrorByteIndex,
            ) from e
        finally:
            self._parser = None

        self._close_pending(len(self.data))
        logging.debug(
            f"Parsed registry version {self.document.version}: "
            f"{sum(1 for _ in self.document.bookmarks())} bookmarks"
        )
        return self.document

    # ============== Offsets ==============

    def _close_pending(self, end: int):
        for close in self._pending:
            close(end)
        self._pending.clear()

    def _cut(self) -> int:
        """Close pending pieces at the current event and return its offset."""
        index = self._parser.CurrentByteIndex
        self._close_pending(index)
        self._in_text = False
        return index

    def _slice_from(self, start: int, target, attr: str):
        """Set ``target.attr`` to the source from ``start`` up to the next event."""
        self._pending.append(lambda end: setattr(target, attr, self.data[start:end]))

    def _keep_segment(self, start: int, until_next: bool = True) -> Optional[Segment]:
        """Attach a raw segment starting at ``start`` to the current level."""
        segment = Segment(raw=b"")
        if self._containers:
            self._containers[-1].children.append(segment)
        elif self._root_closed:
            self.document.trailer.append(segment)
        else:
            # Before the root element: covered by the prolog
            return None
        if until_next:
            self._slice_from(start, segment, "raw")
        return segment

    def _error(self, message: str) -> RegistryParseError:
        return RegistryParseError(
            message,
            self._parser.CurrentLineNumber,
            self._parser.CurrentColumnNumber,
            self._parser.CurrentByteIndex,
        )

    # ============== Handlers ==============

    def _start_element(self, name: str, attrs: List[str]):
        index = self._cut()
        attributes = dict(zip(attrs[::2], attrs[1::2]))

        if self._bookmark is not None:
            self._bookmark_depth += 1
            self._start_bookmark_child(name, attributes)
            return

        if self._opaque_depth:
            self._opaque_depth += 1
            return

        if not self._containers:
            if name != self.ROOT_TAG:
                raise self._error(f"Unexpected root element <{name}>, expected <{self.ROOT_TAG}>")
            self.document.prolog = self.data[:index]
            root = self.document.root
            root.tag = name
            root.attributes = attributes
            self._open_container(root, index)
            return

        parent = self._containers[-1]
        if name == self.BOOKMARK_TAG:
            if "href" not in attributes:
                raise self._error(f"<{name}> element without href attribute")
            self._bookmark = BookmarkGroup(attributes=attributes)
            self._bookmark_start = index
            self._bookmark_depth = 1
            parent.children.append(self._bookmark)
        elif name == self.FOLDER_TAG:
            folder = Container(tag=name, attributes=attributes)
            parent.children.append(folder)
            self._open_container(folder, index)
        else:
            # <title>, <info>, <separator/>, <alias> ... are kept verbatim
            self._opaque = self._keep_segment(index, until_next=False)
            self._opaque_start = index
            self._opaque_depth = 1

    def _end_element(self, name: str):
        index = self._cut()

        if self._bookmark is not None:
            self._bookmark_depth -= 1
            if self._bookmark_depth == 0:
                bookmark, start = self._bookmark, self._bookmark_start
                self._bookmark = None
                self._slice_from(start, bookmark, "raw")
            elif name == self.GROUP_TAG and self._group_text is not None:
                self._bookmark.groups.append("".join(self._group_text))
                self._group_text = None
            return

        if self._opaque_depth:
            self._opaque_depth -= 1
            if self._opaque_depth == 0:
                self._slice_from(self._opaque_start, self._opaque, "raw")
                self._opaque = None
            return

        container = self._containers.pop()
        self._slice_from(index, container, "end_tag")
        if not self._containers:
            self._root_closed = True

    def _character_data(self, text: str):
        if self._bookmark is not None:
            self._cut()
            if self._group_text is not None:
                self._group_text.append(text)
            return

        if self._opaque_depth:
            self._cut()
            return

        # Expat splits text at newlines and entities; keep one segment per run
        if self._in_text:
            return
        index = self._cut()
        if self._keep_segment(index) is not None:
            self._in_text = True

    def _markup(self, *args):
        """Comments, processing instructions, CDATA markers and the rest."""
        index = self._cut()
        if self._bookmark is None and not self._opaque_depth:
            self._keep_segment(index)

    # ============== Bookmark contents ==============

    def _start_bookmark_child(self, name: str, attributes: Dict[str, str]):
        bookmark = self._bookmark
        if name == self.APPLICATION_TAG:
            bookmark.applications.append(ApplicationEntry(attributes=attributes))
        elif name == self.MIME_TAG:
            bookmark.mime_type = attributes.get("type")
        elif name == self.GROUP_TAG:
            self._group_text = []

    def _open_container(self, container: Container, start: int):
        self._containers.append(container)
        self._slice_from(start, container, "start_tag")


def load_registry(path: Optional[Path] = None) -> RegistryDocument:
    """
    Load the registry from ``path`` (default: the XDG data directory).

    A missing file gives an empty document with ``exists`` set to False.
    """
    if path is None:
        path = RegistryReader.get_registry_path()

    data = RegistryReader.read_data(path)
    if data is None:
        return RegistryDocument(path=path, exists=False)

    document = RegistryParser(data).parse()
    document.path = path
    return document
