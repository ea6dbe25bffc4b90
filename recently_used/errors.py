#!/usr/bin/env python3
"""Exceptions raised while cleaning the recently-used registry."""

from typing import Optional


class RegistryError(Exception):
    """Base class for registry errors."""
    pass


class RegistryParseError(RegistryError):
    """The registry file is not a well-formed XBEL document."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        offset: Optional[int] = None,
    ):
        self.line = line
        self.column = column
        self.offset = offset
        if line is not None:
            message = f"{message} (line {line}, column {column}, byte {offset})"
        super().__init__(message)


class RegistryIOError(RegistryError):
    """Reading, writing or replacing the registry file failed."""
    pass


class InvalidArgumentError(RegistryError):
    """Directory prefixes are missing or not absolute."""
    pass
