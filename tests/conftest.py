"""Shared fixtures: sample recently-used.xbel documents."""
from pathlib import Path

import pytest

HEADER = """<?xml version="1.0" encoding="UTF-8"?>
<xbel version="1.0"
      xmlns:bookmark="http://www.freedesktop.org/standards/desktop-bookmarks"
      xmlns:mime="http://www.freedesktop.org/standards/shared-mime-info"
>
"""

BOOKMARK = """  <bookmark href="{href}" added="2020-09-24T20:00:00Z" modified="2020-09-25T20:00:00Z" visited="2020-09-25T20:00:00Z">
    <info>
      <metadata owner="http://freedesktop.org">
        <mime:mime-type type="text/plain"/>
        <bookmark:groups>
          <bookmark:group>gedit</bookmark:group>
        </bookmark:groups>
        <bookmark:applications>
          <bookmark:application name="gedit" exec="&apos;gedit %u&apos;" modified="2020-09-25T20:00:00Z" count="1234"/>
        </bookmark:applications>
      </metadata>
    </info>
  </bookmark>
"""

FOOTER = """</xbel>
"""


def build_xbel(*hrefs: str) -> str:
    """Build a registry in the layout GLib writes, one bookmark per href."""
    return HEADER + "".join(BOOKMARK.format(href=href) for href in hrefs) + FOOTER


@pytest.fixture
def make_xbel():
    """Factory for registry documents."""
    return build_xbel


@pytest.fixture
def registry_file(tmp_path):
    """Factory writing a registry into a temporary data directory."""
    path = tmp_path / "recently-used.xbel"

    def write(*hrefs: str) -> Path:
        path.write_text(build_xbel(*hrefs), encoding="utf-8")
        return path

    return write
