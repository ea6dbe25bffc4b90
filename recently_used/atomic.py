#!/usr/bin/env python3
"""Atomic file replacement and backups."""

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterator

from .errors import RegistryIOError


@contextmanager
def atomic_write(target: Path) -> Iterator[BinaryIO]:
    """
    Write ``target`` through a temporary file in the same directory.

    The temporary file is flushed and synced before it is renamed onto the
    target. If anything fails, including the caller's block, the temporary
    file is removed and the target is left as it was.
    """
    target = Path(target)
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
    except OSError as e:
        raise RegistryIOError(
            f"Cannot create temporary file in {target.parent}: {e.strerror or e}"
        ) from e

    tmp_path = Path(tmp_name)
    replaced = False
    try:
        with os.fdopen(fd, "wb") as f:
            yield f
            f.flush()
            os.fsync(f.fileno())
        if target.exists():
            shutil.copymode(target, tmp_path)
        os.replace(tmp_path, target)
        replaced = True
        logging.debug(f"Replaced {target}")
    except OSError as e:
        raise RegistryIOError(f"Cannot write {target}: {e.strerror or e}") from e
    finally:
        if not replaced:
            tmp_path.unlink(missing_ok=True)


def create_backup(path: Path) -> Path:
    """
    Copy ``path`` to a timestamped backup next to it and return the copy.

    Existing backups are never overwritten: a backup taken in the same second
    as an earlier one gets a numeric suffix.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    dst = path.with_name(f"{path.name}.backup_{timestamp}")
    attempt = 1
    try:
        with path.open("rb") as src:
            while True:
                try:
                    with dst.open("xb") as out:
                        shutil.copyfileobj(src, out)
                    break
                except FileExistsError:
                    dst = path.with_name(f"{path.name}.backup_{timestamp}_{attempt}")
                    attempt += 1
        shutil.copystat(path, dst)
    except OSError as e:
        raise RegistryIOError(f"Cannot back up {path}: {e.strerror or e}") from e
    logging.info(f"Backup: {dst.name}")
    return dst
