"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/path_utils.py
Path helpers shared by the scanner and the link swap protocol.
"""

import itertools
import os
import time
from typing import Optional

import xxhash

BACKUP_MARKER = ".onelink-"

_backup_counter = itertools.count()


def make_path(directory: Optional[str], name: str) -> str:
    """
    Join a directory and an entry name.
    The name is used as-is when the directory is empty or '.', or when the
    name is already absolute.
    """
    if not directory or directory == os.curdir or os.path.isabs(name):
        return name
    return os.path.join(directory, name)


def directory_of(path: str) -> str:
    """Directory holding `path`, '.' for bare names."""
    return os.path.dirname(path) or os.curdir


def backup_token(pid: Optional[int] = None, now_ns: Optional[int] = None) -> str:
    """
    Short token identifying one backup attempt.
    Mixes the process id, the current time and a per-process counter.
    """
    pid = os.getpid() if pid is None else pid
    now_ns = time.time_ns() if now_ns is None else now_ns
    seed = f"{pid}:{now_ns}:{next(_backup_counter)}".encode()
    return xxhash.xxh32_hexdigest(seed)


def backup_path_for(path: str, token: Optional[str] = None) -> str:
    """
    Temporary name for `path` while it is being replaced.
    Lives in the same directory so the rename stays on one device; its length
    does not depend on the name being replaced.
    """
    return make_path(directory_of(path), f"{BACKUP_MARKER}{token or backup_token()}")
