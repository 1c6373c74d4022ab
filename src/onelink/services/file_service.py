"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem primitives used by the scanner, the comparator and the link swap protocol.
Every call is synchronous; OSError is propagated to the caller, which decides
whether the failure is skippable, recoverable or fatal.
"""
import logging
import os
from typing import BinaryIO, List

logger = logging.getLogger(__name__)


class FileService:
    """
    Thin wrapper over the os module.
    Kept as a single seam so tests can patch individual primitives.
    """

    @staticmethod
    def lstat(path: str) -> os.stat_result:
        """Metadata of the name itself (symlinks are not followed)."""
        return os.lstat(path)

    @staticmethod
    def stat(path: str) -> os.stat_result:
        """Metadata of the file the name resolves to."""
        return os.stat(path)

    @staticmethod
    def lexists(path: str) -> bool:
        return os.path.lexists(path)

    @staticmethod
    def list_dir(directory: str) -> List[str]:
        """Entry names of a directory, '.' and '..' excluded."""
        return os.listdir(directory)

    @staticmethod
    def open_binary(path: str) -> BinaryIO:
        return open(path, "rb")

    @staticmethod
    def link(existing: str, new: str) -> None:
        """Create hard link `new` to the inode behind `existing`."""
        logger.debug(f"link({existing}, {new})")
        os.link(existing, new)

    @staticmethod
    def rename(old: str, new: str) -> None:
        """Atomic rename; both names must be on the same device."""
        logger.debug(f"rename({old}, {new})")
        os.rename(old, new)

    @staticmethod
    def unlink(path: str) -> None:
        logger.debug(f"unlink({path})")
        os.unlink(path)

    @staticmethod
    def link_count(path: str) -> int:
        """Number of hard links of the inode behind `path`."""
        return os.stat(path).st_nlink
