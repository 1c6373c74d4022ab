"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Collects candidate files from command-line paths and candidate lists.
Features:
- Directories given as arguments contribute their entries (one level)
- Subdirectories are entered only in recursive mode
- Symbolic links are skipped unless link-following is enabled
- Directories, special files and vanished or unreadable names are skipped silently
"""

import logging
import os
import stat
import sys
from typing import List, Optional, Set, Tuple

logger = logging.getLogger(__name__)

# Local imports
from onelink.core.interfaces import CandidateScanner
from onelink.core.models import EntryKind, FileRef, LinkParams, ProgressCallback
from onelink.services.file_service import FileService
from onelink.utils.path_utils import make_path


class CandidateListError(ValueError):
    """The candidate list cannot be used; raised before anything is linked."""


def read_candidate_list(source: str) -> List[str]:
    """
    Reads one path per line from `source` ('-' for standard input).
    Blank lines are ignored. The whole list is read up front so a malformed
    list aborts the run before any file is touched.

    Raises:
        CandidateListError: if the list cannot be read or a line holds a NUL byte
    """
    try:
        if source == "-":
            data = sys.stdin.buffer.read()
        else:
            with open(source, "rb") as f:
                data = f.read()
    except OSError as e:
        raise CandidateListError(f"cannot read candidate list {source}: {e}") from e

    paths = []
    for line_no, raw in enumerate(data.splitlines(), 1):
        if b"\0" in raw:
            raise CandidateListError(f"{source}:{line_no}: NUL byte in path")
        if not raw.strip():
            continue
        # Undecodable bytes survive as surrogate escapes, like any os-level name
        paths.append(os.fsdecode(raw))
    return paths


class CandidateScannerImpl(CandidateScanner):
    """
    Expands the configured paths into FileRefs in discovery order.

    Attributes:
        params: Run configuration (paths, candidate list, recursion, symlink policy)
    """

    def __init__(self, params: LinkParams):
        self.params = params
        self._files: List[FileRef] = []
        self._seen_paths: Set[str] = set()
        self._seen_dirs: Set[Tuple[int, int]] = set()

    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[FileRef]:
        """
        Returns every regular file reachable from the configured paths.
        With no paths and no candidate list the current directory is used.
        """
        roots = list(self.params.paths)
        if self.params.candidate_list:
            roots.extend(read_candidate_list(self.params.candidate_list))
        if not roots and not self.params.candidate_list:
            roots = [os.curdir]

        self._files = []
        self._seen_paths = set()
        self._seen_dirs = set()

        for root in roots:
            if self._enter(root) is EntryKind.DIRECTORY:
                self._enter_directory(root, progress_callback)

        if progress_callback:
            progress_callback("scanning", len(self._files), len(self._files))

        logger.debug(f"Scan completed. Found {len(self._files)} candidate files.")
        return list(self._files)

    def _enter_directory(self, top: str, progress_callback: Optional[ProgressCallback] = None) -> None:
        """
        Enters the entries of `top`; in recursive mode also of every subdirectory.
        Uses an explicit stack, visiting each directory's files before its subdirectories.
        """
        stack = [top]
        while stack:
            directory = stack.pop()
            if not self._first_visit(directory):
                logger.debug(f"Skipping already visited directory: {directory}")
                continue

            try:
                names = sorted(FileService.list_dir(directory))
            except OSError as e:
                logger.warning(f"cannot open directory {directory}: {e}")
                continue

            subdirs = []
            for name in names:
                path = make_path(directory, name)
                if self._enter(path) is EntryKind.DIRECTORY and self.params.recursive:
                    subdirs.append(path)

            if progress_callback:
                progress_callback("scanning", len(self._files), None)

            stack.extend(reversed(subdirs))

    def _first_visit(self, directory: str) -> bool:
        """False if the directory was already entered (through another path or a symlink loop)."""
        try:
            st = FileService.stat(directory)
        except OSError:
            return True
        key = (st.st_dev, st.st_ino)
        if key in self._seen_dirs:
            return False
        self._seen_dirs.add(key)
        return True

    def _enter(self, path: str) -> EntryKind:
        """
        Classifies one path by type and records it if it is a candidate file.
        """
        try:
            st = FileService.lstat(path)
        except OSError as e:
            logger.debug(f"Skipping vanished or unreadable path {path}: {e}")
            return EntryKind.SKIPPED

        if stat.S_ISLNK(st.st_mode):
            if not self.params.follow_symlinks:
                logger.debug(f"Skipping symbolic link: {path}")
                return EntryKind.SKIPPED
            try:
                st = FileService.stat(path)
            except OSError as e:
                logger.debug(f"Skipping dangling symbolic link {path}: {e}")
                return EntryKind.SKIPPED

        if stat.S_ISDIR(st.st_mode):
            return EntryKind.DIRECTORY

        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping special file: {path}")
            return EntryKind.SKIPPED

        normalized = os.path.normpath(path)
        if normalized in self._seen_paths:
            logger.debug(f"Skipping repeated path: {path}")
            return EntryKind.SKIPPED
        self._seen_paths.add(normalized)

        if not os.access(path, os.R_OK):
            logger.debug(f"Skipping unreadable file: {path}")
            return EntryKind.SKIPPED

        self._files.append(FileRef.from_stat(path, st, order=len(self._files)))
        return EntryKind.FILE
