"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparator.py
Exact byte-for-byte comparison of two files.

Both files are read in matched fixed-size chunks and the comparison stops at
the first chunk whose length or bytes differ. A file that cannot be opened or
read makes the pair Unreadable, which callers treat as "not identical".
"""

import logging

from onelink.core.interfaces import ContentComparator
from onelink.core.models import CompareResult, DEFAULT_CHUNK_SIZE
from onelink.services.file_service import FileService

logger = logging.getLogger(__name__)


class ContentComparatorImpl(ContentComparator):
    """
    Streams two files side by side.
    Nothing is cached between calls: every comparison reads the current content.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    def compare(self, path_a: str, path_b: str) -> CompareResult:
        try:
            with FileService.open_binary(path_a) as file_a, FileService.open_binary(path_b) as file_b:
                return self._compare_streams(file_a, file_b)
        except OSError as e:
            logger.debug(f"Cannot compare {path_a} and {path_b}: {e}")
            return CompareResult.UNREADABLE

    def _compare_streams(self, file_a, file_b) -> CompareResult:
        while True:
            chunk_a = file_a.read(self.chunk_size)
            chunk_b = file_b.read(self.chunk_size)

            if len(chunk_a) != len(chunk_b) or chunk_a != chunk_b:
                return CompareResult.DIFFERENT

            # Both streams hit EOF together
            if not chunk_a:
                return CompareResult.EQUAL
