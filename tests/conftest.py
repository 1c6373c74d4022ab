"""
Shared fixtures for link engine tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so the 'onelink' package is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from onelink.core.models import FileRef, LinkParams


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for link scenarios:
    - 2 identical files (duplicates)
    - 1 file of the same size with different content
    - 2 identical files of another size
    - 1 unique file
    - 2 empty files
    - 1 duplicate inside a subdirectory (only reached in recursive mode)
    """
    files = {}

    # Duplicate pair #1 (1KB of 'A') plus a same-size impostor
    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)
    files["same_size"] = temp_dir / "same_size.txt"
    files["same_size"].write_bytes(b"A" * 1023 + b"Z")

    # Duplicate pair #2 (2KB of 'B')
    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.bin"
    files["dup2_b"] = temp_dir / "dup2_b.bin"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    # Unique file
    files["unique"] = temp_dir / "unique.txt"
    files["unique"].write_bytes(b"C" * 1500)

    # Empty files
    files["empty1"] = temp_dir / "empty1.txt"
    files["empty2"] = temp_dir / "empty2.txt"
    files["empty1"].write_bytes(b"")
    files["empty2"].write_bytes(b"")

    # Duplicate of pair #1 in a subdirectory
    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    return files


@pytest.fixture
def params():
    """Default run configuration."""
    return LinkParams()


def make_ref(path, order: int = 0) -> FileRef:
    """FileRef built from the current on-disk state of `path`."""
    return FileRef.from_stat(str(path), os.stat(path), order=order)


def inode(path) -> int:
    return os.stat(path).st_ino


def snapshot(directory: Path) -> Dict[str, bytes]:
    """Content of every regular file under `directory`, keyed by relative path."""
    return {
        str(p.relative_to(directory)): p.read_bytes()
        for p in sorted(directory.rglob("*"))
        if p.is_file() and not p.is_symlink()
    }


def inode_map(directory: Path) -> Dict[str, int]:
    return {
        str(p.relative_to(directory)): p.stat().st_ino
        for p in sorted(directory.rglob("*"))
        if p.is_file() and not p.is_symlink()
    }
