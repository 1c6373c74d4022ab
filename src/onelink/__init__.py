"""
OneLink — replace identical files by hard links to a single inode.

Core features:
- Cheap metadata classes (size, device, optionally owner/group/mode) before any content is read
- Exact byte-for-byte comparison, no hashing
- Crash-safe link swap: every replaced name goes through a temporary backup
- Dry-run mode that only reports what would be linked
- CLI interface for headless/server usage
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("onelink")
except Exception:
    import tomllib
    from pathlib import Path

    with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API — only what users should import directly
from onelink.commands import LinkCommand
from onelink.core import (
    LinkParams, LinkStats, FileRef, EquivalenceClass, MergeOutcome, DecisionAction, PairDecision)
from onelink.utils.convert_utils import ConvertUtils
from onelink.services import FileService, PriorityService

__all__ = [
    "LinkCommand",
    "LinkParams",
    "LinkStats",
    "FileRef",
    "EquivalenceClass",
    "MergeOutcome",
    "DecisionAction",
    "PairDecision",
    "ConvertUtils",
    "FileService",
    "PriorityService",
    "__version__",
]
