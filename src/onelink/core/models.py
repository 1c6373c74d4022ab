"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for candidate classification, pairwise merging and run reporting.
"""

import os
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from onelink.utils.convert_utils import ConvertUtils
from onelink.utils.path_utils import directory_of


# =============================
# Enums
# =============================

class EntryKind(Enum):
    """What the scanner found behind a single path."""
    FILE = "file"
    DIRECTORY = "directory"
    SKIPPED = "skipped"


class CompareResult(Enum):
    """Outcome of a byte-for-byte comparison of two files."""
    EQUAL = "equal"
    DIFFERENT = "different"
    UNREADABLE = "unreadable"


class MergeOutcome(Enum):
    """
    Outcome of one merge attempt between two members of an equivalence class.
    ALREADY_LINKED and LINKED both count as success when reducing a class.
    """
    ALREADY_LINKED = "already-linked"
    LINKED = "linked"
    DIFFERENT = "different"
    FAILED = "failed"

    @property
    def is_success(self) -> bool:
        return self in (MergeOutcome.ALREADY_LINKED, MergeOutcome.LINKED)

    def __repr__(self) -> str:
        return self.value


class DecisionAction(Enum):
    """User-visible decision reported for each compared pair."""
    LINKED = "linked"
    KEPT = "kept"
    SKIPPED = "skipped"
    FAILED = "failed"

    @property
    def display_name(self) -> str:
        """Label used by the CLI report."""
        mapping = {
            DecisionAction.LINKED: "LINK",
            DecisionAction.KEPT: "KEEP",
            DecisionAction.SKIPPED: "SKIP",
            DecisionAction.FAILED: "FAIL",
        }
        return mapping.get(self, self.value)


class SwapStatus(Enum):
    """Result of demoting one name into a hard link to another."""
    SUCCESS = "success"
    RECOVERABLE = "recoverable"      # state rolled back, name untouched
    CATASTROPHIC = "catastrophic"    # content survives only under the backup name


_OUTCOME_ACTIONS = {
    MergeOutcome.ALREADY_LINKED: DecisionAction.SKIPPED,
    MergeOutcome.LINKED: DecisionAction.LINKED,
    MergeOutcome.DIFFERENT: DecisionAction.KEPT,
    MergeOutcome.FAILED: DecisionAction.FAILED,
}


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileRef:
    """
    One on-disk name of a candidate file, captured when it was stat'd.

    The record never changes: after a merge the path still resolves, but it
    may alias another inode than the one recorded here.
    """
    path: str
    directory: str
    inode: int
    size: int = 0
    device: int = 0
    owner: int = 0
    group: int = 0
    mode: int = 0
    order: int = 0  # discovery index; breaks link-count ties in the link swap protocol

    @classmethod
    def from_stat(cls, path: str, stat_result: os.stat_result, order: int = 0) -> "FileRef":
        return cls(
            path=path,
            directory=directory_of(path),
            inode=stat_result.st_ino,
            size=stat_result.st_size,
            device=stat_result.st_dev,
            owner=stat_result.st_uid,
            group=stat_result.st_gid,
            mode=stat_result.st_mode & 0o7777,
            order=order,
        )

    def __repr__(self):
        return f"<FileRef path={self.path}, inode={self.inode}>"


@dataclass(frozen=True)
class EquivalenceKey:
    """
    Cheap metadata shared by every member of an equivalence class.
    Ignored fields are stored as None so they never split a class.
    """
    size: int
    device: int
    owner: Optional[int] = None
    group: Optional[int] = None
    mode: Optional[int] = None

    @classmethod
    def for_file(cls, file: FileRef, params: "LinkParams") -> "EquivalenceKey":
        return cls(
            size=file.size,
            device=file.device,
            owner=None if params.ignore_owner else file.owner,
            group=None if params.ignore_group else file.group,
            mode=None if params.ignore_permissions else file.mode,
        )


@dataclass
class EquivalenceClass:
    """
    Files that might be identical: same key, content not yet compared.
    Members keep the order in which they were discovered.
    """
    key: EquivalenceKey
    files: List[FileRef] = field(default_factory=list)

    @property
    def member_count(self) -> int:
        return len(self.files)

    def add_file(self, file: FileRef) -> None:
        if file.size != self.key.size or file.device != self.key.device:
            raise ValueError("Cannot add file with a different key to an equivalence class.")
        self.files.append(file)

    def is_candidate(self) -> bool:
        """True if the class has at least two members worth comparing."""
        return self.member_count >= 2

    def __repr__(self):
        return f"<EquivalenceClass size={self.key.size}, count={len(self.files)}>"


@dataclass(frozen=True)
class PairDecision:
    """
    One entry of the per-pair report produced while consolidating a class.

    `kept` is the name that keeps its inode, `other` the second member of the
    pair. `retired` is set when a name was (or, in dry-run, would be) replaced
    by a hard link to `kept`.
    """
    outcome: MergeOutcome
    kept: FileRef
    other: FileRef
    retired: Optional[FileRef] = None
    dry_run: bool = False
    catastrophic: bool = False
    backup_path: Optional[str] = None
    reclaimed_bytes: int = 0
    message: str = ""

    @property
    def action(self) -> DecisionAction:
        return _OUTCOME_ACTIONS[self.outcome]

    @property
    def merged(self) -> bool:
        return self.outcome.is_success


@dataclass
class LinkStats:
    """
    Counters collected while scanning, classifying and consolidating.
    """
    candidates: int = 0
    classes: int = 0
    candidate_classes: int = 0
    comparisons: int = 0
    reclaimed_bytes: int = 0
    catastrophic: int = 0
    total_time: float = 0.0
    actions: Dict[DecisionAction, int] = field(
        default_factory=lambda: {action: 0 for action in DecisionAction})
    _started: float = field(default_factory=time.time, repr=False)

    def record(self, decision: PairDecision) -> None:
        self.actions[decision.action] += 1
        if decision.outcome in (MergeOutcome.LINKED, MergeOutcome.DIFFERENT, MergeOutcome.FAILED):
            self.comparisons += 1
        self.reclaimed_bytes += decision.reclaimed_bytes
        if decision.catastrophic:
            self.catastrophic += 1

    def finish(self) -> None:
        self.total_time = time.time() - self._started

    def count(self, action: DecisionAction) -> int:
        return self.actions.get(action, 0)

    def print_summary(self, dry_run: bool = False) -> str:
        verb = "Would reclaim" if dry_run else "Reclaimed"
        lines = [
            "📊 Link Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"Candidates: {self.candidates}",
            f"Equivalence classes: {self.classes} ({self.candidate_classes} with 2+ files)",
            f"Content comparisons: {self.comparisons}",
        ]
        for action in DecisionAction:
            lines.append(f"{action.value.title()}: {self.count(action)}")
        lines.append(f"{verb}: {ConvertUtils.bytes_to_human(self.reclaimed_bytes)}")
        if self.catastrophic:
            lines.append(f"Backups left behind: {self.catastrophic}")
        return "\n".join(lines)


"""
Run configuration, passed explicitly to every component.
Interface-agnostic: built by the CLI, usable directly from Python.
"""

DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class LinkParams:
    """Options for one link run, validated on creation."""
    paths: Tuple[str, ...] = ()
    candidate_list: Optional[str] = None
    verbose: bool = False
    dry_run: bool = False
    recursive: bool = False
    follow_symlinks: bool = False
    ignore_owner: bool = False
    ignore_group: bool = False
    ignore_permissions: bool = False
    ignore_zero_length: bool = False
    raise_priority: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if self.chunk_size <= 0:
            raise ValueError("Chunk size must be positive")

        # Accept any iterable of paths, store a tuple so the value stays hashable
        object.__setattr__(self, "paths", tuple(str(p) for p in self.paths))

        # A dry run reports every intended action
        if self.dry_run and not self.verbose:
            object.__setattr__(self, "verbose", True)

    @staticmethod
    def from_human_readable(
            paths: Optional[List[str]] = None,
            chunk_size_str: str = "64K",
            **flags
    ) -> "LinkParams":
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        chunk_size = ConvertUtils.human_to_bytes(chunk_size_str)
        return LinkParams(paths=tuple(paths or ()), chunk_size=chunk_size, **flags)


DecisionCallback = Callable[[PairDecision], None]
ProgressCallback = Callable[[str, int, Optional[int]], None]
