"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the link engine.
These protocols enforce structural typing using Python's `typing.Protocol` so
implementations can be swapped in tests without inheritance.

Key Components:
---------------
- CandidateScanner: Turns paths and candidate lists into stat'd FileRefs.
- Classifier: Groups candidates into equivalence classes by cheap metadata.
- ContentComparator: Exact byte-for-byte comparison of two files.
- LinkSwapper: Resolves one pair and, if identical, replaces one name by a hard link.
- Consolidator: Reduces an equivalence class until no two survivors are identical.
"""

from typing import Dict, List, Optional, Protocol

from onelink.core.models import (
    CompareResult,
    DecisionCallback,
    EquivalenceClass,
    EquivalenceKey,
    FileRef,
    LinkParams,
    PairDecision,
    ProgressCallback,
)


# ===== Interfaces =====

class CandidateScanner(Protocol):
    """Interface for collecting candidate files."""

    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[FileRef]:
        """
        Collect candidates in discovery order.

        Args:
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            List of regular files that passed the type and symlink policy.
        """
        ...


class Classifier(Protocol):
    """Interface for grouping candidates by size, device and optional ownership/mode."""

    def classify(
        self,
        candidate: FileRef,
        classes: Dict[EquivalenceKey, EquivalenceClass],
        params: LinkParams,
    ) -> Dict[EquivalenceKey, EquivalenceClass]:
        ...

    def group(self, candidates: List[FileRef], params: LinkParams) -> List[EquivalenceClass]:
        ...


class ContentComparator(Protocol):
    """Interface for exact content comparison. No hashing, no caching."""

    def compare(self, path_a: str, path_b: str) -> CompareResult:
        ...


class LinkSwapper(Protocol):
    """Interface for resolving a single pair of class members."""

    def try_merge(self, a: FileRef, b: FileRef, params: LinkParams, keep_first: bool = False) -> PairDecision:
        """
        Resolve `a` against `b`.
        With `keep_first`, only `b` may be retired: `a` keeps its inode whatever the link counts.

        Returns:
            PairDecision whose outcome is ALREADY_LINKED, LINKED, DIFFERENT or FAILED.
        """
        ...


class Consolidator(Protocol):
    """Interface for reducing one equivalence class."""

    def consolidate(
        self,
        eq_class: EquivalenceClass,
        params: LinkParams,
        decision_callback: Optional[DecisionCallback] = None,
    ) -> List[PairDecision]:
        ...
