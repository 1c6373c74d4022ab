"""
Core link engine: scanner, classifier, comparator, link swap protocol and consolidator.

This package contains the safety-critical foundation of onelink:
- CandidateScannerImpl: expands paths and candidate lists into stat'd files
- ClassifierImpl: groups candidates by size, device and optional owner/group/mode
- ContentComparatorImpl: exact chunked byte-for-byte comparison
- LinkSwapProtocol: replaces a duplicate name by a hard link, with backup rollback
- ConsolidatorImpl: sweeps each class until no two survivors are identical
- Models: FileRef, EquivalenceClass, PairDecision and configuration objects

All components are pure Python and run strictly sequentially.
"""

from .scanner import CandidateScannerImpl, CandidateListError, read_candidate_list
from .classifier import ClassifierImpl
from .comparator import ContentComparatorImpl
from .linker import LinkSwapProtocol
from .consolidator import ConsolidatorImpl
from .models import (
    FileRef, EquivalenceKey, EquivalenceClass, MergeOutcome, CompareResult,
    DecisionAction, PairDecision, LinkParams, LinkStats, SwapStatus, EntryKind)

__all__ = [
    "CandidateScannerImpl",
    "CandidateListError",
    "read_candidate_list",
    "ClassifierImpl",
    "ContentComparatorImpl",
    "LinkSwapProtocol",
    "ConsolidatorImpl",
    "FileRef",
    "EquivalenceKey",
    "EquivalenceClass",
    "MergeOutcome",
    "CompareResult",
    "DecisionAction",
    "PairDecision",
    "LinkParams",
    "LinkStats",
    "SwapStatus",
    "EntryKind",
]
