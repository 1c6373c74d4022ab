"""
Unified command orchestrator for a link run.
This is the single source of truth for the workflow; the CLI only formats its results.
"""
import logging
from typing import List, Optional, Tuple

from onelink.core.classifier import ClassifierImpl
from onelink.core.comparator import ContentComparatorImpl
from onelink.core.consolidator import ConsolidatorImpl
from onelink.core.linker import LinkSwapProtocol
from onelink.core.models import (
    DecisionCallback, EquivalenceClass, FileRef, LinkParams, LinkStats, PairDecision, ProgressCallback)
from onelink.core.scanner import CandidateScannerImpl

logger = logging.getLogger(__name__)


class LinkCommand:
    """
    Orchestrates the entire link workflow:
    1. Collect candidates from paths and the optional candidate list
    2. Group them into equivalence classes
    3. Consolidate each class, reporting every pair decision as it is made

    Usage:
        params = LinkParams(paths=("photos",), recursive=True, dry_run=True)
        decisions, stats = LinkCommand().execute(params, decision_callback=print)
    """

    def __init__(self):
        self._files: List[FileRef] = []
        self._classes: List[EquivalenceClass] = []

    def execute(
            self,
            params: LinkParams,
            decision_callback: Optional[DecisionCallback] = None,
            progress_callback: Optional[ProgressCallback] = None,
    ) -> Tuple[List[PairDecision], LinkStats]:
        """
        Execute a link run with given parameters.

        Args:
            params: Validated run configuration
            decision_callback: (decision: PairDecision) -> None, called in report order
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (ordered pair decisions, statistics)

        Raises:
            CandidateListError: If the candidate list is malformed (nothing has been linked yet)
        """
        stats = LinkStats()

        # Step 1: collect every candidate before touching anything
        scanner = CandidateScannerImpl(params)
        self._files = scanner.scan(progress_callback=progress_callback)
        stats.candidates = len(self._files)

        # Step 2: classify by cheap metadata
        self._classes = ClassifierImpl().group(self._files, params)
        stats.classes = len(self._classes)
        candidate_classes = [c for c in self._classes if c.is_candidate()]
        stats.candidate_classes = len(candidate_classes)

        # Step 3: consolidate, one class and one pair at a time
        consolidator = ConsolidatorImpl(LinkSwapProtocol(ContentComparatorImpl(params.chunk_size)))

        def on_decision(decision: PairDecision) -> None:
            stats.record(decision)
            if decision_callback:
                decision_callback(decision)

        decisions: List[PairDecision] = []
        for index, eq_class in enumerate(candidate_classes, 1):
            decisions.extend(consolidator.consolidate(eq_class, params, decision_callback=on_decision))
            if progress_callback:
                progress_callback("linking", index, len(candidate_classes))

        stats.finish()
        logger.debug(f"Run finished: {len(decisions)} decisions over {stats.candidate_classes} classes")
        return decisions, stats

    def get_files(self) -> List[FileRef]:
        """Get scanned candidates after execution."""
        return self._files.copy()

    def get_classes(self) -> List[EquivalenceClass]:
        """Get equivalence classes after execution."""
        return self._classes.copy()
