"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/classifier.py
Groups candidate files into equivalence classes by cheap metadata.

Files of different size, on different devices or (unless ignored) with a
different owner, group or permission bits can never be merged, so they are
never compared byte-for-byte.
"""

import logging
from typing import Dict, List

from onelink.core.interfaces import Classifier
from onelink.core.models import EquivalenceClass, EquivalenceKey, FileRef, LinkParams

logger = logging.getLogger(__name__)


class ClassifierImpl(Classifier):
    """
    Key-indexed classifier.

    A candidate joins the class whose key matches exactly, or opens a new one.
    Keys of existing classes are pairwise distinct, so looking the key up in a
    dict gives the same partition as scanning the classes first-fit.
    """

    def classify(
        self,
        candidate: FileRef,
        classes: Dict[EquivalenceKey, EquivalenceClass],
        params: LinkParams,
    ) -> Dict[EquivalenceKey, EquivalenceClass]:
        """Adds the candidate to `classes` in place and returns the mapping."""
        if params.ignore_zero_length and candidate.size == 0:
            logger.debug(f"Skipping zero-length file: {candidate.path}")
            return classes

        key = EquivalenceKey.for_file(candidate, params)
        eq_class = classes.get(key)
        if eq_class is None:
            eq_class = EquivalenceClass(key=key)
            classes[key] = eq_class
        eq_class.add_file(candidate)
        return classes

    def group(self, candidates: List[FileRef], params: LinkParams) -> List[EquivalenceClass]:
        """
        Classifies every candidate.
        Classes come back in order of first appearance, members in discovery order.
        """
        classes: Dict[EquivalenceKey, EquivalenceClass] = {}
        for candidate in candidates:
            self.classify(candidate, classes, params)

        logger.debug(f"{len(candidates)} candidates in {len(classes)} equivalence classes")
        return list(classes.values())
