"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/consolidator.py
Reduces one equivalence class by pairwise merge attempts.

The head member is swept against every remaining member. Members merged into
the head (or already sharing its inode) leave the class; the others survive
and the next head is picked from them. The loop ends when fewer than two
members remain, at which point no two survivors have identical content.
"""

import dataclasses
import logging
from typing import List, Optional

from onelink.core.interfaces import Consolidator, LinkSwapper
from onelink.core.linker import LinkSwapProtocol
from onelink.core.models import DecisionCallback, EquivalenceClass, LinkParams, PairDecision

logger = logging.getLogger(__name__)


class ConsolidatorImpl(Consolidator):
    """
    Iterative head-versus-tail sweep.
    Worst case is k*(k-1)/2 comparisons for a class of k distinct files.
    """

    def __init__(self, swapper: Optional[LinkSwapper] = None):
        self.swapper = swapper or LinkSwapProtocol()

    def consolidate(
        self,
        eq_class: EquivalenceClass,
        params: LinkParams,
        decision_callback: Optional[DecisionCallback] = None,
    ) -> List[PairDecision]:
        """
        Returns the per-pair decisions in the order they were made.
        decision_callback, if given, sees each decision as soon as it exists.
        """
        decisions: List[PairDecision] = []
        members = list(eq_class.files)

        while len(members) >= 2:
            head, tail = members[0], members[1:]
            survivors = []
            # After the head absorbs a member, only tail names may be retired
            absorbed = False

            for member in tail:
                decision = self.swapper.try_merge(head, member, params, keep_first=absorbed)
                decisions.append(decision)
                if decision_callback:
                    decision_callback(decision)

                if not decision.merged:
                    survivors.append(member)
                    continue
                absorbed = True

                # The head's own name was retired: it now aliases the other inode
                if decision.retired is not None and decision.retired.path == head.path:
                    head = dataclasses.replace(head, inode=decision.kept.inode)

            members = survivors

        logger.debug(f"Class {eq_class.key} settled after {len(decisions)} decisions")
        return decisions
