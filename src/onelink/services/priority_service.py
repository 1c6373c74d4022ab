"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/priority_service.py
Scoped scheduling-priority boost around the rename/link window of a merge.
"""
import logging
import os
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

# Highest priority the kernel accepts for a process
MAX_PRIORITY = -20


class PriorityService:
    """
    Raises process priority while a name is briefly missing from its directory.
    This narrows the window in which another process could observe the swap;
    it does not close it.
    """

    BOOST = 10

    @staticmethod
    @contextmanager
    def raised(enabled: bool = True, boost: int = BOOST) -> Iterator[bool]:
        """
        Context manager yielding True if the priority was actually raised.
        The previous priority is restored on every exit path.
        """
        previous = None
        if enabled:
            try:
                previous = os.getpriority(os.PRIO_PROCESS, 0)
                os.setpriority(os.PRIO_PROCESS, 0, max(MAX_PRIORITY, previous - boost))
            except (OSError, AttributeError) as e:
                # Unprivileged processes may not raise priority; carry on without it
                logger.debug(f"Could not raise scheduling priority: {e}")
                previous = None

        try:
            yield previous is not None
        finally:
            if previous is not None:
                try:
                    os.setpriority(os.PRIO_PROCESS, 0, previous)
                except OSError as e:
                    logger.warning(f"Could not restore scheduling priority {previous}: {e}")
