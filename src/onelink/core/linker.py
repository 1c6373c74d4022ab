"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/linker.py
Link swap protocol: resolves one pair of class members and, when their content
is identical, replaces one name by a hard link to the other's inode.

PROTOCOL
--------
Demoting name `to` into a link to name `from`:
  1. rename `to` -> backup (same directory, so the rename is atomic)
  2. link `from` -> `to`
       on failure: rename backup -> `to`
       if that fails too: content survives only under the backup name
  3. unlink backup (failure only leaves a harmless stray name)

A failure before the link exists leaves both names as they were, so the pair
is retried once in the opposite direction. The stranded-backup case is never
retried. A caller may pin the first name of a pair (`keep_first`); only the
second name is then ever retired, and there is no reverse attempt.

CAVEAT
------
Both names are assumed to be used by this process alone for the duration of
the swap. Nothing is locked.
"""

import logging
from typing import Optional, Tuple

from onelink.core.comparator import ContentComparatorImpl
from onelink.core.interfaces import ContentComparator, LinkSwapper
from onelink.core.models import (
    CompareResult, FileRef, LinkParams, MergeOutcome, PairDecision, SwapStatus)
from onelink.services.file_service import FileService
from onelink.services.priority_service import PriorityService
from onelink.utils.path_utils import backup_path_for

logger = logging.getLogger(__name__)

# Attempts at finding an unused backup name before giving up on a direction
MAX_BACKUP_ATTEMPTS = 100


class LinkSwapProtocol(LinkSwapper):
    """
    Resolves pairs through the state machine

        Start -> AlreadyLinked | Different | DirectionA -> (DirectionB) -> Success | Failure
    """

    def __init__(self, comparator: Optional[ContentComparator] = None):
        self.comparator = comparator

    def try_merge(self, a: FileRef, b: FileRef, params: LinkParams, keep_first: bool = False) -> PairDecision:
        if a.inode == b.inode:
            logger.debug(f"{a.path} and {b.path} already share inode {a.inode}")
            return PairDecision(MergeOutcome.ALREADY_LINKED, kept=a, other=b, dry_run=params.dry_run)

        result = self._comparator(params).compare(a.path, b.path)
        if result is not CompareResult.EQUAL:
            message = "unreadable" if result is CompareResult.UNREADABLE else ""
            return PairDecision(
                MergeOutcome.DIFFERENT, kept=a, other=b, dry_run=params.dry_run, message=message)

        if keep_first:
            keep, retire, retire_links = a, b, self._link_count(b)
        else:
            keep, retire, retire_links = self._choose_direction(a, b)

        if params.dry_run:
            return PairDecision(
                MergeOutcome.LINKED, kept=keep, other=retire, retired=retire, dry_run=True,
                reclaimed_bytes=retire.size if retire_links == 1 else 0,
            )

        status, backup, error = self.demote(keep, retire, params)
        if status is SwapStatus.RECOVERABLE and not keep_first:
            logger.info(f"Retrying {keep.path} / {retire.path} in the other direction: {error}")
            keep, retire = retire, keep
            retire_links = self._link_count(retire)
            status, backup, error = self.demote(keep, retire, params)

        if status is SwapStatus.SUCCESS:
            return PairDecision(
                MergeOutcome.LINKED, kept=keep, other=retire, retired=retire,
                reclaimed_bytes=retire.size if retire_links == 1 else 0,
                message=error or "",
            )

        if status is SwapStatus.CATASTROPHIC:
            return PairDecision(
                MergeOutcome.FAILED, kept=keep, other=retire, catastrophic=True,
                backup_path=backup, message=error or "",
            )

        logger.warning(f"Cannot link {b.path} to {a.path}, both names left as they were: {error}")
        return PairDecision(MergeOutcome.FAILED, kept=a, other=b, message=error or "")

    def demote(self, keep: FileRef, retire: FileRef, params: LinkParams) -> Tuple[SwapStatus, Optional[str], Optional[str]]:
        """
        Replaces the name `retire` by a hard link to `keep`.

        Returns:
            (status, backup path, error text). On SUCCESS the error text carries
            a warning if the backup could not be removed.
        """
        backup = self._unused_backup_path(retire.path)
        if backup is None:
            return SwapStatus.RECOVERABLE, None, f"no free backup name for {retire.path}"

        with PriorityService.raised(params.raise_priority):
            try:
                FileService.rename(retire.path, backup)
            except OSError as e:
                logger.debug(f"Cannot move {retire.path} aside: {e}")
                return SwapStatus.RECOVERABLE, None, f"rename {retire.path}: {e}"

            try:
                FileService.link(keep.path, retire.path)
            except OSError as link_error:
                try:
                    FileService.rename(backup, retire.path)
                except OSError as restore_error:
                    logger.critical(
                        f"Failed to link {retire.path} to {keep.path} and to restore it: "
                        f"content left on {backup} ({restore_error})")
                    return (SwapStatus.CATASTROPHIC, backup,
                            f"link {keep.path} -> {retire.path}: {link_error}; "
                            f"restore {backup}: {restore_error}")
                logger.debug(f"Link failed, {retire.path} restored: {link_error}")
                return SwapStatus.RECOVERABLE, None, f"link {keep.path} -> {retire.path}: {link_error}"

        try:
            FileService.unlink(backup)
        except OSError as e:
            logger.warning(f"Cannot remove temporary file {backup}: {e}")
            return SwapStatus.SUCCESS, backup, f"cannot remove temporary file {backup}: {e}"

        logger.debug(f"Linked {retire.path} to {keep.path}")
        return SwapStatus.SUCCESS, None, None

    def _comparator(self, params: LinkParams) -> ContentComparator:
        return self.comparator or ContentComparatorImpl(params.chunk_size)

    def _choose_direction(self, a: FileRef, b: FileRef) -> Tuple[FileRef, FileRef, Optional[int]]:
        """
        Picks (keep, retire, link count of retire).
        The name with fewer hard links is retired so the inode with more
        references stays in place. Equal or unknown counts retire the
        later-discovered name (higher `order`).
        """
        links_a = self._link_count(a)
        links_b = self._link_count(b)
        if links_a is not None and links_b is not None and links_a != links_b:
            return (b, a, links_a) if links_a < links_b else (a, b, links_b)
        if a.order > b.order:
            return b, a, links_a
        return a, b, links_b

    @staticmethod
    def _link_count(file: FileRef) -> Optional[int]:
        try:
            return FileService.link_count(file.path)
        except OSError as e:
            logger.debug(f"Link count of {file.path} unavailable: {e}")
            return None

    @staticmethod
    def _unused_backup_path(path: str) -> Optional[str]:
        for _ in range(MAX_BACKUP_ATTEMPTS):
            candidate = backup_path_for(path)
            if not FileService.lexists(candidate):
                return candidate
        return None
