#!/usr/bin/env python3
"""
OneLink CLI — Command line interface for replacing duplicate files by hard links.
Identical files are found by exact content comparison; every replacement goes
through a temporary backup name so a failed step never loses a file.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.DEBUG if os.environ.get("DEBUG") else logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from onelink.commands import LinkCommand
from onelink.core.models import DecisionAction, LinkParams, LinkStats, PairDecision
from onelink.core.scanner import CandidateListError
from onelink.utils.convert_utils import ConvertUtils

PROG = "onelink"

# Exit status when some content was left under a backup name
EXIT_BACKUP_LEFT = 2

EPILOG_TEXT = """
Examples:
  Link identical files in the current directory
  %(prog)s

  Show what would be linked in a tree, without touching anything
  %(prog)s -n -r ~/Photos

  Link across users' copies regardless of owner and group
  %(prog)s -r -u -g /srv/shared

  Take candidate paths from a list (one per line)
  find /data -name '*.iso' | %(prog)s -v -f -
"""


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self, prog: str = PROG):
        self.prog = prog
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.catastrophic: int = 0

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog=PROG,
            description="OneLink — replace identical files by hard links to one inode",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "paths",
            nargs="*",
            help="Files and directories to rationalise (default: current directory)"
        )

        # Candidate selection
        parser.add_argument(
            "--recursive", "-r",
            action="store_true",
            help="Descend into subdirectories of directory arguments"
        )
        parser.add_argument(
            "--follow-symlinks", "-s",
            action="store_true",
            dest="follow_symlinks",
            help="Follow symbolic links to files and directories"
        )
        parser.add_argument(
            "--from-file", "-f",
            default=None,
            metavar="LIST",
            dest="candidate_list",
            help="Read candidate paths from LIST, one per line ('-' for stdin)"
        )
        parser.add_argument(
            "--ignore-zero-length", "-z",
            action="store_true",
            dest="ignore_zero_length",
            help="Leave empty files alone"
        )

        # Metadata that must match before contents are compared
        parser.add_argument(
            "--ignore-owner", "-u",
            action="store_true",
            dest="ignore_owner",
            help="Link files even if they belong to different users"
        )
        parser.add_argument(
            "--ignore-group", "-g",
            action="store_true",
            dest="ignore_group",
            help="Link files even if they belong to different groups"
        )
        parser.add_argument(
            "--ignore-permissions", "-p",
            action="store_true",
            dest="ignore_permissions",
            help="Link files even if their permission bits differ"
        )

        # Execution
        parser.add_argument(
            "--dry-run", "-n",
            action="store_true",
            dest="dry_run",
            help="Do not link anything; print what would be linked (implies --verbose)"
        )
        parser.add_argument(
            "--raise-priority",
            action="store_true",
            dest="raise_priority",
            help="Raise scheduling priority while a name is being swapped (needs privileges)"
        )
        parser.add_argument(
            "--chunk-size",
            default="64K",
            type=str,
            metavar="SIZE",
            dest="chunk_size",
            help="Read size used when comparing contents (e.g., 64K, 1M). Default: 64K"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress the summary"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Report every pair decision and show statistics"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.verbose and args.quiet:
            self.error_exit("--verbose and --quiet cannot be used together")

        try:
            chunk_size = ConvertUtils.human_to_bytes(args.chunk_size)
        except ValueError as e:
            self.error_exit(f"Invalid size format: {e}")
        if chunk_size <= 0:
            self.error_exit("Chunk size must be positive")

        if args.candidate_list and args.candidate_list != "-" and not os.path.isfile(args.candidate_list):
            self.error_exit(f"Candidate list not found: {args.candidate_list}")

    def create_params(self, args: argparse.Namespace) -> LinkParams:
        """Create LinkParams from CLI arguments."""
        try:
            return LinkParams.from_human_readable(
                paths=args.paths,
                chunk_size_str=args.chunk_size,
                candidate_list=args.candidate_list,
                verbose=args.verbose,
                dry_run=args.dry_run,
                recursive=args.recursive,
                follow_symlinks=args.follow_symlinks,
                ignore_owner=args.ignore_owner,
                ignore_group=args.ignore_group,
                ignore_permissions=args.ignore_permissions,
                ignore_zero_length=args.ignore_zero_length,
                raise_priority=args.raise_priority,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def report_decision(self, decision: PairDecision) -> None:
        """Print one pair decision as soon as it is made."""
        if decision.catastrophic:
            self.catastrophic += 1
            self.error(
                f"failed to link {decision.other.path} to {decision.kept.path} - "
                f"copy has been left on {decision.backup_path} [{decision.message}]"
            )
            return

        if decision.action is DecisionAction.FAILED:
            self.warning(f"cannot link {decision.other.path} to {decision.kept.path} [{decision.message}]")
            return

        if decision.action is DecisionAction.LINKED:
            if decision.message:
                self.warning(decision.message)
            if decision.dry_run:
                print(f"link {decision.retired.path} to {decision.kept.path}")
            elif self.verbose:
                print(f"linking {decision.retired.path} to {decision.kept.path}")
            return

        if self.verbose:
            label = decision.action.display_name
            reason = "already linked to" if decision.action is DecisionAction.SKIPPED else "differs from"
            if decision.message:
                reason = f"{decision.message}, kept apart from"
            print(f"   [{label}] {decision.other.path} ({reason} {decision.kept.path})")

    def output_summary(self, stats: LinkStats, dry_run: bool) -> None:
        """Print run statistics."""
        if self.quiet:
            return

        linked = stats.count(DecisionAction.LINKED)
        if self.verbose:
            print()
            print(stats.print_summary(dry_run=dry_run))
        elif linked:
            saved = ConvertUtils.bytes_to_human(stats.reclaimed_bytes)
            print(f"Linked {linked} file(s), reclaimed {saved}")

    def warning(self, message: str) -> None:
        """Print a non-fatal problem to stderr; execution continues."""
        print(f"⚠️  {self.prog}: {message}", file=sys.stderr)

    def error(self, message: str) -> None:
        """Print a serious but survivable problem to stderr."""
        print(f"❌ {self.prog}: {message}", file=sys.stderr)

    def error_exit(self, message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ {self.prog}: Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit status."""
        args = self.parse_args(argv)
        self.verbose = args.verbose or args.dry_run
        self.quiet = args.quiet

        self.validate_args(args)
        params = self.create_params(args)

        command = LinkCommand()
        try:
            _, stats = command.execute(params, decision_callback=self.report_decision)
        except CandidateListError as e:
            self.error_exit(str(e))
        except MemoryError:
            self.error_exit("Out of memory")

        self.output_summary(stats, dry_run=params.dry_run)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")

        return EXIT_BACKUP_LEFT if self.catastrophic else 0


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ {PROG}: Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
