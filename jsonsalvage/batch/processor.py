"""
Batch repair of JSON files across a directory tree.

Each file is an independent unit of work: it is repaired in place, left
alone, or (optionally) deleted when it cannot be repaired. Per-file
failures never abort the walk.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..core.engine import repair_to_text
from ..security.exceptions import RepairError
from ..utils.config import BatchConfig, RepairConfig

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class FileOutcome(Enum):
    """What happened to a single file."""

    ALTERED = "altered"
    UNCHANGED = "unchanged"
    DELETED = "deleted"


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate outcome counts for a walk."""

    altered_count: int = 0
    deleted_count: int = 0
    unchanged_count: int = 0

    @property
    def valid_count(self) -> int:
        """Files holding parseable JSON after the walk."""
        return self.altered_count + self.unchanged_count

    def record(self, outcome: FileOutcome) -> "BatchSummary":
        """Return a new summary with one more outcome counted."""
        if outcome is FileOutcome.ALTERED:
            return BatchSummary(
                self.altered_count + 1, self.deleted_count, self.unchanged_count
            )
        if outcome is FileOutcome.UNCHANGED:
            return BatchSummary(
                self.altered_count, self.deleted_count, self.unchanged_count + 1
            )
        return BatchSummary(
            self.altered_count, self.deleted_count + 1, self.unchanged_count
        )

    def __add__(self, other: "BatchSummary") -> "BatchSummary":
        return BatchSummary(
            self.altered_count + other.altered_count,
            self.deleted_count + other.deleted_count,
            self.unchanged_count + other.unchanged_count,
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "altered_count": self.altered_count,
            "deleted_count": self.deleted_count,
            "valid_count": self.valid_count,
        }


def sanitize_file(
    path: PathLike,
    delete_on_failure: bool = False,
    config: Optional[RepairConfig] = None,
    encoding: str = "utf-8",
) -> FileOutcome:
    """
    Repair a single JSON file in place.

    Args:
        path: File to repair
        delete_on_failure: If True, delete files that cannot be repaired
        config: Optional RepairConfig for the repair pipeline
        encoding: Text encoding used to read and write the file

    Returns:
        ALTERED if the file was rewritten, UNCHANGED if it already held
        valid JSON, DELETED if it could not be read or repaired (whether or
        not it was actually removed)
    """
    file_path = Path(path)
    try:
        # newline="" keeps CR and CRLF exactly as stored
        with open(file_path, encoding=encoding, newline="") as f:
            original = f.read()
        repaired = repair_to_text(original, config)

        if repaired == original:
            return FileOutcome.UNCHANGED

        with open(file_path, "w", encoding=encoding, newline="") as f:
            f.write(repaired)
        logger.info(f"Repaired malformed JSON in {file_path}")
        return FileOutcome.ALTERED
    except (RepairError, OSError, UnicodeDecodeError) as e:
        return _handle_failure(file_path, delete_on_failure, e)


def _handle_failure(
    file_path: Path, delete_on_failure: bool, error: Exception
) -> FileOutcome:
    logger.warning(f"Malformed JSON at path {file_path}: {error}")
    if delete_on_failure:
        try:
            file_path.unlink()
            logger.info(f"Deleted file with unrepairable JSON: {file_path}")
        except OSError as delete_error:
            # Still counted as deleted
            logger.error(
                f"Failed to delete unrepairable file {file_path}: {delete_error}"
            )
    return FileOutcome.DELETED


def sanitize_tree(
    root: PathLike,
    delete_on_failure: bool = False,
    config: Optional[RepairConfig] = None,
    batch_config: Optional[BatchConfig] = None,
    max_workers: Optional[int] = None,
) -> BatchSummary:
    """
    Repair every file under a directory tree.

    The sentinel file name is never read, altered or counted. Symbolic
    links are not followed. Errors while listing a subdirectory are logged
    and that subtree is skipped.

    Args:
        root: Directory to walk
        delete_on_failure: If True, delete files that cannot be repaired
        config: Optional RepairConfig for the repair pipeline
        batch_config: Optional BatchConfig (sentinel name, encoding, workers)
        max_workers: Overrides ``batch_config.max_workers``; values above one
            process files on a thread pool

    Returns:
        BatchSummary with altered, deleted and valid counts

    Raises:
        FileNotFoundError: If root does not exist
        NotADirectoryError: If root is not a directory
    """
    if batch_config is None:
        batch_config = BatchConfig()

    root_path = Path(root)
    if not root_path.exists():
        raise FileNotFoundError(f"Root path does not exist: {root_path}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Root path is not a directory: {root_path}")

    workers = max_workers if max_workers is not None else batch_config.max_workers
    walker = _TreeWalker(delete_on_failure, config, batch_config)

    if workers is None or workers <= 1:
        summary = walker.walk(root_path)
    else:
        files = walker.collect(root_path)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(walker.process_file, files))
        summary = BatchSummary()
        for outcome in outcomes:
            summary = summary.record(outcome)

    logger.info(
        f"Processed {root_path}: {summary.altered_count} altered, "
        f"{summary.deleted_count} deleted, {summary.valid_count} valid"
    )
    return summary


class _TreeWalker:
    """Depth-first traversal sharing one set of settings."""

    def __init__(
        self,
        delete_on_failure: bool,
        config: Optional[RepairConfig],
        batch_config: BatchConfig,
    ):
        self.delete_on_failure = delete_on_failure
        self.config = config
        self.batch_config = batch_config

    def process_file(self, path: Path) -> FileOutcome:
        return sanitize_file(
            path, self.delete_on_failure, self.config, self.batch_config.encoding
        )

    def walk(self, directory: Path) -> BatchSummary:
        """Process a directory; counts are merged as recursion returns."""
        summary = BatchSummary()
        entries = self._list_entries(directory)

        for entry in entries:
            if entry.is_symlink():
                continue
            if entry.is_dir():
                summary = summary + self.walk(entry)
            elif self._is_candidate(entry):
                summary = summary.record(self.process_file(entry))

        return summary

    def collect(self, directory: Path) -> list[Path]:
        """List candidate files in the same order walk() visits them."""
        files: list[Path] = []
        for entry in self._list_entries(directory):
            if entry.is_symlink():
                continue
            if entry.is_dir():
                files.extend(self.collect(entry))
            elif self._is_candidate(entry):
                files.append(entry)
        return files

    def _is_candidate(self, entry: Path) -> bool:
        return entry.is_file() and entry.name != self.batch_config.sentinel_filename

    @staticmethod
    def _list_entries(directory: Path) -> list[Path]:
        try:
            return sorted(directory.iterdir())
        except OSError as e:
            logger.error(f"Error processing folder {directory}: {e}")
            return []
