"""
Batch repair of JSON files across a directory tree.
"""

from .processor import BatchSummary, FileOutcome, sanitize_file, sanitize_tree

__all__ = ["BatchSummary", "FileOutcome", "sanitize_file", "sanitize_tree"]
