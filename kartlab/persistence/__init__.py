"""
Persistence layer for session score tables.
"""

from .score_table import OUTPUT_COLUMNS, read_scores, write_scores

__all__ = ["OUTPUT_COLUMNS", "read_scores", "write_scores"]
