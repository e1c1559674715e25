"""
Safe File Operations with Atomic Writes and Backups

Prevents half-written score tables by:
1. Writing to temporary file first
2. Creating backup of original
3. Atomic rename (move) operation
"""

import logging
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_text_write(file_path: Path, text: str, create_backup: bool = False) -> None:
    """Write text to file atomically with optional backup, preserving original on failure."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in same directory keeps the move on one filesystem
    temp_fd, temp_path = tempfile.mkstemp(
        suffix=".tmp", prefix=f".{file_path.name}.", dir=file_path.parent
    )

    try:
        with open(temp_fd, "w", newline="") as f:
            f.write(text)

        if create_backup and file_path.exists():
            backup_path = file_path.with_suffix(file_path.suffix + ".backup")
            shutil.copy2(file_path, backup_path)
            logger.debug(f"Created backup: {backup_path}")

        shutil.move(temp_path, file_path)
        logger.debug(f"Atomically wrote: {file_path}")

    except Exception as e:
        Path(temp_path).unlink(missing_ok=True)
        raise IOError(f"Failed to write {file_path}: {e}") from e

