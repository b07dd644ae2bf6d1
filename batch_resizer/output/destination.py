"""Destination directory management."""
import os
import uuid
from pathlib import Path
from typing import BinaryIO, Union

from ..utils.errors import WriteError
from ..utils.logger import get_logger

logger = get_logger(__name__)

OUTPUT_SUFFIX = ".jpg"
PART_SUFFIX = ".part"

PathLike = Union[str, os.PathLike]


class DestinationManager:
    """Creates, purges and names files in the output directory."""

    def ensure(self, path: PathLike) -> Path:
        """Create the directory and its parents if absent."""
        path = Path(path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(f"Cannot create destination {path}: {exc}") from exc
        return path

    def clean(self, path: PathLike) -> int:
        """
        Delete every file below ``path``, keeping the directory tree.

        A missing directory is created empty. This is destructive and
        cannot be undone.

        Returns:
            Number of files removed.
        """
        path = Path(path)
        if not path.is_dir():
            self.ensure(path)
            return 0

        removed = 0
        for dirpath, _, filenames in os.walk(path):
            for name in filenames:
                file_path = os.path.join(dirpath, name)
                try:
                    os.remove(file_path)
                except OSError as exc:
                    raise WriteError(f"Cannot delete {file_path}: {exc}") from exc
                removed += 1

        logger.info(f"Cleaned {removed} files from {path}")
        return removed

    @staticmethod
    def output_path(dest_dir: PathLike, base_name: str) -> Path:
        return Path(dest_dir) / f"{base_name}{OUTPUT_SUFFIX}"

    @staticmethod
    def part_path(path: PathLike) -> Path:
        """Unique staging file next to ``path`` for one writer."""
        path = Path(path)
        return path.with_name(f"{path.name}.{uuid.uuid4().hex[:8]}{PART_SUFFIX}")

    def open_output(self, path: PathLike) -> BinaryIO:
        """
        Open a private staging file for the output ``path``.

        The handle's ``name`` is the staging path; ``commit`` moves it onto
        ``path`` once the write has finished. Writers that share an output
        name never touch each other's files.
        """
        part = self.part_path(path)
        try:
            return open(part, "wb")
        except OSError as exc:
            raise WriteError(f"Cannot open {path} for writing: {exc}") from exc

    def commit(self, part: PathLike, path: PathLike) -> Path:
        """Atomically replace ``path`` with a finished staging file."""
        try:
            os.replace(part, path)
        except OSError as exc:
            raise WriteError(f"Cannot move output into place at {path}: {exc}") from exc
        return Path(path)

    def discard(self, part: PathLike) -> None:
        """Remove an unfinished staging file, if it exists."""
        try:
            os.remove(part)
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.warning(f"Could not remove partial output {part}: {exc}")
            return
        logger.warning(f"Removed partial output: {part}")
