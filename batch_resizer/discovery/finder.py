"""Recursive discovery of source images."""
import os
from typing import Iterable, List, Sequence

from ..utils.errors import NotFoundError
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_EXTENSIONS = (".png", ".jpg", ".jpeg")


def _walk_files(root: str) -> Iterable[str]:
    """Depth-first walk with sorted entries so the order is stable."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            yield os.path.join(dirpath, name)


def find_images(
    src_path: str,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    case_sensitive: bool = True,
) -> List[str]:
    """
    Find image files under a directory tree.

    Files are grouped by extension in the order given, so every ``.png``
    comes before any ``.jpg`` with the defaults. Within one group the
    order follows a sorted depth-first walk.

    Args:
        src_path: Root directory to search.
        extensions: Accepted suffixes, including the leading dot.
        case_sensitive: When False, ``photo.JPG`` matches ``.jpg``.

    Returns:
        List of file paths.

    Raises:
        NotFoundError: If src_path is not an existing directory.
    """
    if not os.path.isdir(src_path):
        raise NotFoundError(f"Source directory not found: {src_path}")

    all_files = list(_walk_files(src_path))
    files = []
    for ext in extensions:
        for path in all_files:
            suffix = os.path.splitext(path)[1]
            if case_sensitive:
                matched = suffix == ext
            else:
                matched = suffix.lower() == ext.lower()
            if matched:
                files.append(path)

    logger.info(f"Found {len(files)} images under {src_path}")
    return files
