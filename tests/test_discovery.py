import os

import pytest

from batch_resizer.discovery import find_images
from batch_resizer.utils.errors import NotFoundError


def _names(paths):
    return [os.path.basename(p) for p in paths]


def test_matches_extensions_case_sensitively(tmp_path):
    for name in ("a.png", "b.txt", "c.JPEG", "d.jpeg"):
        (tmp_path / name).write_bytes(b"x")

    assert _names(find_images(str(tmp_path))) == ["a.png", "d.jpeg"]


def test_case_insensitive_matching(tmp_path):
    for name in ("a.png", "b.txt", "c.JPEG", "d.jpeg"):
        (tmp_path / name).write_bytes(b"x")

    found = find_images(str(tmp_path), case_sensitive=False)
    assert sorted(_names(found)) == ["a.png", "c.JPEG", "d.jpeg"]


def test_searches_recursively_grouped_by_extension(source_tree):
    found = find_images(str(source_tree))

    # every png, then every jpg, then every jpeg
    assert _names(found) == ["a.png", "d.png", "b.jpg", "c.jpeg"]
    assert all(p.startswith(str(source_tree)) for p in found)


def test_order_is_deterministic(source_tree):
    assert find_images(str(source_tree)) == find_images(str(source_tree))


def test_custom_extensions(source_tree):
    assert _names(find_images(str(source_tree), extensions=(".jpeg",))) == ["c.jpeg"]


def test_empty_directory(tmp_path):
    assert find_images(str(tmp_path)) == []


def test_missing_root_raises(tmp_path):
    with pytest.raises(NotFoundError):
        find_images(str(tmp_path / "missing"))


def test_not_found_is_a_file_not_found_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        find_images(str(tmp_path / "missing"))
