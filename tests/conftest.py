import pytest
from PIL import Image


def write_image(path, size=(40, 30), fmt="PNG", mode="RGB", color=(200, 80, 40)):
    """Save a solid-color image, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if mode == "RGBA":
        color = color + (128,)
    elif mode == "L":
        color = color[0]
    Image.new(mode, size, color).save(path, format=fmt)
    return path


@pytest.fixture
def make_image():
    return write_image


@pytest.fixture
def source_tree(tmp_path):
    """Small tree of valid images in mixed formats and nesting."""
    src = tmp_path / "src"
    write_image(src / "a.png", (101, 57))
    write_image(src / "b.jpg", (64, 48), fmt="JPEG")
    write_image(src / "nested" / "c.jpeg", (80, 20), fmt="JPEG")
    write_image(src / "nested" / "deeper" / "d.png", (33, 99), mode="RGBA")
    return src


@pytest.fixture
def dest_dir(tmp_path):
    return tmp_path / "out"
