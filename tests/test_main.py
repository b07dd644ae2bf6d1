import pytest
from PIL import Image

from batch_resizer.main import main


def test_resizes_tree(source_tree, dest_dir):
    code = main([str(source_tree), str(dest_dir), "--scale", "0.5", "--mode", "sequential"])

    assert code == 0
    with Image.open(dest_dir / "a.jpg") as img:
        assert img.size == (50, 28)


def test_concurrent_with_workers_and_backend(source_tree, dest_dir):
    code = main([
        str(source_tree), str(dest_dir), "--scale", "0.25",
        "--mode", "concurrent", "--workers", "2", "--backend", "opencv",
    ])

    assert code == 0
    assert len(list(dest_dir.iterdir())) == 4


def test_clean_flag_purges_destination(source_tree, dest_dir):
    dest_dir.mkdir()
    (dest_dir / "leftover.jpg").write_bytes(b"old")

    assert main([str(source_tree), str(dest_dir), "--scale", "0.5", "--clean"]) == 0
    assert not (dest_dir / "leftover.jpg").exists()


def test_list_prints_images(source_tree, dest_dir, capsys):
    assert main([str(source_tree), str(dest_dir), "--list"]) == 0

    printed = capsys.readouterr().out
    assert "a.png" in printed
    assert "c.jpeg" in printed
    assert not dest_dir.exists()


def test_missing_source_exits_with_error(tmp_path, dest_dir):
    assert main([str(tmp_path / "missing"), str(dest_dir), "--scale", "0.5"]) == 1


def test_corrupt_image_exits_with_error(tmp_path, dest_dir):
    src = tmp_path / "src"
    src.mkdir()
    (src / "bad.png").write_bytes(b"nope")

    assert main([str(src), str(dest_dir), "--scale", "0.5"]) == 1


def test_invalid_scale_exits_with_error(source_tree, dest_dir):
    assert main([str(source_tree), str(dest_dir), "--scale", "-1"]) == 1


def test_scale_is_required(source_tree, dest_dir):
    with pytest.raises(SystemExit) as excinfo:
        main([str(source_tree), str(dest_dir)])
    assert excinfo.value.code == 2
