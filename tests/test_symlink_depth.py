import pytest

from sockdrills import symlink_depth


def test_depth_is_positive_and_cleans_up(tmp_path):
    depth = symlink_depth.measure_symlink_depth(tmp_path)
    assert depth > 0
    assert list(tmp_path.iterdir()) == []


def test_depth_is_stable(tmp_path):
    first = symlink_depth.measure_symlink_depth(tmp_path)
    second = symlink_depth.measure_symlink_depth(tmp_path)
    assert first == second


def test_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        symlink_depth.measure_symlink_depth(tmp_path / "missing")


def test_main_reports_depth(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    expected = symlink_depth.measure_symlink_depth(tmp_path)
    assert symlink_depth.main([]) == 0
    out = capsys.readouterr().out
    assert "Reached max symlink recursion depth." in out
    assert out.strip().endswith(f"Symlink recursion depth: {expected}")
    assert list(tmp_path.iterdir()) == []


def test_main_rejects_arguments():
    with pytest.raises(SystemExit) as excinfo:
        symlink_depth.main(["unexpected"])
    assert excinfo.value.code == 2