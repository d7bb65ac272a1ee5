import os

import pytest

from layerstate.whiteouts import files_with_links, remove_obsolete_whiteouts

LINK = "baz/link"


@pytest.fixture
def sample_dir(tmp_path):
    files = {
        "foo": "baz1",
        "bar/bat": "baz2",
        "kaniko/file": "file",
        "baz/file": "testfile",
    }
    for name, content in files.items():
        target = tmp_path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return tmp_path


@pytest.mark.parametrize(
    "path, link_target, expected",
    [
        (LINK, "file", [LINK, "baz/file"]),
        (LINK, "does-not-exists", [LINK]),
        ("kaniko/file", "file", ["kaniko/file"]),
    ],
)
def test_files_with_links(sample_dir, path, link_target, expected):
    os.symlink(link_target, sample_dir / LINK)
    actual = files_with_links(str(sample_dir / path))
    assert sorted(actual) == sorted(str(sample_dir / p) for p in expected)


def test_files_with_links_absolute_target(sample_dir):
    target = str(sample_dir / "foo")
    os.symlink(target, sample_dir / LINK)
    assert files_with_links(str(sample_dir / LINK)) == [str(sample_dir / LINK), target]


def test_files_with_links_missing_path(sample_dir):
    with pytest.raises(FileNotFoundError):
        files_with_links(str(sample_dir / "nope"))


def test_remove_obsolete_whiteouts_drops_children_of_deleted_dirs():
    deleted = {"/t/bar", "/t/bar/bat", "/t/kaniko/file"}
    assert remove_obsolete_whiteouts(deleted) == ["/t/bar", "/t/kaniko/file"]


def test_remove_obsolete_whiteouts_relative_paths():
    assert remove_obsolete_whiteouts({"a", "a/b", "c"}) == ["a", "c"]


def test_remove_obsolete_whiteouts_is_sorted():
    deleted = ["/x/qux", "/x/foo", "/x/corge", "/x/bar/bat", "/x/bar/qux"]
    assert remove_obsolete_whiteouts(deleted) == sorted(deleted)


def test_remove_obsolete_whiteouts_empty():
    assert remove_obsolete_whiteouts(set()) == []