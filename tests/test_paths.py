"""Tests for physical path normalisation."""

import os

import pytest

from coqdep_paths.core.paths import (
    working_directory,
    canonicalize,
    files_equivalent,
    same_root_relative_path,
)


class TestCanonicalize:
    """Tests for canonicalize and working_directory."""

    def test_relative_directory_becomes_absolute(self, tmp_path, monkeypatch):
        """Test that a relative directory is resolved against the cwd."""
        (tmp_path / "sub").mkdir()
        monkeypatch.chdir(tmp_path)

        assert canonicalize("sub") == os.path.realpath(tmp_path / "sub")
        assert canonicalize(".") == os.path.realpath(tmp_path)

    def test_working_directory_is_restored(self, tmp_path, monkeypatch):
        """Test that canonicalize leaves the cwd untouched."""
        (tmp_path / "sub").mkdir()
        monkeypatch.chdir(tmp_path)
        before = os.getcwd()

        canonicalize("sub")

        assert os.getcwd() == before

    def test_missing_directory_raises_and_restores(self, tmp_path, monkeypatch):
        """Test that failing to enter a directory keeps the cwd."""
        monkeypatch.chdir(tmp_path)
        before = os.getcwd()

        with pytest.raises(OSError):
            canonicalize("does-not-exist")

        assert os.getcwd() == before

    def test_restored_after_error_in_body(self, tmp_path, monkeypatch):
        """Test that an exception inside the block still restores the cwd."""
        (tmp_path / "sub").mkdir()
        monkeypatch.chdir(tmp_path)
        before = os.getcwd()

        with pytest.raises(RuntimeError):
            with working_directory("sub") as inside:
                assert inside == os.path.realpath(tmp_path / "sub")
                raise RuntimeError("boom")

        assert os.getcwd() == before

    def test_symlinks_are_resolved(self, tmp_path):
        """Test that a symlinked directory canonicalises to its target."""
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        os.symlink(target, link)

        assert canonicalize(str(link)) == canonicalize(str(target))


class TestFilesEquivalent:
    """Tests for files_equivalent."""

    def test_implicit_and_dotted_spellings(self, tmp_path, monkeypatch):
        """Test that x.v and ./x.v are the same file."""
        monkeypatch.chdir(tmp_path)

        assert files_equivalent("x.v", "./x.v")
        assert files_equivalent("x.v", str(tmp_path / "x.v"))

    def test_different_files(self, tmp_path, monkeypatch):
        """Test that distinct names are not equivalent."""
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        monkeypatch.chdir(tmp_path)

        assert not files_equivalent("a/x.v", "a/y.v")
        assert not files_equivalent("a/x.v", "b/x.v")

    def test_directory_that_cannot_be_entered(self, tmp_path, monkeypatch):
        """Test that a missing directory compares by its absolute spelling."""
        monkeypatch.chdir(tmp_path)

        assert files_equivalent("virtual/A", "virtual/A")
        assert files_equivalent("virtual/A", os.path.join(os.getcwd(), "virtual", "A"))
        assert not files_equivalent("virtual/A", "virtual/B")

    def test_parent_segments(self, tmp_path, monkeypatch):
        """Test that '..' segments are normalised through the directory."""
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        monkeypatch.chdir(tmp_path / "a")

        assert files_equivalent("../b/x.v", str(tmp_path / "b" / "x.v"))


class TestSameRootRelativePath:
    """Tests for the syntactic path comparison."""

    def test_absent_path_is_current_directory(self):
        assert same_root_relative_path(None, None)
        assert same_root_relative_path(None, ".")

    def test_implicit_relative_form(self):
        """Test that foo/bar and ./foo/bar compare equal."""
        assert same_root_relative_path("foo/bar", "./foo/bar")
        assert same_root_relative_path("./foo", "foo")

    def test_different_paths(self):
        assert not same_root_relative_path("foo", "bar")
        assert not same_root_relative_path("/a", "/b")
        assert not same_root_relative_path(None, "foo")

    def test_no_filesystem_normalisation(self):
        """Test that only the syntax is compared."""
        assert same_root_relative_path("/a", "/a")
        assert not same_root_relative_path("a/../b", "b")
