"""Tests for the coqdep-paths command line."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from coqdep_paths import __version__
from coqdep_paths.main import cli, build_resolver, resolve_name


def touch(*names: str):
    for name in names:
        path = Path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("COQDEP_BOOT", raising=False)
    monkeypatch.delenv("COQDEP_LOG_LEVEL", raising=False)


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:
    """Tests for the cli command."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_json_report(self, runner):
        """Test resolving names from an -R root as JSON."""
        with runner.isolated_filesystem():
            touch("theories/Foo.v", "theories/Sub/Bar.v")

            result = runner.invoke(cli, [
                "--json", "--no-cwd",
                "-R", "theories", "MyLib",
                "MyLib.Foo", "Bar", "Nope",
            ])

            assert result.exit_code == 0
            report = json.loads(result.output)
            assert report["boot"] is False
            assert report["directories"] == 2

            foo, bar, nope = report["results"]
            assert foo["status"] == "exact"
            assert foo["table"] == "source"
            assert foo["files"] == ["theories/Foo"]
            assert bar["status"] == "partial"
            assert "MyLib" in bar["root"]
            assert nope["status"] == "not found"
            assert nope["files"] == []

    def test_from_prefix(self, runner):
        with runner.isolated_filesystem():
            touch("src/Sub/Bar.v")

            result = runner.invoke(cli, [
                "--json", "--no-cwd",
                "-Q", "src", "Lib",
                "--from", "Lib", "Sub.Bar",
            ])

            report = json.loads(result.output)
            assert report["results"][0]["status"] == "exact"
            assert report["results"][0]["from_prefix"] == "Lib"

    def test_boot_flag(self, runner):
        with runner.isolated_filesystem():
            touch("lib/Init/Logic.vo")

            result = runner.invoke(cli, [
                "--json", "--no-cwd", "--boot",
                "-R", "lib", "Coq",
                "Coq.Init.Logic",
            ])

            report = json.loads(result.output)
            assert report["boot"] is True
            assert report["results"][0]["status"] == "not found"
            assert report["results"][0]["in_library"] is True

    def test_boot_from_environment(self, runner, monkeypatch):
        monkeypatch.setenv("COQDEP_BOOT", "yes")
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--json", "--no-cwd", "A"])

            assert json.loads(result.output)["boot"] is True

    def test_current_directory_added_implicitly(self, runner):
        with runner.isolated_filesystem():
            touch("Top.v")

            result = runner.invoke(cli, ["--json", "Top"])

            assert json.loads(result.output)["results"][0]["status"] == "exact"

    def test_strict_fails_on_unresolved_name(self, runner):
        with runner.isolated_filesystem():
            touch("Top.v")

            ok = runner.invoke(cli, ["--strict", "--json", "Top"])
            failed = runner.invoke(cli, ["--strict", "--json", "Top", "Missing"])

            assert ok.exit_code == 0
            assert failed.exit_code == 1

    def test_empty_name_is_a_usage_error(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--no-cwd", ""])

            assert result.exit_code == 2

    def test_table_output(self, runner):
        with runner.isolated_filesystem():
            touch("Top.v")

            result = runner.invoke(cli, ["Top", "Gone"])

            assert result.exit_code == 0
            assert "Top" in result.output
            assert "exact" in result.output
            assert "not found" in result.output

    def test_summary_without_names(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, [])

            assert result.exit_code == 0
            assert "Indexed 1" in result.output


class TestBuildResolver:
    """Tests for build_resolver and resolve_name."""

    def test_cwd_not_added_when_already_mapped(self, tmp_path, monkeypatch):
        (tmp_path / "A.v").write_text("")
        monkeypatch.chdir(tmp_path)

        resolver = build_resolver(r_includes=[(".", "Top")], add_cwd=True)

        assert resolver.find_dir_logpath(".") == ("Top",)
        assert resolve_name(resolver, "Top.A").status == "exact"
        assert resolve_name(resolver, "A").status == "partial"

    def test_other_table_fallback(self, tmp_path, monkeypatch):
        (tmp_path / "README").write_text("")
        monkeypatch.chdir(tmp_path)

        resolver = build_resolver()
        res = resolve_name(resolver, "README")

        assert res.table == "other"
        assert res.status == "exact"

    def test_caml_dirs(self, tmp_path):
        (tmp_path / "ltac.mllib").write_text("")

        resolver = build_resolver(caml_dirs=[str(tmp_path)], add_cwd=False)

        assert resolver.search_mllib_known("ltac") == str(tmp_path)

    def test_coqlib(self, tmp_path):
        (tmp_path / "Init").mkdir()
        (tmp_path / "Init" / "Logic.vo").write_text("")

        resolver = build_resolver(coqlib=str(tmp_path), add_cwd=False)

        assert resolve_name(resolver, "Coq.Init.Logic").in_library
