"""Tests for the hbs command line."""

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from hbs_cli import __version__
from hbs_cli.cli.app import app

runner = CliRunner()

YEAR_HELPER = '''
def register(registry):
    registry.register_helper("year", lambda this: "2024")
'''


class TestCLIShortCircuits:
    def test_version(self, workdir: Path) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_short_version(self, workdir: Path) -> None:
        result = runner.invoke(app, ["-v", "page.hbs"])

        assert result.exit_code == 0
        assert __version__ in result.output
        assert not (workdir / "page.html").exists()

    @pytest.mark.parametrize("args", [[], ["--help"], ["-h", "page.hbs"]])
    def test_usage(self, workdir: Path, args: list[str]) -> None:
        result = runner.invoke(app, args)

        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "--partial" in result.output


class TestCLIRender:
    def test_renders_templates_to_output_dir(self, workdir: Path, write_file) -> None:
        write_file(workdir / "a.hbs", "A {{title}}")
        write_file(workdir / "b.hbs", "B {{title}}")

        result = runner.invoke(
            app, ["--data", '{"title": "T"}', "--output", "out", "a.hbs", "b.hbs"]
        )

        assert result.exit_code == 0, result.output
        assert (workdir / "out" / "a.html").read_text() == "A T"
        assert (workdir / "out" / "b.html").read_text() == "B T"

    def test_defaults_to_cwd(self, workdir: Path, write_file) -> None:
        write_file(workdir / "src" / "index.hbs", "hi")

        result = runner.invoke(app, ["src/*.hbs"])

        assert result.exit_code == 0, result.output
        assert (workdir / "index.html").read_text() == "hi"

    def test_extension_option(self, workdir: Path, write_file) -> None:
        write_file(workdir / "notes.hbs", "n")

        result = runner.invoke(app, ["-e", "md", "-o", "out", "notes.hbs"])

        assert result.exit_code == 0, result.output
        assert (workdir / "out" / "notes.md").read_text() == "n"

    def test_extension_from_environment(
        self, workdir: Path, write_file, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HBS_EXTENSION", "txt")
        write_file(workdir / "notes.hbs", "n")

        result = runner.invoke(app, ["notes.hbs"])

        assert result.exit_code == 0, result.output
        assert (workdir / "notes.txt").exists()

    def test_invalid_extension(self, workdir: Path, write_file) -> None:
        write_file(workdir / "notes.hbs", "n")

        result = runner.invoke(app, ["-e", "a/b", "notes.hbs"])

        assert result.exit_code == 2

    def test_stdout(self, workdir: Path, write_file) -> None:
        write_file(workdir / "a.hbs", "first:{{v}}")
        write_file(workdir / "b.hbs", "second:{{v}}")

        result = runner.invoke(app, ["-s", "-D", '{"v": 1}', "a.hbs", "b.hbs"])

        assert result.exit_code == 0, result.output
        assert "first:1" in result.output
        assert "second:1" in result.output
        assert sorted(p.name for p in workdir.iterdir()) == ["a.hbs", "b.hbs"]

    def test_stdin_overrides_data(self, workdir: Path, write_file) -> None:
        write_file(workdir / "page.hbs", "[{{title}}|{{extra}}]")

        result = runner.invoke(
            app,
            ["--stdin", "--data", '{"title": "data", "extra": "x"}', "--stdout", "page.hbs"],
            input=json.dumps({"title": "stdin"}),
        )

        assert result.exit_code == 0, result.output
        assert "[stdin|]" in result.output

    def test_stdin_not_json(self, workdir: Path, write_file) -> None:
        write_file(workdir / "page.hbs", "x")

        result = runner.invoke(app, ["-i", "page.hbs"], input="nope")

        assert result.exit_code == 1
        assert not (workdir / "page.html").exists()

    def test_data_files_merge(self, workdir: Path, write_file) -> None:
        write_file(workdir / "data" / "site.json", '{"site": {"name": "Docs"}}')
        write_file(workdir / "data" / "page.json", '{"site": {"lang": "en"}}')
        write_file(workdir / "page.hbs", "{{site.name}}/{{site.lang}}")

        result = runner.invoke(app, ["-D", "data/site.json", "-D", "data/page.json", "page.hbs"])

        assert result.exit_code == 0, result.output
        assert (workdir / "page.html").read_text() == "Docs/en"

    def test_malformed_data_file(self, workdir: Path, write_file) -> None:
        write_file(workdir / "bad.json", "{oops")
        write_file(workdir / "page.hbs", "x")

        result = runner.invoke(app, ["--data", "bad.json", "page.hbs"])

        assert result.exit_code == 1
        assert not (workdir / "page.html").exists()

    def test_partials(self, workdir: Path, write_file) -> None:
        write_file(workdir / "partials" / "nav.hbs", "<nav></nav>")
        write_file(workdir / "index.hbs", "{{> nav}}")

        result = runner.invoke(app, ["-P", "partials/*.hbs", "-o", "site", "--", "index.hbs"])

        assert result.exit_code == 0, result.output
        assert (workdir / "site" / "index.html").read_text() == "<nav></nav>"

    def test_helpers(self, workdir: Path, write_file) -> None:
        write_file(workdir / "helpers" / "dates.py", YEAR_HELPER)
        write_file(workdir / "footer.hbs", "(c) {{year}}")

        result = runner.invoke(app, ["-H", "helpers/*.py", "footer.hbs"])

        assert result.exit_code == 0, result.output
        assert (workdir / "footer.html").read_text() == "(c) 2024"

    def test_helper_without_register(
        self, workdir: Path, write_file, caplog: pytest.LogCaptureFixture
    ) -> None:
        write_file(workdir / "plain.py", "X = 1\n")
        write_file(workdir / "page.hbs", "ok")

        with caplog.at_level(logging.WARNING):
            result = runner.invoke(app, ["--helper", "plain.py", "page.hbs"])

        assert result.exit_code == 0, result.output
        assert (workdir / "page.html").read_text() == "ok"
        assert "plain.py" in caplog.text

    def test_broken_template(self, workdir: Path, write_file) -> None:
        write_file(workdir / "page.hbs", "{{unclosed")

        result = runner.invoke(app, ["page.hbs"])

        assert result.exit_code == 1

    def test_file_mode(self, workdir: Path, write_file) -> None:
        write_file(workdir / "page.hbs", "x")

        result = runner.invoke(app, ["--mode", "0600", "page.hbs"])

        assert result.exit_code == 0, result.output
        assert (workdir / "page.html").stat().st_mode & 0o777 == 0o600

    def test_no_matching_templates(self, workdir: Path) -> None:
        result = runner.invoke(app, ["*.hbs"])

        assert result.exit_code == 0
        assert list(workdir.iterdir()) == []

    def test_unclosed_block_writes_nothing(self, workdir: Path, write_file) -> None:
        write_file(workdir / "page.hbs", "{{#if ok}}text")

        result = runner.invoke(app, ["-o", "out", "page.hbs"])

        assert result.exit_code == 1
        assert not (workdir / "out" / "page.html").exists()

    def test_stray_block_close(self, workdir: Path, write_file) -> None:
        write_file(workdir / "page.hbs", "{{/if}}")

        result = runner.invoke(app, ["page.hbs"])

        assert result.exit_code == 1

    def test_no_matching_templates_creates_no_output_dir(self, workdir: Path) -> None:
        result = runner.invoke(app, ["-o", "out", "*.hbs"])

        assert result.exit_code == 0
        assert not (workdir / "out").exists()

    def test_directory_as_data_matches_nothing(self, workdir: Path, write_file) -> None:
        write_file(workdir / "data" / "site.json", '{"title": "T"}')
        write_file(workdir / "page.hbs", "[{{title}}]")

        result = runner.invoke(app, ["-D", "data", "page.hbs"])

        assert result.exit_code == 0, result.output
        assert (workdir / "page.html").read_text() == "[]"

    def test_directory_as_partial_matches_nothing(self, workdir: Path, write_file) -> None:
        write_file(workdir / "partials" / "nav.hbs", "<nav></nav>")
        write_file(workdir / "page.hbs", "plain")

        result = runner.invoke(app, ["-P", "partials", "page.hbs"])

        assert result.exit_code == 0, result.output
        assert (workdir / "page.html").read_text() == "plain"

    def test_invalid_file_mode_setting(
        self, workdir: Path, write_file, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HBS_FILE_MODE", "rw-r--r--")
        write_file(workdir / "page.hbs", "x")

        result = runner.invoke(app, ["page.hbs"])

        assert result.exit_code == 1
        assert "Invalid octal mode" in result.output
        assert not (workdir / "page.html").exists()
