"""Unit tests for the bbcode2md command-line interface."""

import io
import re
import sys
from unittest.mock import patch

import pytest

from bbcode2md import cleaners
from bbcode2md.cli import create_parser, main
from bbcode2md.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_CLEANER_ORDER,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)


@pytest.fixture
def bbcode_file(tmp_path):
    path = tmp_path / "post.bbcode"
    path.write_text("[b]Hello[/b] [i]world[/i]", encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestCreateParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        args = create_parser().parse_args([])
        assert args.input == "-"
        assert args.out is None
        assert args.disable_cleaner == []
        assert args.alias == []

    def test_alias_parsing(self) -> None:
        args = create_parser().parse_args(["--alias", "py=python", "--alias", " rb = ruby "])
        assert args.alias == [("py", "python"), ("rb", "ruby")]

    def test_bad_alias_exits(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--alias", "python"])
        assert exc_info.value.code == 2

    def test_unknown_cleaner_exits(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--disable-cleaner", "replace_tables"])


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Tests for the main entry point."""

    def test_file_to_stdout(self, bbcode_file, capsys) -> None:
        assert main([str(bbcode_file), "--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "**Hello** *world*"

    def test_file_to_file(self, bbcode_file, tmp_path) -> None:
        out = tmp_path / "post.md"

        assert main([str(bbcode_file), "-o", str(out), "--no-config"]) == EXIT_SUCCESS
        assert out.read_text(encoding="utf-8") == "**Hello** *world*"

    def test_stdin(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr(sys, "stdin", io.StringIO("[code=shell]ls[/code]"))

        assert main(["-", "--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "\n```sh\nls\n```\n"

    def test_empty_input(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr(sys, "stdin", io.StringIO(""))

        assert main(["--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == ""

    def test_alias_option(self, tmp_path, capsys) -> None:
        path = tmp_path / "code.bbcode"
        path.write_text("[code=py]print(1)[/code]", encoding="utf-8")

        assert main([str(path), "--no-config", "--alias", "py=python"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "\n```python\nprint(1)\n```\n"

    def test_disable_cleaner(self, bbcode_file, capsys) -> None:
        assert main([str(bbcode_file), "--no-config", "--disable-cleaner", "replace_bold"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "[b]Hello[/b] *world*"

    def test_list_cleaners(self, capsys) -> None:
        assert main(["--no-config", "--list-cleaners", "--disable-cleaner", "remove_color"]) == EXIT_SUCCESS

        names = capsys.readouterr().out.split()
        assert names == [name for name in DEFAULT_CLEANER_ORDER if name != "remove_color"]

    def test_config_file(self, bbcode_file, tmp_path, capsys) -> None:
        config = tmp_path / "cfg.toml"
        config.write_text('disabled-cleaners = ["replace_italic"]\n')

        assert main([str(bbcode_file), "--config", str(config)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "**Hello** [i]world[/i]"

    def test_config_from_environment(self, bbcode_file, tmp_path, monkeypatch, capsys) -> None:
        config = tmp_path / "cfg.json"
        config.write_text('{"disabled_cleaners": ["replace_bold"]}')
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config))

        assert main([str(bbcode_file)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "[b]Hello[/b] *world*"

    def test_cli_flags_extend_config(self, bbcode_file, tmp_path, capsys) -> None:
        config = tmp_path / "cfg.toml"
        config.write_text('disabled-cleaners = ["replace_italic"]\n')

        args = [str(bbcode_file), "--config", str(config), "--disable-cleaner", "replace_bold"]
        assert main(args) == EXIT_SUCCESS
        assert capsys.readouterr().out == "[b]Hello[/b] [i]world[/i]"

    def test_invalid_config(self, bbcode_file, tmp_path, capsys) -> None:
        config = tmp_path / "cfg.json"
        config.write_text('{"unknown": 1}')

        assert main([str(bbcode_file), "--config", str(config)]) == EXIT_VALIDATION_ERROR
        assert "Unknown option 'unknown'" in capsys.readouterr().err

    def test_scalar_disabled_cleaners_in_config(self, bbcode_file, tmp_path, capsys) -> None:
        config = tmp_path / ".bbcode2md.toml"
        config.write_text("disabled-cleaners = 5\n")

        assert main([str(bbcode_file), "--config", str(config)]) == EXIT_VALIDATION_ERROR
        err = capsys.readouterr().err
        assert err.startswith("Error: ")
        assert "Traceback" not in err

    def test_missing_config(self, bbcode_file, tmp_path, capsys) -> None:
        assert main([str(bbcode_file), "--config", str(tmp_path / "none.toml")]) == EXIT_VALIDATION_ERROR
        assert "does not exist" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys) -> None:
        assert main([str(tmp_path / "missing.bbcode"), "--no-config"]) == EXIT_FILE_ERROR
        assert "Cannot read input" in capsys.readouterr().err

    def test_malformed_markup_reports_file_name(self, tmp_path, monkeypatch, capsys) -> None:
        monkeypatch.setattr(
            cleaners, "IMAGE_PATTERN", re.compile(r"\[img\](?:\"(?P<quoted>never)\"|(?P<bare>never))?\[/img\]", re.I)
        )
        path = tmp_path / "broken.bbcode"
        path.write_text("[img][/img]", encoding="utf-8")

        assert main([str(path), "--no-config"]) == EXIT_PARSING_ERROR
        assert "Text identified by 'broken.bbcode' has malformed BBCode image" in capsys.readouterr().err

    def test_explicit_id(self, tmp_path, monkeypatch, capsys) -> None:
        monkeypatch.setattr(
            cleaners, "IMAGE_PATTERN", re.compile(r"\[img\](?:\"(?P<quoted>never)\"|(?P<bare>never))?\[/img\]", re.I)
        )
        path = tmp_path / "broken.bbcode"
        path.write_text("[img][/img]", encoding="utf-8")

        assert main([str(path), "--no-config", "--id", "post-77"]) == EXIT_PARSING_ERROR
        assert "'post-77'" in capsys.readouterr().err

    def test_rich_output(self, bbcode_file, capsys) -> None:
        pytest.importorskip("rich")

        assert main([str(bbcode_file), "--no-config", "--rich"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Hello" in out
        assert "**" not in out

    def test_log_file(self, bbcode_file, tmp_path, capsys) -> None:
        log_file = tmp_path / "run.log"
        out = tmp_path / "post.md"

        args = [str(bbcode_file), "--no-config", "-o", str(out), "--log-level", "INFO", "--log-file", str(log_file)]
        assert main(args) == EXIT_SUCCESS
        assert f"Wrote {out}" in log_file.read_text(encoding="utf-8")

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "bbcode2md" in capsys.readouterr().out


@pytest.mark.unit
class TestMainModule:
    """Test bbcode2md/__main__.py entry point."""

    def test_main_module_importable(self) -> None:
        import bbcode2md.__main__  # noqa: F401

    def test_main_with_help(self) -> None:
        with patch.object(sys, "argv", ["bbcode2md", "--help"]):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 0
