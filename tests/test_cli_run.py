from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from textreflow.cli import app
from textreflow.utils.logging import set_level


def test_cli_wraps_file(tmp_path: Path) -> None:
    in_txt = tmp_path / "in.txt"
    in_txt.write_bytes(b"Hello world\nhere I am.\n\nNext paragraph")
    out_txt = tmp_path / "out.txt"

    runner = CliRunner()
    result = runner.invoke(app, ["10", str(in_txt), str(out_txt)])
    assert result.exit_code == 0
    assert out_txt.read_bytes() == b"Hello\nworld here\nI am.\nNext\nparagraph"


def test_cli_stdin_to_stdout() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["10"], input=b"Hello world here I am.")
    assert result.exit_code == 0
    assert result.stdout_bytes == b"Hello\nworld here\nI am."


def test_cli_input_file_to_stdout(tmp_path: Path) -> None:
    in_txt = tmp_path / "in.txt"
    in_txt.write_bytes(b"one\r\ntwo")
    result = CliRunner().invoke(app, ["80", str(in_txt)])
    assert result.exit_code == 0
    assert result.stdout_bytes == b"one two"


def test_cli_fold_and_glue_flags() -> None:
    runner = CliRunner()
    text = b"a   b\nc"
    assert runner.invoke(app, ["80"], input=text).stdout_bytes == b"a   b c"
    assert runner.invoke(app, ["80", "--fold"], input=text).stdout_bytes == b"a b c"
    assert runner.invoke(app, ["80", "--no-glue"], input=text).stdout_bytes == b"a   b\nc"


def test_cli_config_switches(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("reflow:\n  fold_whitespace: true\n  glue_lines: false\n")
    result = CliRunner().invoke(app, ["80", "--config", str(cfg)], input=b"a  b\nc")
    assert result.exit_code == 0
    assert result.stdout_bytes == b"a b\nc"


def test_cli_verbose(tmp_path: Path) -> None:
    in_txt = tmp_path / "in.txt"
    in_txt.write_bytes(b"text")
    out_txt = tmp_path / "out.txt"
    result = CliRunner().invoke(app, ["4", str(in_txt), str(out_txt), "-v"])
    assert result.exit_code == 0
    assert "Wrapped at 4" in result.output
    set_level("WARNING")
    assert out_txt.read_bytes() == b"text"
