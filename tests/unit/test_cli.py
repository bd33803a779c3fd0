"""Tests for CLI commands."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from pathlib import Path

import pytest
from typer.testing import CliRunner

from novarc._version import get_version
from novarc.cli import app
from novarc.cli.repl import History, execute_line, run_repl
from novarc.cli.utils import format_number


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (3.0, "3"),
            (2.5, "2.5"),
            (-0.0, "-0"),
            (1e20, "100000000000000000000"),
            (1e-07, "0.0000001"),
            (1 / 3, "0.3333333333333333"),
            (float("inf"), "inf"),
            (float("-inf"), "-inf"),
            (float("nan"), "NaN"),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        assert format_number(value) == expected


class TestEvalCommand:
    def test_prints_result(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "let x = 5; fn f y = x+y; f(1)"])
        assert result.exit_code == 0
        assert result.output.strip() == "6"

    def test_show_ast(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "--show-ast", "1 + 2 * 3"])
        assert result.exit_code == 0
        assert "AST: (1 + (2 * 3))" in result.output
        assert result.output.strip().endswith("7")

    def test_show_ast_from_environment(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "2"], env={"NOVARC_SHOW_AST": "1"})
        assert "AST: 2" in result.output

    def test_syntax_error_exit_code(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "1 + (2"])
        assert result.exit_code == 1
        assert "Unclosed delimiter" in result.output

    def test_eval_error_exit_code(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "x"])
        assert result.exit_code == 1
        assert "Evaluation error: Cannot find variable `x` in scope" in result.output

    def test_max_depth_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "--max-depth", "3", "fn f n = f(n); f(0)"])
        assert result.exit_code == 1
        assert "Recursion limit of 3 exceeded" in result.output


    def test_deep_recursion_is_an_eval_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "fn f n = 1+(1+(1+(1+(1+(1+f(n)))))); f(0)"])
        assert result.exit_code == 1
        assert "Evaluation error: Recursion limit of 128 exceeded" in result.output
        assert not isinstance(result.exception, RecursionError)

    def test_deep_nesting_is_a_syntax_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "(" * 1000 + "1" + ")" * 1000])
        assert result.exit_code == 1
        assert "Expression nested too deeply" in result.output
        assert not isinstance(result.exception, RecursionError)

class TestParseCommand:
    def test_prints_ast(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["parse", "let a = 1; f(a, 2,)"])
        assert result.exit_code == 0
        assert result.output.strip() == "let a = 1; f(a, 2)"

    def test_reports_errors(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["parse", "1 2"])
        assert result.exit_code == 1
        assert "expected end of input" in result.output


class TestReplCommand:
    def test_banner_and_results(self, cli_runner: CliRunner, history_file: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["repl", "--history", str(history_file)],
            input="1 + 2\nlet x = 1; x\n",
        )
        assert result.exit_code == 0
        assert "Novarc" in result.output
        assert "ready." in result.output
        assert "3" in result.output

    def test_bindings_do_not_persist_between_lines(
        self, cli_runner: CliRunner, history_file: Path
    ) -> None:
        result = cli_runner.invoke(
            app,
            ["repl", "--history", str(history_file)],
            input="let x = 1; x\nx\n",
        )
        assert result.exit_code == 0
        assert "Cannot find variable `x` in scope" in result.output

    def test_errors_do_not_end_session(self, cli_runner: CliRunner, history_file: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["repl", "--history", str(history_file)],
            input="1 +\n40 + 2\n",
        )
        assert result.exit_code == 0
        assert "expected expression" in result.output
        assert "42" in result.output


class TestRunRepl:
    def test_reads_until_eof_and_saves_history(self, history_file: Path) -> None:
        lines = iter(["1 + 1", "   ", "fn sq n = n * n; sq(3)"])
        prompts: list[str] = []

        def read_line(prompt: str) -> str:
            prompts.append(prompt)
            try:
                return next(lines)
            except StopIteration:
                raise EOFError from None

        history = History(history_file)
        run_repl(history, read_line=read_line)

        assert prompts == [">> "] * 4
        if history._readline is not None:
            assert history_file.exists()

    def test_keyboard_interrupt_ends_loop(self, history_file: Path) -> None:
        def read_line(prompt: str) -> str:
            raise KeyboardInterrupt

        run_repl(History(history_file), read_line=read_line)

    def test_interrupted_evaluation_continues_loop(
        self, history_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        lines = iter(["slow()", "1 + 1"])
        executed: list[str] = []

        def read_line(prompt: str) -> str:
            try:
                return next(lines)
            except StopIteration:
                raise EOFError from None

        def fake_execute_line(line: str, **kwargs) -> bool:
            executed.append(line)
            if line == "slow()":
                raise KeyboardInterrupt
            return True

        monkeypatch.setattr("novarc.cli.repl.execute_line", fake_execute_line)
        run_repl(History(history_file), read_line=read_line)

        assert executed == ["slow()", "1 + 1"]
        assert "Interrupted" in capsys.readouterr().err

    def test_execute_line_result(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert execute_line("7 / 2") is True
        assert capsys.readouterr().out.strip() == "3.5"

    def test_execute_line_failure(self) -> None:
        assert execute_line("fn add a b = a+b; add(1)") is False


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("Novarc ")


def test_version_when_not_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(name: str) -> str:
        raise PackageNotFoundError(name)

    monkeypatch.setattr("novarc._version.version", missing)
    assert get_version() == "0.0.0"
