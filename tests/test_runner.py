"""
Integration Tests

End-to-end tests that run command logs through the runner and the CLI.

Run with: python -m pytest tests/test_runner.py -v
"""

import io
import logging
import pytest

from kvlog.errors import IncrTypeError, ParseError
from kvlog.protocol.parser import ProtocolParser
from kvlog.runner import CommandLogRunner, ErrorPolicy, main, parse_args


SCENARIO = ["SET a 1", "INCR a", "GET a", "DEL a", "GET a", "FLUSH"]
SCENARIO_REPLIES = ["OK", "OK", "2", "OK", "nil", "OK"]


@pytest.mark.integration
class TestRunner:
    """Test CommandLogRunner over in-memory lines."""

    def test_end_to_end_scenario(self, halting_runner: CommandLogRunner):
        replies = [r.rstrip("\n") for r in halting_runner.run(SCENARIO)]
        assert replies == SCENARIO_REPLIES

    def test_lines_with_newlines(self, halting_runner: CommandLogRunner):
        lines = [f"{line}\n" for line in SCENARIO]
        assert list(halting_runner.run(lines)) == [f"{r}\n" for r in SCENARIO_REPLIES]

    def test_state_carries_across_runs(self, halting_runner: CommandLogRunner):
        list(halting_runner.run(["SET k v"]))
        assert list(halting_runner.run(["GET k"])) == ["v\n"]

    def test_halt_on_incr_type_error(self, halting_runner: CommandLogRunner):
        replies = []
        with pytest.raises(IncrTypeError):
            for reply in halting_runner.run(["SET a hello", "INCR a", "SET b 1"]):
                replies.append(reply)

        assert replies == ["OK\n"]
        # The line after the failure never ran
        assert halting_runner.executor.store.get("b") is None

    def test_halt_on_parse_error(self, halting_runner: CommandLogRunner):
        replies = []
        with pytest.raises(ParseError):
            for reply in halting_runner.run(["SET a 1", "SET b", "SET c 3"]):
                replies.append(reply)

        assert replies == ["OK\n"]
        assert halting_runner.get_stats()["errors"] == 1

    def test_continue_on_incr_type_error(self, continuing_runner: CommandLogRunner):
        replies = list(continuing_runner.run(["SET a hello", "INCR a", "SET b 1", "GET b"]))

        assert replies[0] == "OK\n"
        assert replies[1].startswith("ERR ")
        assert "not an integer" in replies[1]
        assert replies[2:] == ["OK\n", "1\n"]

    def test_continue_on_parse_error(self, continuing_runner: CommandLogRunner):
        replies = list(continuing_runner.run(["FOO bar", "FLUSH"]))

        assert replies[0].startswith("ERR parse error in command")
        assert replies[1] == "OK\n"

        stats = continuing_runner.get_stats()
        assert stats["lines"] == 2
        assert stats["errors"] == 1

    def test_continue_logs_warning(self, continuing_runner: CommandLogRunner, caplog):
        with caplog.at_level(logging.WARNING, logger="kvlog.runner"):
            list(continuing_runner.run(["SET a"]))
        assert "Skipping line 1" in caplog.text

    def test_strict_runner(self):
        runner = CommandLogRunner(
            parser=ProtocolParser(strict=True),
            on_error=ErrorPolicy.CONTINUE,
        )
        replies = list(runner.run(["GET a b", "GET a"]))
        assert replies[0].startswith("ERR ")
        assert replies[1] == "nil\n"

    def test_run_stream(self, halting_runner: CommandLogRunner):
        source = io.StringIO("".join(f"{line}\n" for line in SCENARIO))
        out = io.StringIO()

        halting_runner.run_stream(source, out)

        assert out.getvalue().splitlines() == SCENARIO_REPLIES

    def test_run_stream_keeps_replies_before_halt(self, halting_runner: CommandLogRunner):
        source = io.StringIO("SET a x\nGET a\nINCR a\nGET a\n")
        out = io.StringIO()

        with pytest.raises(IncrTypeError):
            halting_runner.run_stream(source, out)

        assert out.getvalue() == "OK\nx\n"


@pytest.mark.integration
class TestMain:
    """Test the kvlog command line entry point."""

    def test_main_runs_file(self, log_file, capsys):
        path = log_file(SCENARIO)

        assert main([str(path)]) == 0

        assert capsys.readouterr().out.splitlines() == SCENARIO_REPLIES

    def test_main_halts_with_status_1(self, log_file, capsys):
        path = log_file(["SET a hello", "INCR a", "GET a"])

        assert main([str(path)]) == 1

        assert capsys.readouterr().out == "OK\n"

    def test_main_continue_policy(self, log_file, capsys):
        path = log_file(["SET a hello", "INCR a", "GET a"])

        assert main([str(path), "--on-error", "continue"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "OK"
        assert lines[1].startswith("ERR ")
        assert lines[2] == "hello"

    def test_main_strict_flag(self, log_file, capsys):
        path = log_file(["GET a b"])

        assert main([str(path), "--strict"]) == 1
        assert capsys.readouterr().out == ""

    def test_main_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.log")]) == 1
        assert capsys.readouterr().out == ""

    def test_main_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("SET a 1\nGET a\n"))

        assert main(["-"]) == 0

        assert capsys.readouterr().out == "OK\n1\n"

    def test_parse_args_defaults(self):
        args = parse_args([])
        assert args.input == "commands.log"
        assert args.on_error == "halt"
        assert args.strict is False

    def test_parse_args_rejects_unknown_policy(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--on-error", "retry"])
        assert exc_info.value.code == 2
