"""
Tests for the process launcher — real child processes, streamed output.
"""

import sys
import threading

from lwcpreview.core.models.platform import ANDROID, IOS
from lwcpreview.core.models.preview import OutcomeKind
from lwcpreview.core.services.messages import Messages
from lwcpreview.core.services.process_launcher import (
    OUTPUT_TAIL_LINES,
    CancellationToken,
    launch,
)

NOT_INSTALLED = Messages().localize("lwc_preview_tool_not_installed")


def _py(code: str) -> list[str]:
    return [sys.executable, "-c", code]


class TestLaunchOutcome:
    def test_exit_zero_is_success(self, channel):
        execution = launch(_py("print('ok')"), platform=ANDROID, channel=channel)
        outcome = execution.wait(timeout=30)
        assert outcome.exit_code == 0
        assert outcome.kind is OutcomeKind.SUCCESS
        assert outcome.platform == ANDROID
        assert execution.done

    def test_nonzero_exit_is_failure(self, channel):
        outcome = launch(
            _py("import sys; sys.exit(3)"), platform=IOS, channel=channel,
        ).wait(timeout=30)
        assert outcome.exit_code == 3
        assert outcome.kind is OutcomeKind.FAILURE
        assert not outcome.ok
        assert channel.count_containing(NOT_INSTALLED) == 0

    def test_exit_127_is_tool_not_installed(self, channel):
        outcome = launch(
            _py("import sys; sys.exit(127)"), platform=IOS, channel=channel,
        ).wait(timeout=30)
        assert outcome.kind is OutcomeKind.TOOL_NOT_INSTALLED
        assert channel.count_containing(NOT_INSTALLED) == 1

    def test_missing_executable_maps_to_127(self, channel):
        execution = launch(
            ["lwcpreview-no-such-executable", "force:lightning:lwc:preview"],
            platform=ANDROID,
            channel=channel,
        )
        outcome = execution.wait(timeout=5)
        assert outcome.exit_code == 127
        assert outcome.error
        assert execution.pid is None
        assert channel.count_containing(NOT_INSTALLED) == 1

    def test_command_echo(self, channel):
        execution = launch(_py("pass"), platform=ANDROID, channel=channel)
        assert execution.command.startswith(sys.executable)
        assert execution.wait(timeout=30).command == execution.command


class TestOutputStreaming:
    def test_lines_forwarded_in_order(self, channel):
        launch(
            _py("print('one'); print('two'); print('three')"),
            platform=ANDROID,
            channel=channel,
        ).wait(timeout=30)
        assert channel.lines[:3] == ["one", "two", "three"]

    def test_stderr_merged(self, channel):
        launch(
            _py("import sys; sys.stderr.write('oops\\n')"),
            platform=ANDROID,
            channel=channel,
        ).wait(timeout=30)
        assert "oops" in channel.lines

    def test_tail_is_bounded(self, channel):
        count = OUTPUT_TAIL_LINES + 10
        outcome = launch(
            _py(f"[print(i) for i in range({count})]"),
            platform=ANDROID,
            channel=channel,
        ).wait(timeout=30)
        assert len(outcome.output_tail) == OUTPUT_TAIL_LINES
        assert outcome.output_tail[-1] == str(count - 1)
        assert len(channel.lines) == count

    def test_on_line_callback(self, channel):
        seen = []
        launch(
            _py("print('Server up on http://localhost:3333')"),
            platform=ANDROID,
            channel=channel,
            on_line=seen.append,
        ).wait(timeout=30)
        assert seen == ["Server up on http://localhost:3333"]

    def test_json_env_set(self, channel):
        launch(
            _py("import os; print(os.environ.get('SFDX_JSON_TO_STDOUT'))"),
            platform=ANDROID,
            channel=channel,
        ).wait(timeout=30)
        assert channel.lines == ["true"]

    def test_extra_env(self, channel):
        launch(
            _py("import os; print(os.environ['LWCP_TEST_VALUE'])"),
            platform=ANDROID,
            channel=channel,
            env={"LWCP_TEST_VALUE": "42"},
        ).wait(timeout=30)
        assert channel.lines == ["42"]


class TestCompletion:
    def test_done_callback_runs_once(self, channel):
        calls = []
        done = threading.Event()
        execution = launch(_py("pass"), platform=ANDROID, channel=channel)

        def _cb(outcome):
            calls.append(outcome)
            done.set()

        execution.add_done_callback(_cb)
        execution.wait(timeout=30)
        assert done.wait(timeout=5)
        assert len(calls) == 1

    def test_callback_after_completion_runs_immediately(self, channel):
        execution = launch(_py("pass"), platform=ANDROID, channel=channel)
        execution.wait(timeout=30)
        calls = []
        execution.add_done_callback(calls.append)
        assert len(calls) == 1


class TestCancellation:
    def test_cancel_terminates_child(self, channel):
        token = CancellationToken()
        execution = launch(
            _py("import time; print('started', flush=True); time.sleep(60)"),
            platform=ANDROID,
            channel=channel,
            token=token,
        )
        token.cancel()
        outcome = execution.wait(timeout=30)
        assert outcome.cancelled
        assert not outcome.ok

    def test_token_callbacks(self):
        token = CancellationToken()
        calls = []
        token.on_cancel(lambda: calls.append("a"))
        token.cancel()
        token.cancel()
        token.on_cancel(lambda: calls.append("b"))
        assert token.cancelled
        assert calls == ["a", "b"]
