"""Unit tests for soundchooser.core.lister."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from soundchooser.core.lister import DeviceLister
from soundchooser.models.device import ListStatus


@pytest.fixture()
def lister(mock_logger) -> DeviceLister:
    return DeviceLister(timeout=5.0, logger=mock_logger)


def _event_names(mock_method) -> list[str]:
    return [c.args[0] for c in mock_method.call_args_list]


# ---------------------------------------------------------------------------
# Missing script
# ---------------------------------------------------------------------------

class TestCommandMissing:
    def test_missing_path_not_spawned(self, lister: DeviceLister, tmp_path: Path):
        with patch("soundchooser.core.lister.subprocess.run") as mock_run:
            result = lister.list_devices(tmp_path / "nope.sh")
        assert result.status == ListStatus.COMMAND_MISSING
        assert result.devices == ()
        mock_run.assert_not_called()

    def test_not_executable(self, lister: DeviceLister, tmp_path: Path):
        script = tmp_path / "get_audio_devices.sh"
        script.write_text("#!/bin/sh\necho '{\"id\": 1}'\n")
        script.chmod(0o644)
        with patch("soundchooser.core.lister.subprocess.run") as mock_run:
            result = lister.list_devices(script)
        assert result.status == ListStatus.COMMAND_MISSING
        assert "not executable" in result.message
        mock_run.assert_not_called()

    def test_directory_is_missing(self, lister: DeviceLister, tmp_path: Path):
        assert lister.list_devices(tmp_path).status == ListStatus.COMMAND_MISSING

    def test_logged_as_error(self, lister: DeviceLister, tmp_path: Path, mock_logger):
        lister.list_devices(tmp_path / "nope.sh")
        assert "enumeration_script_missing" in _event_names(mock_logger.error)


# ---------------------------------------------------------------------------
# Successful runs
# ---------------------------------------------------------------------------

class TestOk:
    def test_mixed_listing(self, lister: DeviceLister, make_script, sample_stdout):
        result = lister.list_devices(make_script(stdout=sample_stdout))
        assert result.status == ListStatus.OK
        assert [d.label for d in result.devices] == ["Speakers", "Device 2"]
        assert result.skipped == 1
        assert result.parse_skipped

    def test_n_lines_give_n_devices_in_order(self, lister: DeviceLister, make_script):
        ids = [31, 5, 77, 12, 40]
        stdout = "\n".join(f'{{"id": {i}, "desc": "Sink {i}"}}' for i in ids)
        result = lister.list_devices(make_script(stdout=stdout))
        assert [d.id for d in result.devices] == ids

    def test_all_records_without_id(self, lister: DeviceLister, make_script):
        result = lister.list_devices(make_script(stdout='{"desc": "a"}\n{"desc": "b"}'))
        assert result.status == ListStatus.OK
        assert result.devices == ()
        assert result.dropped == 2
        assert result.skipped == 0

    def test_stderr_ignored_on_success(self, lister: DeviceLister, make_script):
        script = make_script(stdout='{"id": 1}', stderr="warning: something")
        assert lister.list_devices(script).status == ListStatus.OK

    def test_accepts_string_path(self, lister: DeviceLister, make_script):
        script = make_script(stdout='{"id": 1}')
        assert lister.list_devices(str(script)).ok

    def test_skips_logged_as_warning(self, lister: DeviceLister, make_script, sample_stdout, mock_logger):
        lister.list_devices(make_script(stdout=sample_stdout))
        assert "enumeration_lines_skipped" in _event_names(mock_logger.warning)
        assert "enumeration_complete" in _event_names(mock_logger.info)


# ---------------------------------------------------------------------------
# Empty output
# ---------------------------------------------------------------------------

class TestEmptyOutput:
    def test_no_output(self, lister: DeviceLister, make_script):
        result = lister.list_devices(make_script(stdout=""))
        assert result.status == ListStatus.EMPTY_OUTPUT
        assert result.devices == ()

    def test_whitespace_only_output(self, lister: DeviceLister, make_script):
        result = lister.list_devices(make_script(stdout="   \n\n\t\n"))
        assert result.status == ListStatus.EMPTY_OUTPUT


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestCommandFailed:
    def test_nonzero_exit_wins_over_stdout(self, lister: DeviceLister, make_script):
        script = make_script(stdout='{"id": 1, "desc": "Speakers"}', stderr="pw-dump: no daemon", exit_code=1)
        result = lister.list_devices(script)
        assert result.status == ListStatus.COMMAND_FAILED
        assert result.devices == ()
        assert result.message == "pw-dump: no daemon"

    def test_nonzero_exit_without_stderr_uses_fallback(self, lister: DeviceLister, make_script):
        result = lister.list_devices(make_script(exit_code=3))
        assert result.status == ListStatus.COMMAND_FAILED
        assert "exit code 3" in result.message

    def test_timeout(self, lister: DeviceLister, make_script):
        script = make_script(stdout='{"id": 1}')
        with patch(
            "soundchooser.core.lister.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd=[str(script)], timeout=5.0),
        ):
            result = lister.list_devices(script)
        assert result.status == ListStatus.COMMAND_FAILED
        assert "timed out" in result.message

    def test_real_hang_is_bounded(self, make_script, mock_logger):
        script = make_script(body="#!/bin/sh\nexec sleep 10\n")
        result = DeviceLister(timeout=0.3, logger=mock_logger).list_devices(script)
        assert result.status == ListStatus.COMMAND_FAILED
        assert "0.3 seconds" in result.message

    def test_spawn_failure(self, lister: DeviceLister, make_script):
        script = make_script(stdout='{"id": 1}')
        with patch(
            "soundchooser.core.lister.subprocess.run",
            side_effect=PermissionError("Permission denied"),
        ):
            result = lister.list_devices(script)
        assert result.status == ListStatus.COMMAND_FAILED
        assert "Permission denied" in result.message

    def test_bad_interpreter(self, lister: DeviceLister, make_script):
        script = make_script(body="#!/nonexistent/interpreter\n")
        assert lister.list_devices(script).status == ListStatus.COMMAND_FAILED

    def test_failure_logged_with_return_code(self, lister: DeviceLister, make_script, mock_logger):
        lister.list_devices(make_script(stderr="bad", exit_code=2))
        mock_logger.error.assert_called_once()
        args, kwargs = mock_logger.error.call_args
        assert args[0] == "enumeration_failed"
        assert kwargs["return_code"] == 2
        assert kwargs["error"] == "bad"

    def test_run_invoked_with_timeout_and_no_args(self, make_script):
        script = make_script(stdout='{"id": 1}')
        lister = DeviceLister(timeout=2.5)
        completed = subprocess.CompletedProcess([str(script)], 0, stdout='{"id": 1}\n', stderr="")
        with patch("soundchooser.core.lister.subprocess.run", return_value=completed) as mock_run:
            lister.list_devices(script)
        args, kwargs = mock_run.call_args
        assert args[0] == [str(script)]
        assert kwargs["timeout"] == 2.5
        assert kwargs["capture_output"] is True
