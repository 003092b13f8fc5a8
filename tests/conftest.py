"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import stat
from concurrent.futures import Executor, Future
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Drop logging config a test installed; it may hold a closed capture stream."""
    yield
    structlog.reset_defaults()


def _script_body(stdout: str, stderr: str, exit_code: int) -> str:
    lines = ["#!/bin/sh"]
    if stdout:
        lines.append(f"cat <<'__STDOUT__'\n{stdout}\n__STDOUT__")
    if stderr:
        lines.append(f"cat >&2 <<'__STDERR__'\n{stderr}\n__STDERR__")
    lines.append(f"exit {exit_code}")
    return "\n".join(lines) + "\n"


@pytest.fixture()
def make_script(tmp_path: Path):
    """Factory writing an executable enumeration script with canned output."""

    def _make(
        stdout: str = "",
        stderr: str = "",
        exit_code: int = 0,
        name: str = "get_audio_devices.sh",
        body: str | None = None,
    ) -> Path:
        path = tmp_path / name
        path.write_text(body if body is not None else _script_body(stdout, stderr, exit_code))
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture()
def mock_logger() -> MagicMock:
    """Stand-in for a structlog logger; records every event call."""
    return MagicMock()


class ImmediateExecutor(Executor):
    """Executor that runs work inline so switch outcomes are visible at once."""

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:
            future.set_exception(exc)
        return future


@pytest.fixture()
def immediate_executor() -> ImmediateExecutor:
    return ImmediateExecutor()


@pytest.fixture()
def sample_stdout() -> str:
    """Listing with one good record, one garbage line and one record without desc."""
    return '{"id":1,"desc":"Speakers"}\ngarbage\n{"id":2}'
