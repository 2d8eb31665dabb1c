"""Shared fixtures."""

import subprocess

import pytest

from onload_image.lib.catalog import load_catalog


@pytest.fixture
def catalog():
    """The built-in catalog."""
    return load_catalog()


@pytest.fixture
def fake_run(monkeypatch):
    """Replace subprocess.run in the executor and record the commands.

    Set ``fake_run.returncodes`` to a list of exit codes, consumed in order.
    """
    class FakeRun:
        def __init__(self):
            self.calls = []
            self.returncodes = []

        def __call__(self, cmd, **kwargs):
            self.calls.append(cmd)
            code = self.returncodes.pop(0) if self.returncodes else 0
            return subprocess.CompletedProcess(cmd, code)

    fake = FakeRun()
    monkeypatch.setattr("onload_image.lib.executor.subprocess.run", fake)
    return fake
