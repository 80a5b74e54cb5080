# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

import pytest

import splitchroma.splittable.session as session_module


@pytest.fixture
def fresh_global_session(monkeypatch):
    """Run a test against a brand-new process-wide session."""
    monkeypatch.setattr(session_module, "_GLOBAL_SESSION", None)
    yield
    monkeypatch.setattr(session_module, "_GLOBAL_SESSION", None)
