"""Shared fixtures for unit tests that would otherwise call Google APIs."""

import time

import pytest

from fakes import FakeCrm

CREDENTIALS = object()


@pytest.fixture
def fake_crm(monkeypatch):
    """Route every Cloud Resource Manager client to an in-memory fake."""
    crm = FakeCrm()
    monkeypatch.setattr("pdum.iam._clients.crm_v3", lambda credentials: crm)
    monkeypatch.setattr(time, "sleep", lambda seconds: None)
    return crm


@pytest.fixture
def credentials():
    """Opaque credentials object; the fake client never inspects it."""
    return CREDENTIALS
