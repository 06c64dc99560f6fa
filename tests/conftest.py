"""Shared pytest fixtures."""

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from codealchemy.services.settings import Settings
from codealchemy.ui.domain import WorkspaceCoordinator, default_registry
from codealchemy.ui.events import EventBus

from tests.helpers import EventRecorder, FakeScheduler, StubClipboardProvider


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in list(os.environ):
        if name.startswith("CODEALCHEMY_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CODEALCHEMY_LOG_DIR", str(tmp_path / "logs"))


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(event_bus: EventBus) -> EventRecorder:
    return EventRecorder(event_bus)


@pytest.fixture
def clipboard() -> StubClipboardProvider:
    return StubClipboardProvider()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def coordinator(
    scheduler: FakeScheduler,
    event_bus: EventBus,
    settings: Settings,
    clipboard: StubClipboardProvider,
) -> WorkspaceCoordinator:
    return WorkspaceCoordinator(
        default_registry(),
        event_bus,
        scheduler=scheduler,
        settings=settings,
        clipboard_provider=clipboard,
    )
