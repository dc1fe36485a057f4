"""
Pytest configuration and shared fixtures.
"""

import os
import threading
import time

import pytest
from macos_use.core import ActionDispatcher, ExecutionSerializer, ResultArticulator
from macos_use.core.config import ServerConfig, reset_config
from macos_use.engine import DryRunEngine
from macos_use.models.actions import ActionOptions, PrimaryAction
from macos_use.models.contracts import (
    ActionResult,
    AppOpenResult,
    ElementData,
    TraversalDiff,
    TraversalSnapshot,
)
from macos_use.models.value import arguments_from_json
from macos_use.server import MacosUseServer


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep MACOS_USE_* variables and the config singleton out of every test."""
    for key in list(os.environ):
        if key.upper().startswith("MACOS_USE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("MACOS_USE_ENABLE_RICH_CONSOLE", "false")
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_args():
    """Build an arguments map from plain JSON data."""

    def _make(raw=None, **kwargs):
        return arguments_from_json({**(raw or {}), **kwargs})

    return _make


@pytest.fixture
def dry_run_engine():
    return DryRunEngine(open_pid=4242)


@pytest.fixture
def dispatcher():
    return ActionDispatcher()


@pytest.fixture
def articulator():
    return ResultArticulator()


@pytest.fixture
def serializer(dry_run_engine):
    """ExecutionSerializer over the dry-run engine, shut down after the test."""
    serializer = ExecutionSerializer(dry_run_engine)
    yield serializer
    serializer.shutdown()


@pytest.fixture
def server_config():
    return ServerConfig()


@pytest.fixture
def server(server_config, dry_run_engine):
    """Server wired to the dry-run engine."""
    server = MacosUseServer(server_config, engine=dry_run_engine)
    yield server
    server.close()


@pytest.fixture
def full_result():
    """An ActionResult with every field populated."""
    element = ElementData(role="AXButton", text="Save / Close", x=10.0, y=20.5, width=80.0, height=24.0)
    snapshot = TraversalSnapshot(
        app_name="TextEdit",
        elements=[element],
        stats={"count": 1, "visible_elements_count": 1},
        processing_time_seconds="0.12",
    )
    return ActionResult(
        open_result=AppOpenResult(pid=501, app_name="TextEdit", processing_time_seconds="0.30"),
        traversal_pid=501,
        traversal_before=snapshot,
        traversal_after=TraversalSnapshot(app_name="TextEdit", elements=[], stats={"count": 0}),
        traversal_diff=TraversalDiff(added=[], removed=[element]),
    )


class RecordingEngine:
    """
    Engine that records every call and the peak number of overlapping calls.
    """

    def __init__(self, delay: float = 0.01):
        self.delay = delay
        self.calls: list[tuple[PrimaryAction, ActionOptions]] = []
        self.threads: set[str] = set()
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def execute(self, action: PrimaryAction, options: ActionOptions) -> ActionResult:
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        time.sleep(self.delay)
        with self._lock:
            self.calls.append((action, options))
            self.threads.add(threading.current_thread().name)
            self.active -= 1
        return ActionResult(traversal_pid=options.pid_for_traversal)


class FailingEngine:
    """Engine that raises instead of returning a result."""

    def __init__(self, error: Exception | None = None):
        self.error = error or RuntimeError("accessibility permission denied")

    def execute(self, action: PrimaryAction, options: ActionOptions) -> ActionResult:
        raise self.error


class PhaseErrorEngine:
    """Engine that reports a failure inside its ActionResult."""

    def __init__(self, **errors: str):
        self.errors = errors

    def execute(self, action: PrimaryAction, options: ActionOptions) -> ActionResult:
        return ActionResult(traversal_pid=options.pid_for_traversal, **self.errors)


@pytest.fixture
def recording_engine():
    return RecordingEngine()


@pytest.fixture
def failing_engine():
    return FailingEngine()


@pytest.fixture
def phase_error_engine():
    """Factory: phase_error_engine(primary_action_error="...")"""
    return PhaseErrorEngine
