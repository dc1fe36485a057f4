"""
Unit tests for the dry-run engine and engine loading.
"""

import sys
import types

import pytest

from macos_use.engine import AutomationEngine, DryRunEngine, load_engine
from macos_use.exceptions import ConfigurationError
from macos_use.models.actions import ActionOptions, Click, Input, OpenApplication, TraverseOnly
from macos_use.models.contracts import ActionResult


class TestDryRunEngine:
    """Tests for DryRunEngine."""

    def test_satisfies_protocol(self):
        assert isinstance(DryRunEngine(), AutomationEngine)

    def test_open_reports_app(self):
        engine = DryRunEngine(open_pid=321)
        result = engine.execute(OpenApplication(identifier="Safari"), ActionOptions(traverse_after=True))

        assert result.open_result.pid == 321
        assert result.open_result.app_name == "Safari"
        assert result.traversal_pid == 321
        assert result.traversal_after.app_name == "Safari"

    def test_no_traversal_unless_requested(self):
        result = DryRunEngine().execute(
            Input(action=Click(x=10.5, y=20.0)), ActionOptions(pid_for_traversal=501)
        )

        assert result.traversal_pid == 501
        assert result.traversal_before is None
        assert result.traversal_after is None
        assert result.traversal_diff is None
        assert result.open_result is None

    def test_diff_when_both_snapshots(self):
        options = ActionOptions(pid_for_traversal=5, traverse_before=True, traverse_after=True, show_diff=True)
        result = DryRunEngine().execute(TraverseOnly(), options)

        assert result.traversal_before.app_name == "pid 5"
        assert result.traversal_diff is not None

    def test_calls_are_recorded(self):
        engine = DryRunEngine()
        options = ActionOptions(pid_for_traversal=1)
        engine.execute(TraverseOnly(), options)
        assert engine.calls == [(TraverseOnly(), options)]


class _CustomEngine:
    def execute(self, action, options):
        return ActionResult(primary_action_error="custom")


@pytest.fixture
def engine_module(monkeypatch):
    """A throwaway importable module holding engines."""
    module = types.ModuleType("fake_engines")
    module.CustomEngine = _CustomEngine
    module.instance = _CustomEngine()
    module.make_engine = lambda: _CustomEngine()
    module.not_an_engine = 42
    monkeypatch.setitem(sys.modules, "fake_engines", module)
    return module


class TestLoadEngine:
    """Tests for load_engine."""

    def test_empty_path_selects_dry_run(self):
        assert isinstance(load_engine(""), DryRunEngine)

    def test_dry_run_by_path(self):
        assert isinstance(load_engine("macos_use.engine.dry_run:DryRunEngine"), DryRunEngine)

    @pytest.mark.parametrize("attribute", ["CustomEngine", "instance", "make_engine"])
    def test_class_instance_or_factory(self, engine_module, attribute):
        engine = load_engine(f"fake_engines:{attribute}")
        assert isinstance(engine, _CustomEngine)

    @pytest.mark.parametrize(
        "path,fragment",
        [
            ("no_colon_here", "package.module:attribute"),
            ("does_not_exist_anywhere:Engine", "cannot import"),
            ("fake_engines:Missing", "has no attribute"),
            ("fake_engines:not_an_engine", "execute"),
        ],
    )
    def test_failures(self, engine_module, path, fragment):
        with pytest.raises(ConfigurationError, match=fragment) as exc_info:
            load_engine(path)
        assert exc_info.value.field == "engine"
