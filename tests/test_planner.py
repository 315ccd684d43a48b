"""Tests for plan synthesis."""

from __future__ import annotations

import pytest

from conftest import ALL_GUI, make_env
from elsewhere.errors import ErrorCategory, ExitCode, SelectionCancelled
from elsewhere.interactive import MenuSelection
from elsewhere.models import BackendName, Direction, Options, Target, TerminalProgram
from elsewhere.plan import PlanError, PlanReady
from elsewhere.planner import create_plan, create_plan_interactive, viable_backends


class TestWorkedExamples:
    def test_inside_tmux_defaults_to_right_pane(self, tmux_env):
        plan = create_plan("echo hi", Options(), tmux_env)
        assert isinstance(plan, PlanReady)
        assert plan.backend is BackendName.TMUX
        assert plan.target is Target.PANE
        assert plan.direction is Direction.RIGHT
        assert plan.degraded is False
        assert plan.exact_command == 'tmux split-window -h && tmux send-keys "echo hi" Enter'

    @pytest.mark.parametrize(
        "options",
        [Options(), Options(terminal="iTerm2"), Options(target=Target.WINDOW, strict=True)],
    )
    def test_remote_without_multiplexer_is_infeasible(self, options):
        env = make_env(remote=True, macos=True, gui=ALL_GUI)
        plan = create_plan("echo hi", options, env)
        assert isinstance(plan, PlanError)
        assert plan.category is ErrorCategory.ENVIRONMENT_INFEASIBLE
        assert plan.exit_code == ExitCode.ENVIRONMENT_INFEASIBLE

    def test_terminal_tab_degrades_to_window(self, mac_env):
        plan = create_plan("echo hi", Options(terminal="Terminal", target=Target.TAB), mac_env)
        assert isinstance(plan, PlanReady)
        assert plan.target is Target.WINDOW
        assert plan.requested_target is Target.TAB
        assert plan.degraded is True
        assert plan.warnings == (
            "Terminal.app does not support tabs; degrading tab to window",
        )

    def test_terminal_tab_strict_is_capability_error(self, mac_env):
        plan = create_plan(
            "echo hi",
            Options(terminal="Terminal", target=Target.TAB, strict=True),
            mac_env,
        )
        assert isinstance(plan, PlanError)
        assert plan.category is ErrorCategory.CAPABILITY
        assert plan.exit_code == ExitCode.SOFTWARE_ERROR


class TestValidation:
    @pytest.mark.parametrize("command", [None, "", "   \n"])
    def test_missing_command_is_usage_error(self, tmux_env, command):
        plan = create_plan(command, Options(), tmux_env)
        assert plan.category is ErrorCategory.USAGE
        assert plan.exit_code == ExitCode.USAGE_ERROR
        assert plan.message == "No command provided. Use -c, --, or stdin."

    def test_unknown_terminal_is_usage_error(self, tmux_env):
        plan = create_plan("ls", Options(terminal="xterm"), tmux_env)
        assert plan.category is ErrorCategory.USAGE

    def test_no_backend_at_all(self):
        plan = create_plan("ls", Options(), make_env())
        assert plan.category is ErrorCategory.NO_VIABLE_BACKEND
        assert plan.exit_code == ExitCode.NO_VIABLE_BACKEND
        assert plan.hint


class TestSelection:
    def test_multiplexer_beats_gui_terminal(self):
        env = make_env(tmux=True, macos=True, gui=ALL_GUI)
        assert create_plan("ls", Options(), env).backend is BackendName.TMUX

    def test_priority_order_on_mac(self, mac_env):
        plan = create_plan("ls", Options(), mac_env)
        assert plan.backend is BackendName.TERMINAL
        assert plan.target is Target.WINDOW

    def test_override_is_honored(self, mac_env):
        plan = create_plan("ls", Options(terminal="kitty", target=Target.TAB), mac_env)
        assert plan.backend is BackendName.KITTY
        assert plan.target is Target.TAB

    def test_unavailable_override_never_falls_back(self, tmux_env):
        plan = create_plan("ls", Options(terminal="zellij"), tmux_env)
        assert isinstance(plan, PlanError)
        assert plan.category is ErrorCategory.AVAILABILITY
        assert "Forced --terminal=zellij" in plan.message

    def test_gui_override_off_macos(self, tmux_env):
        plan = create_plan("ls", Options(terminal="iterm2"), tmux_env)
        assert plan.category is ErrorCategory.AVAILABILITY
        assert "not on macOS" in plan.message

    def test_remote_inside_tmux_prefers_tmux(self):
        env = make_env(tmux=True, remote=True, macos=True, gui=ALL_GUI)
        assert viable_backends(env)[0].name is BackendName.TMUX
        assert create_plan("ls", Options(), env).backend is BackendName.TMUX

    def test_remote_inside_tmux_allows_gui_override(self):
        env = make_env(tmux=True, remote=True, macos=True, gui=ALL_GUI)
        plan = create_plan("ls", Options(terminal="Terminal"), env)
        assert isinstance(plan, PlanReady)
        assert plan.backend is BackendName.TERMINAL

    def test_remote_without_multiplexer_filters_out_gui(self):
        env = make_env(remote=True, macos=True, gui=ALL_GUI)
        assert viable_backends(env) == []


class TestDirection:
    def test_explicit_direction(self, tmux_env):
        plan = create_plan("ls", Options(direction=Direction.UP), tmux_env)
        assert plan.direction is Direction.UP
        assert "split-window -v -b" in plan.exact_command

    def test_direction_ignored_for_non_pane(self, tmux_env):
        plan = create_plan("ls", Options(target=Target.TAB, direction=Direction.UP), tmux_env)
        assert plan.direction is None
        assert plan.exact_command.startswith("tmux new-window")

    def test_zellij_pane(self):
        plan = create_plan("ls", Options(direction=Direction.DOWN), make_env(zellij=True))
        assert plan.backend is BackendName.ZELLIJ
        assert '--direction "Down"' in plan.exact_command


class TestWindowDelegation:
    def test_tmux_window_delegates_to_host_terminal(self):
        env = make_env(
            tmux=True, macos=True, gui=ALL_GUI, host_terminal=BackendName.ITERM2
        )
        plan = create_plan("ls", Options(target=Target.WINDOW), env)
        assert plan.backend is BackendName.TMUX
        assert plan.delegate is BackendName.ITERM2
        assert plan.executing_backend is BackendName.ITERM2
        assert plan.exact_command.startswith("osascript -e ")
        assert plan.description.startswith("tmux host terminal, iTerm2 window")

    def test_host_terminal_miss_falls_back_to_tmux_window(self, tmux_env):
        plan = create_plan("ls", Options(target=Target.WINDOW), tmux_env)
        assert plan.delegate is None
        assert plan.exact_command.startswith("tmux new-window")
        assert "host terminal not detected" in plan.description

    def test_no_delegation_in_remote_session(self):
        env = make_env(
            tmux=True, remote=True, macos=True, gui=ALL_GUI, host_terminal=BackendName.ITERM2
        )
        plan = create_plan("ls", Options(target=Target.WINDOW), env)
        assert plan.delegate is None

    def test_experimental_delegate_warns(self):
        env = make_env(
            zellij=True, macos=True, gui=ALL_GUI, host_terminal=BackendName.GHOSTTY
        )
        plan = create_plan("ls", Options(target=Target.WINDOW), env)
        assert plan.delegate is BackendName.GHOSTTY
        assert plan.requires_permissions is True
        assert plan.experimental is True
        assert any("experimental" in w for w in plan.warnings)


class TestHostTerminalWarning:
    def test_editor_terminal_warns(self):
        env = make_env(macos=True, gui=ALL_GUI, current_terminal=TerminalProgram.VSCODE)
        plan = create_plan("ls", Options(), env)
        assert isinstance(plan, PlanReady)
        assert plan.warnings == (
            "Running inside VSCode, which cannot be automated; opening Terminal.app instead",
        )

    def test_no_warning_inside_multiplexer(self):
        env = make_env(tmux=True, current_terminal=TerminalProgram.CURSOR)
        assert create_plan("ls", Options(), env).warnings == ()

    def test_no_warning_for_unidentified_terminal(self, mac_env):
        assert create_plan("ls", Options(), mac_env).warnings == ()

    def test_no_warning_in_supported_terminal(self):
        env = make_env(macos=True, gui=ALL_GUI, current_terminal=TerminalProgram.ITERM2)
        assert create_plan("ls", Options(terminal="iTerm2"), env).warnings == ()


class TestPlanSerialization:
    def test_ready_to_dict(self, tmux_env):
        data = create_plan("ls", Options(), tmux_env).to_dict()
        assert data["type"] == "tmux"
        assert data["target"] == "pane"
        assert data["direction"] == "right"
        assert data["warnings"] == []

    def test_error_to_dict(self):
        data = create_plan("ls", Options(), make_env()).to_dict()
        assert data["type"] == "error"
        assert data["category"] == "no-viable-backend"
        assert data["exit_code"] == 75


class TestInteractivePlanning:
    @pytest.mark.asyncio
    async def test_chooser_selection_becomes_override(self, mac_env):
        seen = {}

        async def chooser(backends, env):
            seen["names"] = [d.name for d in backends]
            return MenuSelection(backend=BackendName.ITERM2, target=Target.TAB)

        plan = await create_plan_interactive("ls", Options(), mac_env, chooser=chooser)
        assert seen["names"][0] is BackendName.TERMINAL
        assert plan.backend is BackendName.ITERM2
        assert plan.target is Target.TAB

    @pytest.mark.asyncio
    async def test_single_backend_skips_chooser(self, tmux_env):
        async def chooser(backends, env):
            raise AssertionError("chooser should not run")

        plan = await create_plan_interactive("ls", Options(), tmux_env, chooser=chooser)
        assert plan.backend is BackendName.TMUX

    @pytest.mark.asyncio
    async def test_auto_select_skips_chooser(self, mac_env):
        async def chooser(backends, env):
            raise AssertionError("chooser should not run")

        plan = await create_plan_interactive(
            "ls", Options(auto_select=True), mac_env, chooser=chooser
        )
        assert plan.backend is BackendName.TERMINAL

    @pytest.mark.asyncio
    async def test_interactive_flag_forces_chooser(self, tmux_env):
        async def chooser(backends, env):
            return MenuSelection(backend=BackendName.TMUX, target=Target.TAB)

        plan = await create_plan_interactive(
            "ls", Options(interactive=True), tmux_env, chooser=chooser
        )
        assert plan.target is Target.TAB

    @pytest.mark.asyncio
    async def test_cancelled_chooser(self, mac_env):
        async def chooser(backends, env):
            raise SelectionCancelled("Interactive selection cancelled")

        plan = await create_plan_interactive("ls", Options(), mac_env, chooser=chooser)
        assert isinstance(plan, PlanError)
        assert plan.category is ErrorCategory.CANCELLED
        assert plan.exit_code == ExitCode.GENERIC_ERROR
