"""Tests for environment detection."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from elsewhere.detect import detect_environment, is_remote_session
from elsewhere.detect.apps import is_app_installed
from elsewhere.detect.process_tree import match_terminal_name, walk_process_tree
from elsewhere.detect.terminal import detect_current_terminal, detect_host_terminal
from elsewhere.models import BackendName, HostOS, TerminalProgram


def fake_ps(table: dict[int, tuple[str, int]]):
    """Build a ps runner from {pid: (comm, ppid)}."""

    def run(field: str, pid: int) -> str:
        if pid not in table:
            raise subprocess.CalledProcessError(1, ["ps"])
        comm, ppid = table[pid]
        return comm if field == "comm" else str(ppid)

    return run


class TestRemote:
    @pytest.mark.parametrize("var", ["SSH_TTY", "SSH_CONNECTION", "MOSH_CONNECTION"])
    def test_remote_markers(self, var):
        assert is_remote_session({var: "1"}) is True

    def test_local(self):
        assert is_remote_session({"TERM": "xterm"}) is False

    def test_empty_value_is_not_remote(self):
        assert is_remote_session({"SSH_TTY": ""}) is False


class TestCurrentTerminal:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("iTerm.app", TerminalProgram.ITERM2),
            ("iterm.app", TerminalProgram.ITERM2),
            ("Apple_Terminal", TerminalProgram.TERMINAL),
            ("VSCODE", TerminalProgram.VSCODE),
            ("Cursor", TerminalProgram.CURSOR),
            ("kitty", TerminalProgram.KITTY),
            ("ghostty", TerminalProgram.GHOSTTY),
            ("WarpTerminal", TerminalProgram.WARP),
            ("some-unknown-terminal", TerminalProgram.UNKNOWN),
        ],
    )
    def test_term_program(self, value, expected):
        assert detect_current_terminal({"TERM_PROGRAM": value}, walk=None) is expected

    def test_lc_terminal_fallback(self):
        env = {"LC_TERMINAL": "iTerm2"}
        assert detect_current_terminal(env, walk=None) is TerminalProgram.ITERM2

    def test_term_program_wins_over_lc_terminal(self):
        env = {"TERM_PROGRAM": "Apple_Terminal", "LC_TERMINAL": "iTerm2"}
        assert detect_current_terminal(env, walk=None) is TerminalProgram.TERMINAL

    def test_process_walk_fallback(self):
        env = {}
        assert detect_current_terminal(env, walk=lambda: TerminalProgram.KITTY) is (
            TerminalProgram.KITTY
        )

    def test_unknown_without_hints(self):
        assert detect_current_terminal({}, walk=lambda: None) is TerminalProgram.UNKNOWN

    def test_supported_flags(self):
        assert not TerminalProgram.VSCODE.is_supported
        assert not TerminalProgram.UNKNOWN.is_supported
        assert TerminalProgram.GHOSTTY.as_backend() is BackendName.GHOSTTY
        assert TerminalProgram.CURSOR.as_backend() is None


class TestHostTerminal:
    def test_lc_terminal(self):
        assert detect_host_terminal({"LC_TERMINAL": "iTerm2"}) is BackendName.ITERM2

    @pytest.mark.parametrize(
        "bundle,expected",
        [
            ("com.apple.Terminal", BackendName.TERMINAL),
            ("com.googlecode.iterm2", BackendName.ITERM2),
            ("net.kovidgoyal.kitty", BackendName.KITTY),
            ("com.mitchellh.ghostty", BackendName.GHOSTTY),
            ("dev.warp.Warp-Stable", BackendName.WARP),
        ],
    )
    def test_bundle_identifier(self, bundle, expected):
        assert detect_host_terminal({"__CFBundleIdentifier": bundle}) is expected

    def test_unsupported_hint_is_a_miss(self):
        assert detect_host_terminal({"__CFBundleIdentifier": "com.microsoft.VSCode"}) is None
        assert detect_host_terminal({"LC_TERMINAL": "vscode"}) is None

    def test_no_hint(self):
        assert detect_host_terminal({}) is None


class TestProcessTree:
    def test_finds_terminal_ancestor(self):
        ps = fake_ps({
            300: ("-zsh", 200),
            200: ("login", 100),
            100: ("/Applications/iTerm.app/Contents/MacOS/iTerm2", 1),
        })
        assert walk_process_tree(300, ps=ps) is TerminalProgram.ITERM2

    def test_stops_at_sshd(self):
        ps = fake_ps({
            300: ("bash", 200),
            200: ("sshd: user@pts/0", 100),
            100: ("kitty", 1),
        })
        assert walk_process_tree(300, ps=ps) is None

    def test_stops_at_init(self):
        ps = fake_ps({300: ("bash", 1)})
        assert walk_process_tree(300, ps=ps) is None

    def test_ps_failure_ends_walk(self):
        assert walk_process_tree(999, ps=fake_ps({})) is None

    def test_hop_limit(self):
        table = {pid: ("bash", pid - 1) for pid in range(2, 200)}
        table[150] = ("kitty", 149)
        assert walk_process_tree(199, ps=fake_ps(table), max_hops=10) is None
        assert walk_process_tree(199, ps=fake_ps(table)) is TerminalProgram.KITTY

    def test_warp_process_is_not_terminal_app(self):
        assert match_terminal_name("WarpTerminal") is TerminalProgram.WARP
        assert match_terminal_name("Terminal") is TerminalProgram.TERMINAL
        assert match_terminal_name("zsh") is None

    @pytest.mark.parametrize(
        "name",
        [
            "/System/Applications/Utilities/Terminal.app/Contents/MacOS/Terminal",
            "Terminal",
        ],
    )
    def test_terminal_app_by_executable(self, name):
        assert match_terminal_name(name) is TerminalProgram.TERMINAL

    @pytest.mark.parametrize(
        "name",
        ["/usr/libexec/gnome-terminal-server", "xfce4-terminal", "mate-terminal"],
    )
    def test_linux_terminals_are_not_terminal_app(self, name):
        assert match_terminal_name(name) is None

    def test_walk_skips_gnome_terminal(self):
        ps = fake_ps({
            300: ("bash", 200),
            200: ("/usr/libexec/gnome-terminal-server", 1),
        })
        assert walk_process_tree(300, ps=ps) is None


class TestApps:
    def test_kitty_on_path_counts_anywhere(self):
        assert is_app_installed(
            BackendName.KITTY, is_macos=False, which=lambda name: "/usr/bin/kitty"
        )

    def test_bundles_only_on_macos(self, tmp_path: Path):
        (tmp_path / "Applications" / "iTerm.app").mkdir(parents=True)
        assert not is_app_installed(
            BackendName.ITERM2, is_macos=False, which=lambda name: None, home=tmp_path
        )

    def test_user_applications_dir(self, tmp_path: Path):
        (tmp_path / "Applications" / "Ghostty.app").mkdir(parents=True)
        assert is_app_installed(
            BackendName.GHOSTTY, is_macos=True, which=lambda name: None, home=tmp_path
        )


class TestDetectEnvironment:
    def test_snapshot(self, tmp_path: Path):
        env = detect_environment(
            {"TMUX": "/tmp/tmux-501/default,1,0", "TERM_PROGRAM": "tmux", "LC_TERMINAL": "iTerm2"},
            platform="linux",
            which=lambda name: f"/usr/bin/{name}" if name == "tmux" else None,
            home=tmp_path,
            walk=None,
        )
        assert env.tmux.inside and env.tmux.available
        assert env.tmux.usable
        assert not env.zellij.inside
        assert env.is_remote is False
        assert env.host_os is HostOS.OTHER
        assert env.host_terminal is BackendName.ITERM2
        assert not any(env.gui_installed.values())

    def test_snapshot_is_read_only(self, tmp_path: Path):
        env = detect_environment(
            {}, platform="linux", which=lambda name: None, home=tmp_path, walk=None
        )
        with pytest.raises(TypeError):
            env.gui_installed[BackendName.KITTY] = True

    def test_to_dict(self, tmp_path: Path):
        env = detect_environment(
            {"SSH_TTY": "/dev/ttys001"},
            platform="linux",
            which=lambda name: None,
            home=tmp_path,
            walk=None,
        )
        data = env.to_dict()
        assert data["is_remote"] is True
        assert data["current_terminal"] == "unknown"
        assert data["host_terminal"] is None
