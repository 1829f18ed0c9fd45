"""Command dispatcher - fire-and-forget shell launches

A command string is handed to the platform shell in a detached process.
The caller never waits on it and never sees its exit status or output.
Failures to start the shell are logged only; they are not reported back
to the user.
"""

import os
import subprocess
import sys
from typing import List

from loguru import logger

from ...utils import CommandLaunchError


def build_shell_invocation(command: str):
    """Return (args, popen_kwargs) running `command` in the platform shell"""
    if sys.platform == "win32":
        shell = os.environ.get("COMSPEC", "cmd.exe")
        # /s keeps inner quotes of the command intact
        args = f'"{shell}" /d /s /c "{command}"'
        kwargs = {
            "creationflags": subprocess.CREATE_NEW_CONSOLE
            | subprocess.CREATE_NEW_PROCESS_GROUP,
        }
        return args, kwargs

    shell = os.environ.get("SHELL") or "/bin/sh"
    args = [shell, "-c", command]
    kwargs = {
        "start_new_session": True,
        "stdin": subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
    }
    return args, kwargs


class CommandDispatcher:
    """Launch shell commands without blocking the event loop"""

    def __init__(self):
        self._children: List[subprocess.Popen] = []

    @property
    def running_children(self) -> int:
        self._reap()
        return len(self._children)

    def launch(self, command: str) -> bool:
        """Start `command` detached

        Returns:
            True if the shell process was started
        """
        self._reap()
        try:
            process = self._spawn(command)
        except CommandLaunchError as e:
            logger.error("{} ({})", e.message, e.context.get("command"))
            return False

        self._children.append(process)
        logger.info("Launched command (pid {}): {}", process.pid, command)
        return True

    def _spawn(self, command: str) -> subprocess.Popen:
        args, kwargs = build_shell_invocation(command)
        try:
            return subprocess.Popen(args, close_fds=True, **kwargs)
        except (OSError, ValueError) as e:
            raise CommandLaunchError(
                f"Could not start shell: {e}", command=command, original_exception=e
            ) from e

    def _reap(self) -> None:
        # poll() collects exit status so finished children don't linger as zombies
        self._children = [p for p in self._children if p.poll() is None]
