"""System event notification adapter.

Implements SystemEventPort by invoking a local command-line tool in
headless mode:

    <executable> system event --text <summary> --mode <mode>

The command runs with the inherited environment but a fixed, minimal PATH
and a hard timeout.
"""

import asyncio
import logging
import os
import subprocess

from intake.core.errors import NotificationError
from intake.core.ports import SystemEventPort

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PATH = "/usr/local/sbin:/usr/local/bin:/usr/sbin:/usr/bin:/sbin:/bin"


class CommandSystemEventAdapter(SystemEventPort):
    """Emits system events through an external command."""

    def __init__(
        self,
        executable: str = "openclaw",
        mode: str = "now",
        timeout_seconds: float = 5.0,
        search_path: str = DEFAULT_SEARCH_PATH,
    ):
        """Initialize the system event adapter.

        Args:
            executable: Command to run, resolved against ``search_path``.
            mode: Value passed to ``--mode``.
            timeout_seconds: Hard limit for the command; it is killed after.
            search_path: PATH given to the child process.
        """
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self.executable = executable
        self.mode = mode
        self.timeout_seconds = timeout_seconds
        self.search_path = search_path

    def build_command(self, text: str) -> list[str]:
        """Argument vector for one event; ``text`` is a single argument."""
        return [self.executable, "system", "event", "--text", text, "--mode", self.mode]

    def build_env(self) -> dict[str, str]:
        """Child environment: the current one with PATH pinned."""
        env = dict(os.environ)
        env["PATH"] = self.search_path
        return env

    async def emit(self, text: str) -> None:
        """Run the command and wait for it, up to the timeout.

        Raises:
            NotificationError: If the command cannot be started, times out,
                or exits with a non-zero status.
        """
        command = self.build_command(text)
        env = self.build_env()
        timeout = self.timeout_seconds

        def _run_command() -> subprocess.CompletedProcess[str]:
            """Synchronous wrapper for subprocess call."""
            try:
                return subprocess.run(
                    command,
                    capture_output=True,
                    text=True,
                    timeout=timeout,
                    env=env,
                    check=False,
                )
            except subprocess.TimeoutExpired as e:
                raise NotificationError(
                    f"{self.executable} timed out after {timeout:g} seconds"
                ) from e
            except OSError as e:
                raise NotificationError(f"Failed to run {self.executable}: {e}") from e

        # Run in executor to avoid blocking the event loop
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run_command)

        if result.returncode != 0:
            error_output = (result.stderr or result.stdout or "").strip()
            raise NotificationError(
                f"{self.executable} exited with status {result.returncode}: {error_output[:200]}"
            )

        logger.debug(f"System event emitted via {self.executable}")
