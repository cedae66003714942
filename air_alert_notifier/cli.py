"""Helpers for running the external notification tools.

Provides an async `run_cmd` wrapper and `find_binary`.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


async def run_cmd(
    cmd: list[str], timeout: float | None = 10
) -> Tuple[int, str, str]:
    """Run a command asynchronously and return (returncode, stdout, stderr).

    Args:
        cmd: Command and arguments as a list (e.g., ["mpg123", "-q", "on.mp3"])
        timeout: Seconds to wait for completion, or None to wait until the
            command exits (dialogs stay open until the user closes them)

    Returns:
        Tuple of (return_code, stdout, stderr) where:
        - return_code: process exit code, 124 for timeout, 127 for not found
        - stdout: Command standard output, decoded and stripped
        - stderr: Command standard error, decoded and stripped

    Example:
        >>> rc, out, err = await run_cmd(["echo", "hello"], timeout=5)
        >>> print(f"Return code: {rc}, Output: {out}")
        Return code: 0, Output: hello
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        logger.debug("Command not found: %s", cmd[0] if cmd else "")
        return 127, "", "not found"

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _kill(process)
        logger.warning("Command timed out after %ss: %s", timeout, " ".join(cmd))
        return 124, "", "timeout"
    except asyncio.CancelledError:
        # reap the child even though this task is being cancelled
        await asyncio.shield(_kill(process))
        raise
    return (
        process.returncode or 0,
        stdout.decode(errors="replace").strip(),
        stderr.decode(errors="replace").strip(),
    )


async def _kill(process: asyncio.subprocess.Process) -> None:
    try:
        process.kill()
    except ProcessLookupError:
        pass
    await process.wait()


def find_binary(name: str) -> Optional[str]:
    """Return a path to ``name`` or None if it is not installed.

    Prefers the usual system locations over PATH so a user-local shim does
    not shadow the packaged tool.
    """
    for prefix in ("/usr/bin", "/usr/local/bin"):
        found = shutil.which(f"{prefix}/{name}")
        if found:
            return found
    return shutil.which(name)
