# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
External tool invocation.

Validators shell out to exactly two tools: `codesign --verify` on macOS and
`dpkg --contents` on Linux. Both go through run_tool, which runs the
process without a shell, captures stdout and stderr, enforces a timeout
and turns every failure mode into a ToolError. Nothing is retried: a tool
that fails is reporting a real defect in the build.
"""

import asyncio
import time
from dataclasses import dataclass

from packcheck.config.exceptions import ToolError
from packcheck.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ToolResult:
    """Captured outcome of one tool run."""

    argv: list[str]
    exit_code: int
    stdout: str
    stderr: str
    elapsed_seconds: float

    @property
    def output(self) -> str:
        """stdout followed by stderr. codesign reports on stderr."""
        return self.stdout + self.stderr


async def run_tool(
    argv: list[str],
    timeout_seconds: int = 120,
    check: bool = True,
) -> ToolResult:
    """
    Run an external tool and wait for it to finish.

    Args:
        argv: Executable followed by its arguments.
        timeout_seconds: Hard limit; the process is killed when it expires.
        check: Raise ToolError on a non-zero exit code. Callers that need to
               inspect the output of a failing run pass False.

    Raises:
        ToolError: Executable not found, timeout, or (with check) non-zero exit.
    """
    start = time.monotonic()

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as err:
        logger.error("Tool not found", extra={"argv": argv})
        raise ToolError(f"{argv[0]} executable not found", argv) from err

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout_seconds)
    except asyncio.TimeoutError as err:
        process.kill()
        await process.wait()
        logger.warning(
            "Tool timed out",
            extra={"argv": argv, "timeout_seconds": timeout_seconds},
        )
        raise ToolError(f"{argv[0]} timed out after {timeout_seconds}s", argv) from err

    elapsed = time.monotonic() - start
    result = ToolResult(
        argv=list(argv),
        exit_code=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
        elapsed_seconds=elapsed,
    )

    logger.debug(
        "Tool finished",
        extra={
            "argv": argv,
            "exit_code": result.exit_code,
            "elapsed_seconds": round(elapsed, 3),
        },
    )

    if check and result.exit_code != 0:
        raise ToolError(
            f"{argv[0]} exited with code {result.exit_code}",
            argv,
            exit_code=result.exit_code,
            output=result.output,
        )

    return result
