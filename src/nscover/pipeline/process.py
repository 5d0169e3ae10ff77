"""External process execution with concurrent stdout/stderr draining."""

from __future__ import annotations

import asyncio
import os
import shlex
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from nscover.core.logging import get_logger

log = get_logger("pipeline.process")

# Environment applied to every external command: no prompts, no telemetry,
# no colour codes in output that gets scanned for paths.
_COMMAND_ENV = {
    "DOTNET_CLI_TELEMETRY_OPTOUT": "1",
    "DOTNET_NOLOGO": "1",
    "DOTNET_SKIP_FIRST_TIME_EXPERIENCE": "1",
    "NO_COLOR": "1",
}


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Captured output of one external command."""

    command: tuple[str, ...]
    stdout: str
    stderr: str
    exit_code: int
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def combined(self) -> str:
        """stdout, followed by a labelled stderr section when stderr is not blank."""
        if not self.stderr.strip():
            return self.stdout
        return f"{self.stdout}\nERROR:\n{self.stderr}"

    @property
    def error_text(self) -> str:
        """Best failure description: stderr, else stdout, else the exit code."""
        for text in (self.stderr, self.stdout):
            if text.strip():
                return text.strip()
        return f"{shlex.join(self.command)} exited with code {self.exit_code}"


async def _drain(stream: asyncio.StreamReader | None) -> str:
    if stream is None:
        return ""
    data = await stream.read()
    return data.decode(errors="replace")


class ProcessRunner:
    """Runs one external command at a time.

    Both standard streams are read concurrently so a child filling one pipe
    cannot block while the other is being read. The runner only returns once
    both readers hit end-of-stream and the process has exited. Success and
    failure are the caller's decision.
    """

    def __init__(self, *, env: Mapping[str, str] | None = None) -> None:
        self._env = dict(env) if env is not None else None

    def _environment(self) -> dict[str, str]:
        env = dict(self._env) if self._env is not None else dict(os.environ)
        env.update(_COMMAND_ENV)
        return env

    async def run(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        cwd: Path | None = None,
    ) -> ProcessResult:
        """Run ``command`` with ``args``.

        Raises:
            OSError: If the process cannot be started (e.g. executable missing).
        """
        argv = (command, *args)
        log.debug("process_start", command=shlex.join(argv), cwd=str(cwd) if cwd else None)
        start = time.perf_counter()

        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
            env=self._environment(),
        )
        stdout, stderr = await asyncio.gather(_drain(proc.stdout), _drain(proc.stderr))
        exit_code = await proc.wait()

        result = ProcessResult(
            command=argv,
            stdout=stdout,
            stderr=stderr,
            exit_code=exit_code,
            duration_seconds=time.perf_counter() - start,
        )
        log.debug(
            "process_exit",
            command=argv[0],
            exit_code=exit_code,
            duration_s=round(result.duration_seconds, 2),
            stdout_bytes=len(stdout),
            stderr_bytes=len(stderr),
        )
        return result
