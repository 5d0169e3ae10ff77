"""Tests for ProcessRunner and ProcessResult."""

import os
import sys
from pathlib import Path

import pytest

from nscover.pipeline.process import ProcessResult, ProcessRunner


class TestProcessResult:
    def test_succeeded_on_zero_exit(self) -> None:
        assert ProcessResult(("x",), "", "", 0).succeeded
        assert not ProcessResult(("x",), "", "", 1).succeeded

    def test_combined_labels_stderr(self) -> None:
        result = ProcessResult(("x",), "out", "err", 1)

        assert result.combined == "out\nERROR:\nerr"

    def test_combined_without_stderr_is_stdout(self) -> None:
        assert ProcessResult(("x",), "out", "  \n", 0).combined == "out"

    @pytest.mark.parametrize(
        ("stdout", "stderr", "expected"),
        [
            ("out", "err\n", "err"),
            ("out\n", "", "out"),
            ("", "", "dotnet test p.csproj exited with code 3"),
        ],
    )
    def test_error_text_fallbacks(self, stdout: str, stderr: str, expected: str) -> None:
        result = ProcessResult(("dotnet", "test", "p.csproj"), stdout, stderr, 3)

        assert result.error_text == expected


@pytest.mark.slow
class TestProcessRunner:
    """Runs the current interpreter as a stand-in external tool."""

    @pytest.mark.asyncio
    async def test_captures_both_streams_and_exit_code(self) -> None:
        runner = ProcessRunner()

        result = await runner.run(
            sys.executable,
            ["-c", "import sys; print('hello'); print('oops', file=sys.stderr); sys.exit(2)"],
        )

        assert result.stdout.strip() == "hello"
        assert result.stderr.strip() == "oops"
        assert result.exit_code == 2
        assert result.command[0] == sys.executable

    @pytest.mark.asyncio
    async def test_large_output_on_both_streams_does_not_block(self) -> None:
        """Both pipes are drained concurrently."""
        script = (
            "import sys\n"
            "for _ in range(2000):\n"
            "    sys.stdout.write('o' * 100 + '\\n')\n"
            "    sys.stderr.write('e' * 100 + '\\n')\n"
        )

        result = await ProcessRunner().run(sys.executable, ["-c", script])

        assert result.succeeded
        assert len(result.stdout.splitlines()) == 2000
        assert len(result.stderr.splitlines()) == 2000

    @pytest.mark.asyncio
    async def test_working_directory_and_environment(self, tmp_path: Path) -> None:
        result = await ProcessRunner(env={**os.environ, "MARKER": "1"}).run(
            sys.executable,
            ["-c", "import os; print(os.getcwd()); print(os.environ['MARKER'], os.environ['DOTNET_NOLOGO'])"],
            cwd=tmp_path,
        )

        cwd_line, env_line = result.stdout.splitlines()
        assert Path(cwd_line).resolve() == tmp_path.resolve()
        assert env_line == "1 1"

    @pytest.mark.asyncio
    async def test_missing_executable_raises_oserror(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            await ProcessRunner().run(str(tmp_path / "no-such-tool"))

    @pytest.mark.asyncio
    async def test_ci_variable_not_injected(self) -> None:
        env = {key: value for key, value in os.environ.items() if key != "CI"}

        result = await ProcessRunner(env=env).run(
            sys.executable, ["-c", "import os; print(os.environ.get('CI', '-'))"]
        )

        assert result.stdout.strip() == "-"
