"""Report generator availability: list, install, re-check."""

from __future__ import annotations

from nscover.config.models import ToolsConfig
from nscover.core.logging import get_logger
from nscover.pipeline.commands import tool_install_args, tool_list_args
from nscover.pipeline.process import ProcessRunner

log = get_logger("pipeline.tools")


class ReportToolProvisioner:
    """Ensures the report generator global tool is installed.

    Checking and installing are idempotent, so this runs before every
    pipeline invocation.
    """

    def __init__(self, runner: ProcessRunner, tools: ToolsConfig) -> None:
        self._runner = runner
        self._tools = tools

    @property
    def package_id(self) -> str:
        return self._tools.report_package_id

    async def is_installed(self) -> bool:
        """Scan ``dotnet tool list --global`` output for the package id."""
        try:
            result = await self._runner.run(self._tools.dotnet_executable, tool_list_args())
        except OSError as e:
            log.warning("tool_list_failed", error=str(e))
            return False
        if not result.succeeded:
            log.warning("tool_list_failed", exit_code=result.exit_code, error=result.error_text)
            return False
        return self.package_id.lower() in result.stdout.lower()

    async def install(self) -> bool:
        try:
            result = await self._runner.run(
                self._tools.dotnet_executable, tool_install_args(self.package_id)
            )
        except OSError as e:
            log.warning("tool_install_failed", package=self.package_id, error=str(e))
            return False
        if not result.succeeded:
            log.warning(
                "tool_install_failed",
                package=self.package_id,
                exit_code=result.exit_code,
                error=result.error_text,
            )
        return result.succeeded

    async def ensure_available(self) -> bool:
        """True once the tool is confirmed present, installing it if needed."""
        if await self.is_installed():
            return True
        log.info("report_tool_installing", package=self.package_id)
        await self.install()
        installed = await self.is_installed()
        log.info("report_tool_checked", package=self.package_id, installed=installed)
        return installed
