"""Configuration constants.

Values here describe the external toolchain's fixed conventions. Anything a
user may want to change lives in models.py.
"""

COVERAGE_ARTIFACT_NAME = "coverage.cobertura.xml"
"""File written by the XPlat Code Coverage collector."""

RESULTS_DIR_HINT = "TestResults"
"""Directory dotnet test writes collector attachments beneath."""

COVERAGE_COLLECTOR = "XPlat Code Coverage"

COLLECTOR_SETTING_PREFIX = "DataCollectionRunSettings.DataCollectors.DataCollector.Configuration"
"""Run-settings path for collector options passed after ``--``."""

REPORT_TOOL_PACKAGE_ID = "dotnet-reportgenerator-globaltool"
REPORT_TOOL_COMMAND = "reportgenerator"

REPORT_DIR_NAME = "coveragereport"
REPORT_HISTORY_DIR_NAME = "coveragehistory"
REPORT_INDEX_NAME = "index.html"

CONFIG_DIR_NAME = ".nscover"
