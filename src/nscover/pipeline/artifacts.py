"""Locate the coverage artifact from free-form ``dotnet test`` output.

The collector prints attachment paths, e.g.::

    Attachments:
      /src/App.Tests/TestResults/0f3c.../coverage.cobertura.xml

When the path is not printed (older SDKs, localized output, verbosity
settings) the output usually still mentions the results directory, which is
then searched on disk.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from nscover.config.constants import COVERAGE_ARTIFACT_NAME, RESULTS_DIR_HINT
from nscover.core.logging import get_logger

log = get_logger("pipeline.artifacts")

# An absolute path starts at a line start, whitespace, a quote, '(' or '='
# and is either POSIX (/...) or drive-letter (C:\... or C:/...).
_PATH_START = r"(?<![^\s\"'(=])(?:[A-Za-z]:[\\/]|/)"
_PATH_BODY = r"[^\r\n\"'<>|]*?"


@lru_cache(maxsize=8)
def _artifact_pattern(artifact_name: str) -> re.Pattern[str]:
    return re.compile(f"(?P<path>{_PATH_START}{_PATH_BODY}{re.escape(artifact_name)})(?![\\w.])")


@lru_cache(maxsize=8)
def _results_dir_pattern(hint: str) -> re.Pattern[str]:
    return re.compile(f"(?P<path>{_PATH_START}{_PATH_BODY}{re.escape(hint)})(?=[\\\\/\\s\"']|$)")


_START_RE = re.compile(_PATH_START)


def _pick_candidate(matched: str) -> Path:
    """Choose between a match and its whitespace-separated path suffixes.

    ``/a/b.dll /c/coverage.cobertura.xml`` matches as one span because paths
    may contain spaces. The longest candidate that exists on disk wins, else
    the shortest one.
    """
    candidates = [matched]
    for start in _START_RE.finditer(matched):
        if start.start() > 0:
            candidates.append(matched[start.start() :])
    for candidate in candidates:
        if Path(candidate).exists():
            return Path(candidate)
    return Path(candidates[-1])


def find_reported_path(output: str, artifact_name: str = COVERAGE_ARTIFACT_NAME) -> Path | None:
    """First absolute path in ``output`` ending with the artifact filename."""
    pattern = _artifact_pattern(artifact_name)
    for line in output.splitlines():
        match = pattern.search(line)
        if match:
            return _pick_candidate(match.group("path").strip())
    return None


def find_results_directory(output: str, hint: str = RESULTS_DIR_HINT) -> Path | None:
    """First absolute directory path in ``output`` ending with the results hint."""
    pattern = _results_dir_pattern(hint)
    for line in output.splitlines():
        match = pattern.search(line)
        if match:
            return _pick_candidate(match.group("path").strip())
    return None


def probe_directory(directory: Path, artifact_name: str = COVERAGE_ARTIFACT_NAME) -> Path | None:
    """Newest ``artifact_name`` beneath ``directory``, if any."""
    if not directory.is_dir():
        return None
    candidates = [p for p in directory.rglob(artifact_name) if p.is_file()]
    if not candidates:
        return None
    return max(candidates, key=lambda p: p.stat().st_mtime)


def find_coverage_artifact(
    output: str,
    *,
    project_dir: Path | None = None,
    artifact_name: str = COVERAGE_ARTIFACT_NAME,
    results_hint: str = RESULTS_DIR_HINT,
) -> Path | None:
    """Resolve the coverage artifact for one test run.

    1. An absolute path to the artifact printed in ``output``.
    2. Otherwise, if ``output`` mentions the results directory, search it on
       disk: the absolute directory printed, or ``project_dir/<hint>`` when
       only the bare name appears.

    Returns None when neither finds a file.
    """
    reported = find_reported_path(output, artifact_name)
    if reported is not None:
        log.debug("coverage_artifact_reported", path=str(reported))
        return reported

    if results_hint not in output:
        return None

    directories: list[Path] = []
    results_dir = find_results_directory(output, results_hint)
    if results_dir is not None:
        directories.append(results_dir)
    if project_dir is not None:
        directories.append(project_dir / results_hint)

    for directory in directories:
        found = probe_directory(directory, artifact_name)
        if found is not None:
            log.debug("coverage_artifact_probed", directory=str(directory), path=str(found))
            return found

    log.debug("coverage_artifact_missing", searched=[str(d) for d in directories])
    return None
