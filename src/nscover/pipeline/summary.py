"""Cobertura summary for a generated coverage artifact.

Only the totals are read. The collector writes them on the root element::

    <coverage line-rate="0.85" branch-rate="0.5" lines-covered="170" lines-valid="200" ...>

When the attributes are missing they are recomputed from the class-level
``<line>`` elements.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path


class CoverageParseError(Exception):
    """Error parsing coverage data."""


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    lines_found: int
    lines_hit: int
    line_rate: float
    branch_rate: float | None = None


def _float_attr(element: ET.Element, name: str) -> float | None:
    value = element.get(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def summarize_cobertura(path: Path) -> CoverageSummary:
    """Read line/branch totals from a Cobertura XML file.

    Raises:
        CoverageParseError: If the file is missing, unreadable or not Cobertura XML.
    """
    if not path.is_file():
        raise CoverageParseError(f"Cobertura file not found: {path}")
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise CoverageParseError(f"Invalid Cobertura XML: {e}") from e
    except OSError as e:
        raise CoverageParseError(f"Cannot read Cobertura file {path}: {e}") from e

    for elem in root.iter():
        if "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]
    if root.tag != "coverage":
        raise CoverageParseError(f"Unexpected root element <{root.tag}> in {path}")

    line_rate = _float_attr(root, "line-rate")
    lines_valid = _float_attr(root, "lines-valid")
    lines_covered = _float_attr(root, "lines-covered")
    branch_rate = _float_attr(root, "branch-rate")

    if line_rate is not None and lines_valid is not None and lines_covered is not None:
        return CoverageSummary(
            lines_found=int(lines_valid),
            lines_hit=int(lines_covered),
            line_rate=line_rate,
            branch_rate=branch_rate,
        )

    # Same line may appear in several classes of one file; keep the max hits
    hits: dict[tuple[str, int], int] = {}
    for cls in root.iter("class"):
        filename = cls.get("filename", "")
        for line in cls.findall("./lines/line"):
            try:
                key = (filename, int(line.get("number", 0)))
                count = int(line.get("hits", 0))
            except ValueError as e:
                raise CoverageParseError(f"Invalid <line> in {path}: {e}") from e
            hits[key] = max(hits.get(key, 0), count)

    found = len(hits)
    hit = sum(1 for count in hits.values() if count > 0)
    return CoverageSummary(
        lines_found=found,
        lines_hit=hit,
        line_rate=line_rate if line_rate is not None else (hit / found if found else 0.0),
        branch_rate=branch_rate,
    )
