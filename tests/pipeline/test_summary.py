"""Tests for the Cobertura summary reader."""

from pathlib import Path

import pytest

from nscover.pipeline.summary import CoverageParseError, summarize_cobertura

WITH_TOTALS = """<?xml version="1.0" encoding="utf-8"?>
<coverage line-rate="0.85" branch-rate="0.5" lines-covered="170" lines-valid="200" version="1.9">
  <packages />
</coverage>
"""

WITHOUT_TOTALS = """<?xml version="1.0"?>
<coverage>
  <packages>
    <package name="App.Core">
      <classes>
        <class name="App.Core.A" filename="A.cs">
          <lines>
            <line number="1" hits="2" />
            <line number="2" hits="0" />
          </lines>
        </class>
        <class name="App.Core.A/Nested" filename="A.cs">
          <lines>
            <line number="2" hits="1" />
            <line number="3" hits="0" />
          </lines>
        </class>
      </classes>
    </package>
  </packages>
</coverage>
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "coverage.cobertura.xml"
    path.write_text(text)
    return path


class TestSummarizeCobertura:
    def test_root_totals(self, tmp_path: Path) -> None:
        summary = summarize_cobertura(_write(tmp_path, WITH_TOTALS))

        assert summary.line_rate == pytest.approx(0.85)
        assert summary.lines_found == 200
        assert summary.lines_hit == 170
        assert summary.branch_rate == pytest.approx(0.5)

    def test_recomputed_from_lines(self, tmp_path: Path) -> None:
        """Lines repeated across classes of one file count once, with max hits."""
        summary = summarize_cobertura(_write(tmp_path, WITHOUT_TOTALS))

        assert summary.lines_found == 3
        assert summary.lines_hit == 2
        assert summary.line_rate == pytest.approx(2 / 3)
        assert summary.branch_rate is None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CoverageParseError):
            summarize_cobertura(tmp_path / "nope.xml")

    def test_invalid_xml(self, tmp_path: Path) -> None:
        with pytest.raises(CoverageParseError):
            summarize_cobertura(_write(tmp_path, "<coverage"))

    def test_wrong_root(self, tmp_path: Path) -> None:
        with pytest.raises(CoverageParseError):
            summarize_cobertura(_write(tmp_path, "<CoverageSession />"))

    def test_unreadable_file_raises_parse_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Read failures surface as CoverageParseError, not OSError."""
        path = _write(tmp_path, WITH_TOTALS)

        def denied(_source: object) -> None:
            raise PermissionError("denied")

        monkeypatch.setattr("nscover.pipeline.summary.ET.parse", denied)

        with pytest.raises(CoverageParseError, match="Cannot read"):
            summarize_cobertura(path)
