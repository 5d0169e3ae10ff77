"""Fixtures for solution parsing tests."""

from pathlib import Path

import pytest

from tests.solution.layout import make_solution


@pytest.fixture
def solution_dir(tmp_path: Path) -> Path:
    return make_solution(tmp_path / "repo")
