"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import os
import sys
from pathlib import Path

import pytest

# Local src/ first so the working tree is tested, not an installed copy
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

for module_name in list(sys.modules.keys()):
    if module_name.startswith("nscover"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep global config and the default database out of the real home."""
    from nscover.config import loader

    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "home" / "config.yaml")
    monkeypatch.setattr(
        loader, "DEFAULT_DATABASE_PATH", tmp_path / "home" / "data" / "nscover.sqlite"
    )
    for key in list(os.environ):
        if key.startswith("NSCOVER__"):
            monkeypatch.delenv(key)
