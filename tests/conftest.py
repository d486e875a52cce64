from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from schemagen.config import SpecsConfig
from tests.support.schemas import BASE_URI

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def specs_config(tmp_path: Path) -> SpecsConfig:
    return SpecsConfig(
        specs_repo_uri="https://example.invalid/specs.git",
        specs_revision="0123abcd",
        data_dir=tmp_path / "data",
        schemas_dir=tmp_path / "schemas",
        schemas_base_uri=BASE_URI,
        autogenlist_path=tmp_path / "autogenlist.json",
    )
