"""Locations of the specification checkout and the generated schemas."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import ConfigurationError, MissingConfigurationError

APP_DIR_NAME: Final[str] = "schemagen"
DEFAULT_SPECS_REPO_URI: Final[str] = "https://github.com/Azure/azure-rest-api-specs"
_COMMIT_HASH: Final[re.Pattern[str]] = re.compile(r"[0-9a-fA-F]{7,40}")
SPECS_CHECKOUT_DIR_NAME: Final[str] = "azure-rest-api-specs"
DEFAULT_SCHEMAS_BASE_URI: Final[str] = "https://schema.management.azure.com/schemas"
AUTOGENERATED_RESOURCES_PATH: Final[str] = "common/autogeneratedResources.json"
SUMMARY_LOG_FILENAME: Final[str] = "summary.log"

ROOT_SCHEMA_PATHS: Final[tuple[str, ...]] = (
    "2019-04-01/deploymentTemplate.json",
    "common/definitions.json",
    AUTOGENERATED_RESOURCES_PATH,
    "common/manuallyAddedResources.json",
)


@dataclass(frozen=True, slots=True)
class SpecsConfig:
    specs_repo_uri: str
    specs_revision: str | None
    data_dir: Path
    schemas_dir: Path
    schemas_base_uri: str
    autogenlist_path: Path
    autorest_command: str = "autorest"

    @property
    def default_checkout_path(self) -> Path:
        return self.data_dir.expanduser().resolve() / SPECS_CHECKOUT_DIR_NAME

    @property
    def autogenerated_resources_path(self) -> Path:
        return self.schemas_dir / AUTOGENERATED_RESOURCES_PATH

    def pinned_revision(self) -> str:
        """Commit the specs checkout is pinned to; cloning without one is refused."""

        if self.specs_revision is None:
            raise MissingConfigurationError(
                "Missing configuration for: SCHEMAGEN_SPECS_REVISION "
                "(a commit hash is required to clone the specs repo)"
            )
        return self.specs_revision

    def schema_uri(self, relative_path: str) -> str:
        return f"{self.schemas_base_uri.rstrip('/')}/{relative_path}"

    def root_schema_uris(self) -> tuple[str, ...]:
        return tuple(self.schema_uri(path) for path in ROOT_SCHEMA_PATHS)


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    return Path(value).expanduser().resolve() if value and value.strip() else default


def get_specs_config() -> SpecsConfig:
    base_uri = os.getenv("SCHEMAGEN_SCHEMAS_BASE_URI", DEFAULT_SCHEMAS_BASE_URI).strip()
    if not base_uri.lower().startswith(("https://", "http://")):
        raise ConfigurationError(f"Schemas base URI must be an http(s) URL: {base_uri!r}")

    revision = (os.getenv("SCHEMAGEN_SPECS_REVISION") or "").strip() or None
    if revision is not None and not _COMMIT_HASH.fullmatch(revision):
        raise ConfigurationError(
            f"SCHEMAGEN_SPECS_REVISION must be a commit hash, got {revision!r}"
        )

    return SpecsConfig(
        specs_repo_uri=os.getenv("SCHEMAGEN_SPECS_REPO_URI", DEFAULT_SPECS_REPO_URI),
        specs_revision=revision,
        data_dir=_env_path("SCHEMAGEN_DATA_DIR", _default_data_dir()),
        schemas_dir=_env_path("SCHEMAGEN_SCHEMAS_DIR", Path("schemas").resolve()),
        schemas_base_uri=base_uri.rstrip("/"),
        autogenlist_path=_env_path("SCHEMAGEN_AUTOGENLIST", Path("autogenlist.json").resolve()),
        autorest_command=os.getenv("SCHEMAGEN_AUTOREST", "autorest"),
    )
