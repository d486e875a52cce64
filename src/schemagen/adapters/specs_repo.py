"""Access to a local checkout of the REST API specification repository."""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from schemagen.domain.errors import EntryPointNotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence

log = getLogger(__name__)

SPECIFICATION_DIR: Final[str] = "specification"
README_NAME: Final[str] = "readme.md"

_INPUT_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?P<namespace>[A-Za-z][A-Za-z0-9]*(?:\.[A-Za-z0-9]+)+)"
    r"/(?:stable|preview)"
    r"/(?P<version>\d{4}-\d{2}-\d{2}[A-Za-z0-9-]*)/"
)


@dataclass(slots=True)
class LocalSpecsRepository:
    """Resolve readmes, namespaces and package names under ``root``."""

    root: Path

    def discover_base_paths(self) -> list[str]:
        """Return every ``<service>/resource-manager`` base path that has a readme."""

        spec_root = self.root / SPECIFICATION_DIR
        readmes = spec_root.glob(f"*/resource-manager/{README_NAME}")
        return sorted(readme.parent.relative_to(spec_root).as_posix() for readme in readmes)

    def resolve_entry_point(self, base_path: str) -> str:
        relative = base_path.strip("/")
        if relative.lower().endswith(README_NAME):
            candidate = self.root / relative
        else:
            candidate = self.root / SPECIFICATION_DIR / relative / README_NAME

        if not candidate.is_file():
            raise EntryPointNotFoundError(
                f"Unable to find a readme under '{self.root}' for base path '{base_path}'",
                base_path=base_path,
            )
        return str(candidate)

    def api_versions_by_namespace(self, readme: str) -> dict[str, list[str]]:
        """Collect the API versions of each namespace listed in the readme's input files."""

        text = Path(readme).read_text(encoding="utf-8")
        canonical: dict[str, str] = {}
        versions: dict[str, set[str]] = {}
        for match in _INPUT_FILE_PATTERN.finditer(text):
            namespace = canonical.setdefault(match["namespace"].lower(), match["namespace"])
            versions.setdefault(namespace, set()).add(match["version"])
        return {namespace: sorted(found) for namespace, found in versions.items()}

    def package_name(self, readme: str) -> str:
        readme_path = Path(readme).resolve()
        spec_root = (self.root / SPECIFICATION_DIR).resolve()
        if readme_path.is_relative_to(spec_root):
            return readme_path.parent.relative_to(spec_root).as_posix()
        return readme_path.parent.name


def _git(args: Sequence[str], *, cwd: Path | None = None) -> None:
    log.info("Running git %s", " ".join(args))
    subprocess.run(["git", *args], cwd=cwd, check=True)  # noqa: S603, S607


def clone_specs_repo(path: Path, uri: str, revision: str) -> Path:
    """Ensure ``path`` holds a checkout of ``uri`` at ``revision`` and return it.

    An existing checkout is refreshed: ``revision`` is fetched from ``uri`` and the
    work tree is detached at exactly the fetched commit.
    """

    if not (path / ".git").exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        _git(["clone", "--no-checkout", uri, str(path)])

    _git(["fetch", uri, revision], cwd=path)
    _git(["checkout", "--force", "--detach", "FETCH_HEAD"], cwd=path)
    return path
