"""Schema generation by running the external autorest resource schema generator."""

from __future__ import annotations

import json
import shutil
import subprocess
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from schemagen.domain.errors import GenerationFailure
from schemagen.domain.model import SchemaConfiguration

if TYPE_CHECKING:
    from collections.abc import Sequence

    from schemagen.domain.model import GenerationEntry

log = getLogger(__name__)

Runner = Callable[[list[str]], subprocess.CompletedProcess[str]]

_STDERR_TAIL_LINES = 20


def _run_command(command: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(command, capture_output=True, text=True, check=False)  # noqa: S603


@dataclass(slots=True)
class AutorestGenerator:
    """Generate resource schemas for one entry and copy them into ``schemas_dir``.

    The generator writes ``<api-version>/<Namespace>.json`` files. Only files of the
    entry's namespace are kept; each contributes one reference per resource
    definition.
    """

    schemas_dir: Path
    schemas_base_uri: str
    command: str = "autorest"
    extra_args: Sequence[str] = field(default_factory=tuple)
    runner: Runner = field(default=_run_command)

    def __call__(self, readme: str, entry: GenerationEntry) -> list[SchemaConfiguration]:
        with tempfile.TemporaryDirectory(prefix="schemagen-") as tmp:
            output_dir = Path(tmp)
            command = [
                self.command,
                "--azureresourceschema",
                "--multiapi",
                f"--output-folder={output_dir}",
                *self.extra_args,
                readme,
            ]
            log.info("Generating %s (%s)", entry.base_path, entry.namespace)
            completed = self.runner(command)
            if completed.returncode != 0:
                tail = "\n".join((completed.stderr or "").splitlines()[-_STDERR_TAIL_LINES:])
                raise GenerationFailure(
                    f"autorest exited with code {completed.returncode} "
                    f"for '{entry.base_path}' ({entry.namespace})\n{tail}"
                )

            return [
                self._publish(schema_file, output_dir)
                for schema_file in sorted(output_dir.glob("*/*.json"))
                if schema_file.stem.lower() == entry.namespace.lower()
            ]

    def _publish(self, schema_file: Path, output_dir: Path) -> SchemaConfiguration:
        relative_path = schema_file.relative_to(output_dir).as_posix()
        target = self.schemas_dir / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(schema_file, target)

        document = json.loads(schema_file.read_text(encoding="utf-8"))
        definitions = document.get("resourceDefinitions", {})
        uri = f"{self.schemas_base_uri.rstrip('/')}/{relative_path}"
        return SchemaConfiguration(
            namespace=schema_file.stem,
            api_version=schema_file.parent.name,
            relative_path=relative_path,
            references=tuple(f"{uri}#/resourceDefinitions/{name}" for name in definitions),
        )
