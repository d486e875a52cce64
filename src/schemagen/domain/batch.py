"""Batch orchestration of schema generation across specification base paths."""

from __future__ import annotations

import time
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from schemagen.domain.errors import EntryPointNotFoundError
from schemagen.domain.model import BatchResult, PackageOutcome, PackageResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from schemagen.domain.model import GenerationEntry, SchemaConfiguration
    from schemagen.domain.ports.generation import (
        GenerationEntrySource,
        ReferenceStore,
        SchemaGenerator,
        SpecsRepository,
        SummarySink,
    )

log = getLogger(__name__)

SPECIFICATION_PREFIX: Final[str] = "specification/"


def chunk_base_paths(base_paths: Sequence[str], batch_count: int) -> list[list[str]]:
    """Split ``base_paths`` into ``batch_count`` contiguous chunks of near-equal size.

    Concatenating the chunks in order yields the original sequence.
    """

    if batch_count < 1:
        raise ValueError(f"Batch count must be positive, got {batch_count}")

    size, remainder = divmod(len(base_paths), batch_count)
    chunks: list[list[str]] = []
    start = 0
    for index in range(batch_count):
        end = start + size + (1 if index < remainder else 0)
        chunks.append(list(base_paths[start:end]))
        start = end
    return chunks


def select_batch(base_paths: Sequence[str], batch_index: int, batch_count: int) -> list[str]:
    if not 0 <= batch_index < batch_count:
        raise ValueError(f"Batch index {batch_index} out of range for {batch_count} batches")
    return chunk_base_paths(base_paths, batch_count)[batch_index]


# Summary blocks end up in pull request descriptions, hence markdown.
def _details_block(summary: str, error: BaseException | None = None) -> str:
    lines = ["<details>", f"<summary>{summary}</summary>"]
    if error is not None:
        lines.extend(["", "```", str(error), "```"])
    lines.append("</details>")
    return "\n".join(lines) + "\n"


def success_block(base_path: str) -> str:
    return _details_block(f"Successfully generated types for base path '{base_path}'.")


def entry_failure_block(entry: GenerationEntry, error: BaseException) -> str:
    return _details_block(
        f"Failed to generate types for base path '{entry.base_path}' "
        f"and namespace '{entry.namespace}'",
        error,
    )


def base_path_failure_block(base_path: str, error: BaseException) -> str:
    return _details_block(
        f"Failed to generate types for base path '{base_path}' probably due to readme not "
        "found or due to any other file not found exception.",
        error,
    )


@dataclass(slots=True)
class BatchGenerator:
    """Run schema generation for base paths while isolating failures.

    A base path whose readme or entries cannot be resolved is skipped without a
    package record. A failing entry is recorded as a failed package and does not
    stop its siblings.
    """

    specs: SpecsRepository
    entry_source: GenerationEntrySource
    generator: SchemaGenerator
    reference_store: ReferenceStore
    summary: SummarySink | None = None

    def run(
        self,
        base_paths: Sequence[str],
        *,
        readme_files: Sequence[str] | None = None,
    ) -> BatchResult:
        result = BatchResult()
        for base_path in base_paths:
            result.extend(self._process_base_path(base_path, readme_files=readme_files))

        self.reference_store.save(result.schema_configs)
        return result

    def generate_single(self, base_path: str) -> list[SchemaConfiguration]:
        """Generate every enabled entry of ``base_path``, failing on the first error."""

        try:
            readme = self.specs.resolve_entry_point(base_path)
        except EntryPointNotFoundError as exc:
            raise EntryPointNotFoundError(
                f"Unable to find a readme for base path '{base_path}'. "
                "Please try running 'schemagen list-basepaths' to find the list of valid paths.",
                base_path=base_path,
            ) from exc

        namespaces = list(self.specs.api_versions_by_namespace(readme))
        configs: list[SchemaConfiguration] = []
        for entry in self.entry_source(base_path, namespaces):
            if entry.disabled:
                log.info("Path %s has been disabled for generation: %s", entry.base_path, entry)
                continue

            log.info("Using generation entry: %s", entry)
            configs.extend(self.generator(readme, entry))

        self.reference_store.save(configs)
        return configs

    def _write_summary(self, block: str) -> None:
        if self.summary is not None:
            self.summary.write(block)

    def _process_base_path(
        self,
        base_path: str,
        *,
        readme_files: Sequence[str] | None,
    ) -> BatchResult:
        try:
            readme = self.specs.resolve_entry_point(base_path)
            namespaces = list(self.specs.api_versions_by_namespace(readme))
            entries = [
                entry for entry in self.entry_source(base_path, namespaces) if not entry.disabled
            ]
            if readme_files is not None:
                entries = _restrict_to_readmes(entries, readme_files)

            self.reference_store.clear(entries)

            result = BatchResult()
            for entry in entries:
                result.extend(self._generate_entry(base_path, entry))
        except Exception as exc:  # noqa: BLE001
            log.warning("Skipping base path %s: %s", base_path, exc)
            block = base_path_failure_block(base_path, exc)
            self._write_summary(block)
            return BatchResult(log_blocks=[block])
        return result

    def _generate_entry(self, base_path: str, entry: GenerationEntry) -> BatchResult:
        try:
            readme = self.specs.resolve_entry_point(entry.readme_file or entry.base_path)
            package_name = self.specs.package_name(readme)

            started = time.perf_counter()
            configs = list(self.generator(readme, entry))
            elapsed_ms = (time.perf_counter() - started) * 1000
            log.info("Time taken to generate %s: %.0f ms", entry.base_path, elapsed_ms)
        except Exception as exc:
            log.exception("Caught exception processing generation entry %s", entry.base_path)
            block = entry_failure_block(entry, exc)
            self._write_summary(block)
            return BatchResult(
                packages=[PackageResult(entry.base_path, PackageOutcome.FAILED)],
                log_blocks=[block],
            )

        block = success_block(base_path)
        self._write_summary(block)
        return BatchResult(
            packages=[PackageResult(package_name, PackageOutcome.SUCCEEDED)],
            schema_configs=configs,
            log_blocks=[block],
        )


def _restrict_to_readmes(
    entries: Sequence[GenerationEntry],
    readme_files: Sequence[str],
) -> list[GenerationEntry]:
    selected: list[GenerationEntry] = []
    for entry in entries:
        prefix = SPECIFICATION_PREFIX + entry.base_path
        readme = next((name for name in readme_files if name.startswith(prefix)), None)
        if readme is None:
            continue
        entry.readme_file = readme
        selected.append(entry)
    return selected
