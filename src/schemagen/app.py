"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TextIO

from schemagen.adapters.autogenlist import AutoGenList
from schemagen.adapters.autorest import AutorestGenerator
from schemagen.adapters.reference_store import JsonReferenceStore
from schemagen.adapters.reports import write_package_report
from schemagen.adapters.schema_documents import HttpSchemaDocumentSource, LocalSchemaDocumentSource
from schemagen.adapters.specs_repo import LocalSpecsRepository, clone_specs_repo
from schemagen.adapters.summary_log import open_summary_log
from schemagen.config import AUTOGENERATED_RESOURCES_PATH, SUMMARY_LOG_FILENAME, get_specs_config
from schemagen.domain.batch import BatchGenerator, select_batch
from schemagen.domain.catalog import build_resource_catalog
from schemagen.domain.schema_loader import SchemaLoader

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from schemagen.config import SpecsConfig
    from schemagen.domain.catalog import ResourceCatalog
    from schemagen.domain.model import BatchResult, SchemaConfiguration
    from schemagen.domain.ports import DocumentSource, SchemaGenerator

log = getLogger(__name__)


def resolve_checkout(local_path: Path | None, config: SpecsConfig) -> Path:
    """Return the specs checkout to use, cloning the pinned revision when none is given."""

    if local_path is not None:
        return local_path.expanduser().resolve()

    revision = config.pinned_revision()
    checkout = config.default_checkout_path
    log.info("Using %s at %s in %s", config.specs_repo_uri, revision, checkout)
    return clone_specs_repo(checkout, config.specs_repo_uri, revision)


def _default_generator(config: SpecsConfig) -> AutorestGenerator:
    return AutorestGenerator(
        schemas_dir=config.schemas_dir,
        schemas_base_uri=config.schemas_base_uri,
        command=config.autorest_command,
    )


def _reference_store(config: SpecsConfig) -> JsonReferenceStore:
    return JsonReferenceStore(
        path=config.autogenerated_resources_path,
        document_id=config.schema_uri(AUTOGENERATED_RESOURCES_PATH) + "#",
    )


def generate_all(
    *,
    local_path: Path | None = None,
    batch_index: int | None = None,
    batch_count: int | None = None,
    readme_files: Sequence[str] | None = None,
    output_path: Path | None = None,
    summary_log_path: Path | None = None,
    config: SpecsConfig | None = None,
    generator: SchemaGenerator | None = None,
    console: TextIO | None = None,
) -> BatchResult:
    """Generate schemas for every base path of the checkout (or one batch of them)."""

    effective_config = config or get_specs_config()
    checkout = resolve_checkout(local_path, effective_config)
    specs = LocalSpecsRepository(checkout)
    base_paths = specs.discover_base_paths()

    if summary_log_path is None:
        summary_log_path = checkout / SUMMARY_LOG_FILENAME
        log.info("Summary path not passed, using default value: %s", summary_log_path)
    summary_log_path = summary_log_path.expanduser().resolve()

    if batch_index is not None and batch_count is not None:
        base_paths = select_batch(base_paths, batch_index, batch_count)

    log.info("Starting schema generation for %s base paths", len(base_paths))
    with open_summary_log(summary_log_path, console=console) as summary:
        batch = BatchGenerator(
            specs=specs,
            entry_source=AutoGenList.from_file(effective_config.autogenlist_path),
            generator=generator or _default_generator(effective_config),
            reference_store=_reference_store(effective_config),
            summary=summary,
        )
        result = batch.run(base_paths, readme_files=readme_files)

    if output_path is not None:
        write_package_report(output_path.expanduser().resolve(), result.packages)

    log.info(
        "Finished schema generation: packages=%s, failed=%s, schemas=%s",
        len(result.packages),
        len(result.failed),
        len(result.schema_configs),
    )
    return result


def generate_single(
    *,
    base_path: str,
    local_path: Path | None = None,
    config: SpecsConfig | None = None,
    generator: SchemaGenerator | None = None,
) -> list[SchemaConfiguration]:
    """Generate schemas for a single base path; any failure aborts the run."""

    effective_config = config or get_specs_config()
    checkout = resolve_checkout(local_path, effective_config)
    specs = LocalSpecsRepository(checkout)
    batch = BatchGenerator(
        specs=specs,
        entry_source=AutoGenList.from_file(effective_config.autogenlist_path),
        generator=generator or _default_generator(effective_config),
        reference_store=_reference_store(effective_config),
    )
    return batch.generate_single(base_path)


def list_base_paths(
    *,
    local_path: Path | None = None,
    config: SpecsConfig | None = None,
) -> list[str]:
    effective_config = config or get_specs_config()
    checkout = resolve_checkout(local_path, effective_config)
    return LocalSpecsRepository(checkout).discover_base_paths()


def list_resources(
    *,
    remote: bool = False,
    config: SpecsConfig | None = None,
    source: DocumentSource | None = None,
) -> ResourceCatalog:
    """Build the resource catalog from the well-known root schemas."""

    effective_config = config or get_specs_config()
    if source is not None:
        return _build_catalog(source, effective_config)
    if remote:
        with HttpSchemaDocumentSource() as http_source:
            return _build_catalog(http_source, effective_config)

    local_source = LocalSchemaDocumentSource(
        base_uri=effective_config.schemas_base_uri,
        schemas_dir=effective_config.schemas_dir,
    )
    return _build_catalog(local_source, effective_config)


def _build_catalog(source: DocumentSource, config: SpecsConfig) -> ResourceCatalog:
    loader = SchemaLoader(source, trusted_base_uri=config.schemas_base_uri)
    return build_resource_catalog(config.root_schema_uris(), loader)
