"""Value objects shared by the cataloging and generation workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


@dataclass(frozen=True, slots=True)
class ResourceDescriptor:
    """A resource type paired with one API version it is available in."""

    type: str
    api_version: str


@dataclass(slots=True)
class GenerationEntry:
    """A unit of generation work for one base path and namespace.

    ``readme_file`` overrides the readme resolved from ``base_path`` and is the only
    field the batch generator mutates. Disabled entries remain enumerable but are
    never generated.
    """

    base_path: str
    namespace: str
    readme_file: str | None = None
    disabled: bool = False


@dataclass(frozen=True, slots=True)
class SchemaConfiguration:
    """Describes one schema file produced by a generator run."""

    namespace: str
    api_version: str
    relative_path: str
    references: tuple[str, ...] = ()


class PackageOutcome(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PackageResult:
    package_name: str
    outcome: PackageOutcome
    path: tuple[str, ...] = ("schemas",)


@dataclass(slots=True)
class BatchResult:
    """Outcome of a batch generation run, in processing order."""

    packages: list[PackageResult] = field(default_factory=list)
    schema_configs: list[SchemaConfiguration] = field(default_factory=list)
    log_blocks: list[str] = field(default_factory=list)

    def extend(self, other: BatchResult) -> None:
        """Append ``other`` after this result, in place."""

        self.packages.extend(other.packages)
        self.schema_configs.extend(other.schema_configs)
        self.log_blocks.extend(other.log_blocks)

    @property
    def failed(self) -> list[PackageResult]:
        return [package for package in self.packages if package.outcome is PackageOutcome.FAILED]
