"""JSON report of the packages processed by a batch run."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from schemagen.domain.model import PackageOutcome

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from schemagen.domain.model import PackageResult


class PackagePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    path: list[str]
    package_name: str = Field(alias="packageName")
    result: PackageOutcome


class PackageReport(BaseModel):
    packages: list[PackagePayload] = Field(default_factory=list)

    @classmethod
    def from_results(cls, packages: Sequence[PackageResult]) -> PackageReport:
        return cls(
            packages=[
                PackagePayload(
                    path=list(package.path),
                    package_name=package.package_name,
                    result=package.outcome,
                )
                for package in packages
            ]
        )


def write_package_report(path: Path, packages: Sequence[PackageResult]) -> PackageReport:
    report = PackageReport.from_results(packages)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.model_dump_json(by_alias=True, indent=2) + "\n", encoding="utf-8")
    return report
