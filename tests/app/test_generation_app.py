from __future__ import annotations

import io
import json
from dataclasses import replace
from typing import TYPE_CHECKING

import pytest

from schemagen.app import generate_all, generate_single, list_base_paths, list_resources
from schemagen.config import MissingConfigurationError
from schemagen.domain.errors import EntryPointNotFoundError, GenerationFailure
from schemagen.domain.model import PackageOutcome, SchemaConfiguration
from tests.support.generation import FakeGenerator
from tests.support.schemas import BASE_URI, resource_schema, write_json, write_readme

if TYPE_CHECKING:
    from pathlib import Path

    from schemagen.config import SpecsConfig

COMPUTE_REF = f"{BASE_URI}/2020-06-01/Microsoft.Compute.json#/resourceDefinitions/virtualMachines"


@pytest.fixture
def checkout(tmp_path: Path) -> Path:
    root = tmp_path / "specs"
    write_readme(root, "compute/resource-manager", ["Microsoft.Compute/stable/2020-06-01/a.json"])
    write_readme(root, "web/resource-manager", ["Microsoft.Web/stable/2022-03-01/b.json"])
    return root


def _compute_config() -> SchemaConfiguration:
    return SchemaConfiguration(
        namespace="Microsoft.Compute",
        api_version="2020-06-01",
        relative_path="2020-06-01/Microsoft.Compute.json",
        references=(COMPUTE_REF,),
    )


def test_generate_all_writes_report_summary_and_references(
    checkout: Path,
    tmp_path: Path,
    specs_config: SpecsConfig,
) -> None:
    generator = FakeGenerator(
        {
            "compute/resource-manager": [_compute_config()],
            "web/resource-manager": GenerationFailure("autorest crashed"),
        }
    )
    console = io.StringIO()
    report_path = tmp_path / "report.json"

    result = generate_all(
        local_path=checkout,
        output_path=report_path,
        summary_log_path=tmp_path / "summary.log",
        config=specs_config,
        generator=generator,
        console=console,
    )

    assert [(p.package_name, p.outcome) for p in result.packages] == [
        ("compute/resource-manager", PackageOutcome.SUCCEEDED),
        ("web/resource-manager", PackageOutcome.FAILED),
    ]
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert [package["result"] for package in report["packages"]] == ["succeeded", "failed"]

    summary = (tmp_path / "summary.log").read_text(encoding="utf-8")
    assert summary.count("<details>") == 2
    assert "autorest crashed" in summary
    assert console.getvalue() == summary

    index = json.loads(specs_config.autogenerated_resources_path.read_text(encoding="utf-8"))
    assert index["oneOf"] == [{"$ref": COMPUTE_REF}]
    assert index["id"] == f"{BASE_URI}/common/autogeneratedResources.json#"


def test_generate_all_runs_only_the_selected_batch(
    checkout: Path,
    specs_config: SpecsConfig,
) -> None:
    generator = FakeGenerator({})

    result = generate_all(
        local_path=checkout,
        batch_index=1,
        batch_count=2,
        config=specs_config,
        generator=generator,
        console=io.StringIO(),
    )

    assert [p.package_name for p in result.packages] == ["web/resource-manager"]
    assert [base_path for _, base_path in generator.calls] == ["web/resource-manager"]
    assert (checkout / "summary.log").is_file()


def test_generate_single_fails_fast(checkout: Path, specs_config: SpecsConfig) -> None:
    generator = FakeGenerator({"compute/resource-manager": GenerationFailure("broken")})

    with pytest.raises(GenerationFailure):
        generate_single(
            base_path="compute/resource-manager",
            local_path=checkout,
            config=specs_config,
            generator=generator,
        )


def test_generate_single_rejects_unknown_base_path(
    checkout: Path,
    specs_config: SpecsConfig,
) -> None:
    with pytest.raises(EntryPointNotFoundError):
        generate_single(
            base_path="network/resource-manager",
            local_path=checkout,
            config=specs_config,
            generator=FakeGenerator({}),
        )


def test_list_base_paths(checkout: Path, specs_config: SpecsConfig) -> None:
    assert list_base_paths(local_path=checkout, config=specs_config) == [
        "compute/resource-manager",
        "web/resource-manager",
    ]


def test_list_resources_reads_local_schemas(specs_config: SpecsConfig) -> None:
    schemas = specs_config.schemas_dir
    storage_uri = f"{BASE_URI}/2021-01-01/Microsoft.Storage.json"
    write_json(
        schemas / "2019-04-01" / "deploymentTemplate.json",
        {"resources": {"oneOf": [{"$ref": COMPUTE_REF}, {"$ref": "#/definitions/local"}]}},
    )
    write_json(schemas / "common" / "definitions.json", {"definitions": {}})
    write_json(
        schemas / "common" / "autogeneratedResources.json",
        {"oneOf": [{"$ref": f"{storage_uri}#/resourceDefinitions/storageAccounts"}]},
    )
    write_json(schemas / "common" / "manuallyAddedResources.json", {"oneOf": []})
    write_json(
        schemas / "2020-06-01" / "Microsoft.Compute.json",
        {
            "resourceDefinitions": {
                "virtualMachines": resource_schema(
                    ["Microsoft.Compute/virtualMachines"], ["2020-06-01"]
                )
            }
        },
    )
    write_json(
        schemas / "2021-01-01" / "Microsoft.Storage.json",
        {
            "resourceDefinitions": {
                "storageAccounts": resource_schema(
                    ["Microsoft.Storage/storageAccounts"], ["2021-01-01"]
                )
            }
        },
    )

    catalog = list_resources(config=specs_config)

    assert catalog.as_dict() == {
        "Microsoft.Compute/virtualMachines": ["2020-06-01"],
        "Microsoft.Storage/storageAccounts": ["2021-01-01"],
    }


def test_generate_all_refuses_to_clone_without_pinned_revision(
    specs_config: SpecsConfig,
) -> None:
    unpinned = replace(specs_config, specs_revision=None)

    with pytest.raises(MissingConfigurationError):
        generate_all(config=unpinned, generator=FakeGenerator({}), console=io.StringIO())

    assert not unpinned.default_checkout_path.exists()
