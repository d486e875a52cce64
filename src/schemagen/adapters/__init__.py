"""Adapters implementing the domain ports."""

from __future__ import annotations

from .autogenlist import AutoGenList
from .autorest import AutorestGenerator
from .reference_store import JsonReferenceStore
from .reports import PackageReport, write_package_report
from .schema_documents import HttpSchemaDocumentSource, LocalSchemaDocumentSource
from .specs_repo import LocalSpecsRepository, clone_specs_repo
from .summary_log import SummaryLog, open_summary_log

__all__ = [
    "AutoGenList",
    "AutorestGenerator",
    "HttpSchemaDocumentSource",
    "JsonReferenceStore",
    "LocalSchemaDocumentSource",
    "LocalSpecsRepository",
    "PackageReport",
    "SummaryLog",
    "clone_specs_repo",
    "open_summary_log",
    "write_package_report",
]
