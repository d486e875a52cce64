"""Domain port definitions for adapters."""

from __future__ import annotations

from .documents import DocumentSource
from .generation import (
    GenerationEntrySource,
    ReferenceStore,
    SchemaGenerator,
    SpecsRepository,
    SummarySink,
)

__all__ = [
    "DocumentSource",
    "GenerationEntrySource",
    "ReferenceStore",
    "SchemaGenerator",
    "SpecsRepository",
    "SummarySink",
]
