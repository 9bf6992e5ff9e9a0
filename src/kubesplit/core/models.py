#!/usr/bin/env python3
"""
KUBESPLIT CORE MODELS
---------------------
Defines the fundamental data structures shared by the splitting pipeline.
A Document is one unit of the input stream; a Resource is the minimal
identity projected out of it.

Author: KubeSplit Team
"""

from enum import Enum
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Any, Dict, List


class OutputFormat(Enum):
    """Layout of the files written under the output directory."""
    FLAT_KIND_NAME = "kind-name"      # {outdir}/{kind}-{name}.yaml
    KIND_DIRECTORY = "kind/name"      # {outdir}/{kind}/{Name}.yaml
    SERVICE_DIRECTORY = "service"     # {outdir}/{service}/{kind}-{name}.yaml

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(
            f"Invalid format option: {value}. Must be 'kind-name', 'kind/name', or 'service'"
        )


@dataclass
class Document:
    """
    One decoded unit of a multi-document YAML stream.

    Exactly one of `node` / `error` is meaningful: a document that failed
    to decode keeps its ordinal and source so the failure can be reported.
    """
    ordinal: int                       # 1-based position in the stream
    line_no: int                       # First source line of the document
    source: str = ""                   # Raw chunk text as read from the stream
    node: Optional[Any] = None         # ruamel round-trip tree (CommentedMap, ...)
    error: Optional[Exception] = None  # Decode failure, if any

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class Resource:
    """The identifying fields of a Kubernetes object."""
    api_version: str = ""
    kind: str = ""
    name: str = ""
    namespace: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    selector_labels: Dict[str, str] = field(default_factory=dict)
    template_labels: Dict[str, str] = field(default_factory=dict)


@dataclass
class SkipRecord:
    ordinal: int
    stage: str
    reason: str


@dataclass
class RunResult:
    """Accumulated outcome of a single split run."""
    written: int = 0
    files: List[Path] = field(default_factory=list)
    skipped: List[SkipRecord] = field(default_factory=list)
    overwritten: int = 0
