from __future__ import annotations

import os
import re
import argparse
from pathlib import Path
from dataclasses import dataclass, field, replace
from typing import List, Optional

from kubesplit.core.errors import SetupError
from kubesplit.core.models import OutputFormat


DEFAULT_FORMAT = "kind-name"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class SplitConfig:
    """Runtime configuration for a split run.

    CLI flags:
    - --file: input manifest bundle (stdin when unset)
    - --outdir: destination root, wiped and recreated at startup
    - --format: kind-name|kind/name|service
    - --remove: comma-separated regexes stripped from every manifest

    Env vars:
    - KUBESPLIT_LOG_LEVEL: logging level name (default INFO)
    """

    outdir: Path
    output_format: OutputFormat = OutputFormat.FLAT_KIND_NAME
    input_file: Optional[Path] = None
    remove_patterns: List[re.Pattern] = field(default_factory=list)
    dry_run: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "SplitConfig":
        """Validates outdir then format, in that order."""
        if not args.outdir:
            raise SetupError("Output directory must be specified (--outdir)")

        try:
            output_format = OutputFormat.parse(args.format)
        except ValueError as e:
            raise SetupError(str(e))

        return cls(
            outdir=Path(args.outdir),
            output_format=output_format,
            input_file=Path(args.file) if args.file else None,
            dry_run=bool(getattr(args, "dry_run", False)),
            log_level=log_level_from_env(),
        )

    def with_patterns(self, patterns: List[re.Pattern]) -> "SplitConfig":
        return replace(self, remove_patterns=list(patterns))


def log_level_from_env() -> str:
    raw = os.environ.get("KUBESPLIT_LOG_LEVEL", "").strip().upper()
    return raw or DEFAULT_LOG_LEVEL
