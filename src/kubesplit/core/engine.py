#!/usr/bin/env python3
"""
KUBESPLIT ENGINE - The Orchestrator
-----------------------------------
SplitEngine drives every document of a bundle through the pipeline:
decode -> extract -> route -> serialize -> redact -> write. A failure in
any per-document stage is logged with the document's ordinal and skipped;
only setup problems (unusable output directory) abort the run.

WARNING: prepare_output_dir() deletes the output directory and everything
in it before recreating it. There is no confirmation and no undo.

Author: KubeSplit Team
"""

import os
import shutil
import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from kubesplit.core.config import SplitConfig
from kubesplit.core.errors import ExtractionError, SetupError
from kubesplit.core.models import Document, OutputFormat, Resource, RunResult, SkipRecord
from kubesplit.export.exporter import KubeExporter
from kubesplit.redaction.redactor import Redactor
from kubesplit.routing.paths import build_path
from kubesplit.routing.service import ServiceResolver
from kubesplit.splitting.extractor import ResourceExtractor
from kubesplit.splitting.splitter import DocumentSplitter

logger = logging.getLogger("kubesplit.engine")

SavedCallback = Callable[[Path], None]
PlannedCallback = Callable[[Document, Resource, Path], None]


class SplitEngine:
    """
    Principal orchestrator for splitting a manifest bundle.
    Holds the run configuration and the single-purpose pipeline stages.
    """

    def __init__(self, config: SplitConfig,
                 on_saved: Optional[SavedCallback] = None,
                 on_planned: Optional[PlannedCallback] = None):
        self.config = config
        self.outdir = Path(config.outdir)

        self.splitter = DocumentSplitter()
        self.extractor = ResourceExtractor()
        self.resolver = ServiceResolver()
        self.redactor = Redactor(config.remove_patterns)
        self.exporter = KubeExporter()

        self.on_saved = on_saved
        self.on_planned = on_planned

    def run(self, stream: Iterable[str]) -> RunResult:
        """Processes every document in the stream, in order."""
        result = RunResult()
        written_paths = set()

        for document in self.splitter.split(stream):
            path = self.process_document(document, result)
            if path is None:
                continue
            if path in written_paths:
                result.overwritten += 1
                logger.warning(f"Document {document.ordinal} overwrites {path}")
            written_paths.add(path)

        return result

    def process_document(self, document: Document, result: RunResult) -> Optional[Path]:
        """Returns the written (or planned) path, or None if the document was skipped."""
        i = document.ordinal

        if not document.ok:
            return self._skip(result, i, "decode", f"Error parsing document {i}: {document.error}")

        try:
            resource = self.extractor.extract(document.node)
        except ExtractionError as e:
            return self._skip(result, i, "extract",
                              f"Error extracting resource info from document {i}: {e}")

        valid, reason = self.extractor.validate(resource)
        if not valid:
            return self._skip(result, i, "validate", f"Document {i} has {reason}, skipping")

        service_name = None
        if self.config.output_format is OutputFormat.SERVICE_DIRECTORY:
            service_name = self.resolver.resolve(resource)

        try:
            file_path = build_path(self.outdir, self.config.output_format, resource,
                                   service_name=service_name,
                                   create_dirs=not self.config.dry_run)
        except (OSError, ValueError) as e:
            return self._skip(result, i, "route",
                              f"Error creating directory for document {i}: {e}")

        try:
            content = self.exporter.export(document.node)
        except Exception as e:
            # ruamel raises a wide range of representer errors here
            return self._skip(result, i, "encode", f"Error encoding document {i}: {e}")

        content = self.redactor.redact(content)

        if self.config.dry_run:
            if self.on_planned:
                self.on_planned(document, resource, file_path)
            result.files.append(file_path)
            return file_path

        try:
            self._atomic_write(file_path, content)
        except OSError as e:
            return self._skip(result, i, "write", f"Error writing file {file_path}: {e}")

        result.written += 1
        result.files.append(file_path)
        if self.on_saved:
            self.on_saved(file_path)
        return file_path

    def _skip(self, result: RunResult, ordinal: int, stage: str, message: str) -> None:
        logger.error(message)
        result.skipped.append(SkipRecord(ordinal=ordinal, stage=stage, reason=message))
        return None

    def _atomic_write(self, target_path: Path, content: str):
        if target_path.parent.exists() and not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_name(target_path.name + '.kubesplit.tmp')
        try:
            temp_file.write_text(content, encoding='utf-8')
            os.replace(temp_file, target_path)
        except OSError:
            if temp_file.exists():
                temp_file.unlink()
            raise


def generate_summary(result: RunResult) -> dict:
    """Counts per skip stage alongside the headline numbers."""
    by_stage = {}
    for record in result.skipped:
        by_stage[record.stage] = by_stage.get(record.stage, 0) + 1
    return {
        "written": result.written,
        "planned": len(result.files),
        "skipped": len(result.skipped),
        "skipped_by_stage": by_stage,
        "overwritten": result.overwritten,
    }


def prepare_output_dir(outdir: Path):
    """Wipes and recreates the output directory (destructive, no undo)."""
    target = Path(outdir)
    _check_safe_to_wipe(target.resolve())

    try:
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()
    except OSError as e:
        raise SetupError(f"Error removing previous output directory: {e}")

    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SetupError(f"Error creating output directory: {e}")


def _check_safe_to_wipe(target: Path):
    cwd = Path.cwd().resolve()
    protected: List[Path] = [Path(target.anchor), Path.home().resolve(), cwd]
    protected.extend(cwd.parents)
    if target in protected:
        raise SetupError(
            f"SAFETY ERROR: Refusing to wipe '{target}'. "
            "Choose a dedicated output directory."
        )
