#!/usr/bin/env python3
"""
KUBESPLIT CLI
-------------
Splits a multi-document Kubernetes YAML bundle into one file per resource.

Orchestrates:
1. Flag parsing & startup validation (outdir, format, input, patterns)
2. Output directory reset
3. The per-document split loop and the final summary

Author: KubeSplit Team
"""

import io
import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional, TextIO

from kubesplit.cli.formatter import KubeFormatter
from kubesplit.core.config import DEFAULT_FORMAT, SplitConfig
from kubesplit.core.engine import SplitEngine, prepare_output_dir
from kubesplit.core.errors import PatternError, SetupError
from kubesplit.redaction.redactor import compile_patterns

VERSION = "v1.0.0"

logger = logging.getLogger("kubesplit.cli")

EPILOG = """\
Output formats:
  kind-name   Flat structure with kind-name.yaml files (default)
  kind/name   Group by kind in directories
  service     Group by service in directories

WARNING: the --outdir directory is deleted and recreated on every run.
Anything already in it is lost.

Examples:
  kubesplit --file=1.yaml --outdir=./manifests
  kubesplit --file=1.yaml --outdir=./manifests --remove="status:.*,generation:.*"
  kubesplit --file=1.yaml --outdir=./manifests --format=kind/name
  kubesplit --file=1.yaml --outdir=./manifests --format=service
  cat 1.yaml | kubesplit --outdir=./manifests
"""


def configure_logging(level_name: str):
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def open_input(input_file: Optional[Path]) -> TextIO:
    """
    Opens the bundle source. Undecodable bytes are carried through as
    surrogates so the parser rejects only the document that holds them.
    """
    if input_file is not None:
        try:
            return open(input_file, "r", encoding="utf-8-sig", errors="surrogateescape")
        except OSError as e:
            raise SetupError(f"Error opening YAML file: {e}")

    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is not None:
        return io.TextIOWrapper(buffer, encoding="utf-8-sig", errors="surrogateescape")
    return sys.stdin


class KubeSplitCLI:
    """
    CLI wrapper that turns flags into a SplitConfig, performs the startup
    checks in a fixed order and hands the input stream to the SplitEngine.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="kubesplit",
            description="KubeSplit - splits multi-document YAML into separate files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=EPILOG,
        )
        self.formatter = KubeFormatter()
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version=f"kubesplit {VERSION}")
        self.parser.add_argument("--file", default="",
                                 help="Input YAML file path (if not specified, stdin will be used)")
        self.parser.add_argument("--outdir", default="",
                                 help="Output directory for parsed manifests (required)")
        self.parser.add_argument("--remove", default="",
                                 help="Patterns to remove from each manifest (regex, comma-separated)")
        self.parser.add_argument("--format", default=DEFAULT_FORMAT,
                                 help="Output filename format: 'kind-name', 'kind/name', or 'service'")
        self.parser.add_argument("--dry-run", action="store_true",
                                 help="Show where each manifest would be written without touching disk")

    def _stdin_is_terminal(self) -> bool:
        stdin = sys.stdin
        if stdin is None:
            return True
        try:
            return stdin.isatty()
        except ValueError:
            # closed stream
            return True

    def _fatal(self, error: Exception) -> int:
        self.formatter.fatal(str(error))
        return 1

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary entry point. Returns the process exit code."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.formatter.print_header("Manifest Splitter", VERSION)
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)

        try:
            config = SplitConfig.from_args(args)
        except SetupError as e:
            return self._fatal(e)

        configure_logging(config.log_level)

        if config.input_file is None and self._stdin_is_terminal():
            logger.warning("No input file specified and no data piped in.")
            self.parser.print_help()
            return 1

        try:
            stream = open_input(config.input_file)
        except SetupError as e:
            return self._fatal(e)

        try:
            if config.input_file is None:
                logger.info("Reading YAML from stdin...")

            if not config.dry_run:
                try:
                    prepare_output_dir(config.outdir)
                except SetupError as e:
                    return self._fatal(e)

            try:
                config = config.with_patterns(compile_patterns(args.remove))
            except PatternError as e:
                return self._fatal(e)

            engine = SplitEngine(
                config,
                on_saved=self.formatter.saved,
                on_planned=self.formatter.plan,
            )
            result = engine.run(stream)
        finally:
            if config.input_file is not None:
                stream.close()

        if config.dry_run:
            self.formatter.print_plan()
        self.formatter.print_summary(result, dry_run=config.dry_run)
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        code = KubeSplitCLI().run()
    except KeyboardInterrupt:
        KubeFormatter().fatal("Terminated by user.")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
