#!/usr/bin/env python3
"""
KUBESPLIT SPLITTER - Document Boundary Detection
------------------------------------------------
Cuts a multi-document YAML stream into independent chunks on the
document markers ('---' / '...' at column 0) and decodes each chunk on
its own. A chunk that fails to decode is handed back tagged with its
ordinal so that one broken manifest never aborts the rest of the bundle.

Author: KubeSplit Team
"""

import re
import logging
from typing import Iterable, Iterator, List

from ruamel.yaml import YAML, YAMLError

from kubesplit.core.models import Document

logger = logging.getLogger("kubesplit.splitter")


class DocumentSplitter:
    """
    Lazily yields Documents from a line iterable (file object, StringIO,
    stdin). The generator reads only as far as the current document.
    """

    DOC_START = re.compile(r'^---(?=\s|$)')
    DOC_END = re.compile(r'^\.\.\.(?=\s|$)')

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True

    def split(self, stream: Iterable[str]) -> Iterator[Document]:
        buffer: List[str] = []
        has_content = False
        # An explicit marker opens a document even if nothing follows it
        opened = False
        start_line = 1
        ordinal = 0

        for line_no, line in enumerate(stream, 1):
            if line_no == 1:
                line = line.lstrip('\ufeff')

            if self.DOC_START.match(line):
                if has_content or opened:
                    ordinal += 1
                    yield self._decode(ordinal, start_line, buffer)
                    buffer = []
                # Leading comments and directives stay with the document they precede
                if not buffer:
                    start_line = line_no
                buffer.append(line)
                has_content = self._is_content(line[3:])
                opened = True
                continue

            if self.DOC_END.match(line):
                if has_content or opened:
                    buffer.append(line)
                    ordinal += 1
                    yield self._decode(ordinal, start_line, buffer)
                # A bare terminator after comments closes nothing worth keeping
                buffer, has_content, opened = [], False, False
                continue

            if not buffer:
                start_line = line_no
            buffer.append(line)
            has_content = has_content or self._is_content(line)

        if has_content or opened:
            ordinal += 1
            yield self._decode(ordinal, start_line, buffer)

    def _is_content(self, line: str) -> bool:
        """True when the line carries data rather than blank/comment/directive."""
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            return False
        return not line.startswith('%')

    def _decode(self, ordinal: int, line_no: int, lines: List[str]) -> Document:
        source = "".join(lines)
        logger.debug(f"Decoding document {ordinal} starting at line {line_no}")
        try:
            node = self.yaml.load(source)
        except YAMLError as e:
            return Document(ordinal=ordinal, line_no=line_no, source=source, error=e)
        return Document(ordinal=ordinal, line_no=line_no, source=source, node=node)
