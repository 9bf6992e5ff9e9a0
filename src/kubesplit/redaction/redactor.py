#!/usr/bin/env python3
"""
KUBESPLIT REDACTOR - Pattern Removal
------------------------------------
Strips user-supplied regex matches (status blocks, generation counters,
secrets, ...) out of serialized manifests, then drops the lines that the
removals left blank.

Author: KubeSplit Team
"""

import re
from typing import List, Sequence

from kubesplit.core.errors import PatternError

# Whitespace-only lines; \s also spans runs of consecutive blank lines
BLANK_LINE_PATTERN = re.compile(r'^\s*\n', re.MULTILINE)


def compile_patterns(raw: str) -> List[re.Pattern]:
    """
    Compiles a comma-separated --remove value. Order is preserved because
    patterns are applied one after another, not simultaneously.
    """
    if not raw:
        return []

    patterns = []
    for pattern in raw.split(","):
        try:
            patterns.append(re.compile(pattern))
        except re.error as e:
            raise PatternError(pattern, e)
    return patterns


class Redactor:

    def __init__(self, patterns: Sequence[re.Pattern] = ()):
        self.patterns = list(patterns)

    def redact(self, text: str) -> str:
        if not self.patterns:
            return text

        for pattern in self.patterns:
            text = pattern.sub("", text)
        return BLANK_LINE_PATTERN.sub("", text)
