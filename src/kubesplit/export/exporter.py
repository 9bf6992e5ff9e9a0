#!/usr/bin/env python3
"""
KUBESPLIT EXPORTER - High-Fidelity Round-Trip
---------------------------------------------
Author: KubeSplit Team
"""

import io
from typing import Any

from ruamel.yaml import YAML


class KubeExporter:
    """
    The Reconstructor: Converts a decoded document tree back to a YAML string.
    Key order, quoting and attached comments survive the trip.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True
        # Standard K8s: 2 spaces, but sequences are indented 4 (offset 2)
        # so list items sit under their parent key.
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def export(self, node: Any) -> str:
        """Serializes a single document without an explicit '---' marker."""
        stream = io.StringIO()
        self.yaml.dump(node, stream)
        return stream.getvalue()
