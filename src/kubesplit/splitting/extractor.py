#!/usr/bin/env python3
"""
KUBESPLIT EXTRACTOR - Resource Identity
---------------------------------------
Projects a decoded document onto the handful of fields needed to name
and route it: apiVersion, kind, metadata (name/namespace/labels) and the
selector / pod-template labels. Anything else in the manifest is ignored.

Author: KubeSplit Team
"""

from typing import Any, Dict, Tuple

from kubesplit.core.errors import ExtractionError
from kubesplit.core.models import Resource


class ResourceExtractor:
    """
    Structural projection of a ruamel tree onto a Resource.
    Missing fields default to empty; only wrong shapes are errors.
    """

    def extract(self, node: Any) -> Resource:
        """Raises ExtractionError if the document is not a mapping."""
        doc = self._mapping(node, "document")

        metadata = self._mapping(doc.get("metadata"), "metadata")
        spec = self._mapping(doc.get("spec"), "spec")
        selector = self._mapping(spec.get("selector"), "spec.selector")
        template = self._mapping(spec.get("template"), "spec.template")
        template_meta = self._mapping(template.get("metadata"), "spec.template.metadata")

        return Resource(
            api_version=self._string(doc.get("apiVersion"), "apiVersion"),
            kind=self._string(doc.get("kind"), "kind"),
            name=self._string(metadata.get("name"), "metadata.name"),
            namespace=self._string(metadata.get("namespace"), "metadata.namespace"),
            labels=self._labels(metadata.get("labels"), "metadata.labels"),
            selector_labels=self._labels(selector.get("matchLabels"), "spec.selector.matchLabels"),
            template_labels=self._labels(template_meta.get("labels"), "spec.template.metadata.labels"),
        )

    def validate(self, resource: Resource) -> Tuple[bool, str]:
        """A resource can only be written once it has both a kind and a name."""
        if not resource.kind or not resource.name:
            return False, "empty Kind or Name"
        return True, ""

    def _mapping(self, value: Any, path: str) -> Dict[Any, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ExtractionError(
                f"'{path}' must be a map/object, got {type(value).__name__}"
            )
        return value

    def _string(self, value: Any, path: str) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (dict, list)):
            raise ExtractionError(f"'{path}' must be a scalar, got {type(value).__name__}")
        return str(value)

    def _labels(self, value: Any, path: str) -> Dict[str, str]:
        labels = self._mapping(value, path)
        return {str(k): self._string(v, f"{path}.{k}") for k, v in labels.items()}
