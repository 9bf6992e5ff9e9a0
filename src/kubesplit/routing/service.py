#!/usr/bin/env python3
"""
KUBESPLIT SERVICE RESOLVER - Grouping Heuristics
------------------------------------------------
Guesses which service a manifest belongs to so that `--format service`
can group a Deployment, its Service, ConfigMaps, etc. under one directory.

Rules are tried in order and the first non-empty answer wins:
  1. metadata.labels
  2. spec.selector.matchLabels
  3. spec.template.metadata.labels
  4. name prefix ("frontend-deployment" -> "frontend"), namespaced kinds only
  5. "common"

Author: KubeSplit Team
"""

from typing import Callable, Dict, List, Optional

from kubesplit.core.models import Resource

# Checked in this order on every label source
APP_LABELS = ("app", "app.kubernetes.io/name", "k8s-app")

# Cluster-scoped names are rarely service-prefixed
CLUSTER_SCOPED_KINDS = ("Namespace", "ClusterRole", "ClusterRoleBinding")

DEFAULT_SERVICE = "common"


class ServiceResolver:
    """
    Ordered chain of label and naming rules. Each rule returns a service
    name or None to defer to the next one.
    """

    def __init__(self):
        self.active_rules: List[Callable[[Resource], Optional[str]]] = [
            self._rule_metadata_labels,
            self._rule_selector_labels,
            self._rule_template_labels,
            self._rule_name_prefix,
        ]

    def resolve(self, resource: Resource) -> str:
        for rule in self.active_rules:
            service = rule(resource)
            if service:
                return service
        return DEFAULT_SERVICE

    def _first_app_label(self, labels: Dict[str, str]) -> Optional[str]:
        for key in APP_LABELS:
            value = labels.get(key)
            if value:
                return value
        return None

    def _rule_metadata_labels(self, resource: Resource) -> Optional[str]:
        return self._first_app_label(resource.labels)

    def _rule_selector_labels(self, resource: Resource) -> Optional[str]:
        service = self._first_app_label(resource.selector_labels)
        if service:
            return service
        # Plain "app" is by far the most common Service selector
        return resource.selector_labels.get("app") or None

    def _rule_template_labels(self, resource: Resource) -> Optional[str]:
        return self._first_app_label(resource.template_labels)

    def _rule_name_prefix(self, resource: Resource) -> Optional[str]:
        if not resource.name:
            return None
        kind = resource.kind
        if kind in CLUSTER_SCOPED_KINDS or kind.startswith("Cluster"):
            return None
        parts = resource.name.split("-")
        if len(parts) > 1:
            return parts[0]
        return None


_default_resolver = ServiceResolver()


def resolve_service_name(resource: Resource) -> str:
    """Module-level shortcut around a shared ServiceResolver."""
    return _default_resolver.resolve(resource)
