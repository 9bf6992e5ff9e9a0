"""Destination paths for split manifests."""

from pathlib import Path
from typing import Optional

from kubesplit.core.models import OutputFormat, Resource
from kubesplit.routing.service import resolve_service_name


def build_path(outdir: Path, output_format: OutputFormat, resource: Resource,
               service_name: Optional[str] = None, create_dirs: bool = True) -> Path:
    """
    Computes where a resource is written and creates the directory that
    holds it. Creating an existing directory is not an error; any other
    OSError propagates so the caller can skip the document.
    """
    outdir = Path(outdir)
    kind = resource.kind.lower()

    if output_format is OutputFormat.FLAT_KIND_NAME:
        target_dir = outdir
        filename = f"{kind}-{resource.name.lower()}.yaml"
    elif output_format is OutputFormat.KIND_DIRECTORY:
        target_dir = outdir / kind
        # Name keeps its original case in this layout
        filename = f"{resource.name}.yaml"
    elif output_format is OutputFormat.SERVICE_DIRECTORY:
        if service_name is None:
            service_name = resolve_service_name(resource)
        target_dir = outdir / service_name
        filename = f"{kind}-{resource.name.lower()}.yaml"
    else:
        raise ValueError(f"Unsupported output format: {output_format!r}")

    target = target_dir / filename
    _ensure_within(outdir, target)

    if create_dirs:
        target_dir.mkdir(parents=True, exist_ok=True)
    return target


def _ensure_within(outdir: Path, target: Path):
    root = outdir.resolve()
    resolved = target.resolve()
    if resolved != root and root not in resolved.parents:
        raise ValueError(f"Refusing to write outside output directory: {target}")
