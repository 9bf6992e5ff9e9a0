import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest

from kubesplit.core.models import OutputFormat, Resource
from kubesplit.routing.paths import build_path


def test_flat_kind_name_is_lowercased(tmp_path):
    path = build_path(tmp_path, OutputFormat.FLAT_KIND_NAME, Resource(kind="Deployment", name="Nginx"))
    assert path == tmp_path / "deployment-nginx.yaml"


def test_kind_directory_preserves_name_case(tmp_path):
    path = build_path(tmp_path, OutputFormat.KIND_DIRECTORY, Resource(kind="Service", name="Nginx"))

    assert path == tmp_path / "service" / "Nginx.yaml"
    assert (tmp_path / "service").is_dir()


def test_service_directory_uses_given_name(tmp_path):
    resource = Resource(kind="ConfigMap", name="Cart-Config")
    path = build_path(tmp_path, OutputFormat.SERVICE_DIRECTORY, resource, service_name="shop")

    assert path == tmp_path / "shop" / "configmap-cart-config.yaml"
    assert (tmp_path / "shop").is_dir()


def test_service_directory_resolves_when_not_given(tmp_path):
    resource = Resource(kind="ConfigMap", name="cart-config")
    path = build_path(tmp_path, OutputFormat.SERVICE_DIRECTORY, resource)
    assert path.parent == tmp_path / "cart"


def test_existing_directory_is_not_an_error(tmp_path):
    (tmp_path / "service").mkdir()
    resource = Resource(kind="Service", name="a")
    build_path(tmp_path, OutputFormat.KIND_DIRECTORY, resource)
    build_path(tmp_path, OutputFormat.KIND_DIRECTORY, resource)


def test_no_directories_in_plan_mode(tmp_path):
    path = build_path(tmp_path, OutputFormat.KIND_DIRECTORY, Resource(kind="Secret", name="a"),
                      create_dirs=False)
    assert path == tmp_path / "secret" / "a.yaml"
    assert not (tmp_path / "secret").exists()


def test_directory_creation_failure_raises(tmp_path):
    # A regular file where the kind directory should go
    (tmp_path / "secret").write_text("occupied")
    with pytest.raises(OSError):
        build_path(tmp_path, OutputFormat.KIND_DIRECTORY, Resource(kind="Secret", name="a"))


def test_names_cannot_escape_output_dir(tmp_path):
    outdir = tmp_path / "out"
    with pytest.raises(ValueError):
        build_path(outdir, OutputFormat.KIND_DIRECTORY, Resource(kind="Pod", name="../../evil"))


def test_accepts_string_outdir(tmp_path):
    path = build_path(str(tmp_path), OutputFormat.FLAT_KIND_NAME, Resource(kind="Pod", name="a"))
    assert isinstance(path, Path)
    assert path.name == "pod-a.yaml"
