"""Tests for writing a version into the project files."""

import json

import pytest
import yaml

from birdhouse_deploy.api.exceptions import VersionWriteError
from birdhouse_deploy.core import VersionWriter
from birdhouse_deploy.models.version import AppVersion


def test_apply_updates_all_version_carriers(path_resolver, app_config) -> None:
    updated = VersionWriter(path_resolver).apply(app_config, AppVersion.parse("1.2.3.5-f"))

    assert updated.version == "1.2.3.5-f"

    stored = yaml.safe_load(path_resolver.app_config_file.read_text())
    assert stored["version"] == "1.2.3.5-f"

    config_js = path_resolver.config_js_file.read_text()
    assert config_js.startswith("export default ")
    assert json.loads(config_js[len("export default "):].rstrip().rstrip(";"))["version"] == "1.2.3.5-f"

    config_sw = path_resolver.config_sw_file.read_text()
    assert config_sw.startswith("self.config = ")
    assert '"version": "1.2.3.5-f"' in config_sw

    service_worker = path_resolver.service_worker_file.read_text()
    assert 'self.CACHE_VERSION = "1.2.3.5-f";' in service_worker
    assert "skipWaiting" in service_worker


def test_only_first_assignment_is_replaced(path_resolver, app_config) -> None:
    path_resolver.service_worker_file.write_text(
        'self.CACHE_VERSION = "1.0.0.0";\n// self.CACHE_VERSION = "0.0.0.1";\n'
    )

    VersionWriter(path_resolver).apply(app_config, AppVersion.parse("2.0.0.0"))

    content = path_resolver.service_worker_file.read_text()
    assert content.startswith('self.CACHE_VERSION = "2.0.0.0";')
    assert '// self.CACHE_VERSION = "0.0.0.1";' in content


def test_missing_assignment_writes_nothing(path_resolver, app_config) -> None:
    path_resolver.service_worker_file.write_text("self.addEventListener('fetch', () => {});\n")
    config_js_before = path_resolver.config_js_file.read_text()

    with pytest.raises(VersionWriteError):
        VersionWriter(path_resolver).apply(app_config, AppVersion.parse("2.0.0.0"))

    assert not path_resolver.app_config_file.exists()
    assert path_resolver.config_js_file.read_text() == config_js_before


def test_missing_service_worker_raises(path_resolver, app_config) -> None:
    path_resolver.service_worker_file.unlink()

    with pytest.raises(VersionWriteError, match="Service worker not found"):
        VersionWriter(path_resolver).stage(app_config, AppVersion.parse("2.0.0.0"))
