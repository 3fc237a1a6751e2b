"""Loading, merging and persisting the project configuration files"""

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from jsonschema import Draft7Validator

from .path_resolver import PathResolver
from ..api.exceptions import ConfigError, MissingConfigError
from ..constants import CONFIG_BACKUP_SUFFIX, LEGACY_CONFIG_JS_PATTERN
from ..models.config import AppConfig, PipelineConfig, SftpConfig

logger = logging.getLogger(__name__)

PIPELINE_SCHEMA = {
    "type": "object",
    "required": [
        "ignored_file_types",
        "directories_to_include",
        "production_path",
        "staging_path",
    ],
    "properties": {
        "ignored_file_types": {"type": "array", "items": {"type": "string"}},
        "directories_to_include": {"type": "array", "items": {"type": "string"}},
        "production_path": {"type": "string", "minLength": 1},
        "staging_path": {"type": "string", "minLength": 1},
    },
}

SFTP_SCHEMA = {
    "type": "object",
    "required": ["host", "port", "username", "password"],
    "properties": {
        "host": {"type": "string", "minLength": 1},
        "port": {"type": ["integer", "string"], "minimum": 1, "minLength": 1},
        "username": {"type": "string", "minLength": 1},
        "password": {"type": "string", "minLength": 1},
    },
}


def find_missing_keys(data: Dict[str, Any], schema: Dict[str, Any]) -> List[str]:
    """Names of required keys that are absent, empty or of the wrong type

    Args:
        data: Mapping to check
        schema: JSON schema with ``required`` and per-key constraints

    Returns:
        Offending key names in the order the schema lists them
    """
    names = set()
    for error in Draft7Validator(schema).iter_errors(data):
        if error.validator == "required":
            names.update(k for k in error.validator_value if k not in error.instance)
        elif error.absolute_path:
            names.add(str(error.absolute_path[0]))

    order = list(schema.get("required", []))
    return sorted(names, key=lambda n: order.index(n) if n in order else len(order))


def validate_required(data: Dict[str, Any], schema: Dict[str, Any], source: str) -> None:
    """Raise if any required key is missing

    Raises:
        MissingConfigError: Listing every missing key
    """
    missing = find_missing_keys(data, schema)
    if missing:
        raise MissingConfigError(source, missing)


def dump_yaml(data: Dict[str, Any]) -> str:
    """Deterministic YAML rendering of a config mapping"""
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def render_config_js(config: AppConfig) -> str:
    """``config.js`` module consumed by the browser runtime"""
    body = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
    return f"export default {body};\n"


def render_config_sw(config: AppConfig) -> str:
    """``config-sw.js`` script consumed by the service worker"""
    body = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
    return f"self.config = {body};\n"


class ConfigStore:
    """Reads and writes ``config.yaml``, ``pipeline-config.yaml`` and the SFTP file"""

    def __init__(self, path_resolver: PathResolver):
        """Initialize config store

        Args:
            path_resolver: Resolver of the project paths
        """
        self.path_resolver = path_resolver

    # Loading

    def _read_yaml(self, path: Path) -> Optional[Dict[str, Any]]:
        """Read a YAML mapping, ``None`` when the file is missing

        A file that cannot be parsed is backed up and treated as missing,
        so it gets replaced by default values.
        """
        if not path.exists():
            return None

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            self._backup_broken(path, str(e))
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            self._backup_broken(path, "top level is not a mapping")
            return None
        return data

    def _backup_broken(self, path: Path, reason: str) -> None:
        backup = self._backup(path)
        logger.warning(
            f"Could not parse {path.name} ({reason}). "
            f"Saved a copy to {backup.name} and continuing with default values."
        )

    def _read_legacy_config_js(self) -> Optional[Dict[str, Any]]:
        """Values of a JSON-bodied ``config.js`` from older projects"""
        path = self.path_resolver.config_js_file
        if not path.exists():
            return None

        match = LEGACY_CONFIG_JS_PATTERN.search(path.read_text(encoding="utf-8"))
        if not match:
            return None

        try:
            data = json.loads(match.group(1))
        except json.JSONDecodeError as e:
            logger.warning(f"Could not migrate values from {path.name}: {e}")
            return None

        if isinstance(data, dict):
            logger.info(f"Migrating app configuration from {path.name}")
            return data
        return None

    def read_app_values(self) -> Optional[Dict[str, Any]]:
        """Raw stored app config values, ``None`` when nothing is stored"""
        data = self._read_yaml(self.path_resolver.app_config_file)
        if data is None:
            data = self._read_legacy_config_js()
        return data

    def read_pipeline_values(self) -> Optional[Dict[str, Any]]:
        """Raw stored pipeline config values, ``None`` when nothing is stored"""
        return self._read_yaml(self.path_resolver.pipeline_config_file)

    def default_app_config(self) -> AppConfig:
        return AppConfig.defaults(self.path_resolver.project_name)

    def load_app_config(self) -> AppConfig:
        """Stored app config merged over the defaults"""
        return AppConfig.from_dict(self.read_app_values() or {}, base=self.default_app_config())

    def load_pipeline_config(self) -> PipelineConfig:
        """Stored pipeline config merged over the defaults"""
        return PipelineConfig.from_dict(self.read_pipeline_values() or {})

    def load_sftp_values(self, pipeline: PipelineConfig) -> Dict[str, Any]:
        """Raw SFTP settings with ``${VAR}`` references expanded

        Returns an empty mapping when the file does not exist.
        """
        path = self.path_resolver.get_sftp_config_file(pipeline.sftp_config_file)
        if path is None or not path.exists():
            logger.warning(f"SFTP configuration file not found: {path}")
            return {}

        content = os.path.expandvars(path.read_text(encoding="utf-8"))
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid SFTP configuration in {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid SFTP configuration in {path}: expected a mapping")
        return data

    def load_sftp_config(self, pipeline: PipelineConfig) -> SftpConfig:
        """Validated SFTP settings

        Raises:
            MissingConfigError: If host, port, username or password is missing
        """
        data = self.load_sftp_values(pipeline)
        validate_required(data, SFTP_SCHEMA, pipeline.sftp_config_file)
        return SftpConfig.from_dict(data)

    def validate_pipeline(self, pipeline: PipelineConfig) -> None:
        """Check the required pipeline keys

        Raises:
            MissingConfigError: If required keys are missing or empty
        """
        validate_required(
            pipeline.to_dict(),
            PIPELINE_SCHEMA,
            self.path_resolver.pipeline_config_file.name,
        )

    # Persisting

    def _backup(self, path: Path) -> Path:
        backup_path = path.with_name(path.name + CONFIG_BACKUP_SUFFIX)
        shutil.copy2(path, backup_path)
        return backup_path

    @staticmethod
    def _needs_rewrite(path: Path) -> bool:
        return not path.exists()

    def _write(self, path: Path, content: str, backup: bool = True) -> None:
        if backup and path.exists():
            self._backup(path)
        path.write_text(content, encoding="utf-8")

    def save_app_config(self, config: AppConfig) -> None:
        """Write ``config.yaml`` and re-render ``config.js``/``config-sw.js``"""
        self._write(self.path_resolver.app_config_file, dump_yaml(config.to_dict()))
        self.render_app_scripts(config)

    def save_pipeline_config(self, config: PipelineConfig) -> None:
        """Write ``pipeline-config.yaml``"""
        self._write(self.path_resolver.pipeline_config_file, dump_yaml(config.to_dict()))

    def render_app_scripts(self, config: AppConfig) -> None:
        """Re-render the generated browser and service worker config scripts"""
        self.path_resolver.config_js_file.write_text(render_config_js(config), encoding="utf-8")
        self.path_resolver.config_sw_file.write_text(render_config_sw(config), encoding="utf-8")

    def update(self) -> Tuple[AppConfig, PipelineConfig]:
        """Merge stored values over the defaults and persist both files

        Existing values win, unknown keys are kept and the previous files
        are copied to ``.bak`` first.

        Returns:
            Merged app and pipeline configs
        """
        app_config = self.load_app_config()
        pipeline_config = self.load_pipeline_config()

        self.save_app_config(app_config)
        self.save_pipeline_config(pipeline_config)

        logger.info(
            f"Updated {self.path_resolver.app_config_file.name} and "
            f"{self.path_resolver.pipeline_config_file.name}"
        )
        return app_config, pipeline_config

    def ensure_configs(self) -> Tuple[AppConfig, PipelineConfig]:
        """Load both configs, creating missing files with default values"""
        app_values = self.read_app_values()
        pipeline_values = self.read_pipeline_values()

        app_config = AppConfig.from_dict(app_values or {}, base=self.default_app_config())
        pipeline_config = PipelineConfig.from_dict(pipeline_values or {})

        if app_values is None or self._needs_rewrite(self.path_resolver.app_config_file):
            logger.info(f"Creating {self.path_resolver.app_config_file.name}")
            self.save_app_config(app_config)
        if pipeline_values is None or self._needs_rewrite(self.path_resolver.pipeline_config_file):
            logger.info(f"Creating {self.path_resolver.pipeline_config_file.name}")
            self.save_pipeline_config(pipeline_config)

        return app_config, pipeline_config
