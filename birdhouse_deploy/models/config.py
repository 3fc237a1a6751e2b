"""Configuration data models"""

from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional, Any

from ..constants import (
    Target,
    DEFAULT_FAVICON_SIZES,
    DEFAULT_MANIFEST_ICON_SIZES,
    DEFAULT_SFTP_PORT,
)

# Python attribute -> key the browser runtime reads
APP_CONFIG_KEYS = {
    "version": "version",
    "page_title": "pageTitle",
    "cookie_identifier": "cookieIdentifier",
    "foundation_year": "foundationYear",
    "page_description": "pageDescription",
    "localhost_path": "localhostPath",
    "excluded_paths": "excludedPaths",
    "open_cookie_popup_at_page_load": "openCookiePopupAtPageLoad",
    "show_new_update_notes": "showNewUpdateNotes",
    "maintenance_mode_with_failed_backend": "maintenanceModeWithFailedBackend",
    "enable_input_validation": "enableInputValidation",
    "enable_image_comparison_sliders": "enableImageComparisonSliders",
    "enable_info_bar": "enableInfoBar",
    "user_login_enabled": "userLoginEnabled",
    "redirect_404_to_root": "redirect404ToRoot",
    "app_icon": "appIcon",
    "trusted_image_domains": "trustedImageDomains",
    "use_mouse_down": "useMouseDown",
    "back_navigation_closes_popups": "backNavigationClosesPopups",
    "scroll_position_recall_limit": "scrollPositionRecallLimit",
}


@dataclass
class AppConfig:
    """Settings of the web app, rendered into config.js for the browser"""

    version: str = "1.0.0.0"
    page_title: str = "My Web App"
    cookie_identifier: str = (
        "my_unique_identifier_that_could_be_the_page_title_and_should_never_change"
        "_and_should_be_unique_on_the_domain"
    )
    foundation_year: int = 2024
    page_description: str = ""
    localhost_path: str = "/"
    excluded_paths: List[str] = field(default_factory=list)
    open_cookie_popup_at_page_load: bool = True
    show_new_update_notes: bool = True
    maintenance_mode_with_failed_backend: bool = False
    enable_input_validation: bool = True
    enable_image_comparison_sliders: bool = True
    enable_info_bar: bool = False
    user_login_enabled: bool = False
    redirect_404_to_root: bool = False
    app_icon: str = "img/app-icons/icon"
    trusted_image_domains: List[str] = field(default_factory=list)
    use_mouse_down: bool = False
    back_navigation_closes_popups: bool = True
    scroll_position_recall_limit: int = 20

    # Keys added by the app itself, kept verbatim
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def defaults(cls, project_name: str) -> 'AppConfig':
        """Default configuration for a project directory name"""
        return cls(localhost_path=f"/{project_name}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  base: Optional['AppConfig'] = None) -> 'AppConfig':
        """Create from the browser-facing mapping

        Values in ``data`` win over ``base`` (shallow merge).
        """
        values = (base or cls()).to_dict()
        values.update(data or {})

        attributes = {key: attr for attr, key in APP_CONFIG_KEYS.items()}
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in values.items():
            if key in attributes:
                kwargs[attributes[key]] = value
            else:
                extra[key] = value

        return cls(extra=extra, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the browser-facing mapping in a stable key order"""
        data = {key: getattr(self, attr) for attr, key in APP_CONFIG_KEYS.items()}
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data


@dataclass
class PipelineConfig:
    """Deployment settings of a Birdhouse project"""

    sftp_config_file: str = "../sftp-config.yaml"
    production_path: str = "my_app_production"
    staging_path: str = "my_app_staging"
    dist_path: str = "Birdhouse/dist"
    htaccess_file: str = "UPLOAD-THIS.htaccess"
    base_path: str = "/"
    database_dir: str = "database"
    uncompressed_dir: str = "img/uploads-uncompressed"
    compressed_dir: str = "uploads"
    favicon_path: str = "img/logos-originals/Birdhouse-Logo.jpg"
    favicons_output_dir: str = "img/favicons"
    favicons_file_name: str = "Favicon"
    favicon_sizes: List[int] = field(default_factory=list)
    manifest_icon_path: str = "img/logos-originals/Birdhouse-Logo.png"
    manifest_icon_output_dir: str = "img/icons"
    manifest_icon_file_name: str = "Icon"
    manifest_icon_sizes: List[int] = field(default_factory=list)
    statistics_file: str = "pipeline-log.txt"
    ignored_file_types: List[str] = field(
        default_factory=lambda: [".zip", ".rar", ".md", ".psd", ".htaccess"]
    )
    directories_to_include: List[str] = field(
        default_factory=lambda: [
            "src", "fonts", "img/favicons", "img/icons",
            "img/app-icons", "img/screenshots", "uploads",
        ]
    )
    directories_to_exclude_from_cache: List[str] = field(
        default_factory=lambda: ["img/screenshots", "uploads"]
    )
    pre_release_scripts: List[str] = field(default_factory=list)
    post_release_scripts: List[str] = field(default_factory=list)
    app_icon_source_path: str = "img/logos-originals/Birdhouse-Logo.jpg"
    app_icon_output_dir: str = "img/app-icons"

    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.name != "extra"]

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  base: Optional['PipelineConfig'] = None) -> 'PipelineConfig':
        """Create from dictionary, values in ``data`` win over ``base``"""
        values = (base or cls()).to_dict()
        values.update(data or {})

        known = set(cls.field_names())
        kwargs = {k: v for k, v in values.items() if k in known}
        extra = {k: v for k, v in values.items() if k not in known}
        return cls(extra=extra, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary in declaration order"""
        data = {name: getattr(self, name) for name in self.field_names()}
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    def get_favicon_sizes(self) -> List[int]:
        return list(self.favicon_sizes) or list(DEFAULT_FAVICON_SIZES)

    def get_manifest_icon_sizes(self) -> List[int]:
        return list(self.manifest_icon_sizes) or list(DEFAULT_MANIFEST_ICON_SIZES)

    def get_application_path(self, target: Target) -> Optional[str]:
        """Remote application directory for a target"""
        if target == Target.PRODUCTION:
            return self.production_path
        if target == Target.STAGING:
            return self.staging_path
        return None


@dataclass
class SftpConfig:
    """SFTP connection settings"""

    host: str = "localhost"
    port: int = DEFAULT_SFTP_PORT
    username: str = "anonymous"
    password: str = ""
    private_key: Optional[str] = None
    strict_host_keys: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SftpConfig':
        """Create from dictionary"""
        return cls(
            host=data.get("host", "localhost"),
            port=int(data.get("port", DEFAULT_SFTP_PORT)),
            username=data.get("username", "anonymous"),
            password=data.get("password", "") or "",
            private_key=data.get("private_key"),
            strict_host_keys=bool(data.get("strict_host_keys", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "password": self.password,
        }
        if self.private_key:
            data["private_key"] = self.private_key
        if self.strict_host_keys:
            data["strict_host_keys"] = True
        return data
