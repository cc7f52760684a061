# findimports/config/loader.py
"""
Handles loading and merging of configurations from TOML files.
"""
import toml
from pathlib import Path
from typing import Dict, Any, Optional
import structlog

from findimports.exceptions import ConfigError

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".findimports.toml", "findimports.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "findimports"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_FINDERCONFIG_ATTR_MAP: Dict[str, str] = {
    "statements": "statements",
    "statement_files": "statement_files",
    "language": "language",
    "output_format": "output_format",
    "output_file": "output_file",
}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file(): return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
        return data.get("tool", {}).get("findimports", {}) if file_path.name == "pyproject.toml" else data
    except Exception as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        return {}

def load_and_merge_configs(project_dir: Optional[Path] = None) -> Dict[str, Any]:
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    search_dir = project_dir or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = search_dir / filename
        if candidate.is_file():
            project_settings = _load_toml_file_data(candidate)
            if project_settings:
                log.info("loading_project_local_config", path=str(candidate))
                user_profiles = merged_toml_data.get("profiles", {})
                project_profiles = project_settings.pop("profiles", {})
                if isinstance(user_profiles, dict) and isinstance(project_profiles, dict):
                    user_profiles.update(project_profiles)
                    merged_toml_data["profiles"] = user_profiles
                elif isinstance(project_profiles, dict):
                    merged_toml_data["profiles"] = project_profiles
                merged_toml_data.update(project_settings)
                break
    if not merged_toml_data: log.debug("no_configuration_files_loaded")
    return merged_toml_data

def select_profile(raw_configs: Dict[str, Any], profile_name: Optional[str]) -> Dict[str, Any]:
    # flattens top-level settings with the named profile laid over them.
    effective = {k: v for k, v in raw_configs.items() if k in CONFIG_KEY_TO_FINDERCONFIG_ATTR_MAP}
    if not profile_name:
        return effective
    profiles = raw_configs.get("profiles", {})
    if not isinstance(profiles, dict) or profile_name not in profiles:
        raise ConfigError(f"profile '{profile_name}' not found in configuration files")
    profile_values = profiles[profile_name]
    if not isinstance(profile_values, dict):
        raise ConfigError(f"profile '{profile_name}' must be a table")
    log.info("applying_profile_settings", profile=profile_name)
    effective.update({k: v for k, v in profile_values.items() if k in CONFIG_KEY_TO_FINDERCONFIG_ATTR_MAP})
    return effective
