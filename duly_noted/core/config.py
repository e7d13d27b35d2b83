"""Configuration file management utilities.

This module provides utilities for loading and saving duly-noted.yml
configuration files with helpful examples and documentation. The legacy
duly-noted.json format is read with the same loader since YAML is a
superset of JSON.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..constants import CONFIG_FILE_NAMES
from ..schemas.config import DulyNotedConfig, validate_config
from .errors import ConfigError


def find_config_file(project_path: Path) -> Path | None:
    """Return the first existing config file in the project root."""
    for name in CONFIG_FILE_NAMES:
        config_path = project_path / name
        if config_path.exists():
            return config_path
    return None


def load_config(project_path: Path) -> dict[str, Any] | None:
    """Load duly-noted.yml (or duly-noted.json) configuration.

    Returns:
        Raw mapping, or None when the project has no config file

    Raises:
        ConfigError: If the file exists but cannot be read or parsed
    """
    config_path = find_config_file(project_path)
    if config_path is None:
        return None

    try:
        with open(config_path, encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {config_path.name}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a mapping, got {type(data).__name__}")
    return data


def get_config(project_path: Path) -> DulyNotedConfig:
    """Load and validate the project config, falling back to defaults.

    Raises:
        ConfigError: If the file is corrupt or fails validation
    """
    data = load_config(project_path) or {}
    try:
        config = validate_config(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    if not config.project_name:
        config.project_name = project_path.name
    return config


def save_config(project_path: Path, config: dict[str, Any]) -> bool:
    """Save duly-noted.yml configuration with helpful examples."""
    config_path = project_path / CONFIG_FILE_NAMES[0]
    try:
        with open(config_path, 'w', encoding='utf-8') as f:
            config_copy = config.copy()
            # Empty lists are written as empty values instead of []
            if not config_copy.get('exclude'):
                config_copy['exclude'] = None
            if not config_copy.get('externalReferences'):
                config_copy['externalReferences'] = None

            yaml.dump(config_copy, f, default_flow_style=False, sort_keys=False)

            f.write("\n")
            f.write("# " + "=" * 76 + "\n")
            f.write("# Configuration Guide & Examples\n")
            f.write("# " + "=" * 76 + "\n")
            f.write("\n")
            f.write("# Tags\n")
            f.write("# ----\n")
            f.write("# anchorRegExp and linkRegExp need exactly one capture group holding the tag.\n")
            f.write("# Slashes inside a tag nest it into collections: '!api/client/connect'\n")
            f.write("# declares anchor 'connect' in collection 'client' inside 'api'.\n")
            f.write("# Link to it from any comment with '@connect'.\n")
            f.write("\n")
            f.write("# External References\n")
            f.write("# -------------------\n")
            f.write("# Links whose first segment matches an entry's anchor point outside the\n")
            f.write("# project. Each '::' in path is replaced by the next tag segment.\n")
            f.write("# Examples:\n")
            f.write("#   externalReferences:\n")
            f.write("#     - anchor: issue\n")
            f.write("#       path: \"https://github.com/me/project/issues/::\"   # @issue/12\n")
            f.write("#     - anchor: mdn\n")
            f.write("#       path: \"https://developer.mozilla.org/::/docs/::\"  # @mdn/en-US/Web\n")
            f.write("\n")
            f.write("# Source Files (Glob Patterns)\n")
            f.write("# -----------------------------\n")
            f.write("# Examples:\n")
            f.write("#   files:\n")
            f.write("#     - \"src/**/*.ts\"            # All TypeScript files in src/\n")
            f.write("#     - \"lib/**/*.py\"            # All Python files in lib/\n")
            f.write("#   exclude:\n")
            f.write("#     - \"**/*.min.js\"            # Skip minified bundles\n")
            f.write("\n")
            f.write("# Generators\n")
            f.write("# ----------\n")
            f.write("# html, markdown. markdownGeneratorOptions.gitHubMarkdownAnchors prefixes\n")
            f.write("# fragments with 'user-content-' to match GitHub's rendering.\n")
            f.write("# Set strict: true to fail the run on duplicate anchors or unresolved links.\n")

        return True
    except OSError:
        return False
