# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Reads the optional clawbuild YAML file into a ClawbuildConfig.

The file only overrides defaults: an empty file, or one that mentions just
`toolchain.program`, is fine. What isn't fine is a file we can't read, one
that isn't a YAML mapping, or one with keys the schema doesn't know. Those
abort the run with exit code 2 before cargo is launched.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from clawbuild.config.exceptions import ConfigLoadError, ConfigValidationError
from clawbuild.config.schema import ClawbuildConfig


def _parse_mapping(config_path: Path) -> dict[str, Any]:
    """Return the top-level mapping of the YAML file, {} for an empty file."""
    if not config_path.is_file():
        problem = "not found" if not config_path.exists() else "is not a file"
        raise ConfigLoadError(f"Build config {config_path} {problem}")

    try:
        document = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as err:
        raise ConfigLoadError(f"Build config {config_path} is unreadable: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Build config {config_path} has invalid YAML: {err}") from err

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigLoadError(
            f"Build config {config_path} must be a YAML mapping of sections "
            f"(build, toolchain, logging), got {type(document).__name__}"
        )
    return document


def load_config(config_path: Path) -> ClawbuildConfig:
    """
    Load the build config at `config_path`.

    Raises:
        ConfigLoadError: The file is missing, unreadable, or not a YAML mapping.
        ConfigValidationError: A section or key is unknown, or a value is out of range.
    """
    sections = _parse_mapping(config_path)
    try:
        return ClawbuildConfig.model_validate(sections)
    except ValidationError as err:
        raise ConfigValidationError(f"Build config {config_path} is invalid:\n{err}") from err
