# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for clawbuild.

Every section of the YAML file gets its own frozen pydantic model. Frozen
means the build can't accidentally rewrite its own settings halfway through
a run.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Every field has a default, so running with no config file at all is the
same as running with an empty one.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_VALID_BACKENDS = ("cpu", "metal", "cuda", "vulkan")


class BuildConfig(BaseModel):
    """What gets built and where the result ends up."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    executable_name: str = Field(
        default="clawrs",
        min_length=1,
        description="Name of the binary cargo produces",
    )
    target_dir: str = Field(
        default="target",
        min_length=1,
        description="Cargo target directory, relative to the project directory",
    )
    project_dir: Optional[str] = Field(
        default=None,
        description="Directory holding Cargo.toml. None means the current directory",
    )
    backend: Optional[str] = Field(
        default=None,
        description="Default backend override. The --backend flag takes precedence",
    )
    extra_args: list[str] = Field(
        default_factory=list,
        description="Extra arguments appended to the cargo command line",
    )

    @field_validator("backend")
    @classmethod
    def _check_backend(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        normalized = value.strip().lower()
        if normalized not in _VALID_BACKENDS:
            raise ValueError(
                f"backend must be one of {', '.join(_VALID_BACKENDS)}, got '{value}'"
            )
        return normalized


class ToolchainConfig(BaseModel):
    """How the external build tool is launched."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    program: str = Field(
        default="cargo",
        min_length=1,
        description="Toolchain executable, looked up on PATH",
    )
    terminate_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Grace period between terminate and kill when the build is interrupted",
    )


class LoggingConfig(BaseModel):
    """Diagnostic log output. Progress lines on stdout aren't affected."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    log_level: str = Field(
        default="WARNING",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for a copy of the JSON log",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_VALID_LOG_LEVELS)}, got '{value}'"
            )
        return upper


class ClawbuildConfig(BaseModel):
    """
    Root config object, one optional section per YAML mapping key.

    The YAML file uses top-level keys matching these field names:
      config_version: "1.0.0"
      build: {...}
      toolchain: {...}
      logging: {...}
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        default="1.0.0",
        description="Schema version for compatibility tracking",
    )
    build: BuildConfig = Field(default_factory=BuildConfig)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
