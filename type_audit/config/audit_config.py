"""
Audit configuration management.

Loads type audit settings from YAML files into a validated AuditConfig.
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from type_audit.core.errors import ConfigError
from type_audit.core.models import DEFAULT_MEMBER_KINDS, PropertyKind
from type_audit.core.schema import parse_member_kinds


class AuditConfig(BaseModel):
    """
    Settings for one type audit run.

    Attributes:
        properties: Allow-list of property names (empty means all)
        exclude_names: Property names to never consider
        member_kinds: Member kinds to consider
        skip_invalid: Skip records that cannot be introspected
        output_format: "table" or "json"
        log_level: Log level name
        log_format: "json" or "text"
    """

    properties: list[str] = Field(default_factory=list)
    exclude_names: list[str] = Field(default_factory=list)
    member_kinds: list[PropertyKind] = Field(
        default_factory=lambda: sorted(DEFAULT_MEMBER_KINDS, key=lambda kind: kind.value)
    )
    skip_invalid: bool = False
    output_format: Literal["table", "json"] = "table"
    log_level: str | None = None
    log_format: Literal["json", "text"] | None = None

    @field_validator("member_kinds", mode="before")
    @classmethod
    def parse_kinds(cls, v):
        """Accept kind names in any case."""
        if isinstance(v, str):
            v = [v]
        return sorted(parse_member_kinds(v), key=lambda kind: kind.value)

    def merged(self, **overrides: Any) -> "AuditConfig":
        """
        Return a copy with non-empty overrides applied.

        Args:
            **overrides: Field values; None and empty lists are ignored

        Returns:
            New AuditConfig
        """
        updates = {
            key: value
            for key, value in overrides.items()
            if value is not None and value != []
        }
        return self.model_validate({**self.model_dump(), **updates})


class AuditConfigLoader:
    """
    Loads audit settings from YAML configuration files.

    Expected YAML format:
    ```yaml
    audit:
      properties:
        - transaction_id
        - amount
      exclude_names:
        - internal_notes
      member_kinds: [data, computed]
      skip_invalid: true
      output_format: table
      log_level: INFO
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Audit configuration file not found: {config_path}")

    def load(self) -> AuditConfig:
        """
        Load and validate the audit settings.

        Returns:
            AuditConfig

        Raises:
            ConfigError: If YAML is invalid or settings fail validation
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config, dict) or "audit" not in config:
            raise ConfigError("Configuration file must contain 'audit' section")

        section = config["audit"] or {}
        if not isinstance(section, dict):
            raise ConfigError("'audit' section must be a mapping")

        try:
            return AuditConfig.model_validate(section)
        except (ValidationError, ValueError) as e:
            raise ConfigError(f"Invalid audit configuration in {self.config_path}: {e}") from e
