import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from .constants import DefaultConfig
from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)


# --- Pydantic Model for Configuration Schema ---


class ResolverConfig(BaseModel):
    """Options that decide which schemas of the document produce tables."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    exclude_models: List[str] = Field(
        default_factory=list,
        alias="excludeModels",
        description="Schema names that never produce a table.",
    )
    skip_underscored_schemas: bool = Field(
        default=True,
        alias="skipUnderscoredSchemas",
        description="Skip schemas whose name starts with an underscore.",
    )
    generate_models_only_x_table: bool = Field(
        default=False,
        alias="generateModelsOnlyXTable",
        description="Only schemas with an explicit x-table annotation produce tables.",
    )
    junction_prefix: str = Field(
        default=DefaultConfig.JUNCTION_PREFIX,
        min_length=1,
        alias="junctionPrefix",
        description="Name prefix marking junction schemas.",
    )

    @field_validator("exclude_models", mode="before")
    @classmethod
    def check_model_names_are_strings(cls, v: Any) -> List[str]:
        """Ensure excluded model names are non-empty strings."""
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("excludeModels must be a list of schema names.")
        for item in v:
            if not isinstance(item, str):
                raise ValueError(
                    f"Schema names in excludeModels must be strings, found: {type(item).__name__}"
                )
            if not item.strip():
                raise ValueError("Schema names in excludeModels cannot be empty.")
        return [item.strip() for item in v]


def _to_alias(key: str) -> str:
    """Map a field name (exclude_models) to its document alias (excludeModels)."""
    field = ResolverConfig.model_fields.get(key)
    if field is not None and field.alias:
        return field.alias
    return key


def _validate_and_parse_config(
    config_dict: Dict[str, Any], config_path: Optional[str] = None
) -> ResolverConfig:
    """Validate a raw configuration dictionary against the schema."""
    try:
        validated_config = ResolverConfig.model_validate(config_dict)
        logger.debug("Configuration dictionary parsed and validated successfully.")
        return validated_config
    except ValidationError as e:
        problems = []
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Top Level"
            problems.append(f"{loc_str}: {error.get('msg', 'Unknown error')}")
        logger.error("Configuration validation failed.")
        raise ConfigurationError(
            "Invalid configuration: " + "; ".join(problems),
            config_file=config_path,
            context={'errors': problems},
        ) from e


def load_config(
    config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None
) -> ResolverConfig:
    """
    Load configuration from a YAML file, merge overrides, validate.

    Args:
        config_path: Optional YAML file with resolver options
        overrides: Options that take precedence over the file (None values ignored)

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file cannot be parsed or validation fails
    """
    raw_config: Dict[str, Any] = {}

    if config_path:
        config_file = Path(config_path)
        if not config_file.is_file():
            raise ConfigurationError(
                f"Config file not found at {config_path}", config_file=config_path
            )
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Error parsing YAML file {config_path}: {e}", config_file=config_path
            ) from e

        if yaml_config and isinstance(yaml_config, dict):
            raw_config.update({_to_alias(key): value for key, value in yaml_config.items()})
            logger.debug(f"Loaded configuration from {config_path}")
        elif yaml_config:
            raise ConfigurationError(
                f"Content in config file {config_path} is not a dictionary.",
                config_file=config_path,
            )

    if overrides:
        overridden_keys = {key for key, value in overrides.items() if value is not None}
        raw_config.update({_to_alias(key): overrides[key] for key in overridden_keys})
        if overridden_keys:
            logger.debug(f"Overridden config keys: {overridden_keys}")

    return _validate_and_parse_config(raw_config, config_path)
