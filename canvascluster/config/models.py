"""
Pydantic models for canvascluster configuration.

Provides type-safe, validated configuration with clear error messages
and automatic validation of all configuration values.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


class EngineConfig(BaseModel):
    """Configuration for the cluster engine."""

    grid_size: float = Field(
        default=400.0,
        gt=0.0,
        description="Edge length of a grid cell in canvas units. Larger cells produce coarser clusters.",
    )
    min_clusters: int = Field(
        default=4, ge=1, description="Lower bound on the number of clusters to aim for."
    )
    max_clusters: int = Field(
        default=8, ge=1, description="Upper bound on the number of clusters returned."
    )

    @model_validator(mode="after")
    def validate_cluster_bounds(self) -> "EngineConfig":
        """Validate that max_clusters >= min_clusters."""
        if self.max_clusters < self.min_clusters:
            raise ValueError(
                f"max_clusters ({self.max_clusters}) must be >= "
                f"min_clusters ({self.min_clusters})"
            )
        return self


class OutputConfig(BaseModel):
    """Configuration for CLI output."""

    indent: int = Field(default=2, ge=0, description="JSON indentation for printed results.")
    include_unclustered: bool = Field(
        default=False, description="List node ids that were not summarized by any cluster."
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Logging level.")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format.",
    )
    file: str | None = Field(default=None, description="Optional log file path.")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"level must be one of {allowed}, got: {v}")
        return v_upper


class CanvasClusterConfig(BaseModel):
    """Main canvascluster configuration."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "extra": "forbid",  # Raise error on unknown fields
        "validate_assignment": True,  # Validate on attribute assignment
    }


def load_config(config_file: str = "config/config.yaml") -> CanvasClusterConfig:
    """
    Load and validate configuration from a YAML file.

    Args:
        config_file: Path to YAML configuration file

    Returns:
        Validated CanvasClusterConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If configuration is invalid
    """
    config_path = Path(config_file)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        with open(config_path) as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML configuration: {e}")

    if config_dict is None:
        config_dict = {}

    try:
        return CanvasClusterConfig(**config_dict)
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}")


def save_config(config: CanvasClusterConfig, config_file: str = "config/config.yaml") -> None:
    """
    Save configuration to a YAML file.

    Args:
        config: CanvasClusterConfig instance to save
        config_file: Path to YAML configuration file
    """
    config_path = Path(config_file)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert to dict and remove None values for cleaner output
    config_dict = config.model_dump(exclude_none=True)

    with open(config_path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
