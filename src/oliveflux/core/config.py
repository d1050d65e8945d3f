"""
Configuration system with validation and environment awareness.
Based on Pydantic Settings for robust configuration management.
"""
from pathlib import Path
import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, Optional, Literal, Union

from oliveflux.core import constants
from oliveflux.core.types import SpacingRule


class InterceptionConfig(BaseSettings):
    """Configuration for the canopy interception (fAPAR) model"""

    spacing_rule: SpacingRule = Field(
        default=SpacingRule.REFERENCE,
        description="Spacing band selection: published chained conditions or corrected ranges"
    )

    model_config = SettingsConfigDict(env_prefix="OLIVEFLUX_INTERCEPTION_", case_sensitive=False)


class TranspirationConfig(BaseSettings):
    """Constants of the canopy conductance transpiration model"""

    atmospheric_pressure_kpa: float = Field(constants.ATMOSPHERIC_PRESSURE_KPA, gt=0)
    specific_heat_air: float = Field(constants.SPECIFIC_HEAT_AIR, gt=0, description="J/kg/K")
    psychrometric_constant: float = Field(constants.PSYCHROMETRIC_CONSTANT, gt=0, description="kPa/K")
    conductance_coefficient_a: float = Field(constants.CONDUCTANCE_COEFFICIENT_A)
    conductance_coefficient_b: float = Field(constants.CONDUCTANCE_COEFFICIENT_B)
    latent_heat_mj_kg: float = Field(constants.LATENT_HEAT_VAPORIZATION_MJ, gt=0)
    par_fraction: float = Field(constants.PAR_FRACTION, gt=0, le=1)

    model_config = SettingsConfigDict(env_prefix="OLIVEFLUX_TRANSPIRATION_", case_sensitive=False)


class ValidationConfig(BaseSettings):
    """Configuration for the input validation boundary"""

    enabled: bool = Field(False, description="Check inputs before evaluating the formulas")
    warn_on_non_finite: bool = Field(True, description="Log a warning when a result is NaN or infinite")

    model_config = SettingsConfigDict(env_prefix="OLIVEFLUX_VALIDATION_", case_sensitive=False)


class MonitoringConfig(BaseSettings):
    """Configuration for logging"""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    model_config = SettingsConfigDict(env_prefix="OLIVEFLUX_MONITORING_", case_sensitive=False)


class OliveFluxConfig(BaseSettings):
    """Main configuration for the oliveflux package"""

    # System
    project_name: str = "oliveflux"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # Component configurations
    interception: InterceptionConfig = Field(default_factory=InterceptionConfig)
    transpiration: TranspirationConfig = Field(default_factory=TranspirationConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    # SITE METADATA
    site_configs: Dict[str, Dict] = Field(
        default_factory=dict,
        description="Site-specific overrides (spacing rule, validation)"
    )

    model_config = SettingsConfigDict(
        env_prefix="OLIVEFLUX_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_config(self):
        """Cross-field validation"""
        if self.environment == "production" and self.debug:
            raise ValueError("Debug mode cannot be enabled in production")

        return self

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "OliveFluxConfig":
        """Load configuration from YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        return cls(**yaml_config)

    def to_yaml(self, yaml_path: Union[str, Path]):
        """Save configuration to YAML file"""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False)

    def get_site_config(self, site_id: Optional[str]) -> Dict:
        """Get site-specific configuration overrides"""
        if not site_id:
            return {}
        return self.site_configs.get(site_id, {})


# USAGE: Environment variables override defaults
# export OLIVEFLUX_INTERCEPTION__SPACING_RULE=corrected
# export OLIVEFLUX_VALIDATION__ENABLED=true

# Global configuration instance
_config: Optional[OliveFluxConfig] = None


def get_config(config_path: Optional[Path] = None) -> OliveFluxConfig:
    """Get or create configuration instance (singleton pattern)"""
    global _config

    if _config is None:
        if config_path and Path(config_path).exists():
            _config = OliveFluxConfig.from_yaml(config_path)
        else:
            # Try to load from environment
            _config = OliveFluxConfig()

    return _config


def set_config(config: Optional[OliveFluxConfig]):
    """Set configuration (useful for testing)"""
    global _config
    _config = config
