"""Cutting job files: schema, loading, advisory checks and adapters.

A job is a JSON document validated by CuttingJobConfiguration. load_config
reads one from disk and raises ConfigError with a categorized error_type;
validate_config adds the cutting checks the schema cannot express, and the
config_to_* adapters turn the models into domain objects.
"""

from stonecut.application.config.adapter import (
    config_to_layer_draft,
    config_to_layer_drafts,
    config_to_partitions,
    config_to_remainder,
    config_to_remainders,
    config_to_standard_dimensions,
    config_to_stock,
    longitudinal_rate,
)
from stonecut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from stonecut.application.config.schema import (
    SUPPORTED_VERSIONS,
    CuttingJobConfiguration,
    LayerEdgesConfig,
    LayerStoneConfig,
    LayerTypeConfig,
    LongitudinalCutConfig,
    PartitionConfig,
    PositionConfig,
    RatesConfig,
    RemainderConfig,
    SlabCutConfig,
    StairLayerConfig,
    StandardDimensionConfig,
    StockConfig,
)
from stonecut.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "CuttingJobConfiguration",
    "LayerEdgesConfig",
    "LayerStoneConfig",
    "LayerTypeConfig",
    "LongitudinalCutConfig",
    "PartitionConfig",
    "PositionConfig",
    "RatesConfig",
    "RemainderConfig",
    "SlabCutConfig",
    "StairLayerConfig",
    "StandardDimensionConfig",
    "StockConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_layer_draft",
    "config_to_layer_drafts",
    "config_to_partitions",
    "config_to_remainder",
    "config_to_remainders",
    "config_to_standard_dimensions",
    "config_to_stock",
    "load_config",
    "load_config_from_dict",
    "longitudinal_rate",
    "validate_config",
]
