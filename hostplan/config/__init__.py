from .manager import ConfigManager, default_config_path
from .schema import SchemaError, validate_config_schema

__all__ = [
    "ConfigManager",
    "SchemaError",
    "default_config_path",
    "validate_config_schema",
]
