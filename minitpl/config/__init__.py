from .load import BuilderConfig, ConfigError, load_config, load_variables
from .paths import CONFIG_FILE, config_path, template_path

__all__ = [
    "BuilderConfig",
    "ConfigError",
    "load_config",
    "load_variables",
    "CONFIG_FILE",
    "config_path",
    "template_path",
]
