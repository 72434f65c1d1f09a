"""Configuration loading for clawcode."""

from clawcode.config.config import (
    PROVIDERS,
    ClawCodeConfig,
    ProviderCredentials,
    get_clawcode_dir,
    get_config_path,
    read_config,
    resolve_provider_configs,
    select_provider,
    write_config,
)

__all__ = [
    "PROVIDERS",
    "ClawCodeConfig",
    "ProviderCredentials",
    "get_clawcode_dir",
    "get_config_path",
    "read_config",
    "resolve_provider_configs",
    "select_provider",
    "write_config",
]
