"""Provider configuration from ~/.clawcode/config.json and the environment.

Credentials in the config file win over environment variables (which may
come from a project ``.env`` loaded by the CLI). Credentials are never logged.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from clawcode.agents.exceptions import ProviderConfigError
from clawcode.models import ProviderConfig

logger = logging.getLogger(__name__)

CLAWCODE_DIR = ".clawcode"
CONFIG_FILE = "config.json"
HOME_ENV_VAR = "CLAWCODE_HOME"

PROVIDERS = ("azure", "groq", "gemini", "openai", "anthropic")

# provider -> (api key var, model var)
_ENV_VARS = {
    "groq": ("GROQ_API_KEY", "GROQ_MODEL"),
    "gemini": ("GEMINI_API_KEY", "GEMINI_MODEL"),
    "openai": ("OPENAI_API_KEY", "OPENAI_MODEL"),
    "anthropic": ("ANTHROPIC_API_KEY", "ANTHROPIC_MODEL"),
}


class ProviderCredentials(BaseModel):
    """One provider entry of the config file (camelCase keys on disk)."""

    model_config = ConfigDict(frozen=False, populate_by_name=True)

    api_key: str = Field(alias="apiKey")
    model: str | None = None
    endpoint: str | None = None
    deployment: str | None = None


class ClawCodeConfig(BaseModel):
    """Contents of config.json."""

    model_config = ConfigDict(frozen=False, populate_by_name=True)

    default_provider: str | None = Field(default=None, alias="defaultProvider")
    providers: dict[str, ProviderCredentials] = Field(default_factory=dict)


def get_clawcode_dir() -> Path:
    """Return the config directory: $CLAWCODE_HOME or ~/.clawcode."""
    override = os.getenv(HOME_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / CLAWCODE_DIR


def get_config_path() -> Path:
    return get_clawcode_dir() / CONFIG_FILE


def read_config(path: Path | None = None) -> ClawCodeConfig | None:
    """Read config.json.

    Returns:
        The parsed config, or None when the file is missing or invalid.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return None
    try:
        return ClawCodeConfig.model_validate(
            json.loads(config_path.read_text(encoding="utf-8"))
        )
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Ignoring invalid config file %s: %s", config_path, type(exc).__name__)
        return None


def write_config(config: ClawCodeConfig, path: Path | None = None) -> Path:
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        json.dumps(config.model_dump(by_alias=True, exclude_none=True), indent=2),
        encoding="utf-8",
    )
    return config_path


def provider_from_env(provider: str) -> ProviderConfig | None:
    """Build a provider config from environment variables, if its key is set."""
    if provider == "azure":
        endpoint = os.getenv("AZURE_OPENAI_ENDPOINT")
        api_key = os.getenv("AZURE_OPENAI_API_KEY")
        deployment = os.getenv("AZURE_OPENAI_DEPLOYMENT")
        if not (endpoint and api_key and deployment):
            return None
        return ProviderConfig(
            provider="azure", api_key=api_key, endpoint=endpoint, deployment=deployment
        )

    key_var, model_var = _ENV_VARS[provider]
    api_key = os.getenv(key_var)
    if not api_key:
        return None
    return ProviderConfig(provider=provider, api_key=api_key, model=os.getenv(model_var) or None)


def _provider_from_file(provider: str, credentials: ProviderCredentials) -> ProviderConfig | None:
    if not credentials.api_key:
        return None
    if provider == "azure" and not credentials.endpoint:
        return None
    return ProviderConfig(
        provider=provider,
        api_key=credentials.api_key,
        model=credentials.model,
        endpoint=credentials.endpoint,
        deployment=credentials.deployment,
    )


def resolve_provider_configs(config: ClawCodeConfig | None) -> dict[str, ProviderConfig]:
    """Collect every usable provider, config file first, then environment.

    Returns:
        Mapping provider name -> ProviderConfig in PROVIDERS order.
    """
    resolved: dict[str, ProviderConfig] = {}
    file_providers = config.providers if config is not None else {}
    for provider in PROVIDERS:
        provider_config = None
        if provider in file_providers:
            provider_config = _provider_from_file(provider, file_providers[provider])
        if provider_config is None:
            provider_config = provider_from_env(provider)
        if provider_config is not None:
            resolved[provider] = provider_config
    logger.debug("Configured providers: %s", ", ".join(resolved) or "none")
    return resolved


def select_provider(
    available: dict[str, ProviderConfig],
    requested: str | None = None,
    cached: str | None = None,
    default: str | None = None,
) -> ProviderConfig:
    """Pick the provider for a task.

    Order: explicit request, then the session's cached choice, then the
    config default, then the first configured provider.

    Raises:
        ProviderConfigError: If the requested provider is not configured, or
            none is configured at all.
    """
    if requested:
        if requested not in available:
            raise ProviderConfigError(
                f"Provider '{requested}' is not configured. "
                f"Set its credentials in {get_config_path()} or the environment."
            )
        return available[requested]

    for candidate in (cached, default):
        if candidate and candidate in available:
            return available[candidate]

    if available:
        return next(iter(available.values()))

    raise ProviderConfigError(
        "No LLM provider configured. Add credentials to "
        f"{get_config_path()} or set one of: "
        "AZURE_OPENAI_API_KEY, GROQ_API_KEY, GEMINI_API_KEY, OPENAI_API_KEY, ANTHROPIC_API_KEY."
    )
