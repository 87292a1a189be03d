"""Model provider selection and validation.

Clients are built here but never called: sending requests belongs to the
agent runtime.
"""

from __future__ import annotations

import logging
from enum import Enum

import httpx
from openai import AzureOpenAI, OpenAI

from prlens.config import Settings
from prlens.errors import ProviderConfigError

logger = logging.getLogger(__name__)

ANTHROPIC_OPENAI_BASE_URL = "https://api.anthropic.com/v1/"
GOOGLE_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_TIMEOUT = httpx.Timeout(120.0, connect=10.0)


class ModelProvider(str, Enum):
    OPENAI = "openai"
    AZURE = "azure"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    OPENAI_COMPATIBLE = "openai-compatible"


# provider -> (settings fields that must be set, error message)
_REQUIREMENTS: dict[ModelProvider, tuple[tuple[str, ...], str]] = {
    ModelProvider.OPENAI: (
        ("openai_api_key", "openai_model"),
        "OpenAI Configuration Error: Ensure OPENAI_API_KEY secret and OPENAI_MODEL "
        "repository/organization variable are set.",
    ),
    ModelProvider.AZURE: (
        ("azure_api_key", "azure_openai_resource", "azure_openai_deployment"),
        "Azure Configuration Error: Ensure AZURE_API_KEY secret, AZURE_OPENAI_RESOURCE variable, "
        "and AZURE_OPENAI_DEPLOYMENT variable are set.",
    ),
    ModelProvider.ANTHROPIC: (
        ("anthropic_api_key", "anthropic_model"),
        "Anthropic Configuration Error: Ensure ANTHROPIC_API_KEY secret and ANTHROPIC_MODEL variable are set.",
    ),
    ModelProvider.GOOGLE: (
        ("google_api_key", "google_model"),
        "Google Configuration Error: Ensure GOOGLE_API_KEY secret and GOOGLE_MODEL variable are set.",
    ),
    ModelProvider.OPENAI_COMPATIBLE: (
        ("openai_base_url", "openai_api_key", "openai_model"),
        "OpenAI Compatible Configuration Error: Ensure OPENAI_BASE_URL variable, OPENAI_API_KEY secret, "
        "and OPENAI_MODEL variable are set.",
    ),
}


def validate_provider(settings: Settings) -> ModelProvider:
    """Return the configured provider or raise ProviderConfigError."""

    name = settings.model_provider
    if not name:
        raise ProviderConfigError("Configuration Error: MODEL_PROVIDER repository/organization variable is not set.")
    try:
        provider = ModelProvider(name)
    except ValueError:
        valid = ", ".join(p.value for p in ModelProvider)
        raise ProviderConfigError(
            f"Configuration Error: Unsupported model provider '{name}'. Valid values: {valid}."
        ) from None

    required, message = _REQUIREMENTS[provider]
    missing = [field for field in required if not getattr(settings, field)]
    if missing:
        logger.debug("provider %s missing settings: %s", provider.value, ", ".join(missing))
        raise ProviderConfigError(message)

    logger.info("provider configuration for '%s' is valid", provider.value)
    return provider


def model_name(settings: Settings) -> str:
    """Model id (or Azure deployment) for the configured provider."""

    provider = validate_provider(settings)
    if provider is ModelProvider.AZURE:
        return str(settings.azure_openai_deployment)
    if provider is ModelProvider.ANTHROPIC:
        return str(settings.anthropic_model)
    if provider is ModelProvider.GOOGLE:
        return str(settings.google_model)
    return str(settings.openai_model)


def create_client(settings: Settings, *, timeout: httpx.Timeout = DEFAULT_TIMEOUT) -> OpenAI:
    """Build an OpenAI SDK client pointed at the configured provider."""

    provider = validate_provider(settings)
    if provider is ModelProvider.AZURE:
        return AzureOpenAI(
            api_key=settings.azure_api_key,
            api_version=settings.azure_api_version,
            azure_endpoint=f"https://{settings.azure_openai_resource}.openai.azure.com",
            azure_deployment=settings.azure_openai_deployment,
            timeout=timeout,
        )
    if provider is ModelProvider.ANTHROPIC:
        return OpenAI(api_key=settings.anthropic_api_key, base_url=ANTHROPIC_OPENAI_BASE_URL, timeout=timeout)
    if provider is ModelProvider.GOOGLE:
        return OpenAI(api_key=settings.google_api_key, base_url=GOOGLE_OPENAI_BASE_URL, timeout=timeout)
    if provider is ModelProvider.OPENAI_COMPATIBLE:
        return OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url, timeout=timeout)
    return OpenAI(api_key=settings.openai_api_key, timeout=timeout)


__all__ = [
    "ModelProvider",
    "ANTHROPIC_OPENAI_BASE_URL",
    "GOOGLE_OPENAI_BASE_URL",
    "validate_provider",
    "model_name",
    "create_client",
]
