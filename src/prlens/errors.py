"""Exception hierarchy for prlens."""

from __future__ import annotations


class PrLensError(Exception):
    """Base class for prlens errors surfaced to the CLI."""


class SettingsError(PrLensError):
    """A configured value is out of range or the config file cannot be read."""


class ProviderConfigError(PrLensError):
    """Model provider is unset, unsupported, or missing required values."""


class EventLoadError(PrLensError):
    """GitHub event payload is missing or not valid JSON."""


class InputReadError(PrLensError):
    """A diff, JSON, or commit-message input file cannot be read."""


__all__ = ["PrLensError", "SettingsError", "ProviderConfigError", "EventLoadError", "InputReadError"]
