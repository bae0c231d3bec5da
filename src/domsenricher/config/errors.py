"""Errors raised while reading enricher settings from the environment."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A setting is present but unusable, e.g. a non-numeric Fedora timeout."""


class MissingConfigurationError(ConfigurationError):
    """One or more required settings (Fedora URL or credentials) are unset or blank."""
