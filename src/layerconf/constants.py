"""
Shared constants for layerconf.

These are the default conventions only. Every component that depends on
them accepts a ResolverSettings instance so embedding applications can
change them without touching module state.
"""

ROOT = ""
"""Reserved key addressing the whole merged tree."""

PATH_SEPARATOR = "."
"""Separator between segments of a lookup path."""

DEFAULT_SEPARATOR = ":"
"""Separator between key and default inside a ${KEY:DEFAULT} token."""

EMPTY_DEFAULT = '""'
"""Default text meaning "substitute the empty string"."""

PROVIDER_NAME = "yaml"
"""Name reported by YAMLProvider.name()."""

ENV_PREFIX = "LAYERCONF_"
"""Environment variable prefix for ResolverSettings overrides."""
