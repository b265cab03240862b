"""
Resolver conventions using pydantic-settings.

ResolverSettings bundles the separator and sentinel strings used by the
expander and the lookup tree. Values come from (highest first):
1. Constructor arguments
2. Environment variables with LAYERCONF_ prefix
3. Defaults from layerconf.constants

Example:
    LAYERCONF_PATH_SEPARATOR=/ makes "a/b" address key "b" under "a".
"""

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import layerconf.constants as constants


class ResolverSettings(_pydantic_settings.BaseSettings):
    """Separator and sentinel conventions shared by all resolver components."""

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        frozen=True,
        extra="forbid",
    )

    path_separator: str = constants.PATH_SEPARATOR
    """Separator between lookup path segments."""

    default_separator: str = constants.DEFAULT_SEPARATOR
    """Separator between key and default inside braces."""

    empty_default: str = constants.EMPTY_DEFAULT
    """Default text that substitutes the empty string."""

    root_key: str = constants.ROOT
    """Key that addresses the whole merged tree."""

    @_pydantic.field_validator("path_separator", "default_separator")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"separator must be a single character, got {value!r}")
        return value

    @_pydantic.field_validator("empty_default")
    @classmethod
    def _non_empty_sentinel(cls, value: str) -> str:
        # An empty sentinel would be indistinguishable from "no default".
        if not value:
            raise ValueError("empty_default sentinel must not be empty")
        return value


def default_settings() -> ResolverSettings:
    """Build settings from the environment and built-in defaults."""
    return ResolverSettings()
