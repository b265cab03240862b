"""Tests for ResolverSettings."""

import pydantic as _pydantic
import pytest as _pytest

import layerconf.constants as constants
import layerconf.settings as settings


class TestDefaults:
    """Built-in defaults."""

    def test_defaults(self) -> None:
        """Defaults match the shared constants."""
        s = settings.ResolverSettings()
        assert s.path_separator == constants.PATH_SEPARATOR == "."
        assert s.default_separator == constants.DEFAULT_SEPARATOR == ":"
        assert s.empty_default == constants.EMPTY_DEFAULT == '""'
        assert s.root_key == constants.ROOT == ""

    def test_default_settings_helper(self) -> None:
        """default_settings() builds a fresh instance."""
        assert settings.default_settings() == settings.ResolverSettings()


class TestOverrides:
    """Constructor and environment overrides."""

    def test_constructor(self) -> None:
        """Constructor arguments override defaults."""
        s = settings.ResolverSettings(path_separator="/", default_separator="=")
        assert s.path_separator == "/"
        assert s.default_separator == "="

    def test_environment(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """LAYERCONF_* environment variables override defaults."""
        monkeypatch.setenv("LAYERCONF_EMPTY_DEFAULT", "<none>")
        monkeypatch.setenv("LAYERCONF_ROOT_KEY", "@")
        s = settings.ResolverSettings()
        assert s.empty_default == "<none>"
        assert s.root_key == "@"

    def test_constructor_beats_environment(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Explicit arguments take precedence over the environment."""
        monkeypatch.setenv("LAYERCONF_PATH_SEPARATOR", "/")
        assert settings.ResolverSettings(path_separator="|").path_separator == "|"


class TestValidation:
    """Invalid conventions are rejected."""

    @_pytest.mark.parametrize("field", ["path_separator", "default_separator"])
    @_pytest.mark.parametrize("value", ["", "::"])
    def test_separator_must_be_one_character(self, field: str, value: str) -> None:
        """Separators are single characters."""
        with _pytest.raises(_pydantic.ValidationError):
            settings.ResolverSettings(**{field: value})

    def test_empty_sentinel_rejected(self) -> None:
        """An empty sentinel would mean "no default"."""
        with _pytest.raises(_pydantic.ValidationError):
            settings.ResolverSettings(empty_default="")

    def test_unknown_field_rejected(self) -> None:
        """Typos in field names are errors."""
        with _pytest.raises(_pydantic.ValidationError):
            settings.ResolverSettings(path_seperator="/")  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        """Settings cannot be changed after construction."""
        s = settings.ResolverSettings()
        with _pytest.raises(_pydantic.ValidationError):
            s.path_separator = "/"  # type: ignore[misc]
