"""Tests for RegistrySettings environment parsing."""

import pytest

from exam_helper.configs.registry import RegistrySettings


class TestRegistrySettings:
    """Test how registry bounds are read from the environment."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should bound documents and never expire by default."""
        monkeypatch.delenv("REGISTRY_MAX_DOCUMENTS", raising=False)
        monkeypatch.delenv("REGISTRY_TTL_SECONDS", raising=False)

        settings = RegistrySettings()

        assert settings.max_documents == 100
        assert settings.ttl_seconds is None

    @pytest.mark.parametrize("raw", ["", "None", "none", "null"])
    def test_unbounded_values_from_env(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        """Empty and none-like values should disable the bound."""
        # Arrange
        monkeypatch.setenv("REGISTRY_MAX_DOCUMENTS", raw)
        monkeypatch.setenv("REGISTRY_TTL_SECONDS", raw)

        # Act
        settings = RegistrySettings()

        # Assert
        assert settings.max_documents is None
        assert settings.ttl_seconds is None

    def test_numeric_values_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Numeric values should be parsed as bounds."""
        monkeypatch.setenv("REGISTRY_MAX_DOCUMENTS", "5")
        monkeypatch.setenv("REGISTRY_TTL_SECONDS", "30")

        settings = RegistrySettings()

        assert settings.max_documents == 5
        assert settings.ttl_seconds == 30.0

    def test_invalid_bound_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A zero document limit should fail validation."""
        monkeypatch.setenv("REGISTRY_MAX_DOCUMENTS", "0")

        with pytest.raises(ValueError):
            RegistrySettings()
