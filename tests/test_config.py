"""Tests for binding configuration."""

import pytest
from snapshot_binding import BindingConfig


class TestBindingConfig:
    """Tests for BindingConfig class."""

    def test_defaults(self):
        config = BindingConfig()

        assert config.identity_field == "id"
        assert config.strict_lists is False
        assert config.include_identity is True

    def test_empty_identity_field(self):
        with pytest.raises(ValueError, match="identity_field must be a non-empty string"):
            BindingConfig(identity_field="")

    def test_to_dict_conversion(self):
        config = BindingConfig(identity_field="key", strict_lists=True)

        assert config.to_dict() == {
            "identityField": "key",
            "strictLists": True,
            "includeIdentity": True,
        }

    def test_from_dict_creation(self):
        config = BindingConfig.from_dict({"identityField": "uid", "includeIdentity": False})

        assert config == BindingConfig(identity_field="uid", include_identity=False)

    def test_from_dict_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown config keys: identity"):
            BindingConfig.from_dict({"identity": "uid"})
