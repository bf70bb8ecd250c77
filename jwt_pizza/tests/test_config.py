import pytest
from pydantic import ValidationError

from jwt_pizza.core.config import Settings


def test_settings_fields():
    assert set(Settings.model_fields) == {
        "env",
        "jwt_secret",
        "jwt_algorithm",
        "database_url",
        "bcrypt_rounds",
        "list_per_page",
        "backend_cors_origins",
        "log_level",
        "admin_name",
        "admin_email",
        "admin_password",
    }


def test_settings_are_frozen(settings):
    with pytest.raises(ValidationError):
        settings.jwt_secret = "another-secret-value-that-is-long-enough"


def test_cors_origins_split():
    s = Settings(backend_cors_origins="http://a.test, http://b.test,")
    assert s.cors_origins == ["http://a.test", "http://b.test"]
