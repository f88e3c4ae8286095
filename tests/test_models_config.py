"""
Unit tests for user models and settings.
"""

import time

import pytest

from conftest import make_user
from oidc_session.config import ClientSettings
from oidc_session.exceptions import ConfigurationError
from oidc_session.models import User, navigation_target


class TestUser:
    def test_valid_token_not_expired(self):
        user = make_user()
        assert user.expired is False
        assert user.expires_in > 0

    def test_past_expiry_is_expired(self):
        assert make_user(expired=True).expired is True

    def test_unknown_expiry_is_not_expired(self):
        user = User(access_token="t")
        assert user.expires_in is None
        assert user.expired is False

    def test_expiry_now_counts_as_expired(self):
        user = User(access_token="t", expires_at=int(time.time()))
        assert user.expired is True

    def test_scopes(self):
        user = User(access_token="t", scope="openid profile email")
        assert user.scopes == ["openid", "profile", "email"]
        assert User(access_token="t").scopes == []

    def test_user_is_immutable(self):
        user = make_user()
        with pytest.raises(Exception):
            user.access_token = "other"


class TestNavigationTarget:
    def test_target_from_state(self):
        assert navigation_target(make_user(state={"to": "/dashboard"})) == "/dashboard"

    def test_no_user(self):
        assert navigation_target(None) is None

    def test_no_state(self):
        assert navigation_target(make_user()) is None

    def test_state_without_to(self):
        assert navigation_target(make_user(state={"from": "/x"})) is None

    def test_non_mapping_state(self):
        assert navigation_target(make_user(state="opaque")) is None

    def test_empty_or_non_string_to(self):
        assert navigation_target(make_user(state={"to": ""})) is None
        assert navigation_target(make_user(state={"to": 42})) is None


class TestClientSettings:
    def test_silent_renew_needs_both_flag_and_uri(self):
        base = dict(authority="https://idp", client_id="c", redirect_uri="http://app/cb")
        assert ClientSettings(**base).silent_renew_enabled is False
        assert (
            ClientSettings(**base, silent_redirect_uri="http://app/silent").silent_renew_enabled
            is True
        )
        assert (
            ClientSettings(
                **base,
                silent_redirect_uri="http://app/silent",
                automatic_silent_renew=False,
            ).silent_renew_enabled
            is False
        )

    def test_defaults(self):
        settings = ClientSettings(authority="a", client_id="c", redirect_uri="r")
        assert settings.scope == "openid"
        assert settings.response_type == "code"
        assert settings.automatic_silent_renew is True
        assert settings.extra == {}


class TestSettingsFromEnv:
    @pytest.fixture
    def env_file(self, tmp_path):
        return str(tmp_path / "missing.env")

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        for name in (
            "AUTHORITY",
            "CLIENT_ID",
            "REDIRECT_URI",
            "SILENT_REDIRECT_URI",
            "POST_LOGOUT_REDIRECT_URI",
            "SCOPE",
            "RESPONSE_TYPE",
            "AUTOMATIC_SILENT_RENEW",
        ):
            monkeypatch.delenv(f"OIDC_{name}", raising=False)

    def test_reads_environment(self, monkeypatch, env_file):
        monkeypatch.setenv("OIDC_AUTHORITY", "https://idp.example.com/")
        monkeypatch.setenv("OIDC_CLIENT_ID", "spa")
        monkeypatch.setenv("OIDC_REDIRECT_URI", "http://localhost/signin")
        monkeypatch.setenv("OIDC_SILENT_REDIRECT_URI", "http://localhost/silent")
        monkeypatch.setenv("OIDC_SCOPE", "openid profile")
        monkeypatch.setenv("OIDC_AUTOMATIC_SILENT_RENEW", "yes")

        settings = ClientSettings.from_env(env_file=env_file)

        assert settings.authority == "https://idp.example.com/"
        assert settings.client_id == "spa"
        assert settings.scope == "openid profile"
        assert settings.silent_renew_enabled is True

    def test_falsy_renew_flag(self, monkeypatch, env_file):
        monkeypatch.setenv("OIDC_AUTHORITY", "a")
        monkeypatch.setenv("OIDC_CLIENT_ID", "c")
        monkeypatch.setenv("OIDC_REDIRECT_URI", "r")
        monkeypatch.setenv("OIDC_AUTOMATIC_SILENT_RENEW", "off")

        settings = ClientSettings.from_env(env_file=env_file)
        assert settings.automatic_silent_renew is False

    def test_missing_required(self, monkeypatch, env_file):
        monkeypatch.setenv("OIDC_AUTHORITY", "a")
        with pytest.raises(ConfigurationError, match="OIDC_CLIENT_ID"):
            ClientSettings.from_env(env_file=env_file)

    def test_loads_dotenv_file(self, tmp_path, monkeypatch):
        env = tmp_path / ".env"
        env.write_text(
            "OIDC_AUTHORITY=https://file.example.com/\n"
            "OIDC_CLIENT_ID=from-file\n"
            "OIDC_REDIRECT_URI=http://localhost/cb\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("OIDC_CLIENT_ID", "from-env")

        settings = ClientSettings.from_env(env_file=str(env))

        assert settings.authority == "https://file.example.com/"
        # Real environment wins over the file
        assert settings.client_id == "from-env"
