"""Unit tests for settings."""

from .settings import DEFAULT_API_URL, Settings


def describe_Settings():

    def it_reads_auth_token_from_env(monkeypatch):
        monkeypatch.setenv("AUTH_TOKEN", "secret")
        assert Settings(_env_file=None).auth_token == "secret"

    def it_defaults_to_no_token(monkeypatch):
        monkeypatch.delenv("AUTH_TOKEN", raising=False)
        assert Settings(_env_file=None).auth_token is None

    def it_reads_token_from_env_file(monkeypatch, tmp_path):
        monkeypatch.delenv("AUTH_TOKEN", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("# comment\nAUTH_TOKEN=from-file\nUNRELATED=1\n")
        assert Settings(_env_file=env_file).auth_token == "from-file"

    def it_defaults_to_groove_endpoint(monkeypatch):
        monkeypatch.delenv("API_URL", raising=False)
        assert Settings(_env_file=None).api_url == DEFAULT_API_URL
