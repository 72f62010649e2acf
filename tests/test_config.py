"""Tests for src.clubsearch.config covering YAML loading and validation.

Run with coverage:
    pytest tests/test_config.py --maxfail=1 -v --cov=src.clubsearch.config --cov-report=term-missing
"""

import pytest

from src.clubsearch import config
from src.clubsearch.errors import ConfigError

VALID_YAML = """
ElasticSearch:
  Address: http://localhost:9200
  Username: elastic
  Password: secret
"""


def _write(tmp_path, text, name="config.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_reads_elasticsearch_section(tmp_path):
    settings = config.load_config(_write(tmp_path, VALID_YAML))
    assert settings.address == "http://localhost:9200"
    assert settings.username == "elastic"
    assert settings.password == "secret"
    assert settings.api_key is None
    assert settings.verify_tls is True
    assert settings.timeout == config.DEFAULT_TIMEOUT


def test_load_config_optional_fields(tmp_path):
    text = VALID_YAML + "  ApiKey: abc\n  VerifyTLS: false\n  Timeout: 5\n"
    settings = config.load_config(_write(tmp_path, text))
    assert settings.api_key == "abc"
    assert settings.verify_tls is False
    assert settings.timeout == 5.0


def test_load_config_honors_env_override(tmp_path, monkeypatch):
    path = _write(tmp_path, VALID_YAML, name="custom.yaml")
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(path))
    assert config.load_config().address == "http://localhost:9200"


def test_missing_file_is_config_error(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        config.load_config(tmp_path / "absent.yaml")


def test_malformed_yaml_is_config_error(tmp_path):
    with pytest.raises(ConfigError, match="Malformed"):
        config.load_config(_write(tmp_path, "ElasticSearch: [unclosed\n"))


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "Other:\n  Address: x\n",
        "ElasticSearch:\n  Username: elastic\n",
        "ElasticSearch:\n  Address: http://h:9200\n  Timeout: soon\n",
        "ElasticSearch:\n  Address: http://h:9200\n  Timeout: 0\n",
        "ElasticSearch:\n  Address: http://h:9200\n  Timeout: -5\n",
        "ElasticSearch:\n  Address: http://h:9200\n  VerifyTLS: \"false\"\n",
        "ElasticSearch:\n  Address: http://h:9200\n  VerifyTLS: 0\n",
    ],
)
def test_incomplete_config_is_config_error(tmp_path, text):
    with pytest.raises(ConfigError):
        config.load_config(_write(tmp_path, text))


def test_settings_repr_hides_password(tmp_path):
    settings = config.load_config(_write(tmp_path, VALID_YAML))
    assert "secret" not in repr(settings)


def test_arg_parser_accepts_config_path():
    args = config.build_arg_parser().parse_args(["--config", "other.yaml"])
    assert args.config == "other.yaml"
