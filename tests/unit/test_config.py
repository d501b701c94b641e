"""Unit tests for config.py"""

import pytest

from sitegraph.config import load_config


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so no stray config.yaml is read."""
    monkeypatch.chdir(tmp_path)


def test_load_config_defaults(monkeypatch):
    """Settings defaults are used when no config.yaml, env var, or CLI override exists."""
    monkeypatch.delenv("SITEGRAPH_PAGES_DIR", raising=False)
    settings = load_config()
    assert settings.pages_dir == "content/pages"
    assert settings.data_dir == "content/data"
    assert settings.config_model == "Config"
    assert settings.dev_mode is False


def test_load_config_reads_config_yaml(tmp_path):
    """Values in config.yaml override the defaults."""
    (tmp_path / "config.yaml").write_text("pages_dir: site/pages\nconfig_model: SiteConfig\n")
    settings = load_config()
    assert settings.pages_dir == "site/pages"
    assert settings.config_model == "SiteConfig"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """SITEGRAPH_DATA_DIR takes precedence over config.yaml data_dir."""
    (tmp_path / "config.yaml").write_text("data_dir: from-yaml\n")
    monkeypatch.setenv("SITEGRAPH_DATA_DIR", "from-env")
    settings = load_config()
    assert settings.data_dir == "from-env"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var."""
    monkeypatch.setenv("SITEGRAPH_ROOT_DIR", "/env")
    settings = load_config(overrides={"root_dir": "/cli"})
    assert settings.root_dir == "/cli"


def test_load_config_none_override_ignored(monkeypatch):
    """None overrides leave lower-precedence values in place."""
    monkeypatch.setenv("SITEGRAPH_ROOT_DIR", "/env")
    settings = load_config(overrides={"root_dir": None})
    assert settings.root_dir == "/env"


def test_load_config_env_dev_mode_coerced(monkeypatch):
    """SITEGRAPH_DEV_MODE env var is coerced to bool."""
    monkeypatch.setenv("SITEGRAPH_DEV_MODE", "true")
    settings = load_config()
    assert settings.dev_mode is True


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_settings_root_is_path(tmp_path):
    """Settings.root exposes root_dir as a Path."""
    settings = load_config(overrides={"root_dir": str(tmp_path)})
    assert settings.root == tmp_path


def test_settings_fields():
    """Settings exposes only the options the pipeline reads."""
    settings = load_config()
    assert set(type(settings).model_fields) == {
        "root_dir", "data_dir", "pages_dir", "models_dir", "config_model",
        "dev_mode", "log_annotations", "output_file",
    }
