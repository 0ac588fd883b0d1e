import pytest

from playlist_stats import config
from playlist_stats.errors import ConfigError


def test_env_var_wins(monkeypatch, tmp_path):
    (tmp_path / "main.py").write_text("")
    (tmp_path / ".env").write_text("YOUTUBE_API_KEY=from-dotenv\n")
    monkeypatch.setenv("YOUTUBE_API_KEY", "from-env")
    assert config.get_api_key() == "from-env"


def test_dotenv_in_repo_root(tmp_path):
    (tmp_path / "main.py").write_text("")
    (tmp_path / ".env").write_text('# dev key\nYOUTUBE_API_KEY="from-dotenv"\n')
    assert config.get_api_key() == "from-dotenv"


def test_saved_key_is_found():
    path = config.save_api_key("  saved-key  ")
    assert path == config.user_config_path()
    assert path.read_text(encoding="utf-8") == "YOUTUBE_API_KEY=saved-key\n"
    assert config.get_api_key() == "saved-key"


def test_missing_key_raises():
    with pytest.raises(ConfigError, match="YOUTUBE_API_KEY"):
        config.get_api_key()


def test_empty_key_is_not_saved():
    with pytest.raises(ConfigError):
        config.save_api_key("   ")


@pytest.mark.parametrize("raw, expected", [("", None), ("4", 4), (" 12 ", 12)])
def test_max_pages(monkeypatch, raw, expected):
    monkeypatch.setenv("PLAYLIST_STATS_MAX_PAGES", raw)
    assert config.get_max_pages() == expected


@pytest.mark.parametrize("raw", ["0", "-1", "many"])
def test_bad_max_pages(monkeypatch, raw):
    monkeypatch.setenv("PLAYLIST_STATS_MAX_PAGES", raw)
    with pytest.raises(ConfigError):
        config.get_max_pages()
