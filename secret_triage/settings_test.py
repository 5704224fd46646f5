"""Unit tests for settings."""

from pathlib import Path

from .settings import DEFAULT_BLACKLIST_EXTENSIONS, Settings


def describe_Settings():
    def it_has_defaults(monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for var in ("GITHUB_TOKENS", "MAXIMUM_FILE_SIZE", "CLONE_TIMEOUT", "BLACKLIST_EXTENSIONS"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings()

        assert settings.github_tokens == []
        assert settings.maximum_file_size == 256
        assert settings.clone_timeout == 10
        assert settings.blacklist_extensions == DEFAULT_BLACKLIST_EXTENSIONS

    def it_splits_comma_separated_tokens(monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("GITHUB_TOKENS", "aaa, bbb,,ccc")

        assert Settings().github_tokens == ["aaa", "bbb", "ccc"]

    def it_reads_numbers_and_paths_from_the_environment(monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MAXIMUM_FILE_SIZE", "64")
        monkeypatch.setenv("CLONE_TIMEOUT", "3")
        monkeypatch.setenv("TEMP_DIR", str(tmp_path / "work"))

        settings = Settings()

        assert settings.maximum_file_size == 64
        assert settings.clone_timeout == 3
        assert settings.temp_dir == Path(tmp_path / "work")

    def it_reads_a_dotenv_file(monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("GITHUB_TOKENS", raising=False)
        (tmp_path / ".env").write_text("GITHUB_TOKENS=from-file\n")

        assert Settings().github_tokens == ["from-file"]

    def it_builds_normalized_blacklists(monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BLACKLIST_EXTENSIONS", "PNG,.Jpg")
        monkeypatch.setenv("BLACKLIST_PATHS", "Node_Modules/")

        blacklists = Settings().blacklists

        assert blacklists.extensions == (".png", ".jpg")
        assert blacklists.paths == ("node_modules/",)
