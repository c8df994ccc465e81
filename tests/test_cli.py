"""Test the command-line interface"""

import pytest
from click.testing import CliRunner
from fakes import API, listing_pages, track_entry

from spot_sync.cli import cli

LIKED = f"{API}/me/tracks?limit=50"


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """Runner in an empty working directory without tokens in the environment"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SPOTIFY_PRIMARY_TOKEN", raising=False)
    monkeypatch.delenv("SPOTIFY_SECONDARY_TOKEN", raising=False)
    return CliRunner()


@pytest.fixture
def tokens(monkeypatch):
    monkeypatch.setenv("SPOTIFY_PRIMARY_TOKEN", "primary-token")
    monkeypatch.setenv("SPOTIFY_SECONDARY_TOKEN", "secondary-token")


def mock_liked_songs(mock_api, count: int) -> None:
    for url, page in listing_pages(LIKED, [track_entry(i) for i in range(count)]).items():
        mock_api.get(url, payload=page)
    mock_api.put(f"{API}/me/tracks", status=200)


class TestSyncCommand:
    """Test spot-sync sync"""

    def test_liked_songs(self, runner, tokens, mock_api):
        mock_liked_songs(mock_api, 3)

        result = runner.invoke(cli, ["sync", "--liked"])

        assert result.exit_code == 0, result.output
        assert "Synced 1 library, 3 songs" in result.output
        assert "primary-token" not in result.output

    def test_requires_a_selection(self, runner, tokens):
        result = runner.invoke(cli, ["sync"])

        assert result.exit_code == 2
        assert "Select at least one library" in result.output

    def test_missing_token(self, runner, mock_api, monkeypatch):
        """Test the missing account is named and nothing is requested"""
        monkeypatch.setenv("SPOTIFY_PRIMARY_TOKEN", "primary-token")

        result = runner.invoke(cli, ["sync", "--liked"])

        assert result.exit_code == 1
        assert "Both accounts must be connected" in result.output
        assert "SPOTIFY_SECONDARY_TOKEN" in result.output
        assert mock_api.requests == {}

    def test_tokens_from_config_file(self, runner, tmp_path, mock_api):
        (tmp_path / "config.yaml").write_text(
            "credentials:\n  primary_token: from-file-1\n  secondary_token: from-file-2\n",
            encoding="utf-8"
        )
        mock_liked_songs(mock_api, 1)

        result = runner.invoke(cli, ["sync", "--liked"])

        assert result.exit_code == 0, result.output
        (put_calls,) = [calls for (method, _), calls in mock_api.requests.items() if method == "PUT"]
        assert put_calls[0].kwargs["headers"]["Authorization"] == "Bearer from-file-2"

    def test_two_way(self, runner, tokens, mock_api):
        result = runner.invoke(cli, ["sync", "--liked", "--playlist", "abc", "--direction", "two-way"])

        assert result.exit_code == 0, result.output
        assert "unsupported" in result.output
        assert "(2 skipped: two-way not implemented)" in result.output
        assert mock_api.requests == {}

    def test_failed_library_is_reported(self, runner, tokens, mock_api):
        mock_api.get(f"{API}/playlists/gone", status=404)
        mock_api.get(f"{API}/playlists/gone/tracks?limit=50", status=404)

        result = runner.invoke(cli, ["sync", "--playlist", "gone"])

        assert result.exit_code == 0, result.output
        assert "remote_error" in result.output
        assert "(1 failed)" in result.output

    def test_invalid_direction(self, runner, tokens):
        result = runner.invoke(cli, ["sync", "--liked", "--direction", "sideways"])

        assert result.exit_code == 2


class TestListCommand:
    """Test spot-sync list"""

    def test_lists_libraries(self, runner, tokens, mock_api):
        mock_api.get(f"{API}/me/tracks?limit=1", payload={"items": [], "total": 12, "next": None})
        mock_api.get(f"{API}/me/playlists?limit=50", payload={
            "items": [{"id": "abc", "name": "Road Trip", "owner": {"display_name": "Me"}, "tracks": {"total": 3}}],
            "total": 1,
            "next": None,
        })

        result = runner.invoke(cli, ["list", "--account", "primary"])

        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines[0].startswith("liked_songs")
        assert "Liked Songs" in lines[0]
        assert "Road Trip" in lines[1]

    def test_missing_token(self, runner):
        result = runner.invoke(cli, ["list", "--account", "secondary"])

        assert result.exit_code == 1
        assert "SPOTIFY_SECONDARY_TOKEN" in result.output

    def test_listing_failure(self, runner, tokens, mock_api):
        mock_api.get(f"{API}/me/tracks?limit=1", payload={"items": [], "total": 0, "next": None})
        mock_api.get(f"{API}/me/playlists?limit=50", status=401)

        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 1
        assert "Failed to fetch playlists" in result.output


class TestGroup:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_invalid_config(self, runner, tmp_path):
        (tmp_path / "config.yaml").write_text("spotify:\n  batch_size: 500\n", encoding="utf-8")

        result = runner.invoke(cli, ["sync", "--liked"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
