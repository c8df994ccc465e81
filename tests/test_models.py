"""Test Spotify and sync data models"""

import pytest
from fakes import track_entry

from spot_sync.core.exceptions import MissingCredentialError, SpotifyError
from spot_sync.spotify.models import AccountRole, Credential, LibraryInfo, PlaylistInfo, TrackItem
from spot_sync.sync.models import (
    Direction,
    FailureReason,
    LibrarySelection,
    SyncSummary,
    TransferResult,
    TransferStatus,
)


class TestCredential:
    """Test the bearer token wrapper"""

    def test_token_not_in_repr_or_str(self, primary):
        assert "primary-token" not in repr(primary)
        assert "primary-token" not in str(primary)
        assert str(primary) == "<primary credential>"

    def test_authorization_header(self, secondary):
        assert secondary.authorization_header == {"Authorization": "Bearer secondary-token"}

    @pytest.mark.parametrize("token,expected", [("abc", True), ("", False), ("   ", False)])
    def test_truthiness(self, token, expected):
        assert bool(Credential(role=AccountRole.PRIMARY, token=token)) is expected


class TestAccountRole:
    def test_other(self):
        assert AccountRole.PRIMARY.other is AccountRole.SECONDARY
        assert AccountRole.SECONDARY.other is AccountRole.PRIMARY


class TestTrackItem:
    """Test lenient track entry parsing"""

    def test_full_entry(self):
        item = TrackItem.from_spotify_api(track_entry(7))

        assert item == TrackItem(id="track0007", uri="spotify:track:track0007", name="Song 7")

    def test_local_file(self):
        item = TrackItem.from_spotify_api({"track": {"id": None, "uri": "spotify:local:a:b:c:1", "name": "Demo"}})

        assert item.id is None
        assert item.uri == "spotify:local:a:b:c:1"

    @pytest.mark.parametrize("entry", [{"track": None}, {}, {"track": "x"}, None])
    def test_no_track(self, entry):
        assert TrackItem.from_spotify_api(entry) is None


class TestLibraryInfo:
    def test_liked_songs(self):
        library = LibraryInfo.liked_songs(12)

        assert library.id == "liked_songs"
        assert library.name == "Liked Songs"
        assert library.total == 12
        assert library.is_liked_songs

    def test_from_playlist(self):
        playlist = PlaylistInfo(id="abc", name="Road Trip", total=3, owner="Primary User")

        library = LibraryInfo.from_playlist(playlist)

        assert library == LibraryInfo(id="abc", name="Road Trip", total=3, owner="Primary User")
        assert not library.is_liked_songs


class TestDirection:
    @pytest.mark.parametrize("value,expected", [
        ("one-way", Direction.ONE_WAY),
        ("TWO-WAY", Direction.TWO_WAY),
        (" one-way ", Direction.ONE_WAY),
        (Direction.TWO_WAY, Direction.TWO_WAY),
    ])
    def test_parse(self, value, expected):
        assert Direction.parse(value) is expected

    def test_parse_invalid(self):
        with pytest.raises(ValueError) as exc_info:
            Direction.parse("both")

        assert "'both'" in str(exc_info.value)


class TestLibrarySelection:
    def test_defaults_to_primary_source(self):
        selection = LibrarySelection("abc")

        assert selection.source is AccountRole.PRIMARY
        assert selection.destination is AccountRole.SECONDARY
        assert not selection.is_liked_songs

    def test_liked_songs_sentinel(self):
        assert LibrarySelection("liked_songs", AccountRole.SECONDARY).is_liked_songs
        assert not LibrarySelection("Liked_Songs").is_liked_songs


class TestFailureReason:
    @pytest.mark.parametrize("error,expected", [
        (SpotifyError("x", status=401, is_auth_error=True), FailureReason.AUTH_ERROR),
        (SpotifyError("x", status=429, is_rate_limit=True), FailureReason.RATE_LIMITED),
        (SpotifyError("x", is_transport_error=True), FailureReason.TRANSPORT_ERROR),
        (SpotifyError("Unexpected playlist response"), FailureReason.REMOTE_ERROR),
        (SpotifyError("x", status=403), FailureReason.REMOTE_ERROR),
        (KeyError("id"), FailureReason.UNEXPECTED_ERROR),
    ])
    def test_from_error(self, error, expected):
        assert FailureReason.from_error(error) is expected


class TestSyncSummary:
    """Test folding per-library results"""

    def test_fold(self):
        results = [
            TransferResult.success("liked_songs", items_transferred=10, items_fetched=10),
            TransferResult.success("abc", items_transferred=25, items_fetched=27),
        ]

        summary = SyncSummary.from_results(results, Direction.ONE_WAY)

        assert summary.library_count == 2
        assert summary.total_items_transferred == 35
        assert summary.succeeded
        assert summary.failed == []
        assert summary.message == "Synced 2 libraries, 35 songs"

    def test_failed_library_counts_but_adds_nothing(self):
        results = [
            TransferResult.failure("abc", FailureReason.REMOTE_ERROR, "404"),
            TransferResult.success("liked_songs", items_transferred=1, items_fetched=1),
        ]

        summary = SyncSummary.from_results(results, Direction.ONE_WAY)

        assert summary.library_count == 2
        assert summary.total_items_transferred == 1
        assert summary.succeeded
        assert summary.message == "Synced 2 libraries, 1 song (1 failed)"

    def test_unsupported(self):
        results = [TransferResult.unsupported("liked_songs", Direction.TWO_WAY)]

        summary = SyncSummary.from_results(results, Direction.TWO_WAY)

        assert summary.results[0].status is TransferStatus.UNSUPPORTED
        assert summary.message == "Synced 1 library, 0 songs (1 skipped: two-way not implemented)"

    def test_empty_run(self):
        summary = SyncSummary.from_results([], Direction.ONE_WAY)

        assert summary.library_count == 0
        assert summary.total_items_transferred == 0


class TestExceptions:
    def test_missing_credential(self):
        error = MissingCredentialError(["secondary"])

        assert error.message == "Both accounts must be connected"
        assert error.missing_roles == ["secondary"]
        assert error.details == {"missing_roles": ["secondary"]}

    def test_transport_error_flag(self):
        assert SpotifyError("down", is_transport_error=True).is_transport_error
        assert not SpotifyError("Unexpected playlist response").is_transport_error
        assert not SpotifyError("bad", status=500).is_transport_error
