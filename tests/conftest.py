from typing import Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from music_library_api.app.core.config import Settings
from music_library_api.app.core.db import init_db
from music_library_api.app.core.exceptions import UpstreamError
from music_library_api.app.main import create_app
from music_library_api.app.schemas.song import SongDetail
from music_library_api.app.services.song_repository import SongRepository


class FakeEnrichment:
    """Stands in for EnrichmentClient; answers from a dict keyed by (group, song)."""

    def __init__(self, details: Optional[Dict[Tuple[str, str], SongDetail]] = None):
        self.details = details or {}
        self.calls: List[Tuple[str, str]] = []
        self.closed = False

    def fetch_song_details(self, group: str, song: str) -> SongDetail:
        self.calls.append((group, song))
        try:
            return self.details[(group, song)]
        except KeyError:
            raise UpstreamError("unexpected status 404") from None

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def db_path(tmp_path) -> str:
    path = str(tmp_path / "songs.db")
    init_db(path)
    return path


@pytest.fixture
def repository(db_path) -> SongRepository:
    return SongRepository(db_path)


@pytest.fixture
def enrichment() -> FakeEnrichment:
    return FakeEnrichment(
        {
            ("Muse", "Uprising"): SongDetail(
                release_date="03.09.2009",
                text="verse one\n\nverse two",
                link="http://x",
            ),
            ("Кино", "Группа крови"): SongDetail(
                release_date="05.01.1988",
                text="Тёплое место\n\nНо улицы ждут",
                link="https://example.com/kino",
            ),
        }
    )


@pytest.fixture
def settings(db_path) -> Settings:
    return Settings(database_url=db_path, external_api_url="http://enrichment.test/info")


@pytest.fixture
def client(settings, enrichment):
    app = create_app(settings, enrichment_client=enrichment)
    with TestClient(app) as test_client:
        yield test_client
