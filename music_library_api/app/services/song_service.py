"""
Business logic for the song catalog.

``SongService`` validates requests, talks to the repository and the
enrichment client, and raises the errors defined in
``core.exceptions``.  Validation always happens before any write, so a
rejected request never changes the store.

Adding a song is check-then-insert: the existence check and the
insert are not one transaction.  The unique (group, song) index makes
the losing request of a race fail with ``Conflict`` as well.
"""

import logging
from datetime import date
from typing import Callable, Dict, Optional

from ..core.db import MAX_SQLITE_INTEGER
from ..core.exceptions import Conflict, InvalidParameter, NotFound
from ..schemas.song import SongCreate, SongList, SongRead, SongUpdate, SongVerses
from .enrichment_client import EnrichmentClient
from .release_date import validate_release_date
from .song_repository import SongFilter, SongRepository
from .verses import paginate_verses

logger = logging.getLogger(__name__)


class SongService:
    """Сервис для управления библиотекой песен."""

    def __init__(
        self,
        repository: SongRepository,
        enrichment: EnrichmentClient,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.enrichment = enrichment
        self.today = today

    async def list_songs(
        self,
        page: int = 1,
        limit: int = 5,
        group: Optional[str] = None,
        song: Optional[str] = None,
        release_date: Optional[str] = None,
    ) -> SongList:
        """Вернуть страницу песен с фильтрами.

        - ``group``, ``song``: поиск подстроки без учёта регистра.
        - ``release_date``: точное совпадение, формат DD.MM.YYYY, не позже сегодняшнего дня.
        - ``total``: число всех подходящих песен, а не только на странице.
        """
        _check_page_value("page", page)
        _check_page_value("limit", limit)
        if release_date:
            try:
                validate_release_date(release_date, today=self.today())
            except InvalidParameter as exc:
                logger.warning("Rejected releaseDate filter %r: %s", release_date, exc.message)
                raise

        song_filter = SongFilter(group=group, song=song, release_date=release_date)
        total, songs = self.repository.list_songs(song_filter, page=page, limit=limit)
        if songs:
            logger.info("Retrieved %d songs (total %d)", len(songs), total)
        else:
            logger.warning("No songs found matching the provided filters")
        return SongList(total=total, page=page, limit=limit, songs=songs)

    async def get_verses(self, song_id: int, page: int = 1, limit: int = 1) -> SongVerses:
        """Return one page of a song's verses.

        A page beyond the last verse is answered with an empty list;
        only a missing song raises ``NotFound``.
        """
        song = self._get_or_raise(song_id)
        _check_page_value("page", page)
        _check_page_value("limit", limit)

        verses, total = paginate_verses(song.text, page, limit)
        if not verses:
            logger.warning("No more verses available for song ID: %s", song_id)
        else:
            logger.info("Returning verses for song ID: %s, page: %d, limit: %d", song_id, page, limit)
        return SongVerses(
            song=song.song,
            group=song.group,
            release_date=song.release_date,
            verses=verses,
            page=page,
            limit=limit,
            total=total,
        )

    async def create_song(self, data: SongCreate) -> SongRead:
        """Add a song, filling release date, lyrics and link from the enrichment service."""
        if not data.group or not data.song:
            raise InvalidParameter("Both group and song are required")

        if self.repository.find_by_group_and_song(data.group, data.song) is not None:
            logger.warning("Song already exists: %s by %s", data.song, data.group)
            raise Conflict(data.group, data.song)

        detail = self.enrichment.fetch_song_details(data.group, data.song)
        created = self.repository.insert(data.group, data.song, detail)
        logger.info("Created song %s: %s by %s", created.id, created.song, created.group)
        return created

    async def update_song(self, song_id: int, data: SongUpdate) -> SongRead:
        """Partially update a song.

        Only fields that are present and non-empty are written.  The id
        itself is immutable: a body carrying a different non-zero id is
        rejected.
        """
        current = self._get_or_raise(song_id)

        if data.id is not None and data.id != 0 and data.id != current.id:
            logger.warning("Attempt to change ID for song ID: %s, new ID: %s", song_id, data.id)
            raise InvalidParameter("Changing the song ID is not allowed")

        if data.release_date:
            try:
                validate_release_date(data.release_date, today=self.today())
            except InvalidParameter as exc:
                logger.warning("Rejected release date %r for song ID %s: %s", data.release_date, song_id, exc.message)
                raise

        changes: Dict[str, str] = {
            name: value
            for name, value in data.model_dump(exclude={"id"}).items()
            if value
        }
        if not changes:
            logger.info("Nothing to update for song ID: %s", song_id)
            return current

        updated = self.repository.update(song_id, changes)
        if updated is None:
            # Deleted between the lookup and the update.
            raise NotFound(song_id)
        logger.info("Updated song %s (%s)", song_id, ", ".join(sorted(changes)))
        return updated

    async def delete_song(self, song_id: int) -> None:
        """Delete a song; raise ``NotFound`` if it does not exist."""
        song = self._get_or_raise(song_id)
        if not self.repository.delete(song_id):
            raise NotFound(song_id)
        logger.info("Deleted song: %s by %s with ID: %s", song.song, song.group, song_id)

    async def count_songs(self) -> int:
        return self.repository.count()

    def _get_or_raise(self, song_id: int) -> SongRead:
        song = self.repository.get(song_id)
        if song is None:
            logger.warning("Song not found with ID: %s", song_id)
            raise NotFound(song_id)
        return song


def _check_page_value(name: str, value: int) -> None:
    if not 1 <= value <= MAX_SQLITE_INTEGER:
        logger.warning("Invalid %s parameter: %s", name, value)
        raise InvalidParameter(f"Invalid {name} parameter")
