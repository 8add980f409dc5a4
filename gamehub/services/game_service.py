"""Business logic for the game catalog."""
import logging
from typing import Dict, List, Mapping

from ..errors import NotFoundError
from ..repositories.comment_repository import CommentRepository
from ..repositories.game_repository import GameRepository
from ..utils import now_iso, require_text

logger = logging.getLogger('gamehub.service.games')

# stored field -> client payload key
GAME_FIELDS = (
    ('title', 'title'),
    ('developer', 'developer'),
    ('publisher', 'publisher'),
    ('release_date', 'releaseDate'),
    ('short_description', 'shortDescription'),
    ('full_description', 'fullDescription'),
    ('genre', 'genre'),
    ('tags', 'tags'),
    ('rating', 'rating'),
    ('difficulty', 'difficulty'),
    ('image', 'image'),
    ('download_link', 'downloadLink'),
    ('file_size', 'fileSize'),
    ('requirements', 'requirements'),
    ('notes', 'notes'),
    ('added_by', 'addedBy'),
    ('timestamp', 'timestamp'),
)


class GameService:
    """Manages catalog entries, delegating persistence to
    :class:`~gamehub.repositories.game_repository.GameRepository`.

    Deleting a game also deletes its comments.  The two collections are
    rewritten one after the other, so a crash in between leaves orphaned
    comments behind.
    """

    def __init__(self, games: GameRepository, comments: CommentRepository) -> None:
        self._games = games
        self._comments = comments

    def get_all(self) -> List[Dict]:
        return self._games.all()

    def add(self, payload: Mapping, claims: Mapping) -> Dict:
        """Store a new game from the client's camelCase *payload*.

        ``addedBy`` defaults to the caller and ``timestamp`` to now.
        """
        require_text(payload.get('title'), 'title')
        game = {'id': None}
        game.update((field, payload.get(key)) for field, key in GAME_FIELDS)
        game['added_by'] = game['added_by'] or claims.get('username')
        game['timestamp'] = game['timestamp'] or now_iso()
        with self._games.lock:
            game = self._games.insert(game)
        logger.info('Game %s (%s) added by %s', game['id'], game['title'], claims.get('username'))
        return game

    def delete(self, game_id: int) -> int:
        """Delete *game_id* and cascade to its comments.

        Returns:
            The number of comments removed.
        """
        with self._games.lock:
            if not self._games.delete(game_id):
                raise NotFoundError('Game not found')
            removed = self._comments.delete_for_game(game_id)
        logger.info('Deleted game %s and %d comment(s)', game_id, removed)
        return removed
