"""Business logic for per-user favorites."""
from typing import Dict, List, Mapping

from ..policy import require_owner
from ..repositories.favorites_repository import FavoritesRepository
from ..repositories.game_repository import GameRepository
from ..utils import now_iso


class FavoritesService:
    """Manages each user's favorite games, delegating persistence to
    :class:`~gamehub.repositories.favorites_repository.FavoritesRepository`.

    Favorites are private: only the owner may list or remove them, admins
    included.  Adding is idempotent and removing is unconditional, which
    together give the client its favorite toggle.
    """

    def __init__(self, favorites: FavoritesRepository, games: GameRepository) -> None:
        self._repo = favorites
        self._games = games

    def get_games(self, user_id: int, claims: Mapping) -> List[Dict]:
        """Return the game records *user_id* has favorited."""
        require_owner(claims, user_id, key='id',
                      message='Can only access your own favorites')
        game_ids = self._repo.game_ids_for(user_id)
        return [g for g in self._games.all() if g.get('id') in game_ids]

    def add(self, game_id: int, claims: Mapping) -> bool:
        """Returns ``True`` if added; ``False`` if already a favorite."""
        with self._repo.lock:
            return self._repo.add(claims['id'], game_id, now_iso())

    def remove(self, user_id: int, game_id: int, claims: Mapping) -> bool:
        require_owner(claims, user_id, key='id',
                      message='Can only modify your own favorites')
        with self._repo.lock:
            return self._repo.remove(user_id, game_id)
