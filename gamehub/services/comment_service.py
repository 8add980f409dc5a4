"""Business logic for game comments."""
import logging
from typing import Dict, List, Mapping, Optional

from ..errors import NotFoundError
from ..policy import require_owner
from ..repositories.comment_repository import CommentRepository
from ..repositories.game_repository import GameRepository
from ..utils import now_iso, require_text, sort_by_time, toggle_member

logger = logging.getLogger('gamehub.service.comments')


class CommentService:
    """Adds, likes and deletes comments on catalog games.

    Rules
    -----
    * Likes are a set of usernames; liking twice removes the like.
    * Only the author or an admin may delete a comment.
    * Listings are newest-first.
    """

    def __init__(self, comments: CommentRepository, games: GameRepository) -> None:
        self._repo = comments
        self._games = games

    def get_all(self, game_id: Optional[int] = None) -> List[Dict]:
        comments = self._repo.all() if game_id is None else self._repo.for_game(game_id)
        return sort_by_time(comments, 'timestamp')

    def add(self, game_id: int, text, claims: Mapping) -> Dict:
        require_text(text, 'text')
        with self._repo.lock:
            if not self._games.find(game_id):
                raise NotFoundError('Game not found')
            return self._repo.insert({
                'game_id': game_id,
                'author': claims['username'],
                'role': claims.get('role'),
                'text': text,
                'likes': [],
                'timestamp': now_iso(),
            })

    def toggle_like(self, comment_id: int, claims: Mapping) -> Dict:
        with self._repo.lock:
            comment = self._repo.find(comment_id)
            if not comment:
                raise NotFoundError('Comment not found')
            comment['likes'] = toggle_member(comment.get('likes') or [], claims['username'])
            self._repo.replace(comment)
        return comment

    def delete(self, comment_id: int, claims: Mapping) -> None:
        with self._repo.lock:
            comment = self._repo.find(comment_id)
            if not comment:
                raise NotFoundError('Comment not found')
            require_owner(claims, comment.get('author'), allow_admin=True,
                          message='Can only delete your own comments')
            self._repo.delete(comment_id)
        logger.info('Comment %s deleted by %s', comment_id, claims['username'])
