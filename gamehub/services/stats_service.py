"""Aggregate counts across collections."""
from typing import Dict

from ..repositories.comment_repository import CommentRepository
from ..repositories.game_repository import GameRepository
from ..repositories.user_repository import UserRepository


class StatsService:
    """Plain collection-length reads; nothing is cached."""

    def __init__(self, games: GameRepository, users: UserRepository,
                 comments: CommentRepository) -> None:
        self._games = games
        self._users = users
        self._comments = comments

    def get(self) -> Dict[str, int]:
        return {
            'games': self._games.count(),
            'users': self._users.count(),
            'comments': self._comments.count(),
        }
