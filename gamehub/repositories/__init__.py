"""Repository package: expose all concrete repositories from one import."""
from .base import BaseRepository, JsonFileStore, MemoryStore
from .user_repository import UserRepository
from .game_repository import GameRepository
from .comment_repository import CommentRepository
from .rating_repository import RatingRepository
from .favorites_repository import FavoritesRepository
from .request_repository import RequestRepository
from .thread_repository import ThreadRepository, MessageRepository

__all__ = [
    'BaseRepository',
    'JsonFileStore',
    'MemoryStore',
    'UserRepository',
    'GameRepository',
    'CommentRepository',
    'RatingRepository',
    'FavoritesRepository',
    'RequestRepository',
    'ThreadRepository',
    'MessageRepository',
]
