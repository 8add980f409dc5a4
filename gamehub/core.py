"""Wires one store into every repository and service."""
import logging
from typing import Any, Dict, Optional

from .config import DEFAULT_CONFIG
from .repositories import (
    JsonFileStore, UserRepository, GameRepository, CommentRepository,
    RatingRepository, FavoritesRepository, RequestRepository,
    ThreadRepository, MessageRepository,
)
from .services import (
    IdentityService, UserService, GameService, CommentService, RatingService,
    FavoritesService, RequestService, DiscussionService, StatsService,
    UploadService,
)

logger = logging.getLogger('gamehub.core')


class GameHub:
    """Integration point for the HTTP layer.

    Creates the repositories and services in ``__init__`` and exposes them as
    public attributes (e.g. ``hub.comment_service``).  Pass *store* to run
    against something other than the JSON files in ``config['data_dir']``,
    such as :class:`~gamehub.repositories.base.MemoryStore` in tests.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, store=None) -> None:
        self.config = dict(DEFAULT_CONFIG, **(config or {}))
        self.store = store if store is not None else JsonFileStore(self.config['data_dir'])

        self.users = UserRepository(self.store)
        self.games = GameRepository(self.store)
        self.comments = CommentRepository(self.store)
        self.ratings = RatingRepository(self.store)
        self.favorites = FavoritesRepository(self.store)
        self.requests = RequestRepository(self.store)
        self.threads = ThreadRepository(self.store)
        self.messages = MessageRepository(self.store)

        self.identity_service = IdentityService(
            self.users, self.config['secret_key'], self.config['token_ttl_hours'])
        self.user_service = UserService(self.users)
        self.game_service = GameService(self.games, self.comments)
        self.comment_service = CommentService(self.comments, self.games)
        self.rating_service = RatingService(self.ratings, self.users)
        self.favorites_service = FavoritesService(self.favorites, self.games)
        self.request_service = RequestService(self.requests)
        self.discussion_service = DiscussionService(self.threads, self.messages)
        self.stats_service = StatsService(self.games, self.users, self.comments)
        self.upload_service = UploadService(
            self.config['upload_dir'], self.config['max_upload_bytes'])

    def bootstrap(self) -> None:
        """Create the configured admin account on an empty user collection."""
        admin = self.identity_service.ensure_admin(
            self.config.get('admin_username'), self.config.get('admin_password'))
        if admin:
            logger.info('Created initial admin account %s', admin['username'])
        elif self.users.count() == 0:
            logger.warning('No users exist and no admin credentials are configured')
