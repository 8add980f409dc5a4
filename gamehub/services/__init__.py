"""Services package: expose all concrete services from one import."""
from .identity_service import IdentityService, public_user
from .user_service import UserService
from .game_service import GameService
from .comment_service import CommentService
from .rating_service import RatingService
from .favorites_service import FavoritesService
from .request_service import RequestService
from .discussion_service import DiscussionService
from .stats_service import StatsService
from .upload_service import UploadService

__all__ = [
    'IdentityService',
    'public_user',
    'UserService',
    'GameService',
    'CommentService',
    'RatingService',
    'FavoritesService',
    'RequestService',
    'DiscussionService',
    'StatsService',
    'UploadService',
]
