#!/usr/bin/env python3
"""
GameHub server - REST API for the community game catalog.

Every request is handled synchronously: authenticate (if required), check the
permission table, load the affected collections, mutate, persist, respond.
"""

import argparse
import logging
import os
from functools import wraps
from typing import Any, Dict, Optional

from flask import Blueprint, Flask, current_app, g, jsonify, request, send_from_directory
from flask_cors import CORS

from gamehub import __version__
from gamehub.config import load_config
from gamehub.core import GameHub
from gamehub.errors import handle_errors, register_error_handlers
from gamehub.log import setup_logging
from gamehub.policy import authorize
from gamehub.security import token_from_header
from gamehub.utils import to_int

server_logger = logging.getLogger('gamehub.server')

api = Blueprint('api', __name__)


def hub() -> GameHub:
    return current_app.extensions['gamehub']


def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def require_auth(action: Optional[str] = None):
    """Decorator requiring a valid session and, if *action* is given, a role
    allowed to perform it.  The session claims are stored on ``g.user``.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            token = token_from_header(request.headers.get('Authorization'))
            claims = hub().identity_service.verify_session(token)
            if action:
                authorize(claims, action)
            g.user = claims
            return f(*args, **kwargs)
        return decorated_function
    return decorator


# ===========================================================================================
# Auth
# ===========================================================================================

@api.route('/api/auth/register', methods=['POST'])
@handle_errors('Registration failed')
def api_auth_register():
    """Register a new user"""
    data = _body()
    server_logger.info('Register endpoint called for username=%s', data.get('username'))
    return jsonify(hub().identity_service.register(data.get('username'), data.get('password')))


@api.route('/api/auth/login', methods=['POST'])
@handle_errors('Login failed')
def api_auth_login():
    """Log in a user"""
    data = _body()
    return jsonify(hub().identity_service.login(data.get('username'), data.get('password')))


# ===========================================================================================
# Users
# ===========================================================================================

@api.route('/api/users', methods=['GET'])
@require_auth('users.list')
@handle_errors('Failed to fetch users')
def api_users():
    return jsonify(hub().user_service.get_all())


@api.route('/api/users/<int:user_id>/role', methods=['PUT'])
@require_auth('users.update_role')
@handle_errors('Failed to update role')
def api_user_role(user_id):
    hub().user_service.update_role(user_id, _body().get('role'))
    return jsonify({'success': True})


@api.route('/api/users/<int:user_id>', methods=['DELETE'])
@require_auth('users.delete')
@handle_errors('Failed to delete user')
def api_user_delete(user_id):
    hub().user_service.delete(user_id)
    return jsonify({'success': True})


@api.route('/api/users/<int:user_id>/profile', methods=['PUT'])
@require_auth('users.update_profile')
@handle_errors('Failed to update profile')
def api_user_profile(user_id):
    return jsonify(hub().user_service.update_profile(user_id, _body(), g.user))


# ===========================================================================================
# Uploads
# ===========================================================================================

@api.route('/api/upload/<kind>', methods=['POST'])
@require_auth('uploads.image')
@handle_errors('Failed to upload image')
def api_upload(kind):
    """Store an avatar or banner image (multipart field named after *kind*)."""
    if kind not in ('avatar', 'banner'):
        return jsonify({'error': 'Unknown upload type'}), 404
    url = hub().upload_service.save_image(request.files.get(kind))
    return jsonify({'url': url})


@api.route('/uploads/<path:filename>', methods=['GET'])
def uploaded_file(filename):
    return send_from_directory(os.path.abspath(hub().upload_service.upload_dir), filename)


# ===========================================================================================
# Games
# ===========================================================================================

@api.route('/api/games', methods=['GET'])
@handle_errors('Failed to fetch games')
def api_games():
    return jsonify(hub().game_service.get_all())


@api.route('/api/games', methods=['POST'])
@require_auth('games.add')
@handle_errors('Failed to add game')
def api_games_add():
    return jsonify(hub().game_service.add(_body(), g.user))


@api.route('/api/games/<int:game_id>', methods=['DELETE'])
@require_auth('games.delete')
@handle_errors('Failed to delete game')
def api_games_delete(game_id):
    hub().game_service.delete(game_id)
    return jsonify({'success': True})


# ===========================================================================================
# Comments
# ===========================================================================================

@api.route('/api/comments', methods=['GET'])
@handle_errors('Failed to fetch comments')
def api_comments():
    raw = request.args.get('gameId')
    game_id = to_int(raw, 'gameId') if raw else None
    return jsonify(hub().comment_service.get_all(game_id))


@api.route('/api/comments', methods=['POST'])
@require_auth('comments.add')
@handle_errors('Failed to add comment')
def api_comments_add():
    data = _body()
    game_id = to_int(data.get('gameId'), 'gameId')
    return jsonify(hub().comment_service.add(game_id, data.get('text'), g.user))


@api.route('/api/comments/<int:comment_id>/like', methods=['PUT'])
@require_auth('comments.like')
@handle_errors('Failed to toggle like')
def api_comments_like(comment_id):
    return jsonify(hub().comment_service.toggle_like(comment_id, g.user))


@api.route('/api/comments/<int:comment_id>', methods=['DELETE'])
@require_auth('comments.delete')
@handle_errors('Failed to delete comment')
def api_comments_delete(comment_id):
    hub().comment_service.delete(comment_id, g.user)
    return jsonify({'success': True})


# ===========================================================================================
# Requests
# ===========================================================================================

@api.route('/api/requests', methods=['GET'])
@require_auth('requests.list')
@handle_errors('Failed to fetch requests')
def api_requests():
    return jsonify(hub().request_service.get_visible(g.user))


@api.route('/api/requests', methods=['POST'])
@require_auth('requests.submit')
@handle_errors('Failed to add request')
def api_requests_add():
    data = _body()
    return jsonify(hub().request_service.submit(
        data.get('steamId'), data.get('gameName'), data.get('notes'), g.user))


@api.route('/api/requests/<int:request_id>', methods=['PUT'])
@require_auth('requests.update')
@handle_errors('Failed to update request')
def api_requests_update(request_id):
    return jsonify(hub().request_service.set_status(request_id, _body().get('status')))


@api.route('/api/requests/<int:request_id>', methods=['DELETE'])
@require_auth('requests.delete')
@handle_errors('Failed to delete request')
def api_requests_delete(request_id):
    hub().request_service.delete(request_id)
    return jsonify({'success': True})


# ===========================================================================================
# Favorites
# ===========================================================================================

@api.route('/api/favorites/<int:user_id>', methods=['GET'])
@require_auth('favorites.list')
@handle_errors('Failed to fetch favorites')
def api_favorites(user_id):
    return jsonify(hub().favorites_service.get_games(user_id, g.user))


@api.route('/api/favorites', methods=['POST'])
@require_auth('favorites.add')
@handle_errors('Failed to add favorite')
def api_favorites_add():
    game_id = to_int(_body().get('gameId'), 'gameId')
    hub().favorites_service.add(game_id, g.user)
    return jsonify({'success': True})


@api.route('/api/favorites/<int:user_id>/<int:game_id>', methods=['DELETE'])
@require_auth('favorites.remove')
@handle_errors('Failed to remove favorite')
def api_favorites_remove(user_id, game_id):
    hub().favorites_service.remove(user_id, game_id, g.user)
    return jsonify({'success': True})


# ===========================================================================================
# Ratings
# ===========================================================================================

@api.route('/api/ratings/<int:game_id>', methods=['GET'])
@handle_errors('Failed to fetch ratings')
def api_ratings(game_id):
    return jsonify(hub().rating_service.get_for_game(game_id))


@api.route('/api/ratings', methods=['POST'])
@api.route('/api/ratings/<int:game_id>', methods=['POST'])
@require_auth('ratings.submit')
@handle_errors('Failed to add rating')
def api_ratings_submit(game_id=None):
    data = _body()
    if game_id is None:
        game_id = to_int(data.get('gameId'), 'gameId')
    return jsonify(hub().rating_service.upsert(
        game_id, data.get('rating'), data.get('review'), g.user))


# ===========================================================================================
# Stats
# ===========================================================================================

@api.route('/api/stats', methods=['GET'])
@handle_errors('Failed to fetch stats')
def api_stats():
    return jsonify(hub().stats_service.get())


# ===========================================================================================
# Discussion
# ===========================================================================================

@api.route('/api/threads', methods=['GET'])
@handle_errors('Failed to fetch threads')
def api_threads():
    return jsonify(hub().discussion_service.get_threads())


@api.route('/api/threads', methods=['POST'])
@require_auth('threads.create')
@handle_errors('Failed to create thread')
def api_threads_create():
    data = _body()
    return jsonify(hub().discussion_service.create_thread(
        data.get('title'), data.get('content'), g.user))


@api.route('/api/threads/<int:thread_id>', methods=['GET'])
@handle_errors('Failed to fetch thread')
def api_thread(thread_id):
    return jsonify(hub().discussion_service.get_thread(thread_id))


@api.route('/api/threads/<int:thread_id>/messages', methods=['GET'])
@handle_errors('Failed to fetch messages')
def api_thread_messages(thread_id):
    return jsonify(hub().discussion_service.get_messages(thread_id))


@api.route('/api/threads/<int:thread_id>/messages', methods=['POST'])
@require_auth('messages.post')
@handle_errors('Failed to create message')
def api_thread_messages_post(thread_id):
    return jsonify(hub().discussion_service.post_message(
        thread_id, _body().get('content'), g.user))


@api.route('/api/threads/<int:thread_id>/messages/<int:message_id>/like', methods=['PUT'])
@require_auth('messages.like')
@handle_errors('Failed to toggle like')
def api_thread_message_like(thread_id, message_id):
    return jsonify(hub().discussion_service.toggle_like(thread_id, message_id, g.user))


@api.route('/api/threads/<int:thread_id>/messages/<int:message_id>', methods=['DELETE'])
@require_auth('messages.delete')
@handle_errors('Failed to delete message')
def api_thread_message_delete(thread_id, message_id):
    hub().discussion_service.delete_message(thread_id, message_id, g.user)
    return jsonify({'success': True})


# ===========================================================================================
# API documentation
# ===========================================================================================

@api.route('/api/openapi.json', methods=['GET'])
def api_openapi_spec():
    """Return the OpenAPI 3.0 document for this server."""
    from openapi_spec import build_spec
    return jsonify(build_spec(server_url=request.host_url.rstrip('/')))


def create_app(config: Optional[Dict[str, Any]] = None, store=None) -> Flask:
    """Build the Flask app around a :class:`~gamehub.core.GameHub`.

    Args:
        config: Settings overriding :data:`gamehub.config.DEFAULT_CONFIG`.
        store:  Storage backend; defaults to JSON files in ``data_dir``.
    """
    game_hub = GameHub(config, store=store)
    game_hub.bootstrap()

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = 50 * 1024 * 1024
    app.extensions['gamehub'] = game_hub
    CORS(app, resources={r'/api/*': {'origins': game_hub.config['cors_origins']}})
    register_error_handlers(app)
    app.register_blueprint(api)
    return app


def main():
    """Main entry point for the server"""
    parser = argparse.ArgumentParser(description='GameHub REST server')
    parser.add_argument('--config', default=None, help='Path to an optional JSON config file')
    parser.add_argument('--host', default=None, help='Interface to bind (overrides config)')
    parser.add_argument('--port', type=int, default=None, help='Port to listen on (overrides config)')
    parser.add_argument('--debug', action='store_true', help='Run Flask in debug mode')
    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging(config['log_level'], config.get('log_file'))
    host = args.host or config['host']
    port = args.port or config['port']

    app = create_app(config)
    server_logger.info('GameHub %s listening on %s:%s (data: %s)',
                       __version__, host, port, config['data_dir'])
    app.run(host=host, port=port, debug=args.debug)


if __name__ == '__main__':
    main()
