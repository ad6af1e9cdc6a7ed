"""
Socket.IO Event Handlers for Imposter Party.

Pure routing layer: clients join a room per game and receive every committed
snapshot as a 'game_updated' event. Contains no business logic.
"""

import logging
from flask import request
from flask_socketio import emit, join_room, leave_room

from game import GameError

logger = logging.getLogger(__name__)

def room_for(game_id: int) -> str:
    """Socket.IO room that observes one game."""
    return f"game:{game_id}"

def register_socket_handlers(socketio, game_manager):
    """
    Register all Socket.IO event handlers.

    Args:
        socketio: SocketIO instance
        game_manager: Game management instance
    """

    def broadcast_snapshot(snapshot):
        socketio.emit('game_updated', {'game': snapshot.to_dict()}, to=room_for(snapshot.id))

    game_manager.subscribe(broadcast_snapshot)

    def _game_id(data):
        try:
            return int((data or {}).get('game_id'))
        except (TypeError, ValueError):
            return None

    @socketio.on('connect')
    def handle_connect():
        """Handle client connection."""
        logger.info(f"Client connected: {request.sid}")
        emit('connected', {'message': 'Connected to server successfully'})

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Handle client disconnection."""
        logger.info(f"Client disconnected: {request.sid}")

    @socketio.on('join_game')
    def handle_join_game(data):
        """Subscribe to a game's updates and receive its current state."""
        game_id = _game_id(data)
        if game_id is None:
            emit('error', {'error': 'bad_request', 'message': 'Missing game_id'})
            return

        try:
            snapshot = game_manager.get_game(game_id)
        except GameError as e:
            emit('error', e.to_dict())
            return

        join_room(room_for(game_id))
        emit('game_updated', {'game': snapshot.to_dict()})
        logger.info(f"Client {request.sid} observing game {game_id}")

    @socketio.on('leave_game')
    def handle_leave_game(data):
        """Stop receiving a game's updates."""
        game_id = _game_id(data)
        if game_id is not None:
            leave_room(room_for(game_id))
            logger.info(f"Client {request.sid} left game {game_id}")

    @socketio.on('timer_tick')
    def handle_timer_tick(data):
        """Clients poll this about once per second while a countdown runs."""
        game_id = _game_id(data)
        if game_id is None:
            emit('error', {'error': 'bad_request', 'message': 'Missing game_id'})
            return

        try:
            snapshot, status = game_manager.tick(game_id)
        except GameError as e:
            emit('error', e.to_dict())
            return

        emit('timer', {'game_id': snapshot.id, 'timer': status.to_dict()})

    logger.info("Socket handlers registered successfully")
