"""
API Route Handlers for Imposter Party.

Pure routing layer that delegates to the game manager.
Contains no business logic - only request/response handling.
"""

import logging
from flask import jsonify, request

from game import (
    GameError, NotFound, InvalidStartConditions, InvalidTransition, IncompleteVoteSet,
    InvalidVote, InvalidSettings, InvalidPlayerData, InvalidGameCode, GameCodeTaken
)

logger = logging.getLogger(__name__)

# HTTP status per error kind; subclasses come before their base
ERROR_STATUS = {
    NotFound: 404,
    InvalidStartConditions: 409,
    InvalidTransition: 409,
    GameCodeTaken: 409,
    InvalidGameCode: 422,
    IncompleteVoteSet: 422,
    InvalidVote: 422,
    InvalidSettings: 422,
    InvalidPlayerData: 422,
}

def error_status(error: GameError) -> int:
    """HTTP status code for an engine error."""
    for kind, status in ERROR_STATUS.items():
        if isinstance(error, kind):
            return status
    return 400

def _flag(name: str) -> bool:
    return request.args.get(name, 'false').lower() in ('1', 'true', 'yes')

def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

def register_api_handlers(app, game_manager):
    """
    Register all API route handlers.

    Args:
        app: Flask application instance
        game_manager: Game management instance
    """

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'message': 'Imposter Party game server is running',
            'version': '1.0.0'
        })

    # ------------------------------------------------------------------ catalog

    @app.route('/api/categories')
    def list_categories():
        """List the word categories."""
        names = request.args.getlist('name')
        if names:
            categories = game_manager.get_categories(names)
        else:
            categories = game_manager.list_categories()
        return jsonify({'categories': categories})

    @app.route('/api/categories/seed', methods=['POST'])
    def seed_categories():
        """Make sure the built-in categories exist."""
        created = game_manager.ensure_default_categories()
        return jsonify({'created': created})

    # -------------------------------------------------------------------- games

    @app.route('/api/games', methods=['POST'])
    def create_game():
        """Create a game in the lobby."""
        data = _payload()
        snapshot = game_manager.create_game(
            settings=data.get('settings'),
            game_code=data.get('game_code'),
            with_default_players=bool(data.get('with_default_players', False))
        )
        return jsonify({'game': snapshot.to_dict()}), 201

    @app.route('/api/games/<int:game_id>')
    def get_game(game_id):
        """Get the current game state."""
        snapshot = game_manager.get_game(game_id)
        return jsonify({'game': snapshot.to_dict(include_secrets=_flag('include_secrets'))})

    @app.route('/api/games/code/<game_code>')
    def get_game_by_code(game_code):
        """Find a game by its join code."""
        snapshot = game_manager.get_game_by_code(game_code)
        return jsonify({'game': snapshot.to_dict()})

    @app.route('/api/games/<int:game_id>/settings', methods=['PUT'])
    def update_settings(game_id):
        """Replace the game settings."""
        snapshot = game_manager.update_settings(game_id, _payload().get('settings', {}))
        return jsonify({'game': snapshot.to_dict()})

    @app.route('/api/games/<int:game_id>/categories', methods=['PUT'])
    def update_categories(game_id):
        """Choose the categories the secret word is drawn from."""
        snapshot = game_manager.update_selected_categories(game_id, _payload().get('categories', []))
        return jsonify({'game': snapshot.to_dict()})

    # ------------------------------------------------------------------ players

    @app.route('/api/games/<int:game_id>/players')
    def list_players(game_id):
        """Active players in seat order."""
        players = game_manager.list_players(game_id)
        return jsonify({'players': [player.to_dict() for player in players]})

    @app.route('/api/games/<int:game_id>/players', methods=['POST'])
    def add_player(game_id):
        """Seat a new player."""
        data = _payload()
        player = game_manager.add_player(game_id, name=data.get('name'), color=data.get('color'))
        return jsonify({'player': player.to_dict()}), 201

    @app.route('/api/players/<int:player_id>', methods=['PATCH'])
    def update_player(player_id):
        """Rename or recolor a player."""
        data = _payload()
        player = game_manager.update_player(player_id, name=data.get('name'), color=data.get('color'))
        return jsonify({'player': player.to_dict()})

    @app.route('/api/players/<int:player_id>', methods=['DELETE'])
    def remove_player(player_id):
        """Remove a player from the roster."""
        snapshot = game_manager.remove_player(player_id)
        return jsonify({'game': snapshot.to_dict()})

    # -------------------------------------------------------------------- round

    @app.route('/api/games/<int:game_id>/start', methods=['POST'])
    def start_game(game_id):
        """Start the round."""
        snapshot = game_manager.start_game(game_id)
        return jsonify({'game': snapshot.to_dict()})

    @app.route('/api/games/<int:game_id>/card')
    def current_card(game_id):
        """Card of the player whose turn it is."""
        card = game_manager.current_card(game_id)
        return jsonify({'card': card.to_dict()})

    @app.route('/api/games/<int:game_id>/advance', methods=['POST'])
    def advance_turn(game_id):
        """Pass the phone to the next player."""
        snapshot = game_manager.advance_turn(game_id)
        return jsonify({'game': snapshot.to_dict()})

    @app.route('/api/games/<int:game_id>/timer')
    def timer_status(game_id):
        """Countdown of the current phase."""
        status = game_manager.timer_status(game_id)
        return jsonify({'timer': status.to_dict()})

    @app.route('/api/games/<int:game_id>/tick', methods=['POST'])
    def tick(game_id):
        """Poll the countdown; an expired viewing countdown advances the turn."""
        snapshot, status = game_manager.tick(game_id)
        return jsonify({'game': snapshot.to_dict(), 'timer': status.to_dict()})

    # ------------------------------------------------------------------- voting

    @app.route('/api/games/<int:game_id>/votes', methods=['POST'])
    def submit_votes(game_id):
        """Submit everyone's vote at once."""
        snapshot = game_manager.submit_votes(game_id, _payload().get('votes', {}))
        return jsonify({'game': snapshot.to_dict()})

    @app.route('/api/games/<int:game_id>/results')
    def get_results(game_id):
        """Tally and outcome of the vote."""
        report = game_manager.get_results(game_id)
        return jsonify({'results': report.to_dict()})

    @app.route('/api/games/<int:game_id>/end', methods=['POST'])
    def end_game(game_id):
        """End the game."""
        snapshot = game_manager.end_game(game_id)
        return jsonify({'game': snapshot.to_dict()})

    @app.route('/api/games/<int:game_id>/reset', methods=['POST'])
    def reset_game(game_id):
        """Return to the lobby for another round."""
        snapshot = game_manager.reset(game_id)
        return jsonify({'game': snapshot.to_dict()})

    # Error handlers
    @app.errorhandler(GameError)
    def game_error(error):
        """Handle engine errors."""
        status = error_status(error)
        logger.info(f"{request.method} {request.path} rejected ({status}): {error.message}")
        return jsonify(error.to_dict()), status

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'not_found', 'message': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal error on {request.method} {request.path}: {error}")
        return jsonify({'error': 'internal_error', 'message': 'Internal server error'}), 500

    logger.info("API handlers registered successfully")
