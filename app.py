"""
Imposter Party - pass-the-phone social deduction game backend.

Flask-SocketIO server exposing the game engine over REST and pushing every
game update to the devices around the table.
App.py is purely server setup and handler registration.
"""

import logging
from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from config import settings
from database import init_database
from game import GameManager
from handlers import register_socket_handlers, register_api_handlers

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def create_app(database_url: str = None, game_manager: GameManager = None, testing: bool = False):
    """
    Application factory that creates and configures the Flask app.

    Args:
        database_url: Overrides DATABASE_URL from the environment
        game_manager: Pre-built manager (tests inject seeded randomness and clocks)
        testing: Enable Flask testing mode

    Returns:
        tuple: (app, socketio, game_manager)
    """

    # Flask configuration
    app = Flask(__name__)
    app.config['SECRET_KEY'] = settings.SECRET_KEY
    app.config['TESTING'] = testing

    # CORS configuration for the mobile/web client
    origins = settings.CORS_ORIGINS.split(',')
    CORS(app, origins=origins)

    # ProxyFix for deployment behind reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # SocketIO configuration
    socketio = SocketIO(
        app,
        cors_allowed_origins=origins,
        async_mode=settings.SOCKETIO_ASYNC_MODE,
        ping_timeout=60,
        ping_interval=25
    )

    # Initialize database (tables + default categories)
    logger.info("Initializing database...")
    init_database(database_url)

    game_manager = game_manager or GameManager()

    # Register handlers (pure routing layer)
    logger.info("Registering handlers...")
    register_api_handlers(app, game_manager)
    register_socket_handlers(socketio, game_manager)

    logger.info("Application initialization complete")
    return app, socketio, game_manager

def main():
    """Main entry point for development server."""
    app, socketio, _ = create_app()

    logger.info(f"Starting Imposter Party game server on port {settings.PORT}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"CORS origins: {settings.CORS_ORIGINS}")

    socketio.run(app, debug=settings.DEBUG, port=settings.PORT, host='0.0.0.0',
                 allow_unsafe_werkzeug=settings.DEBUG)

if __name__ == '__main__':
    main()
