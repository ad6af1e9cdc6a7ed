"""
Handlers Module for Imposter Party.

Contains all web layer handlers (Socket.IO and API) with no business logic.
Handlers coordinate between the web layer and the game manager.
"""

from .socket_handlers import register_socket_handlers, room_for
from .api_handlers import register_api_handlers, error_status

__all__ = [
    'register_socket_handlers',
    'register_api_handlers',
    'room_for',
    'error_status'
]
