"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from chat_jukebox.application.interfaces.player_actuator import PlayerActuator
from chat_jukebox.application.interfaces.provider_gateway import ProviderGateway

__all__ = [
    "ProviderGateway",
    "PlayerActuator",
]
