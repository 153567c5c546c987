"""Player actuator adapters."""

from chat_jukebox.infrastructure.actuator.logging_actuator import LoggingPlayerActuator

__all__ = ["LoggingPlayerActuator"]
