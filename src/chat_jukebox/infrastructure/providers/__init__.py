"""Provider gateway implementations."""

from chat_jukebox.infrastructure.providers.ytdlp_gateway import (
    SoundCloudGateway,
    YouTubeGateway,
    create_gateways,
)

__all__ = ["YouTubeGateway", "SoundCloudGateway", "create_gateways"]
