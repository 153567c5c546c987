"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Providers (yt-dlp gateways for YouTube and SoundCloud)
- Actuator (headless player that logs commands)
- HTTP (FastAPI status and control API)
- Discord (chat adapter)
"""
