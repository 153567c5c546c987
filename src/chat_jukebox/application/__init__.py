"""
Application Layer

Contains the use cases shared by every entry point.
This layer orchestrates domain objects and infrastructure adapters.

Structure:
- interfaces/: Port interfaces for provider gateways and the player actuator
- services/: Song resolution, the jukebox facade and the auto-advance ticker
- commands/: Chat command registry and router
"""
