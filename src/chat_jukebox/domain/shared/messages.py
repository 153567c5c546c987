"""Centralized message constants for error messages, log templates, and chat replies."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    PROVIDER_TIMEOUT = "{provider} did not answer within {timeout}s"
    PROVIDER_NOT_AVAILABLE = "No provider can handle {url}"
    ALL_PROVIDERS_FAILED = "Every provider failed to search for '{query}'"
    DISCORD_TOKEN_REQUIRED = "DISCORD__TOKEN is required to start the chat adapter"
    NOTHING_TO_RUN = "Neither the HTTP API nor the chat adapter is enabled"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Queue
    QUEUE_ADDED = "Queued '%s' (queue length %d)"
    QUEUE_ADDED_MANY = "Queued %d songs (queue length %d)"
    QUEUE_POPPED = "Popped '%s' from queue (queue length %d)"
    QUEUE_FLUSHED = "Flushed %d songs from queue"
    QUEUE_SHUFFLED = "Shuffled %d queued songs"

    # Playback
    PLAYBACK_STARTED = "Started playing '%s' (automatic=%s)"
    PLAYBACK_PAUSED = "Paused '%s' after %.1fs"
    PLAYBACK_RESUMED = "Resumed '%s'"
    PLAYBACK_STOPPED = "Stopped playback"
    PLAYBACK_ALREADY_PLAYING = "Play requested while already playing '%s'"
    PLAYBACK_QUEUE_EXHAUSTED = "Queue exhausted, playback stopped"
    PLAYBACK_AUTO_ADVANCE = "Auto-advancing after '%s' finished"

    # Auto-advance ticker
    TICKER_STARTED = "Auto-advance ticker started (interval %.2fs)"
    TICKER_STOPPED = "Auto-advance ticker stopped"
    TICKER_ALREADY_RUNNING = "Auto-advance ticker is already running"
    TICKER_ERROR = "Error during auto-advance tick"

    # Volume
    VOLUME_CHANGED = "Volume changed from %d to %d"

    # Whitelist
    WHITELIST_ADDED = "Added '%s' to whitelist"
    WHITELIST_REMOVED = "Removed '%s' from whitelist"
    WHITELIST_DENIED = "Denied '%s' for privileged operation '%s'"

    # Providers
    PROVIDER_RESOLVING = "Resolving '%s' with %s"
    PROVIDER_SEARCHING = "Searching '%s' across %d providers"
    PROVIDER_FAILED = "Provider %s failed for '%s': %s"
    PROVIDER_TIMEOUT = "Provider %s timed out after %ss for '%s'"
    PROVIDER_PLAYLIST_ENTRY_SKIPPED = "Skipped playlist entry %s: %s"
    YTDLP_FAILED_EXTRACT_INFO = "yt-dlp failed to extract info for %s"
    YTDLP_FAILED_SEARCH = "yt-dlp search failed for '%s'"
    YTDLP_FAILED_EXTRACT_PLAYLIST = "yt-dlp failed to extract playlist %s"
    CACHE_HIT_URL = "Cache hit for URL: %s"
    CACHE_EXPIRED_CLEANED = "Cleaned %d expired cache entries"

    # Actuator
    ACTUATOR_COMMAND = "Actuator %s %s"

    # Commands
    COMMAND_RECEIVED = "Command '%s' from %s (private=%s)"
    COMMAND_UNKNOWN = "Unknown command '%s' from %s"
    COMMAND_FAILED = "Command '%s' failed: %s"

    # HTTP
    HTTP_AUTH_FAILED = "Rejected HTTP credentials for %s"
    HTTP_OPERATION_FAILED = "HTTP %s failed: %s"
    HTTP_STARTING = "HTTP API listening on %s:%d"

    # Chat transport
    CHAT_READY = "Chat adapter logged in as %s (ID: %s)"
    CHAT_NO_ANNOUNCE_CHANNEL = "No announce channel configured, dropping broadcast: %s"
    CHAT_SEND_FAILED = "Failed to send chat message: %s"

    # Lifecycle
    APP_STARTING = "Starting chat-jukebox in %s mode"
    APP_STOPPED = "chat-jukebox stopped"
    APP_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down"
    APP_FATAL_ERROR = "Fatal error: %s"


class ReplyMessages:
    """Chat replies and broadcast lines produced by the command router."""

    HELP = "Available commands: {commands}"
    UNKNOWN_COMMAND = "Unknown command: {name}. Type help for the list of commands"
    NO_SONG_PROVIDED = "No song provided"
    NO_SONG_FOUND = "No song found"
    ERROR = "Error: {error}"

    SONG_ADDED = "{song} added"
    SONG_ADDED_BY = "{song} added by {sender}"
    SONGS_ADDED = "{count} songs added"
    SONGS_ADDED_BY = "{count} songs added by {sender}"
    SEARCH_RESULT = "{index}  {song} ({duration})"

    SKIPPING = "Skipping song"
    SKIP_FAILED = "Could not skip song: {error}"
    SKIPPED_BY = "{sender} skipped the song"
    PAUSED = "Music paused"
    PAUSED_BY = "{sender} paused the music"
    RESUMED = "Music resumed"
    RESUMED_BY = "{sender} resumed the music"

    NOTHING_PLAYING = "Nothing currently playing"
    CURRENT_SONG = "Current song: {song}. {remaining} remaining ({duration})"
    CURRENT_PAUSED_SUFFIX = " [paused]"
    CURRENT_LIVESTREAM = (
        "Current song: {song}. This is a livestream, use the next command to skip"
    )
    NOW_PLAYING = "Now playing: {song}"
    QUEUE_EXHAUSTED = "The queue is empty, playback stopped"

    QUEUE_SUMMARY = "{count} songs in the queue. Total duration {duration}"
    QUEUE_ENTRY = "#{index}, {song} ({duration})"
    QUEUE_MORE = "and {count} more"
    QUEUE_FLUSHED = "Queue flushed"
    QUEUE_FLUSHED_BY = "{sender} flushed the queue"
    QUEUE_SHUFFLED = "Queue shuffled"
    QUEUE_SHUFFLED_BY = "{sender} shuffled the queue"

    VOLUME_CURRENT = "Current volume: {volume}"
    VOLUME_SET = "Volume set to {volume}"
    VOLUME_SET_BY = "Volume set to {volume} by {sender}"
    VOLUME_NOT_A_NUMBER = "{value} is not a valid number"
    VOLUME_INVALID = "{value} is not a valid volume"

    WHITELIST_USAGE = "whitelist <add|remove> <name>"
    WHITELIST_ADDED = "added {name} to the whitelist"
    WHITELIST_REMOVED = "removed {name} from the whitelist"

    ABOUT_NAME = "chat-jukebox: a chat driven music queue"
    ABOUT_VERSION = "Version: {version}"
    ABOUT_PYTHON = "Python: {python}"
