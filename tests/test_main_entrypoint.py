"""
Tests for main.py - Main Entry Point

Tests for the main entry point including:
- Settings validation before anything starts
- Exit codes for clean shutdown, interrupts and fatal errors
- Running only the enabled surfaces
- Container shutdown after the surfaces stop
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from chat_jukebox import main as main_module
from chat_jukebox.config.settings import Settings
from chat_jukebox.main import cli, main, run


def _settings(**overrides) -> Settings:
    values = {
        "api": {"enabled": True},
        "discord": {"enabled": True, "token": "token"},
        **overrides,
    }
    return Settings(_env_file=None, **values)


@pytest.fixture
def patched_startup():
    """Patch settings loading and logging so main() never touches the real process state."""
    with (
        patch("chat_jukebox.config.settings.get_settings") as mock_get_settings,
        patch("chat_jukebox.main.setup_logging") as mock_setup_logging,
    ):
        yield mock_get_settings, mock_setup_logging


class TestMain:
    def test_nothing_enabled(self, patched_startup):
        mock_get_settings, _ = patched_startup
        mock_get_settings.return_value = _settings(
            api={"enabled": False}, discord={"enabled": False}
        )

        with patch("chat_jukebox.main.asyncio.run") as mock_run:
            assert main() == 1

        mock_run.assert_not_called()

    def test_discord_without_token(self, patched_startup):
        mock_get_settings, _ = patched_startup
        mock_get_settings.return_value = _settings(discord={"enabled": True})

        with patch("chat_jukebox.main.asyncio.run") as mock_run:
            assert main() == 1

        mock_run.assert_not_called()

    def test_clean_exit(self, patched_startup):
        mock_get_settings, mock_setup_logging = patched_startup
        mock_get_settings.return_value = _settings(log_level="DEBUG")

        with (
            patch("chat_jukebox.main.run", new=MagicMock()),
            patch("chat_jukebox.main.asyncio.run") as mock_run,
        ):
            assert main() == 0

        mock_setup_logging.assert_called_once_with("DEBUG")
        mock_run.assert_called_once()

    def test_debug_forces_debug_logging(self, patched_startup):
        mock_get_settings, mock_setup_logging = patched_startup
        mock_get_settings.return_value = _settings(debug=True, log_level="WARNING")

        with (
            patch("chat_jukebox.main.run", new=MagicMock()),
            patch("chat_jukebox.main.asyncio.run"),
        ):
            assert main() == 0

        mock_setup_logging.assert_called_once_with("DEBUG")

    def test_keyboard_interrupt(self, patched_startup):
        mock_get_settings, _ = patched_startup
        mock_get_settings.return_value = _settings()

        with (
            patch("chat_jukebox.main.run", new=MagicMock()),
            patch("chat_jukebox.main.asyncio.run", side_effect=KeyboardInterrupt),
        ):
            assert main() == 0

    def test_fatal_error(self, patched_startup):
        mock_get_settings, _ = patched_startup
        mock_get_settings.return_value = _settings()

        with (
            patch("chat_jukebox.main.run", new=MagicMock()),
            patch("chat_jukebox.main.asyncio.run", side_effect=RuntimeError("boom")),
        ):
            assert main() == 1

    def test_http_only_needs_no_token(self, patched_startup):
        mock_get_settings, _ = patched_startup
        mock_get_settings.return_value = _settings(discord={"enabled": False})

        with (
            patch("chat_jukebox.main.run", new=MagicMock()),
            patch("chat_jukebox.main.asyncio.run"),
        ):
            assert main() == 0


class TestCli:
    def test_exits_with_main_return_code(self):
        with patch.object(main_module, "main", return_value=3):
            with pytest.raises(SystemExit) as exc_info:
                cli()

        assert exc_info.value.code == 3


class TestRun:
    @pytest.mark.asyncio
    async def test_runs_enabled_surfaces_and_shuts_down(self):
        settings = _settings(player={"tick_interval_seconds": 0.01})

        with (
            patch.object(main_module, "serve_http", new=AsyncMock()) as mock_http,
            patch.object(main_module, "run_bot", new=AsyncMock()) as mock_bot,
            patch("chat_jukebox.config.container.Container.initialize", new=AsyncMock()),
            patch(
                "chat_jukebox.config.container.Container.shutdown", new=AsyncMock()
            ) as mock_shutdown,
        ):
            await run(settings)

        mock_http.assert_awaited_once()
        mock_bot.assert_awaited_once()
        mock_shutdown.assert_awaited_once()
        # Both surfaces are handed the same container
        assert mock_http.call_args.args[0] is mock_bot.call_args.args[0]

    @pytest.mark.asyncio
    async def test_skips_disabled_surface(self):
        settings = _settings(discord={"enabled": False}, player={"tick_interval_seconds": 0.01})

        with (
            patch.object(main_module, "serve_http", new=AsyncMock()) as mock_http,
            patch.object(main_module, "run_bot", new=AsyncMock()) as mock_bot,
        ):
            await run(settings)

        mock_http.assert_awaited_once()
        mock_bot.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_shuts_down_when_a_surface_fails(self):
        settings = _settings(discord={"enabled": False}, player={"tick_interval_seconds": 0.01})

        with (
            patch.object(main_module, "serve_http", new=AsyncMock(side_effect=RuntimeError("boom"))),
            patch("chat_jukebox.config.container.Container.initialize", new=AsyncMock()),
            patch(
                "chat_jukebox.config.container.Container.shutdown", new=AsyncMock()
            ) as mock_shutdown,
        ):
            with pytest.raises(ExceptionGroup):
                await run(settings)

        mock_shutdown.assert_awaited_once()
