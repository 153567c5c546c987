"""FastAPI application exposing the jukebox over HTTP."""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from chat_jukebox.application.services.jukebox_service import JukeboxService
from chat_jukebox.domain.music.entities import CurrentSong
from chat_jukebox.domain.shared.exceptions import DomainError
from chat_jukebox.domain.shared.messages import LogTemplates
from chat_jukebox.infrastructure.http.models import Item, StatusResponse

if TYPE_CHECKING:
    from chat_jukebox.config.settings import Settings

logger = logging.getLogger(__name__)

REALM = "MusicBot"

basic_auth = HTTPBasic(auto_error=False, realm=REALM)


def get_jukebox(request: Request) -> JukeboxService:
    return request.app.state.jukebox


def require_credentials(
    request: Request,
    credentials: Annotated[HTTPBasicCredentials | None, Depends(basic_auth)],
) -> str:
    """Check HTTP Basic credentials against the configured API user."""
    api = request.app.state.settings.api
    expected_password = api.password.get_secret_value()

    if credentials is not None and expected_password:
        user_ok = secrets.compare_digest(credentials.username.encode(), api.username.encode())
        password_ok = secrets.compare_digest(
            credentials.password.encode(), expected_password.encode()
        )
        if user_ok and password_ok:
            return credentials.username

    logger.warning(
        LogTemplates.HTTP_AUTH_FAILED, credentials.username if credentials else "<anonymous>"
    )
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="401 Unauthorized",
        headers={"WWW-Authenticate": f'Basic realm="{REALM}"'},
    )


Jukebox = Annotated[JukeboxService, Depends(get_jukebox)]


def _current_item(current: CurrentSong) -> Item | None:
    if current.song is None:
        return None
    return Item.from_song(current.song, current.remaining_seconds or 0)


def _item_response(item: Item | None) -> Response:
    if item is None:
        return Response(status_code=status.HTTP_200_OK)
    return JSONResponse(item.model_dump(by_alias=True))


# === Read routes ===

read_router = APIRouter(tags=["status"])


@read_router.get("/health")
async def health():
    return {"status": "ok"}


@read_router.get("/status", response_model=StatusResponse, response_model_by_alias=True)
async def get_status(jukebox: Jukebox):
    """Current song and queue, observed together."""
    snapshot = await jukebox.status()
    return StatusResponse(
        status=snapshot.current.status.value,
        current=_current_item(snapshot.current),
        songs=[Item.from_song(song) for song in snapshot.queue],
    )


@read_router.get("/list", response_model=list[Item], response_model_by_alias=True)
async def get_list(jukebox: Jukebox):
    snapshot = await jukebox.status()
    return [Item.from_song(song) for song in snapshot.queue]


@read_router.get("/current", response_model=Item | None, response_model_by_alias=True)
async def get_current(jukebox: Jukebox):
    return _current_item(await jukebox.current())


# === Control routes ===

control_router = APIRouter(tags=["control"], dependencies=[Depends(require_credentials)])


@control_router.get("/play")
async def play(jukebox: Jukebox):
    await jukebox.play()
    return _item_response(_current_item(await jukebox.current()))


@control_router.get("/pause")
async def pause(jukebox: Jukebox):
    await jukebox.pause()
    return _item_response(_current_item(await jukebox.current()))


@control_router.get("/stop")
async def stop(jukebox: Jukebox):
    await jukebox.stop()
    return _item_response(None)


@control_router.get("/next")
async def next_song(jukebox: Jukebox):
    await jukebox.next()
    return _item_response(_current_item(await jukebox.current()))


@control_router.get("/add", response_model=list[Item], response_model_by_alias=True)
async def add(
    jukebox: Jukebox,
    user: Annotated[str, Depends(require_credentials)],
    url: Annotated[str, Query()] = "",
):
    songs = await jukebox.add(url, requested_by=user)
    return [Item.from_song(song) for song in songs]


async def _domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    message = exc.message if isinstance(exc, DomainError) else str(exc)
    logger.warning(LogTemplates.HTTP_OPERATION_FAILED, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": message},
    )


def create_app(jukebox: JukeboxService, settings: Settings) -> FastAPI:
    """Build the API around an existing jukebox so chat and HTTP share state."""
    app = FastAPI(title="chat-jukebox", docs_url=None, redoc_url=None)
    app.state.jukebox = jukebox
    app.state.settings = settings

    app.include_router(read_router)
    app.include_router(control_router)
    app.add_exception_handler(DomainError, _domain_error_handler)
    return app
