"""
Song endpoints for API v1.

These routes expose the CRUD API for songs.  Each handler parses its
input, calls ``SongService`` and maps the outcome to a fixed status
code:

* ``GET /songs`` -> 200 with every song
* ``GET /songs/{song_id}`` -> 200, or 404 when absent
* ``POST /songs`` -> 201 with a ``Location`` header, or 400
* ``PUT /songs/{song_id}`` -> 204, 400 or 404
* ``DELETE /songs/{song_id}`` -> 200, or 404 when absent

Error bodies have the shape ``{"message": ...}``.
"""

from typing import List

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from song_library_api.app.core.exceptions import SongValidationError
from song_library_api.app.schemas.song import SongCreate, SongRead, SongUpdate
from song_library_api.app.services.song_service import SongService

router = APIRouter()

NOT_FOUND_MESSAGE = "Song not found"


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.get("", response_model=List[SongRead])
async def list_songs() -> List[SongRead]:
    """Return all songs in the library."""
    return await SongService.list_songs()


@router.get("/{song_id}", response_model=SongRead)
async def get_song(song_id: int):
    """Retrieve a single song by ID.

    Returns HTTP 404 if the song is not found.
    """
    song = await SongService.get_song(song_id)
    if song is None:
        return _message(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)
    return song


@router.post("", response_model=SongRead, status_code=status.HTTP_201_CREATED)
async def create_song(song_in: SongCreate, request: Request, response: Response):
    """Create a new song.

    The ``id`` in the body is ignored.  The ``Location`` header points
    at the new song under the same prefix the request used.
    """
    try:
        song = await SongService.create_song(song_in)
    except SongValidationError as e:
        return _message(status.HTTP_400_BAD_REQUEST, str(e))
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{song.id}"
    return song


@router.put("/{song_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_song(song_id: int, song_in: SongUpdate):
    """Replace an existing song; the body ``id`` must match ``song_id``."""
    try:
        updated = await SongService.update_song(song_id, song_in)
    except SongValidationError as e:
        return _message(status.HTTP_400_BAD_REQUEST, str(e))
    if not updated:
        return _message(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{song_id}")
async def delete_song(song_id: int):
    """Delete a song."""
    deleted = await SongService.delete_song(song_id)
    if not deleted:
        return _message(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)
    return {"message": "Song deleted successfully"}
