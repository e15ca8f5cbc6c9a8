"""
Pydantic models for song data.

These schemas define the structure of song data exchanged via the
API.  ``SongBase`` holds the shared fields; ``SongCreate`` and
``SongUpdate`` are request bodies and ``SongRead`` adds the stored
``id`` for responses.  On the wire the release date is called
``releaseDate``; the Python field name is accepted as well.

``title`` and ``artist`` default to an empty string instead of being
required so that a missing value is rejected by ``SongService`` with
the same message as a blank one.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class SongBase(BaseModel):
    title: str = Field("", examples=["Me Myself and I"])
    artist: str = Field("", examples=["De La Soul"])
    release_date: datetime = Field(
        ...,
        alias="releaseDate",
        examples=["1989-03-14T00:00:00Z"],
    )

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }

    @field_validator("release_date", mode="before")
    @classmethod
    def parse_date_only(cls, v: Any) -> Any:
        """Treat a bare date (``1989-03-14``) as midnight UTC."""
        if isinstance(v, datetime):
            return v
        if isinstance(v, date):
            return datetime.combine(v, time.min, tzinfo=timezone.utc)
        if isinstance(v, str) and len(v.strip()) == 10:
            try:
                parsed = date.fromisoformat(v.strip())
            except ValueError:
                return v
            return datetime.combine(parsed, time.min, tzinfo=timezone.utc)
        return v


class SongCreate(SongBase):
    """Schema for creating a song.

    A client supplied ``id`` is accepted but discarded; storage
    assigns the identifier.
    """

    id: Optional[int] = None


class SongUpdate(SongBase):
    """Schema for replacing a song.  ``id`` must match the path id."""

    id: Optional[int] = None


class SongRead(SongBase):
    """Schema for reading a song from the API."""

    id: int
