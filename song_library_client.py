"""Song library API client.

This module defines a small client wrapper around the song library
REST API.  It uses the ``requests`` library internally to make HTTP
calls and exposes one high‑level method per operation:

* :meth:`list_songs` – return every song.
* :meth:`get_song` – fetch a single song by its identifier.
* :meth:`create_song` – add a song; the server assigns its id.
* :meth:`update_song` – replace title, artist and release date.
* :meth:`delete_song` – remove a song.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure it is a dictionary with the keys
``status_code`` and ``message``.  Transport failures (connection
refused, timeouts) are reported with ``status_code`` set to ``None``.

The client supports optional authentication via an API key which will
be sent in the ``Authorization`` header, for deployments that put the
service behind a gateway.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class SongLibraryAPI:
    """Client for interacting with the song library API."""

    SONGS_PATH = "/songs"

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            api_key: Optional API key.  If set, an ``Authorization``
                header with the value ``Bearer <api_key>`` will be
                included in all requests.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/songs``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success (``None`` for empty bodies) and
            ``error`` is ``None``. On failure, ``data`` is ``None`` and
            ``error`` describes the issue.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _song_path(self, song_id: Any) -> str:
        return f"{self.SONGS_PATH}/{song_id}"

    # ------------------------------------------------------------------
    # Song operations
    # ------------------------------------------------------------------
    def list_songs(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve all songs.

        Returns:
            A tuple ``(songs, error)``. ``songs`` is empty on failure.
        """
        data, error = self._request("GET", self.SONGS_PATH)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def get_song(self, song_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve a single song by ID."""
        return self._request("GET", self._song_path(song_id))

    def create_song(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a song.

        Args:
            payload: ``title``, ``artist`` and ``releaseDate``.  An
                ``id`` is ignored by the server.
        Returns:
            A tuple ``(song, error)`` where ``song`` carries the
            assigned ``id``.
        """
        return self._request("POST", self.SONGS_PATH, json_body=payload)

    def update_song(self, song_id: Any, payload: Dict[str, Any]) -> Tuple[bool, Optional[ApiError]]:
        """Replace a song.

        The ``id`` in ``payload`` defaults to ``song_id`` because the
        server rejects mismatching ids.
        """
        body = dict(payload)
        body.setdefault("id", song_id)
        _, error = self._request("PUT", self._song_path(song_id), json_body=body)
        if error:
            return False, error
        return True, None

    def delete_song(self, song_id: Any) -> Tuple[bool, Optional[ApiError]]:
        """Delete a song by ID."""
        _, error = self._request("DELETE", self._song_path(song_id))
        if error:
            return False, error
        return True, None
