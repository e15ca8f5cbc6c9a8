import pytest


def _create(client, payload, prefix="/songs"):
    r = client.post(prefix, json=payload)
    assert r.status_code == 201, r.text
    return r.json()


@pytest.mark.api
def test_list_songs_empty_store(client):
    r = client.get("/songs")
    assert r.status_code == 200
    assert r.json() == []


@pytest.mark.api
def test_create_song_returns_201_with_location(client, song_payload):
    r = client.post("/songs", json={**song_payload, "id": 77})

    assert r.status_code == 201
    body = r.json()
    assert body["id"] > 0
    assert body["id"] != 77
    assert body["title"] == "Me Myself and I"
    assert body["artist"] == "De La Soul"
    assert body["releaseDate"].startswith("1989-03-14T00:00:00")
    assert "release_date" not in body
    assert r.headers["Location"] == f"/songs/{body['id']}"


@pytest.mark.api
def test_created_song_can_be_fetched(client, song_payload):
    created = _create(client, song_payload)

    r = client.get(f"/songs/{created['id']}")

    assert r.status_code == 200
    assert r.json() == created


@pytest.mark.api
def test_get_missing_song_returns_404_message(client):
    r = client.get("/songs/999")
    assert r.status_code == 404
    assert r.json() == {"message": "Song not found"}


@pytest.mark.api
@pytest.mark.parametrize(
    "overrides",
    [{"title": ""}, {"artist": "   "}, {"title": None}, {"artist": None}],
)
def test_create_blank_fields_returns_400(client, song_payload, overrides):
    payload = {**song_payload, **overrides}
    payload = {k: v for k, v in payload.items() if v is not None}

    r = client.post("/songs", json=payload)

    assert r.status_code == 400
    assert r.json() == {"message": "Title and Artist are required"}
    assert client.get("/songs").json() == []


@pytest.mark.api
def test_create_with_invalid_release_date_returns_400(client, song_payload):
    r = client.post("/songs", json={**song_payload, "releaseDate": "not-a-date"})
    assert r.status_code == 400
    assert "releaseDate" in r.json()["message"]


@pytest.mark.api
def test_create_without_release_date_returns_400(client, song_payload):
    payload = {k: v for k, v in song_payload.items() if k != "releaseDate"}
    r = client.post("/songs", json=payload)
    assert r.status_code == 400
    assert "message" in r.json()


@pytest.mark.api
def test_update_song_returns_204_and_persists(client, song_payload):
    created = _create(client, song_payload)
    update = {
        "id": created["id"],
        "title": "The Magic Number",
        "artist": "De La Soul",
        "releaseDate": "1989-03-14T00:00:00Z",
    }

    r = client.put(f"/songs/{created['id']}", json=update)

    assert r.status_code == 204
    assert r.content == b""
    assert client.get(f"/songs/{created['id']}").json()["title"] == "The Magic Number"


@pytest.mark.api
def test_update_id_mismatch_returns_400_even_if_absent(client, song_payload):
    r = client.put("/songs/1", json={**song_payload, "id": 2})
    assert r.status_code == 400
    assert r.json() == {"message": "ID mismatch"}


@pytest.mark.api
def test_update_blank_title_returns_400(client, song_payload):
    created = _create(client, song_payload)
    r = client.put(f"/songs/{created['id']}", json={**song_payload, "id": created["id"], "title": " "})
    assert r.status_code == 400
    assert r.json() == {"message": "Title and Artist are required"}


@pytest.mark.api
def test_update_missing_song_returns_404(client, song_payload):
    r = client.put("/songs/999", json={**song_payload, "id": 999})
    assert r.status_code == 404
    assert r.json() == {"message": "Song not found"}


@pytest.mark.api
def test_delete_song_then_again(client, song_payload):
    created = _create(client, song_payload)

    first = client.delete(f"/songs/{created['id']}")
    second = client.delete(f"/songs/{created['id']}")

    assert first.status_code == 200
    assert first.json() == {"message": "Song deleted successfully"}
    assert second.status_code == 404
    assert second.json() == {"message": "Song not found"}


@pytest.mark.api
def test_non_integer_path_id_returns_400(client):
    r = client.get("/songs/abc")
    assert r.status_code == 400
    assert "message" in r.json()


@pytest.mark.api
def test_api_prefix_serves_same_routes(client, song_payload):
    created = _create(client, song_payload, prefix="/api/songs")

    r = client.post("/api/songs", json=song_payload)
    assert r.headers["Location"] == f"/api/songs/{r.json()['id']}"
    assert client.get(f"/songs/{created['id']}").json() == created
    assert len(client.get("/api/songs").json()) == 2
    assert client.delete(f"/api/songs/{created['id']}").status_code == 200


@pytest.mark.api
def test_backend_error_returns_500(client, monkeypatch):
    import sqlite3

    from song_library_api.app.services.song_service import SongService

    async def _broken(cls):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(SongService, "list_songs", classmethod(_broken))

    r = client.get("/songs")

    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error"}


@pytest.mark.api
def test_update_conflict_returns_500(client, song_payload, monkeypatch):
    from song_library_api.app.core.exceptions import SongConflictError
    from song_library_api.app.services.song_service import SongService

    created = _create(client, song_payload)

    async def _conflict(cls, song_id, data):
        raise SongConflictError("busy")

    monkeypatch.setattr(SongService, "update_song", classmethod(_conflict))

    r = client.put(f"/songs/{created['id']}", json={**song_payload, "id": created["id"]})

    assert r.status_code == 500
    assert r.json() == {"message": "Song update conflict"}


OUT_OF_RANGE_ID = 2 ** 63


@pytest.mark.api
def test_get_out_of_range_id_returns_404(client):
    r = client.get(f"/songs/{OUT_OF_RANGE_ID}")
    assert r.status_code == 404
    assert r.json() == {"message": "Song not found"}


@pytest.mark.api
def test_update_out_of_range_id_returns_404(client, song_payload):
    r = client.put(f"/songs/{OUT_OF_RANGE_ID}", json={**song_payload, "id": OUT_OF_RANGE_ID})
    assert r.status_code == 404
    assert r.json() == {"message": "Song not found"}


@pytest.mark.api
def test_update_out_of_range_id_mismatch_still_400(client, song_payload):
    r = client.put(f"/songs/{OUT_OF_RANGE_ID}", json={**song_payload, "id": 1})
    assert r.status_code == 400
    assert r.json() == {"message": "ID mismatch"}


@pytest.mark.api
def test_delete_out_of_range_id_returns_404(client):
    r = client.delete(f"/songs/{OUT_OF_RANGE_ID}")
    assert r.status_code == 404
    assert r.json() == {"message": "Song not found"}
