"""Player Routes — HTTP contract for listing, paging, lookup and upsert.

Tests cover:
    - /paginated routing: full listing vs. page (with default size)
    - camelCase envelope and player fields
    - 400 for invalid sort direction and malformed input, 404 for absent players
    - 500 RETRIEVAL_FAILURE envelope when the store fails
    - Async variants and POST upsert visibility
"""

import threading


def _ids(players):
    return [p["playerId"] for p in players]


# ─── Paginated Listing ───────────────────────────────────────────

async def test_no_paging_params_returns_full_listing(client, fake_repository):
    res = await client.get("/api/v1/players/paginated")
    assert res.status_code == 200
    body = res.json()
    assert set(body) == {"players"}
    assert _ids(body["players"]) == ["A", "B", "C"]
    assert fake_repository.calls["find_all_paged"] == 0


async def test_page_only_uses_default_size(client, fake_repository):
    res = await client.get("/api/v1/players/paginated", params={"page": 0})
    assert res.status_code == 200
    assert res.json()["size"] == 10
    assert fake_repository.last_paged_args[:2] == (0, 10)


async def test_size_only_starts_at_first_page(client):
    res = await client.get("/api/v1/players/paginated", params={"size": 2})
    body = res.json()
    assert body["page"] == 0
    assert _ids(body["players"]) == ["A", "B"]


async def test_page_envelope_is_camel_case(client):
    res = await client.get(
        "/api/v1/players/paginated",
        params={"page": 1, "size": 2, "sortBy": "id", "sortDirection": "asc"},
    )
    body = res.json()
    assert _ids(body["players"]) == ["C"]
    assert body["totalElements"] == 3
    assert body["totalPages"] == 2
    assert body["hasNext"] is False
    assert body["hasPrevious"] is True
    assert body["first"] is False
    assert body["last"] is True


async def test_page_sorted_descending_by_last_name(client):
    res = await client.get(
        "/api/v1/players/paginated",
        params={"page": 0, "size": 10, "sortBy": "lastName", "sortDirection": "DESC"},
    )
    assert _ids(res.json()["players"]) == ["B", "C", "A"]


async def test_out_of_range_params_clamped(client):
    res = await client.get("/api/v1/players/paginated", params={"page": -3, "size": 500})
    body = res.json()
    assert (body["page"], body["size"]) == (0, 100)


async def test_invalid_sort_direction_is_400(client, fake_repository):
    res = await client.get(
        "/api/v1/players/paginated", params={"page": 0, "sortDirection": "sideways"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_SORT_DIRECTION"
    assert fake_repository.calls["find_all_paged"] == 0


async def test_non_integer_page_is_validation_error(client):
    res = await client.get("/api/v1/players/paginated", params={"page": "first"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "query.page"


async def test_store_failure_is_500_retrieval_failure(client, fake_repository):
    fake_repository.fail_with = RuntimeError("store down")
    res = await client.get("/api/v1/players/paginated", params={"page": 0})
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "RETRIEVAL_FAILURE"
    assert error["message"] == "Failed to retrieve paginated players"
    assert "store down" not in res.text


async def test_paginated_async(client, fake_repository):
    res = await client.get(
        "/api/v1/players/paginated/async", params={"size": 1, "sortDirection": "desc"},
    )
    assert res.status_code == 200
    body = res.json()
    assert _ids(body["players"]) == ["C"]
    assert body["totalPages"] == 3
    assert fake_repository.threads["find_all_paged"].startswith("TestPaginated-")


async def test_paginated_async_invalid_direction_is_400(client):
    res = await client.get(
        "/api/v1/players/paginated/async", params={"sortDirection": "up"},
    )
    assert res.status_code == 400


# ─── Full Listing & Lookup ───────────────────────────────────────

async def test_all_players_async(client):
    res = await client.get("/api/v1/players/async")
    assert res.status_code == 200
    assert len(res.json()["players"]) == 3


async def test_get_player_by_id(client):
    res = await client.get("/api/v1/players/A")
    assert res.status_code == 200
    body = res.json()
    assert body["playerId"] == "A"
    assert body["firstName"] == "Hank"
    assert body["throwStats"] is None


async def test_get_missing_player_is_404(client):
    res = await client.get("/api/v1/players/Z")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_get_player_by_id_async(client, fake_repository):
    res = await client.get("/api/v1/players/B/async")
    assert res.status_code == 200
    assert res.json()["lastName"] == "Ruth"
    assert fake_repository.threads["find_by_id"].startswith("TestPlayer-")


async def test_get_missing_player_async_is_404(client):
    res = await client.get("/api/v1/players/Z/async")
    assert res.status_code == 404


# ─── Upsert ──────────────────────────────────────────────────────

async def test_create_player_then_fetch(client):
    res = await client.post(
        "/api/v1/players",
        json={"playerId": "D", "firstName": "Willie", "throwStats": "R"},
    )
    assert res.status_code == 201
    assert res.json()["throwStats"] == "R"

    res = await client.get("/api/v1/players/D")
    assert res.json()["firstName"] == "Willie"


async def test_update_replaces_cached_player(client):
    await client.get("/api/v1/players/A")
    await client.post("/api/v1/players", json={"playerId": "A", "firstName": "Henry"})
    res = await client.get("/api/v1/players/A")
    assert res.json()["firstName"] == "Henry"


async def test_create_player_async(client, fake_repository):
    res = await client.post("/api/v1/players/async", json={"playerId": "E"})
    assert res.status_code == 201
    assert fake_repository.threads["save"].startswith("TestPlayer-")


async def test_create_alias_routes(client, fake_repository):
    res = await client.post("/api/v1/players/create", json={"playerId": "F", "bats": "L"})
    assert res.status_code == 201
    assert res.json()["bats"] == "L"

    res = await client.post("/api/v1/players/create/async", json={"playerId": "G"})
    assert res.status_code == 201
    assert fake_repository.threads["save"].startswith("TestPlayer-")

    res = await client.get("/api/v1/players/G")
    assert res.status_code == 200


async def test_create_without_player_id_is_400(client):
    res = await client.post("/api/v1/players", json={"firstName": "Nobody"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_save_failure_is_500(client, fake_repository):
    fake_repository.fail_with = RuntimeError("disk full")
    res = await client.post("/api/v1/players", json={"playerId": "D"})
    assert res.status_code == 500
    assert res.json()["error"]["message"] == "Failed to save player"


# ─── Backpressure ────────────────────────────────────────────────

async def test_saturated_record_pool_is_503(client, fake_repository, small_pools):
    fake_repository.block = threading.Event()
    try:
        # core 1 + queue 2 + overflow 1 occupy the record pool
        for pid in "ABCD":
            small_pools.record.submit(fake_repository.find_by_id, pid)
        res = await client.get("/api/v1/players/async")
        assert res.status_code == 503
        error = res.json()["error"]
        assert res.headers["Retry-After"] == "1"
        assert error["code"] == "OVERLOADED"
        assert error["context"]["pool"] == "record"
        assert error["context"]["operation"] == "get_players"
    finally:
        fake_repository.block.set()
