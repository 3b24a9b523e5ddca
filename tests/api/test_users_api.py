"""HTTP tests for /api/v1/users with in-memory stores."""

import logging

import pytest
from httpx import AsyncClient

from useraccounts.core.config import get_settings

ABSENT_ID = "507f1f77bcf86cd799439099"


async def test_create_user_is_public(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/users", json={"username": "alice", "password": "pw1"}
    )
    assert response.status_code == 200
    assert response.json()["message"].startswith("User has been added with id ")


async def test_create_duplicate_username_is_409(client: AsyncClient) -> None:
    body = {"username": "alice", "password": "pw1"}
    await client.post("/api/v1/users", json=body)

    response = await client.post("/api/v1/users", json=body)

    assert response.status_code == 409
    assert response.json() == {
        "message": "User is already registered with this username: alice"
    }


async def test_create_user_missing_password_is_422(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users", json={"username": "alice"})
    assert response.status_code == 422
    assert response.json()["message"] == "Request validation failed"


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("GET", "/api/v1/users"),
        ("GET", f"/api/v1/users/{ABSENT_ID}"),
        ("PUT", "/api/v1/users"),
        ("DELETE", f"/api/v1/users/{ABSENT_ID}"),
    ],
)
async def test_protected_routes_require_token(client: AsyncClient, method: str, path: str) -> None:
    kwargs = {"json": {"id": ABSENT_ID, "username": "x", "password": "y"}} if method == "PUT" else {}
    response = await client.request(method, path, **kwargs)
    assert response.status_code == 401
    assert response.json() == {"message": "Not authenticated"}


async def test_invalid_token_is_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/users", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401


async def test_list_users_hides_passwords(client: AsyncClient, register_and_login) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")
    await register_and_login("bob", "pw2")

    response = await client.get("/api/v1/users", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert {u["username"] for u in data} == {"alice", "bob"}
    assert all(set(u) == {"id", "username"} for u in data)
    assert alice_id in {u["id"] for u in data}


async def test_get_own_record(client: AsyncClient, register_and_login) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")

    response = await client.get(f"/api/v1/users/{alice_id}", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"id": alice_id, "username": "alice"}


async def test_get_absent_id_is_404(client: AsyncClient, register_and_login) -> None:
    _, headers = await register_and_login("alice", "pw1")

    response = await client.get(f"/api/v1/users/{ABSENT_ID}", headers=headers)

    assert response.status_code == 404
    assert response.json() == {"message": f"Failed to find the user with ID : {ABSENT_ID}"}


async def test_get_other_users_record_is_403(
    client: AsyncClient, register_and_login, fake_redis
) -> None:
    _, alice_headers = await register_and_login("alice", "pw1")
    bob_id, _ = await register_and_login("bob", "pw2")
    fake_redis.store.pop(f"user:id:{bob_id}")

    response = await client.get(f"/api/v1/users/{bob_id}", headers=alice_headers)

    assert response.status_code == 403
    assert response.json() == {"message": f"Permission denied for user ID : {bob_id}"}


async def test_malformed_id_is_500_by_default(client: AsyncClient, register_and_login) -> None:
    _, headers = await register_and_login("alice", "pw1")

    response = await client.get("/api/v1/users/not-an-id", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"message": "Invalid ObjectId string provided: not-an-id"}


async def test_malformed_id_is_400_with_strict_client_errors(
    client: AsyncClient, register_and_login, monkeypatch
) -> None:
    _, headers = await register_and_login("alice", "pw1")
    monkeypatch.setenv("STRICT_CLIENT_ERRORS", "true")
    get_settings.cache_clear()
    try:
        response = await client.get("/api/v1/users/not-an-id", headers=headers)
    finally:
        monkeypatch.delenv("STRICT_CLIENT_ERRORS")
        get_settings.cache_clear()

    assert response.status_code == 400


async def test_update_own_record_revokes_token(
    client: AsyncClient, register_and_login, user_repo
) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")

    response = await client.put(
        "/api/v1/users",
        json={"id": alice_id, "username": "alice2", "password": "pw2"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json() == {"id": alice_id, "username": "alice2"}
    assert user_repo.rows[alice_id].username == "alice2"

    stale = await client.get(f"/api/v1/users/{alice_id}", headers=headers)
    assert stale.status_code == 401

    login = await client.post(
        "/api/v1/auth/login", json={"username": "alice2", "password": "pw2"}
    )
    assert login.status_code == 200


async def test_update_without_id_is_bad_input(client: AsyncClient, register_and_login) -> None:
    _, headers = await register_and_login("alice", "pw1")

    response = await client.put(
        "/api/v1/users",
        json={"username": "alice2", "password": "pw2"},
        headers=headers,
    )

    assert response.status_code == 500
    assert response.json() == {"message": "Invalid user id : None"}


async def test_update_to_taken_username_is_409(client: AsyncClient, register_and_login) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")
    await register_and_login("bob", "pw2")

    response = await client.put(
        "/api/v1/users",
        json={"id": alice_id, "username": "bob", "password": "pw3"},
        headers=headers,
    )

    assert response.status_code == 409


async def test_update_other_users_record_is_403(
    client: AsyncClient, register_and_login, user_repo
) -> None:
    _, alice_headers = await register_and_login("alice", "pw1")
    bob_id, _ = await register_and_login("bob", "pw2")

    response = await client.put(
        "/api/v1/users",
        json={"id": bob_id, "username": "hacked", "password": "x"},
        headers=alice_headers,
    )

    assert response.status_code == 403
    assert user_repo.rows[bob_id].username == "bob"


async def test_delete_own_record(
    client: AsyncClient, register_and_login, user_repo, fake_redis
) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")

    response = await client.delete(f"/api/v1/users/{alice_id}", headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "message": f"User details have been deleted with user-id {alice_id}"
    }
    assert alice_id not in user_repo.rows
    assert f"user:id:{alice_id}" not in fake_redis.store

    after = await client.get(f"/api/v1/users/{alice_id}", headers=headers)
    assert after.status_code == 401


async def test_delete_other_users_record_is_403(
    client: AsyncClient, register_and_login, user_repo
) -> None:
    _, alice_headers = await register_and_login("alice", "pw1")
    bob_id, _ = await register_and_login("bob", "pw2")

    response = await client.delete(f"/api/v1/users/{bob_id}", headers=alice_headers)

    assert response.status_code == 403
    assert bob_id in user_repo.rows


async def test_store_failure_is_500_without_internals(
    client: AsyncClient, register_and_login, user_repo, fake_redis, monkeypatch, caplog
) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")
    fake_redis.store.pop(f"user:id:{alice_id}")

    async def _unreachable(username: str):
        raise ConnectionError("could not connect to 10.0.0.5:5432 user=svc password=hunter2")

    monkeypatch.setattr(user_repo, "find_by_username", _unreachable)

    with caplog.at_level(logging.ERROR):
        response = await client.get(f"/api/v1/users/{alice_id}", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
    assert "hunter2" not in response.text
    assert "10.0.0.5" not in response.text
    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert len(errors) == 1
    assert errors[0].getMessage() == "Store failure during get_by_id"


async def _second_token(client: AsyncClient, username: str, password: str) -> dict[str, str]:
    login = await client.post(
        "/api/v1/auth/login", json={"username": username, "password": password}
    )
    assert login.status_code == 200, login.text
    return {"Authorization": f"Bearer {login.json()['access_token']}"}


async def test_update_revokes_every_token_of_the_user(
    client: AsyncClient, register_and_login
) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")
    other_headers = await _second_token(client, "alice", "pw1")

    response = await client.put(
        "/api/v1/users",
        json={"id": alice_id, "username": "alice2", "password": "pw2"},
        headers=headers,
    )
    assert response.status_code == 200

    stale = await client.get(f"/api/v1/users/{alice_id}", headers=other_headers)
    assert stale.status_code == 401
    assert stale.json() == {"message": "Not authenticated"}


async def test_surviving_token_cannot_act_on_new_holder_of_old_username(
    client: AsyncClient, register_and_login, user_repo
) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")
    other_headers = await _second_token(client, "alice", "pw1")
    renamed = await client.put(
        "/api/v1/users",
        json={"id": alice_id, "username": "alice2", "password": "pw2"},
        headers=headers,
    )
    assert renamed.status_code == 200
    newcomer_id, _ = await register_and_login("alice", "pw3")

    response = await client.delete(f"/api/v1/users/{newcomer_id}", headers=other_headers)

    assert response.status_code == 401
    assert newcomer_id in user_repo.rows
    assert user_repo.rows[newcomer_id].username == "alice"


async def test_token_resolves_caller_by_record_id_after_rename(
    client: AsyncClient, register_and_login, user_repo, fake_redis
) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")
    newcomer_id, _ = await register_and_login("bob", "pw2")
    # Rename behind the service's back so no session is revoked.
    user_repo.rows[alice_id].username = "alice2"
    user_repo.rows[newcomer_id].username = "alice"
    fake_redis.store.pop(f"user:id:{alice_id}", None)

    own = await client.get(f"/api/v1/users/{alice_id}", headers=headers)
    other = await client.delete(f"/api/v1/users/{newcomer_id}", headers=headers)

    assert own.status_code == 200
    assert own.json() == {"id": alice_id, "username": "alice2"}
    assert other.status_code == 403
    assert newcomer_id in user_repo.rows


async def test_delete_revokes_every_token_of_the_user(
    client: AsyncClient, register_and_login
) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")
    other_headers = await _second_token(client, "alice", "pw1")

    response = await client.delete(f"/api/v1/users/{alice_id}", headers=headers)
    assert response.status_code == 200

    stale = await client.get("/api/v1/users", headers=other_headers)
    assert stale.status_code == 401


async def test_token_of_removed_record_is_rejected(
    client: AsyncClient, register_and_login, user_repo
) -> None:
    alice_id, headers = await register_and_login("alice", "pw1")
    user_repo.rows.pop(alice_id)

    response = await client.get("/api/v1/users", headers=headers)

    assert response.status_code == 401
