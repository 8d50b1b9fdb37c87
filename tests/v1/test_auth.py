"""Tests for registration, login and the current-user endpoint."""

from fastapi import status


def _register(client, **overrides):
    payload = {"username": "newcomer", "email": "newcomer@example.com", "password": "secret123"}
    payload.update(overrides)
    return client.post("/api/v1/auth/register", json=payload)


def test_register_returns_camel_case_user_and_token(client) -> None:
    response = _register(client)

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["token"]
    assert body["user"]["username"] == "newcomer"
    assert {"id", "email", "createdAt", "updatedAt"} <= body["user"].keys()
    assert "passwordHash" not in body["user"]


def test_register_then_login_then_me(client) -> None:
    _register(client)

    login = client.post(
        "/api/v1/auth/login",
        json={"email": "newcomer@example.com", "password": "secret123"},
    )
    assert login.status_code == status.HTTP_200_OK

    token = login.json()["token"]
    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["user"]["username"] == "newcomer"


def test_register_duplicate_email(client, author) -> None:
    response = _register(client, email=author.email)

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"]["code"] == "USER_EXISTS"


def test_register_invalid_fields(client) -> None:
    response = _register(client, username="x", email="nope", password="short")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert {detail["field"] for detail in error["details"]} == {"username", "email", "password"}


def test_register_missing_body_field(client) -> None:
    response = client.post("/api/v1/auth/register", json={"username": "newcomer"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


def test_login_wrong_password(client, author) -> None:
    response = client.post(
        "/api/v1/auth/login", json={"email": author.email, "password": "not-the-password1"}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"] == {
        "code": "AUTH_INVALID_CREDENTIALS",
        "message": "Invalid email or password",
    }


def test_me_without_token(client) -> None:
    response = client.get("/api/v1/auth/me")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["code"] == "AUTH_TOKEN_MISSING"


def test_me_with_malformed_header(client) -> None:
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Token abc"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["code"] == "AUTH_TOKEN_INVALID"


def test_me_with_garbage_token(client) -> None:
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["code"] == "AUTH_TOKEN_INVALID"


def test_register_rejects_password_over_72_bytes(client) -> None:
    response = _register(client, password="a1" * 40)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert error["details"] == [
        {"field": "password", "message": "Password cannot be longer than 72 bytes"}
    ]


def test_login_with_overlong_password_is_plain_failure(client, author) -> None:
    response = client.post(
        "/api/v1/auth/login", json={"email": author.email, "password": "a1" * 40}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["code"] == "AUTH_INVALID_CREDENTIALS"
