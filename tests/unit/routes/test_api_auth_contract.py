import pytest

from sergas.constants import HttpHeaders

ADMIN_EMAIL = "admin@sergas.test"
ADMIN_PASSWORD = "AdminPass1"


@pytest.mark.unit
def test_api_auth_login_and_me_contract(client, admin) -> None:
    admin_id, _ = admin

    login_response = client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD},
    )
    assert login_response.status_code == 200
    login_payload = login_response.get_json()
    assert isinstance(login_payload, dict)
    assert login_payload.get("success") is True
    assert login_payload.get("error") is False

    login_data = login_payload.get("data")
    assert isinstance(login_data, dict)
    access_token = login_data.get("access_token")
    assert isinstance(access_token, str)
    assert login_data.get("token_type") == "Bearer"
    assert login_data.get("expires_in") > 0

    user_data = login_data.get("user")
    assert user_data.get("id") == admin_id
    assert user_data.get("email") == ADMIN_EMAIL
    assert user_data.get("last_login") is not None
    assert "password" not in user_data

    me_response = client.get(
        "/api/auth/me",
        headers={HttpHeaders.AUTHORIZATION: f"Bearer {access_token}"},
    )
    assert me_response.status_code == 200
    me_payload = me_response.get_json()
    assert me_payload.get("success") is True
    assert me_payload["data"]["user"]["id"] == admin_id


@pytest.mark.unit
def test_api_auth_login_rejects_wrong_password(client, admin) -> None:
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "incorrecta"})

    assert response.status_code == 401
    payload = response.get_json()
    assert payload.get("success") is False
    assert payload.get("error") is True
    assert payload.get("message_code") == "INVALID_CREDENTIALS"


@pytest.mark.unit
def test_api_auth_login_rejects_disabled_account(client, create_user) -> None:
    create_user(email="baja@sergas.test", password="EditorPass1", activo=False)

    response = client.post("/api/auth/login", json={"email": "baja@sergas.test", "password": "EditorPass1"})

    assert response.status_code == 403
    assert response.get_json().get("message_code") == "ACCOUNT_DISABLED"


@pytest.mark.unit
@pytest.mark.parametrize("body", [{}, {"email": "admin@sergas.test"}, {"email": "", "password": "x"}])
def test_api_auth_login_validates_payload(client, body) -> None:
    response = client.post("/api/auth/login", json=body)

    assert response.status_code == 400
    assert response.get_json().get("success") is False


@pytest.mark.unit
@pytest.mark.parametrize(
    "headers",
    [
        {},
        {HttpHeaders.AUTHORIZATION: "Bearer not-a-jwt"},
        {HttpHeaders.AUTHORIZATION: "Token abc"},
    ],
)
def test_api_auth_me_requires_valid_token(client, headers) -> None:
    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 401
    payload = response.get_json()
    assert payload.get("message_code") == "AUTHENTICATION_REQUIRED"
