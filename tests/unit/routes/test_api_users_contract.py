import pytest


@pytest.mark.unit
def test_api_users_crud_contract(client, admin) -> None:
    admin_id, admin_headers = admin

    created = client.post(
        "/api/users",
        json={
            "email": "Editor@Sergas.test",
            "nombre": "Editora",
            "password": "EditorPass1",
            "permisos": {"proyectos": True},
        },
        headers=admin_headers,
    )
    assert created.status_code == 201
    user = created.get_json()["data"]["user"]
    assert user["email"] == "editor@sergas.test"
    assert user["rol"] == "editor"
    assert user["permisos"] == {"proyectos": True}
    assert "password" not in user

    duplicate = client.post(
        "/api/users",
        json={"email": "editor@sergas.test", "nombre": "Otra", "password": "EditorPass1"},
        headers=admin_headers,
    )
    assert duplicate.status_code == 409

    listed = client.get("/api/users", headers=admin_headers)
    assert listed.status_code == 200
    assert {item["id"] for item in listed.get_json()["data"]["items"]} == {admin_id, user["id"]}

    updated = client.put(
        f"/api/users/{user['id']}",
        json={"permisos": {"proyectos": True, "contacto": True}, "password": ""},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.get_json()["data"]["user"]["permisos"] == {"proyectos": True, "contacto": True}

    login = client.post("/api/auth/login", json={"email": "editor@sergas.test", "password": "EditorPass1"})
    assert login.status_code == 200

    self_delete = client.delete(f"/api/users/{admin_id}", headers=admin_headers)
    assert self_delete.status_code == 409

    deleted = client.delete(f"/api/users/{user['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    assert client.delete(f"/api/users/{user['id']}", headers=admin_headers).status_code == 404


@pytest.mark.unit
@pytest.mark.parametrize(
    "body",
    [
        {"email": "x@sergas.test", "nombre": "X", "password": "corta"},
        {"email": "x@sergas.test", "nombre": "X", "password": "EditorPass1", "rol": "root"},
        {"email": "no-email", "nombre": "X", "password": "EditorPass1"},
        {"nombre": "X", "password": "EditorPass1"},
    ],
)
def test_api_users_create_validates_payload(client, admin_headers, body) -> None:
    response = client.post("/api/users", json=body, headers=admin_headers)

    assert response.status_code == 400


@pytest.mark.unit
def test_api_users_requires_admin(client, create_user) -> None:
    _, editor = create_user(email="editor@sergas.test", permisos={"proyectos": True, "contacto": True})

    assert client.get("/api/users").status_code == 401
    forbidden = client.get("/api/users", headers=editor)
    assert forbidden.status_code == 403
    assert forbidden.get_json()["message_code"] == "ADMIN_PERMISSION_REQUIRED"
