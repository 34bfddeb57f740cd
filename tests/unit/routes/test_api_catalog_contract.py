import pytest


@pytest.mark.unit
def test_api_work_types_slug_contract(client, admin_headers) -> None:
    created = client.post(
        "/api/tipos-trabajo",
        json={"nombre": "Climatización Industrial", "icono": "fa-fan"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    item = created.get_json()["data"]["item"]
    assert item["slug"] == "climatizacion-industrial"
    assert item["activo"] is True

    duplicate = client.post(
        "/api/tipos-trabajo",
        json={"nombre": "Otro", "slug": "Climatización Industrial"},
        headers=admin_headers,
    )
    assert duplicate.status_code == 409
    assert duplicate.get_json()["success"] is False

    no_slug = client.post("/api/tipos-trabajo", json={"nombre": "¿¿??"}, headers=admin_headers)
    assert no_slug.status_code == 400

    renamed = client.put(
        f"/api/tipos-trabajo/{item['id']}",
        json={"nombre": "Climatización", "slug": "climatizacion", "activo": "0"},
        headers=admin_headers,
    )
    assert renamed.status_code == 200
    renamed_item = renamed.get_json()["data"]["item"]
    assert renamed_item["slug"] == "climatizacion"
    assert renamed_item["activo"] is False


@pytest.mark.unit
def test_api_work_types_deleted_category_drops_from_project_slugs(client, admin_headers) -> None:
    gas = client.post("/api/tipos-trabajo", json={"nombre": "Gas"}, headers=admin_headers).get_json()["data"]["item"]
    agua = client.post("/api/tipos-trabajo", json={"nombre": "Agua"}, headers=admin_headers).get_json()["data"]["item"]
    project = client.post(
        "/api/proyectos",
        json={"titulo": "Obra mixta", "categorias": [gas["id"], agua["id"]]},
        headers=admin_headers,
    ).get_json()["data"]["item"]
    assert project["categoria_slugs"] == ["gas", "agua"]

    assert client.delete(f"/api/tipos-trabajo/{gas['id']}", headers=admin_headers).status_code == 200

    detail = client.get(f"/api/proyectos/{project['id']}").get_json()["data"]["item"]
    assert detail["categorias"] == [gas["id"], agua["id"]]
    assert detail["categoria_slugs"] == ["agua"]


@pytest.mark.unit
def test_api_statistics_contract(client, admin_headers) -> None:
    first = client.post(
        "/api/estadisticas",
        json={"etiqueta": "Obras realizadas", "valor": 350, "sufijo": "+"},
        headers=admin_headers,
    )
    assert first.status_code == 201
    first_item = first.get_json()["data"]["item"]
    assert first_item["valor"] == "350"

    second = client.post(
        "/api/estadisticas",
        json={"etiqueta": "Años de experiencia", "valor": "25"},
        headers=admin_headers,
    ).get_json()["data"]["item"]

    reorder = client.put(
        "/api/estadisticas/orden",
        json={"ids": [second["id"], first_item["id"]]},
        headers=admin_headers,
    )
    assert reorder.status_code == 200
    assert reorder.get_json()["data"]["collection"] == "estadisticas"

    items = client.get("/api/estadisticas").get_json()["data"]["items"]
    assert [item["id"] for item in items] == [second["id"], first_item["id"]]

    missing_valor = client.post("/api/estadisticas", json={"etiqueta": "X"}, headers=admin_headers)
    assert missing_valor.status_code == 400


@pytest.mark.unit
def test_api_knowledge_contract(client, admin_headers, create_user) -> None:
    created = client.post(
        "/api/knowledge",
        json={
            "pregunta": "¿Hacen instalaciones de gas?",
            "respuesta": "Sí, somos gasistas matriculados.",
            "palabras_clave": "gas",
        },
        headers=admin_headers,
    )
    assert created.status_code == 201
    item = created.get_json()["data"]["item"]
    assert item["palabras_clave"] == ["gas"]

    other = client.post(
        "/api/knowledge",
        json={"pregunta": "¿Horario?", "respuesta": "Lunes a viernes.", "palabras_clave": ["horario", "atención"]},
        headers=admin_headers,
    ).get_json()["data"]["item"]

    reorder = client.put(
        "/api/knowledge/orden",
        json={"ids": [other["id"], item["id"]]},
        headers=admin_headers,
    )
    assert reorder.status_code == 200
    assert reorder.get_json()["data"]["collection"] == "assistant_knowledge"

    items = client.get("/api/knowledge").get_json()["data"]["items"]
    assert [entry["id"] for entry in items] == [other["id"], item["id"]]
    assert items[0]["palabras_clave"] == ["horario", "atención"]

    _, editor = create_user(email="web@sergas.test", permisos={"proyectos": True})
    forbidden = client.put("/api/knowledge/orden", json={"ids": [item["id"]]}, headers=editor)
    assert forbidden.status_code == 403
