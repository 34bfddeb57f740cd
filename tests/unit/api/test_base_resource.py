import pytest
from flask import Flask, Response

from sergas.api.api import SergasApi
from sergas.api.resources.base import BaseResource
from sergas.utils.response_utils import jsonify_unified_success


@pytest.fixture
def bare_app() -> Flask:
    app = Flask(__name__)
    api = SergasApi(app, doc=False)

    @api.route("/items")
    class ItemsResource(BaseResource):
        def get(self):
            return self.success(data={"items": [1, 2]})

        def post(self):
            return self.success(data={"id": 5}, message="Creado", status=201)

    return app


@pytest.mark.unit
def test_jsonify_unified_success_returns_response_with_status() -> None:
    app = Flask(__name__)

    with app.app_context():
        response = jsonify_unified_success(data={"id": 1}, status=201)

    assert isinstance(response, Response)
    assert response.status_code == 201
    assert response.get_json()["data"] == {"id": 1}


@pytest.mark.unit
def test_base_resource_success_passes_through_restx_output(bare_app) -> None:
    client = bare_app.test_client()

    listed = client.get("/items")
    assert listed.status_code == 200
    assert listed.get_json()["success"] is True
    assert listed.get_json()["data"] == {"items": [1, 2]}

    created = client.post("/items")
    assert created.status_code == 201
    assert created.get_json()["message"] == "Creado"
    assert created.get_json()["data"] == {"id": 5}
