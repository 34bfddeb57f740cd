"""SERGAS JSON API (Flask-RESTX) 入口.

- `/api/**` 为唯一对外 API 前缀
- 提供 Swagger UI(可配置关闭)与 OpenAPI JSON 导出能力
"""

from __future__ import annotations

from typing import cast

from flask import Blueprint, Flask, Response, jsonify

from sergas.api.api import SergasApi
from sergas.api.namespaces.auth import ns as auth_ns
from sergas.api.namespaces.company import ns as company_ns
from sergas.api.namespaces.contact import ns as contact_ns
from sergas.api.namespaces.health import ns as health_ns
from sergas.api.namespaces.knowledge import ns as knowledge_ns
from sergas.api.namespaces.projects import ns as projects_ns
from sergas.api.namespaces.statistics import ns as statistics_ns
from sergas.api.namespaces.uploads import ns as uploads_ns
from sergas.api.namespaces.users import ns as users_ns
from sergas.api.namespaces.work_types import ns as work_types_ns
from sergas.settings import Settings


def create_api_blueprint(settings: Settings) -> Blueprint:
    """创建并配置 `/api` Blueprint.

    - Swagger UI: `/api/docs`(可配置关闭)
    - OpenAPI JSON: `/api/openapi.json`
    """
    blueprint = Blueprint("api", __name__)

    docs_path = "/docs" if settings.api_docs_enabled else cast(str, False)
    api = SergasApi(
        blueprint,
        title=settings.app_name,
        version=settings.app_version,
        doc=docs_path,
    )

    api.add_namespace(auth_ns, path="/auth")
    api.add_namespace(health_ns, path="/health")
    api.add_namespace(projects_ns, path="/proyectos")
    api.add_namespace(work_types_ns, path="/tipos-trabajo")
    api.add_namespace(statistics_ns, path="/estadisticas")
    api.add_namespace(knowledge_ns, path="/knowledge")
    api.add_namespace(company_ns, path="/company")
    api.add_namespace(contact_ns, path="/contacto")
    api.add_namespace(users_ns, path="/users")
    api.add_namespace(uploads_ns, path="/upload")

    @blueprint.get("/openapi.json")
    def openapi_json() -> tuple[Response, int]:
        return jsonify(api.__schema__), 200

    return blueprint


def register_api_blueprints(app: Flask, settings: Settings) -> None:
    """按 Settings 注册 API blueprint."""
    app.register_blueprint(create_api_blueprint(settings), url_prefix="/api")
