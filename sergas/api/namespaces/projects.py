"""Projects namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from sergas.api.namespaces.orderable import register_orderable_resources
from sergas.services.projects.project_service import ProjectService

ns = Namespace("proyectos", description="项目作品")

ProjectWritePayload = ns.model(
    "ProjectWritePayload",
    {
        "titulo": fields.String(required=True, description="标题", example="Planta industrial"),
        "descripcion": fields.String(required=False, description="描述"),
        "cliente": fields.String(required=False, description="客户"),
        "ubicacion": fields.String(required=False, description="所在地"),
        "anio": fields.Integer(required=False, description="年份", example=2024),
        "imagen": fields.String(required=False, description="封面图 URL"),
        "categorias": fields.List(fields.Integer, required=False, description="工种 ID 列表", example=[1, 2]),
        "tags": fields.List(fields.String, required=False, description="标签"),
        "galeria": fields.List(fields.String, required=False, description="图集 URL"),
        "documentos": fields.List(fields.String, required=False, description="附件 URL"),
        "destacado": fields.Boolean(required=False, description="首页推荐"),
        "orden": fields.Integer(required=False, description="排序位置(缺省排在末尾)"),
    },
)

register_orderable_resources(
    ns,
    collection="proyectos",
    permission="proyectos",
    service_factory=ProjectService,
    write_model=ProjectWritePayload,
    label="proyectos",
)
