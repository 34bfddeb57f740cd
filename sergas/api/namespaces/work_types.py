"""Work types namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from sergas.api.namespaces.orderable import register_orderable_resources
from sergas.services.catalog.catalog_services import WorkTypeService

ns = Namespace("tipos_trabajo", description="工种")

WorkTypeWritePayload = ns.model(
    "WorkTypeWritePayload",
    {
        "nombre": fields.String(required=True, description="名称", example="Obras civiles"),
        "slug": fields.String(required=False, description="唯一 slug(缺省由名称生成)", example="obras-civiles"),
        "descripcion": fields.String(required=False),
        "icono": fields.String(required=False),
        "imagen": fields.String(required=False),
        "activo": fields.Boolean(required=False),
        "orden": fields.Integer(required=False),
    },
)

register_orderable_resources(
    ns,
    collection="tipos_trabajo",
    permission="tipos_trabajo",
    service_factory=WorkTypeService,
    write_model=WorkTypeWritePayload,
    label="tipos de trabajo",
)
