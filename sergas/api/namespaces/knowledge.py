"""Assistant knowledge namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from sergas.api.namespaces.orderable import register_orderable_resources
from sergas.services.catalog.catalog_services import KnowledgeService

ns = Namespace("knowledge", description="智能助手知识库")

KnowledgeWritePayload = ns.model(
    "KnowledgeWritePayload",
    {
        "pregunta": fields.String(required=True),
        "respuesta": fields.String(required=True),
        "categoria": fields.String(required=False),
        "palabras_clave": fields.List(fields.String, required=False),
        "activo": fields.Boolean(required=False),
        "orden": fields.Integer(required=False),
    },
)

register_orderable_resources(
    ns,
    collection="assistant_knowledge",
    permission="knowledge",
    service_factory=KnowledgeService,
    write_model=KnowledgeWritePayload,
    label="conocimiento",
)
