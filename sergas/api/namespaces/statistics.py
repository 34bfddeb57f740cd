"""Statistics namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from sergas.api.namespaces.orderable import register_orderable_resources
from sergas.services.catalog.catalog_services import StatisticService

ns = Namespace("estadisticas", description="首页统计数字")

StatisticWritePayload = ns.model(
    "StatisticWritePayload",
    {
        "etiqueta": fields.String(required=True, example="Proyectos"),
        "valor": fields.String(required=True, example="150"),
        "sufijo": fields.String(required=False, example="+"),
        "icono": fields.String(required=False),
        "orden": fields.Integer(required=False),
    },
)

register_orderable_resources(
    ns,
    collection="estadisticas",
    permission="estadisticas",
    service_factory=StatisticService,
    write_model=StatisticWritePayload,
    label="estadísticas",
)
