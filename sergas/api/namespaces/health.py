"""Health namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from sergas.api.models.envelope import make_success_envelope_model
from sergas.api.resources.base import BaseResource

ns = Namespace("health", description="健康检查")

PingData = ns.model(
    "HealthPingData",
    {
        "status": fields.String(required=True, description="服务状态", example="ok"),
    },
)

PingSuccessEnvelope = make_success_envelope_model(ns, "HealthPingSuccessEnvelope", PingData)


@ns.route("/ping")
class HealthPingResource(BaseResource):
    """存活探针."""

    @ns.response(200, "OK", PingSuccessEnvelope)
    def get(self):
        return self.success(data={"status": "ok"})
