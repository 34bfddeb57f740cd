"""Company data namespace (单行 upsert)."""

from __future__ import annotations

from flask import request
from flask_restx import Namespace, fields

from sergas.api.models.envelope import get_error_envelope_model, make_success_envelope_model
from sergas.api.resources.base import BaseResource
from sergas.api.resources.decorators import api_permission_required, get_current_user_id
from sergas.constants.system_constants import SuccessMessages
from sergas.services.company.company_service import CompanyService

ns = Namespace("company", description="公司信息")

ErrorEnvelope = get_error_envelope_model(ns)

CompanyWritePayload = ns.model(
    "CompanyWritePayload",
    {
        "nombre": fields.String(required=False, example="SERGAS"),
        "razon_social": fields.String(required=False),
        "cuit": fields.String(required=False),
        "direccion": fields.String(required=False),
        "telefono": fields.String(required=False),
        "whatsapp": fields.String(required=False),
        "email": fields.String(required=False),
        "horario": fields.String(required=False),
        "descripcion": fields.String(required=False),
        "mision": fields.String(required=False),
        "vision": fields.String(required=False),
        "logo": fields.String(required=False),
        "mapa_url": fields.String(required=False),
        "redes": fields.Raw(required=False, description="社交网络链接", example={"instagram": "https://..."}),
    },
)

CompanySuccessEnvelope = make_success_envelope_model(ns, "CompanySuccessEnvelope")


@ns.route("")
class CompanyResource(BaseResource):
    """公司信息资源."""

    @ns.response(200, "OK", CompanySuccessEnvelope)
    def get(self):
        """获取公司信息(未初始化时 data.company 为 null)."""

        def _execute():
            return self.success(data={"company": CompanyService().get_current()})

        return self.safe_call(
            _execute,
            module="company",
            action="get_company",
            public_error="Error al obtener los datos de la empresa",
        )

    @ns.expect(CompanyWritePayload, validate=False)
    @ns.response(200, "OK", CompanySuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    @ns.response(403, "Forbidden", ErrorEnvelope)
    @api_permission_required("company")
    def put(self):
        """更新公司信息, 表为空时插入."""
        return self._upsert()

    @ns.expect(CompanyWritePayload, validate=False)
    @ns.response(200, "OK", CompanySuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    @ns.response(403, "Forbidden", ErrorEnvelope)
    @api_permission_required("company")
    def post(self):
        """与 PUT 相同(兼容旧前端)."""
        return self._upsert()

    def _upsert(self):
        payload = request.get_json(silent=True)
        operator_id = get_current_user_id()

        def _execute():
            company = CompanyService().upsert(payload, operator_id=operator_id)
            return self.success(data={"company": company.to_dict()}, message=SuccessMessages.DATA_SAVED)

        return self.safe_call(
            _execute,
            module="company",
            action="upsert_company",
            public_error="Error al guardar los datos de la empresa",
        )
