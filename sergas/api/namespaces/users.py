"""Users namespace (仅管理员)."""

from __future__ import annotations

from flask import request
from flask_restx import Namespace, fields

from sergas.api.models.envelope import get_error_envelope_model, make_success_envelope_model
from sergas.api.resources.base import BaseResource
from sergas.api.resources.decorators import api_admin_required, get_current_user_id
from sergas.constants import HttpStatus
from sergas.constants.system_constants import SuccessMessages
from sergas.services.users.user_service import UserService

ns = Namespace("users", description="用户管理")

ErrorEnvelope = get_error_envelope_model(ns)

UserWritePayload = ns.model(
    "UserWritePayload",
    {
        "email": fields.String(required=True, example="editor@sergas.ar"),
        "nombre": fields.String(required=True),
        "password": fields.String(required=False, description="至少 8 位; 更新时留空表示不修改"),
        "rol": fields.String(required=False, enum=["admin", "editor"], example="editor"),
        "permisos": fields.Raw(required=False, example={"proyectos": True, "contacto": False}),
        "activo": fields.Boolean(required=False),
    },
)

UserSuccessEnvelope = make_success_envelope_model(ns, "UserSuccessEnvelope")


@ns.route("")
class UsersResource(BaseResource):
    """用户列表与创建."""

    method_decorators = [api_admin_required]

    @ns.response(200, "OK", UserSuccessEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    @ns.response(403, "Forbidden", ErrorEnvelope)
    def get(self):
        def _execute():
            items = UserService().list_users()
            return self.success(data={"items": items, "total": len(items)})

        return self.safe_call(
            _execute,
            module="users",
            action="list_users",
            public_error="Error al obtener los usuarios",
        )

    @ns.expect(UserWritePayload, validate=False)
    @ns.response(201, "Created", UserSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def post(self):
        payload = request.get_json(silent=True)

        def _execute():
            user = UserService().create(payload)
            return self.success(
                data={"user": user.to_dict()},
                message=SuccessMessages.DATA_SAVED,
                status=HttpStatus.CREATED,
            )

        return self.safe_call(
            _execute,
            module="users",
            action="create_user",
            public_error="Error al crear el usuario",
        )


@ns.route("/<int:user_id>")
class UserDetailResource(BaseResource):
    """用户更新与删除."""

    method_decorators = [api_admin_required]

    @ns.expect(UserWritePayload, validate=False)
    @ns.response(200, "OK", UserSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def put(self, user_id: int):
        payload = request.get_json(silent=True)

        def _execute():
            user = UserService().update(user_id, payload)
            return self.success(data={"user": user.to_dict()}, message=SuccessMessages.DATA_UPDATED)

        return self.safe_call(
            _execute,
            module="users",
            action="update_user",
            public_error="Error al actualizar el usuario",
            context={"target_user_id": user_id},
        )

    @ns.response(200, "OK", UserSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def delete(self, user_id: int):
        operator_id = get_current_user_id()

        def _execute():
            UserService().delete(user_id, operator_id=operator_id)
            return self.success(data={"id": user_id}, message=SuccessMessages.DATA_DELETED)

        return self.safe_call(
            _execute,
            module="users",
            action="delete_user",
            public_error="Error al eliminar el usuario",
            context={"target_user_id": user_id},
        )
