"""Auth namespace (JWT)."""

from __future__ import annotations

from flask import request
from flask_restx import Namespace, fields

from sergas.api.models.envelope import get_error_envelope_model, make_success_envelope_model
from sergas.api.resources.base import BaseResource
from sergas.api.resources.decorators import api_login_required, get_current_user
from sergas.constants.system_constants import SuccessMessages
from sergas.errors import AuthenticationError, AuthorizationError
from sergas.services.auth.login_service import LoginService

ns = Namespace("auth", description="认证")

ErrorEnvelope = get_error_envelope_model(ns)

LoginPayloadModel = ns.model(
    "LoginPayload",
    {
        "email": fields.String(required=True, description="登录邮箱", example="admin@sergas.ar"),
        "password": fields.String(required=True, description="密码"),
    },
)

LoginData = ns.model(
    "LoginData",
    {
        "access_token": fields.String(required=True),
        "token_type": fields.String(required=True, example="Bearer"),
        "expires_in": fields.Integer(required=True, description="有效期(秒)"),
        "user": fields.Raw(required=True),
    },
)

LoginSuccessEnvelope = make_success_envelope_model(ns, "LoginSuccessEnvelope", LoginData)
MeSuccessEnvelope = make_success_envelope_model(ns, "MeSuccessEnvelope")


@ns.route("/login")
class LoginResource(BaseResource):
    """登录资源."""

    @ns.expect(LoginPayloadModel, validate=False)
    @ns.response(200, "OK", LoginSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    @ns.response(403, "Forbidden", ErrorEnvelope)
    def post(self):
        """邮箱 + 密码登录, 返回 access token."""
        payload = request.get_json(silent=True)

        def _execute():
            result = LoginService().login_from_payload(payload)
            return self.success(data=result.to_payload(), message=SuccessMessages.LOGIN_SUCCESS)

        return self.safe_call(
            _execute,
            module="auth",
            action="login",
            public_error="Error al iniciar sesión",
            expected_exceptions=(AuthenticationError, AuthorizationError),
        )


@ns.route("/me")
class MeResource(BaseResource):
    """当前用户信息."""

    method_decorators = [api_login_required]

    @ns.response(200, "OK", MeSuccessEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    def get(self):
        user = get_current_user()
        return self.success(data={"user": user.to_dict() if user else None})
