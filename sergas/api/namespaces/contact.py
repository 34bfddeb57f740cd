"""Contact messages namespace."""

from __future__ import annotations

from flask import request
from flask_restx import Namespace, fields

from sergas.api.models.envelope import get_error_envelope_model, make_success_envelope_model
from sergas.api.resources.base import BaseResource
from sergas.api.resources.decorators import api_permission_required, get_current_user_id
from sergas.constants import HttpStatus
from sergas.constants.system_constants import SuccessMessages
from sergas.services.contact.contact_service import ContactService

ns = Namespace("contacto", description="联系留言")

ErrorEnvelope = get_error_envelope_model(ns)

ContactPayloadModel = ns.model(
    "ContactPayload",
    {
        "nombre": fields.String(required=True),
        "email": fields.String(required=True),
        "mensaje": fields.String(required=True),
        "telefono": fields.String(required=False),
        "empresa": fields.String(required=False),
    },
)

ContactSuccessEnvelope = make_success_envelope_model(ns, "ContactSuccessEnvelope")


@ns.route("")
class ContactMessagesResource(BaseResource):
    """留言列表与提交."""

    @ns.expect(ContactPayloadModel, validate=False)
    @ns.response(201, "Created", ContactSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    def post(self):
        """官网联系表单(公开)."""
        payload = request.get_json(silent=True)

        def _execute():
            message = ContactService().submit(payload)
            return self.success(
                data={"id": message.id},
                message=SuccessMessages.MESSAGE_RECEIVED,
                status=HttpStatus.CREATED,
            )

        return self.safe_call(
            _execute,
            module="contacto",
            action="submit_contact_message",
            public_error="Error al enviar el mensaje",
        )

    @ns.response(200, "OK", ContactSuccessEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    @ns.response(403, "Forbidden", ErrorEnvelope)
    @api_permission_required("contacto")
    def get(self):
        """留言列表(最新在前)."""

        def _execute():
            items = ContactService().list_messages()
            return self.success(data={"items": items, "total": len(items)})

        return self.safe_call(
            _execute,
            module="contacto",
            action="list_contact_messages",
            public_error="Error al obtener los mensajes",
        )


@ns.route("/<int:message_id>/leido")
class ContactMessageReadResource(BaseResource):
    """标记已读."""

    @ns.response(200, "OK", ContactSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @api_permission_required("contacto")
    def put(self, message_id: int):
        def _execute():
            message = ContactService().mark_read(message_id)
            return self.success(data={"item": message.to_dict()}, message=SuccessMessages.DATA_UPDATED)

        return self.safe_call(
            _execute,
            module="contacto",
            action="mark_contact_message_read",
            public_error="Error al actualizar el mensaje",
            context={"message_id": message_id},
        )


@ns.route("/<int:message_id>")
class ContactMessageResource(BaseResource):
    """删除留言."""

    @ns.response(200, "OK", ContactSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @api_permission_required("contacto")
    def delete(self, message_id: int):
        operator_id = get_current_user_id()

        def _execute():
            ContactService().delete(message_id, operator_id=operator_id)
            return self.success(data={"id": message_id}, message=SuccessMessages.DATA_DELETED)

        return self.safe_call(
            _execute,
            module="contacto",
            action="delete_contact_message",
            public_error="Error al eliminar el mensaje",
            context={"message_id": message_id},
        )
