"""Uploads namespace."""

from __future__ import annotations

from flask import current_app, request
from flask_restx import Namespace, fields
from werkzeug.datastructures import FileStorage

from sergas import UPLOAD_SERVICE_EXTENSION
from sergas.api.models.envelope import get_error_envelope_model, make_success_envelope_model
from sergas.api.resources.base import BaseResource
from sergas.api.resources.decorators import api_login_required
from sergas.constants.system_constants import SuccessMessages
from sergas.services.uploads.upload_service import UploadService

ns = Namespace("upload", description="文件上传")

ErrorEnvelope = get_error_envelope_model(ns)

UploadData = ns.model(
    "UploadData",
    {
        "url": fields.String(required=True, description="公开访问 URL"),
        "filename": fields.String(required=True, description="远端文件名", example="1718000000000_plano.pdf"),
        "size": fields.Integer(required=True, description="字节数"),
    },
)

UploadSuccessEnvelope = make_success_envelope_model(ns, "UploadSuccessEnvelope", UploadData)

upload_parser = ns.parser()
upload_parser.add_argument("file", location="files", type=FileStorage, required=True)


def _get_upload_service() -> UploadService:
    return current_app.extensions[UPLOAD_SERVICE_EXTENSION]


@ns.route("")
class UploadResource(BaseResource):
    """上传单个文件到配置的存储后端(FTP 或 S3)."""

    method_decorators = [api_login_required]

    @ns.expect(upload_parser)
    @ns.response(200, "OK", UploadSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    @ns.response(502, "Bad Gateway", ErrorEnvelope)
    def post(self):
        file = request.files.get("file")

        def _execute():
            result = _get_upload_service().upload(file)
            return self.success(data=result.to_payload(), message=SuccessMessages.FILE_UPLOADED)

        return self.safe_call(
            _execute,
            module="uploads",
            action="upload_file",
            public_error="Error al subir el archivo",
            context={"filename": file.filename if file else None},
        )
