"""可排序集合的通用路由(列表/详情/增删改/排序).

项目、工种、统计数字、知识库四个 namespace 共用同一套资源形状:
- GET 列表与详情公开
- 写操作要求对应栏目权限
- `PUT /orden` 调用排序服务
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from flask import current_app, request
from flask_restx import Namespace, fields

from sergas.api.models.envelope import (
    get_error_envelope_model,
    make_reorder_payload_model,
    make_success_envelope_model,
)
from sergas.api.resources.base import BaseResource
from sergas.api.resources.decorators import api_permission_required, get_current_user_id
from sergas.api.resources.reorder import apply_reorder
from sergas.constants import HttpStatus
from sergas.constants.system_constants import SuccessMessages

if TYPE_CHECKING:
    from sergas.services.catalog.orderable_write_service import OrderableWriteService


def register_orderable_resources(
    ns: Namespace,
    *,
    collection: str,
    permission: str,
    service_factory: Callable[[], OrderableWriteService],
    write_model,
    label: str,
) -> None:
    """在 namespace 上注册标准资源.

    Args:
        ns: 目标 namespace.
        collection: 排序服务中的集合名(即表名).
        permission: 写操作要求的栏目权限键.
        service_factory: 每次请求构造写服务.
        write_model: 写请求体的 OpenAPI Model.
        label: 日志/错误文案中使用的资源名称.

    """
    error_envelope = get_error_envelope_model(ns)
    list_data = ns.model(
        f"{ns.name}ListData",
        {
            "items": fields.List(fields.Raw, description="列表"),
            "total": fields.Integer(description="总数"),
        },
    )
    list_envelope = make_success_envelope_model(ns, f"{ns.name}ListSuccessEnvelope", list_data)
    item_data = ns.model(f"{ns.name}ItemData", {"item": fields.Raw(description="详情")})
    item_envelope = make_success_envelope_model(ns, f"{ns.name}ItemSuccessEnvelope", item_data)
    reorder_payload = make_reorder_payload_model(ns)
    module = ns.name

    @ns.route("")
    class CollectionResource(BaseResource):
        @ns.response(200, "OK", list_envelope)
        @ns.response(500, "Internal Server Error", error_envelope)
        def get(self):
            def _execute():
                items = service_factory().list_items()
                return self.success(data={"items": items, "total": len(items)})

            return self.safe_call(
                _execute,
                module=module,
                action=f"list_{module}",
                public_error=f"Error al obtener {label}",
            )

        @ns.expect(write_model, validate=False)
        @ns.response(201, "Created", item_envelope)
        @ns.response(400, "Bad Request", error_envelope)
        @ns.response(401, "Unauthorized", error_envelope)
        @ns.response(403, "Forbidden", error_envelope)
        @api_permission_required(permission)
        def post(self):
            payload = request.get_json(silent=True)
            operator_id = get_current_user_id()
            base_offset = int(current_app.config.get("REORDER_BASE_OFFSET", 0))

            def _execute():
                service = service_factory()
                entity = service.create(payload, base_offset=base_offset, operator_id=operator_id)
                return self.success(
                    data={"item": service.serialize(entity)},
                    message=SuccessMessages.DATA_SAVED,
                    status=HttpStatus.CREATED,
                )

            return self.safe_call(
                _execute,
                module=module,
                action=f"create_{module}",
                public_error=f"Error al crear {label}",
            )

    @ns.route("/orden")
    class ReorderResource(BaseResource):
        @ns.expect(reorder_payload, validate=False)
        @ns.response(200, "OK", make_success_envelope_model(ns, f"{ns.name}ReorderSuccessEnvelope"))
        @ns.response(400, "Bad Request", error_envelope)
        @ns.response(401, "Unauthorized", error_envelope)
        @ns.response(403, "Forbidden", error_envelope)
        @ns.response(500, "Internal Server Error", error_envelope)
        @api_permission_required(permission)
        def put(self):
            payload = request.get_json(silent=True)

            def _execute():
                result = apply_reorder(collection, payload)
                return self.success(data=result, message=SuccessMessages.ORDER_SAVED)

            return self.safe_call(
                _execute,
                module=module,
                action=f"reorder_{module}",
                public_error=f"Error al ordenar {label}",
                context={"collection": collection},
            )

    @ns.route("/<int:entity_id>")
    class ItemResource(BaseResource):
        @ns.response(200, "OK", item_envelope)
        @ns.response(404, "Not Found", error_envelope)
        def get(self, entity_id: int):
            def _execute():
                return self.success(data={"item": service_factory().get_item(entity_id)})

            return self.safe_call(
                _execute,
                module=module,
                action=f"get_{module}",
                public_error=f"Error al obtener {label}",
                context={"entity_id": entity_id},
            )

        @ns.expect(write_model, validate=False)
        @ns.response(200, "OK", item_envelope)
        @ns.response(400, "Bad Request", error_envelope)
        @ns.response(401, "Unauthorized", error_envelope)
        @ns.response(403, "Forbidden", error_envelope)
        @ns.response(404, "Not Found", error_envelope)
        @api_permission_required(permission)
        def put(self, entity_id: int):
            payload = request.get_json(silent=True)
            operator_id = get_current_user_id()

            def _execute():
                service = service_factory()
                entity = service.update(entity_id, payload, operator_id=operator_id)
                return self.success(data={"item": service.serialize(entity)}, message=SuccessMessages.DATA_UPDATED)

            return self.safe_call(
                _execute,
                module=module,
                action=f"update_{module}",
                public_error=f"Error al actualizar {label}",
                context={"entity_id": entity_id},
            )

        @ns.response(200, "OK", item_envelope)
        @ns.response(401, "Unauthorized", error_envelope)
        @ns.response(403, "Forbidden", error_envelope)
        @ns.response(404, "Not Found", error_envelope)
        @api_permission_required(permission)
        def delete(self, entity_id: int):
            operator_id = get_current_user_id()

            def _execute():
                service_factory().delete(entity_id, operator_id=operator_id)
                return self.success(data={"id": entity_id}, message=SuccessMessages.DATA_DELETED)

            return self.safe_call(
                _execute,
                module=module,
                action=f"delete_{module}",
                public_error=f"Error al eliminar {label}",
                context={"entity_id": entity_id},
            )


__all__ = ["register_orderable_resources"]
