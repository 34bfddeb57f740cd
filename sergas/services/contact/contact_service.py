"""联系留言 Service."""

from __future__ import annotations

from typing import Any

from sergas.errors import NotFoundError
from sergas.models.contact_message import ContactMessage
from sergas.repositories.contact_messages_repository import ContactMessagesRepository
from sergas.schemas.contact import ContactMessagePayload
from sergas.schemas.validation import validate_or_raise
from sergas.utils.structlog_config import log_info


class ContactService:
    """联系留言服务."""

    def __init__(self, repository: ContactMessagesRepository | None = None) -> None:
        self._repository = repository or ContactMessagesRepository()

    def submit(self, payload: object) -> ContactMessage:
        """保存官网提交的联系表单."""
        parsed = validate_or_raise(ContactMessagePayload, payload or {})
        message = ContactMessage(**parsed.model_dump())
        self._repository.add(message)
        log_info("收到联系留言", module="contacto", message_id=message.id, email=message.email)
        return message

    def list_messages(self) -> list[dict[str, Any]]:
        return [message.to_dict() for message in self._repository.list_newest_first()]

    def mark_read(self, message_id: int) -> ContactMessage:
        message = self._get_or_raise(message_id)
        message.leido = True
        self._repository.add(message)
        return message

    def delete(self, message_id: int, *, operator_id: int | None = None) -> None:
        message = self._get_or_raise(message_id)
        self._repository.delete(message)
        log_info("联系留言已删除", module="contacto", user_id=operator_id, message_id=message_id)

    def _get_or_raise(self, message_id: int) -> ContactMessage:
        message = self._repository.get_by_id(message_id)
        if message is None:
            raise NotFoundError(extra={"message_id": message_id})
        return message
