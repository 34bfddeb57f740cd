"""联系留言 Repository."""

from __future__ import annotations

from typing import cast

from sergas import db
from sergas.models.contact_message import ContactMessage


class ContactMessagesRepository:
    """联系留言 Repository."""

    def list_newest_first(self) -> list[ContactMessage]:
        return list(ContactMessage.query.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc()).all())

    def get_by_id(self, message_id: int) -> ContactMessage | None:
        return cast("ContactMessage | None", db.session.get(ContactMessage, message_id))

    def add(self, message: ContactMessage) -> ContactMessage:
        db.session.add(message)
        db.session.flush()
        return message

    def delete(self, message: ContactMessage) -> None:
        db.session.delete(message)
        db.session.flush()
