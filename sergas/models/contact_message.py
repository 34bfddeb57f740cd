"""SERGAS - 联系表单留言模型."""

from sergas import db
from sergas.utils.time_utils import time_utils


class ContactMessage(db.Model):
    """官网联系表单提交的留言."""

    __tablename__ = "mensajes_contacto"

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    telefono = db.Column(db.String(100), nullable=True)
    empresa = db.Column(db.String(255), nullable=True)
    mensaje = db.Column(db.Text, nullable=False)
    leido = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nombre": self.nombre,
            "email": self.email,
            "telefono": self.telefono,
            "empresa": self.empresa,
            "mensaje": self.mensaje,
            "leido": bool(self.leido),
            "created_at": time_utils.to_iso(self.created_at),
        }
