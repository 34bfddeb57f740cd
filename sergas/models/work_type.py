"""SERGAS - 工种模型."""

from sergas import db
from sergas.utils.time_utils import time_utils


class WorkType(db.Model):
    """工种(服务类别)模型.

    `slug` 唯一,项目的 `categorias` 通过 ID 引用工种,对外展示时映射为 slug.
    """

    __tablename__ = "tipos_trabajo"

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    descripcion = db.Column(db.Text, nullable=True)
    icono = db.Column(db.String(100), nullable=True)
    imagen = db.Column(db.String(500), nullable=True)
    activo = db.Column(db.Boolean, default=True, nullable=False)
    orden = db.Column(db.Integer, default=0, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nombre": self.nombre,
            "slug": self.slug,
            "descripcion": self.descripcion,
            "icono": self.icono,
            "imagen": self.imagen,
            "activo": bool(self.activo),
            "orden": self.orden,
        }

    def __repr__(self) -> str:
        return f"<WorkType {self.slug}>"
