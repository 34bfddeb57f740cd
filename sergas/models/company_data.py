"""SERGAS - 公司信息模型(单行表)."""

from sergas import db
from sergas.utils.json_columns import normalize_mapping_column
from sergas.utils.time_utils import time_utils


class CompanyData(db.Model):
    """公司信息,表中只维护一行; `redes` 为社交网络链接的字典型 JSON 列."""

    __tablename__ = "company_data"

    EDITABLE_FIELDS = (
        "nombre",
        "razon_social",
        "cuit",
        "direccion",
        "telefono",
        "whatsapp",
        "email",
        "horario",
        "descripcion",
        "mision",
        "vision",
        "logo",
        "mapa_url",
    )

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(255), nullable=True)
    razon_social = db.Column(db.String(255), nullable=True)
    cuit = db.Column(db.String(50), nullable=True)
    direccion = db.Column(db.String(500), nullable=True)
    telefono = db.Column(db.String(100), nullable=True)
    whatsapp = db.Column(db.String(100), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    horario = db.Column(db.String(255), nullable=True)
    descripcion = db.Column(db.Text, nullable=True)
    mision = db.Column(db.Text, nullable=True)
    vision = db.Column(db.Text, nullable=True)
    logo = db.Column(db.String(500), nullable=True)
    mapa_url = db.Column(db.Text, nullable=True)
    redes = db.Column(db.Text, nullable=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    def to_dict(self) -> dict:
        payload: dict = {"id": self.id}
        for field in self.EDITABLE_FIELDS:
            payload[field] = getattr(self, field)
        payload["redes"] = normalize_mapping_column(self.redes)
        payload["updated_at"] = time_utils.to_iso(self.updated_at)
        return payload
