"""SERGAS - 首页统计数字模型."""

from sergas import db


class Statistic(db.Model):
    """首页统计数字,如 "+150 Proyectos"."""

    __tablename__ = "estadisticas"

    id = db.Column(db.Integer, primary_key=True)
    etiqueta = db.Column(db.String(255), nullable=False)
    valor = db.Column(db.String(50), nullable=False)
    sufijo = db.Column(db.String(20), nullable=True)
    icono = db.Column(db.String(100), nullable=True)
    orden = db.Column(db.Integer, default=0, nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "etiqueta": self.etiqueta,
            "valor": self.valor,
            "sufijo": self.sufijo,
            "icono": self.icono,
            "orden": self.orden,
        }
