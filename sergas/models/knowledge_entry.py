"""SERGAS - 智能助手知识库模型."""

from sergas import db
from sergas.utils.json_columns import normalize_list_column
from sergas.utils.time_utils import time_utils


class KnowledgeEntry(db.Model):
    """知识库条目.

    Attributes:
        pregunta: 问题.
        respuesta: 回答.
        categoria: 分类.
        palabras_clave: 关键词列表(JSON 文本).
        activo: 是否启用.
        orden: 排序位置.

    """

    __tablename__ = "assistant_knowledge"

    id = db.Column(db.Integer, primary_key=True)
    pregunta = db.Column(db.Text, nullable=False)
    respuesta = db.Column(db.Text, nullable=False)
    categoria = db.Column(db.String(100), nullable=True)
    palabras_clave = db.Column(db.Text, nullable=True)
    activo = db.Column(db.Boolean, default=True, nullable=False)
    orden = db.Column(db.Integer, default=0, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "pregunta": self.pregunta,
            "respuesta": self.respuesta,
            "categoria": self.categoria,
            "palabras_clave": normalize_list_column(self.palabras_clave),
            "activo": bool(self.activo),
            "orden": self.orden,
        }
