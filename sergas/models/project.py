"""SERGAS - 项目模型."""

from sergas import db
from sergas.utils.json_columns import normalize_list_column
from sergas.utils.time_utils import time_utils


class Project(db.Model):
    """项目作品模型.

    `categorias`、`tags`、`galeria`、`documentos` 为列表型 JSON 列,
    历史数据编码不一致,读取时统一经 `normalize_list_column` 解析.

    Attributes:
        id: 项目主键.
        titulo: 标题.
        descripcion: 描述.
        cliente: 客户名称.
        ubicacion: 所在地.
        anio: 年份.
        imagen: 封面图 URL.
        categorias: 工种 ID 列表(JSON 文本).
        tags: 标签列表(JSON 文本).
        galeria: 图集 URL 列表(JSON 文本).
        documentos: 附件 URL 列表(JSON 文本).
        destacado: 是否首页推荐.
        orden: 排序位置.

    """

    __tablename__ = "proyectos"

    LIST_COLUMNS = ("categorias", "tags", "galeria", "documentos")

    id = db.Column(db.Integer, primary_key=True)
    titulo = db.Column(db.String(255), nullable=False)
    descripcion = db.Column(db.Text, nullable=True)
    cliente = db.Column(db.String(255), nullable=True)
    ubicacion = db.Column(db.String(255), nullable=True)
    anio = db.Column(db.Integer, nullable=True)
    imagen = db.Column(db.String(500), nullable=True)
    categorias = db.Column(db.Text, nullable=True)
    tags = db.Column(db.Text, nullable=True)
    galeria = db.Column(db.Text, nullable=True)
    documentos = db.Column(db.Text, nullable=True)
    destacado = db.Column(db.Boolean, default=False, nullable=False)
    orden = db.Column(db.Integer, default=0, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    def to_dict(self) -> dict:
        """转换为字典,列表型列已归一化."""
        payload = {
            "id": self.id,
            "titulo": self.titulo,
            "descripcion": self.descripcion,
            "cliente": self.cliente,
            "ubicacion": self.ubicacion,
            "anio": self.anio,
            "imagen": self.imagen,
            "destacado": bool(self.destacado),
            "orden": self.orden,
            "created_at": time_utils.to_iso(self.created_at),
            "updated_at": time_utils.to_iso(self.updated_at),
        }
        for column in self.LIST_COLUMNS:
            payload[column] = normalize_list_column(getattr(self, column))
        return payload

    def __repr__(self) -> str:
        return f"<Project {self.id} {self.titulo!r}>"
