"""SERGAS - 用户模型."""

from sergas import bcrypt, db
from sergas.constants import UserRole
from sergas.utils.json_columns import dump_mapping_column, normalize_mapping_column
from sergas.utils.time_utils import time_utils

MIN_USER_PASSWORD_LENGTH = 8


class User(db.Model):
    """后台用户模型.

    Attributes:
        id: 用户 ID,主键.
        email: 登录邮箱,唯一索引.
        nombre: 显示名称.
        password: 加密后的密码(bcrypt).
        rol: 用户角色,可选值: admin、editor.
        permisos: 分区权限 JSON 文本,如 {"proyectos": true}.
        activo: 是否启用.
        last_login: 最后登录时间.
        created_at: 创建时间.

    """

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    nombre = db.Column(db.String(255), nullable=False, default="")
    password = db.Column(db.String(255), nullable=False)
    rol = db.Column(db.String(50), nullable=False, default=UserRole.EDITOR)
    permisos = db.Column(db.Text, nullable=True)
    activo = db.Column(db.Boolean, default=True, nullable=False)
    last_login = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=time_utils.now)

    def set_password(self, password: str) -> None:
        """设置密码(加密).

        Args:
            password: 原始密码.

        Raises:
            ValueError: 密码长度不足时抛出.

        """
        if len(password) < MIN_USER_PASSWORD_LENGTH:
            error_msg = f"密码长度至少{MIN_USER_PASSWORD_LENGTH}位"
            raise ValueError(error_msg)
        self.password = bcrypt.generate_password_hash(password).decode("utf-8")

    def check_password(self, password: str) -> bool:
        """验证密码."""
        if not self.password:
            return False
        return bcrypt.check_password_hash(self.password, password)

    def is_admin(self) -> bool:
        """检查是否为管理员."""
        return self.rol == UserRole.ADMIN

    @property
    def permissions(self) -> dict:
        """解析后的分区权限."""
        return normalize_mapping_column(self.permisos)

    @permissions.setter
    def permissions(self, value: object) -> None:
        self.permisos = dump_mapping_column(value)

    def has_permission(self, section: str) -> bool:
        """管理员直接放行,其余用户要求 `permisos[section]` 为真值."""
        if self.is_admin():
            return True
        return bool(self.permissions.get(section))

    def to_dict(self) -> dict:
        """转换为字典(不含密码)."""
        return {
            "id": self.id,
            "email": self.email,
            "nombre": self.nombre,
            "rol": self.rol,
            "permisos": self.permissions,
            "activo": bool(self.activo),
            "last_login": time_utils.to_iso(self.last_login),
            "created_at": time_utils.to_iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<User {self.email}>"
