"""用户管理 Service.

职责:
- 处理用户的创建/更新/删除编排
- 邮箱唯一性校验、密码加密
- 调用 repository 执行 add/delete/flush, 不返回 Response、不 commit
"""

from __future__ import annotations

from typing import Any

from sergas.constants import UserRole
from sergas.errors import ConflictError, NotFoundError
from sergas.models.user import User
from sergas.repositories.users_repository import UsersRepository
from sergas.schemas.users import UserCreatePayload, UserUpdatePayload
from sergas.schemas.validation import validate_or_raise
from sergas.utils.route_safety import log_with_context


class UserService:
    """用户管理服务."""

    def __init__(self, repository: UsersRepository | None = None) -> None:
        self._repository = repository or UsersRepository()

    def list_users(self) -> list[dict[str, Any]]:
        return [user.to_dict() for user in self._repository.list_users()]

    def create(self, payload: object) -> User:
        """创建用户; 邮箱重复返回 409."""
        parsed = validate_or_raise(UserCreatePayload, payload or {})
        if self._repository.get_by_email(parsed.email):
            raise ConflictError("El email ya está registrado", extra={"email": parsed.email})

        user = User(email=parsed.email, nombre=parsed.nombre, rol=parsed.rol, activo=parsed.activo)
        user.permissions = parsed.permisos
        user.set_password(parsed.password)
        self._repository.add(user)
        self._log("info", "用户创建成功", action="create_user", user=user)
        return user

    def update(self, user_id: int, payload: object) -> User:
        user = self._get_or_raise(user_id)
        parsed = validate_or_raise(UserUpdatePayload, payload or {})
        changes = parsed.changes()

        password = changes.pop("password", None)
        if password:
            user.set_password(password)
        if "permisos" in changes:
            user.permissions = changes.pop("permisos")
        for field, value in changes.items():
            if value is not None:
                setattr(user, field, value)

        self._repository.add(user)
        self._log("info", "用户更新成功", action="update_user", user=user)
        return user

    def delete(self, user_id: int, *, operator_id: int | None) -> None:
        """删除用户; 不允许删除当前登录账号."""
        user = self._get_or_raise(user_id)
        if operator_id is not None and user.id == operator_id:
            raise ConflictError("No puede eliminar su propia cuenta", extra={"user_id": user_id})
        self._repository.delete(user)
        self._log("info", "用户删除成功", action="delete_user", user=user)

    def ensure_admin(self, *, email: str, password: str, nombre: str = "Administrador") -> User:
        """创建或重置管理员账号(CLI 初始化使用)."""
        normalized_email = email.strip().lower()
        user = self._repository.get_by_email(normalized_email)
        if user is None:
            user = User(email=normalized_email, nombre=nombre)
        user.rol = UserRole.ADMIN
        user.activo = True
        user.set_password(password)
        self._repository.add(user)
        self._log("info", "管理员账号已就绪", action="ensure_admin", user=user)
        return user

    def _get_or_raise(self, user_id: int) -> User:
        user = self._repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(extra={"user_id": user_id})
        return user

    @staticmethod
    def _log(level: str, event: str, *, action: str, user: User) -> None:
        log_with_context(
            level,  # type: ignore[arg-type]
            event,
            module="users",
            action=action,
            context={"target_user_id": user.id, "email": user.email, "rol": user.rol},
        )
