"""API decorators.

说明:
- API 的错误语义始终为 JSON
- 统一通过 AppError 体系让错误处理器输出标准错误封套
- 认证基于 `Authorization: Bearer <JWT>`, identity 为用户 ID 字符串
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from flask import g, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from sergas.constants.system_constants import ErrorMessages
from sergas.errors import AuthenticationError, AuthorizationError
from sergas.models.user import User
from sergas.repositories.users_repository import UsersRepository

P = ParamSpec("P")
R = TypeVar("R")


def _authentication_error(permission_type: str, *, reason: str) -> AuthenticationError:
    return AuthenticationError(
        ErrorMessages.AUTHENTICATION_REQUIRED,
        message_key="AUTHENTICATION_REQUIRED",
        extra={
            "request_path": request.path,
            "request_method": request.method,
            "permission_type": permission_type,
            "reason": reason,
        },
    )


def _require_current_user(permission_type: str) -> User:
    try:
        verify_jwt_in_request()
    except (JWTExtendedException, PyJWTError) as exc:
        raise _authentication_error(permission_type, reason=exc.__class__.__name__) from exc

    identity = get_jwt_identity()
    user = UsersRepository().get_by_id(int(identity)) if str(identity).isdecimal() else None
    if user is None or not user.activo:
        raise _authentication_error(permission_type, reason="user_unavailable")

    g.current_user = user
    return user


def get_current_user() -> User | None:
    """返回已通过装饰器认证的当前用户."""
    return g.get("current_user")


def get_current_user_id() -> int | None:
    user = get_current_user()
    return user.id if user else None


def api_login_required(func: Callable[P, R]) -> Callable[P, R]:
    """要求调用者已登录."""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        _require_current_user("login")
        return func(*args, **kwargs)

    return wrapper


def api_permission_required(section: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """校验栏目权限: 管理员直接放行, 其余用户要求 `permisos[section]` 为真."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            user = _require_current_user(section)
            if not user.has_permission(section):
                raise AuthorizationError(
                    ErrorMessages.PERMISSION_REQUIRED.format(permission=section),
                    message_key="PERMISSION_REQUIRED",
                    extra={
                        "request_path": request.path,
                        "request_method": request.method,
                        "permission_type": section,
                    },
                )
            return func(*args, **kwargs)

        return wrapper

    return decorator


def api_admin_required(func: Callable[P, R]) -> Callable[P, R]:
    """要求调用者为管理员."""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        user = _require_current_user("admin")
        if not user.is_admin():
            raise AuthorizationError(
                ErrorMessages.ADMIN_PERMISSION_REQUIRED,
                message_key="ADMIN_PERMISSION_REQUIRED",
                extra={
                    "request_path": request.path,
                    "request_method": request.method,
                    "permission_type": "admin",
                    "user_role": user.rol,
                },
            )
        return func(*args, **kwargs)

    return wrapper
