"""登录 Service.

职责:
- 负责邮箱/密码认证(避免路由层直接 query + check_password)
- 负责生成登录响应数据(JWT)
- 不返回 Response、不 commit
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from flask import current_app
from flask_jwt_extended import create_access_token

from sergas.constants.system_constants import ErrorMessages
from sergas.errors import AuthenticationError, AuthorizationError
from sergas.models.user import User
from sergas.repositories.users_repository import UsersRepository
from sergas.schemas.auth import LoginPayload
from sergas.schemas.validation import validate_or_raise
from sergas.utils.structlog_config import get_auth_logger
from sergas.utils.time_utils import time_utils

TOKEN_TYPE = "Bearer"


@dataclass(frozen=True, slots=True)
class LoginResult:
    """登录结果(供 API 层封套返回)."""

    access_token: str
    expires_in: int
    user: dict[str, object]

    def to_payload(self) -> dict[str, object]:
        """转换为可 JSON 序列化的 payload."""
        return {
            "access_token": self.access_token,
            "token_type": TOKEN_TYPE,
            "expires_in": self.expires_in,
            "user": self.user,
        }


class LoginService:
    """登录编排服务."""

    def __init__(self, repository: UsersRepository | None = None) -> None:
        self._repository = repository or UsersRepository()

    def login_from_payload(self, payload: object | None) -> LoginResult:
        """从原始 payload 解析并执行登录."""
        parsed = validate_or_raise(LoginPayload, payload or {})
        return self.login(email=parsed.email, password=parsed.password)

    def authenticate(self, *, email: str, password: str) -> User | None:
        """认证邮箱与密码.

        Returns:
            User | None: 认证成功返回 User,否则返回 None.

        """
        user = self._repository.get_by_email(email)
        if user and user.check_password(password):
            return user
        return None

    @staticmethod
    def build_login_result(user: User) -> LoginResult:
        """生成登录结果(签发 JWT 并刷新最后登录时间).

        Raises:
            AuthorizationError: 当用户被禁用.

        """
        if not user.activo:
            raise AuthorizationError(
                message=ErrorMessages.ACCOUNT_DISABLED,
                message_key="ACCOUNT_DISABLED",
                extra={"user_id": user.id},
            )

        user.last_login = time_utils.now()
        access_token = create_access_token(identity=str(user.id))
        expires = current_app.config.get("JWT_ACCESS_TOKEN_EXPIRES")
        expires_in = int(expires.total_seconds()) if isinstance(expires, timedelta) else int(expires or 0)
        get_auth_logger().info("用户登录成功", module="auth", user_id=user.id, email=user.email)
        return LoginResult(access_token=access_token, expires_in=expires_in, user=user.to_dict())

    def login(self, *, email: str, password: str) -> LoginResult:
        """登录入口: 认证并构造登录结果.

        Raises:
            AuthenticationError: 当邮箱或密码错误.
            AuthorizationError: 当用户被禁用.

        """
        user = self.authenticate(email=email, password=password)
        if not user:
            get_auth_logger().warning("登录失败: 邮箱或密码错误", module="auth", email=email)
            raise AuthenticationError(
                message=ErrorMessages.INVALID_CREDENTIALS,
                message_key="INVALID_CREDENTIALS",
            )
        return self.build_login_result(user)
