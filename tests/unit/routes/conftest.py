# tests/unit/routes/conftest.py
"""API 契约测试专用 fixtures.

提供 app/client 与不同角色的 JWT 认证头。
"""

import pytest
from flask_jwt_extended import create_access_token

from sergas import create_app, db
from sergas.constants import HttpHeaders, UserRole
from sergas.models.user import User
from sergas.settings import Settings

ADMIN_EMAIL = "admin@sergas.test"
ADMIN_PASSWORD = "AdminPass1"


@pytest.fixture(scope="function")
def app():
    """创建测试应用实例(内存 SQLite, 每个用例独立建表)."""
    settings = Settings.load()
    app = create_app(settings=settings)
    app.config["TESTING"] = True

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    """创建测试客户端."""
    return app.test_client()


@pytest.fixture(scope="function")
def create_user(app):
    """创建用户并返回 (user_id, 认证头)."""

    def _create_user(
        *,
        email: str,
        password: str = "EditorPass1",
        rol: str = UserRole.EDITOR,
        permisos: dict | None = None,
        activo: bool = True,
    ) -> tuple[int, dict[str, str]]:
        with app.app_context():
            user = User(email=email, nombre=email.split("@", 1)[0], rol=rol, activo=activo)
            user.permissions = permisos or {}
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            token = create_access_token(identity=str(user.id))
            return user.id, {HttpHeaders.AUTHORIZATION: f"Bearer {token}"}

    return _create_user


@pytest.fixture(scope="function")
def admin(create_user):
    """管理员 (user_id, 认证头)."""
    return create_user(email=ADMIN_EMAIL, password=ADMIN_PASSWORD, rol=UserRole.ADMIN)


@pytest.fixture(scope="function")
def admin_headers(admin):
    return admin[1]
