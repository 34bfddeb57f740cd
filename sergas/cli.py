"""Flask CLI 命令.

- `flask create-admin --email ... --password ...`: 初始化/重置管理员
- `flask create-tables`: 按模型建表(首次部署或本地 SQLite 调试)
"""

from __future__ import annotations

import click
from flask import Flask

from sergas import db
from sergas.utils.structlog_config import get_system_logger


def register_cli_commands(app: Flask) -> None:
    """注册 CLI 命令到 app.cli."""

    @app.cli.command("create-admin")
    @click.option("--email", required=True, help="管理员邮箱")
    @click.option("--password", required=True, help="管理员密码(至少 8 位)")
    @click.option("--nombre", default="Administrador", show_default=True, help="显示名称")
    def create_admin(email: str, password: str, nombre: str) -> None:
        from sergas.services.users.user_service import UserService  # noqa: PLC0415

        try:
            user = UserService().ensure_admin(email=email, password=password, nombre=nombre)
            db.session.commit()
        except ValueError as exc:
            db.session.rollback()
            raise click.BadParameter(str(exc), param_hint="--password") from exc

        get_system_logger().info("管理员账号初始化完成", module="cli", user_id=user.id)
        click.echo(f"admin ready: {user.email} (id={user.id})")

    @app.cli.command("create-tables")
    def create_tables() -> None:
        db.create_all()
        get_system_logger().info("数据表创建完成", module="cli")
        click.echo("tables created")


__all__ = ["register_cli_commands"]
