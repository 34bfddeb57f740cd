"""SERGAS - Flask 应用初始化.

企业官网内容管理后端: 认证、项目/工种/统计/知识库/公司信息 CRUD、排序与文件上传.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Flask, jsonify, request
from flask.typing import ResponseReturnValue
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy

from sergas.constants import HttpHeaders
from sergas.settings import Settings
from sergas.utils.response_utils import unified_error_response
from sergas.utils.structlog_config import ErrorContext, configure_structlog, get_system_logger

# 初始化扩展
db = SQLAlchemy()
jwt = JWTManager()
bcrypt = Bcrypt()
cors = CORS()

REORDER_SERVICE_EXTENSION = "sergas.reorder_service"
UPLOAD_SERVICE_EXTENSION = "sergas.upload_service"


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 初始化扩展
    initialize_extensions(app, resolved_settings)

    # 构造进程级共享的服务对象(数据库连接池、存储后端)
    initialize_services(app, resolved_settings)

    # 注册 API
    configure_blueprints(app, resolved_settings)

    # 配置日志
    configure_logging(app)
    configure_structlog(app)

    from sergas.infra.logging.request_middleware import register_request_logging  # noqa: PLC0415

    register_request_logging(app)

    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    from sergas.cli import register_cli_commands  # noqa: PLC0415

    register_cli_commands(app)

    # 注册全局错误处理器
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        payload, status_code = unified_error_response(error, context=ErrorContext(error, request))
        return jsonify(payload), status_code

    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    """
    app.config.from_mapping(settings.to_flask_config())
    app.config["SERGAS_SETTINGS"] = settings


def initialize_extensions(app: Flask, settings: Settings) -> None:
    """初始化数据库、JWT、密码加密与 CORS 扩展.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,用于扩展初始化参数注入.

    """
    db.init_app(app)
    jwt.init_app(app)
    bcrypt.init_app(app)

    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": list(settings.cors_origins),
                "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                "allow_headers": [HttpHeaders.CONTENT_TYPE, HttpHeaders.AUTHORIZATION, HttpHeaders.X_REQUEST_ID],
            },
        },
    )


def initialize_services(app: Flask, settings: Settings) -> None:
    """构造排序服务与上传服务并挂到 `app.extensions`.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象.

    """
    from sergas.services.ordering.reorder_service import ReorderService  # noqa: PLC0415
    from sergas.services.uploads.storage_backends import build_storage_backend  # noqa: PLC0415
    from sergas.services.uploads.upload_service import UploadService  # noqa: PLC0415

    with app.app_context():
        engine = db.engine

    app.extensions[REORDER_SERVICE_EXTENSION] = ReorderService(
        engine,
        lock_timeout=settings.reorder_lock_timeout_seconds,
        transaction_timeout=settings.reorder_timeout_seconds,
        strict_ids=settings.reorder_strict_ids,
    )
    app.extensions[UPLOAD_SERVICE_EXTENSION] = UploadService(
        build_storage_backend(settings),
        allowed_extensions=settings.upload_allowed_extensions,
    )


def configure_blueprints(app: Flask, settings: Settings) -> None:
    """注册 `/api` 蓝图.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象.

    """
    from sergas.api import register_api_blueprints  # noqa: PLC0415

    register_api_blueprints(app, settings)


def configure_logging(app: Flask) -> None:
    """配置日志文件处理器.

    Args:
        app: Flask 应用实例.

    """
    if not app.debug and not app.testing:
        log_path = Path(app.config["LOG_FILE"])
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=app.config["LOG_MAX_SIZE"],
            backupCount=app.config["LOG_BACKUP_COUNT"],
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"),
        )
        file_handler.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.addHandler(file_handler)

        app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        get_system_logger().info("SERGAS 应用启动", environment=app.config.get("ENV"))


from sergas.models import (  # noqa: F401, E402
    company_data,
    contact_message,
    knowledge_entry,
    project,
    statistic,
    user,
    work_type,
)
