"""事务边界安全执行与结构化日志助手.

提供 `log_with_context` 与 `safe_route_call` 两个 helper,用于复用结构化日志字段,
并集中处理资源层的异常捕获与 session 提交/回滚.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Literal, TypeVar

from werkzeug.exceptions import HTTPException

from sergas import db
from sergas.errors import AppError, SystemError
from sergas.utils.logging.context_vars import user_id_var
from sergas.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from sergas.types import ContextDict, ContextMapping, LoggerExtra

R = TypeVar("R")
LogLevel = Literal["debug", "info", "warning", "error", "critical"]
DEFAULT_EXPECTED_EXCEPTIONS: tuple[type[BaseException], ...] = (AppError, HTTPException)


def log_with_context(
    level: LogLevel,
    event: str,
    *,
    module: str,
    action: str,
    context: ContextMapping | None = None,
    extra: LoggerExtra | None = None,
    include_actor: bool = True,
) -> None:
    """记录带有统一上下文字段的结构化日志.

    Args:
        level: 日志级别,使用 structlog 的方法名,例如 "info", "error".
        event: 日志事件描述.
        module: 所属模块或领域,用于快速过滤.
        action: 当前操作名称,通常对应资源方法或服务方法名.
        context: 业务维度字段.
        extra: 诊断字段.
        include_actor: 是否附加当前登录用户 ID.

    """
    logger = get_logger("app")
    payload: ContextDict = {"module": module, "action": action}

    if include_actor:
        actor_id = user_id_var.get()
        if actor_id is not None:
            payload.setdefault("actor_id", actor_id)

    if context:
        payload.update(context)
    if extra:
        payload.update(extra)

    log_method = getattr(logger, level, logger.error)
    log_method(event, **payload)


def safe_route_call(
    func: Callable[[], R],
    *,
    module: str,
    action: str,
    public_error: str,
    context: ContextMapping | None = None,
    expected_exceptions: tuple[type[BaseException], ...] = (),
) -> R:
    """安全执行资源逻辑,集中处理日志、异常转换与 session 提交.

    Args:
        func: 真实的业务函数,建议为局部闭包以捕获参数.
        module: 记录日志用的模块名称.
        action: 业务动作名称,例如 "update_project".
        public_error: 未知异常时暴露给客户端的统一错误文案.
        context: 记录日志的业务维度字段.
        expected_exceptions: 额外视为"预期"的异常类型,按 warning 记录并原样抛出.

    Returns:
        业务函数的执行结果,通常是 Flask 的响应对象.

    Raises:
        AppError: 业务逻辑主动抛出,或未知异常被包装为 SystemError.

    """
    handled_exceptions = DEFAULT_EXPECTED_EXCEPTIONS + expected_exceptions
    event = f"{action}执行失败"
    context_payload: ContextDict = dict(context or {})

    try:
        result = func()
    except handled_exceptions as exc:
        db.session.rollback()
        log_with_context(
            "warning",
            event,
            module=module,
            action=action,
            context=context_payload,
            extra={"error_type": exc.__class__.__name__, "error_message": str(exc)},
        )
        raise
    except Exception as exc:
        db.session.rollback()
        log_with_context(
            "error",
            event,
            module=module,
            action=action,
            context=context_payload,
            extra={"error_type": exc.__class__.__name__, "unexpected": True},
        )
        raise SystemError(public_error) from exc
    else:
        try:
            db.session.commit()
        except Exception as exc:
            db.session.rollback()
            log_with_context(
                "error",
                event,
                module=module,
                action=action,
                context=context_payload,
                extra={"error_type": exc.__class__.__name__, "unexpected": True, "commit_failed": True},
            )
            raise SystemError(public_error) from exc
        return result
