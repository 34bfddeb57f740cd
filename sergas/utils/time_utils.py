"""统一时间处理工具模块."""

from datetime import UTC, datetime


class TimeUtils:
    """统一时间处理工具类."""

    @staticmethod
    def now() -> datetime:
        """获取当前 UTC 时间.

        Returns:
            带 UTC 时区信息的当前时间.

        """
        return datetime.now(UTC)

    @staticmethod
    def now_millis() -> int:
        """获取当前 Unix 时间戳(毫秒),用于生成上传文件名前缀."""
        return int(datetime.now(UTC).timestamp() * 1000)

    @staticmethod
    def to_iso(value: datetime | None) -> str | None:
        """将时间格式化为 ISO 字符串,空值返回 None."""
        return value.isoformat() if value else None


time_utils = TimeUtils()

__all__ = ["TimeUtils", "time_utils"]
