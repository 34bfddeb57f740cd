"""文件上传 Service.

职责:
- 校验上传文件(必填、扩展名白名单)
- 生成 `<毫秒时间戳>_<安全文件名>` 形式的远端文件名
- 委托存储后端写入, 不返回 Response
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from werkzeug.utils import secure_filename

from sergas.errors import ValidationError
from sergas.utils.structlog_config import log_info
from sergas.utils.time_utils import time_utils

if TYPE_CHECKING:
    from werkzeug.datastructures import FileStorage

    from sergas.services.uploads.storage_backends import StorageBackend

FALLBACK_BASENAME = "archivo"


@dataclass(frozen=True, slots=True)
class UploadResult:
    """上传结果."""

    url: str
    filename: str
    size: int

    def to_payload(self) -> dict[str, object]:
        return {"url": self.url, "filename": self.filename, "size": self.size}


def _extension_of(filename: str) -> str:
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].strip().lower()


class UploadService:
    """文件上传服务."""

    def __init__(
        self,
        backend: StorageBackend,
        *,
        allowed_extensions: Iterable[str] = (),
        clock_millis: Callable[[], int] = time_utils.now_millis,
    ) -> None:
        self._backend = backend
        self._allowed_extensions = frozenset(ext.lower().lstrip(".") for ext in allowed_extensions)
        self._clock_millis = clock_millis

    @property
    def backend_name(self) -> str:
        return self._backend.name

    def build_remote_name(self, original_filename: str) -> str:
        """生成远端文件名: `<epoch-millis>_<secure_filename>`."""
        safe_name = secure_filename(original_filename)
        extension = _extension_of(original_filename)
        if not safe_name or (extension and _extension_of(safe_name) != extension):
            safe_name = f"{FALLBACK_BASENAME}.{extension}" if extension else FALLBACK_BASENAME
        return f"{self._clock_millis()}_{safe_name}"

    def upload(self, file: FileStorage | None) -> UploadResult:
        """校验并上传文件.

        Raises:
            ValidationError: 未附带文件或扩展名不在白名单内.
            UploadError: 存储后端失败或超时.

        """
        if file is None or not (file.filename or "").strip():
            raise ValidationError(message_key="FILE_REQUIRED")

        original_filename = file.filename or ""
        extension = _extension_of(original_filename)
        if self._allowed_extensions and extension not in self._allowed_extensions:
            raise ValidationError(
                message_key="INVALID_FILE_TYPE",
                extra={"extension": extension, "allowed": sorted(self._allowed_extensions)},
            )

        stream = file.stream
        stream.seek(0, 2)
        size = int(stream.tell())
        stream.seek(0)

        remote_name = self.build_remote_name(original_filename)
        stored = self._backend.put(remote_name, stream, content_type=file.mimetype or None)
        log_info(
            "文件上传成功",
            module="uploads",
            backend=self.backend_name,
            key=stored.key,
            size=size,
        )
        return UploadResult(url=stored.url, filename=remote_name, size=size)
