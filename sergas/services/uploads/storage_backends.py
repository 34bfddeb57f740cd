"""上传存储后端: FTP(ftplib)与 S3 兼容对象存储(boto3).

后端只负责把字节流写到远端并返回公开 URL; 底层库的异常统一转换为 UploadError.
"""

from __future__ import annotations

import ftplib
from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from sergas.errors import UploadError
from sergas.utils.structlog_config import get_system_logger

if TYPE_CHECKING:
    from sergas.settings import Settings

FtpFactory = Callable[[], ftplib.FTP]


@dataclass(frozen=True, slots=True)
class StoredObject:
    """远端存储结果."""

    key: str
    url: str


def _join_url(base_url: str, key: str) -> str:
    return f"{base_url.rstrip('/')}/{key.lstrip('/')}"


class StorageBackend(ABC):
    """上传存储后端抽象."""

    name: str = "base"

    @abstractmethod
    def put(self, key: str, data: BinaryIO, *, content_type: str | None = None) -> StoredObject:
        """写入对象并返回公开 URL."""


class FtpStorageBackend(StorageBackend):
    """FTP 存储后端.

    每次上传新建连接: 登录、逐级确保目标目录存在、STOR, 结束后总是关闭连接.
    """

    name = "ftp"

    def __init__(
        self,
        *,
        host: str,
        port: int,
        user: str,
        password: str,
        upload_dir: str,
        public_base_url: str,
        timeout: float,
        use_tls: bool = False,
        ftp_factory: FtpFactory | None = None,
    ) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._upload_dir = upload_dir
        self._public_base_url = public_base_url
        self._timeout = timeout
        self._use_tls = use_tls
        self._ftp_factory = ftp_factory or self._default_factory

    def _default_factory(self) -> ftplib.FTP:
        if self._use_tls:
            return ftplib.FTP_TLS(timeout=self._timeout)
        return ftplib.FTP(timeout=self._timeout)

    def put(self, key: str, data: BinaryIO, *, content_type: str | None = None) -> StoredObject:
        ftp = self._ftp_factory()
        connected = False
        try:
            ftp.connect(self._host, self._port, timeout=self._timeout)
            connected = True
            ftp.login(self._user, self._password)
            if isinstance(ftp, ftplib.FTP_TLS):
                ftp.prot_p()
            self._ensure_directory(ftp, self._upload_dir)
            ftp.storbinary(f"STOR {key}", data)
        except ftplib.all_errors as exc:
            get_system_logger().error(
                "FTP 上传失败",
                module="uploads",
                backend=self.name,
                host=self._host,
                key=key,
                error_type=exc.__class__.__name__,
                error=str(exc),
            )
            raise UploadError(extra={"backend": self.name, "storage_error": str(exc)}) from exc
        finally:
            self._close(ftp, connected=connected)
        return StoredObject(key=key, url=_join_url(self._public_base_url, key))

    @staticmethod
    def _ensure_directory(ftp: ftplib.FTP, directory: str) -> None:
        """逐级进入目标目录, 不存在则创建."""
        if directory.startswith("/"):
            ftp.cwd("/")
        for part in (segment for segment in directory.split("/") if segment):
            try:
                ftp.cwd(part)
            except ftplib.error_perm:
                ftp.mkd(part)
                ftp.cwd(part)

    @staticmethod
    def _close(ftp: ftplib.FTP, *, connected: bool) -> None:
        if connected:
            # QUIT 失败时退回到直接关闭 socket
            with suppress(*ftplib.all_errors):
                ftp.quit()
                return
        with suppress(OSError):
            ftp.close()


class S3StorageBackend(StorageBackend):
    """S3 兼容对象存储后端(AWS S3、MinIO、R2 等)."""

    name = "s3"

    def __init__(
        self,
        *,
        bucket: str,
        region: str,
        public_base_url: str,
        timeout: float,
        endpoint_url: str | None = None,
        key_prefix: str = "",
        client: object | None = None,
    ) -> None:
        self._bucket = bucket
        self._region = region
        self._endpoint_url = endpoint_url
        self._key_prefix = key_prefix.strip("/")
        self._public_base_url = public_base_url or self._default_public_base_url()
        self.client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            config=BotoConfig(connect_timeout=timeout, read_timeout=timeout, retries={"max_attempts": 1}),
        )

    def _default_public_base_url(self) -> str:
        if self._endpoint_url:
            return _join_url(self._endpoint_url, self._bucket)
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com"

    def put(self, key: str, data: BinaryIO, *, content_type: str | None = None) -> StoredObject:
        object_key = f"{self._key_prefix}/{key}" if self._key_prefix else key
        extra_args = {"ContentType": content_type} if content_type else {}
        try:
            self.client.upload_fileobj(data, self._bucket, object_key, ExtraArgs=extra_args)  # type: ignore[attr-defined]
        except (BotoCoreError, ClientError) as exc:
            get_system_logger().error(
                "对象存储上传失败",
                module="uploads",
                backend=self.name,
                bucket=self._bucket,
                key=object_key,
                error_type=exc.__class__.__name__,
                error=str(exc),
            )
            raise UploadError(extra={"backend": self.name, "storage_error": str(exc)}) from exc
        return StoredObject(key=object_key, url=_join_url(self._public_base_url, object_key))


def build_storage_backend(settings: Settings) -> StorageBackend:
    """根据 UPLOAD_BACKEND 构造存储后端."""
    if settings.upload_backend == S3StorageBackend.name:
        return S3StorageBackend(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            public_base_url=settings.upload_public_base_url,
            timeout=settings.upload_timeout_seconds,
            endpoint_url=settings.s3_endpoint_url,
            key_prefix=settings.s3_key_prefix,
        )
    return FtpStorageBackend(
        host=settings.ftp_host,
        port=settings.ftp_port,
        user=settings.ftp_user,
        password=settings.ftp_password,
        upload_dir=settings.ftp_upload_dir,
        public_base_url=settings.upload_public_base_url,
        timeout=settings.upload_timeout_seconds,
        use_tls=settings.ftp_use_tls,
    )


__all__ = [
    "FtpStorageBackend",
    "S3StorageBackend",
    "StorageBackend",
    "StoredObject",
    "build_storage_backend",
]
