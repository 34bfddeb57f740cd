import ftplib
import io

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from sergas.errors import UploadError
from sergas.services.uploads.storage_backends import (
    FtpStorageBackend,
    S3StorageBackend,
    build_storage_backend,
)
from sergas.settings import Settings


class _FakeFtp:
    def __init__(self, *, existing_dirs=(), fail_on: str | None = None) -> None:
        self.commands: list[tuple] = []
        self.existing_dirs = set(existing_dirs)
        self.fail_on = fail_on
        self.cwd_path: list[str] = []
        self.stored: dict[str, bytes] = {}
        self.closed = False

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise ftplib.error_temp(f"421 {name} failed")

    def connect(self, host, port, timeout=None):
        self.commands.append(("connect", host, port, timeout))
        if self.fail_on == "connect":
            raise TimeoutError("timed out")

    def login(self, user, password):
        self.commands.append(("login", user))
        if self.fail_on == "login":
            raise ftplib.error_perm("530 Login incorrect")

    def cwd(self, path):
        self.commands.append(("cwd", path))
        if path == "/":
            self.cwd_path = []
            return
        target = "/".join([*self.cwd_path, path])
        if target not in self.existing_dirs:
            raise ftplib.error_perm("550 No such directory")
        self.cwd_path.append(path)

    def mkd(self, path):
        self.commands.append(("mkd", path))
        self.existing_dirs.add("/".join([*self.cwd_path, path]))

    def storbinary(self, command, data):
        self.commands.append(("storbinary", command))
        self._maybe_fail("storbinary")
        self.stored[command.removeprefix("STOR ")] = data.read()

    def quit(self):
        self.commands.append(("quit",))
        self.closed = True

    def close(self):
        self.commands.append(("close",))
        self.closed = True


def _ftp_backend(fake: _FakeFtp, upload_dir: str = "/public_html/uploads") -> FtpStorageBackend:
    return FtpStorageBackend(
        host="ftp.sergas.test",
        port=21,
        user="deploy",
        password="secret",
        upload_dir=upload_dir,
        public_base_url="https://sergas.test/uploads/",
        timeout=5.0,
        ftp_factory=lambda: fake,
    )


@pytest.mark.unit
def test_ftp_backend_creates_missing_directories_level_by_level() -> None:
    fake = _FakeFtp(existing_dirs={"public_html"})

    stored = _ftp_backend(fake).put("1_a.pdf", io.BytesIO(b"data"))

    assert stored.url == "https://sergas.test/uploads/1_a.pdf"
    assert fake.stored == {"1_a.pdf": b"data"}
    assert ("mkd", "uploads") in fake.commands
    assert ("mkd", "public_html") not in fake.commands
    assert fake.commands[0] == ("connect", "ftp.sergas.test", 21, 5.0)
    assert fake.commands[-1] == ("quit",)


@pytest.mark.unit
@pytest.mark.parametrize("fail_on", ["login", "storbinary"])
def test_ftp_backend_wraps_errors_and_closes_connection(fail_on: str) -> None:
    fake = _FakeFtp(existing_dirs={"public_html", "public_html/uploads"}, fail_on=fail_on)

    with pytest.raises(UploadError) as exc:
        _ftp_backend(fake).put("1_a.pdf", io.BytesIO(b"data"))

    assert exc.value.extra["backend"] == "ftp"
    assert fake.closed is True


@pytest.mark.unit
def test_ftp_backend_closes_socket_when_connect_times_out() -> None:
    fake = _FakeFtp(fail_on="connect")

    with pytest.raises(UploadError):
        _ftp_backend(fake).put("1_a.pdf", io.BytesIO(b"data"))

    assert fake.commands[-1] == ("close",)


class _FakeS3Client:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.uploads: list[tuple] = []

    def upload_fileobj(self, fileobj, bucket, key, ExtraArgs=None):  # noqa: N803
        if self.error is not None:
            raise self.error
        self.uploads.append((bucket, key, fileobj.read(), ExtraArgs))


@pytest.mark.unit
def test_s3_backend_prefixes_key_and_builds_public_url() -> None:
    client = _FakeS3Client()
    backend = S3StorageBackend(
        bucket="sergas-media",
        region="sa-east-1",
        public_base_url="https://media.sergas.test",
        timeout=5.0,
        key_prefix="/uploads/",
        client=client,
    )

    stored = backend.put("1_a.png", io.BytesIO(b"png"), content_type="image/png")

    assert stored.key == "uploads/1_a.png"
    assert stored.url == "https://media.sergas.test/uploads/1_a.png"
    assert client.uploads == [("sergas-media", "uploads/1_a.png", b"png", {"ContentType": "image/png"})]


@pytest.mark.unit
def test_s3_backend_defaults_public_url_to_bucket_host() -> None:
    backend = S3StorageBackend(
        bucket="sergas-media",
        region="sa-east-1",
        public_base_url="",
        timeout=5.0,
        client=_FakeS3Client(),
    )

    stored = backend.put("1_a.png", io.BytesIO(b"png"))

    assert stored.url == "https://sergas-media.s3.sa-east-1.amazonaws.com/1_a.png"


@pytest.mark.unit
@pytest.mark.parametrize(
    "error",
    [
        ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"),
        EndpointConnectionError(endpoint_url="https://s3.sa-east-1.amazonaws.com"),
    ],
)
def test_s3_backend_wraps_client_errors(error: Exception) -> None:
    backend = S3StorageBackend(
        bucket="sergas-media",
        region="sa-east-1",
        public_base_url="https://media.sergas.test",
        timeout=5.0,
        client=_FakeS3Client(error=error),
    )

    with pytest.raises(UploadError) as exc:
        backend.put("1_a.png", io.BytesIO(b"png"))

    assert exc.value.extra["backend"] == "s3"


@pytest.mark.unit
def test_build_storage_backend_selects_by_setting(monkeypatch) -> None:
    monkeypatch.setenv("UPLOAD_BACKEND", "FTP")
    assert isinstance(build_storage_backend(Settings.load()), FtpStorageBackend)

    monkeypatch.setenv("UPLOAD_BACKEND", "s3")
    monkeypatch.setenv("S3_BUCKET", "sergas-media")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    assert isinstance(build_storage_backend(Settings.load()), S3StorageBackend)
