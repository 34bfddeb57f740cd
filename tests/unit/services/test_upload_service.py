import io

import pytest
from werkzeug.datastructures import FileStorage

from sergas.errors import UploadError, ValidationError
from sergas.services.uploads.storage_backends import StorageBackend, StoredObject
from sergas.services.uploads.upload_service import UploadService


class _MemoryBackend(StorageBackend):
    name = "memory"

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str | None] = {}

    def put(self, key, data, *, content_type=None):
        self.objects[key] = data.read()
        self.content_types[key] = content_type
        return StoredObject(key=key, url=f"https://cdn.sergas.test/uploads/{key}")


class _BrokenBackend(StorageBackend):
    name = "broken"

    def put(self, key, data, *, content_type=None):
        raise UploadError(extra={"backend": self.name, "storage_error": "timed out"})


def _file(content: bytes, filename: str | None, content_type: str = "application/pdf") -> FileStorage:
    return FileStorage(stream=io.BytesIO(content), filename=filename, content_type=content_type)


def _service(backend: StorageBackend | None = None) -> UploadService:
    return UploadService(
        backend or _MemoryBackend(),
        allowed_extensions=("pdf", ".JPG", "png"),
        clock_millis=lambda: 1718000000000,
    )


@pytest.mark.unit
def test_upload_stores_file_under_timestamped_safe_name() -> None:
    backend = _MemoryBackend()
    service = _service(backend)

    result = service.upload(_file(b"%PDF-1.4 plano", "../Plano de obra.pdf"))

    assert result.filename == "1718000000000_Plano_de_obra.pdf"
    assert result.size == len(b"%PDF-1.4 plano")
    assert result.url == "https://cdn.sergas.test/uploads/1718000000000_Plano_de_obra.pdf"
    assert backend.objects[result.filename] == b"%PDF-1.4 plano"
    assert backend.content_types[result.filename] == "application/pdf"
    assert result.to_payload() == {"url": result.url, "filename": result.filename, "size": result.size}


@pytest.mark.unit
def test_upload_extension_check_is_case_insensitive() -> None:
    result = _service().upload(_file(b"\x89PNG", "FOTO.JPG", "image/jpeg"))

    assert result.filename == "1718000000000_FOTO.JPG"


@pytest.mark.unit
def test_build_remote_name_falls_back_when_name_is_not_ascii() -> None:
    assert _service().build_remote_name("名字.pdf") == "1718000000000_archivo.pdf"
    assert _service().build_remote_name("...") == "1718000000000_archivo"


@pytest.mark.unit
@pytest.mark.parametrize("file", [None, _file(b"x", None), _file(b"x", "   ")])
def test_upload_requires_file(file) -> None:
    with pytest.raises(ValidationError) as exc:
        _service().upload(file)

    assert exc.value.message_key == "FILE_REQUIRED"


@pytest.mark.unit
@pytest.mark.parametrize("filename", ["script.exe", "sin_extension", "archivo.pdf.php"])
def test_upload_rejects_disallowed_extension(filename: str) -> None:
    backend = _MemoryBackend()

    with pytest.raises(ValidationError) as exc:
        _service(backend).upload(_file(b"x", filename))

    assert exc.value.message_key == "INVALID_FILE_TYPE"
    assert backend.objects == {}


@pytest.mark.unit
def test_upload_propagates_backend_failure() -> None:
    with pytest.raises(UploadError) as exc:
        _service(_BrokenBackend()).upload(_file(b"x", "a.pdf"))

    assert exc.value.status_code == 502
