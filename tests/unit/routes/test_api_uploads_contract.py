import io

import pytest

from sergas import UPLOAD_SERVICE_EXTENSION
from sergas.errors import UploadError
from sergas.services.uploads.storage_backends import StorageBackend, StoredObject
from sergas.services.uploads.upload_service import UploadService


class _MemoryBackend(StorageBackend):
    name = "memory"

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.objects: dict[str, bytes] = {}

    def put(self, key, data, *, content_type=None):
        if self.fail:
            raise UploadError(extra={"backend": self.name, "storage_error": "timed out"})
        self.objects[key] = data.read()
        return StoredObject(key=key, url=f"https://cdn.sergas.test/uploads/{key}")


def _install_backend(app, backend: StorageBackend) -> None:
    app.extensions[UPLOAD_SERVICE_EXTENSION] = UploadService(
        backend,
        allowed_extensions=("pdf", "jpg"),
        clock_millis=lambda: 1718000000000,
    )


@pytest.mark.unit
def test_api_upload_contract(app, client, create_user) -> None:
    backend = _MemoryBackend()
    _install_backend(app, backend)
    _, headers = create_user(email="editor@sergas.test")

    response = client.post(
        "/api/upload",
        data={"file": (io.BytesIO(b"%PDF-1.4"), "memoria técnica.pdf")},
        content_type="multipart/form-data",
        headers=headers,
    )

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["data"] == {
        "url": "https://cdn.sergas.test/uploads/1718000000000_memoria_tecnica.pdf",
        "filename": "1718000000000_memoria_tecnica.pdf",
        "size": 8,
    }
    assert backend.objects == {"1718000000000_memoria_tecnica.pdf": b"%PDF-1.4"}


@pytest.mark.unit
def test_api_upload_error_contract(app, client, create_user) -> None:
    _install_backend(app, _MemoryBackend(fail=True))
    _, headers = create_user(email="editor@sergas.test")

    unauthenticated = client.post("/api/upload", data={}, content_type="multipart/form-data")
    assert unauthenticated.status_code == 401

    missing = client.post("/api/upload", data={}, content_type="multipart/form-data", headers=headers)
    assert missing.status_code == 400
    assert missing.get_json()["message_code"] == "FILE_REQUIRED"

    bad_type = client.post(
        "/api/upload",
        data={"file": (io.BytesIO(b"MZ"), "setup.exe")},
        content_type="multipart/form-data",
        headers=headers,
    )
    assert bad_type.status_code == 400
    assert bad_type.get_json()["message_code"] == "INVALID_FILE_TYPE"

    backend_down = client.post(
        "/api/upload",
        data={"file": (io.BytesIO(b"%PDF"), "a.pdf")},
        content_type="multipart/form-data",
        headers=headers,
    )
    assert backend_down.status_code == 502
    assert backend_down.get_json()["message_code"] == "FILE_UPLOAD_ERROR"
