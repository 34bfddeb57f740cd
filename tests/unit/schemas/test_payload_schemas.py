import pytest

from sergas.errors import ValidationError
from sergas.schemas.catalog import StatisticCreatePayload, WorkTypeCreatePayload
from sergas.schemas.ordering import ReorderPayload
from sergas.schemas.projects import ProjectUpdatePayload
from sergas.schemas.users import UserUpdatePayload
from sergas.schemas.validation import validate_or_raise


@pytest.mark.unit
def test_reorder_payload_requires_ids() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_or_raise(ReorderPayload, {"base_offset": 1})

    assert "ids" in exc.value.message


@pytest.mark.unit
def test_reorder_payload_keeps_ids_shape_for_service() -> None:
    parsed = validate_or_raise(ReorderPayload, {"ids": "1,2"})

    assert parsed.ids == "1,2"
    assert parsed.base_offset is None


@pytest.mark.unit
def test_reorder_payload_rejects_non_integer_base_offset() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_or_raise(ReorderPayload, {"ids": [1], "base_offset": "1"})

    assert exc.value.extra["field"] == "base_offset"


@pytest.mark.unit
def test_project_update_changes_only_contains_submitted_fields() -> None:
    parsed = validate_or_raise(ProjectUpdatePayload, {"titulo": "Nuevo", "categorias": "[1,2]"})

    assert parsed.changes() == {"titulo": "Nuevo", "categorias": [1, 2]}


@pytest.mark.unit
def test_project_update_rejects_blank_title() -> None:
    with pytest.raises(ValidationError):
        validate_or_raise(ProjectUpdatePayload, {"titulo": " "})


@pytest.mark.unit
def test_work_type_slug_is_normalized() -> None:
    parsed = validate_or_raise(WorkTypeCreatePayload, {"nombre": "Gas", "slug": "Gas Natural "})

    assert parsed.slug == "gas-natural"


@pytest.mark.unit
def test_statistic_valor_accepts_numbers() -> None:
    parsed = validate_or_raise(StatisticCreatePayload, {"etiqueta": "Clientes", "valor": 1200})

    assert parsed.valor == "1200"


@pytest.mark.unit
def test_user_update_blank_password_means_unchanged() -> None:
    parsed = validate_or_raise(UserUpdatePayload, {"password": "", "rol": "ADMIN"})

    assert parsed.changes() == {"password": None, "rol": "admin"}
