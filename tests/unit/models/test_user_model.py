import pytest

from sergas.constants import UserRole
from sergas.models.user import User


@pytest.mark.unit
def test_admin_bypasses_section_permissions() -> None:
    user = User(email="a@sergas.test", nombre="A", rol=UserRole.ADMIN)

    assert user.has_permission("contacto") is True


@pytest.mark.unit
def test_editor_permissions_come_from_permisos_column() -> None:
    user = User(email="e@sergas.test", nombre="E", rol=UserRole.EDITOR)
    user.permissions = {"proyectos": True, "contacto": 0}

    assert user.permisos == '{"proyectos":true,"contacto":0}'
    assert user.has_permission("proyectos") is True
    assert user.has_permission("contacto") is False
    assert user.has_permission("company") is False


@pytest.mark.unit
def test_editor_with_corrupt_permisos_has_no_access() -> None:
    user = User(email="e@sergas.test", nombre="E", rol=UserRole.EDITOR, permisos="{not json")

    assert user.permissions == {}
    assert user.has_permission("proyectos") is False


@pytest.mark.unit
def test_to_dict_never_exposes_password() -> None:
    user = User(email="e@sergas.test", nombre="E", rol=UserRole.EDITOR, password="hash")

    assert "password" not in user.to_dict()
