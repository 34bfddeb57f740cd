import pytest

from sergas import db
from sergas.models.user import User


@pytest.mark.unit
def test_create_admin_command_creates_and_resets_admin(app) -> None:
    runner = app.test_cli_runner()

    result = runner.invoke(args=["create-admin", "--email", "Root@Sergas.test", "--password", "RootPass1"])
    assert result.exit_code == 0, result.output
    assert "root@sergas.test" in result.output

    result = runner.invoke(args=["create-admin", "--email", "root@sergas.test", "--password", "OtraClave9"])
    assert result.exit_code == 0, result.output

    with app.app_context():
        users = User.query.filter_by(email="root@sergas.test").all()
        assert len(users) == 1
        assert users[0].is_admin()
        assert users[0].check_password("OtraClave9")


@pytest.mark.unit
def test_create_admin_command_rejects_short_password(app) -> None:
    result = app.test_cli_runner().invoke(args=["create-admin", "--email", "x@sergas.test", "--password", "corta"])

    assert result.exit_code != 0
    with app.app_context():
        assert db.session.query(User).count() == 0
