import pytest

from src.labor_payroll.labor_payroll.core.enums import Role
from src.labor_payroll.labor_payroll.core.exceptions import AuthenticationError
from src.labor_payroll.labor_payroll.users.model import User
from src.labor_payroll.labor_payroll.users.service import AuthService
from tests.fakes import DEMO_PASSWORD, FakeUsersRepo, demo_users


def test_authenticate_returns_session_user():
    service = AuthService(FakeUsersRepo(demo_users()))

    s_user = service.authenticate(" admin ", DEMO_PASSWORD)
    assert s_user.full_name == "Tuấn"
    assert s_user.role == Role.ADMIN


def test_wrong_user_and_wrong_password_share_the_same_message():
    service = AuthService(FakeUsersRepo(demo_users()))

    with pytest.raises(AuthenticationError) as unknown:
        service.authenticate("nobody", DEMO_PASSWORD)
    with pytest.raises(AuthenticationError) as wrong:
        service.authenticate("admin", "wrong")
    assert str(unknown.value) == str(wrong.value)


def test_placeholder_hash_and_inactive_user_cannot_login():
    users = [
        User(user_id="x", username="du", full_name="Dũ", password_hash="CHANGE_ME", role=Role.USER),
        User(user_id="y", username="old", full_name="Cũ", password_hash="CHANGE_ME", role=Role.USER, is_active=False),
    ]
    service = AuthService(FakeUsersRepo(users))

    with pytest.raises(AuthenticationError):
        service.authenticate("du", "CHANGE_ME")
    assert [c["username"] for c in service.list_login_choices()] == ["du"]
