import pytest

from src.worktime.worktime.core.enums import Role
from src.worktime.worktime.core.exceptions import AuthenticationError, DuplicateEmailError, ValidationError


def test_login_with_demo_credentials(container):
    user = container.auth_service.login("jan.novak@firma.cz", "heslo123")
    assert user.user_id == "emp-1"
    assert user.role == Role.EMPLOYEE


def test_login_email_is_case_insensitive(container):
    assert container.auth_service.login("Admin@Firma.cz", "admin123").is_admin


def test_wrong_password_is_rejected(container):
    with pytest.raises(AuthenticationError):
        container.auth_service.login("jan.novak@firma.cz", "spatne")


def test_deactivated_user_cannot_login(container):
    container.users_repo.set_active("emp-2", is_active=False)
    with pytest.raises(AuthenticationError):
        container.auth_service.login("marie.svobodova@firma.cz", "heslo123")
    assert container.auth_service.current_user("emp-2") is None


def test_login_validates_input_shape(container):
    with pytest.raises(ValidationError) as exc:
        container.auth_service.login("no-at-sign", "")
    assert set(exc.value.errors) == {"email", "password"}


def test_register_creates_employee_with_defaults(container):
    user = container.auth_service.register(
        first_name="Petr",
        last_name="Dvořák",
        email="petr@firma.cz",
        password="tajne",
        password_confirm="tajne",
    )
    assert user.role == Role.EMPLOYEE
    assert user.hourly_rate == 450
    assert user.monthly_deductions == 8500
    assert container.auth_service.login("petr@firma.cz", "tajne").user_id == user.user_id


def test_register_collects_all_field_errors(container):
    with pytest.raises(ValidationError) as exc:
        container.auth_service.register(
            first_name="",
            last_name="",
            email="bad",
            password="abc",
            password_confirm="abd",
        )
    assert set(exc.value.errors) == {"firstName", "lastName", "email", "password", "confirmPassword"}


def test_register_duplicate_email(container):
    with pytest.raises(DuplicateEmailError):
        container.auth_service.register(
            first_name="Jan",
            last_name="Novák",
            email="jan.novak@firma.cz",
            password="heslo123",
            password_confirm="heslo123",
        )
