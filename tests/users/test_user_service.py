import pytest

from src.worktime.worktime.core.enums import Role
from src.worktime.worktime.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError


def _create(container, **overrides):
    data = dict(
        current_role=Role.ADMIN,
        first_name="Eva",
        last_name="Malá",
        email="eva@firma.cz",
        password="heslo",
        hourly_rate=300,
        monthly_deductions=0,
    )
    data.update(overrides)
    return container.user_service.create_employee(**data)


def test_create_employee_returns_reloaded_list(container):
    users = _create(container)
    assert [u.email for u in users][-1] == "eva@firma.cz"
    assert len(users) == 4


def test_create_requires_admin(container):
    with pytest.raises(PermissionDeniedError):
        _create(container, current_role=Role.EMPLOYEE)


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"hourly_rate": 0}, "hourlyRate"),
        ({"hourly_rate": "abc"}, "hourlyRate"),
        ({"monthly_deductions": -1}, "monthlyDeductions"),
        ({"password": "abc"}, "password"),
        ({"email": "eva"}, "email"),
        ({"role": "boss"}, "role"),
    ],
)
def test_create_validation(container, overrides, field):
    with pytest.raises(ValidationError) as exc:
        _create(container, **overrides)
    assert field in exc.value.errors


def test_update_is_partial(container):
    users = container.user_service.update_employee(
        current_role=Role.ADMIN, user_id="emp-1", changes={"hourly_rate": 480, "password": ""}
    )
    jan = next(u for u in users if u.user_id == "emp-1")
    assert jan.hourly_rate == 480
    assert container.auth_service.login("jan.novak@firma.cz", "heslo123").user_id == "emp-1"


def test_update_missing_employee(container):
    with pytest.raises(NotFoundError):
        container.user_service.update_employee(current_role=Role.ADMIN, user_id="nope", changes={})


def test_deactivate_keeps_history(container):
    users = container.user_service.deactivate_employee(
        current_role=Role.ADMIN, current_user_id="admin-1", user_id="emp-1"
    )
    assert next(u for u in users if u.user_id == "emp-1").is_active is False
    assert container.entries_repo.get_by_id("time-1") is not None
    assert "emp-1" not in [u.user_id for u in container.user_service.list_active_employees()]


def test_cannot_deactivate_own_account(container):
    with pytest.raises(ValidationError):
        container.user_service.deactivate_employee(
            current_role=Role.ADMIN, current_user_id="admin-1", user_id="admin-1"
        )


def test_toggle_flips_active_flag(container):
    container.user_service.toggle_active(current_role=Role.ADMIN, current_user_id="admin-1", user_id="emp-2")
    assert container.users_repo.get_by_id("emp-2").is_active is False
    container.user_service.toggle_active(current_role=Role.ADMIN, current_user_id="admin-1", user_id="emp-2")
    assert container.users_repo.get_by_id("emp-2").is_active is True


def test_list_degrades_to_empty_when_store_is_down(container, backend):
    backend.fail_reads = True
    assert container.user_service.list_users() == []


@pytest.mark.parametrize("rate", ["nan", "inf", float("inf")])
def test_non_finite_rate_rejected(container, rate):
    with pytest.raises(ValidationError) as exc:
        _create(container, hourly_rate=rate)
    assert "hourlyRate" in exc.value.errors


def test_non_finite_deductions_rejected_on_update(container):
    with pytest.raises(ValidationError) as exc:
        container.user_service.update_employee(
            current_role=Role.ADMIN, user_id="emp-1", changes={"monthly_deductions": "nan"}
        )
    assert "monthlyDeductions" in exc.value.errors


def test_non_string_names_are_coerced(container):
    users = _create(container, first_name=5, last_name="Malá")
    assert next(u for u in users if u.email == "eva@firma.cz").first_name == "5"


def test_deactivated_employee_still_counts_in_reports(container):
    before = container.report_service.admin_report(current_role=Role.ADMIN).summary
    container.user_service.deactivate_employee(current_role=Role.ADMIN, current_user_id="admin-1", user_id="emp-1")
    after = container.report_service.admin_report(current_role=Role.ADMIN).summary
    assert after.total_hours == before.total_hours == 24
    assert after.total_cost == pytest.approx(before.total_cost)
    assert after.unique_employees == 2
