import pytest

from src.worktime.worktime.core.enums import Role
from src.worktime.worktime.core.exceptions import PermissionDeniedError, ValidationError
from src.worktime.worktime.settings.model import Settings


def test_defaults(container):
    s = container.settings_service.get()
    assert (s.tax_rate, s.social_insurance_rate, s.health_insurance_rate) == (15, 6.5, 4.5)
    assert s.currency == "CZK"


def test_save_merges_with_current_values(container):
    saved = container.settings_service.save(current_role=Role.ADMIN, data={"company_name": "ACME", "tax_rate": "20"})
    assert saved.company_name == "ACME"
    assert saved.tax_rate == 20
    assert saved.working_days_per_week == 5


@pytest.mark.parametrize(
    "data, field",
    [
        ({"company_name": " "}, "companyName"),
        ({"tax_rate": 51}, "taxRate"),
        ({"social_insurance_rate": -1}, "socialInsuranceRate"),
        ({"health_insurance_rate": 21}, "healthInsuranceRate"),
        ({"working_hours_per_day": 0}, "workingHoursPerDay"),
        ({"working_days_per_week": 8}, "workingDaysPerWeek"),
    ],
)
def test_range_validation(container, data, field):
    with pytest.raises(ValidationError) as exc:
        container.settings_service.save(current_role=Role.ADMIN, data=data)
    assert field in exc.value.errors


def test_only_admin_saves(container):
    with pytest.raises(PermissionDeniedError):
        container.settings_service.save(current_role=Role.EMPLOYEE, data={})


def test_unreachable_store_falls_back_to_defaults(container, backend):
    backend.fail_reads = True
    assert container.settings_service.get() == Settings()


@pytest.mark.parametrize("value", ["nan", "inf"])
def test_non_finite_rates_rejected(container, value):
    with pytest.raises(ValidationError) as exc:
        container.settings_service.save(current_role=Role.ADMIN, data={"tax_rate": value})
    assert set(exc.value.errors) == {"taxRate"}
    assert container.settings_service.get().tax_rate == 15
