from datetime import date

import pytest

from src.worktime.worktime.core.enums import Role
from src.worktime.worktime.core.exceptions import PermissionDeniedError, ValidationError


def _lines(download):
    return download.content.decode("utf-8").split("\n")


def test_admin_report_all_entries_newest_first(container):
    report = container.report_service.admin_report(current_role=Role.ADMIN)
    assert [line.entry.entry_id for line in report.lines] == ["time-2", "time-1", "time-3"]
    assert report.summary.total_hours == 24
    assert report.contributions.total_rate == "11.0"


def test_admin_report_filters(container):
    report = container.report_service.admin_report(
        current_role=Role.ADMIN, employee_id="emp-1", start_date=date(2024, 12, 2)
    )
    assert [line.entry.entry_id for line in report.lines] == ["time-2"]
    assert report.lines[0].cost == pytest.approx(7.5 * 450 * 1.338)


def test_admin_report_requires_admin(container):
    with pytest.raises(PermissionDeniedError):
        container.report_service.admin_report(current_role=Role.EMPLOYEE)


def test_admin_report_csv(container):
    download = container.report_service.admin_report_csv(current_role=Role.ADMIN)
    assert download.filename == "report-all-all.csv"
    lines = _lines(download)
    assert lines[0] == '"Datum","Zaměstnanec","Email","Projekt","Hodiny","Hodinová sazba","Celková cena","Popis"'
    assert lines[1].startswith('"02.12.2024","Jan Novák","jan.novak@firma.cz","E-commerce platforma","7.5","450",')
    assert lines[1].endswith(',"Opravy chyb a testování"')
    assert len(lines) == 4


def test_admin_report_csv_empty_selection(container):
    assert (
        container.report_service.admin_report_csv(
            current_role=Role.ADMIN, start_date=date(2030, 1, 1), end_date=date(2030, 1, 31)
        )
        is None
    )


def test_history_shows_only_own_entries_to_employees(container, jan):
    report = container.report_service.time_history(actor=jan, month="2024-12", employee_id="emp-2")
    assert {line.entry.user_id for line in report.lines} == {"emp-1"}
    assert report.summary.total_cost == pytest.approx(15.5 * 450)


def test_history_csv_for_selected_employee(container, admin):
    download = container.report_service.time_history_csv(actor=admin, month="2024-12", employee_id="emp-2")
    assert download.filename == "historie-2024-12-Marie.csv"
    lines = _lines(download)
    assert lines[0].split(",")[4:6] == ['"Začátek"', '"Konec"']
    assert lines[1] == (
        '"01.12.2024","Marie Svobodová","marie.svobodova@firma.cz","CRM systém",'
        '"08:00","16:30","8.5","520","4420","Optimalizace databáze"'
    )


def test_history_rejects_bad_month(container, jan):
    with pytest.raises(ValidationError):
        container.report_service.time_history(actor=jan, month="12/2024")


def test_timesheet_csv(container, jan):
    download = container.report_service.timesheet_csv(actor=jan, month="2024-12")
    assert download.filename == "timesheet-2024-12.csv"
    lines = _lines(download)
    assert lines[0] == (
        '"Date","Employee","Start Time","End Time","Hours Worked","Project","Description","Hourly Rate","Total Cost"'
    )
    assert lines[2] == (
        '"2024-12-01","Jan Novák","09:00","17:00","8","E-commerce platforma","Vývoj frontendu obchodu","450","3600"'
    )


def test_company_report(container):
    report = container.report_service.company_report(current_role=Role.ADMIN, period="3months", today=date(2024, 12, 15))
    assert report.total_hours == 24
    assert report.total_cost == 15247
    assert [m.month for m in report.months] == ["Oct 2024", "Nov 2024", "Dec 2024"]
    assert [e.first_name for e in report.employees] == ["Jan", "Marie"]
    assert [p.name for p in report.projects] == ["E-commerce platforma", "CRM systém"]


def test_company_report_unknown_period(container):
    with pytest.raises(ValidationError):
        container.report_service.company_report(current_role=Role.ADMIN, period="5months")


def test_company_report_csv_layout(container):
    download = container.report_service.company_report_csv(current_role=Role.ADMIN, today=date(2024, 12, 15))
    assert download.filename == "company-report-2024-12-15.csv"
    lines = _lines(download)
    assert lines[:6] == [
        '"Type","Name","Value"',
        '"Summary","Total Hours","24"',
        '"Summary","Total Cost","15247 CZK"',
        '"Summary","Total Entries","3"',
        '"Summary","Active Projects","2"',
        '"","",""',
    ]
    assert lines[6] == '"Monthly","Jul 2024",""'
    assert '"Employee","Jan Novák",""' in lines
    assert lines[-1] == '"Project","CRM systém",""'


def test_admin_report_carries_flat_employer_contribution(container):
    report = container.report_service.admin_report(current_role=Role.ADMIN)
    assert report.contributions.fixed_amount == pytest.approx(report.summary.total_cost * 0.338)
    assert report.to_dict()["contributions"]["fixedAmount"] == pytest.approx(report.summary.total_cost * 0.338)
