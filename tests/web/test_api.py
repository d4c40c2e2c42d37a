import pytest

from src.worktime.worktime.core.enums import Role


def _login(client, email, password="heslo123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


@pytest.fixture
def as_jan(client):
    assert _login(client, "jan.novak@firma.cz").status_code == 200
    return client


@pytest.fixture
def as_admin(client):
    assert _login(client, "admin@firma.cz", "admin123").status_code == 200
    return client


def test_login_and_me(client):
    resp = _login(client, "JAN.NOVAK@firma.cz")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["id"] == "emp-1"
    assert "passwordHash" not in resp.get_json()["data"]

    me = client.get("/api/auth/me")
    assert me.get_json()["data"]["email"] == "jan.novak@firma.cz"


def test_login_wrong_password(client):
    resp = _login(client, "jan.novak@firma.cz", "spatne")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_logout_ends_session(as_jan):
    as_jan.post("/api/auth/logout")
    assert as_jan.get("/api/auth/me").status_code == 401


def test_register_then_duplicate(client):
    body = {
        "firstName": "Eva",
        "lastName": "Malá",
        "email": "eva@firma.cz",
        "password": "tajne",
        "confirmPassword": "tajne",
    }
    first = client.post("/api/auth/register", json=body)
    assert first.status_code == 201
    assert first.get_json()["data"]["hourlyRate"] == 450

    again = client.post("/api/auth/register", json=body)
    assert again.status_code == 409


def test_requires_login(client):
    assert client.get("/api/time-entries").status_code == 401


def test_admin_routes_forbidden_for_employees(as_jan):
    assert as_jan.get("/api/employees").status_code == 403
    assert as_jan.get("/api/reports").status_code == 403


def test_entry_validation_errors(as_jan):
    resp = as_jan.post("/api/time-entries", json={"projectId": "proj-1"})
    assert resp.status_code == 400
    errors = resp.get_json()["errors"]
    assert set(errors) == {"date", "startTime", "endTime"}


def test_create_entry(as_jan):
    resp = as_jan.post(
        "/api/time-entries",
        json={"date": "2024-12-05", "startTime": "22:00", "endTime": "02:00", "projectId": "proj-1"},
    )
    assert resp.status_code == 201
    entries = resp.get_json()["data"]
    assert entries[0]["date"] == "2024-12-05"
    assert entries[0]["hoursWorked"] == 4
    assert {e["userId"] for e in entries} == {"emp-1"}


def test_employee_cannot_edit_foreign_entry(as_jan):
    assert as_jan.patch("/api/time-entries/time-3", json={"description": "x"}).status_code == 403
    assert as_jan.delete("/api/time-entries/missing").status_code == 404


def test_write_outage_returns_503(as_jan, backend, container):
    backend.fail_writes = True
    resp = as_jan.post(
        "/api/time-entries",
        json={"date": "2024-12-05", "startTime": "08:00", "endTime": "12:00", "projectId": "proj-1"},
    )
    assert resp.status_code == 503
    backend.fail_writes = False
    assert len(container.entries_repo.list_all()) == 3


def test_read_outage_degrades_to_empty(as_admin, backend):
    backend.fail_reads = True
    resp = as_admin.get("/api/projects")
    assert resp.status_code == 200
    assert resp.get_json()["data"] == []


def test_employee_dashboard_navigation(as_jan):
    resp = as_jan.get("/api/dashboard?date=2024-12-10")
    data = resp.get_json()["data"]
    assert data["overview"]["totalHours"] == 15.5
    assert data["overview"]["netSalary"] == 6975
    assert data["previousDate"] == "2024-11-10"
    assert data["nextDate"] == "2025-01-10"

    custom = as_jan.get("/api/dashboard?filterType=custom&startDate=2024-12-01").get_json()["data"]
    assert custom == {"overview": None}


def test_history_csv_download(as_jan):
    resp = as_jan.get("/api/history.csv?month=2024-12")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert resp.headers["Content-Disposition"].startswith("attachment;")
    assert "filename=historie-2024-12.csv" in resp.headers["Content-Disposition"]
    body = resp.get_data(as_text=True)
    assert body.startswith('"Datum","Zaměstnanec"')
    assert len(body.split("\n")) == 3


def test_export_without_data_is_404(as_admin):
    resp = as_admin.get("/api/reports.csv?startDate=2030-01-01&endDate=2030-01-31")
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Žádná data k exportu"


def test_bad_date_filter_is_400(as_admin):
    assert as_admin.get("/api/reports?startDate=2024-13-01").status_code == 400


def test_company_report_json(as_admin):
    data = as_admin.get("/api/reports/company?period=12months").get_json()["data"]
    assert data["totalHours"] == 24
    assert len(data["months"]) == 12
    assert data["currency"] == "CZK"


def test_settings_roundtrip(as_admin):
    resp = as_admin.put("/api/settings", json={"companyName": "Nová firma", "taxRate": 21})
    assert resp.status_code == 200
    assert as_admin.get("/api/settings").get_json()["data"]["companyName"] == "Nová firma"

    bad = as_admin.put("/api/settings", json={"taxRate": 80})
    assert bad.status_code == 400
    assert "taxRate" in bad.get_json()["errors"]


def test_history_csv_for_employee_with_czech_name(as_admin, container, admin):
    users = container.user_service.create_employee(
        current_role=Role.ADMIN,
        first_name="Jiří",
        last_name="Dvořák",
        email="jiri@firma.cz",
        password="heslo",
        hourly_rate=400,
        monthly_deductions=0,
    )
    jiri = next(u for u in users if u.email == "jiri@firma.cz")
    container.time_entry_service.create_entry(
        actor=admin,
        data={
            "user_id": jiri.user_id,
            "date": "2024-12-03",
            "start_time": "08:00",
            "end_time": "12:00",
            "project_id": "proj-3",
        },
    )

    resp = as_admin.get(f"/api/history.csv?month=2024-12&employeeId={jiri.user_id}")
    assert resp.status_code == 200
    disposition = resp.headers["Content-Disposition"]
    disposition.encode("latin-1")
    assert "filename*=UTF-8''historie-2024-12-Ji%C5%99%C3%AD.csv" in disposition
    assert "Jiří Dvořák" in resp.get_data(as_text=True)


def test_non_string_json_values_give_field_errors(as_jan):
    resp = as_jan.post(
        "/api/time-entries",
        json={"date": "2024-12-05", "startTime": 8, "endTime": 12, "projectId": "proj-1"},
    )
    assert resp.status_code == 400
    assert "endTime" in resp.get_json()["errors"]

    resp = as_jan.post(
        "/api/time-entries",
        json={"date": "2024-12-05", "startTime": "08:00", "endTime": "12:00", "projectId": 7},
    )
    assert resp.status_code == 201
    assert resp.get_json()["data"][0]["projectId"] == "7"


def test_nan_hours_rejected_over_http(as_jan):
    resp = as_jan.post(
        "/api/time-entries",
        json={"date": "2024-12-05", "startTime": "08:00", "endTime": "12:00", "projectId": "proj-1", "hoursWorked": "nan"},
    )
    assert resp.status_code == 400
    assert "hoursWorked" in resp.get_json()["errors"]


def test_register_with_numeric_email_is_a_field_error(client):
    resp = client.post(
        "/api/auth/register",
        json={"firstName": "Eva", "lastName": "Malá", "email": 12345, "password": "tajne", "confirmPassword": "tajne"},
    )
    assert resp.status_code == 400
    assert "email" in resp.get_json()["errors"]
