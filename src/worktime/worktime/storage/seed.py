"""Demo records loaded into an empty store (offline/demo mode and AUTO_SEED_DB)."""
from __future__ import annotations

DEFAULT_ADMIN_ID = "admin-1"

DEMO_USERS = [
    {
        "id": DEFAULT_ADMIN_ID,
        "firstName": "Admin",
        "lastName": "Systému",
        "email": "admin@firma.cz",
        "password": "admin123",
        "role": "admin",
        "hourlyRate": 0,
        "monthlyDeductions": 0,
        "isActive": True,
        "createdAt": "2024-01-01T00:00:00",
    },
    {
        "id": "emp-1",
        "firstName": "Jan",
        "lastName": "Novák",
        "email": "jan.novak@firma.cz",
        "password": "heslo123",
        "role": "employee",
        "hourlyRate": 450,
        "monthlyDeductions": 8500,
        "isActive": True,
        "createdAt": "2024-01-15T00:00:00",
    },
    {
        "id": "emp-2",
        "firstName": "Marie",
        "lastName": "Svobodová",
        "email": "marie.svobodova@firma.cz",
        "password": "heslo123",
        "role": "employee",
        "hourlyRate": 520,
        "monthlyDeductions": 9200,
        "isActive": True,
        "createdAt": "2024-02-01T00:00:00",
    },
]

DEMO_PROJECTS = [
    {"id": "proj-1", "name": "E-commerce platforma", "isActive": True, "createdAt": "2024-01-01T00:00:00"},
    {"id": "proj-2", "name": "CRM systém", "isActive": True, "createdAt": "2024-01-01T00:00:00"},
    {"id": "proj-3", "name": "Mobilní aplikace", "isActive": True, "createdAt": "2024-01-01T00:00:00"},
]

DEMO_TIME_ENTRIES = [
    {
        "id": "time-1",
        "userId": "emp-1",
        "date": "2024-12-01",
        "startTime": "09:00",
        "endTime": "17:00",
        "hoursWorked": 8,
        "projectId": "proj-1",
        "description": "Vývoj frontendu obchodu",
        "createdAt": "2024-12-01T09:00:00",
    },
    {
        "id": "time-2",
        "userId": "emp-1",
        "date": "2024-12-02",
        "startTime": "08:30",
        "endTime": "16:00",
        "hoursWorked": 7.5,
        "projectId": "proj-1",
        "description": "Opravy chyb a testování",
        "createdAt": "2024-12-02T09:00:00",
    },
    {
        "id": "time-3",
        "userId": "emp-2",
        "date": "2024-12-01",
        "startTime": "08:00",
        "endTime": "16:30",
        "hoursWorked": 8.5,
        "projectId": "proj-2",
        "description": "Optimalizace databáze",
        "createdAt": "2024-12-01T08:30:00",
    },
]
