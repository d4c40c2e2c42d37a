"""Worktime package.

Feature modules (users, projects, timeentries, payroll, reports, ...) each carry a
repository protocol, storage adapters, a service layer and a thin Flask controller.
"""
