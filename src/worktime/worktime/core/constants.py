"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# 25% social + 9% health, paid by the employer on top of base pay.
EMPLOYER_CONTRIBUTION_RATE = 0.338

DEFAULT_HOURLY_RATE = 450
DEFAULT_MONTHLY_DEDUCTIONS = 8500

MIN_PASSWORD_LENGTH = 4
MIN_PROJECT_NAME_LENGTH = 2
MAX_HOURS_PER_ENTRY = 24

DEFAULT_RECENT_ENTRIES = 5
COMPANY_REPORT_MONTHS = {"3months": 3, "6months": 6, "12months": 12}
DEFAULT_COMPANY_REPORT_PERIOD = "6months"

ALL = "all"
UNKNOWN_EMPLOYEE = "Neznámý"
UNKNOWN_PROJECT = "Neznámý projekt"
