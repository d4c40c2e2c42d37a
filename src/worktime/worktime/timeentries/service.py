from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.deletion import remove_record
from ..common.resilience import read_or_empty
from ..common.validators import as_text, require_number
from ..core.constants import MAX_HOURS_PER_ENTRY
from ..core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from ..users.model import User
from .model import TimeEntry
from .repository import TimeEntryRepository
from .time_arithmetic import hours_between

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryDraft:
    """Validated input for creating or updating an entry."""

    user_id: str
    work_date: date
    start_time: str
    end_time: str
    hours_worked: float
    project_id: str
    description: Optional[str]


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_entry(data: Mapping[str, Any]) -> EntryDraft:
    """Check a whole entry form and collect every field error.

    ``hours_worked`` overrides the value derived from the times when given.
    """
    errors: Dict[str, str] = {}

    work_date = None
    if _blank(data.get("date")):
        errors["date"] = "Datum je povinné"
    elif isinstance(data["date"], date):
        work_date = data["date"]
    else:
        try:
            work_date = parse_iso_date(as_text(data["date"]))
        except ValueError:
            errors["date"] = "Neplatné datum (YYYY-MM-DD)"

    start_time = as_text(data.get("start_time"))
    end_time = as_text(data.get("end_time"))
    if not start_time:
        errors["startTime"] = "Čas začátku je povinný"
    if not end_time:
        errors["endTime"] = "Čas konce je povinný"

    hours = 0.0
    if start_time and end_time:
        try:
            hours = hours_between(start_time, end_time)
        except ValidationError:
            errors["endTime"] = "Čas není platný (HH:MM)"

    override = data.get("hours_worked")
    if not _blank(override):
        try:
            hours = round(require_number(override, "Odpracované hodiny", field="hoursWorked"), 2)
        except ValidationError as e:
            errors.update(e.errors)
        else:
            if hours <= 0 or hours > MAX_HOURS_PER_ENTRY:
                errors["hoursWorked"] = "Odpracované hodiny musí být větší než 0 a nejvýše 24"
    elif "endTime" not in errors and start_time and end_time:
        if hours <= 0:
            errors["endTime"] = "Čas konce musí být po času začátku"
        elif hours > MAX_HOURS_PER_ENTRY:
            errors["endTime"] = "Pracovní doba nemůže být delší než 24 hodin"

    project_id = as_text(data.get("project_id"))
    if not project_id:
        errors["projectId"] = "Projekt je povinný"

    user_id = as_text(data.get("user_id"))
    if not user_id:
        errors["userId"] = "Zaměstnanec je povinný"

    if errors:
        raise ValidationError(next(iter(errors.values())), errors=errors)

    description = as_text(data.get("description")) or None
    return EntryDraft(
        user_id=user_id,
        work_date=work_date,
        start_time=start_time,
        end_time=end_time,
        hours_worked=hours,
        project_id=project_id,
        description=description,
    )


class TimeEntryService:
    """Use case: log, edit and remove work sessions.

    Employees touch only their own entries; admins may touch anyone's.
    """

    def __init__(self, entries: TimeEntryRepository):
        self._entries = entries

    def list_all(self) -> List[TimeEntry]:
        return read_or_empty(self._entries.list_all, what="time entries")

    def list_for(self, actor: User) -> List[TimeEntry]:
        entries = self.list_all()
        if actor.is_admin:
            return entries
        return [e for e in entries if e.user_id == actor.user_id]

    def _check_owner(self, actor: User, owner_id: str) -> None:
        if not actor.is_admin and actor.user_id != owner_id:
            raise PermissionDeniedError("Nemáte oprávnění upravovat tento záznam")

    def create_entry(self, *, actor: User, data: Mapping[str, Any]) -> List[TimeEntry]:
        payload = dict(data)
        if _blank(payload.get("user_id")):
            payload["user_id"] = actor.user_id
        draft = validate_entry(payload)
        self._check_owner(actor, draft.user_id)

        created = self._entries.create_entry(
            user_id=draft.user_id,
            work_date=draft.work_date,
            start_time=draft.start_time,
            end_time=draft.end_time,
            hours_worked=draft.hours_worked,
            project_id=draft.project_id,
            description=draft.description,
        )
        logger.info("Time entry %s created for %s", created.entry_id, draft.user_id)
        return self.list_for(actor)

    def update_entry(self, *, actor: User, entry_id: str, changes: Mapping[str, Any]) -> List[TimeEntry]:
        """Merge ``changes`` over the stored entry and revalidate the result.

        When only the times change, hours are derived again from them.
        """
        current = self._entries.get_by_id(entry_id)
        if not current:
            raise NotFoundError("Záznam nenalezen")
        self._check_owner(actor, current.user_id)

        merged = {
            "user_id": current.user_id,
            "date": current.date,
            "start_time": current.start_time,
            "end_time": current.end_time,
            "project_id": current.project_id,
            "description": current.description,
        }
        merged.update({k: v for k, v in changes.items() if k != "hours_worked"})
        times_changed = "start_time" in changes or "end_time" in changes
        if not _blank(changes.get("hours_worked")):
            merged["hours_worked"] = changes["hours_worked"]
        elif not times_changed:
            merged["hours_worked"] = current.hours_worked

        draft = validate_entry(merged)
        self._check_owner(actor, draft.user_id)

        self._entries.update_entry(
            entry_id,
            {
                "user_id": draft.user_id,
                "date": draft.work_date,
                "start_time": draft.start_time,
                "end_time": draft.end_time,
                "hours_worked": draft.hours_worked,
                "project_id": draft.project_id,
                "description": draft.description,
            },
        )
        return self.list_for(actor)

    def delete_entry(self, *, actor: User, entry_id: str) -> List[TimeEntry]:
        current = self._entries.get_by_id(entry_id)
        if not current:
            raise NotFoundError("Záznam nenalezen")
        self._check_owner(actor, current.user_id)
        remove_record(self._entries, TimeEntry.DELETION_POLICY, entry_id)
        return self.list_for(actor)
