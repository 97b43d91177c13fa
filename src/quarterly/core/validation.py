"""Task validation rules - returns field errors, never raises."""

from dataclasses import dataclass
from datetime import date

from .dates import DATE_FORMAT_HINT, normalize, parse_date

ValidationErrors = dict[str, str]

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

MESSAGES = {
    "name_required": "Task name is required",
    "name_too_short": f"Task name must be at least {NAME_MIN_LENGTH} characters",
    "name_too_long": f"Task name must be at most {NAME_MAX_LENGTH} characters",
    "start_required": "Start date is required",
    "end_required": "End date is required",
    "invalid_format": f"Please enter the date as {DATE_FORMAT_HINT}",
    "end_before_start": "End date must be after the start date",
    "start_too_old": "Start date seems too far in the past",
    "end_too_far": "End date seems too far in the future",
    "not_found": "Task not found",
    "save_failed": "Saving the task failed. Please try again.",
}


@dataclass
class ValidationWindow:
    """How far from today task dates may reasonably fall."""

    years_past: int = 1
    years_future: int = 2


def shift_years(d: date, years: int) -> date:
    """Move a date by whole years, pinning Feb 29 to Feb 28."""
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        return d.replace(year=d.year + years, day=28)


def validate_name(name: str | None) -> str | None:
    """Return an error message for a bad task name, or None."""
    trimmed = (name or "").strip()
    if not trimmed:
        return MESSAGES["name_required"]
    if len(trimmed) < NAME_MIN_LENGTH:
        return MESSAGES["name_too_short"]
    if len(trimmed) > NAME_MAX_LENGTH:
        return MESSAGES["name_too_long"]
    return None


def validate_task(
    name: str | None,
    start_date: date | None,
    end_date: date | None,
    today: date | None = None,
    *,
    window: ValidationWindow | None = None,
) -> ValidationErrors:
    """
    Validate task fields.

    Returns a field -> message mapping; an empty mapping means valid.
    Dates are compared as calendar dates; any time of day is dropped.
    The sane-range check only runs when `today` is supplied.
    """
    start_date = normalize(start_date) if start_date is not None else None
    end_date = normalize(end_date) if end_date is not None else None
    today = normalize(today) if today is not None else None

    errors: ValidationErrors = {}

    name_error = validate_name(name)
    if name_error:
        errors["name"] = name_error

    if start_date is None:
        errors["start_date"] = MESSAGES["start_required"]
    if end_date is None:
        errors["end_date"] = MESSAGES["end_required"]

    if start_date is not None and end_date is not None and end_date <= start_date:
        errors["end_date"] = MESSAGES["end_before_start"]

    if today is not None:
        window = window or ValidationWindow()
        if start_date is not None and "start_date" not in errors:
            if start_date < shift_years(today, -window.years_past):
                errors["start_date"] = MESSAGES["start_too_old"]
        if end_date is not None and "end_date" not in errors:
            if end_date > shift_years(today, window.years_future):
                errors["end_date"] = MESSAGES["end_too_far"]

    return errors


def validate_task_form(
    name: str | None,
    start_date_str: str | None,
    end_date_str: str | None,
    today: date | None = None,
    *,
    window: ValidationWindow | None = None,
) -> ValidationErrors:
    """
    Validate raw form input with textual DD.MM.YYYY dates.

    Date errors are reported under the `start_date_str`/`end_date_str`
    keys so a form can show them next to the text inputs.
    """
    errors: ValidationErrors = {}

    start = parse_date(start_date_str)
    end = parse_date(end_date_str)

    if start is None:
        errors["start_date_str"] = (
            MESSAGES["invalid_format"] if (start_date_str or "").strip() else MESSAGES["start_required"]
        )
    if end is None:
        errors["end_date_str"] = (
            MESSAGES["invalid_format"] if (end_date_str or "").strip() else MESSAGES["end_required"]
        )

    field_errors = validate_task(name, start, end, today, window=window)
    if "name" in field_errors:
        errors["name"] = field_errors["name"]
    for field_key, form_key in (("start_date", "start_date_str"), ("end_date", "end_date_str")):
        if field_key in field_errors and form_key not in errors:
            errors[form_key] = field_errors[field_key]

    return errors
