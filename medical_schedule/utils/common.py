from datetime import datetime, timezone

SPECIALTY_MAP = {
    "derm": "dermatology",
    "card": "cardiology",
    "oftal": "ophthalmology",
    "ped": "pediatrics",
    "gine": "gynecology",
    "psiq": "psychiatry",
}
DEFAULT_SPECIALTY = "general"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime | None = None) -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix, e.g. 2025-10-25T14:11:12.814Z"""
    moment = moment or utc_now()
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def backup_filename(moment: datetime | None = None) -> str:
    moment = moment or utc_now()
    return f"backup_escalas_{moment.astimezone(timezone.utc).strftime('%Y-%m-%d')}.json"


def get_specialty_from_office_id(office_id: str) -> str:
    """Specialty by the office prefix before the first '_' (card_201 -> cardiology)"""
    if not office_id:
        return DEFAULT_SPECIALTY
    prefix = office_id.split("_", 1)[0]
    return SPECIALTY_MAP.get(prefix, DEFAULT_SPECIALTY)


def is_missing(value) -> bool:
    return value is None or value == ""


def is_empty_value(value) -> bool:
    """null, false, "" and 0 count as no value; {} and [] do not"""
    if value is None or isinstance(value, (bool, int, float, str)):
        return not value
    return False
