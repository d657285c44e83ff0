from medical_schedule.database import ScheduleStore
from medical_schedule.models.doctor_search import DoctorMatch, DoctorScheduleEntry
from medical_schedule.utils.common import get_specialty_from_office_id

MIN_QUERY_LENGTH = 2


class ScheduleService:

    @staticmethod
    def search_doctors_by_name(store: ScheduleStore, query: str | None) -> dict[str, DoctorMatch]:
        """
        Case-insensitive substring search over assignment names.

        Results are grouped by the stored name, occurrences keep the file
        order (office -> day -> time slot). The specialty is taken from the
        office where a name is met first.
        Queries shorter than two characters return {} without reading the file.
        """
        if not query or len(query) < MIN_QUERY_LENGTH:
            return {}

        needle = query.lower()
        schedule, _ = store.get_all()
        found: dict[str, DoctorMatch] = {}

        for office_id, days in _items(schedule):
            for day, slots in _items(days):
                for time_slot, doctor in _items(slots):
                    if not isinstance(doctor, dict):
                        continue
                    name = doctor.get("name")
                    if not name or not isinstance(name, str) or needle not in name.lower():
                        continue

                    if name not in found:
                        found[name] = DoctorMatch(
                            specialty=get_specialty_from_office_id(office_id),
                            schedules=[],
                        )
                    found[name].schedules.append(DoctorScheduleEntry(
                        office=office_id,
                        day=day,
                        time=time_slot,
                        hours=doctor.get("hours") or "",
                        type=doctor.get("type"),
                        note=doctor.get("note") or "",
                    ))

        return found


def _items(mapping):
    # restored backups are not schema-checked, skip anything that is not an object
    if isinstance(mapping, dict):
        return mapping.items()
    return ()
