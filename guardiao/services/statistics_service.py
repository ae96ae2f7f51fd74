# guardiao/services/statistics_service.py
"""
Aggregations behind the dashboard charts. All functions work on rows already
fetched from the database (a few thousand at most) and return plain dicts the
frontend feeds straight into its chart components.
"""

from collections import Counter
from typing import Iterable, Optional

from guardiao.constants import AccessCategory, AccessMode


def filter_access_records(records: Iterable, gate: Optional[str] = None,
                          characteristic: Optional[str] = None, access_mode: Optional[str] = None,
                          hour_start: Optional[int] = None, hour_end: Optional[int] = None) -> list:
    result = []
    for r in records:
        if gate and r.guard_gate != gate:
            continue
        if characteristic and r.characteristic != characteristic:
            continue
        if access_mode and r.access_mode != access_mode:
            continue
        hour = r.timestamp.hour
        if hour_start is not None and hour < hour_start:
            continue
        if hour_end is not None and hour > hour_end:
            continue
        result.append(r)
    return result


def access_statistics(records: list) -> dict:
    entries = sum(1 for r in records if r.access_category == AccessCategory.ENTRY.value)
    exits = sum(1 for r in records if r.access_category == AccessCategory.EXIT.value)
    pedestrians = sum(1 for r in records if r.access_mode == AccessMode.PEDESTRIAN.value)
    vehicles = sum(1 for r in records if r.access_mode == AccessMode.VEHICLE.value)

    by_gate: dict[str, dict] = {}
    for r in records:
        g = by_gate.setdefault(r.guard_gate, {"entries": 0, "exits": 0, "total": 0})
        g["total"] += 1
        if r.access_category == AccessCategory.ENTRY.value:
            g["entries"] += 1
        else:
            g["exits"] += 1
    gates = sorted(
        ({"name": name.replace("PORTÃO ", ""), **v} for name, v in by_gate.items()),
        key=lambda g: g["total"],
        reverse=True,
    )

    destinations = Counter(r.destination for r in records if r.destination)
    characteristics = Counter(r.characteristic for r in records)
    hours = Counter(r.timestamp.hour for r in records)
    days = Counter(r.timestamp.date().isoformat() for r in records)

    return {
        "totals": {
            "total": len(records),
            "entries": entries,
            "exits": exits,
            "pedestrians": pedestrians,
            "vehicles": vehicles,
        },
        "by_gate": gates,
        "by_destination": [{"name": k, "value": v} for k, v in destinations.most_common(10)],
        "by_characteristic": [{"name": k, "value": v} for k, v in characteristics.most_common()],
        "by_hour": [{"hour": f"{h:02d}h", "value": hours.get(h, 0)} for h in range(24)],
        "by_day": [{"date": d, "value": days[d]} for d in sorted(days)],
    }


def occurrence_statistics(occurrences: list) -> dict:
    return {
        "total": len(occurrences),
        "by_status": dict(Counter(o.status for o in occurrences)),
        "by_urgency": dict(Counter(o.urgency for o in occurrences)),
        "by_category": dict(Counter(o.category for o in occurrences)),
    }


def parking_statistics(requests: list) -> dict:
    return {
        "total": len(requests),
        "by_status": dict(Counter(r.status for r in requests)),
        "by_person_type": dict(Counter(r.person_type for r in requests)),
    }
