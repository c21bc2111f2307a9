from datetime import datetime

import pytest

from agenda.services.slots import calculate_service_slots
from agenda.services.slots.calculator import generate_slots
from agenda.services.slots.calendar import CalendarRules, OpeningRule, default_opening_rules
from agenda.services.slots.config import BookingConfig, minutes_to_time_str

from conftest import MONDAY, NOW, SUNDAY, TUESDAY, add_appointment

CONFIG = BookingConfig()
RULES = CalendarRules(default_opening_rules())


def _grid(start: str, end: str) -> list[str]:
    """Every 30 minutes from start to end inclusive."""
    h1, m1 = map(int, start.split(":"))
    h2, m2 = map(int, end.split(":"))
    return [minutes_to_time_str(m) for m in range(h1 * 60 + m1, h2 * 60 + m2 + 1, 30)]


def test_open_day_without_bookings():
    slots = generate_slots(RULES, [], TUESDAY, 60, CONFIG, NOW)

    assert slots == _grid("09:00", "17:00")
    assert slots[0] == "09:00"
    assert slots[-1] == "17:00"  # ends exactly at closing


def test_closed_day_is_empty():
    assert generate_slots(RULES, [], SUNDAY, 60, CONFIG, NOW) == []


def test_booking_boundaries_are_half_open():
    booked = [(10 * 60, 10 * 60 + 30)]

    slots = generate_slots(RULES, booked, TUESDAY, 30, CONFIG, NOW)

    assert "09:30" in slots   # ends 10:00
    assert "10:00" not in slots
    assert "10:30" in slots   # starts 10:30


def test_long_service_skips_every_start_that_would_overlap():
    booked = [(12 * 60, 13 * 60)]

    slots = generate_slots(RULES, booked, TUESDAY, 90, CONFIG, NOW)

    # 10:30 ends 12:00 (fine), 11:00 and 11:30 run into 12:00, 12:00/12:30 overlap
    assert "10:30" in slots
    for blocked in ("11:00", "11:30", "12:00", "12:30"):
        assert blocked not in slots
    assert "13:00" in slots


def test_step_is_independent_of_duration():
    slots = generate_slots(RULES, [], TUESDAY, 45, CONFIG, NOW)

    assert all(s.endswith(":00") or s.endswith(":30") for s in slots)
    # 17:00 + 45 = 17:45 fits, 17:30 + 45 = 18:15 does not
    assert slots[-1] == "17:00"


def test_service_longer_than_opening_interval():
    rules = CalendarRules([OpeningRule(weekday=1, opens_at="09:00", closes_at="09:45")])
    assert generate_slots(rules, [], TUESDAY, 60, CONFIG, NOW) == []


def test_opening_time_off_grid_starts_the_grid():
    rules = CalendarRules([OpeningRule(weekday=1, opens_at="09:15", closes_at="11:00")])
    assert generate_slots(rules, [], TUESDAY, 30, CONFIG, NOW) == ["09:15", "09:45", "10:15"]


def test_today_drops_past_starts():
    now = datetime(2026, 10, 20, 12, 10)
    slots = generate_slots(RULES, [], TUESDAY, 60, CONFIG, now)
    assert slots[0] == "12:30"


def test_today_start_equal_to_now_is_kept():
    slots = generate_slots(RULES, [], TUESDAY, 60, CONFIG, datetime(2026, 10, 20, 12, 0, 0))
    assert slots[0] == "12:00"

    slots = generate_slots(RULES, [], TUESDAY, 60, CONFIG, datetime(2026, 10, 20, 12, 0, 1))
    assert slots[0] == "12:30"


def test_today_after_last_slot_is_empty():
    now = datetime(2026, 10, 20, 17, 5)
    assert generate_slots(RULES, [], TUESDAY, 60, CONFIG, now) == []


def test_past_date_is_empty():
    now = datetime(2026, 10, 21, 8, 0)
    assert generate_slots(RULES, [], TUESDAY, 30, CONFIG, now) == []


def test_idempotent_read():
    booked = [(9 * 60, 10 * 60), (14 * 60, 15 * 60 + 30)]
    first = generate_slots(RULES, booked, TUESDAY, 45, CONFIG, NOW)
    second = generate_slots(RULES, booked, TUESDAY, 45, CONFIG, NOW)
    assert first == second


def test_custom_step():
    config = BookingConfig(slot_step_minutes=15)
    slots = generate_slots(RULES, [], TUESDAY, 60, config, NOW)
    assert slots[:3] == ["09:00", "09:15", "09:30"]
    assert slots[-1] == "17:00"


def test_non_positive_duration_rejected():
    with pytest.raises(ValueError):
        generate_slots(RULES, [], TUESDAY, 0, CONFIG, NOW)


@pytest.mark.parametrize("duration", [15, 30, 45, 60, 90, 120])
@pytest.mark.parametrize("booked", [
    [],
    [(9 * 60, 9 * 60 + 30)],
    [(10 * 60 + 15, 11 * 60 + 5), (16 * 60, 18 * 60)],
    [(9 * 60, 18 * 60)],
])
@pytest.mark.parametrize("now", [NOW, datetime(2026, 10, 20, 13, 20)])
def test_sound_and_complete(duration, booked, now):
    """Exactly the grid starts that fit, are not past and do not overlap."""
    slots = generate_slots(RULES, booked, TUESDAY, duration, CONFIG, now)

    expected = []
    for start in range(9 * 60, 18 * 60, 30):
        end = start + duration
        if end > 18 * 60:
            continue
        if now.date() == TUESDAY and start * 60 < now.hour * 3600 + now.minute * 60 + now.second:
            continue
        busy = set()
        for b_start, b_end in booked:
            busy.update(range(b_start, b_end))
        if any(minute in busy for minute in range(start, end)):
            continue
        expected.append(minutes_to_time_str(start))

    assert slots == expected


# ── Database-backed ─────────────────────────────────────────────────────


def test_calculate_service_slots_reads_ledger(db, tenant):
    add_appointment(db, tenant, TUESDAY, "10:00", "10:30")
    add_appointment(db, tenant, TUESDAY, "11:00", "11:30", status="cancelled")
    add_appointment(db, tenant, MONDAY, "09:00", "18:00")  # other day

    result = calculate_service_slots(db, tenant.company_id, tenant.service_30_id, TUESDAY, CONFIG, NOW)

    assert result["service_duration_min"] == 30
    assert result["slot_step_minutes"] == 30
    times = result["available_times"]
    assert "09:30" in times
    assert "10:00" not in times
    assert "10:30" in times
    assert "11:00" in times  # cancelled does not block


def test_calculate_service_slots_sees_new_appointments(db, tenant):
    before = calculate_service_slots(db, tenant.company_id, tenant.service_60_id, TUESDAY, CONFIG, NOW)
    assert "14:00" in before["available_times"]

    add_appointment(db, tenant, TUESDAY, "14:00", "14:30")

    after = calculate_service_slots(db, tenant.company_id, tenant.service_60_id, TUESDAY, CONFIG, NOW)
    assert "14:00" not in after["available_times"]
    assert "13:30" not in after["available_times"]


def test_calculate_service_slots_unknown_service(db, tenant):
    from agenda.errors import NotFoundError

    with pytest.raises(NotFoundError):
        calculate_service_slots(db, tenant.company_id, 999, TUESDAY, CONFIG, NOW)


def test_calculate_service_slots_closed_day(db, tenant):
    result = calculate_service_slots(db, tenant.company_id, tenant.service_60_id, SUNDAY, CONFIG, NOW)
    assert result["available_times"] == []


def test_calculate_service_slots_service_of_other_company(db, tenant):
    from agenda.errors import NotFoundError

    with pytest.raises(NotFoundError):
        calculate_service_slots(db, tenant.company_id + 1, tenant.service_60_id, TUESDAY, CONFIG, NOW)

