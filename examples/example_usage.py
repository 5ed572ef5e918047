"""Example: drive the scheduling engine directly (no Flask).

Creates a shift for today the way the manager workflow would, then renders
this week's calendar and clocks in.
"""

import importlib
from datetime import time

from config import get_settings_module

from staff_scheduling.container import build_container
from staff_scheduling.core.enums import ShiftType, ViewMode
from staff_scheduling.schedules.model import ShiftSchedule


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    engine = container.engine
    today = engine.go_to_today()

    schedule_id = container.schedules_repo.create(
        schedule=ShiftSchedule(
            schedule_id="",
            staff_id="staff-demo",
            hotel_id="hotel-demo",
            schedule_date=today,
            shift_type=ShiftType.MORNING,
            shift_start=time(7, 0),
            shift_end=time(15, 0),
        )
    )

    view = engine.get_calendar_view(staff_id="staff-demo", hotel_id="hotel-demo", anchor=today, view_mode=ViewMode.WEEK)
    print(view.title)
    for day in view.dates:
        shift = view.schedule_by_date[day]
        print(day, shift.shift_type.value if shift else "-", len(view.absences_by_date[day]))

    print(engine.clock_in(staff_id="staff-demo", hotel_id="hotel-demo", schedule_id=schedule_id).to_dict())


if __name__ == "__main__":
    main()
