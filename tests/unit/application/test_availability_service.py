"""Tests de ScheduleAvailabilityService sobre repositorios en memoria."""

from dataclasses import replace

import pytest

from salon_booking.domain.entities.branch import BranchSettings
from salon_booking.domain.entities.staff import Staff
from salon_booking.domain.value_objects import TimeRange
from tests.helpers import BRANCH_ID, TUESDAY, at, make_booking


@pytest.fixture
def availability(bundle):
    return bundle.availability_service


class TestCheckStaffAvailability:
    @pytest.mark.asyncio
    async def test_free_inside_shift(self, availability):
        assert await availability.check_staff_availability("ST-1", at(10), 60)

    @pytest.mark.asyncio
    async def test_must_fit_inside_shift(self, availability):
        """17:30 + 60 min termina después del turno de 18:00."""
        assert not await availability.check_staff_availability("ST-1", at(17, 30), 60)
        assert await availability.check_staff_availability("ST-1", at(17), 60)

    @pytest.mark.asyncio
    async def test_unknown_or_inactive_staff(self, bundle, availability):
        assert not await availability.check_staff_availability("ST-404", at(10), 30)
        bundle.staff_repo.add(bundle.staff_repo.staff["ST-1"].deactivate())
        assert not await availability.check_staff_availability("ST-1", at(10), 30)

    @pytest.mark.asyncio
    async def test_existing_booking_blocks_overlap_only(self, bundle, availability):
        await bundle.booking_repo.save(make_booking("BK-X", "ST-1", at(10), 60))

        assert not await availability.check_staff_availability("ST-1", at(10, 30), 60)
        assert await availability.check_staff_availability("ST-1", at(11), 60)
        assert await availability.check_staff_availability("ST-1", at(9), 60)
        assert await availability.check_staff_availability("ST-2", at(10), 60)

    @pytest.mark.asyncio
    async def test_excluded_booking_does_not_block(self, bundle, availability):
        await bundle.booking_repo.save(make_booking("BK-X", "ST-1", at(10), 60))
        assert await availability.check_staff_availability("ST-1", at(10, 30), 60, exclude_booking_id="BK-X")

    @pytest.mark.asyncio
    async def test_cancelled_booking_releases_time(self, bundle, availability):
        booking, _ = make_booking("BK-X", "ST-1", at(10), 60).cancel(at(8))
        await bundle.booking_repo.save(booking)
        assert await availability.check_staff_availability("ST-1", at(10), 60)

    @pytest.mark.asyncio
    async def test_time_off_blocks(self, bundle, availability):
        bundle.schedule_repo.add_time_off("ST-1", TimeRange(at(12), at(14)))
        assert not await availability.check_staff_availability("ST-1", at(13), 30)
        assert await availability.check_staff_availability("ST-1", at(14), 30)

    @pytest.mark.asyncio
    async def test_day_off_override(self, bundle, availability):
        bundle.schedule_repo.set_working_interval("ST-1", TUESDAY, None)
        assert not await availability.check_staff_availability("ST-1", at(10), 30)


class TestAvailableTimeSlots:
    @pytest.mark.asyncio
    async def test_slots_list_every_free_staff_member(self, availability):
        slots = await availability.get_available_time_slots(BRANCH_ID, TUESDAY, 60)

        assert slots[0].start == at(9)
        assert slots[0].staff_ids == ("ST-1", "ST-2", "ST-3")
        assert slots[-1].start == at(17)
        assert [s.start for s in slots] == sorted(s.start for s in slots)

    @pytest.mark.asyncio
    async def test_booked_staff_disappears_from_slot(self, bundle, availability):
        await bundle.booking_repo.save(make_booking("BK-X", "ST-1", at(10), 60))

        slots = {s.start: s.staff_ids for s in await availability.get_available_time_slots(BRANCH_ID, TUESDAY, 60)}

        assert slots[at(10)] == ("ST-2", "ST-3")
        assert slots[at(9, 30)] == ("ST-2", "ST-3")
        assert slots[at(11)] == ("ST-1", "ST-2", "ST-3")

    @pytest.mark.asyncio
    async def test_fully_booked_slot_is_absent(self, bundle, availability):
        for index, staff_id in enumerate(["ST-1", "ST-2", "ST-3"]):
            await bundle.booking_repo.save(make_booking(f"BK-{index}", staff_id, at(10), 60))

        starts = [s.start for s in await availability.get_available_time_slots(BRANCH_ID, TUESDAY, 60)]
        assert at(10) not in starts
        assert at(11) in starts

    @pytest.mark.asyncio
    async def test_past_slots_are_not_offered(self, clock, availability):
        clock.set_time(at(10, 10))
        slots = await availability.get_available_time_slots(BRANCH_ID, TUESDAY, 30)
        assert slots[0].start == at(10, 30)

    @pytest.mark.asyncio
    async def test_max_advance_days(self, bundle, branch, availability):
        bundle.branch_repo.add(replace(branch, settings=BranchSettings(max_advance_booking_days=0)))
        assert await availability.get_available_time_slots(BRANCH_ID, TUESDAY, 30) == []

    @pytest.mark.asyncio
    async def test_unknown_branch(self, availability):
        assert await availability.get_available_time_slots("BR-404", TUESDAY, 30) == []


class TestOptimalStaffAssignment:
    @pytest.mark.asyncio
    async def test_specialists_for_consecutive_services(self, availability):
        assignments = await availability.find_optimal_staff_assignment(["SV-CUT", "SV-MANI"], at(10), BRANCH_ID)

        assert [(a.service_id, a.staff_id, a.confidence) for a in assignments] == [
            ("SV-CUT", "ST-1", 1.0),
            ("SV-MANI", "ST-2", 1.0),
        ]

    @pytest.mark.asyncio
    async def test_falls_back_to_manager(self, bundle, availability):
        await bundle.booking_repo.save(make_booking("BK-X", "ST-1", at(10), 60))

        assignments = await availability.find_optimal_staff_assignment(["SV-CUT"], at(10), BRANCH_ID)

        assert [(a.staff_id, a.confidence) for a in assignments] == [("ST-3", 0.6)]

    @pytest.mark.asyncio
    async def test_prefers_least_loaded_specialist(self, bundle, branch, availability):
        bundle.staff_repo.add(Staff(id="ST-4", branch_id=BRANCH_ID, name="Dora", specialties=frozenset({"hair"})))
        bundle.schedule_repo.set_weekly_shift("ST-4", branch.operating_hours, branch.timezone)
        await bundle.booking_repo.save(make_booking("BK-X", "ST-1", at(15), 60))

        assignments = await availability.find_optimal_staff_assignment(["SV-CUT"], at(10), BRANCH_ID)

        assert assignments[0].staff_id == "ST-4"

    @pytest.mark.asyncio
    async def test_unknown_service_is_skipped(self, availability):
        assignments = await availability.find_optimal_staff_assignment(["SV-404", "SV-MANI"], at(10), BRANCH_ID)
        assert [a.service_id for a in assignments] == ["SV-MANI"]

    @pytest.mark.asyncio
    async def test_nobody_available(self, bundle, availability):
        for staff_id in ("ST-1", "ST-2", "ST-3"):
            bundle.schedule_repo.set_working_interval(staff_id, TUESDAY, None)
        assert await availability.find_optimal_staff_assignment(["SV-CUT"], at(10), BRANCH_ID) == []
