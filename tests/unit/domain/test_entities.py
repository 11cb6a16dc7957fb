"""Tests de las entidades del catálogo y de la línea de servicio."""

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from salon_booking.domain.entities.booking_service import BookingService, ServiceStatus
from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.customer import Customer
from salon_booking.domain.entities.service import Service
from salon_booking.domain.entities.staff import Staff, StaffRole
from salon_booking.domain.errors import (
    InvalidCommissionRateError,
    InvalidDiscountError,
    InvalidDurationError,
    InvalidStatusTransitionError,
    MissingDepositError,
)
from salon_booking.domain.value_objects import DayHours, Email, OperatingHours, PhoneNumber
from tests.helpers import UTC, at, usd


class TestStaff:
    def test_stylist_performs_only_its_specialties(self):
        staff = Staff(id="ST-1", branch_id="BR-1", name="Ana", specialties=frozenset({"hair"}))
        assert staff.can_perform_service("hair")
        assert not staff.can_perform_service("nails")

    def test_elevated_roles_perform_any_category(self):
        manager = Staff(id="ST-3", branch_id="BR-1", name="Carla", role=StaffRole.MANAGER)
        assert manager.can_perform_service("nails")
        assert not manager.is_specialist_in("nails")

    def test_inactive_staff_cannot_perform(self):
        staff = Staff(id="ST-1", branch_id="BR-1", name="Ana", specialties=frozenset({"hair"}))
        assert not staff.deactivate().can_perform_service("hair")
        assert staff.deactivate().activate().can_perform_service("hair")

    def test_specialties_are_normalized_to_frozenset(self):
        staff = Staff(id="ST-1", branch_id="BR-1", name="Ana", specialties={"hair"})
        assert isinstance(staff.specialties, frozenset)
        assert staff.add_specialty("nails").specialties == {"hair", "nails"}
        assert staff.remove_specialty("hair").specialties == frozenset()

    @pytest.mark.parametrize("rate", [-1, 100.5])
    def test_commission_rate_bounds(self, rate):
        with pytest.raises(InvalidCommissionRateError):
            Staff(id="ST-1", branch_id="BR-1", name="Ana", commission_rate=rate)

    def test_calculate_commission(self):
        staff = Staff(id="ST-1", branch_id="BR-1", name="Ana").update_commission_rate(15)
        assert staff.calculate_commission(usd(200)).amount == Decimal("30.00")


class TestCustomer:
    def make(self) -> Customer:
        return Customer(
            id="CU-1",
            email=Email("ana@example.com"),
            name="Ana",
            phone=PhoneNumber("5551234567"),
            date_of_birth=date(1990, 6, 10),
        )

    def test_tags_are_unique(self):
        customer = self.make().add_tag("frecuente").add_tag("frecuente")
        assert customer.tags == ("frecuente",)
        assert customer.remove_tag("frecuente").tags == ()

    def test_preferences_merge(self):
        customer = self.make().update_preferences({"estilista": "ST-1"})
        customer = customer.update_preferences({"bebida": "café"})
        assert customer.preferences == {"estilista": "ST-1", "bebida": "café"}

    def test_customer_with_preferences_is_hashable(self):
        customer = self.make().update_preferences({"estilista": "ST-1"})
        assert hash(customer) == hash(self.make().update_preferences({"estilista": "ST-1"}))

    def test_age(self):
        customer = self.make()
        assert customer.age(date(2025, 6, 9)) == 34
        assert customer.age(date(2025, 6, 10)) == 35

    def test_update_contact_keeps_missing_fields(self):
        customer = self.make().update_contact_info(email=Email("nuevo@example.com"))
        assert customer.email.value == "nuevo@example.com"
        assert customer.phone.value == "5551234567"


class TestService:
    def test_duration_must_be_positive(self):
        with pytest.raises(InvalidDurationError):
            Service(id="SV", name="X", category="hair", duration_minutes=0, price=usd(10))

    def test_deposit_required_needs_amount(self):
        with pytest.raises(MissingDepositError) as exc:
            Service(id="SV", name="X", category="hair", duration_minutes=30, price=usd(10), requires_deposit=True)
        assert exc.value.code == "MISSING_DEPOSIT"

    def test_blocked_minutes_include_buffer(self):
        service = Service(id="SV", name="X", category="hair", duration_minutes=90, price=usd(10), buffer_minutes=30)
        assert service.blocked_minutes == 120


class TestBranch:
    def make(self, timezone: str = "UTC") -> Branch:
        return Branch(
            id="BR-1",
            name="Centro",
            timezone=timezone,
            operating_hours=OperatingHours.weekday_weekend(
                weekday=DayHours.from_strings("09:00", "18:00", [("13:00", "14:00")]),
                weekend=DayHours.closed_day(),
            ),
        )

    def test_branch_is_hashable(self):
        assert hash(self.make()) == hash(self.make())

    def test_operating_hours_are_half_open(self):
        branch = self.make()
        assert branch.is_within_operating_hours(at(9))
        assert not branch.is_within_operating_hours(at(18))
        assert not branch.is_within_operating_hours(at(13, 30))

    def test_closed_weekend(self):
        saturday = datetime(2025, 6, 7, 12, tzinfo=UTC)
        assert not self.make().is_within_operating_hours(saturday)

    def test_hours_are_local_to_branch(self):
        branch = self.make("America/Mexico_City")
        # 15:00 UTC son las 09:00 en Ciudad de México
        assert branch.is_within_operating_hours(at(15))
        assert not branch.is_within_operating_hours(at(14, 59))
        assert branch.to_local(at(15)).time() == time(9)

    def test_inactive_branch_is_never_open(self):
        branch = Branch(id="BR-2", name="X", operating_hours=OperatingHours.weekday_weekend(
            weekday=DayHours(), weekend=DayHours()), is_active=False)
        assert not branch.is_within_operating_hours(at(10))


class TestBookingServiceLine:
    def make(self, **overrides) -> BookingService:
        values = dict(
            id="L1",
            booking_id="BK-1",
            service_id="SV-CUT",
            start_time=at(10),
            duration_minutes=45,
            price=usd(100),
        )
        values.update(overrides)
        return BookingService(**values)

    def test_end_time_and_range(self):
        item = self.make()
        assert item.end_time == at(10, 45)
        assert item.time_range.duration_minutes == 45

    def test_duration_must_be_positive(self):
        with pytest.raises(InvalidDurationError):
            self.make(duration_minutes=0)

    def test_discount_cannot_exceed_price(self):
        with pytest.raises(InvalidDiscountError) as exc:
            self.make().apply_discount(usd(101))
        assert exc.value.code == "INVALID_DISCOUNT"

    def test_final_price(self):
        assert self.make().apply_discount(usd(20)).final_price == usd(80)

    def test_assign_empty_staff_clears_it(self):
        item = self.make(staff_id="ST-1").assign_staff("")
        assert item.staff_id is None

    def test_status_flow(self):
        item = self.make().start().complete()
        assert item.status == ServiceStatus.COMPLETED
        with pytest.raises(InvalidStatusTransitionError):
            item.cancel()

    def test_complete_requires_in_progress(self):
        with pytest.raises(InvalidStatusTransitionError):
            self.make().complete()
