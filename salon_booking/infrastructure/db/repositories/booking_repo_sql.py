from dataclasses import replace
from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal

from sqlalchemy import and_, delete, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salon_booking.application.interfaces.booking_repo import (
    BookingRepo,
    StaffSlotConflictError,
    day_window,
)
from salon_booking.domain.entities.booking import Booking, BookingSource, BookingStatus
from salon_booking.domain.entities.booking_service import BookingService, ServiceStatus
from salon_booking.domain.errors import BookingAlreadyExistsError, OptimisticLockError
from salon_booking.domain.value_objects.money import Money
from salon_booking.domain.value_objects.time_range import TimeRange
from salon_booking.infrastructure.db.tables import booking_services, bookings, staff_time_claims

RELEASED_STATUSES = (BookingStatus.CANCELLED.value, BookingStatus.NO_SHOW.value)
ONE_MINUTE = timedelta(minutes=1)


def _to_db(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _from_db(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)


def claimed_minutes(period: TimeRange) -> list[datetime]:
    """
    Marcas de minuto (UTC naive) cuyo minuto completo cae dentro de [start, end).

    Los minutos cubiertos sólo en parte no se reclaman: dos intervalos que se
    tocan en un segundo intermedio no comparten fila. La consulta de solape
    previa cubre esos bordes.
    """
    start = _to_db(period.start)
    end = _to_db(period.end)
    cursor = start.replace(second=0, microsecond=0)
    if cursor < start:
        cursor += ONE_MINUTE
    minutes = []
    while cursor + ONE_MINUTE <= end:
        minutes.append(cursor)
        cursor += ONE_MINUTE
    return minutes


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # === Escritura ===

    async def add(self, booking: Booking) -> Booking:
        if await self._stored_version(booking.id) is not None:
            raise BookingAlreadyExistsError(booking.id)

        try:
            await self._session.execute(
                insert(bookings).values(
                    id=booking.id, lock_version=booking.lock_version, **self._booking_values(booking)
                )
            )
        except IntegrityError as exc:
            raise BookingAlreadyExistsError(booking.id) from exc

        await self._write_lines_and_claims(booking)
        return booking

    async def save(self, booking: Booking) -> Booking:
        stored_version = await self._stored_version(booking.id)

        values = self._booking_values(booking)
        if stored_version is None:
            await self._session.execute(
                insert(bookings).values(id=booking.id, lock_version=booking.lock_version, **values)
            )
            persisted = booking
        else:
            stmt = (
                update(bookings)
                .where(bookings.c.id == booking.id, bookings.c.lock_version == booking.lock_version)
                .values(lock_version=bookings.c.lock_version + 1, **values)
            )
            updated = await self._session.execute(stmt)
            if updated.rowcount == 0:
                raise OptimisticLockError(booking.id, booking.lock_version, stored_version)
            persisted = replace(booking, lock_version=booking.lock_version + 1)

        await self._write_lines_and_claims(booking)
        return persisted

    async def _stored_version(self, booking_id: str) -> int | None:
        result = await self._session.execute(
            select(bookings.c.lock_version).where(bookings.c.id == booking_id)
        )
        return result.scalar()

    async def _write_lines_and_claims(self, booking: Booking) -> None:
        await self._session.execute(delete(booking_services).where(booking_services.c.booking_id == booking.id))
        if booking.services:
            await self._session.execute(
                insert(booking_services),
                [self._line_values(item, position) for position, item in enumerate(booking.services)],
            )

        await self._replace_claims(booking)

    async def _replace_claims(self, booking: Booking) -> None:
        await self._session.execute(delete(staff_time_claims).where(staff_time_claims.c.booking_id == booking.id))

        for staff_id, period in booking.staff_intervals():
            conflicting = await self._find_overlapping_booking(staff_id, period, booking.id)
            if conflicting is not None:
                raise StaffSlotConflictError(staff_id, conflicting)

            rows = [
                {"staff_id": staff_id, "minute_at": minute, "booking_id": booking.id}
                for minute in claimed_minutes(period)
            ]
            try:
                await self._session.execute(insert(staff_time_claims), rows)
            except IntegrityError as exc:
                raise StaffSlotConflictError(staff_id) from exc

    async def _find_overlapping_booking(
        self, staff_id: str, period: TimeRange, booking_id: str
    ) -> str | None:
        stmt = (
            select(booking_services.c.booking_id)
            .select_from(booking_services.join(bookings, bookings.c.id == booking_services.c.booking_id))
            .where(
                booking_services.c.staff_id == staff_id,
                booking_services.c.booking_id != booking_id,
                booking_services.c.status != ServiceStatus.CANCELLED.value,
                bookings.c.status.notin_(RELEASED_STATUSES),
                booking_services.c.start_time < _to_db(period.end),
                booking_services.c.end_time > _to_db(period.start),
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar()

    def _booking_values(self, booking: Booking) -> dict:
        return {
            "branch_id": booking.branch_id,
            "customer_id": booking.customer_id,
            "scheduled_at": _to_db(booking.scheduled_at),
            "end_time": _to_db(booking.end_time),
            "duration_minutes": booking.duration_minutes,
            "total_amount": booking.total_amount.amount,
            "deposit_paid": booking.deposit_paid.amount,
            "currency_code": booking.currency_code,
            "source": booking.source.value,
            "status": booking.status.value,
            "notes": booking.notes,
            "metadata_json": dict(booking.metadata),
            "created_at": _to_db(booking.created_at),
            "confirmed_at": _to_db(booking.confirmed_at),
            "completed_at": _to_db(booking.completed_at),
            "cancelled_at": _to_db(booking.cancelled_at),
            "cancellation_reason": booking.cancellation_reason,
            "no_show_at": _to_db(booking.no_show_at),
        }

    @staticmethod
    def _line_values(item: BookingService, position: int) -> dict:
        return {
            "id": item.id,
            "booking_id": item.booking_id,
            "position": position,
            "service_id": item.service_id,
            "staff_id": item.staff_id,
            "start_time": _to_db(item.start_time),
            "end_time": _to_db(item.end_time),
            "duration_minutes": item.duration_minutes,
            "price": item.price.amount,
            "discount": item.discount.amount,
            "status": item.status.value,
        }

    # === Lectura ===

    async def find_by_id(self, booking_id: str) -> Booking | None:
        found = await self._load([booking_id])
        return found[0] if found else None

    async def find_by_branch_and_date(
        self, branch_id: str, day: date, tz: tzinfo = timezone.utc
    ) -> list[Booking]:
        start, end = (_to_db(value) for value in day_window(day, tz))
        stmt = select(bookings.c.id).where(
            bookings.c.branch_id == branch_id,
            bookings.c.scheduled_at < end,
            or_(
                bookings.c.end_time > start,
                and_(bookings.c.duration_minutes == 0, bookings.c.scheduled_at >= start),
            ),
        )
        result = await self._session.execute(stmt)
        return await self._load(list(result.scalars()))

    async def find_by_customer_and_date_range(
        self, customer_id: str, start: datetime, end: datetime
    ) -> list[Booking]:
        stmt = select(bookings.c.id).where(
            bookings.c.customer_id == customer_id,
            bookings.c.scheduled_at >= _to_db(start),
            bookings.c.scheduled_at < _to_db(end),
        )
        result = await self._session.execute(stmt)
        return await self._load(list(result.scalars()))

    async def find_by_staff_and_date(
        self, staff_id: str, day: date, tz: tzinfo = timezone.utc
    ) -> list[Booking]:
        start, end = (_to_db(value) for value in day_window(day, tz))
        stmt = (
            select(booking_services.c.booking_id)
            .where(
                booking_services.c.staff_id == staff_id,
                booking_services.c.start_time < end,
                booking_services.c.end_time > start,
            )
            .distinct()
        )
        result = await self._session.execute(stmt)
        return await self._load(list(result.scalars()))

    async def _load(self, booking_ids: list[str]) -> list[Booking]:
        if not booking_ids:
            return []

        result = await self._session.execute(
            select(bookings)
            .where(bookings.c.id.in_(booking_ids))
            .order_by(bookings.c.scheduled_at, bookings.c.id)
        )
        rows = result.mappings().all()
        currencies = {row["id"]: row["currency_code"] for row in rows}

        line_result = await self._session.execute(
            select(booking_services)
            .where(booking_services.c.booking_id.in_(booking_ids))
            .order_by(booking_services.c.booking_id, booking_services.c.position)
        )
        lines: dict[str, list[BookingService]] = {}
        for line in line_result.mappings():
            lines.setdefault(line["booking_id"], []).append(
                self._line_from_row(line, currencies[line["booking_id"]])
            )

        return [self._booking_from_row(row, lines.get(row["id"], [])) for row in rows]

    @staticmethod
    def _line_from_row(row, currency_code: str) -> BookingService:
        return BookingService(
            id=row["id"],
            booking_id=row["booking_id"],
            service_id=row["service_id"],
            start_time=_from_db(row["start_time"]),
            duration_minutes=row["duration_minutes"],
            price=Money(Decimal(row["price"]), currency_code),
            staff_id=row["staff_id"],
            discount=Money(Decimal(row["discount"]), currency_code),
            status=ServiceStatus(row["status"]),
        )

    @staticmethod
    def _booking_from_row(row, services: list[BookingService]) -> Booking:
        return Booking(
            id=row["id"],
            branch_id=row["branch_id"],
            customer_id=row["customer_id"],
            scheduled_at=_from_db(row["scheduled_at"]),
            currency_code=row["currency_code"],
            source=BookingSource(row["source"]),
            status=BookingStatus(row["status"]),
            services=tuple(services),
            deposit_paid=Money(Decimal(row["deposit_paid"]), row["currency_code"]),
            notes=row["notes"],
            metadata=dict(row["metadata_json"] or {}),
            created_at=_from_db(row["created_at"]),
            confirmed_at=_from_db(row["confirmed_at"]),
            completed_at=_from_db(row["completed_at"]),
            cancelled_at=_from_db(row["cancelled_at"]),
            cancellation_reason=row["cancellation_reason"],
            no_show_at=_from_db(row["no_show_at"]),
            lock_version=row["lock_version"],
        )
