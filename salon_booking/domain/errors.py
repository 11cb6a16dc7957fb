"""Excepciones de dominio para el motor de reservas del salón."""

from datetime import datetime


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Agenda ===


class InvalidScheduleTimeError(DomainError):
    """La fecha/hora solicitada no está en el futuro."""

    def __init__(self, scheduled_at: datetime):
        super().__init__(
            message=f"La reserva debe programarse en el futuro: {scheduled_at.isoformat()}",
            code="INVALID_SCHEDULE_TIME",
        )
        self.scheduled_at = scheduled_at


class BranchNotAvailableError(DomainError):
    """La sucursal no existe o está inactiva."""

    def __init__(self, branch_id: str):
        super().__init__(
            message=f"Sucursal no encontrada o inactiva: {branch_id}",
            code="BRANCH_NOT_AVAILABLE",
        )
        self.branch_id = branch_id


class InvalidServicesError(DomainError):
    """Uno o más servicios no existen o están inactivos."""

    def __init__(self, service_ids: list[str]):
        super().__init__(
            message=f"Servicios no encontrados o inactivos: {', '.join(service_ids)}",
            code="INVALID_SERVICES",
        )
        self.service_ids = service_ids


class OutsideOperatingHoursError(DomainError):
    """La hora solicitada cae fuera del horario de la sucursal."""

    def __init__(self, branch_id: str, scheduled_at: datetime):
        super().__init__(
            message=f"Reserva fuera del horario de la sucursal {branch_id}: {scheduled_at.isoformat()}",
            code="OUTSIDE_OPERATING_HOURS",
        )
        self.branch_id = branch_id
        self.scheduled_at = scheduled_at


class InsufficientNoticeError(DomainError):
    """No se cumple la anticipación mínima de la sucursal."""

    def __init__(self, min_notice_hours: float):
        super().__init__(
            message=f"La reserva requiere al menos {min_notice_hours:g} horas de anticipación",
            code="INSUFFICIENT_NOTICE",
        )
        self.min_notice_hours = min_notice_hours


class TimeSlotUnavailableError(DomainError):
    """El horario solicitado no está entre los horarios libres."""

    def __init__(self, requested_at: datetime):
        super().__init__(
            message=f"Horario no disponible: {requested_at.isoformat()}",
            code="TIME_SLOT_UNAVAILABLE",
        )
        self.requested_at = requested_at


# === Errores de Personal ===


class StaffNotAvailableError(DomainError):
    """El profesional ya tiene ocupado el intervalo solicitado."""

    def __init__(self, staff_id: str, start: datetime | None = None):
        when = f" a las {start.isoformat()}" if start else ""
        super().__init__(
            message=f"El profesional {staff_id} no está disponible{when}",
            code="STAFF_NOT_AVAILABLE",
        )
        self.staff_id = staff_id
        self.start = start


class InvalidAssignmentError(DomainError):
    """El profesional o el servicio de la asignación no existen."""

    def __init__(self, staff_id: str, service_id: str):
        super().__init__(
            message=f"Profesional {staff_id} o servicio {service_id} no encontrado",
            code="INVALID_ASSIGNMENT",
        )
        self.staff_id = staff_id
        self.service_id = service_id


class InvalidStaffAssignmentError(DomainError):
    """El profesional no puede realizar la categoría del servicio."""

    def __init__(self, staff_id: str, category: str):
        super().__init__(
            message=f"El profesional {staff_id} no puede realizar servicios de '{category}'",
            code="INVALID_STAFF_ASSIGNMENT",
        )
        self.staff_id = staff_id
        self.category = category


class InvalidCommissionRateError(DomainError):
    def __init__(self, rate: float):
        super().__init__(
            message=f"La comisión debe estar entre 0 y 100: {rate}",
            code="INVALID_COMMISSION_RATE",
        )
        self.rate = rate


# === Errores de Reserva ===


class BookingNotFoundError(DomainError):
    """La reserva no existe."""

    def __init__(self, booking_id: str):
        super().__init__(
            message=f"Reserva no encontrada: {booking_id}",
            code="BOOKING_NOT_FOUND",
        )
        self.booking_id = booking_id


class BookingAlreadyExistsError(DomainError):
    """Ya existe una reserva con ese id."""

    def __init__(self, booking_id: str):
        super().__init__(
            message=f"Ya existe una reserva con id: {booking_id}",
            code="BOOKING_ALREADY_EXISTS",
        )
        self.booking_id = booking_id


class BookingLockedError(DomainError):
    """Los servicios sólo pueden modificarse mientras la reserva está pendiente."""

    def __init__(self, booking_id: str, current_status: str):
        super().__init__(
            message=f"No se pueden modificar servicios de la reserva {booking_id} en estado '{current_status}'",
            code="BOOKING_LOCKED",
        )
        self.booking_id = booking_id
        self.current_status = current_status


class NoServicesError(DomainError):
    """No se puede confirmar una reserva sin servicios."""

    def __init__(self, booking_id: str):
        super().__init__(
            message=f"No se puede confirmar la reserva {booking_id} sin servicios",
            code="NO_SERVICES",
        )
        self.booking_id = booking_id


class InvalidStatusTransitionError(DomainError):
    """El estado actual no permite la operación."""

    def __init__(self, current_status: str, expected_status: str | list[str], operation: str):
        expected = expected_status if isinstance(expected_status, str) else ", ".join(expected_status)
        super().__init__(
            message=f"No se puede {operation}: estado actual '{current_status}', esperado '{expected}'",
            code="INVALID_STATUS_TRANSITION",
        )
        self.current_status = current_status
        self.expected_status = expected_status
        self.operation = operation


class InvalidDurationError(DomainError):
    def __init__(self, duration_minutes: int):
        super().__init__(
            message=f"La duración del servicio debe ser positiva: {duration_minutes}",
            code="INVALID_DURATION",
        )
        self.duration_minutes = duration_minutes


class InvalidDiscountError(DomainError):
    """El descuento supera el precio del servicio."""

    def __init__(self, discount: str, price: str):
        super().__init__(
            message=f"El descuento {discount} no puede superar el precio {price}",
            code="INVALID_DISCOUNT",
        )


class RescheduleNotAllowedError(DomainError):
    def __init__(self, booking_id: str):
        super().__init__(
            message=f"La reserva {booking_id} no puede reprogramarse",
            code="RESCHEDULE_NOT_ALLOWED",
        )
        self.booking_id = booking_id


class CancellationNotAllowedError(DomainError):
    def __init__(self, booking_id: str):
        super().__init__(
            message=f"La reserva {booking_id} no puede cancelarse",
            code="CANCELLATION_NOT_ALLOWED",
        )
        self.booking_id = booking_id


class NoShowNotAllowedError(DomainError):
    """Sólo una reserva confirmada cuya hora ya pasó puede marcarse como no-show."""

    def __init__(self, booking_id: str, current_status: str):
        super().__init__(
            message=f"La reserva {booking_id} en estado '{current_status}' no puede marcarse como no-show",
            code="NO_SHOW_NOT_ALLOWED",
        )
        self.booking_id = booking_id
        self.current_status = current_status


class OptimisticLockError(DomainError):
    """Conflicto de concurrencia al guardar la reserva."""

    def __init__(self, booking_id: str, expected_version: int, actual_version: int):
        super().__init__(
            message=f"Conflicto de concurrencia en reserva {booking_id}: "
            f"versión esperada {expected_version}, versión actual {actual_version}",
            code="OPTIMISTIC_LOCK_ERROR",
        )
        self.booking_id = booking_id
        self.expected_version = expected_version
        self.actual_version = actual_version


# === Errores de Value Objects ===


class InvalidMoneyError(DomainError):
    """Monto monetario inválido (negativo)."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_AMOUNT")


class InvalidCurrencyError(DomainError):
    def __init__(self, currency_code: str):
        super().__init__(
            message=f"currency_code debe ser un código de 3 letras: {currency_code!r}",
            code="INVALID_CURRENCY",
        )


class CurrencyMismatchError(DomainError):
    """Operación entre montos de distinta moneda."""

    def __init__(self, left: str, right: str):
        super().__init__(
            message=f"Monedas distintas: {left} vs {right}",
            code="CURRENCY_MISMATCH",
        )
        self.left = left
        self.right = right


class DivisionByZeroError(DomainError):
    def __init__(self):
        super().__init__(message="No se puede dividir entre cero", code="DIVISION_BY_ZERO")


class InvalidEmailError(DomainError):
    def __init__(self, value: str):
        super().__init__(message=f"Formato de email inválido: {value!r}", code="INVALID_EMAIL")


class InvalidPhoneError(DomainError):
    def __init__(self, value: str):
        super().__init__(message=f"Formato de teléfono inválido: {value!r}", code="INVALID_PHONE")


class MissingDepositError(DomainError):
    def __init__(self, service_id: str):
        super().__init__(
            message=f"El servicio {service_id} requiere depósito pero no define el monto",
            code="MISSING_DEPOSIT",
        )
        self.service_id = service_id


class InvalidTimeRangeError(DomainError):
    """Rango de tiempo inválido."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_TIME_RANGE")


class InvalidOperatingHoursError(DomainError):
    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_OPERATING_HOURS")
