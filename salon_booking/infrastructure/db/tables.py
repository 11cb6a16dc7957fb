from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

# Fechas en UTC sin zona horaria

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("branch_id", String(64), nullable=False),
    Column("customer_id", String(64), nullable=False),
    Column("scheduled_at", DateTime, nullable=False),
    Column("end_time", DateTime, nullable=False),
    Column("duration_minutes", Integer, nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("deposit_paid", Numeric(12, 2), nullable=False),
    Column("currency_code", String(3), nullable=False),
    Column("source", String(16), nullable=False),
    Column("status", String(16), nullable=False),
    Column("notes", Text),
    Column("metadata_json", JSON, nullable=False, default=dict),
    Column("created_at", DateTime),
    Column("confirmed_at", DateTime),
    Column("completed_at", DateTime),
    Column("cancelled_at", DateTime),
    Column("cancellation_reason", String(500)),
    Column("no_show_at", DateTime),
    Column("lock_version", Integer, nullable=False, default=0),
    Index("ix_bookings_branch_scheduled", "branch_id", "scheduled_at"),
    Index("ix_bookings_customer_scheduled", "customer_id", "scheduled_at"),
)

booking_services = Table(
    "booking_services",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("booking_id", String(64), nullable=False),
    Column("position", Integer, nullable=False),
    Column("service_id", String(64), nullable=False),
    Column("staff_id", String(64)),
    Column("start_time", DateTime, nullable=False),
    Column("end_time", DateTime, nullable=False),
    Column("duration_minutes", Integer, nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("discount", Numeric(12, 2), nullable=False),
    Column("status", String(16), nullable=False),
    Index("ix_booking_services_booking", "booking_id"),
    Index("ix_booking_services_staff_start", "staff_id", "start_time"),
)

# Un registro por minuto ocupado; la restricción única impide que dos
# escritores concurrentes reserven al mismo profesional en minutos comunes.
staff_time_claims = Table(
    "staff_time_claims",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("staff_id", String(64), nullable=False),
    Column("minute_at", DateTime, nullable=False),
    Column("booking_id", String(64), nullable=False),
    UniqueConstraint("staff_id", "minute_at", name="uq_staff_time_claims_staff_minute"),
    Index("ix_staff_time_claims_booking", "booking_id"),
)
