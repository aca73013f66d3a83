"""SQLAlchemy models for plantbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(14, 2)
QUANTITY = Numeric(14, 4)
# Monthly snapshot and profit split figures, stored at the four places the engines round to.
FIGURE = Numeric(14, 4)


class Equipment(Base):
    """Equipment register model."""

    __tablename__ = "equipment"

    id = Column(Integer, primary_key=True)
    equipment_code = Column(String, unique=True, nullable=False)
    equipment_name = Column(String, nullable=False)
    equipment_type = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class ExpenseCategory(Base):
    """Expense category reference model."""

    __tablename__ = "expense_categories"

    id = Column(Integer, primary_key=True)
    category_code = Column(String, unique=True, nullable=False)
    category_name = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class TransactionRecord(Base):
    """Cost record model shared by every record category.

    ``equipment_id`` is a plain column rather than a foreign key so records
    outlive the equipment they were booked against; ``equipment_name`` keeps
    the name the equipment had at entry time.
    """

    __tablename__ = "transaction_records"

    id = Column(Integer, primary_key=True)
    category = Column(String, nullable=False, index=True)
    record_date = Column(Date, nullable=True, index=True)
    salary_month = Column(String, nullable=True)
    amount = Column(MONEY, nullable=False, default=0)
    misc_expense = Column(MONEY, nullable=False, default=0)
    equipment_id = Column(Integer, nullable=True)
    equipment_name = Column(String, nullable=True)
    expense_category = Column(String, nullable=True)
    employee_name = Column(String, nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class DailyProduction(Base):
    """Daily production model."""

    __tablename__ = "daily_production"

    id = Column(Integer, primary_key=True)
    production_date = Column(Date, unique=True, nullable=False)
    day_name = Column(String, nullable=False)
    gravel_cft = Column(QUANTITY, nullable=False)
    clay_dust_percent = Column(Numeric(7, 4), nullable=False)
    clay_dust_cft = Column(QUANTITY, nullable=False)
    net_aggregate_cft = Column(QUANTITY, nullable=False)
    notes = Column(String, nullable=True)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class MonthlyProductionSummary(Base):
    """Monthly sales snapshot model, one row per (year, month name)."""

    __tablename__ = "monthly_production_summary"

    id = Column(Integer, primary_key=True)
    summary_month = Column(String, nullable=False)
    summary_year = Column(Integer, nullable=False)
    total_net_aggregate_cft = Column(FIGURE, nullable=False)
    sold_at_site_cft = Column(FIGURE, nullable=False)
    sold_at_site_amount = Column(FIGURE, nullable=False)
    approx_per_cft_cost = Column(FIGURE, nullable=False)
    allowance_percent = Column(FIGURE, nullable=False)
    total_produced_raw = Column(FIGURE, nullable=False)
    allowance_deduction = Column(FIGURE, nullable=False)
    total_produced = Column(FIGURE, nullable=False)
    stock_at_site_cft = Column(FIGURE, nullable=False)
    per_cft_cost = Column(FIGURE, nullable=False)
    cost_of_stocked_material = Column(FIGURE, nullable=False)
    total_revenue = Column(FIGURE, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("summary_year", "summary_month", name="uq_production_summary_period"),
    )


class ProfitSharing(Base):
    """Profit sharing model, one row per (period_month, period_year)."""

    __tablename__ = "profit_sharing"

    id = Column(Integer, primary_key=True)
    period_month = Column(String, nullable=False)
    period_year = Column(Integer, nullable=False)
    total_revenue = Column(FIGURE, nullable=False)
    total_expense = Column(FIGURE, nullable=False)
    net_profit = Column(FIGURE, nullable=False)
    partner_a_percent = Column(FIGURE, nullable=False)
    partner_b_percent = Column(FIGURE, nullable=False)
    partner_a_amount = Column(FIGURE, nullable=False)
    partner_b_amount = Column(FIGURE, nullable=False)
    partner_a_sub_amount = Column(FIGURE, nullable=False)
    partner_b_sub_amount = Column(FIGURE, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("period_year", "period_month", name="uq_profit_sharing_period"),
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
