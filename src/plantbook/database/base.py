"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from plantbook.domain.entities import (
    Equipment,
    ExpenseCategory,
    TransactionRecord,
    DailyProductionEntry,
    MonthlyProductionSummary,
    ProfitSharingRecord,
    RecordCategory,
)


class Database(ABC):
    """Abstract database interface for plantbook (the record store)."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Equipment operations
    @abstractmethod
    def create_equipment(self, equipment_code: str, equipment_name: str, equipment_type: str) -> int:
        """Register equipment. Returns equipment ID."""
        pass

    @abstractmethod
    def get_equipment(self, equipment_id: int) -> Optional[Equipment]:
        """Get equipment by ID."""
        pass

    @abstractmethod
    def get_equipment_by_code(self, equipment_code: str) -> Optional[Equipment]:
        """Get equipment by code."""
        pass

    @abstractmethod
    def list_equipment(self, equipment_type: Optional[str] = None) -> list[Equipment]:
        """List equipment, optionally filtered by type."""
        pass

    @abstractmethod
    def update_equipment(
        self,
        equipment_id: int,
        equipment_name: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Update equipment name and/or active flag."""
        pass

    @abstractmethod
    def delete_equipment(self, equipment_id: int) -> None:
        """Delete equipment. Records booked against it are kept."""
        pass

    # Expense category operations
    @abstractmethod
    def create_expense_category(
        self, category_code: str, category_name: str, description: Optional[str] = None
    ) -> int:
        """Create an expense category. Returns category ID."""
        pass

    @abstractmethod
    def list_expense_categories(self) -> list[ExpenseCategory]:
        """List all expense categories."""
        pass

    # Transaction record operations
    @abstractmethod
    def create_record(
        self,
        category: RecordCategory,
        record_date: Optional[date],
        amount: Decimal,
        misc_expense: Decimal = Decimal("0"),
        equipment_id: Optional[int] = None,
        equipment_name: Optional[str] = None,
        expense_category: Optional[str] = None,
        employee_name: Optional[str] = None,
        salary_month: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a transaction record. Returns record ID."""
        pass

    @abstractmethod
    def get_record(self, record_id: int) -> Optional[TransactionRecord]:
        """Get transaction record by ID."""
        pass

    @abstractmethod
    def replace_record(self, record_id: int, fields: dict[str, Any]) -> None:
        """Replace every editable field of a record.

        Args:
            record_id: Record ID
            fields: Column values keyed by the create_record argument names,
                except ``category``, which cannot change
        """
        pass

    @abstractmethod
    def delete_record(self, record_id: int) -> None:
        """Delete a transaction record."""
        pass

    @abstractmethod
    def list_records(
        self,
        category: Optional[RecordCategory] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionRecord]:
        """List transaction records with optional filters.

        Args:
            category: Optional record category filter
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
        """
        pass

    # Daily production operations
    @abstractmethod
    def create_daily_production(
        self,
        production_date: date,
        day_name: str,
        gravel_cft: Decimal,
        clay_dust_percent: Decimal,
        clay_dust_cft: Decimal,
        net_aggregate_cft: Decimal,
        notes: Optional[str] = None,
    ) -> int:
        """Create a daily production entry. Returns entry ID."""
        pass

    @abstractmethod
    def get_daily_production(self, entry_id: int) -> Optional[DailyProductionEntry]:
        """Get daily production entry by ID."""
        pass

    @abstractmethod
    def get_daily_production_by_date(self, production_date: date) -> Optional[DailyProductionEntry]:
        """Get the daily production entry for a date."""
        pass

    @abstractmethod
    def replace_daily_production(self, entry_id: int, fields: dict[str, Any]) -> None:
        """Replace every editable field of a daily production entry."""
        pass

    @abstractmethod
    def delete_daily_production(self, entry_id: int) -> None:
        """Delete a daily production entry."""
        pass

    @abstractmethod
    def list_daily_production(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[DailyProductionEntry]:
        """List daily production entries in date order."""
        pass

    # Monthly production summary operations
    @abstractmethod
    def get_monthly_summary(self, summary_year: int, summary_month: str) -> Optional[MonthlyProductionSummary]:
        """Get the monthly production summary for a year and month name."""
        pass

    @abstractmethod
    def create_monthly_summary(self, columns: dict[str, Any]) -> int:
        """Create a monthly production summary. Returns summary ID.

        Raises:
            ConflictError: If a summary already exists for the year and month
        """
        pass

    @abstractmethod
    def update_monthly_summary(self, summary_id: int, columns: dict[str, Any]) -> None:
        """Overwrite a monthly production summary in place."""
        pass

    @abstractmethod
    def list_monthly_summaries(self, summary_year: Optional[int] = None) -> list[MonthlyProductionSummary]:
        """List monthly production summaries, optionally for one year."""
        pass

    # Profit sharing operations
    @abstractmethod
    def get_profit_sharing(self, period_year: int, period_month: str) -> Optional[ProfitSharingRecord]:
        """Get the profit sharing record for a year and month name."""
        pass

    @abstractmethod
    def create_profit_sharing(self, columns: dict[str, Any]) -> int:
        """Create a profit sharing record. Returns record ID.

        Raises:
            ConflictError: If a record already exists for the year and month
        """
        pass

    @abstractmethod
    def update_profit_sharing(self, record_id: int, columns: dict[str, Any]) -> None:
        """Overwrite a profit sharing record in place."""
        pass

    @abstractmethod
    def list_profit_sharing(self, period_year: Optional[int] = None) -> list[ProfitSharingRecord]:
        """List profit sharing records, optionally for one year."""
        pass
