"""Domain layer for plantbook application."""

__all__ = [
    "AggregationService",
    "ExpenseSummaryService",
    "ProductionService",
    "ProfitSharingService",
    "RecordService",
    "EquipmentService",
    "ExpenseCategoryService",
]

_SERVICES = {
    "AggregationService": "plantbook.domain.aggregation",
    "ExpenseSummaryService": "plantbook.domain.expense_summary",
    "ProductionService": "plantbook.domain.production",
    "ProfitSharingService": "plantbook.domain.profit_sharing",
    "RecordService": "plantbook.domain.records",
    "EquipmentService": "plantbook.domain.equipment",
    "ExpenseCategoryService": "plantbook.domain.category",
}


# Services import the database layer, which imports domain entities; load them lazily
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
