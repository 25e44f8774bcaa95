"""Domain layer for rentaltax application.

ScenarioService depends on the database layer and is imported from
rentaltax.domain.scenario directly.
"""

from rentaltax.domain.model import PropertyModelService
from rentaltax.domain.csv_export import CSVExportService

__all__ = [
    "PropertyModelService",
    "CSVExportService",
]
