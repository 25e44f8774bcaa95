"""Shared pytest fixtures for rentaltax tests."""

import tempfile
import os
from datetime import date
import pytest

from rentaltax.database.factories import create_sqlite_database
from rentaltax.domain.csv_export import CSVExportService
from rentaltax.domain.entities import default_inputs
from rentaltax.domain.model import PropertyModelService
from rentaltax.domain.scenario import ScenarioService
from rentaltax.domain.serialization import dumps_inputs


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def model_service():
    """Create a PropertyModelService with the default rate table."""
    return PropertyModelService()


@pytest.fixture
def scenario_service(temp_db):
    """Create a ScenarioService with a temporary database."""
    return ScenarioService(temp_db)


@pytest.fixture
def export_service():
    """Create a CSVExportService."""
    return CSVExportService()


@pytest.fixture
def sample_inputs():
    """Default inputs with a fixed settlement date.

    These are the worked example figures: $550/week with 2 vacant weeks,
    $7,000 expenses, $480,000 at 6% and $12,500 depreciation.
    """
    return default_inputs(settlement_date=date(2024, 7, 1))


@pytest.fixture
def sample_results(model_service, sample_inputs):
    """Results computed from the sample inputs."""
    return model_service.recompute(sample_inputs)


@pytest.fixture
def sample_scenario(scenario_service, sample_inputs):
    """Create a saved scenario for testing."""
    return scenario_service.save_scenario("Test Scenario", sample_inputs)


@pytest.fixture
def inputs_file(tmp_path, sample_inputs):
    """Write the sample inputs to a JSON file and return its path."""
    path = tmp_path / "inputs.json"
    path.write_text(dumps_inputs(sample_inputs), encoding="utf-8")
    return str(path)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
