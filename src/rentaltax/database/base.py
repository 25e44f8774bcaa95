"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from rentaltax.domain.entities import PropertyModelInputs, Scenario


class Database(ABC):
    """Abstract database interface for rentaltax."""

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

    # Scenario operations
    @abstractmethod
    def create_scenario(
        self,
        scenario_id: str,
        name: str,
        inputs: PropertyModelInputs,
        created_at: Optional[datetime] = None,
    ) -> str:
        """Create a saved scenario, optionally keeping an earlier creation time. Returns scenario ID."""
        pass

    @abstractmethod
    def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        """Get scenario by ID."""
        pass

    @abstractmethod
    def get_scenario_by_name(self, name: str) -> Optional[Scenario]:
        """Get scenario by name."""
        pass

    @abstractmethod
    def list_scenarios(self) -> list[Scenario]:
        """List all scenarios, oldest first."""
        pass

    @abstractmethod
    def update_scenario(
        self,
        scenario_id: str,
        name: Optional[str] = None,
        inputs: Optional[PropertyModelInputs] = None,
    ) -> None:
        """Update scenario name and/or inputs, bumping its updated timestamp."""
        pass

    @abstractmethod
    def delete_scenario(self, scenario_id: str) -> None:
        """Delete a scenario."""
        pass

    # Last session operations
    @abstractmethod
    def save_last_session(self, inputs: PropertyModelInputs) -> None:
        """Store the most recent working inputs, replacing any previous ones."""
        pass

    @abstractmethod
    def load_last_session(self) -> Optional[PropertyModelInputs]:
        """Get the most recent working inputs, if any were saved."""
        pass

    @abstractmethod
    def clear_last_session(self) -> None:
        """Remove the stored working inputs."""
        pass
