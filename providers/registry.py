"""
Registry of properties served by credentialed suppliers.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import logger
from models import Coordinates


@dataclass
class SupplierCredentials:
    """Authentication pair for one supplier account."""
    token: str
    account_id: str


@dataclass
class PropertyLocation:
    city: str
    country: str
    coordinates: Optional[Coordinates] = None


@dataclass
class PropertyRegistration:
    """Internal property id mapped to the supplier account that serves it."""
    property_id: str
    account_id: str
    token: str
    name: str
    currency: str
    timezone: str
    location: PropertyLocation

    @property
    def credentials(self) -> SupplierCredentials:
        return SupplierCredentials(token=self.token, account_id=self.account_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PropertyRegistration':
        """Build a registration from a configuration record.

        Accepts both ``property_id``/``account_id`` and the shorter
        ``id``/``hr_id`` spellings.
        """
        location = data.get("location") or {}
        coordinates = location.get("coordinates")
        return cls(
            property_id=str(data.get("property_id") or data["id"]),
            account_id=str(data.get("account_id") or data["hr_id"]),
            token=str(data["token"]),
            name=str(data["name"]),
            currency=str(data.get("currency", "USD")),
            timezone=str(data.get("timezone", "UTC")),
            location=PropertyLocation(
                city=str(location.get("city", "")),
                country=str(location.get("country", "")),
                coordinates=Coordinates(**coordinates) if coordinates else None
            )
        )


def load_registrations(path: str) -> List[PropertyRegistration]:
    """Read property registrations from a JSON file holding a list of records."""
    records = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(records, dict):
        records = records.get("properties", [])
    return [PropertyRegistration.from_dict(record) for record in records]


class PropertyRegistry:
    """In-memory property registry, last write wins."""

    def __init__(self):
        self._properties: Dict[str, PropertyRegistration] = {}
        self.logger = logger.bind(component="property_registry")

    def register(self, registration: PropertyRegistration) -> None:
        replaced = registration.property_id in self._properties
        self._properties[registration.property_id] = registration
        self.logger.info(
            "Property registered",
            property_id=registration.property_id,
            account_id=registration.account_id,
            replaced=replaced
        )

    def lookup(self, property_id: str) -> Optional[PropertyRegistration]:
        return self._properties.get(property_id)

    def list_all(self) -> List[PropertyRegistration]:
        return list(self._properties.values())

    def __contains__(self, property_id: str) -> bool:
        return property_id in self._properties

    def __len__(self) -> int:
        return len(self._properties)
