"""
Access Domain Entities
=======================

Principals and the records that city scoping applies to.
"""

from dataclasses import dataclass
from typing import Any, FrozenSet, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from grievance_desk.config import UserType


@dataclass(frozen=True)
class Actor:
    """
    The authenticated principal of one request.

    Built by the auth layer from the stored role and city; never mutated.
    """
    id: Any
    role: str
    city: Optional[str] = None
    user_type: str = UserType.DASHBOARD_USER
    name: Optional[str] = None

    @property
    def is_employee(self) -> bool:
        return self.user_type == UserType.EMPLOYEE

    def as_performer(self) -> "Performer":
        """Audit descriptor for actions taken by this actor."""
        return Performer(id=self.id, name=self.name or str(self.id), role=self.role)


class Performer(BaseModel):
    """Typed audit metadata for whoever performed an action."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["performer"] = "performer"
    id: Union[int, str]
    name: str = Field(..., min_length=1)
    role: Optional[str] = None


@dataclass(frozen=True)
class CityScope:
    """
    Cities an actor may see.

    ``allowed_cities`` is None when unrestricted (every city), and exactly
    one city when restricted.
    """
    restricted: bool = False
    allowed_cities: Optional[FrozenSet[str]] = None

    @classmethod
    def unrestricted(cls) -> "CityScope":
        return cls()

    @classmethod
    def single_city(cls, city: str) -> "CityScope":
        return cls(restricted=True, allowed_cities=frozenset({city}))

    def allows(self, city: Optional[str]) -> bool:
        if not self.restricted:
            return True
        return city is not None and city in self.allowed_cities

    @property
    def restriction_message(self) -> str:
        if not self.restricted:
            return ""
        return f"Access restricted to: {', '.join(sorted(self.allowed_cities))}"


@dataclass(frozen=True)
class Employee:
    """Employee who raises issues."""
    id: Any
    city: Optional[str]
    name: Optional[str] = None
    role: Optional[str] = None


@dataclass(frozen=True)
class DashboardUser:
    """Back-office user of the dashboard."""
    id: Any
    city: Optional[str]
    role: str
    name: Optional[str] = None
