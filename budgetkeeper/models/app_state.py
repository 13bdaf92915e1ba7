from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from budgetkeeper.config import APP_STATE_ID


def _this_month() -> int:
    return date.today().month


def _this_year() -> int:
    return date.today().year


@dataclass
class AppState:
    """Persisted UI selection (month/year filter) that survives restarts."""

    id: str = APP_STATE_ID
    selected_month: int = field(default_factory=_this_month)
    selected_year: int = field(default_factory=_this_year)

    @classmethod
    def for_date(cls, today: Optional[date] = None) -> "AppState":
        today = today or date.today()
        return cls(selected_month=today.month, selected_year=today.year)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "selected_month": self.selected_month,
            "selected_year": self.selected_year,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppState":
        today = date.today()
        return cls(
            id=data.get("id") or APP_STATE_ID,
            selected_month=data.get("selected_month") or today.month,
            selected_year=data.get("selected_year") or today.year,
        )
