"""
Core Data Models for Roadshow Savings Tracker

These models define the schemas for all data flowing through the system.
They are designed to:
1. Coerce sloppy form input into clean numbers
2. Serialize to the exact JSON shape the browser version stored
3. Keep derived figures out of persisted data

DESIGN DECISION: Python attributes are snake_case, the wire format is
camelCase (meetingDays, createdAt, ...). An alias generator bridges the two,
so data saved by the original web app loads without a migration step.

TRADEOFF: Amounts are floats, not Decimal. The stored JSON numbers then
round-trip exactly, but sums can pick up binary noise
(0.1 + 0.2 == 0.30000000000000004). Amounts are only ever shown rounded
to cents, which hides it.
"""

import math
from datetime import datetime, timezone
from typing import Any, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


# Form limits. Stored records are not checked against these.
MAX_DESTINATION_LENGTH = 200
MAX_NOTES_LENGTH = 5000


def coerce_number(value: Any) -> float:
    """
    Turn a form or storage value into a number.

    Absent, blank and unparseable values become 0. Sign is kept so that
    field constraints can reject negatives.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# SHOW MODELS
# =============================================================================

class ShowFields(BaseModel):
    """
    The user-editable part of a show.

    Shared by the form payload (ShowInput) and the stored record (Show).
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    destination: str = Field(
        default="",
        description="Destination or show name"
    )
    nights: Union[int, float] = Field(
        default=0,
        ge=0,
        description="Sleeping-room nights budgeted"
    )
    meeting_days: Union[int, float] = Field(
        default=0,
        ge=0,
        description="Meeting-space days budgeted"
    )
    actual_room_cost: float = Field(
        default=0.0,
        ge=0,
        description="What the sleeping rooms actually cost"
    )
    actual_meeting_cost: float = Field(
        default=0.0,
        ge=0,
        description="What the meeting space actually cost"
    )
    notes: str = Field(
        default="",
        description="Free-form notes"
    )

    @field_validator('destination', 'notes', mode='before')
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator('nights', 'meeting_days', mode='before')
    @classmethod
    def coerce_count(cls, v: Any) -> Union[int, float]:
        """
        Blank or garbage counts become 0.

        Fractions are kept: the browser form accepted "2.5" and stored it,
        and such records must still load.
        """
        number = coerce_number(v)
        return int(number) if number.is_integer() else number

    @field_validator('actual_room_cost', 'actual_meeting_cost', mode='before')
    @classmethod
    def coerce_amount(cls, v: Any) -> float:
        return coerce_number(v)


class ShowInput(ShowFields):
    """
    Data submitted from the add/edit form.

    Everything except identity and creation time. New and edited shows
    are held to stricter rules than stored records, which must load
    whatever the browser version wrote.
    """

    @field_validator('destination')
    @classmethod
    def require_destination(cls, v: str) -> str:
        if not v:
            raise ValueError("Destination is required")
        if len(v) > MAX_DESTINATION_LENGTH:
            raise ValueError(
                f"Destination must be at most {MAX_DESTINATION_LENGTH} characters"
            )
        return v

    @field_validator('notes')
    @classmethod
    def limit_notes(cls, v: str) -> str:
        if len(v) > MAX_NOTES_LENGTH:
            raise ValueError(f"Notes must be at most {MAX_NOTES_LENGTH} characters")
        return v

    @field_validator('nights', 'meeting_days')
    @classmethod
    def require_whole_number(cls, v: Union[int, float]) -> int:
        if not float(v).is_integer():
            raise ValueError("must be a whole number")
        return int(v)


class Show(ShowFields):
    """
    One tracked roadshow event, as stored.

    Frozen: updates produce a new instance via with_changes(), which
    carries id and created_at over unchanged.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique show ID, never reused"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="When the show was first recorded (UTC)"
    )

    @field_validator('created_at')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def with_changes(self, data: ShowFields) -> "Show":
        """Return a copy with every editable field taken from `data`."""
        return self.model_copy(
            update={name: getattr(data, name) for name in ShowFields.model_fields}
        )


# =============================================================================
# DERIVED FIGURES
# =============================================================================

class ShowMetrics(BaseModel):
    """
    Budget-vs-actual figures for a single show.

    Never persisted. Always recomputed from the show and the current
    rate card.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    room_budget: float = 0.0
    meeting_budget: float = 0.0
    total_budget: float = 0.0
    actual_spend: float = 0.0
    savings: float = Field(
        default=0.0,
        description="Budget minus spend; negative means overspend"
    )
    commission: float = Field(
        default=0.0,
        ge=0,
        description="Commission on positive savings, 0 on overspend"
    )

    @property
    def is_overspend(self) -> bool:
        return self.savings < 0


class AggregateTotals(BaseModel):
    """Dashboard totals across every tracked show."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_savings: float = 0.0
    total_commission: float = 0.0
    total_spent: float = 0.0
    total_budgeted: float = 0.0
    show_count: int = Field(default=0, ge=0)
