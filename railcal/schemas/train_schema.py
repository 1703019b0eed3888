"""Train details and operational status models."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

OPERATIONAL_TOKENS = frozenset({"OPERATIONAL", "ACTIVE", "RUNNING"})


class TrainDetails(BaseModel):
    """Train record as served by the train service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    train_id: Optional[str] = None
    train_name: Optional[str] = None
    source: Optional[str] = None
    destination: Optional[str] = None
    total_seats: int = Field(default=0, ge=0)

    @field_validator("train_id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        if value is None:
            return None
        return str(value)

    @field_validator("total_seats", mode="before")
    @classmethod
    def _missing_seats(cls, value: Any) -> Any:
        return 0 if value is None else value

    @property
    def route(self) -> Optional[str]:
        if not self.source and not self.destination:
            return None
        return f"{self.source or '?'} → {self.destination or '?'}"


class OperationalStatus(BaseModel):
    """Whether a train runs on a given date."""

    is_operational: bool
    reason: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "OperationalStatus":
        """
        Build from a gateway payload.

        The gateway answers either with a JSON object
        ``{"isOperational": bool, "reason": str}`` or with a bare status
        token such as ``OPERATIONAL`` or ``MAINTENANCE``. A non-operational
        token is kept verbatim as the reason.

        Raises:
            ValueError: If the payload has neither shape.
        """
        if isinstance(payload, dict):
            if "isOperational" in payload:
                flag = payload["isOperational"]
            elif "is_operational" in payload:
                flag = payload["is_operational"]
            else:
                raise ValueError(f"Operational status object without a flag: {payload!r}")
            if not isinstance(flag, bool):
                raise ValueError(f"Operational flag must be a boolean, got {flag!r}")
            reason = payload.get("reason")
            return cls(is_operational=flag, reason=str(reason) if reason else None)

        if isinstance(payload, str):
            token = payload.strip().strip('"').strip()
            if not token:
                raise ValueError("Empty operational status")
            if token.upper() in OPERATIONAL_TOKENS:
                return cls(is_operational=True)
            return cls(is_operational=False, reason=token)

        raise ValueError(f"Unsupported operational status payload: {payload!r}")
