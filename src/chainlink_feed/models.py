"""Data models — all frozen (immutable)."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Round:
    """Latest answer reported by a price feed, already scaled."""

    identifier: str
    round_id: int
    answered_in_round: int
    # Seconds since epoch, uint256 on chain
    started_at: int
    updated_at: int
    answer: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Round:
        return cls(
            identifier=str(raw["identifier"]),
            round_id=int(raw["round_id"]),
            answered_in_round=int(raw["answered_in_round"]),
            started_at=int(raw["started_at"]),
            updated_at=int(raw["updated_at"]),
            answer=float(raw["answer"]),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, data: str) -> Round:
        return cls.from_dict(json.loads(data))
