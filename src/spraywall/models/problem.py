"""Problem model - a saved, annotated spray-wall picture."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional
import uuid


class ProblemType(Enum):
    """Interaction policy of the editor and category of a saved problem."""
    BOULDERING = "bouldering"
    ENDURANCE = "endurance"

    @classmethod
    def parse(cls, value) -> "ProblemType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown problem type: {value!r}") from None


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Trim tags, drop empty ones and duplicates, keep first-seen order."""
    result: List[str] = []
    for tag in tags or []:
        value = str(tag).strip()
        if value and value not in result:
            result.append(value)
    return result


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Problem:
    """
    A persisted spray-wall problem.

    Attributes:
        problem_id: Unique identifier assigned by the store
        owner_id: Authoring user
        name: Trimmed, non-empty display name
        problem_type: Bouldering or endurance
        image_file: File name of the flattened PNG inside the store
        tags: Free-form labels
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 timestamp of the last save or tag edit
    """
    owner_id: str
    name: str
    problem_type: ProblemType
    image_file: str = ""
    tags: List[str] = field(default_factory=list)
    problem_id: str = ""
    created_at: str = ""
    updated_at: str = ""

    def __post_init__(self):
        if not self.problem_id:
            self.problem_id = uuid.uuid4().hex
        if not self.created_at:
            self.created_at = _now()
        if not self.updated_at:
            self.updated_at = self.created_at
        self.tags = normalize_tags(self.tags)

    def touch(self):
        """Refresh ``updated_at``."""
        self.updated_at = _now()

    def to_dict(self) -> dict:
        return {
            "id": self.problem_id,
            "owner_id": self.owner_id,
            "name": self.name,
            "type": self.problem_type.value,
            "image_file": self.image_file,
            "tags": list(self.tags),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Problem":
        return cls(
            owner_id=data.get("owner_id", ""),
            name=data.get("name", ""),
            problem_type=ProblemType.parse(data.get("type", "bouldering")),
            image_file=data.get("image_file", ""),
            tags=data.get("tags") or [],
            problem_id=data.get("id", ""),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )
