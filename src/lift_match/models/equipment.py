"""User equipment model."""

from dataclasses import dataclass


@dataclass
class UserEquipment:
    """A piece of equipment a user has at one of their gyms.

    `equipment_key` is the short tag compared against an exercise's
    required equipment; `equipment_name` is the free-text display name
    used as a last-resort match.
    """

    user_id: str
    gym_id: str
    equipment_key: str
    equipment_name: str
    available: bool = True
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "gym_id": self.gym_id,
            "equipment_key": self.equipment_key,
            "equipment_name": self.equipment_name,
            "available": self.available,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "UserEquipment":
        """Create from dictionary."""
        return cls(
            id=id,
            user_id=data["user_id"],
            gym_id=data["gym_id"],
            equipment_key=data.get("equipment_key") or data["equipment_name"],
            equipment_name=data["equipment_name"],
            available=data.get("available", True),
        )
