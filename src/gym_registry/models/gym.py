"""Gym, membership and gym service models."""

from dataclasses import dataclass, field, fields
from datetime import datetime


def missing_fields(payload) -> list[str]:
    """Names of required payload fields that are empty or missing."""
    return [f.name for f in fields(payload) if not getattr(payload, f.name, None)]


@dataclass
class GymPayload:
    """Descriptive fields of a gym, used for creation and updates."""

    gym_name: str = ""
    gym_img_url: str = ""
    gym_location: str = ""
    gym_description: str = ""
    email_address: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "GymPayload":
        return cls(
            gym_name=data.get("gym_name") or "",
            gym_img_url=data.get("gym_img_url") or "",
            gym_location=data.get("gym_location") or "",
            gym_description=data.get("gym_description") or "",
            email_address=data.get("email_address") or "",
        )


@dataclass
class MembershipPayload:
    """Enrollment request.  The user id is always the caller."""

    gym_id: str = ""
    full_name: str = ""
    user_name: str = ""
    email_address: str = ""

    def required_missing(self) -> list[str]:
        # gym_id comes from the route and is checked by lookup instead
        return [
            name
            for name in ("full_name", "user_name", "email_address")
            if not getattr(self, name)
        ]

    def to_dict(self) -> dict:
        return {
            "gym_id": self.gym_id,
            "full_name": self.full_name,
            "user_name": self.user_name,
            "email_address": self.email_address,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MembershipPayload":
        return cls(
            gym_id=data.get("gym_id") or "",
            full_name=data.get("full_name") or "",
            user_name=data.get("user_name") or "",
            email_address=data.get("email_address") or "",
        )


@dataclass
class Membership:
    """A member enrolled in a gym."""

    user_id: str
    user_name: str
    full_name: str
    email_address: str
    gym_id: str

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "user_name": self.user_name,
            "full_name": self.full_name,
            "email_address": self.email_address,
            "gym_id": self.gym_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Membership":
        return cls(
            user_id=data["user_id"],
            user_name=data["user_name"],
            full_name=data["full_name"],
            email_address=data["email_address"],
            gym_id=data["gym_id"],
        )


@dataclass
class GymServicePayload:
    """A service offered by a gym."""

    gym_id: str = ""
    service_name: str = ""
    service_description: str = ""
    operating_days_start: str = ""
    operating_days_end: str = ""

    def required_missing(self) -> list[str]:
        return [
            name
            for name in (
                "service_name",
                "service_description",
                "operating_days_start",
                "operating_days_end",
            )
            if not getattr(self, name)
        ]

    def to_dict(self) -> dict:
        return {
            "gym_id": self.gym_id,
            "service_name": self.service_name,
            "service_description": self.service_description,
            "operating_days_start": self.operating_days_start,
            "operating_days_end": self.operating_days_end,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GymServicePayload":
        return cls(
            gym_id=data.get("gym_id") or "",
            service_name=data.get("service_name") or "",
            service_description=data.get("service_description") or "",
            operating_days_start=data.get("operating_days_start") or "",
            operating_days_end=data.get("operating_days_end") or "",
        )


# Stored services have the same shape as the payload
GymService = GymServicePayload


@dataclass
class Gym:
    """A registered gym.

    ``owner`` is the principal text of the creator and never changes.
    Members and services are append-only.
    """

    id: str
    owner: str
    gym_name: str
    gym_img_url: str
    gym_location: str
    gym_description: str
    email_address: str
    members: list[Membership] = field(default_factory=list)
    gym_services: list[GymService] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def apply(self, payload: GymPayload) -> None:
        """Overwrite the descriptive fields.  Ownership is untouched."""
        self.gym_name = payload.gym_name
        self.gym_img_url = payload.gym_img_url
        self.gym_location = payload.gym_location
        self.gym_description = payload.gym_description
        self.email_address = payload.email_address

    def find_member(self, user_id: str) -> Membership | None:
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "owner": self.owner,
            "gym_name": self.gym_name,
            "gym_img_url": self.gym_img_url,
            "gym_location": self.gym_location,
            "gym_description": self.gym_description,
            "email_address": self.email_address,
            "members": [m.to_dict() for m in self.members],
            "gym_services": [s.to_dict() for s in self.gym_services],
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Gym":
        created_at = None
        if data.get("created_at"):
            created_at = datetime.fromisoformat(data["created_at"])

        updated_at = None
        if data.get("updated_at"):
            updated_at = datetime.fromisoformat(data["updated_at"])

        return cls(
            id=data["id"],
            owner=data["owner"],
            gym_name=data["gym_name"],
            gym_img_url=data["gym_img_url"],
            gym_location=data["gym_location"],
            gym_description=data["gym_description"],
            email_address=data["email_address"],
            members=[Membership.from_dict(m) for m in data.get("members", [])],
            gym_services=[GymService.from_dict(s) for s in data.get("gym_services", [])],
            created_at=created_at,
            updated_at=updated_at,
        )

    def get_summary(self) -> str:
        """One-line summary for CLI listings."""
        return (
            f"{self.gym_name} ({self.gym_location}) - "
            f"{len(self.members)} members, {len(self.gym_services)} services"
        )
