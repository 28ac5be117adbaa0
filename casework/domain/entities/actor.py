"""Acting identity passed into every state-changing operation."""

from dataclasses import dataclass

from casework.domain.enums import ActorRole


@dataclass(frozen=True)
class Actor:
    """Who performs an operation. Authentication happens outside the core."""

    id: str
    role: ActorRole

    @classmethod
    def system(cls, actor_id: str = "system") -> "Actor":
        return cls(id=actor_id, role=ActorRole.SYSTEM)
