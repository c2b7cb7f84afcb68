from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Unclaimed:
    """Content with no recorded author; the first authorized editor may adopt it."""


@dataclass(frozen=True)
class OwnedBy:
    user_id: UUID


Ownership = Unclaimed | OwnedBy


def ownership_of(author_id: UUID | None) -> Ownership:
    if author_id is None:
        return Unclaimed()
    return OwnedBy(author_id)


def claim(ownership: Ownership, user_id: UUID) -> OwnedBy:
    if not isinstance(ownership, Unclaimed):
        raise ValueError("Only unclaimed content can be adopted")
    return OwnedBy(user_id)
