from dataclasses import dataclass, field


@dataclass
class Team:
    """Domain model representing a team. Membership is the only authorization criterion."""
    id: str
    name: str = ''
    slug: str = ''
    member_ids: list[str] = field(default_factory=list)

    def has_member(self, user_id: str) -> bool:
        return user_id in self.member_ids
