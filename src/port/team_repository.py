from typing import Protocol

from domain.model.team import Team


class TeamRepository(Protocol):
    """Protocol defining read access to teams."""
    def get_by_id(self, team_id: str) -> Team | None:
        """Find a team by ID. Return Team or None if not found."""
        ...
