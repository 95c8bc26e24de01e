"""In-memory implementation of TeamRepository for testing."""

from domain.model.team import Team


class FakeTeamRepository:
    def __init__(self, teams: list[Team] | None = None):
        self.store: dict[str, Team] = {t.id: t for t in teams or []}

    def add(self, team: Team) -> None:
        self.store[team.id] = team

    def get_by_id(self, team_id: str) -> Team | None:
        return self.store.get(team_id)
