"""Team membership routes."""

from fastapi import APIRouter, Depends

from api.dependencies import get_account_service
from api.errors import HANDLED_ERRORS, to_http_exception
from api.models import AccountResponse
from api.security import get_current_account_id
from services.account_service import AccountService

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("/{team_id}/members", response_model=list[AccountResponse])
def get_team_members(
    team_id: str,
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
):
    """Public profiles of a team's members. Only members of the team may list them."""
    try:
        members = service.get_team_members(user_id=account_id, team_id=team_id)
    except HANDLED_ERRORS as e:
        raise to_http_exception(e) from e
    return [AccountResponse.from_domain(m) for m in members]
