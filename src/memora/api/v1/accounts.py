"""Account administration endpoints."""

from uuid import UUID

from fastapi import APIRouter

from src.memora.api.dependencies import AccountServiceDep, AdminAccount
from src.memora.schemas import AccountRead, AccountStatusUpdate

router = APIRouter(prefix="/accounts", tags=["accounts"])

_ADMIN_RESPONSES: dict[int | str, dict] = {
    401: {"description": "Missing or invalid access token"},
    403: {"description": "Admin role required"},
    404: {"description": "Account not found"},
}


@router.get("/{account_id}", response_model=AccountRead, responses=_ADMIN_RESPONSES)
async def get_account(
    account_id: UUID,
    admin: AdminAccount,
    service: AccountServiceDep,
) -> AccountRead:
    """Look up any account by id."""
    account = await service.get_by_id(account_id)
    return AccountRead.model_validate(account)


@router.patch(
    "/{account_id}/status",
    response_model=AccountRead,
    responses={400: {"description": "Cannot suspend your own account"}, **_ADMIN_RESPONSES},
)
async def update_account_status(
    account_id: UUID,
    status_data: AccountStatusUpdate,
    admin: AdminAccount,
    service: AccountServiceDep,
) -> AccountRead:
    """Change an account's status. Deactivation revokes all of its sessions."""
    account = await service.update_status(account_id, status_data.status, requester_id=admin.id)
    return AccountRead.model_validate(account)
