"""FastAPI routes for account registration and login.

Public registration always creates a customer account.
"""

from fastapi import APIRouter, Depends

from identity.api.schemas import LoginRequest, RegisterRequest, TokenResponse
from identity.users import get_account_service
from identity.users.accounts import AccountService

account_router = APIRouter(tags=["accounts"])


def account_service() -> AccountService:
    return get_account_service()


@account_router.post("/register", status_code=201, response_model=TokenResponse)
async def register(body: RegisterRequest, service: AccountService = Depends(account_service)) -> TokenResponse:
    return TokenResponse(token=await service.register(body.username, body.password))


@account_router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, service: AccountService = Depends(account_service)) -> TokenResponse:
    return TokenResponse(token=await service.login(body.username, body.password))
