"""Profile creation and credit balance endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError

from roomgen.domain.credits import CreditLedger, UserNotFoundError
from roomgen.infrastructure.database import StoreUnavailableError
from roomgen.interfaces.http.deps import get_credit_ledger
from roomgen.interfaces.http.errors import internal_error
from roomgen.schemas import (
    CreditBalanceResponse,
    CreditTransactionResponse,
    ProfileCreateRequest,
    ProfileResponse,
)

router = APIRouter()


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a profile with an initial credit grant",
)
async def create_profile(
    payload: ProfileCreateRequest,
    ledger: CreditLedger = Depends(get_credit_ledger),
) -> ProfileResponse:
    try:
        account = await ledger.open_account(email=payload.email, credits=payload.credits, is_pro=payload.is_pro)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"code": "Conflict", "message": "Profile already exists"},
        ) from exc
    except StoreUnavailableError as exc:
        raise internal_error() from exc
    return ProfileResponse.model_validate(account)


@router.get(
    "/{user_id}/credits",
    response_model=CreditBalanceResponse,
    summary="Get credit balance and recent ledger entries",
)
async def get_credits(
    user_id: str,
    limit: int = Query(default=20, ge=1, le=100),
    ledger: CreditLedger = Depends(get_credit_ledger),
) -> CreditBalanceResponse:
    try:
        account = await ledger.get_account(user_id)
        records = await ledger.list_transactions(user_id, limit=limit)
    except UserNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "UnknownUser", "message": "User not found"},
        ) from exc
    except StoreUnavailableError as exc:
        raise internal_error() from exc
    return CreditBalanceResponse(
        user_id=account.user_id,
        credits=account.credits,
        transactions=[CreditTransactionResponse.model_validate(record) for record in records],
    )
