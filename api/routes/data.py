from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from api.deps import get_access_token, get_authorization_service, get_data_admin_service
from domain.services.authorization_service import AuthorizationService
from domain.services.data_admin_service import DataAdminService

router = APIRouter(prefix="/data", tags=["Admin"])


class DataCountsOut(BaseModel):
    participants: int
    submissions: int
    links: int


class ClearDataIn(BaseModel):
    confirm: str


class ClearDataOut(BaseModel):
    success: bool = True
    deleted: DataCountsOut


@router.get("/counts", response_model=DataCountsOut)
def get_counts(
    access_token: Optional[str] = Depends(get_access_token),
    auth: AuthorizationService = Depends(get_authorization_service),
    service: DataAdminService = Depends(get_data_admin_service),
):
    auth.authenticate(access_token)
    return DataCountsOut(**service.counts().__dict__)


@router.post("/clear", response_model=ClearDataOut)
async def clear_data(
    payload: ClearDataIn,
    access_token: Optional[str] = Depends(get_access_token),
    auth: AuthorizationService = Depends(get_authorization_service),
    service: DataAdminService = Depends(get_data_admin_service),
):
    await run_in_threadpool(auth.require_admin, access_token, "clear data")
    deleted = await run_in_threadpool(service.clear_all, payload.confirm)
    return ClearDataOut(deleted=DataCountsOut(**deleted.__dict__))
