from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict, Field
from starlette.datastructures import UploadFile

from api.deps import get_access_token, get_authorization_service, get_import_service
from domain.exceptions import RequestMalformed
from domain.services.authorization_service import AuthorizationService
from domain.services.import_service import ImportService

router = APIRouter(tags=["import"])


class ImportResultOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    participants: int
    submissions: int
    links: int
    skipped_drafts: int = Field(alias="skippedDrafts")


@router.options("/import-csv", include_in_schema=False)
def import_csv_options():
    return PlainTextResponse("ok")


@router.post("/import-csv", response_model=ImportResultOut)
async def import_csv(
    request: Request,
    access_token: Optional[str] = Depends(get_access_token),
    auth: AuthorizationService = Depends(get_authorization_service),
    service: ImportService = Depends(get_import_service),
):
    # authorize before touching the body
    await run_in_threadpool(auth.require_admin, access_token)

    form = await request.form()
    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        raise RequestMalformed()
    data = await upload.read()

    summary = await run_in_threadpool(service.import_csv, data)
    return ImportResultOut(**summary.to_dict())
