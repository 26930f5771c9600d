"""Company Routes — CRUD, search, live validation and GST duplicate check.

Invariants:
    - Routes only translate HTTP <-> service calls; errors propagate to error_handlers
    - /validate endpoints never persist
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response, status

from sales_report.schemas.company import (
    CompanyCreate, CompanyResponse, CompanyUpdate, GstExistsResponse,
)
from sales_report.services.record_services import RecordServices, get_services

router = APIRouter(prefix="/api/v1/companies", tags=["companies"])


@router.post(
    "", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED,
)
async def create_company(
    body: CompanyCreate, services: RecordServices = Depends(get_services),
):
    return await services.companies.create(body.to_draft())


@router.get("", response_model=list[CompanyResponse])
async def list_companies(services: RecordServices = Depends(get_services)):
    return await services.companies.list()


@router.get("/search", response_model=list[CompanyResponse])
async def search_companies(
    q: str = Query(""), services: RecordServices = Depends(get_services),
):
    return await services.companies.search(q)


@router.get("/gst-exists", response_model=GstExistsResponse)
async def check_gst_exists(
    gst_no: str,
    exclude_id: int | None = None,
    services: RecordServices = Depends(get_services),
):
    exists = await services.companies.gst_exists(gst_no, exclude_id)
    return GstExistsResponse(gst_no=gst_no.strip(), exists=exists)


@router.post("/validate")
async def validate_company_create(
    body: CompanyCreate, services: RecordServices = Depends(get_services),
):
    clean = services.companies.validate_create(body.to_draft())
    return {"valid": True, "company": asdict(clean)}


@router.post("/validate-update")
async def validate_company_update(
    body: CompanyUpdate, services: RecordServices = Depends(get_services),
):
    clean = services.companies.validate_update(body.to_patch())
    return {"valid": True, "company": clean.supplied_fields()}


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: int, services: RecordServices = Depends(get_services),
):
    return await services.companies.get_by_id(company_id)


@router.patch("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: int, body: CompanyUpdate,
    services: RecordServices = Depends(get_services),
):
    return await services.companies.update(company_id, body.to_patch())


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_company(
    company_id: int, services: RecordServices = Depends(get_services),
):
    await services.companies.delete(company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
