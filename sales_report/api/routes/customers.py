"""Customer Routes — CRUD, search, validation and listing by category.

Invariants:
    - Every customer in a response carries its category snapshot (or null)
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response, status

from sales_report.schemas.customer import (
    CustomerCreate, CustomerResponse, CustomerUpdate,
)
from sales_report.services.record_services import RecordServices, get_services

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.post(
    "", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    body: CustomerCreate, services: RecordServices = Depends(get_services),
):
    return await services.customers.create(body.to_draft())


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    category_id: int | None = None,
    services: RecordServices = Depends(get_services),
):
    if category_id is not None:
        return await services.customers.list_by_category(category_id)
    return await services.customers.list()


@router.get("/search", response_model=list[CustomerResponse])
async def search_customers(
    q: str = Query(""), services: RecordServices = Depends(get_services),
):
    return await services.customers.search(q)


@router.post("/validate")
async def validate_customer_create(
    body: CustomerCreate, services: RecordServices = Depends(get_services),
):
    clean = services.customers.validate_create(body.to_draft())
    return {"valid": True, "customer": asdict(clean)}


@router.post("/validate-update")
async def validate_customer_update(
    body: CustomerUpdate, services: RecordServices = Depends(get_services),
):
    clean = services.customers.validate_update(body.to_patch())
    return {"valid": True, "customer": clean.supplied_fields()}


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int, services: RecordServices = Depends(get_services),
):
    return await services.customers.get_by_id(customer_id)


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int, body: CustomerUpdate,
    services: RecordServices = Depends(get_services),
):
    return await services.customers.update(customer_id, body.to_patch())


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: int, services: RecordServices = Depends(get_services),
):
    await services.customers.delete(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
