"""Category Routes — CRUD, search and live validation."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response, status

from sales_report.schemas.category import (
    CategoryCreate, CategoryResponse, CategoryUpdate,
)
from sales_report.services.record_services import RecordServices, get_services

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


@router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreate, services: RecordServices = Depends(get_services),
):
    return await services.categories.create(body.to_draft())


@router.get("", response_model=list[CategoryResponse])
async def list_categories(services: RecordServices = Depends(get_services)):
    return await services.categories.list()


@router.get("/search", response_model=list[CategoryResponse])
async def search_categories(
    q: str = Query(""), services: RecordServices = Depends(get_services),
):
    return await services.categories.search(q)


@router.post("/validate")
async def validate_category_create(
    body: CategoryCreate, services: RecordServices = Depends(get_services),
):
    clean = services.categories.validate_create(body.to_draft())
    return {"valid": True, "category": asdict(clean)}


@router.post("/validate-update")
async def validate_category_update(
    body: CategoryUpdate, services: RecordServices = Depends(get_services),
):
    clean = services.categories.validate_update(body.to_patch())
    return {"valid": True, "category": clean.supplied_fields()}


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int, services: RecordServices = Depends(get_services),
):
    return await services.categories.get_by_id(category_id)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int, body: CategoryUpdate,
    services: RecordServices = Depends(get_services),
):
    return await services.categories.update(category_id, body.to_patch())


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int, services: RecordServices = Depends(get_services),
):
    await services.categories.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
