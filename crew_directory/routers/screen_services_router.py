# crew_directory/routers/screen_services_router.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from crew_directory.core.database import get_db
from crew_directory.schemas.common_schema import ApiResponse
from crew_directory.schemas.screen_service_schema import ScreenServicesOut, CategoryServicesOut
from crew_directory.services.screen_service_service import ScreenServicesService

router = APIRouter(
    prefix="/screen-services",
    tags=["Screen Services"],
)

@router.get("", response_model=ApiResponse[ScreenServicesOut])
async def get_screen_services(db: AsyncSession = Depends(get_db)):
    """
    所有服務公司與類別
    """
    service = ScreenServicesService(db)
    return ApiResponse[ScreenServicesOut](data=await service.list_services())

@router.get("/{category_slug}", response_model=ApiResponse[CategoryServicesOut])
async def get_category_services(category_slug: str, db: AsyncSession = Depends(get_db)):
    service = ScreenServicesService(db)
    result = await service.get_category(category_slug)
    if result is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Category not found")
    return ApiResponse[CategoryServicesOut](data=result)
