# crew_directory/routers/freelancer_router.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from crew_directory.core.database import get_db
from crew_directory.schemas.common_schema import ApiResponse
from crew_directory.schemas.freelancer_schema import FreelancerOut, FreelancerSearchOut
from crew_directory.services.freelancer_resolver import FreelancerResolver
from crew_directory.services.search_service import SearchService
from typing import Optional

router = APIRouter(tags=["Freelancers"])

@router.get("/freelancer/{slug}", response_model=ApiResponse[FreelancerOut])
async def get_freelancer(slug: str, db: AsyncSession = Depends(get_db)):
    """
    依 slug (不分大小寫) 取得單一工作者的公開資料
    """
    resolver = FreelancerResolver(db)
    freelancer = await resolver.resolve_by_slug(slug)
    if freelancer is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Freelancer not found")
    return ApiResponse[FreelancerOut](data=freelancer)

@router.get("/search/freelancers", response_model=FreelancerSearchOut)
async def search_freelancers(
    q: str = Query("", description="搜尋字串 (至少 2 個字元)"),
    department: Optional[str] = Query(None, description="部門 slug"),
    skill: Optional[str] = Query(None, description="技能 slug (需搭配 department)"),
    db: AsyncSession = Depends(get_db),
):
    """
    依名稱搜尋工作者 (包含字串優先，其次為相近拼寫)
    """
    service = SearchService(db)
    return await service.search(q, department_slug=department, skill_slug=skill)
