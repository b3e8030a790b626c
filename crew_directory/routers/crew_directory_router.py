# crew_directory/routers/crew_directory_router.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from crew_directory.core.database import get_db
from crew_directory.schemas.common_schema import ApiResponse
from crew_directory.schemas.directory_schema import CrewDirectoryOut, DepartmentDetailOut
from crew_directory.schemas.freelancer_schema import SkillFreelancersOut
from crew_directory.services.directory_service import DirectoryService
from crew_directory.services.freelancer_resolver import FreelancerResolver

router = APIRouter(
    prefix="/crew-directory",
    tags=["Crew Directory"],
)

@router.get("", response_model=ApiResponse[CrewDirectoryOut])
async def get_crew_directory(db: AsyncSession = Depends(get_db)):
    """
    所有部門及其技能
    """
    service = DirectoryService(db)
    return ApiResponse[CrewDirectoryOut](data=await service.list_departments())

@router.get("/{department_slug}", response_model=ApiResponse[DepartmentDetailOut])
async def get_department(department_slug: str, db: AsyncSession = Depends(get_db)):
    service = DirectoryService(db)
    department = await service.get_department(department_slug)
    if department is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Department not found")
    return ApiResponse[DepartmentDetailOut](data=department)

@router.get("/{department_slug}/{skill_slug}", response_model=ApiResponse[SkillFreelancersOut])
async def get_skill_freelancers(
    department_slug: str,
    skill_slug: str,
    db: AsyncSession = Depends(get_db)
):
    """
    擁有該技能的所有工作者 (依名稱排序)
    """
    resolver = FreelancerResolver(db)
    result = await resolver.resolve_by_skill(department_slug, skill_slug)
    if result is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Skill not found")
    return ApiResponse[SkillFreelancersOut](data=result)
