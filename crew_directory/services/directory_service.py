# crew_directory/services/directory_service.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, List, Any

from crew_directory.core.cache import QueryCache, query_cache
from crew_directory.core.config import settings
from crew_directory.core.constants import CREW_DIRECTORY_TAG
from crew_directory.repositories.directory_repo import DirectoryRepository
from crew_directory.schemas.directory_schema import (
    SkillOut, DepartmentOut, CrewDirectoryOut, DepartmentDetailOut
)
from crew_directory.utils.normalize import normalize_slug, generate_slug

logger = logging.getLogger(__name__)

DEPARTMENTS_CACHE_KEY = "crew-directory-all"


class DirectoryService:
    def __init__(self, db: AsyncSession, cache: QueryCache = query_cache):
        self.repo = DirectoryRepository(db)
        self.cache = cache

    async def _get_rows(self) -> List[Dict[str, Any]]:
        return await self.cache.cached(
            DEPARTMENTS_CACHE_KEY, settings.CACHE_TTL_SECONDS,
            [CREW_DIRECTORY_TAG], self.repo.list_departments_and_skills,
        )

    @staticmethod
    def _build_departments(rows: List[Dict[str, Any]]) -> List[DepartmentOut]:
        """把 (部門, 技能) 列組成巢狀的部門清單，保留原本的排序"""
        departments: Dict[int, DepartmentOut] = {}
        for row in rows:
            department = departments.get(row["department_id"])
            if department is None:
                department = DepartmentOut(
                    id=row["department_id"],
                    name=row["department"],
                    slug=row["department_slug"] or generate_slug(row["department"]),
                )
                departments[row["department_id"]] = department

            # 有些部門沒有技能 (SkillID 為 NULL)
            if row["skill_id"] is not None:
                department.skills.append(SkillOut(
                    id=row["skill_id"],
                    name=row["skill"],
                    slug=row["skill_slug"] or generate_slug(row["skill"]),
                ))
        return list(departments.values())

    async def list_departments(self) -> CrewDirectoryOut:
        """所有部門及其技能"""
        departments = self._build_departments(await self._get_rows())
        return CrewDirectoryOut(
            departments=departments,
            totalDepartments=len(departments),
            totalSkills=sum(len(d.skills) for d in departments),
        )

    async def get_department(self, department_slug: str) -> DepartmentDetailOut | None:
        """依 slug (不分大小寫) 取得單一部門；找不到回傳 None"""
        wanted = normalize_slug(department_slug)
        for department in self._build_departments(await self._get_rows()):
            if normalize_slug(department.slug) == wanted:
                return DepartmentDetailOut(department=department, skillCount=len(department.skills))

        logger.info(f"No department found with slug: {department_slug}")
        return None
