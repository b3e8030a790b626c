# crew_directory/repositories/directory_repo.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from crew_directory.models.skill import DepartmentSkill
from typing import List, Dict, Any

class DirectoryRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_departments_and_skills(self) -> List[Dict[str, Any]]:
        """列出所有部門與技能 (依部門排序、技能排序)"""
        stmt = select(
            DepartmentSkill.department_id.label("department_id"),
            DepartmentSkill.department.label("department"),
            DepartmentSkill.department_slug.label("department_slug"),
            DepartmentSkill.skill_id.label("skill_id"),
            DepartmentSkill.skill.label("skill"),
            DepartmentSkill.skill_slug.label("skill_slug"),
        ).order_by(
            DepartmentSkill.department_sort,
            DepartmentSkill.department,
            DepartmentSkill.skill_sort,
            DepartmentSkill.skill,
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]
