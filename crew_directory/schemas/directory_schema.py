# crew_directory/schemas/directory_schema.py
from pydantic import BaseModel
from typing import List

class SkillOut(BaseModel):
    id: int
    name: str
    slug: str

class DepartmentOut(BaseModel):
    id: int
    name: str
    slug: str
    skills: List[SkillOut] = []

class CrewDirectoryOut(BaseModel):
    departments: List[DepartmentOut]
    totalDepartments: int
    totalSkills: int

class DepartmentDetailOut(BaseModel):
    department: DepartmentOut
    skillCount: int
