# crew_directory/schemas/freelancer_schema.py
from pydantic import BaseModel, ConfigDict
from typing import List

# --- 快取中的原始資料列 (不可變快照) ---
class FreelancerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    slug: str
    display_name: str
    bio: str | None = None
    photo_asset_id: str | None = None
    cv_asset_id: str | None = None
    equipment_asset_id: str | None = None

class SkillMembership(BaseModel):
    model_config = ConfigDict(frozen=True)

    freelancer_id: int
    department_id: int
    department_slug: str
    department_name: str | None = None
    skill_id: int
    skill_slug: str
    skill_name: str | None = None
    # 部門 / 技能的顯示順序 (vwDepartmentsAndSkillsListWEB2)
    department_sort: int = 0
    skill_sort: int = 0

class LinkRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    freelancer_id: int
    link_type: str
    url: str = ""

# --- 回傳給前端的 Projection ---
class FreelancerLinks(BaseModel):
    """固定四個 key，未設定時為 null"""
    Website: str | None = None
    Instagram: str | None = None
    Imdb: str | None = None
    LinkedIn: str | None = None

class FreelancerSkillOut(BaseModel):
    skillId: int
    skillName: str | None
    skillSlug: str
    departmentId: int
    departmentName: str | None
    departmentSlug: str

class FreelancerSummaryOut(BaseModel):
    """技能頁面使用 (不含技能列表)"""
    id: int
    name: str
    slug: str
    bio: str | None = None
    photoUrl: str | None = None
    cvUrl: str | None = None
    equipmentListUrl: str | None = None
    links: FreelancerLinks

class FreelancerOut(FreelancerSummaryOut):
    skills: List[FreelancerSkillOut] = []

# --- 技能頁面 ---
class DepartmentRefOut(BaseModel):
    id: int
    name: str | None
    slug: str

class SkillInfoOut(BaseModel):
    id: int
    name: str | None
    slug: str
    department: DepartmentRefOut

class SkillFreelancersOut(BaseModel):
    skill: SkillInfoOut
    freelancers: List[FreelancerSummaryOut]
    freelancerCount: int

# --- 搜尋 ---
class SearchSkillOut(BaseModel):
    departmentName: str | None
    skillName: str | None

class FreelancerSearchResultOut(BaseModel):
    id: int
    name: str
    slug: str
    score: float
    skills: List[SearchSkillOut] = []

class FreelancerSearchOut(BaseModel):
    success: bool = True
    query: str
    count: int
    results: List[FreelancerSearchResultOut]
