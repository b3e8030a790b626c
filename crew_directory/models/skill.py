# crew_directory/models/skill.py
from sqlalchemy import Column, Integer, String
from crew_directory.core.config import settings
from crew_directory.core.database import Base

class DepartmentSkill(Base):
    """部門與技能清單 (唯讀 View)，沒有技能的部門 SkillID 為 NULL"""
    __tablename__ = settings.VIEW_DEPARTMENTS_SKILLS
    department_id = Column("DepartmentID", Integer, primary_key=True)
    skill_id = Column("SkillID", Integer, primary_key=True, nullable=True)
    department = Column("Department", String(255), nullable=False)
    department_slug = Column("DepartmentSlug", String(255), index=True)
    department_sort = Column("DepartmentSort", Integer, default=0)
    skill = Column("Skill", String(255))
    skill_slug = Column("SkillSlug", String(255), index=True)
    skill_sort = Column("SkillSort", Integer, default=0)


class FreelancerSkill(Base):
    """工作者 <-> (部門, 技能) 的多對多關聯 (唯讀 View，只有 ID 與 slug)"""
    __tablename__ = settings.VIEW_FREELANCER_SKILLS
    freelancer_id = Column("FreelancerID", Integer, primary_key=True)
    department_id = Column("DepartmentID", Integer, primary_key=True)
    skill_id = Column("SkillID", Integer, primary_key=True)
    department_slug = Column("DepartmentSlug", String(255))
    skill_slug = Column("SkillSlug", String(255))
