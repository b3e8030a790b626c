# crew_directory/models/freelancer.py
from sqlalchemy import Column, Integer, String, TEXT, ForeignKey
from crew_directory.core.config import settings
from crew_directory.core.database import Base

class Freelancer(Base):
    """
    公開網站的工作者清單 (唯讀 View)
    View 本身已過濾 'Show On Website = True'
    """
    __tablename__ = settings.VIEW_FREELANCERS
    freelancer_id = Column("FreelancerID", Integer, primary_key=True)
    slug = Column("Slug", String(255), unique=True, nullable=False)
    display_name = Column("DisplayName", String(255), nullable=False)
    email = Column("Email", String(255), index=True)
    photo_blob_id = Column("PhotoBlobID", String(50))
    photo_status_id = Column("PhotoStatusID", Integer, default=0)
    cv_blob_id = Column("CVBlobID", String(50))
    cv_status_id = Column("CVStatusID", Integer, default=0)
    equipment_blob_id = Column("EquipmentBlobID", String(50))
    equipment_status_id = Column("EquipmentStatusID", Integer, default=0)


class FreelancerWebsiteData(Base):
    """會員可編輯的網站資料 (可寫入的資料表，一位工作者一列)"""
    __tablename__ = settings.TABLE_FREELANCER_WEBSITE_DATA
    freelancer_id = Column("FreelancerID", Integer, primary_key=True)
    display_name = Column("DisplayName", String(255))
    freelancer_bio = Column("FreelancerBio", TEXT)
    photo_blob_id = Column("PhotoBlobID", String(50))
    photo_status_id = Column("PhotoStatusID", Integer, default=0)
    cv_blob_id = Column("CVBlobID", String(50))
    cv_status_id = Column("CVStatusID", Integer, default=0)
    equipment_blob_id = Column("EquipmentBlobID", String(50))
    equipment_status_id = Column("EquipmentStatusID", Integer, default=0)
    password_hash = Column("PasswordHash", String(255))


class FreelancerLink(Base):
    """
    工作者的外部連結：每位工作者固定 4 列 (Website / Instagram / Imdb / LinkedIn)
    未設定時 LinkURL 為空字串，而不是刪除該列
    """
    __tablename__ = settings.TABLE_FREELANCER_WEBSITE_DATA_LINKS
    link_id = Column("FreelancerWebsiteDataLinkID", Integer, primary_key=True)
    freelancer_id = Column("FreelancerID", Integer, ForeignKey(f"{settings.TABLE_FREELANCER_WEBSITE_DATA}.FreelancerID"), index=True, nullable=False)
    link_name = Column("LinkName", String(50), nullable=False)
    link_url = Column("LinkURL", String(500), default="")
