import asyncio
import os
import sys
from datetime import datetime

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_crew_directory.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("BLOB_BASE_URL", "https://blob.test/container")
os.environ.setdefault("BLOB_SAS_TOKEN", "sv=2024&sig=abc")
os.environ.setdefault("ADMIN_EMAILS", '["jane@example.com"]')

# Ensure the project root is on sys.path for imports during tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from fastapi.testclient import TestClient

from crew_directory.core.cache import query_cache
from crew_directory.core.database import Base, engine
from crew_directory.core.security import create_access_token
from crew_directory.main import app
from crew_directory.models.freelancer import Freelancer, FreelancerWebsiteData, FreelancerLink
from crew_directory.models.skill import DepartmentSkill, FreelancerSkill
from crew_directory.models.news import NewsItem, StoredDocument
from crew_directory.models.screen_service import ServiceCategory


def _freelancer(fid, slug, name, email=None, photo=None, photo_status=0, cv=None, cv_status=0):
    return {
        "FreelancerID": fid, "Slug": slug, "DisplayName": name, "Email": email,
        "PhotoBlobID": photo, "PhotoStatusID": photo_status,
        "CVBlobID": cv, "CVStatusID": cv_status,
        "EquipmentBlobID": None, "EquipmentStatusID": 0,
    }


def _website_data(fid, name, bio=None, photo=None, photo_status=0, cv=None, cv_status=0):
    return {
        "FreelancerID": fid, "DisplayName": name, "FreelancerBio": bio,
        "PhotoBlobID": photo, "PhotoStatusID": photo_status,
        "CVBlobID": cv, "CVStatusID": cv_status,
        "EquipmentBlobID": None, "EquipmentStatusID": 0,
        "PasswordHash": None,
    }


def _dept_skill(dept_id, dept, dept_slug, dept_sort, skill_id, skill, skill_slug, skill_sort):
    return {
        "DepartmentID": dept_id, "Department": dept, "DepartmentSlug": dept_slug,
        "DepartmentSort": dept_sort, "SkillID": skill_id, "Skill": skill,
        "SkillSlug": skill_slug, "SkillSort": skill_sort,
    }


def _membership(fid, dept_id, dept_slug, skill_id, skill_slug):
    return {
        "FreelancerID": fid, "DepartmentID": dept_id, "DepartmentSlug": dept_slug,
        "SkillID": skill_id, "SkillSlug": skill_slug,
    }


def _link(link_id, fid, name, url):
    return {"FreelancerWebsiteDataLinkID": link_id, "FreelancerID": fid, "LinkName": name, "LinkURL": url}


def _document(doc_id, type_id, blob_id, title, file_name, uploaded):
    return {
        "StoredDocumentID": doc_id, "StoredDocumentTypeID": type_id, "BlobID": blob_id,
        "DocumentTitle": title, "OriginalFileName": file_name, "DateUploaded": uploaded,
    }


def _service_category(row_id, service_id, service, category_id, category, url, logo):
    return {
        "ServiceCategoryID": row_id, "ServiceID": service_id, "Service": service,
        "CategoryID": category_id, "Category": category, "WebsiteURL": url, "LogoBlobID": logo,
    }


SEED_ROWS = [
    (Freelancer.__table__, [
        _freelancer(7, "jane-doe", "Jane Doe", "jane@example.com", "P000007", 2, "C000007", 1),
        _freelancer(8, "zoe-smith", "Zoe Smith", "zoe@example.com", "   ", 2),
        _freelancer(9, "anna-berg", "Anna Berg", "anna@example.com"),
        _freelancer(10, "ben-ortiz", "Ben Ortiz", "ben@example.com"),
    ]),
    (FreelancerWebsiteData.__table__, [
        _website_data(7, "Jane Doe", "Camera operator based in London", "P000007", 2, "C000007", 1),
        _website_data(8, "Zoe Smith"),
        _website_data(9, "Anna Berg"),
        _website_data(10, "Ben Ortiz"),
    ]),
    (FreelancerLink.__table__, [
        _link(1, 7, "Website", "https://jane.example"),
        _link(2, 7, "Instagram", ""),
        _link(3, 7, "Imdb", ""),
        _link(4, 7, "linked in", ""),
        _link(5, 8, "Website", ""),
        _link(6, 8, "Instagram", "https://instagram.com/zoe"),
        _link(7, 8, "Imdb", ""),
        _link(8, 8, "LinkedIn", ""),
        # Anna only has two rows (data-entry gap)
        _link(9, 9, "Website", "https://anna.example"),
        _link(10, 9, "Imdb", ""),
    ]),
    (DepartmentSkill.__table__, [
        _dept_skill(1, "Camera", "camera", 1, 11, "Gaffer", "gaffer", 1),
        _dept_skill(1, "Camera", "camera", 1, 12, "Focus Puller", "focus-puller", 2),
        _dept_skill(2, "Sound", "sound", 2, 21, "Boom Operator", "boom-operator", 1),
        _dept_skill(3, "Art", "art", 3, None, None, None, 0),
    ]),
    (FreelancerSkill.__table__, [
        _membership(7, 1, "camera", 11, "gaffer"),
        _membership(8, 1, "camera", 11, "gaffer"),
        # Anna: Sound row comes first, Camera sorts first
        _membership(9, 2, "sound", 21, "boom-operator"),
        _membership(9, 1, "camera", 11, "gaffer"),
        # references a freelancer that is not on the website
        _membership(99, 1, "camera", 11, "gaffer"),
    ]),
    (NewsItem.__table__, [
        {"NewsItemID": 1, "NewsItem": "Drama Production Graph", "NewsBlobID": "N000001"},
        {"NewsItemID": 2, "NewsItem": "TVC Production Report", "NewsBlobID": "N000002"},
        {"NewsItemID": 3, "NewsItem": "Crew News", "NewsBlobID": None},
    ]),
    (StoredDocument.__table__, [
        _document(1, 4, "N000001", "Drama Production Graph", "drama-graph.pdf", datetime(2024, 5, 1)),
        _document(2, 4, "N000002", "TVC Production Report", "tvc-report.pdf", datetime(2024, 6, 1)),
        # same blob id, different document type
        _document(3, 2, "N000002", "Not a news file", "photo.png", datetime(2024, 6, 2)),
    ]),
    (ServiceCategory.__table__, [
        _service_category(1, 1, "Panavision", 10, "Camera Hire", "https://panavision.example", "L000001"),
        _service_category(2, 2, "Arri Rental", 10, "Camera Hire", "https://arri.example", None),
        _service_category(3, 1, "Panavision", 20, "Lighting & Grip", "https://panavision.example", "L000001"),
        _service_category(4, 3, "Éclair Lights", 20, "Lighting & Grip", None, "  "),
    ]),
]


async def _reset_database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
        for table, rows in SEED_ROWS:
            await conn.execute(table.insert(), rows)


@pytest.fixture(autouse=True)
def clean_cache():
    query_cache.clear()
    yield
    query_cache.clear()


@pytest.fixture
def seeded_db():
    asyncio.run(_reset_database())


@pytest.fixture
def client(seeded_db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    def make(freelancer_id=7, slug="jane-doe"):
        token = create_access_token({"freelancer_id": freelancer_id, "slug": slug})
        return {"Authorization": f"Bearer {token}"}
    return make
