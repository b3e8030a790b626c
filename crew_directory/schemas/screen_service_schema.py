from pydantic import BaseModel
from typing import List

class CategoryRefOut(BaseModel):
    id: int
    name: str
    slug: str

class ScreenServiceOut(BaseModel):
    id: int
    name: str
    slug: str
    websiteUrl: str | None = None
    logoUrl: str | None = None
    logoBlobId: str | None = None

class ScreenServiceWithCategoriesOut(ScreenServiceOut):
    categories: List[CategoryRefOut] = []

class ServiceCategoryOut(CategoryRefOut):
    services: List[ScreenServiceOut] = []
    serviceCount: int = 0

class ScreenServicesOut(BaseModel):
    services: List[ScreenServiceWithCategoriesOut]
    categories: List[ServiceCategoryOut]
    totalServices: int
    totalCategories: int

class CategoryServicesOut(BaseModel):
    category: CategoryRefOut
    services: List[ScreenServiceOut]
    serviceCount: int
