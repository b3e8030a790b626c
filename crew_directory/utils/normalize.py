# crew_directory/utils/normalize.py
# 統一的字串正規化 (slug / 連結類型 / 排序 key)，所有比對都應經過這裡
import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def normalize_slug(slug: str | None) -> str:
    """Slug 比對一律不分大小寫"""
    return (slug or "").strip().lower()


def normalize_link_type(link_type: str | None) -> str:
    """
    連結類型比對：不分大小寫、忽略空白
    (資料庫中 'LinkedIn' 可能存成 'linked in' 之類的寫法)
    """
    return _WHITESPACE.sub("", link_type or "").lower()


def is_blank(value: str | None) -> bool:
    """None、空字串、全空白都視為未設定"""
    return value is None or not value.strip()


def generate_slug(name: str | None) -> str:
    """由名稱產生 URL 友善的 slug，例如 'Camera & Lighting' -> 'camera-lighting'"""
    if not name:
        return ""
    return _NON_SLUG_CHARS.sub("-", name.lower()).strip("-")


def locale_sort_key(name: str | None) -> tuple:
    """
    近似 localeCompare 的排序 key：
    先比較去掉重音、不分大小寫的字串，再以原字串作為 tie-breaker
    """
    name = name or ""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name)
