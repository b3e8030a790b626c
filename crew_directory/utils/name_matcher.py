# crew_directory/utils/name_matcher.py
import Levenshtein
from typing import Dict, List

# 模糊比對的門檻 (相似度需大於此值)
FUZZY_THRESHOLD = 0.7

# (輔助函式) 取得兩個字串的 Levenshtein 相似度 (0.0 ~ 1.0)
def _get_string_similarity(s1: str, s2: str) -> float:
    # Levenshtein.distance 算出的是 "編輯距離" (差多少)
    # 我們將其標準化為 "相似度" (0.0 ~ 1.0)，1.0 表示完全相同
    if not s1 or not s2:
        return 0.0
    distance = Levenshtein.distance(s1.lower(), s2.lower())
    max_len = max(len(s1), len(s2))
    return 1.0 - (distance / max_len)

def score_name(term: str, name: str) -> float:
    """
    計算搜尋字串與工作者名稱的相符分數

    1. 名稱包含搜尋字串 (不分大小寫) => 1.0 + 1.0 (優先)
    2. 否則逐字比對：每個搜尋字取名稱中最相近的字，相似度需 > 0.7
       分數為所有搜尋字的平均相似度；任一字沒有相近的字 => 0
    """
    term = (term or "").strip().lower()
    name = (name or "").lower()
    if not term or not name:
        return 0.0

    if term in name:
        return 2.0

    name_words = name.split()
    term_words = term.split()
    total_score = 0.0
    for t_word in term_words:
        best_match_score = 0.0
        for n_word in name_words:
            similarity = _get_string_similarity(t_word, n_word)
            if similarity > FUZZY_THRESHOLD:
                best_match_score = max(best_match_score, similarity)
        if best_match_score == 0.0:
            return 0.0
        total_score += best_match_score

    return total_score / len(term_words)

def rank_by_name(term: str, items: List[Dict]) -> List[Dict]:
    """
    items: [{"item_id": ..., "name": ..., "item_object": ...}]
    回傳有分數的項目 (加上 "score")，依分數高到低、名稱字母順序排序
    """
    ranked = []
    for item in items:
        score = score_name(term, item.get("name", ""))
        if score > 0:
            ranked.append({**item, "score": score})

    ranked.sort(key=lambda x: (-x["score"], (x.get("name") or "").lower()))
    return ranked
