"""多阶段模糊匹配。

按 exact -> contains -> token_set -> fuzzy(Jaro-Winkler) -> compound 的顺序
为每个候选打分，返回超过阈值的最佳候选。
"""

from __future__ import annotations

from typing import Sequence

from voice_control.models import MatchResult, MatchType
from voice_control.text import (
    contains_substring,
    jaro_winkler,
    normalize,
    split_compound,
    token_set_similarity,
)

MATCH_THRESHOLD = 0.65

CONTAINS_BASE_SCORE = 0.85
CONTAINS_LENGTH_BONUS = 0.05
CONTAINED_SCORE = 0.80
TOKEN_SET_WEIGHT = 0.80
FUZZY_MIN_SCORE = 0.75
COMPOUND_MIN_SCORE = 0.80
COMPOUND_MATCH_SCORE_MULTIPLIER = 0.95
COMPOUND_WEIGHT = 0.75


class _BestMatch:
    """扫描过程中的当前最佳候选，只有严格更高的分数才会覆盖。"""

    def __init__(self) -> None:
        self.score = 0.0
        self.match_type: MatchType | None = None
        self.matched_id: str | None = None

    def offer(self, score: float, match_type: MatchType, matched_id: str | None) -> None:
        if score > self.score:
            self.record(score, match_type, matched_id)

    def record(self, score: float, match_type: MatchType, matched_id: str | None) -> None:
        self.score = score
        self.match_type = match_type
        self.matched_id = matched_id


def _contains_score(normalized_query: str, normalized_candidate: str) -> float:
    if contains_substring(normalized_candidate, normalized_query):
        extra = len(normalized_candidate) - len(normalized_query)
        return CONTAINS_BASE_SCORE + CONTAINS_LENGTH_BONUS * (
            1.0 - extra / len(normalized_candidate)
        )
    if contains_substring(normalized_query, normalized_candidate):
        return CONTAINED_SCORE
    return 0.0


def find_best_match(
    query: str | None,
    candidates: Sequence[str] | None,
    candidate_ids: Sequence[str] | None = None,
) -> MatchResult | None:
    """在候选列表中查找与 query 最匹配的一项。

    精确匹配会立即返回；其余阶段只在分数严格更高时覆盖当前最佳，
    因此同分时保留输入顺序中最先出现的候选。

    Args:
        query: 查询串（设备名、房间名或场景名）
        candidates: 候选名称列表
        candidate_ids: 与 candidates 一一对应的 ID，缺省时使用名称本身

    Returns:
        MatchResult，最佳分数低于 MATCH_THRESHOLD 时返回 None
    """
    if query is None or not candidates:
        return None

    normalized_query = normalize(query)
    if not normalized_query:
        return None

    if candidate_ids is None:
        candidate_ids = candidates

    query_parts = split_compound(query)
    best = _BestMatch()

    for i, candidate in enumerate(candidates):
        candidate_id = candidate_ids[i] if i < len(candidate_ids) else None
        normalized_candidate = normalize(candidate)
        if not normalized_candidate:
            continue

        # 1. 精确匹配
        if normalized_query == normalized_candidate:
            if candidate_id is None:
                continue
            return MatchResult(score=1.0, match_type="exact", matched_id=candidate_id)

        # 2. 包含匹配
        best.offer(
            _contains_score(normalized_query, normalized_candidate),
            "contains",
            candidate_id,
        )

        # 3. 词集合匹配
        best.offer(
            token_set_similarity(query, candidate) * TOKEN_SET_WEIGHT,
            "token_set",
            candidate_id,
        )

        # 4. Jaro-Winkler 模糊匹配
        jaro_score = jaro_winkler(query, candidate)
        if jaro_score > FUZZY_MIN_SCORE:
            best.offer(jaro_score, "fuzzy", candidate_id)

        # 5. 复合词片段匹配
        candidate_parts = split_compound(candidate)
        for query_part in query_parts:
            for candidate_part in candidate_parts:
                part_score = jaro_winkler(query_part, candidate_part)
                if (
                    part_score > COMPOUND_MIN_SCORE
                    and part_score > best.score * COMPOUND_MATCH_SCORE_MULTIPLIER
                ):
                    best.record(part_score * COMPOUND_WEIGHT, "compound", candidate_id)

    if best.score >= MATCH_THRESHOLD and best.matched_id is not None and best.match_type:
        return MatchResult(score=best.score, match_type=best.match_type, matched_id=best.matched_id)

    return None


def matches(query: str | None, candidate: str | None) -> bool:
    """判断 query 与单个候选是否达到匹配阈值。"""
    if query is None or candidate is None:
        return False
    return find_best_match(query, [candidate], [candidate]) is not None
