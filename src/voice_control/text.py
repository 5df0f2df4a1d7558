"""文本处理与相似度工具。

德语归一化、复合词拆分，以及 Jaro-Winkler 相似度。
"""

_UMLAUT_REPLACEMENTS = (
    ("ä", "ae"),
    ("ö", "oe"),
    ("ü", "ue"),
    ("ß", "ss"),
)

WINKLER_PREFIX_LIMIT = 4
WINKLER_SCALING = 0.1


def normalize(text: str | None) -> str:
    """归一化德语文本。

    小写化，将变音字母替换为 ASCII 双字母（ä -> ae），去除首尾空白。

    Args:
        text: 原始文本，None 视为空串

    Returns:
        归一化后的文本
    """
    if text is None:
        return ""
    normalized = text.lower()
    for umlaut, replacement in _UMLAUT_REPLACEMENTS:
        normalized = normalized.replace(umlaut, replacement)
    return normalized.strip()


# 常见的房间类复合词片段
COMPOUND_PARTS = tuple(
    normalize(part)
    for part in (
        "wohn",
        "zimmer",
        "schlaf",
        "kinder",
        "bade",
        "ess",
        "arbeits",
        "büro",
        "wohnzimmer",
        "schlafzimmer",
        "küche",
        "bad",
        "flur",
        "keller",
        "garage",
        "garten",
        "licht",
    )
)


def split_compound(word: str | None) -> list[str]:
    """启发式拆分德语复合词。

    结果第一个元素总是归一化后的整词；每命中一个已知片段，
    追加该片段以及去掉片段首次出现后的剩余部分。

    Args:
        word: 待拆分的词

    Returns:
        候选片段列表（允许重复）
    """
    normalized = normalize(word)
    parts = [normalized]

    for part in COMPOUND_PARTS:
        if part in normalized and len(normalized) > len(part):
            remainder = normalized.replace(part, "", 1)
            if remainder:
                parts.append(part)
                parts.append(remainder)

    return parts


def _jaro(s1: str, s2: str) -> float:
    """Jaro 相似度，换位数按 t / 2.0 计入。"""
    len1, len2 = len(s1), len(s2)
    window = max(len1, len2) // 2 - 1
    s1_matched = [False] * len1
    s2_matched = [False] * len2

    matches = 0
    for i, c1 in enumerate(s1):
        start = max(0, i - window)
        end = min(i + window + 1, len2)
        for j in range(start, end):
            if s2_matched[j] or s2[j] != c1:
                continue
            s1_matched[i] = True
            s2_matched[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i, c1 in enumerate(s1):
        if not s1_matched[i]:
            continue
        while not s2_matched[k]:
            k += 1
        if c1 != s2[k]:
            transpositions += 1
        k += 1

    return (
        matches / len1
        + matches / len2
        + (matches - transpositions / 2.0) / matches
    ) / 3.0


def jaro_winkler(s1: str | None, s2: str | None) -> float:
    """计算 Jaro-Winkler 相似度。

    匹配窗口为 max(len1, len2) // 2 - 1；Winkler 前缀加成对最多 4 个
    相同前缀字符生效，不设 Jaro 下限。

    Args:
        s1: 文本 1
        s2: 文本 2

    Returns:
        相似度 [0, 1]
    """
    s1 = normalize(s1)
    s2 = normalize(s2)

    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    jaro = _jaro(s1, s2)
    if jaro == 0.0:
        return 0.0

    prefix = 0
    for c1, c2 in zip(s1[:WINKLER_PREFIX_LIMIT], s2[:WINKLER_PREFIX_LIMIT]):
        if c1 != c2:
            break
        prefix += 1

    return jaro + prefix * WINKLER_SCALING * (1.0 - jaro)


def token_set_similarity(s1: str | None, s2: str | None) -> float:
    """计算按空白切分的词集合 Jaccard 相似度。

    Args:
        s1: 文本 1
        s2: 文本 2

    Returns:
        交集大小 / 并集大小，双方都没有词时为 0
    """
    tokens1 = set(normalize(s1).split())
    tokens2 = set(normalize(s2).split())

    union = tokens1 | tokens2
    if not union:
        return 0.0
    return len(tokens1 & tokens2) / len(union)


def contains_substring(text: str, query: str) -> bool:
    """检查文本是否包含查询串。"""
    if not text or not query:
        return False
    return query in text
