"""
候选生成：逐步加长拼音前缀查询词典

对第 i 个音节，把前 i 个音节的规范写法拼成键查询词典；命中的词条组按
频率升序排列后依次追加。全部处理完再整体反转，使最长（最具体）的匹配
排在最前，同一组内变为频率降序。
"""

from typing import List, Optional, Sequence, Tuple

from .dictionary import PinyinDictionary
from .tokenizer import PinyinTokenizer, SyllableToken, get_tokenizer


def match_prefixes(db: PinyinDictionary, tokens: Sequence[SyllableToken]) -> List[Tuple[str, str]]:
    """
    逐步加长前缀查询词典

    Returns:
        [(命中的键, 候选文本), ...]，最长匹配在前
    """
    matches: List[Tuple[str, str]] = []
    prefix = ""

    for token in tokens:
        prefix += token.canonical

        entries = db.lookup(prefix)
        if entries is None:
            continue

        for entry in sorted(entries):
            matches.append((prefix, entry.text))

    # 只反转一次，代替每次插入到头部
    matches.reverse()
    return matches


def suggest_tokens(db: PinyinDictionary, tokens: Sequence[SyllableToken]) -> List[str]:
    """对已切分的音节序列生成候选"""
    return [text for _, text in match_prefixes(db, tokens)]


def suggest(
    db: PinyinDictionary,
    raw: str,
    tokenizer: Optional[PinyinTokenizer] = None,
) -> List[str]:
    """
    拼音 → 候选文本列表

    Args:
        db: 词典（查询期间只读）
        raw: 用户输入的原始拼音
        tokenizer: 切分器，默认使用共享实例

    Returns:
        候选文本，最长匹配在前；无匹配时返回空列表
    """
    tokenizer = tokenizer or get_tokenizer()
    return suggest_tokens(db, tokenizer.segment(raw).tokens)
