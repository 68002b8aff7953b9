"""
词典合并

把用户词典并入主词典：同键同文本的词条频率累加，其余词条追加。
累加是有意为之，同一个用户词典合并两次会把频率计两次。
"""

from dataclasses import dataclass

from .dictionary import DictEntry, PinyinDictionary
from .logging import get_engine_logger

logger = get_engine_logger()


@dataclass
class MergeStats:
    """合并统计"""
    added: int = 0      # 新增词条
    updated: int = 0    # 频率累加的已有词条

    @property
    def total(self) -> int:
        return self.added + self.updated


def merge_word(main: PinyinDictionary, key: str, entry: DictEntry) -> bool:
    """
    把单个词条并入主词典

    Returns:
        新增词条返回 True，累加到已有词条返回 False
    """
    entries = main.entries(key)
    for i in range(len(entries)):
        if entries[i].text == entry.text:
            entries[i].frequency += entry.frequency
            return False

    entries.append(entry.copy())
    return True


def merge_dictionary(main: PinyinDictionary, user: PinyinDictionary) -> MergeStats:
    """把用户词典的所有词条并入主词典，user 保持不变"""
    stats = MergeStats()
    for key, entry in user.items():
        if merge_word(main, key, entry):
            stats.added += 1
        else:
            stats.updated += 1

    logger.info(f"词典合并完成: 新增 {stats.added}, 累加 {stats.updated}")
    return stats
