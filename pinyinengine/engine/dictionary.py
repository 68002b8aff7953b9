"""
词典模型

拼音键 → 候选词条列表。键为若干音节规范写法的拼接（如 "ni3hao3"），
单音节键对应单字，多音节键对应词组，结构上不做区分。
"""

from dataclasses import dataclass
from functools import total_ordering
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple


@total_ordering
@dataclass
class DictEntry:
    """候选词条"""
    text: str            # 汉字文本
    frequency: int = 0   # 使用频率，合并时累加

    def __post_init__(self):
        if not isinstance(self.frequency, int) or self.frequency < 0:
            raise ValueError(f"frequency 必须为非负整数: {self.frequency!r}")

    @property
    def sort_key(self) -> Tuple[int, str]:
        """排序依据：先频率，再文本（保证结果确定）"""
        return self.frequency, self.text

    def __lt__(self, other):
        if not isinstance(other, DictEntry):
            return NotImplemented
        return self.sort_key < other.sort_key

    def copy(self) -> "DictEntry":
        return DictEntry(self.text, self.frequency)


class PinyinDictionary:
    """
    拼音词典

    底层是按插入顺序保存的 dict，保证导出结果可复现。
    批量插入不去重，同一键下同一文本的去重由合并逻辑负责。
    """

    def __init__(self, data: Optional[Mapping[str, Iterable[DictEntry]]] = None):
        self._data: Dict[str, List[DictEntry]] = {}
        if data:
            for key, entries in data.items():
                for entry in entries:
                    self.insert_or_append(key, entry)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[Tuple[str, int]]]) -> "PinyinDictionary":
        """从 {键: [(文本, 频率), ...]} 构建"""
        db = cls()
        for key, items in mapping.items():
            for text, frequency in items:
                db.insert_or_append(key, DictEntry(text, frequency))
        return db

    def lookup(self, key: str) -> Optional[List[DictEntry]]:
        """查询键对应的词条列表，不存在返回 None"""
        return self._data.get(key)

    def insert_or_append(self, key: str, entry: DictEntry):
        """键不存在时新建列表，存在时追加"""
        if not isinstance(entry, DictEntry):
            raise TypeError(f"需要 DictEntry，得到 {type(entry).__name__}")
        entries = self._data.get(key)
        if entries is None:
            self._data[key] = [entry]
        else:
            entries.append(entry)

    def entries(self, key: str) -> List[DictEntry]:
        """取出键对应的词条列表，不存在时创建空列表"""
        return self._data.setdefault(key, [])

    def keys(self) -> Iterator[str]:
        return iter(self._data)

    def items(self) -> Iterator[Tuple[str, DictEntry]]:
        """遍历所有 (键, 词条)，只读，供导出使用"""
        for key, entries in self._data.items():
            for entry in entries:
                yield key, entry

    @property
    def entry_count(self) -> int:
        return sum(len(entries) for entries in self._data.values())

    def copy(self) -> "PinyinDictionary":
        """深拷贝，词条对象互不共享"""
        db = PinyinDictionary()
        for key, entries in self._data.items():
            db._data[key] = [e.copy() for e in entries]
        return db

    def to_dict(self) -> Dict[str, List[Tuple[str, int]]]:
        return {
            key: [(e.text, e.frequency) for e in entries]
            for key, entries in self._data.items()
        }

    def __contains__(self, key) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PinyinDictionary):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"PinyinDictionary(keys={len(self)}, entries={self.entry_count})"
