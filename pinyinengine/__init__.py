"""
pinyinengine - 拼音输入法候选生成核心

拼音切分 + 词典 + 用户词典合并 + 逐步前缀匹配
"""

__version__ = "0.1.0"

from pinyinengine.engine import (
    PinyinEngine,
    create_engine,
    EngineConfig,
    EngineOutput,
    CandidateResult,
    DictEntry,
    PinyinDictionary,
    MergeStats,
    merge_word,
    merge_dictionary,
    suggest,
    PinyinTokenizer,
    SegmentResult,
    SyllableToken,
    segment,
)

__all__ = [
    "__version__",
    # 引擎
    "PinyinEngine",
    "create_engine",
    "EngineConfig",
    "EngineOutput",
    "CandidateResult",
    # 词典
    "DictEntry",
    "PinyinDictionary",
    "MergeStats",
    "merge_word",
    "merge_dictionary",
    # 候选
    "suggest",
    # 切分
    "PinyinTokenizer",
    "SegmentResult",
    "SyllableToken",
    "segment",
]
