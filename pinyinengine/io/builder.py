"""
词典构建：从词频表生成拼音词典

词频表格式兼容 jieba / THUOCL：每行 "词 频率 [词性]"（空白或制表符分隔），
# 开头为注释。拼音由 pypinyin 给出，键的写法与切分器的规范写法一致
（数字声调，轻声为 5，ü 写作 v）。
"""

import re
from pathlib import Path
from typing import Dict, List, Optional, Union

import pypinyin

from pinyinengine.engine.dictionary import DictEntry, PinyinDictionary
from pinyinengine.engine.merge import merge_word
from pinyinengine.engine.tokenizer import VALID_PINYINS
from pinyinengine.engine.logging import get_io_logger, log_execution_time

logger = get_io_logger()

_TONE3_PATTERN = re.compile(r'^([a-z]+)([1-5])$')

ENCODINGS = ('utf-8', 'gb18030')


def is_chinese(text: str) -> bool:
    """检查是否为纯中文"""
    return bool(text) and all('\u4e00' <= c <= '\u9fff' for c in text)


def word_to_syllables(word: str) -> Optional[List[str]]:
    """获取词语的带调拼音列表，含无法识别的音节时返回 None"""
    syllables = pypinyin.lazy_pinyin(
        word,
        style=pypinyin.Style.TONE3,
        neutral_tone_with_five=True,
    )
    if len(syllables) != len(word):
        return None

    result = []
    for syllable in syllables:
        match = _TONE3_PATTERN.match(syllable.lower())
        if not match or match.group(1) not in VALID_PINYINS:
            return None
        result.append(match.group(0))
    return result


def word_to_key(word: str) -> Optional[str]:
    """词语 → 词典键（如 你好 → ni3hao3）"""
    syllables = word_to_syllables(word)
    return ''.join(syllables) if syllables else None


def _parse_lines(f) -> Dict[str, float]:
    freq_map = {}
    for line in f:
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        parts = line.split('\t') if '\t' in line else line.split()
        if len(parts) < 2:
            continue
        word = parts[0].strip()
        try:
            freq = float(parts[1])
        except ValueError:
            continue
        if is_chinese(word):
            freq_map[word] = freq
    return freq_map


def read_word_frequencies(path: Union[str, Path]) -> Dict[str, float]:
    """读取词频表，依次尝试多种编码"""
    path = Path(path)
    for encoding in ENCODINGS:
        try:
            with open(path, 'r', encoding=encoding) as f:
                freq_map = _parse_lines(f)
        except UnicodeDecodeError:
            logger.debug(f"{path.name} 不是 {encoding} 编码，尝试下一种")
            continue
        logger.info(f"读取词频表: {path.name} ({len(freq_map):,} 词, {encoding})")
        return freq_map

    raise UnicodeDecodeError(ENCODINGS[-1], b'', 0, 1, f"无法识别 {path} 的编码")


@log_execution_time(logger)
def build_dictionary(freqs: Dict[str, float], scale: float = 1.0) -> PinyinDictionary:
    """
    由词频构建词典

    Args:
        freqs: 词 → 频率
        scale: 频率缩放系数（频率取整前乘上）
    """
    db = PinyinDictionary()
    skipped = 0

    for word, freq in freqs.items():
        key = word_to_key(word)
        if key is None:
            skipped += 1
            continue
        frequency = max(int(round(freq * scale)), 0)
        merge_word(db, key, DictEntry(word, frequency))

    if skipped:
        logger.warning(f"{skipped} 个词无法转换为拼音，已跳过")
    logger.info(f"构建词典: {len(db)} 键, {db.entry_count} 词条")
    return db
