"""
词典加载

支持两种格式：
- CSV：每行 "文本,拼音键,频率"，多余字段忽略（旧导出文件每行以逗号结尾）
- JSON Lines：每行 {"文本": [[声母, 韵母, 声调], ...]}，同时生成全拼键和
  首字母键（声母 + 声调），频率为 0
"""

import csv
import orjson
from pathlib import Path
from typing import Dict, List, Tuple, Union

from pydantic import TypeAdapter, ValidationError

from pinyinengine.engine.dictionary import DictEntry, PinyinDictionary
from pinyinengine.engine.logging import get_io_logger, log_execution_time

logger = get_io_logger()

# {文本: [(声母, 韵母, 声调), ...]}
SyllableTriple = Tuple[str, str, Union[int, str]]
WordRecord = Dict[str, List[SyllableTriple]]

_word_record_adapter = TypeAdapter(WordRecord)


class DictionaryFormatError(ValueError):
    """词典文件格式错误"""

    def __init__(self, message: str, path: Union[str, Path] = None, line_no: int = None):
        self.path = str(path) if path is not None else None
        self.line_no = line_no
        location = ""
        if self.path:
            location = f"{self.path}:{line_no}: " if line_no else f"{self.path}: "
        super().__init__(f"{location}{message}")


def _parse_frequency(value: str) -> int:
    """解析频率，无法解析或为负时取 0"""
    try:
        frequency = int(value.strip())
    except ValueError:
        return 0
    return max(frequency, 0)


@log_execution_time(logger)
def load_csv(path: Union[str, Path]) -> PinyinDictionary:
    """从 CSV 加载词典（批量插入，不去重）"""
    path = Path(path)
    db = PinyinDictionary()

    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        for line_no, row in enumerate(csv.reader(f), 1):
            if not row or not any(field.strip() for field in row):
                continue
            if len(row) < 2:
                raise DictionaryFormatError(f"字段不足: {row!r}", path, line_no)

            text = row[0].strip()
            key = row[1].strip()
            frequency = _parse_frequency(row[2]) if len(row) > 2 else 0
            if not text or not key:
                raise DictionaryFormatError(f"文本或拼音为空: {row!r}", path, line_no)

            db.insert_or_append(key, DictEntry(text, frequency))

    logger.info(f"加载 CSV 词典: {path.name} ({len(db)} 键, {db.entry_count} 词条)")
    return db


def parse_word_record(line: Union[str, bytes]) -> WordRecord:
    """解析并校验一行 JSON 词条"""
    return _word_record_adapter.validate_python(orjson.loads(line))


def record_keys(syllables: List[SyllableTriple]) -> Tuple[str, str]:
    """
    由音节三元组生成键

    Returns:
        (全拼键, 首字母键)
    """
    full_key = ''.join(f"{initial}{final}{tone}" for initial, final, tone in syllables)
    short_key = ''.join(f"{initial}{tone}" for initial, _, tone in syllables)
    return full_key, short_key


@log_execution_time(logger)
def load_jsonl(path: Union[str, Path], abbreviations: bool = True) -> PinyinDictionary:
    """
    从 JSON Lines 加载词典

    Args:
        path: 文件路径
        abbreviations: 是否同时生成首字母键
    """
    path = Path(path)
    db = PinyinDictionary()

    with open(path, 'rb') as f:
        for line_no, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                record = parse_word_record(line)
            except orjson.JSONDecodeError as e:
                raise DictionaryFormatError(f"JSON 解析失败: {e}", path, line_no) from e
            except ValidationError as e:
                raise DictionaryFormatError(f"词条结构不合法: {e.errors()[0]['msg']}", path, line_no) from e

            for text, syllables in record.items():
                if not syllables:
                    continue
                full_key, short_key = record_keys(syllables)
                db.insert_or_append(full_key, DictEntry(text, 0))
                if abbreviations:
                    db.insert_or_append(short_key, DictEntry(text, 0))

    logger.info(f"加载 JSONL 词典: {path.name} ({len(db)} 键, {db.entry_count} 词条)")
    return db


def load_dictionary(path: Union[str, Path]) -> PinyinDictionary:
    """按扩展名选择加载方式"""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == '.csv':
        return load_csv(path)
    if suffix in ('.jsonl', '.json'):
        return load_jsonl(path)
    raise DictionaryFormatError(f"不支持的词典格式: {suffix or '(无扩展名)'}", path)
