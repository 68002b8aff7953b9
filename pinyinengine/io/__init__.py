# 词典读写（加载、导出、构建）

from pinyinengine.io.loader import (
    DictionaryFormatError,
    load_csv,
    load_jsonl,
    load_dictionary,
    parse_word_record,
    record_keys,
)
from pinyinengine.io.dump import dump_csv
from pinyinengine.io.builder import (
    build_dictionary,
    read_word_frequencies,
    word_to_key,
)

__all__ = [
    'DictionaryFormatError',
    'load_csv',
    'load_jsonl',
    'load_dictionary',
    'parse_word_record',
    'record_keys',
    'dump_csv',
    'build_dictionary',
    'read_word_frequencies',
    'word_to_key',
]
