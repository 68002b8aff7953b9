"""
词典读写与构建测试
"""

import pytest

from pinyinengine.engine.dictionary import DictEntry, PinyinDictionary
from pinyinengine.engine.suggest import suggest
from pinyinengine.io import (
    DictionaryFormatError,
    build_dictionary,
    dump_csv,
    load_csv,
    load_dictionary,
    load_jsonl,
    parse_word_record,
    read_word_frequencies,
    record_keys,
    word_to_key,
)


def write(path, text):
    path.write_text(text, encoding='utf-8')
    return path


class TestLoadCsv:

    def test_basic(self, tmp_path):
        path = write(tmp_path / 'main.csv', "你,ni3,100\n你好,ni3hao3,50\n")
        db = load_csv(path)
        assert db.lookup('ni3') == [DictEntry('你', 100)]
        assert db.lookup('ni3hao3') == [DictEntry('你好', 50)]

    def test_trailing_comma_and_bad_frequency(self, tmp_path):
        path = write(tmp_path / 'old.csv', "你,ni3,100,\n尼,ni3,abc,\n泥,ni3,-4\n\n")
        db = load_csv(path)
        assert db.lookup('ni3') == [DictEntry('你', 100), DictEntry('尼', 0), DictEntry('泥', 0)]

    def test_no_dedup_on_bulk_load(self, tmp_path):
        path = write(tmp_path / 'dup.csv', "你,ni3,1\n你,ni3,2\n")
        assert load_csv(path).entry_count == 2

    def test_too_few_fields(self, tmp_path):
        path = write(tmp_path / 'bad.csv', "你,ni3,1\n坏行\n")
        with pytest.raises(DictionaryFormatError) as exc_info:
            load_csv(path)
        assert exc_info.value.line_no == 2
        assert 'bad.csv:2' in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_csv(tmp_path / 'missing.csv')


class TestDumpCsv:

    def test_dump_then_load(self, tmp_path, sample_db):
        path = tmp_path / 'out' / 'dump.csv'
        assert dump_csv(sample_db, path) == sample_db.entry_count
        assert load_csv(path) == sample_db

    def test_format(self, tmp_path):
        db = PinyinDictionary.from_mapping({'hao3': [('好', 8)]})
        path = tmp_path / 'dump.csv'
        dump_csv(db, path)
        assert path.read_text(encoding='utf-8') == "好,hao3,8\n"


class TestLoadJsonl:

    def test_full_and_short_keys(self, tmp_path):
        path = write(
            tmp_path / 'words.jsonl',
            '{"你好": [["n", "i", "3"], ["h", "ao", "3"]]}\n'
            '\n'
            '{"爱": [["", "ai", 4]]}\n',
        )
        db = load_jsonl(path)
        assert db.lookup('ni3hao3') == [DictEntry('你好', 0)]
        assert db.lookup('n3h3') == [DictEntry('你好', 0)]
        assert db.lookup('ai4') == [DictEntry('爱', 0)]
        assert db.lookup('4') == [DictEntry('爱', 0)]

    def test_without_abbreviations(self, tmp_path):
        path = write(tmp_path / 'words.jsonl', '{"你好": [["n", "i", "3"], ["h", "ao", "3"]]}\n')
        db = load_jsonl(path, abbreviations=False)
        assert list(db.keys()) == ['ni3hao3']

    def test_loaded_keys_match_tokenizer(self, tmp_path):
        path = write(tmp_path / 'words.jsonl', '{"你好": [["n", "i", "3"], ["h", "ao", "3"]]}\n')
        assert suggest(load_jsonl(path), "ni3hao3") == ['你好']

    def test_invalid_json(self, tmp_path):
        path = write(tmp_path / 'bad.jsonl', '{"你": [["n", "i", "3"]]}\n{not json\n')
        with pytest.raises(DictionaryFormatError) as exc_info:
            load_jsonl(path)
        assert exc_info.value.line_no == 2

    def test_invalid_shape(self, tmp_path):
        path = write(tmp_path / 'bad.jsonl', '{"你": [["n", "i"]]}\n')
        with pytest.raises(DictionaryFormatError):
            load_jsonl(path)

    def test_parse_word_record(self):
        record = parse_word_record('{"中": [["zh", "ong", "1"]]}')
        assert record_keys(record['中']) == ('zhong1', 'zh1')


class TestLoadDictionary:

    def test_dispatch_by_suffix(self, tmp_path):
        csv_path = write(tmp_path / 'a.csv', "你,ni3,1\n")
        jsonl_path = write(tmp_path / 'b.jsonl', '{"你": [["n", "i", "3"]]}\n')
        assert load_dictionary(csv_path).lookup('ni3') == [DictEntry('你', 1)]
        assert load_dictionary(jsonl_path).lookup('ni3') == [DictEntry('你', 0)]

    def test_unsupported_suffix(self, tmp_path):
        with pytest.raises(DictionaryFormatError):
            load_dictionary(write(tmp_path / 'a.txt', ""))


class TestBuilder:

    def test_word_to_key(self):
        assert word_to_key('你好') == 'ni3hao3'
        assert word_to_key('中国') == 'zhong1guo2'
        assert word_to_key('绿') == 'lv4'
        assert word_to_key('我们') == 'wo3men5'
        assert word_to_key('嗲') == 'dia3'

    def test_word_to_key_rejects_non_chinese(self):
        assert word_to_key('abc') is None

    def test_read_word_frequencies(self, tmp_path):
        path = write(
            tmp_path / 'freq.txt',
            "# 注释\n你好 100 l\nhello 5\n中国\t50\n坏 abc\n\n",
        )
        assert read_word_frequencies(path) == {'你好': 100.0, '中国': 50.0}

    def test_read_gb18030(self, tmp_path):
        path = tmp_path / 'freq.txt'
        path.write_bytes("你好 7\n".encode('gb18030'))
        assert read_word_frequencies(path) == {'你好': 7.0}

    def test_build_dictionary(self):
        db = build_dictionary({'你好': 10.4, '中国': 3, '你': 2}, scale=2)
        assert db.lookup('ni3hao3') == [DictEntry('你好', 21)]
        assert db.lookup('zhong1guo2') == [DictEntry('中国', 6)]
        assert suggest(db, "ni3hao3") == ['你好', '你']

    def test_build_skips_unconvertible(self):
        db = build_dictionary({'你好': 1, 'abc': 1})
        assert db.entry_count == 1
