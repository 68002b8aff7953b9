"""
词典模型测试
"""

import pytest

from pinyinengine.engine.dictionary import DictEntry, PinyinDictionary


class TestDictEntry:

    def test_ordering_by_frequency_then_text(self):
        entries = [DictEntry('b', 2), DictEntry('c', 1), DictEntry('a', 2)]
        assert [e.text for e in sorted(entries)] == ['c', 'a', 'b']

    def test_negative_frequency_rejected(self):
        with pytest.raises(ValueError):
            DictEntry('你', -1)

    def test_copy_is_independent(self):
        entry = DictEntry('你', 3)
        clone = entry.copy()
        clone.frequency += 1
        assert entry.frequency == 3
        assert clone == DictEntry('你', 4)


class TestPinyinDictionary:

    def test_lookup_missing_key(self):
        assert PinyinDictionary().lookup('ni3') is None

    def test_insert_creates_and_appends(self):
        db = PinyinDictionary()
        db.insert_or_append('ni3', DictEntry('你', 1))
        db.insert_or_append('ni3', DictEntry('你', 2))
        assert db.lookup('ni3') == [DictEntry('你', 1), DictEntry('你', 2)]
        assert len(db) == 1
        assert db.entry_count == 2

    def test_insert_requires_entry(self):
        with pytest.raises(TypeError):
            PinyinDictionary().insert_or_append('ni3', ('你', 1))

    def test_entries_get_or_insert(self):
        db = PinyinDictionary()
        entries = db.entries('hao3')
        entries.append(DictEntry('好', 1))
        assert db.lookup('hao3') == [DictEntry('好', 1)]

    def test_items_traversal_in_insertion_order(self, sample_db):
        pairs = [(key, entry.text) for key, entry in sample_db.items()]
        assert pairs[:4] == [('ni3', '你'), ('ni3', '尼'), ('ni3', '泥'), ('ni3hao3', '你好')]
        assert len(pairs) == sample_db.entry_count

    def test_contains_and_keys(self, sample_db):
        assert 'zhong1guo2' in sample_db
        assert 'zhong1guo' not in sample_db
        assert list(sample_db.keys())[0] == 'ni3'

    def test_copy_is_deep(self, sample_db):
        clone = sample_db.copy()
        assert clone == sample_db
        clone.lookup('ni3')[0].frequency = 0
        clone.insert_or_append('new1', DictEntry('新', 1))
        assert sample_db.lookup('ni3')[0].frequency == 100
        assert 'new1' not in sample_db

    def test_constructor_from_entries(self):
        db = PinyinDictionary({'ni3': [DictEntry('你', 1)]})
        assert db.to_dict() == {'ni3': [('你', 1)]}

    def test_repr(self, sample_db):
        assert repr(sample_db) == "PinyinDictionary(keys=6, entries=8)"
