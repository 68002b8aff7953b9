"""
命令行测试
"""

import pytest

from pinyinengine.cli import main
from pinyinengine.io import load_csv


@pytest.fixture
def main_csv(tmp_path):
    path = tmp_path / 'main.csv'
    path.write_text("你,ni3,100\n尼,ni3,20\n你好,ni3hao3,50\n", encoding='utf-8')
    return path


@pytest.fixture
def user_csv(tmp_path):
    path = tmp_path / 'user.csv'
    path.write_text("尼,ni3,200\n拟好,ni3hao3,1\n", encoding='utf-8')
    return path


class TestCli:

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert 'usage' in capsys.readouterr().out

    def test_version(self, capsys):
        assert main(['version']) == 0
        assert capsys.readouterr().out.strip() == 'pinyinengine v0.1.0'

    def test_segment(self, capsys):
        assert main(['segment', 'zhong1guoren']) == 0
        assert capsys.readouterr().out.strip() == 'zhong1 guo5 ren5'

    def test_segment_malformed(self, capsys):
        assert main(['segment', 'ni3!']) == 1
        out = capsys.readouterr().out
        assert 'ni3' in out
        assert '!' in out

    def test_query(self, capsys, main_csv):
        assert main(['query', 'ni3hao3', '-d', str(main_csv), '-k', '2']) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines == ['1. 你好 (ni3hao3)', '2. 你 (ni3)']

    def test_query_with_user_dictionary(self, capsys, main_csv, user_csv):
        assert main(['query', 'ni3', '-d', str(main_csv), '-u', str(user_csv)]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines == ['1. 尼 (ni3)', '2. 你 (ni3)']

    def test_query_missing_dictionary(self, tmp_path):
        assert main(['query', 'ni3', '-d', str(tmp_path / 'missing.csv')]) == 2

    def test_merge(self, tmp_path, main_csv, user_csv):
        out = tmp_path / 'merged.csv'
        assert main(['merge', str(main_csv), str(user_csv), '-o', str(out)]) == 0
        db = load_csv(out)
        assert [(e.text, e.frequency) for e in db.lookup('ni3')] == [('你', 100), ('尼', 220)]
        assert [e.text for e in db.lookup('ni3hao3')] == ['你好', '拟好']

    def test_build(self, tmp_path):
        freq = tmp_path / 'freq.txt'
        freq.write_text("你好 12\n中国 8\n", encoding='utf-8')
        out = tmp_path / 'built.csv'
        assert main(['build', str(freq), '-o', str(out)]) == 0
        db = load_csv(out)
        assert db.lookup('ni3hao3')[0].frequency == 12
        assert db.lookup('zhong1guo2')[0].text == '中国'
