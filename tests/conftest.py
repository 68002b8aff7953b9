"""
测试公共夹具
"""

import pytest

from pinyinengine.engine.dictionary import PinyinDictionary


@pytest.fixture
def sample_db() -> PinyinDictionary:
    """带声调键的小词典"""
    return PinyinDictionary.from_mapping({
        'ni3': [('你', 100), ('尼', 20), ('泥', 20)],
        'ni3hao3': [('你好', 50)],
        'hao3': [('好', 80)],
        'zhong1': [('中', 90)],
        'zhong1guo2': [('中国', 70)],
        'zhong1guo2ren2': [('中国人', 30)],
    })


@pytest.fixture
def neutral_db() -> PinyinDictionary:
    """未标声调输入（默认轻声 5）对应的键"""
    return PinyinDictionary.from_mapping({
        'ni5': [('呢', 5)],
        'ni5hao5': [('你好', 10)],
    })
