from .config import EngineConfig, EngineOutput, CandidateResult
from .core import PinyinEngine
from .dictionary import DictEntry, PinyinDictionary
from .merge import MergeStats, merge_word, merge_dictionary
from .suggest import suggest, suggest_tokens, match_prefixes
from .tokenizer import (
    PinyinTokenizer,
    SegmentResult,
    SyllableToken,
    VALID_PINYINS,
    is_valid_syllable,
    segment,
)
from .logging import setup_logging, get_logger, get_engine_logger, get_io_logger, get_cli_logger


def create_engine(config: EngineConfig = None, dictionary: PinyinDictionary = None) -> PinyinEngine:
    """
    创建引擎

    Args:
        config: 引擎配置（默认从环境变量读取）
        dictionary: 已加载的词典（可选，默认空词典）

    Returns:
        PinyinEngine 实例
    """
    return PinyinEngine(config or EngineConfig.from_env(), dictionary)


__all__ = [
    # 引擎
    'PinyinEngine',
    'create_engine',
    'EngineConfig',
    'EngineOutput',
    'CandidateResult',
    # 词典
    'DictEntry',
    'PinyinDictionary',
    # 合并
    'MergeStats',
    'merge_word',
    'merge_dictionary',
    # 候选
    'suggest',
    'suggest_tokens',
    'match_prefixes',
    # 切分
    'PinyinTokenizer',
    'SegmentResult',
    'SyllableToken',
    'VALID_PINYINS',
    'is_valid_syllable',
    'segment',
    # 日志
    'setup_logging',
    'get_logger',
    'get_engine_logger',
    'get_io_logger',
    'get_cli_logger',
]
