import time
from typing import Dict, List

from .config import EngineConfig, EngineOutput, CandidateResult
from .cache import LRUCache
from .dictionary import DictEntry, PinyinDictionary
from .merge import MergeStats, merge_dictionary, merge_word
from .suggest import match_prefixes, suggest_tokens
from .tokenizer import PinyinTokenizer, SegmentResult
from .logging import get_engine_logger

logger = get_engine_logger()


class PinyinEngine:
    """
    拼音输入法候选引擎

    核心思路：按音节逐步加长前缀查词典，长匹配优先
    - 词典在构建/合并阶段由一个调用方独占修改
    - 查询阶段只读，结果按输入缓存，词典变更时清空缓存
    """

    def __init__(self, config: EngineConfig = None, dictionary: PinyinDictionary = None):
        self.config = config or EngineConfig()
        self.dictionary = dictionary if dictionary is not None else PinyinDictionary()
        self.tokenizer = PinyinTokenizer(default_tone=self.config.default_tone)

        # 缓存
        self.cache = LRUCache(self.config.cache_size)

        # 统计
        self.stats = {'total': 0, 'cache_hits': 0, 'total_ms': 0.0}

        self._log_status()

    def _log_status(self):
        """输出状态"""
        logger.info(
            f"拼音引擎就绪: 词典 {len(self.dictionary)} 键 / {self.dictionary.entry_count} 词条, "
            f"top_k={self.config.top_k}, 缓存={'开' if self.config.use_cache else '关'}"
        )

    def process(self, pinyin: str) -> EngineOutput:
        """主处理入口"""
        start = time.perf_counter()
        self.stats['total'] += 1

        raw_input = pinyin.strip()
        cache_key = raw_input.lower()

        cached = self.cache.get(cache_key) if self.config.use_cache else None
        if cached is not None:
            self.stats['cache_hits'] += 1
            segments, candidates = cached
        else:
            segments = self.tokenizer.segment(raw_input)
            candidates = self._generate(segments)
            if self.config.use_cache:
                self.cache.put(cache_key, (segments, candidates))

        elapsed = (time.perf_counter() - start) * 1000
        self.stats['total_ms'] += elapsed

        return self._build_output(raw_input, segments, candidates, elapsed, cached is not None)

    def suggest(self, pinyin: str) -> List[str]:
        """返回完整候选文本列表（不截断）"""
        return suggest_tokens(self.dictionary, self.tokenizer.segment(pinyin).tokens)

    def segment(self, pinyin: str) -> SegmentResult:
        return self.tokenizer.segment(pinyin)

    def _generate(self, segments: SegmentResult) -> List[CandidateResult]:
        """生成候选，分数按排名递减"""
        matches = match_prefixes(self.dictionary, segments.tokens)
        return [
            CandidateResult(text=text, score=1.0 / (rank + 1), source=key)
            for rank, (key, text) in enumerate(matches)
        ]

    def learn(self, key: str, text: str, frequency: int = 1) -> bool:
        """记录一次用户选词（单词条合并）"""
        created = merge_word(self.dictionary, key, DictEntry(text, frequency))
        self.cache.clear()
        logger.debug(f"学习词条: {key} -> {text} (+{frequency}, {'新增' if created else '累加'})")
        return created

    def merge_user_dictionary(self, user: PinyinDictionary) -> MergeStats:
        """合并用户词典"""
        stats = merge_dictionary(self.dictionary, user)
        self.cache.clear()
        return stats

    def _build_output(
        self,
        pinyin: str,
        segments: SegmentResult,
        candidates: List[CandidateResult],
        elapsed_ms: float,
        cached: bool = False,
    ) -> EngineOutput:
        """构建输出"""
        return EngineOutput(
            raw_pinyin=pinyin,
            candidates=candidates[:self.config.top_k],
            segmented_pinyin=[t.canonical for t in segments.tokens],
            remainder=segments.remainder,
            metadata={
                'elapsed_ms': round(elapsed_ms, 2),
                'cached': cached,
                'cache_rate': round(self.cache.hit_rate, 3),
                'total_candidates': len(candidates),
            }
        )

    def get_stats(self) -> Dict:
        """获取统计"""
        total = self.stats['total'] or 1
        return {
            'total_requests': self.stats['total'],
            'cache_hit_rate': self.stats['cache_hits'] / total,
            'avg_latency_ms': self.stats['total_ms'] / total,
            'dictionary_keys': len(self.dictionary),
            'dictionary_entries': self.dictionary.entry_count,
        }
