import os
from dataclasses import dataclass, field
from typing import List, Dict


@dataclass
class EngineConfig:
    """引擎配置"""
    top_k: int = 10
    cache_size: int = 2000
    use_cache: bool = True
    default_tone: int = 5      # 未标声调的音节按轻声处理

    def __post_init__(self):
        if self.top_k < 1:
            raise ValueError(f"top_k 必须为正数: {self.top_k}")
        if self.cache_size < 1:
            raise ValueError(f"cache_size 必须为正数: {self.cache_size}")
        if not 1 <= self.default_tone <= 5:
            raise ValueError(f"default_tone 必须在 1-5 之间: {self.default_tone}")

    @classmethod
    def from_env(cls, **overrides) -> "EngineConfig":
        """从环境变量读取配置，关键字参数优先"""
        values = {}
        for name, env_key in (
            ('top_k', 'PINYINENGINE_TOP_K'),
            ('cache_size', 'PINYINENGINE_CACHE_SIZE'),
            ('default_tone', 'PINYINENGINE_DEFAULT_TONE'),
        ):
            raw = os.getenv(env_key)
            if raw is not None and raw.strip():
                values[name] = int(raw)
        use_cache = os.getenv('PINYINENGINE_USE_CACHE')
        if use_cache is not None:
            values['use_cache'] = use_cache.strip().lower() not in ('0', 'false', 'no', 'off')
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class CandidateResult:
    """候选结果（不可变，可在缓存中共享）"""
    text: str
    score: float
    source: str = ""    # 命中的词典键


@dataclass
class EngineOutput:
    """引擎输出"""
    raw_pinyin: str = ""
    candidates: List[CandidateResult] = field(default_factory=list)
    segmented_pinyin: List[str] = field(default_factory=list)
    remainder: str = ""
    metadata: Dict = field(default_factory=dict)

    @property
    def texts(self) -> List[str]:
        return [c.text for c in self.candidates]
