"""
拼音切分模块

功能：
1. 将连续拼音字符串切分为音节（最长匹配优先，走不通时用动态规划回退到较短音节）
2. 每个音节拆成声母、韵母、声调
3. 容忍正在输入中的末尾音节，遇到无法识别的输入时停止切分
"""

from typing import Dict, FrozenSet, List, Optional, Set, Tuple
from dataclasses import dataclass, field

from .logging import get_engine_logger

logger = get_engine_logger()


# 声母（双字母在前，保证 zh/ch/sh 优先匹配）
INITIALS = (
    'zh', 'ch', 'sh',
    'b', 'p', 'm', 'f', 'd', 't', 'n', 'l', 'g', 'k', 'h',
    'j', 'q', 'x', 'r', 'z', 'c', 's', 'y', 'w',
)

# 声调字符映射表（字符音标 → 字母, 声调）
TONE_MARKS = {
    'ā': ('a', 1), 'á': ('a', 2), 'ǎ': ('a', 3), 'à': ('a', 4),
    'ē': ('e', 1), 'é': ('e', 2), 'ě': ('e', 3), 'è': ('e', 4),
    'ī': ('i', 1), 'í': ('i', 2), 'ǐ': ('i', 3), 'ì': ('i', 4),
    'ō': ('o', 1), 'ó': ('o', 2), 'ǒ': ('o', 3), 'ò': ('o', 4),
    'ū': ('u', 1), 'ú': ('u', 2), 'ǔ': ('u', 3), 'ù': ('u', 4),
    'ǖ': ('v', 1), 'ǘ': ('v', 2), 'ǚ': ('v', 3), 'ǜ': ('v', 4),
    'ü': ('v', None),
}

# 音节分隔符，强制切分边界
SEPARATORS = frozenset("' \t-")

TONE_DIGITS = frozenset('12345')

# 所有有效拼音（无声调，ü 写作 v）
VALID_PINYINS = frozenset({
    # 零声母
    'a', 'o', 'e', 'ai', 'ei', 'ao', 'ou', 'an', 'en', 'ang', 'eng', 'er',

    # b
    'ba', 'bo', 'bi', 'bu', 'bai', 'bei', 'bao', 'ban', 'ben', 'bang', 'beng',
    'bie', 'biao', 'bian', 'bin', 'bing',

    # p
    'pa', 'po', 'pi', 'pu', 'pai', 'pei', 'pao', 'pou', 'pan', 'pen', 'pang', 'peng',
    'pie', 'piao', 'pian', 'pin', 'ping',

    # m
    'ma', 'mo', 'me', 'mi', 'mu', 'mai', 'mei', 'mao', 'mou', 'man', 'men', 'mang', 'meng',
    'mie', 'miao', 'miu', 'mian', 'min', 'ming',

    # f
    'fa', 'fo', 'fu', 'fei', 'fou', 'fan', 'fen', 'fang', 'feng',

    # d
    'da', 'de', 'di', 'du', 'dai', 'dei', 'dao', 'dou', 'dan', 'den', 'dang', 'deng', 'dong',
    'die', 'diao', 'diu', 'dian', 'ding',
    'duo', 'dui', 'duan', 'dun',

    # t
    'ta', 'te', 'ti', 'tu', 'tai', 'tei', 'tao', 'tou', 'tan', 'tang', 'teng', 'tong',
    'tie', 'tiao', 'tian', 'ting',
    'tuo', 'tui', 'tuan', 'tun',

    # n
    'na', 'ne', 'ni', 'nu', 'nv', 'nai', 'nei', 'nao', 'nou', 'nan', 'nen', 'nang', 'neng', 'nong',
    'nie', 'niao', 'niu', 'nian', 'nin', 'niang', 'ning',
    'nuo', 'nuan', 'nve',

    # l
    'la', 'le', 'li', 'lu', 'lv', 'lai', 'lei', 'lao', 'lou', 'lan', 'lang', 'leng', 'long',
    'lia', 'lie', 'liao', 'liu', 'lian', 'lin', 'liang', 'ling',
    'luo', 'luan', 'lun', 'lve',

    # g
    'ga', 'ge', 'gu', 'gai', 'gei', 'gao', 'gou', 'gan', 'gen', 'gang', 'geng', 'gong',
    'gua', 'guo', 'guai', 'gui', 'guan', 'gun', 'guang',

    # k
    'ka', 'ke', 'ku', 'kai', 'kei', 'kao', 'kou', 'kan', 'ken', 'kang', 'keng', 'kong',
    'kua', 'kuo', 'kuai', 'kui', 'kuan', 'kun', 'kuang',

    # h
    'ha', 'he', 'hu', 'hai', 'hei', 'hao', 'hou', 'han', 'hen', 'hang', 'heng', 'hong',
    'hua', 'huo', 'huai', 'hui', 'huan', 'hun', 'huang',

    # j
    'ji', 'jia', 'jie', 'jiao', 'jiu', 'jian', 'jin', 'jiang', 'jing', 'jiong',
    'ju', 'jue', 'juan', 'jun',

    # q
    'qi', 'qia', 'qie', 'qiao', 'qiu', 'qian', 'qin', 'qiang', 'qing', 'qiong',
    'qu', 'que', 'quan', 'qun',

    # x
    'xi', 'xia', 'xie', 'xiao', 'xiu', 'xian', 'xin', 'xiang', 'xing', 'xiong',
    'xu', 'xue', 'xuan', 'xun',

    # zh
    'zha', 'zhe', 'zhi', 'zhu', 'zhai', 'zhei', 'zhao', 'zhou', 'zhan', 'zhen', 'zhang', 'zheng', 'zhong',
    'zhua', 'zhuo', 'zhuai', 'zhui', 'zhuan', 'zhun', 'zhuang',

    # ch
    'cha', 'che', 'chi', 'chu', 'chai', 'chao', 'chou', 'chan', 'chen', 'chang', 'cheng', 'chong',
    'chua', 'chuo', 'chuai', 'chui', 'chuan', 'chun', 'chuang',

    # sh
    'sha', 'she', 'shi', 'shu', 'shai', 'shei', 'shao', 'shou', 'shan', 'shen', 'shang', 'sheng',
    'shua', 'shuo', 'shuai', 'shui', 'shuan', 'shun', 'shuang',

    # r
    'ri', 're', 'ru', 'rao', 'rou', 'ran', 'ren', 'rang', 'reng', 'rong',
    'rua', 'ruo', 'rui', 'ruan', 'run',

    # z
    'za', 'ze', 'zi', 'zu', 'zai', 'zei', 'zao', 'zou', 'zan', 'zen', 'zang', 'zeng', 'zong',
    'zuo', 'zui', 'zuan', 'zun',

    # c
    'ca', 'ce', 'ci', 'cu', 'cai', 'cao', 'cou', 'can', 'cen', 'cang', 'ceng', 'cong',
    'cuo', 'cui', 'cuan', 'cun',

    # s
    'sa', 'se', 'si', 'su', 'sai', 'sao', 'sou', 'san', 'sen', 'sang', 'seng', 'song',
    'suo', 'sui', 'suan', 'sun',

    # y
    'ya', 'yo', 'ye', 'yi', 'yu', 'yao', 'you', 'yan', 'yin', 'yang', 'ying', 'yong',
    'yue', 'yuan', 'yun',

    # w
    'wa', 'wo', 'wu', 'wai', 'wei', 'wan', 'wen', 'wang', 'weng',

    # 少见音节
    'dia', 'lo',

    # 常见的 ü 省写
    'lue', 'nue',
})

# 输入写法 → 词典写法
SPELLING_ALIASES = {
    'lue': 'lve',
    'nue': 'nve',
}

MAX_SYLLABLE_LEN = max(len(p) for p in VALID_PINYINS)


def _build_prefixes(syllables: FrozenSet[str]) -> FrozenSet[str]:
    """所有音节的真前缀（用于识别未输完的末尾音节）"""
    prefixes: Set[str] = set()
    for syllable in syllables:
        for i in range(1, len(syllable)):
            prefixes.add(syllable[:i])
    return frozenset(prefixes)


SYLLABLE_PREFIXES = _build_prefixes(VALID_PINYINS)


def split_initial(syllable: str) -> Tuple[str, str]:
    """拆分声母与韵母，零声母返回空声母"""
    for initial in INITIALS:
        if syllable.startswith(initial):
            return initial, syllable[len(initial):]
    return '', syllable


def is_valid_syllable(text: str) -> bool:
    """检查是否为有效的无调音节"""
    return text.lower() in VALID_PINYINS


@dataclass(frozen=True)
class SyllableToken:
    """切分出的单个音节"""
    initial: str
    final: str
    tone: int
    raw: str = ""            # 消耗的（规范化后）输入
    is_partial: bool = False  # 末尾未输完的音节

    @property
    def syllable(self) -> str:
        return self.initial + self.final

    @property
    def canonical(self) -> str:
        """词典键使用的规范写法：声母 + 韵母 + 声调数字"""
        return f"{self.initial}{self.final}{self.tone}"

    def __str__(self):
        return self.canonical


@dataclass
class SegmentResult:
    """切分结果"""
    tokens: List[SyllableToken] = field(default_factory=list)
    remainder: str = ""      # 无法识别而未消耗的输入

    @property
    def complete(self) -> bool:
        return not self.remainder

    @property
    def canonical(self) -> str:
        return ''.join(t.canonical for t in self.tokens)

    @property
    def consumed(self) -> str:
        return ''.join(t.raw for t in self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __len__(self):
        return len(self.tokens)

    def __str__(self):
        return " ".join(t.canonical for t in self.tokens)


class PinyinTokenizer:
    """拼音切分器（最长匹配优先的动态规划切分）"""

    def __init__(self, default_tone: int = 5):
        """
        Args:
            default_tone: 没有声调数字或声调符号时使用的声调，默认 5（轻声）
        """
        if not 1 <= default_tone <= 5:
            raise ValueError(f"default_tone 必须在 1-5 之间: {default_tone}")
        self.default_tone = default_tone

    @staticmethod
    def normalize(raw: str) -> Tuple[str, List[Optional[int]], Set[int]]:
        """
        规范化输入

        Returns:
            (规范化文本, 每个位置的符号声调, 分隔符所在位置)
        """
        text = raw.lower().strip().replace('u:', 'v')
        chars: List[str] = []
        marks: List[Optional[int]] = []
        boundaries: Set[int] = set()

        for char in text:
            if char in SEPARATORS:
                boundaries.add(len(chars))
                continue
            if char in TONE_MARKS:
                letter, tone = TONE_MARKS[char]
                chars.append(letter)
                marks.append(tone)
            else:
                chars.append(char)
                marks.append(None)

        return ''.join(chars), marks, boundaries

    def segment(self, raw: str) -> SegmentResult:
        """
        切分拼音字符串

        Args:
            raw: 连续拼音（如 "nihao"、"ni3hao3"、"nǐhǎo"、"xi'an"）

        Returns:
            SegmentResult，遇到无法识别的输入时其余部分放在 remainder 中
        """
        text, marks, boundaries = self.normalize(raw)
        result = SegmentResult()
        n = len(text)
        pos = 0

        while pos < n:
            limit = min((b for b in boundaries if b > pos), default=n)
            plan = self._plan(text, pos, limit)

            while pos < limit and pos in plan:
                end, nxt, partial = plan[pos]
                tone_digit = int(text[end]) if nxt > end else None
                result.tokens.append(self._make_token(
                    text[pos:end], text[pos:nxt], marks[pos:nxt],
                    tone=tone_digit, partial=partial,
                ))
                pos = nxt

            if pos < limit:
                result.remainder = text[pos:]
                logger.debug(f"无法识别的拼音输入: {raw!r} @ {pos} -> {result.remainder!r}")
                break

        return result

    def _plan(self, text: str, start: int, limit: int) -> Dict[int, Tuple[int, int, bool]]:
        """
        规划 text[start:limit] 的切分

        从右向左动态规划，每个位置取最长的、其后仍能切分完的音节
        （如 "fangui" 取 fan + gui 而不是 fang + ui）。末尾未输完的音节
        只在没有完整音节可用时采用。整段无法切分时取能切得最远的音节，
        调用方在走不通的位置停止。

        Returns:
            位置 → (音节终点, 下一位置, 是否未输完)，下一位置跳过音节后的声调数字
        """
        plan: Dict[int, Tuple[int, int, bool]] = {}
        reach = {limit: limit}  # 从该位置出发最远能切到哪里

        for pos in range(limit - 1, start - 1, -1):
            best = None
            for length in range(min(MAX_SYLLABLE_LEN, limit - pos), 0, -1):
                end = pos + length
                if text[pos:end] not in VALID_PINYINS:
                    continue
                nxt = end + 1 if end < limit and text[end] in TONE_DIGITS else end
                if best is None or reach[nxt] > reach[best[1]]:
                    best = (end, nxt, False)
                if reach[nxt] == limit:
                    break

            if best is not None and reach[best[1]] == limit:
                plan[pos] = best
                reach[pos] = limit
            elif text[pos:limit] in SYLLABLE_PREFIXES:
                # 末尾正在输入的音节（如 "nih" 中的 "h"）
                plan[pos] = (limit, limit, True)
                reach[pos] = limit
            elif best is not None:
                plan[pos] = best
                reach[pos] = reach[best[1]]
            else:
                reach[pos] = pos

        return plan

    def _make_token(
        self,
        syllable: str,
        raw: str,
        marks: List[Optional[int]],
        tone: Optional[int] = None,
        partial: bool = False,
    ) -> SyllableToken:
        if tone is None:
            tone = next((m for m in marks if m is not None), self.default_tone)
        initial, final = split_initial(SPELLING_ALIASES.get(syllable, syllable))
        return SyllableToken(initial=initial, final=final, tone=tone, raw=raw, is_partial=partial)


_default_tokenizer: Optional[PinyinTokenizer] = None


def get_tokenizer() -> PinyinTokenizer:
    """获取默认切分器单例"""
    global _default_tokenizer
    if _default_tokenizer is None:
        _default_tokenizer = PinyinTokenizer()
    return _default_tokenizer


def segment(raw: str) -> SegmentResult:
    """使用默认切分器切分"""
    return get_tokenizer().segment(raw)
