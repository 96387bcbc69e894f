"""한글 초성 변환 유틸리티 — 순수 유니코드 연산.

입력 문자열의 각 문자를 독립적으로 분류하여 초성 투영(projection)을 만든다.
변환은 실패하지 않으며, 처리할 수 없는 문자는 조용히 제거된다.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# 한글 완성형 범위
_HANGUL_BASE = 0xAC00  # '가'
_HANGUL_END = 0xD7A3  # '힣'

# 호환용 자모 범위 (ㄱ ~ ㆎ)
_COMPAT_JAMO_START = 0x3131
_COMPAT_JAMO_END = 0x318E

# 조합형 종성 범위 (ᆨ ~ ퟻ 이전 구간)
_JONGSUNG_START = 0x11A8
_JONGSUNG_END = 0x11FF

# 중성 개수 = 21, 종성 개수 = 28 → 초성 하나당 588 글자
_JUNGSUNG_COUNT = 21
_JONGSUNG_COUNT = 28
_SYLLABLES_PER_CHOSUNG = _JUNGSUNG_COUNT * _JONGSUNG_COUNT

# 초성 19자 (유니코드 순서)
CHOSUNG_LIST = (
    "ㄱ", "ㄲ", "ㄴ", "ㄷ", "ㄸ", "ㄹ", "ㅁ", "ㅂ", "ㅃ",
    "ㅅ", "ㅆ", "ㅇ", "ㅈ", "ㅉ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)

_CHOSUNG_SET = frozenset(CHOSUNG_LIST)

# 겹자음(호환용 자모) → 구성 자음 (왼쪽부터)
COMPLEX_CONSONANT_SPLIT = {
    "ㄳ": "ㄱㅅ",
    "ㄵ": "ㄴㅈ",
    "ㄶ": "ㄴㅎ",
    "ㄺ": "ㄹㄱ",
    "ㄻ": "ㄹㅁ",
    "ㄼ": "ㄹㅂ",
    "ㄽ": "ㄹㅅ",
    "ㄾ": "ㄹㅌ",
    "ㄿ": "ㄹㅍ",
    "ㅀ": "ㄹㅎ",
    "ㅄ": "ㅂㅅ",
}

# 조합형 종성(U+11A8부터 27자) → 대응 초성.
# 겹받침은 하나의 자음으로 축약하며, 어느 자음을 남길지는 고정 표를 따른다.
JONGSUNG_TO_CHOSUNG = (
    "ㄱ",  # ᆨ
    "ㄲ",  # ᆩ
    "ㄱ",  # ᆪ ㄳ
    "ㄴ",  # ᆫ
    "ㄴ",  # ᆬ ㄵ
    "ㄴ",  # ᆭ ㄶ
    "ㄷ",  # ᆮ
    "ㄹ",  # ᆯ
    "ㄹ",  # ᆰ ㄺ
    "ㄹ",  # ᆱ ㄻ
    "ㄹ",  # ᆲ ㄼ
    "ㄹ",  # ᆳ ㄽ
    "ㄹ",  # ᆴ ㄾ
    "ㄹ",  # ᆵ ㄿ
    "ㄹ",  # ᆶ ㅀ
    "ㅁ",  # ᆷ
    "ㅂ",  # ᆸ
    "ㅂ",  # ᆹ ㅄ
    "ㅅ",  # ᆺ
    "ㅆ",  # ᆻ
    "ㅇ",  # ᆼ
    "ㅈ",  # ᆽ
    "ㅊ",  # ᆾ
    "ㅋ",  # ᆿ
    "ㅌ",  # ᇀ
    "ㅍ",  # ᇁ
    "ㅎ",  # ᇂ
)


def _convert_char(ch: str) -> str:
    code = ord(ch)

    if _HANGUL_BASE <= code <= _HANGUL_END:
        return CHOSUNG_LIST[(code - _HANGUL_BASE) // _SYLLABLES_PER_CHOSUNG]

    if ch in _CHOSUNG_SET or ch.isspace():
        return ch

    if _COMPAT_JAMO_START <= code <= _COMPAT_JAMO_END:
        # 겹자음이면 분리, 그 외 자모는 그대로
        return COMPLEX_CONSONANT_SPLIT.get(ch, ch)

    if _JONGSUNG_START <= code <= _JONGSUNG_END:
        idx = code - _JONGSUNG_START
        if idx < len(JONGSUNG_TO_CHOSUNG):
            return JONGSUNG_TO_CHOSUNG[idx]

    return ""


def transcode(text: str) -> str:
    """문자열을 초성 문자열로 변환한다.

    완성형 글자는 초성으로, 겹자음은 두 자음으로 분리하고,
    조합형 종성은 대응 초성 하나로 바꾼다. 공백은 유지하고
    그 밖의 문자(영문, 숫자, 기호)는 제거한다.

    >>> transcode("돼지")
    'ㄷㅈ'
    >>> transcode("LG화학")
    'ㅎㅎ'
    >>> transcode("ㄼ")
    'ㄹㅂ'
    """
    if not text:
        return ""
    result = "".join(_convert_char(ch) for ch in text)
    logger.debug("초성 변환: %r -> %r", text, result)
    return result
