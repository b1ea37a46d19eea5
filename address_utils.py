"""住所文字列の正規化と切り詰め"""

import re

_FULLWIDTH_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")

# ハイフン類（長音記号は数字の直後のみ）
_DASH_RE = re.compile(r"[－―‐‑‒–—−﹣]")
_CHOON_AFTER_DIGIT_RE = re.compile(r"(?<=\d)[ーｰ](?=\d)")
_WHITESPACE_RE = re.compile(r"\s+")

# 「歌舞伎町1-1-5」の末尾 → 「歌舞伎町1丁目1-5」
_CHOME_TAIL_RE = re.compile(r"([^\d\s\-])(\d+)((?:-\d+){1,3})$")

_TRAILING_DASH_NUMBER_RE = re.compile(r"-\d+$")
_TRAILING_NUMBER_RE = re.compile(r"\d+$")
_TRAILING_CHOME_RE = re.compile(r"[\d一二三四五六七八九十]+丁目$")
_TRAILING_LOT_RE = re.compile(r"[\d一二三四五六七八九十]*(?:番地|番|号)$")

_PREFECTURE_TERM_RE = re.compile(r"[都道府県]")
_CITY_TERM_RE = re.compile(r"[市区町村郡]")

_TRUNCATION_RULES = (
    _TRAILING_DASH_NUMBER_RE,
    _TRAILING_NUMBER_RE,
    _TRAILING_CHOME_RE,
    _TRAILING_LOT_RE,
)


def clean_address(address: str) -> str:
    """前後の空白を除き、連続する空白を1つにまとめる。"""
    return _WHITESPACE_RE.sub(" ", address).strip()


def normalize_address(address: str) -> str:
    """全角数字・ハイフン類を半角に揃え、丁目が省略された末尾に丁目を補う。"""
    s = address.translate(_FULLWIDTH_DIGITS)
    s = _DASH_RE.sub("-", s)
    s = _CHOON_AFTER_DIGIT_RE.sub("-", s)
    if "丁目" not in s:
        s = _CHOME_TAIL_RE.sub(
            lambda m: f"{m.group(1)}{m.group(2)}丁目{m.group(3)[1:]}", s
        )
    return s


def truncate_address(address: str) -> str:
    """住所末尾の番地・号などを1段階だけ削る。削れなければそのまま返す。

    優先順: 「-数字」→ 末尾の数字 → 「N丁目」→「N番地 / N番 / N号」
    """
    for rule in _TRUNCATION_RULES:
        shorter = rule.sub("", address).rstrip(" -")
        if shorter != address:
            return shorter
    return address


def is_addressable(address: str) -> bool:
    """都道府県相当と市区町村相当の語をどちらも含むか。"""
    return bool(_PREFECTURE_TERM_RE.search(address) and _CITY_TERM_RE.search(address))
