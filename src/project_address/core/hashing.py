from __future__ import annotations

import json
import math
from typing import Any

BUILDING_MODULUS = 1000

_MASK32 = 0xFFFFFFFF


def _format_number(value: float) -> str:
    """
    브라우저 JSON.stringify와 같은 숫자 표기.

    - 정수값 float는 소수부 없이 (2.0 -> "2")
    - 지수 표기는 10^21 이상, 10^-7 미만에서만 ("1e+21", "1e-7")
    - NaN/Infinity는 null
    """
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    mantissa, _, exp = repr(abs(value)).partition("e")
    int_part, _, frac_part = mantissa.partition(".")

    digits = int_part + frac_part
    point = len(int_part) + (int(exp) if exp else 0)

    stripped = digits.lstrip("0")
    point -= len(digits) - len(stripped)
    digits = stripped.rstrip("0")
    k = len(digits)

    if k <= point <= 21:
        body = digits + "0" * (point - k)
    elif 0 < point <= 21:
        body = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        body = "0." + "0" * (-point) + digits
    else:
        e = point - 1
        e_str = f"e+{e}" if e >= 0 else f"e-{-e}"
        body = (digits if k == 1 else f"{digits[0]}.{digits[1:]}") + e_str

    return sign + body


def canonical_json(value: Any) -> str:
    """
    geometry를 JSON.stringify와 동일한 텍스트로 직렬화합니다.
    키 순서는 입력 순서를 그대로 따릅니다(정렬하지 않음).
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if abs(value) < 2 ** 53:
            return str(value)
        try:
            return _format_number(float(value))
        except OverflowError:
            return "null"
    if isinstance(value, float):
        return _format_number(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, dict):
        items = (f"{json.dumps(str(k), ensure_ascii=False)}:{canonical_json(v)}" for k, v in value.items())
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(canonical_json(v) for v in value) + "]"
    raise TypeError(f"Unsupported JSON value: {type(value).__name__}")


def _utf16_units(text: str):
    for ch in text:
        cp = ord(ch)
        if cp > 0xFFFF:
            cp -= 0x10000
            yield 0xD800 | (cp >> 10)
            yield 0xDC00 | (cp & 0x3FF)
        else:
            yield cp


def djb2(text: str) -> int:
    """DJB2, UTF-16 code unit 기준, 매 단계 32비트 unsigned."""
    h = 5381
    for c in _utf16_units(text):
        h = ((h << 5) + h + c) & _MASK32
    return h


def building_number(geometry: Any) -> int:
    return (djb2(canonical_json(geometry)) % BUILDING_MODULUS) + 1
