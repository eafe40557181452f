"""반올림 유틸리티."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """float의 정확한 이진 값을 기준으로 사사오입한다.

    내장 round()는 은행가 반올림이므로 0.125 → 0.12 가 되지만,
    로봇 펌웨어와 주고받는 값은 0.125 → 0.13 규칙을 따른다.

    Args:
        value: 반올림할 값.
        digits: 소수점 이하 자릿수.

    Returns:
        반올림된 값.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_tenths(value: float) -> float:
    """거리 값을 소수점 한 자리로 사사오입한다.

    10배한 float를 정수로 사사오입한 뒤 다시 10으로 나눈다.
    4.85처럼 이진 값이 4.8499…로 저장된 수도 10배하면 48.5가 되어
    4.9로 올라간다. 로봇 펌웨어가 받는 거리 값과 같은 규칙이다.
    """
    return round_half_up(value * 10) / 10
