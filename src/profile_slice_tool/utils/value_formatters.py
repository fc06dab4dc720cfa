# -*- coding: utf-8 -*-
"""
按单位格式化权重值的工具

导出文档名称和默认文件名都依赖这里的格式，
因此舍入规则固定为十进制 half-up，保证同一个值每次格式化结果一致。
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float]

TIME_UNIT_MULTIPLIERS = {
    'nanoseconds': 1e-9,
    'microseconds': 1e-6,
    'milliseconds': 1e-3,
    'seconds': 1,
}


def to_fixed(value: Number, digits: int) -> str:
    """
    定点格式化，等距的情况向远离零的方向舍入

    Args:
        value: 要格式化的数值
        digits: 小数位数

    Returns:
        str: 格式化后的字符串
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return format(rounded, 'f')


class ValueFormatter:
    """格式化器基类"""
    unit = 'none'

    def format(self, value: Number) -> str:
        raise NotImplementedError


class RawValueFormatter(ValueFormatter):
    """无单位数值，使用千分位分隔符，最多保留三位小数"""
    unit = 'none'

    def format(self, value: Number) -> str:
        if float(value).is_integer():
            return f"{int(value):,}"
        text = to_fixed(abs(value), 3).rstrip('0').rstrip('.')
        integer_part, _, fraction = text.partition('.')
        grouped = f"{int(integer_part):,}"
        sign = '-' if value < 0 else ''
        return f"{sign}{grouped}.{fraction}" if fraction else f"{sign}{grouped}"


class TimeFormatter(ValueFormatter):
    """时间单位格式化器，自动选择 ns/µs/ms/s，超过一分钟时输出 m:ss"""

    def __init__(self, unit: str):
        if unit not in TIME_UNIT_MULTIPLIERS:
            raise ValueError(f"不支持的时间单位: {unit}")
        self.unit = unit
        self.multiplier = TIME_UNIT_MULTIPLIERS[unit]

    def format_unsigned(self, value: Number) -> str:
        s = value * self.multiplier
        if s / 60 >= 1:
            minutes = math.floor(s / 60)
            seconds = math.floor(s - minutes * 60)
            return f"{minutes}:{seconds:02d}"
        if s / 1 >= 1:
            return f"{to_fixed(s, 2)}s"
        if s / 1e-3 >= 1:
            return f"{to_fixed(s / 1e-3, 2)}ms"
        if s / 1e-6 >= 1:
            return f"{to_fixed(s / 1e-6, 2)}µs"
        return f"{to_fixed(s / 1e-9, 2)}ns"

    def format(self, value: Number) -> str:
        sign = '-' if value < 0 else ''
        return f"{sign}{self.format_unsigned(abs(value))}"


class ByteFormatter(ValueFormatter):
    """字节数格式化器 (B/KB/MB/GB)"""
    unit = 'bytes'

    def format(self, value: Number) -> str:
        if value < 1024:
            return f"{to_fixed(value, 0)} B"
        value /= 1024
        if value < 1024:
            return f"{to_fixed(value, 2)} KB"
        value /= 1024
        if value < 1024:
            return f"{to_fixed(value, 2)} MB"
        value /= 1024
        return f"{to_fixed(value, 2)} GB"


def formatter_for_unit(unit: str) -> ValueFormatter:
    """根据权重单位选择格式化器"""
    if unit in TIME_UNIT_MULTIPLIERS:
        return TimeFormatter(unit)
    if unit == 'bytes':
        return ByteFormatter()
    return RawValueFormatter()
