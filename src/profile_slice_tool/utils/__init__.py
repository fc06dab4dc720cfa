"""
工具模块
"""

from .value_formatters import (
    ValueFormatter,
    RawValueFormatter,
    TimeFormatter,
    ByteFormatter,
    formatter_for_unit,
    to_fixed,
)

__all__ = [
    'ValueFormatter',
    'RawValueFormatter',
    'TimeFormatter',
    'ByteFormatter',
    'formatter_for_unit',
    'to_fixed',
]
