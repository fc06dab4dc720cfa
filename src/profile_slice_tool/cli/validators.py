# -*- coding: utf-8 -*-
"""
CLI验证器模块
"""

from typing import List, Optional, Sequence

from ..interval_filter import TieBreak
from ..models import Profile
from ..pipeline import percent_to_value


def parse_window_bound(bound_spec: Optional[str], profile: Profile) -> Optional[float]:
    """
    解析区间边界

    支持两种写法:
      - 权重坐标: "200" 或 "1.5e3"
      - 总权重百分比: "25%"，相对于 profile 的起点换算

    Args:
        bound_spec: 边界字符串，None 或空字符串表示未指定
        profile: 区间所属的 profile

    Returns:
        Optional[float]: 权重坐标，未指定时返回 None

    Raises:
        ValueError: 格式不合法
    """
    if bound_spec is None or not bound_spec.strip():
        return None

    text = bound_spec.strip()
    if text.endswith('%'):
        try:
            percent = float(text[:-1])
        except ValueError:
            raise ValueError(f"非法的百分比边界: {bound_spec}") from None
        if not 0 <= percent <= 100:
            raise ValueError(f"百分比边界必须在 0% 到 100% 之间: {bound_spec}")
        return percent_to_value(profile, percent)

    try:
        return float(text)
    except ValueError:
        raise ValueError(f"非法的区间边界: {bound_spec}") from None


def parse_output_formats(format_spec: str, valid_formats: Sequence[str]) -> List[str]:
    """
    解析逗号分隔的输出格式

    Args:
        format_spec: 输出格式字符串，如 "json,txt"
        valid_formats: 支持的格式

    Returns:
        List[str]: 去重后的格式列表

    Raises:
        ValueError: 包含不支持的格式或为空
    """
    if not format_spec or not format_spec.strip():
        raise ValueError("输出格式不能为空")

    formats = []
    for item in format_spec.split(','):
        item = item.strip()
        if not item:
            continue
        if item not in valid_formats:
            raise ValueError(f"不支持的输出格式: {item}。支持的格式: {', '.join(valid_formats)}")
        if item not in formats:
            formats.append(item)

    if not formats:
        raise ValueError("输出格式不能为空")
    return formats


def parse_tie_break(tie_break_spec: str) -> TieBreak:
    """解析同一时刻事件的排序规则"""
    try:
        return TieBreak(tie_break_spec)
    except ValueError:
        valid = ', '.join(item.value for item in TieBreak)
        raise ValueError(f"不支持的排序规则: {tie_break_spec}。支持的规则: {valid}") from None


def validate_profile_index(profile_index: Optional[int], profile_count: int) -> None:
    """
    验证 profile 索引

    Raises:
        ValueError: 索引超出范围
    """
    if profile_count == 0:
        raise ValueError("文档中没有任何 profile")
    if profile_index is not None and not 0 <= profile_index < profile_count:
        raise ValueError(f"profile 索引 {profile_index} 超出范围 (共 {profile_count} 个 profile)")
