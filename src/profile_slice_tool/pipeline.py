# -*- coding: utf-8 -*-
"""
区间导出流程: 编码 -> 区间过滤 -> 帧表压缩 -> 序列化

每个阶段都是独立的纯函数调用，调用方可以在阶段之间让出控制权；
阶段内部不支持中途取消。
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .codec import encode
from .compactor import compact_frames
from .interval_filter import FilterResult, TieBreak, filter_events_with_context
from .models import Profile
from .serializer import build_interval_document

logger = logging.getLogger(__name__)

# 未指定区间时默认选择总权重的前 80%
DEFAULT_WINDOW_FRACTION = 0.8


@dataclass
class IntervalExport:
    """区间导出结果"""
    document: Dict[str, Any]
    requested_start: float
    requested_end: float
    filter_result: FilterResult

    @property
    def requested_weight(self) -> float:
        """请求区间的长度"""
        return self.requested_end - self.requested_start

    @property
    def profile_entry(self) -> Dict[str, Any]:
        return self.document['profiles'][0]

    @property
    def start_value(self) -> int:
        return self.profile_entry['startValue']

    @property
    def end_value(self) -> int:
        return self.profile_entry['endValue']

    @property
    def frame_count(self) -> int:
        return len(self.document['shared']['frames'])

    @property
    def event_count(self) -> int:
        return len(self.profile_entry['events'])


def default_window(profile: Profile) -> Tuple[float, float]:
    """默认区间: [起点, 起点 + min(0.8 * 总权重, 总权重 - 1)]"""
    total = profile.total_weight
    span = max(min(total * DEFAULT_WINDOW_FRACTION, total - 1), 0)
    return profile.start_value, profile.start_value + span


def percent_to_value(profile: Profile, percent: float) -> float:
    """把总权重的百分比换算为权重坐标"""
    return profile.start_value + profile.total_weight * percent / 100


def export_file_name(profile: Profile, start: float, end: float, suffix: str = 'json') -> str:
    """默认导出文件名，JSON 与文本导出使用不同前缀"""
    prefix = 'speedscope-filtered' if suffix == 'json' else 'speedscope-interval'
    return f"{prefix}-{profile.format_value(start)}-to-{profile.format_value(end)}.{suffix}"


def export_interval(profile: Profile, start: float, end: float,
                    tie_break: TieBreak = TieBreak.NESTED,
                    exporter: Optional[str] = None) -> IntervalExport:
    """
    把 profile 的 [start, end] 区间导出为独立的规范文档

    Args:
        profile: 源 profile，不会被修改
        start: 区间起点
        end: 区间终点
        tie_break: 相同时刻事件的排序规则
        exporter: 导出者标识

    Returns:
        IntervalExport: 导出的文档和过滤统计

    Raises:
        InvalidWindowError: start > end
    """
    logger.info(f"=== 导出区间 [{start}, {end}] (profile: {profile.name!r}) ===")

    frame_table, events = encode(profile)
    logger.info(f"阶段 1 编码完成: {len(frame_table)} 个帧, {len(events)} 个事件")

    filter_result = filter_events_with_context(events, frame_table, start, end, tie_break=tie_break)
    logger.info(
        f"阶段 2 区间过滤完成: 选中 {filter_result.selected_count} 个事件, "
        f"合成 {filter_result.synthetic_count} 个边界事件"
    )

    compact_table, compact_events = compact_frames(frame_table, filter_result.events)
    logger.info(f"阶段 3 帧表压缩完成: {len(frame_table)} -> {len(compact_table)} 个帧")

    document = build_interval_document(
        compact_table, compact_events,
        profile_name=profile.name,
        weight_unit=profile.weight_unit,
        requested_start=start,
        requested_end=end,
        value_formatter=profile.value_formatter,
        exporter=exporter,
    )
    logger.info("阶段 4 序列化完成")

    return IntervalExport(
        document=document,
        requested_start=start,
        requested_end=end,
        filter_result=filter_result,
    )
