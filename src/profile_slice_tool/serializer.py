# -*- coding: utf-8 -*-
"""
规范文档序列化

文档结构:
{
  "exporter", "name", "activeProfileIndex", "$schema",
  "shared": {"frames": [...]},
  "profiles": [{"type": "evented", "name", "unit", "startValue", "endValue", "events": [...]}]
}
字段顺序由构造顺序固定，dumps_document 的输出可以逐字节比较。
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .codec import encode_group, to_coordinate
from .models import Event, Frame, ProfileGroup, WeightUnit
from .utils.value_formatters import ValueFormatter, formatter_for_unit
from .version import __version__

logger = logging.getLogger(__name__)

SCHEMA_URL = 'https://www.speedscope.app/file-format-schema.json'
EXPORTER = f"profile-slice-tool@{__version__}"
EVENTED_PROFILE_TYPE = 'evented'

Document = Dict[str, Any]


def _frame_record(entry: Union[Frame, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(entry, Frame):
        return entry.to_record()
    return dict(entry)


def build_profile_entry(name: str, unit: Union[WeightUnit, str], start_value: float, end_value: float,
                        events: Sequence[Event]) -> Dict[str, Any]:
    """构建单个 evented profile 条目"""
    return {
        'type': EVENTED_PROFILE_TYPE,
        'name': name,
        'unit': WeightUnit(unit).value,
        'startValue': to_coordinate(start_value),
        'endValue': to_coordinate(end_value),
        'events': [event.to_dict() for event in events],
    }


def build_document(name: str, frame_table: Sequence[Union[Frame, Dict[str, Any]]],
                   profile_entries: List[Dict[str, Any]], active_profile_index: int = 0,
                   exporter: Optional[str] = None) -> Document:
    """组装完整文档"""
    return {
        'exporter': exporter or EXPORTER,
        'name': name,
        'activeProfileIndex': active_profile_index,
        '$schema': SCHEMA_URL,
        'shared': {'frames': [_frame_record(entry) for entry in frame_table]},
        'profiles': profile_entries,
    }


def event_bounds(events: Sequence[Event]):
    """事件流的最小/最大 at，空事件流返回 (0, 0)"""
    if not events:
        return 0, 0
    return min(event.at for event in events), max(event.at for event in events)


def format_window_name(profile_name: str, requested_start: float, requested_end: float,
                       formatter: ValueFormatter) -> str:
    """区间导出文档的名称: "<profile名称> (<起点> - <终点>)" """
    return f"{profile_name} ({formatter.format(requested_start)} - {formatter.format(requested_end)})"


def build_interval_document(frame_table: Sequence[Union[Frame, Dict[str, Any]]], events: Sequence[Event],
                            profile_name: str, weight_unit: Union[WeightUnit, str],
                            requested_start: float, requested_end: float,
                            value_formatter: Optional[ValueFormatter] = None,
                            exporter: Optional[str] = None) -> Document:
    """
    把 (帧表, 事件流, 元数据) 序列化为区间导出文档

    startValue/endValue 取事件流实际的最小/最大 at；文档名称中的区间
    使用调用方请求的边界，两者可以不同。

    Args:
        frame_table: 已压缩的帧表
        events: 过滤并重写后的事件流
        profile_name: profile 名称
        weight_unit: 权重单位
        requested_start: 请求的区间起点
        requested_end: 请求的区间终点
        value_formatter: 格式化器，默认按单位选择
        exporter: 导出者标识

    Returns:
        Document: 规范文档
    """
    unit = WeightUnit(weight_unit)
    formatter = value_formatter or formatter_for_unit(unit.value)
    start_value, end_value = event_bounds(events)
    if not events:
        logger.warning(f"区间 [{requested_start}, {requested_end}] 内没有任何事件，导出空 profile")
    entry = build_profile_entry(profile_name, unit, start_value, end_value, events)
    name = format_window_name(profile_name, requested_start, requested_end, formatter)
    return build_document(name, frame_table, [entry], exporter=exporter)


def export_profile_group(group: ProfileGroup) -> Document:
    """
    完整导出一个 ProfileGroup（不做区间过滤）

    所有 profile 共享一个帧表；每个 profile 的 startValue/endValue 为其根区间。
    """
    frame_table, streams = encode_group(group.profiles)
    entries = [
        build_profile_entry(profile.name, profile.weight_unit, profile.start_value, profile.end_value, events)
        for profile, events in zip(group.profiles, streams)
    ]
    return build_document(group.name, frame_table, entries,
                          active_profile_index=group.index_to_view, exporter=group.exporter)


def dumps_document(document: Document) -> str:
    """规范文本格式: 两空格缩进，保留非 ASCII 字符"""
    return json.dumps(document, indent=2, ensure_ascii=False)


def save_document(document: Document, file_path: Union[str, Path]) -> Path:
    """把文档写入文件"""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(dumps_document(document))
    logger.info(f"文档已写入: {file_path}")
    return file_path
