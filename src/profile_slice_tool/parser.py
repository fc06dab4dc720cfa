# -*- coding: utf-8 -*-
"""
规范文档解析器：文档 -> ProfileGroup
"""

import gzip
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Union

from .codec import decode, frame_from_record
from .errors import InvalidDocumentError
from .models import Event, EventType, Frame, Profile, ProfileGroup, WeightUnit
from .serializer import EVENTED_PROFILE_TYPE

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _parse_event(event_data: Any, position: int) -> Event:
    """
    解析单个事件

    Args:
        event_data: 事件字典 {"type", "frame", "at"}
        position: 事件在事件流中的位置，用于错误信息

    Returns:
        Event: 解析后的事件对象
    """
    if not isinstance(event_data, dict):
        raise InvalidDocumentError(f"第 {position} 个事件不是对象: {event_data!r}")
    try:
        event_type = EventType(event_data.get('type'))
    except ValueError:
        raise InvalidDocumentError(f"第 {position} 个事件类型非法: {event_data.get('type')!r}") from None
    at = event_data.get('at')
    if not _is_number(at):
        raise InvalidDocumentError(f"第 {position} 个事件的 at 不是数值: {at!r}")
    # 帧索引的范围检查留给 decode，这样越界索引会以 UnknownFrameReferenceError 报出
    return Event(event_type, event_data.get('frame'), int(at))


def import_profile(profile_data: Dict[str, Any], frames: List[Frame]) -> Profile:
    """
    把单个 evented profile 条目还原为调用树 Profile

    总权重为 endValue - startValue，与事件的实际范围无关。
    """
    if not isinstance(profile_data, dict):
        raise InvalidDocumentError(f"profile 条目不是对象: {profile_data!r}")
    profile_type = profile_data.get('type')
    if profile_type != EVENTED_PROFILE_TYPE:
        raise InvalidDocumentError(f"不支持的 profile 类型: {profile_type!r}，只支持 {EVENTED_PROFILE_TYPE}")

    name = profile_data.get('name', '')
    try:
        unit = WeightUnit(profile_data.get('unit', WeightUnit.NONE.value))
    except ValueError:
        raise InvalidDocumentError(f"不支持的权重单位: {profile_data.get('unit')!r}") from None

    start_value = profile_data.get('startValue')
    end_value = profile_data.get('endValue')
    if not _is_number(start_value) or not _is_number(end_value):
        raise InvalidDocumentError(f"profile {name!r} 的 startValue/endValue 必须是数值")

    raw_events = profile_data.get('events')
    if not isinstance(raw_events, list):
        raise InvalidDocumentError(f"profile {name!r} 缺少 events 列表")
    events = [_parse_event(event_data, position) for position, event_data in enumerate(raw_events)]

    root = decode(frames, events, start_value=start_value, end_value=end_value)
    logger.info(f"导入 profile {name!r}: {len(events)} 个事件, 单位 {unit.value}")
    return Profile(
        name=name,
        weight_unit=unit,
        total_weight=end_value - start_value,
        root=root,
        start_value=start_value,
    )


def import_profile_group(document: Dict[str, Any]) -> ProfileGroup:
    """
    解析规范文档

    Args:
        document: 已经 json 解析的文档

    Returns:
        ProfileGroup: 文档中的全部 profile，共享同一组 Frame 对象

    Raises:
        InvalidDocumentError: 文档结构不合法
        UnknownFrameReferenceError: 事件引用了帧表之外的索引
    """
    if not isinstance(document, dict):
        raise InvalidDocumentError("文档顶层必须是 JSON 对象")
    shared = document.get('shared')
    if not isinstance(shared, dict) or not isinstance(shared.get('frames'), list):
        raise InvalidDocumentError("文档缺少 shared.frames 帧表")
    profiles_data = document.get('profiles')
    if not isinstance(profiles_data, list):
        raise InvalidDocumentError("文档缺少 profiles 列表")

    # 每个帧表条目对应一个 Frame 对象，身份由索引决定
    frames = [frame_from_record(record) for record in shared['frames']]
    profiles = [import_profile(profile_data, frames) for profile_data in profiles_data]

    active_index = document.get('activeProfileIndex', 0)
    if not isinstance(active_index, int) or isinstance(active_index, bool):
        raise InvalidDocumentError(f"activeProfileIndex 必须是整数: {active_index!r}")
    if profiles and not 0 <= active_index < len(profiles):
        raise InvalidDocumentError(f"activeProfileIndex {active_index} 超出范围 (共 {len(profiles)} 个 profile)")

    return ProfileGroup(
        name=document.get('name', ''),
        profiles=profiles,
        index_to_view=active_index,
        exporter=document.get('exporter'),
    )


def load_document(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    读取文档文件，支持 .gz 压缩

    Raises:
        FileNotFoundError: 文件不存在
        InvalidDocumentError: 文件内容不是合法 JSON
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"文件不存在: {file_path}")

    logger.info(f"正在解析文件: {file_path}")
    open_func = gzip.open if file_path.suffix == '.gz' else open
    with open_func(file_path, 'rt', encoding='utf-8') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidDocumentError(f"文件 {file_path} 不是合法的 JSON: {e}") from e


def parse_profile_document(text: str) -> ProfileGroup:
    """从文本解析文档"""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidDocumentError(f"文档不是合法的 JSON: {e}") from e
    return import_profile_group(document)


def load_profile_group(file_path: Union[str, Path]) -> ProfileGroup:
    """读取并解析文档文件"""
    return import_profile_group(load_document(file_path))
