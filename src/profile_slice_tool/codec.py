# -*- coding: utf-8 -*-
"""
调用树与 Open/Close 事件流之间的双向转换
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .errors import InvalidDocumentError, UnknownFrameReferenceError
from .models import CallTreeNode, Event, EventType, Frame, Profile, ROOT_FRAME
from .reconstruction import ReconstructionStack

logger = logging.getLogger(__name__)

FrameRecord = Dict[str, Any]


class FrameInterner:
    """
    帧索引分配器

    只在一次编码/压缩调用内有效，不跨调用共享，
    所以同一进程内多次调用之间不会互相影响帧身份。
    """

    def __init__(self):
        self.frames: List[FrameRecord] = []
        self._index_for_frame: Dict[Frame, int] = {}

    def __len__(self) -> int:
        return len(self.frames)

    def index_of(self, frame: Frame) -> int:
        index = self._index_for_frame.get(frame)
        if index is None:
            index = len(self.frames)
            self._index_for_frame[frame] = index
            self.frames.append(frame.to_record())
        return index


def to_coordinate(value: Union[int, float]) -> int:
    """权重坐标向零截断为整数"""
    return int(value)


def _encode_into(profile: Profile, interner: FrameInterner) -> List[Event]:
    events: List[Event] = []

    def open_frame(node: CallTreeNode, value: float):
        events.append(Event(EventType.OPEN, interner.index_of(node.frame), to_coordinate(value)))

    def close_frame(node: CallTreeNode, value: float):
        events.append(Event(EventType.CLOSE, interner.index_of(node.frame), to_coordinate(value)))

    profile.for_each_call(open_frame, close_frame)
    return events


def encode(profile: Profile) -> Tuple[List[FrameRecord], List[Event]]:
    """
    把 Profile 编码为 (帧表, 事件流)

    深度优先遍历：进入节点时输出 Open，子节点全部访问后输出 Close。
    这里不做重新排序，只有结构合法的调用树才能保证事件按 at 有序。

    Args:
        profile: 调用树 Profile

    Returns:
        Tuple[List[FrameRecord], List[Event]]: 帧表和事件流
    """
    interner = FrameInterner()
    events = _encode_into(profile, interner)
    logger.debug(f"编码 Profile {profile.name!r}: {len(interner)} 个帧, {len(events)} 个事件")
    return interner.frames, events


def encode_group(profiles: Iterable[Profile]) -> Tuple[List[FrameRecord], List[List[Event]]]:
    """
    使用同一个帧索引分配器编码多个 Profile

    Returns:
        Tuple[List[FrameRecord], List[List[Event]]]: 共享帧表和每个 profile 的事件流
    """
    interner = FrameInterner()
    streams = [_encode_into(profile, interner) for profile in profiles]
    return interner.frames, streams


def frame_from_record(record: Any) -> Frame:
    """把稀疏帧记录还原为 Frame 对象"""
    if not isinstance(record, dict) or not isinstance(record.get('name'), str):
        raise InvalidDocumentError(f"帧记录缺少 name 字段: {record!r}")
    return Frame(
        name=record['name'],
        file=record.get('file'),
        line=record.get('line'),
        col=record.get('col'),
    )


def _check_frame_reference(event: Event, frame_count: int, position: int):
    index = event.frame
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < frame_count:
        raise UnknownFrameReferenceError(index, frame_count, position)


def decode(frame_table: Sequence[Union[Frame, FrameRecord]], events: Sequence[Event],
           start_value: float = 0, end_value: Optional[float] = None) -> CallTreeNode:
    """
    根据事件流重建调用树

    Open 事件在当前栈顶下创建子节点并入栈；Close 事件移除栈中最近入栈的同帧节点，
    不要求该节点位于栈顶。找不到匹配的 Close 事件被丢弃。

    Args:
        frame_table: 帧表，元素为 Frame 或稀疏帧记录
        events: 事件流
        start_value: 根区间起点
        end_value: 根区间终点，为 None 时取最后一个事件的坐标

    Returns:
        CallTreeNode: 虚拟根节点

    Raises:
        UnknownFrameReferenceError: 事件引用了帧表之外的索引
    """
    frames = [entry if isinstance(entry, Frame) else frame_from_record(entry) for entry in frame_table]
    if end_value is None:
        end_value = max((event.at for event in events), default=start_value)

    root = CallTreeNode(ROOT_FRAME, start_value, end_value)
    stack = ReconstructionStack(root)
    orphan_closes = 0

    for position, event in enumerate(events):
        _check_frame_reference(event, len(frames), position)
        if event.is_open:
            stack.push(event.frame, CallTreeNode(frames[event.frame], event.at, event.at))
        else:
            node = stack.remove(event.frame)
            if node is None:
                orphan_closes += 1
                logger.warning(
                    f"丢弃没有匹配 Open 的 Close 事件: 帧 {event.frame} ({frames[event.frame].name}) at {event.at}"
                )
                continue
            node.leave_weight = event.at

    unclosed = stack.drain()
    if unclosed:
        logger.warning(f"事件流结束时仍有 {len(unclosed)} 个帧未关闭，在 {end_value} 处强制关闭")
        for node in unclosed:
            node.leave_weight = end_value

    if orphan_closes:
        logger.info(f"重建调用树时共丢弃 {orphan_closes} 个孤立的 Close 事件")
    return root
