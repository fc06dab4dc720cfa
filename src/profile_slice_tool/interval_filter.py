# -*- coding: utf-8 -*-
"""
区间过滤：把事件流截断到 [start, end]，并在边界补充合成事件

算法分三步:
1. 选择：复制所有 start <= at <= end 的事件，同时记录每个帧索引在区间内
   是否出现过 Open / Close
2. 合成：只有 Open 的帧在 end 处补 Close，只有 Close 的帧在 start 处补 Open
3. 合并排序：按 at 升序排序，同一时刻的顺序由 TieBreak 决定

已知限制：状态是按帧索引记录的，不区分同一帧的多个递归实例，
区间内同一帧多次进出时只保留“是否出现过 Open/Close”的汇总信息。
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .errors import InvalidWindowError, UnknownFrameReferenceError
from .models import Event, EventType

logger = logging.getLogger(__name__)


class FrameState(Enum):
    """单个帧索引在选择阶段的状态"""
    UNSEEN = 'unseen'
    OPEN_ONLY = 'open_only'
    CLOSE_ONLY = 'close_only'
    BALANCED = 'balanced'

    def advance(self, event_type: EventType) -> 'FrameState':
        """根据区间内看到的事件类型迁移状态"""
        if self is FrameState.BALANCED:
            return self
        if event_type is EventType.OPEN:
            if self is FrameState.CLOSE_ONLY:
                return FrameState.BALANCED
            return FrameState.OPEN_ONLY
        if self is FrameState.OPEN_ONLY:
            return FrameState.BALANCED
        return FrameState.CLOSE_ONLY


class TieBreak(str, Enum):
    """
    相同 at 的事件排序规则

    STABLE: 稳定排序，选中事件在前，合成事件按帧发现顺序在后
    NESTED: 合成 Open（由外到内）在前，选中事件居中，合成 Close（由内到外）在后
    """
    STABLE = 'stable'
    NESTED = 'nested'


@dataclass
class FilterResult:
    """区间过滤的结果"""
    events: List[Event]
    start: float
    end: float
    selected_count: int = 0
    synthetic_count: int = 0
    frame_states: Dict[int, FrameState] = field(default_factory=dict)

    @property
    def active_frame_count(self) -> int:
        """区间内出现过的不同帧数量"""
        return len(self.frame_states)

    @property
    def is_empty(self) -> bool:
        return not self.events


def validate_window(start: float, end: float):
    """
    校验区间

    Raises:
        InvalidWindowError: start > end 或者边界不是有限数值
    """
    try:
        finite = math.isfinite(start) and math.isfinite(end)
    except TypeError:
        raise InvalidWindowError(start, end) from None
    if not finite or start > end:
        raise InvalidWindowError(start, end)


def _select(events: Sequence[Event], start: float, end: float, frame_count: Optional[int]):
    selected: List[Event] = []
    frame_states: Dict[int, FrameState] = {}
    for position, event in enumerate(events):
        if not start <= event.at <= end:
            continue
        if frame_count is not None and not 0 <= event.frame < frame_count:
            raise UnknownFrameReferenceError(event.frame, frame_count, position)
        state = frame_states.get(event.frame, FrameState.UNSEEN)
        frame_states[event.frame] = state.advance(event.type)
        selected.append(event)
    return selected, frame_states


def _synthesize(frame_states: Dict[int, FrameState], start: float, end: float):
    synthetic_opens: List[Event] = []
    synthetic_closes: List[Event] = []
    synthetic_in_order: List[Event] = []
    for frame, state in frame_states.items():
        if state is FrameState.OPEN_ONLY:
            event = Event(EventType.CLOSE, frame, int(end))
            synthetic_closes.append(event)
            synthetic_in_order.append(event)
            logger.debug(f"为帧 {frame} 在 {int(end)} 处补充合成 Close")
        elif state is FrameState.CLOSE_ONLY:
            event = Event(EventType.OPEN, frame, int(start))
            synthetic_opens.append(event)
            synthetic_in_order.append(event)
            logger.debug(f"为帧 {frame} 在 {int(start)} 处补充合成 Open")
    return synthetic_opens, synthetic_closes, synthetic_in_order


def filter_events_with_context(events: Sequence[Event], frame_table: Optional[Sequence],
                               start: float, end: float,
                               tie_break: TieBreak = TieBreak.NESTED) -> FilterResult:
    """
    把事件流截断到 [start, end]，并补充边界合成事件保证每个帧成对出现

    Args:
        events: 按 at 排序的事件流
        frame_table: 事件引用的帧表，提供时会校验帧索引；为 None 时不校验
        start: 区间起点（包含）
        end: 区间终点（包含）
        tie_break: 相同 at 的事件排序规则

    Returns:
        FilterResult: 过滤后的事件流及统计信息

    Raises:
        InvalidWindowError: 区间不合法
        UnknownFrameReferenceError: 区间内的事件引用了帧表之外的索引
    """
    validate_window(start, end)
    tie_break = TieBreak(tie_break)
    frame_count = len(frame_table) if frame_table is not None else None

    selected, frame_states = _select(events, start, end, frame_count)
    synthetic_opens, synthetic_closes, synthetic_in_order = _synthesize(frame_states, start, end)

    if tie_break is TieBreak.STABLE:
        merged = sorted(selected + synthetic_in_order, key=lambda event: event.at)
    else:
        # 同一时刻的合成 Open 按发现顺序是由内到外的，反转后外层先打开；合成 Close 同理
        ranked = ([(event, 0) for event in reversed(synthetic_opens)]
                  + [(event, 1) for event in selected]
                  + [(event, 2) for event in reversed(synthetic_closes)])
        ranked.sort(key=lambda item: (item[0].at, item[1]))
        merged = [event for event, _ in ranked]

    synthetic_count = len(synthetic_in_order)
    logger.debug(
        f"过滤得到 {len(selected)} 个事件 + {synthetic_count} 个合成事件 = {len(merged)} 个事件，"
        f"涉及 {len(frame_states)} 个活跃帧"
    )
    return FilterResult(
        events=merged,
        start=start,
        end=end,
        selected_count=len(selected),
        synthetic_count=synthetic_count,
        frame_states=frame_states,
    )
