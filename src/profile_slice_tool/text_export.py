# -*- coding: utf-8 -*-
"""
区间文本导出

输出格式:
    # symbols
    <索引>\t<帧名称>
    ...
    [ 栈顶 ... 栈底 ]\t<持续时间>
每次调用栈发生变化时输出上一段调用栈及其持续时间，单位与 profile 相同。
"""

import logging
from typing import List, Sequence, Union

from .codec import encode
from .compactor import compact_frames
from .interval_filter import TieBreak, filter_events_with_context
from .models import Event, Profile

logger = logging.getLogger(__name__)

SYMBOLS_HEADER = '# symbols'
STACK_ORDER_NOTE = '# frames are referenced by index from left (top) to right (bottom)'
STACK_LINE_NOTE = '# stack [ top ... bottom ]\t<duration> (same units as profile)'


def _format_number(value: Union[int, float]) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _stack_line(stack: Sequence[int], duration: Union[int, float]) -> str:
    return f"[ {' '.join(str(index) for index in stack)} ]\t{_format_number(duration)}"


def render_stack_transitions(frame_names: Sequence[str], events: Sequence[Event],
                             start: float, end: float) -> str:
    """
    把事件流渲染为调用栈转换文本

    Args:
        frame_names: 压缩后帧表的名称列表
        events: 引用压缩后帧表的事件流
        start: 请求的区间起点
        end: 请求的区间终点，用于输出最后一段调用栈

    Returns:
        str: 以换行结尾的文本
    """
    lines: List[str] = [SYMBOLS_HEADER]
    for index, name in enumerate(frame_names):
        lines.append(f"{index}\t{name}")
    lines.append(STACK_ORDER_NOTE)
    lines.append(STACK_LINE_NOTE)

    # 栈顶在列表最左边
    stack: List[int] = []
    prev_time = events[0].at if events else start
    for event in events:
        duration = event.at - prev_time
        if duration > 0 and stack:
            lines.append(_stack_line(stack, duration))

        if event.is_open:
            stack.insert(0, event.frame)
        elif event.frame in stack:
            stack.remove(event.frame)
        prev_time = event.at

    tail_duration = end - prev_time
    if tail_duration > 0 and stack:
        lines.append(_stack_line(stack, tail_duration))

    return '\n'.join(lines) + '\n'


def export_interval_text(profile: Profile, start: float, end: float,
                         tie_break: TieBreak = TieBreak.NESTED) -> str:
    """
    把 profile 的 [start, end] 区间导出为调用栈转换文本

    Raises:
        InvalidWindowError: start > end
    """
    frame_table, events = encode(profile)
    filter_result = filter_events_with_context(events, frame_table, start, end, tie_break=tie_break)
    compact_table, compact_events = compact_frames(frame_table, filter_result.events)
    logger.info(f"文本导出: {len(compact_table)} 个帧, {len(compact_events)} 个事件")
    return render_stack_transitions([record['name'] for record in compact_table], compact_events, start, end)
