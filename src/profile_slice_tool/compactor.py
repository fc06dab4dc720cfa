# -*- coding: utf-8 -*-
"""
帧表压缩：只保留被事件引用的帧，并按首次引用顺序重新编号
"""

import logging
from typing import Dict, List, Sequence, Tuple, TypeVar

from .errors import UnknownFrameReferenceError
from .models import Event

logger = logging.getLogger(__name__)

T = TypeVar('T')


def compact_frames(frame_table: Sequence[T], events: Sequence[Event]) -> Tuple[List[T], List[Event]]:
    """
    压缩帧表并重写事件的帧索引

    新帧表只包含至少被一个事件引用的帧，顺序为事件流中的首次引用顺序。
    对已经压缩过的帧表再次压缩结果不变。

    Args:
        frame_table: 原始帧表
        events: 事件流（可以是过滤后的，也可以是完整的）

    Returns:
        Tuple[List[T], List[Event]]: 新帧表和重写后的事件流

    Raises:
        UnknownFrameReferenceError: 事件引用了帧表之外的索引
    """
    old_to_new: Dict[int, int] = {}
    new_frames: List[T] = []
    remapped: List[Event] = []

    for position, event in enumerate(events):
        new_index = old_to_new.get(event.frame)
        if new_index is None:
            if not 0 <= event.frame < len(frame_table):
                raise UnknownFrameReferenceError(event.frame, len(frame_table), position)
            new_index = len(new_frames)
            old_to_new[event.frame] = new_index
            new_frames.append(frame_table[event.frame])
        remapped.append(Event(event.type, new_index, event.at))

    if len(new_frames) < len(frame_table):
        logger.debug(f"帧表压缩: {len(frame_table)} -> {len(new_frames)}")
    return new_frames, remapped
