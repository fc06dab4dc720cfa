# -*- coding: utf-8 -*-
"""
按帧聚合 profile 的权重统计
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models import CallTreeNode, Frame, Profile

logger = logging.getLogger(__name__)


@dataclass
class FrameStatistics:
    """单个帧的统计信息"""
    frame: Frame
    call_count: int = 0
    total_weight: float = 0
    self_weight: float = 0

    @property
    def name(self) -> str:
        return self.frame.name

    @property
    def location(self) -> Optional[str]:
        """源码位置 file:line:col，没有文件信息时为 None"""
        if self.frame.file is None:
            return None
        parts = [self.frame.file]
        if self.frame.line is not None:
            parts.append(str(self.frame.line))
            if self.frame.col is not None:
                parts.append(str(self.frame.col))
        return ':'.join(parts)


def calculate_frame_statistics(profile: Profile) -> List[FrameStatistics]:
    """
    计算每个帧的调用次数、总权重和自身权重

    递归调用时，只有最外层的那次调用计入总权重，避免重复计算；
    自身权重每个节点都计入。

    Args:
        profile: 调用树 Profile

    Returns:
        List[FrameStatistics]: 按总权重降序排列，总权重相同时保持首次出现顺序
    """
    stats: Dict[Frame, FrameStatistics] = {}
    on_stack: Counter = Counter()

    def open_frame(node: CallTreeNode, value: float):
        frame_stats = stats.get(node.frame)
        if frame_stats is None:
            frame_stats = stats[node.frame] = FrameStatistics(frame=node.frame)
        frame_stats.call_count += 1
        frame_stats.self_weight += node.self_weight
        if on_stack[node.frame] == 0:
            frame_stats.total_weight += node.weight
        on_stack[node.frame] += 1

    def close_frame(node: CallTreeNode, value: float):
        on_stack[node.frame] -= 1

    profile.for_each_call(open_frame, close_frame)
    logger.info(f"Profile {profile.name!r} 共统计 {len(stats)} 个帧")
    return sorted(stats.values(), key=lambda item: item.total_weight, reverse=True)
