# -*- coding: utf-8 -*-
"""
导入时使用的重建调用栈

与构建器不同，这里允许 Close 事件移除栈中任意位置的匹配帧，
用于容忍非 LIFO 顺序的关闭事件。
"""

from typing import List, Optional, Tuple

from .models import CallTreeNode


class ReconstructionStack:
    """基于显式列表的调用栈，条目为 (帧索引, 节点)"""

    def __init__(self, root: CallTreeNode):
        self.root = root
        self._entries: List[Tuple[int, CallTreeNode]] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def top(self) -> CallTreeNode:
        """当前栈顶节点，栈为空时为根节点"""
        if not self._entries:
            return self.root
        return self._entries[-1][1]

    def push(self, frame_index: int, node: CallTreeNode) -> CallTreeNode:
        """把节点挂到栈顶节点下并入栈"""
        self.top.add_child(node)
        self._entries.append((frame_index, node))
        return node

    def remove(self, frame_index: int) -> Optional[CallTreeNode]:
        """
        移除最近入栈的、帧索引匹配的节点

        Args:
            frame_index: 帧索引

        Returns:
            Optional[CallTreeNode]: 被移除的节点，没有匹配时返回 None
        """
        for position in range(len(self._entries) - 1, -1, -1):
            if self._entries[position][0] == frame_index:
                _, node = self._entries.pop(position)
                return node
        return None

    def drain(self) -> List[CallTreeNode]:
        """清空栈，按从栈顶到栈底的顺序返回剩余节点"""
        remaining = [node for _, node in reversed(self._entries)]
        self._entries.clear()
        return remaining
