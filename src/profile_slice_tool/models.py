# -*- coding: utf-8 -*-
"""
调用树 Profile 数据模型定义
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

from .utils.value_formatters import ValueFormatter, formatter_for_unit


class WeightUnit(str, Enum):
    """权重坐标轴的单位"""
    NONE = 'none'
    NANOSECONDS = 'nanoseconds'
    MICROSECONDS = 'microseconds'
    MILLISECONDS = 'milliseconds'
    SECONDS = 'seconds'
    BYTES = 'bytes'


class EventType(str, Enum):
    """事件类型: O 表示进入帧, C 表示离开帧"""
    OPEN = 'O'
    CLOSE = 'C'


@dataclass(frozen=True, eq=False)
class Frame:
    """
    函数帧（函数身份）

    帧的身份是对象身份：两个字段完全相同的 Frame 仍然是不同的帧，
    因此这里关闭了基于字段的 __eq__/__hash__。
    """
    name: str
    file: Optional[str] = None
    line: Optional[int] = None
    col: Optional[int] = None

    def to_record(self) -> Dict[str, Any]:
        """转换为稀疏的帧记录，只输出非 None 的可选字段"""
        record: Dict[str, Any] = {'name': self.name}
        if self.file is not None:
            record['file'] = self.file
        if self.line is not None:
            record['line'] = self.line
        if self.col is not None:
            record['col'] = self.col
        return record


@dataclass(frozen=True)
class Event:
    """事件流中的单个 Open/Close 事件"""
    type: EventType
    frame: int  # 帧表索引
    at: int     # 权重坐标

    @property
    def is_open(self) -> bool:
        return self.type is EventType.OPEN

    @property
    def is_close(self) -> bool:
        return self.type is EventType.CLOSE

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type.value, 'frame': self.frame, 'at': self.at}


# 调用树的虚拟根帧，不会被编码进事件流
ROOT_FRAME = Frame(name='(root)')


class CallTreeNode:
    """调用树节点"""

    def __init__(self, frame: Frame, enter_weight: float = 0, leave_weight: float = 0,
                 parent: Optional['CallTreeNode'] = None):
        self.frame = frame
        self.children: List['CallTreeNode'] = []
        self.parent = parent
        self.enter_weight = enter_weight
        self.leave_weight = leave_weight

    def add_child(self, child: 'CallTreeNode'):
        """按调用顺序追加子节点"""
        child.parent = self
        self.children.append(child)

    def is_root(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        depth = 0
        current = self.parent
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    @property
    def weight(self) -> float:
        """节点区间的长度（包含子节点）"""
        return self.leave_weight - self.enter_weight

    @property
    def self_weight(self) -> float:
        """节点自身的权重（去掉子节点区间）"""
        return self.weight - sum(child.weight for child in self.children)

    def get_call_stack(self) -> List[str]:
        """获取从根到当前节点的调用栈路径（不含虚拟根）"""
        path = []
        current = self
        while current is not None and current.parent is not None:
            path.append(current.frame.name)
            current = current.parent
        return list(reversed(path))

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            'frame': self.frame.to_record(),
            'enter_weight': self.enter_weight,
            'leave_weight': self.leave_weight,
            'children': [child.to_dict() for child in self.children],
        }

    def __repr__(self):
        return (f"CallTreeNode({self.frame.name!r}, [{self.enter_weight}, {self.leave_weight}], "
                f"children={len(self.children)})")


class Profile:
    """
    调用树 Profile

    root 是一个虚拟根节点，真正的调用都挂在它下面。
    start_value 是根区间打开时的权重坐标，total_weight 是根区间的长度。
    """

    def __init__(self, name: str, weight_unit: WeightUnit, total_weight: float,
                 root: CallTreeNode, start_value: float = 0,
                 value_formatter: Optional[ValueFormatter] = None):
        self.name = name
        self.weight_unit = WeightUnit(weight_unit)
        self.total_weight = total_weight
        self.root = root
        self.start_value = start_value
        self.value_formatter = value_formatter or formatter_for_unit(self.weight_unit.value)

    @property
    def end_value(self) -> float:
        return self.start_value + self.total_weight

    def format_value(self, value: float) -> str:
        """使用 profile 自己的单位格式化权重值"""
        return self.value_formatter.format(value)

    def for_each_call(self, open_frame: Callable[[CallTreeNode, float], None],
                      close_frame: Callable[[CallTreeNode, float], None]):
        """
        深度优先遍历所有调用节点（不含虚拟根）

        Args:
            open_frame: 进入节点时回调 (node, enter_weight)
            close_frame: 所有子节点访问完之后回调 (node, leave_weight)
        """
        # 使用显式栈，避免深调用链触发递归深度限制
        stack = [(child, False) for child in reversed(self.root.children)]
        while stack:
            node, visited = stack.pop()
            if visited:
                close_frame(node, node.leave_weight)
                continue
            open_frame(node, node.enter_weight)
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))

    def iter_nodes(self) -> Iterator[CallTreeNode]:
        """按调用顺序遍历所有调用节点（不含虚拟根）"""
        stack = list(reversed(self.root.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def frames(self) -> List[Frame]:
        """按首次出现顺序返回所有不同的帧"""
        seen = {}
        for node in self.iter_nodes():
            if node.frame not in seen:
                seen[node.frame] = None
        return list(seen)

    def remap_symbols(self, remap: Callable[[Frame], Optional[str]]):
        """
        符号重映射：替换帧的名称但不改变树结构

        同一个帧只会被映射一次，所有引用它的节点共享新的帧对象，
        因此帧的身份分组保持不变。

        Args:
            remap: 输入旧帧，返回新名称；返回 None 表示保持不变
        """
        replacements: Dict[Frame, Frame] = {}
        for node in self.iter_nodes():
            frame = node.frame
            if frame not in replacements:
                new_name = remap(frame)
                if new_name is None or new_name == frame.name:
                    replacements[frame] = frame
                else:
                    replacements[frame] = dataclasses.replace(frame, name=new_name)
            node.frame = replacements[frame]

    def __repr__(self):
        return (f"Profile({self.name!r}, unit={self.weight_unit.value}, "
                f"start={self.start_value}, total={self.total_weight})")


@dataclass
class ProfileGroup:
    """一个文档对应的 profile 集合，所有 profile 共享同一个帧表"""
    name: str
    profiles: List[Profile] = field(default_factory=list)
    index_to_view: int = 0
    exporter: Optional[str] = None

    @property
    def active_profile(self) -> Optional[Profile]:
        if not self.profiles:
            return None
        return self.profiles[self.index_to_view]
