# -*- coding: utf-8 -*-
"""
按 enter/leave 顺序构建调用树 Profile
"""

import logging
from typing import List, Optional

from .errors import StackDisciplineError
from .models import CallTreeNode, Frame, Profile, ROOT_FRAME, WeightUnit
from .utils.value_formatters import ValueFormatter, formatter_for_unit

logger = logging.getLogger(__name__)


class CallTreeProfileBuilder:
    """
    调用树构建器

    enter_frame / leave_frame 必须严格遵守栈顺序，权重坐标必须单调不减。
    build() 之后构建器不再可用。
    """

    def __init__(self, total_weight: float, start_value: float = 0):
        self.total_weight = total_weight
        self.start_value = start_value
        self.name = ''
        self.weight_unit = WeightUnit.NONE
        self.value_formatter: Optional[ValueFormatter] = None
        self.root = CallTreeNode(ROOT_FRAME, start_value, start_value + total_weight)
        self.stack: List[CallTreeNode] = [self.root]
        self.last_value = start_value
        self._built = False

    def set_name(self, name: str):
        self.name = name

    def set_weight_unit(self, unit: WeightUnit):
        self.weight_unit = WeightUnit(unit)
        self.value_formatter = formatter_for_unit(self.weight_unit.value)

    def set_value_formatter(self, formatter: ValueFormatter):
        """设置格式化器，同时把权重单位同步为格式化器的单位"""
        self.value_formatter = formatter
        self.weight_unit = WeightUnit(formatter.unit)

    def _check_value(self, value: float):
        if self._built:
            raise StackDisciplineError("Profile 已经构建完成，不能继续添加帧")
        if value < self.last_value:
            raise StackDisciplineError(
                f"权重坐标必须单调不减: {value} < {self.last_value}"
            )
        self.last_value = value

    def enter_frame(self, frame: Frame, value: float):
        """进入帧，新节点成为当前栈顶节点的子节点"""
        self._check_value(value)
        parent = self.stack[-1]
        node = CallTreeNode(frame, enter_weight=value, leave_weight=value)
        parent.add_child(node)
        self.stack.append(node)

    def leave_frame(self, frame: Frame, value: float):
        """离开帧，frame 必须是当前栈顶的帧"""
        self._check_value(value)
        if len(self.stack) == 1:
            raise StackDisciplineError(f"试图离开帧 {frame.name}，但调用栈为空")
        top = self.stack[-1]
        if top.frame is not frame:
            raise StackDisciplineError(
                f"试图离开帧 {frame.name}，但栈顶帧是 {top.frame.name}"
            )
        top.leave_weight = value
        self.stack.pop()

    def build(self) -> Profile:
        """完成构建，要求调用栈已经清空"""
        if len(self.stack) > 1:
            open_names = [node.frame.name for node in self.stack[1:]]
            raise StackDisciplineError(f"构建 Profile 时调用栈非空: {open_names}")
        self._built = True
        if self.last_value > self.start_value + self.total_weight:
            logger.warning(
                f"Profile {self.name!r} 的事件坐标 {self.last_value} 超出了总权重范围 "
                f"[{self.start_value}, {self.start_value + self.total_weight}]"
            )
        return Profile(
            name=self.name,
            weight_unit=self.weight_unit,
            total_weight=self.total_weight,
            root=self.root,
            start_value=self.start_value,
            value_formatter=self.value_formatter,
        )
