# -*- coding: utf-8 -*-
"""
异常类型定义

库内部发现的结构性错误都以这些类型抛出给调用方，
调用方（例如 CLI）决定如何展示。
"""


class ProfileSliceError(ValueError):
    """所有 profile_slice_tool 异常的基类"""


class InvalidWindowError(ProfileSliceError):
    """区间不合法：start > end，或者边界不是有限数值"""

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"非法区间: [{start}, {end}]，要求 start <= end 且均为有限数值")


class UnknownFrameReferenceError(ProfileSliceError):
    """事件引用了帧表范围之外的帧索引"""

    def __init__(self, frame_index, frame_count: int, event_position: int = None):
        self.frame_index = frame_index
        self.frame_count = frame_count
        self.event_position = event_position
        location = f"第 {event_position} 个事件" if event_position is not None else "事件"
        super().__init__(
            f"{location}引用了未知帧索引 {frame_index}，帧表长度为 {frame_count}"
        )


class InvalidDocumentError(ProfileSliceError):
    """文档结构不符合规范格式"""


class StackDisciplineError(ProfileSliceError):
    """构建调用树时 enter/leave 调用没有遵守栈顺序"""
