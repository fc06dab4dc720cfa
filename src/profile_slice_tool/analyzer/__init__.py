"""
分析器模块
"""

from .summary import FrameStatistics, calculate_frame_statistics
from .presenter import build_summary_rows, generate_output_files, print_markdown_table

__all__ = [
    'FrameStatistics',
    'calculate_frame_statistics',
    'build_summary_rows',
    'generate_output_files',
    'print_markdown_table',
]
