"""
CLI命令模块
"""

from .slice import SliceCommand
from .summary import SummaryCommand
from .verify import VerifyCommand

__all__ = ['SliceCommand', 'SummaryCommand', 'VerifyCommand']
