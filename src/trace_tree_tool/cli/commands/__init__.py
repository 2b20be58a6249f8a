"""
CLI命令模块
"""

from .visible import VisibleCommand
from .async_events import AsyncCommand
from .merge import MergeCommand

__all__ = ['VisibleCommand', 'AsyncCommand', 'MergeCommand']
