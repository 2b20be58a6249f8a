# -*- coding: utf-8 -*-
"""
CLI模块 - 命令行接口
"""

from .main import main
from .commands import VisibleCommand, AsyncCommand, MergeCommand

__all__ = ['main', 'VisibleCommand', 'AsyncCommand', 'MergeCommand']
