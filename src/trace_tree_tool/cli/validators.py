# -*- coding: utf-8 -*-
"""
CLI验证器模块
"""

from typing import List, Optional, Tuple

from ..presenter import SUPPORTED_OUTPUT_FORMATS


def parse_output_formats(format_spec: str) -> List[str]:
    """
    解析输出格式

    Args:
        format_spec: 逗号分隔的输出格式字符串

    Returns:
        List[str]: 输出格式列表

    Raises:
        ValueError: 如果格式为空、不支持或重复
    """
    if not format_spec or not format_spec.strip():
        raise ValueError("输出格式不能为空")

    formats = [fmt.strip().lower() for fmt in format_spec.split(',')]
    for fmt in formats:
        if not fmt:
            raise ValueError("输出格式不能为空字符串")
        if fmt not in SUPPORTED_OUTPUT_FORMATS:
            raise ValueError(f"不支持的输出格式: {fmt}。支持的格式: {', '.join(SUPPORTED_OUTPUT_FORMATS)}")

    if len(formats) != len(set(formats)):
        raise ValueError("输出格式不能重复")

    return formats


def parse_name_patterns(pattern_str: Optional[str]) -> List[str]:
    """
    解析逗号分隔的事件名称列表

    Args:
        pattern_str: 逗号分隔的名称字符串

    Returns:
        List[str]: 解析后的名称列表
    """
    if not pattern_str or not pattern_str.strip():
        return []

    patterns = [pattern.strip() for pattern in pattern_str.split(',')]
    return [pattern for pattern in patterns if pattern]


def validate_thread_selection(pid: Optional[int], tid: Optional[int]) -> Optional[Tuple[int, int]]:
    """
    验证线程选择参数，--pid 和 --tid 必须同时指定或同时省略

    Raises:
        ValueError: 如果只指定了其中一个
    """
    if pid is None and tid is None:
        return None
    if pid is None or tid is None:
        raise ValueError("--pid 和 --tid 必须同时指定")
    return pid, tid


def validate_action_names(merge_names: List[str], collapse_names: List[str]) -> None:
    """
    验证操作名称

    Raises:
        ValueError: 如果同一个名称同时出现在 --merge 和 --collapse 中
    """
    overlap = set(merge_names) & set(collapse_names)
    if overlap:
        raise ValueError(f"名称不能同时用于 --merge 和 --collapse: {', '.join(sorted(overlap))}")
