"""
Chrome trace JSON 解析器
"""

import json
import gzip
import math
from pathlib import Path
from typing import Dict, List, Any, Optional, Tuple, Union
import logging

from .models import TraceEvent

logger = logging.getLogger(__name__)


def _to_microseconds(value: Any) -> Optional[int]:
    """将时间字段转换为整数微秒（四舍五入，.5 向上取整），None 保持为 None"""
    if value is None:
        return None
    return math.floor(float(value) + 0.5)


def _parse_event(event_data: Dict[str, Any]) -> Optional[TraceEvent]:
    """
    解析单个事件

    Args:
        event_data: 事件数据字典

    Returns:
        TraceEvent: 解析后的事件对象，如果解析失败返回 None
    """
    try:
        event_id = event_data.get('id')
        return TraceEvent(
            name=event_data.get('name', ''),
            cat=event_data.get('cat', ''),
            ph=event_data.get('ph', ''),
            pid=event_data.get('pid', 0),
            tid=event_data.get('tid', 0),
            ts=_to_microseconds(event_data.get('ts') or 0),
            dur=_to_microseconds(event_data.get('dur')),
            args=event_data.get('args') or {},
            id=str(event_id) if event_id is not None else None,
            id2=event_data.get('id2'),
        )
    except (AttributeError, TypeError, ValueError) as e:
        logger.warning(f"解析事件失败: {e}")
        return None


def parse_trace_events(raw_events: List[Dict[str, Any]]) -> List[TraceEvent]:
    """
    解析原始事件列表，跳过无法解析的事件

    Args:
        raw_events: 原始事件字典列表

    Returns:
        List[TraceEvent]: 解析后的事件列表
    """
    events = []
    for raw_event in raw_events:
        event = _parse_event(raw_event)
        if event is not None:
            events.append(event)
    skipped = len(raw_events) - len(events)
    if skipped:
        logger.warning(f"跳过 {skipped} 个无法解析的事件")
    return events


def parse_trace_file(file_path: Union[str, Path]) -> Optional[Tuple[List[TraceEvent], Dict[str, Any]]]:
    """
    解析 Chrome trace JSON 文件（支持 .gz）

    Args:
        file_path: JSON 文件路径

    Returns:
        Tuple[List[TraceEvent], Dict[str, Any]]: (事件列表, 元数据)，文件无法读取时返回 None
    """
    file_path = Path(file_path)
    if not file_path.exists():
        logger.error(f"文件不存在: {file_path}")
        return None

    try:
        print(f"正在解析文件: {file_path}")

        open_func = gzip.open if file_path.suffix == '.gz' else open
        with open_func(file_path, 'rt', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"读取文件出错: {e}", exc_info=True)
        return None

    # trace 文件既可以是 {"traceEvents": [...]} 也可以直接是事件数组
    if isinstance(data, list):
        raw_events = data
        metadata = {}
    elif isinstance(data, dict):
        raw_events = data.get('traceEvents', [])
        metadata = {key: value for key, value in data.items() if key != 'traceEvents'}
    else:
        logger.error(f"无法识别的 trace 格式: {file_path}")
        return None

    if not isinstance(raw_events, list):
        logger.error(f"traceEvents 不是事件数组: {file_path}")
        return None

    print(f"读取到 {len(raw_events)} 个原始事件")
    events = parse_trace_events(raw_events)
    return events, metadata
