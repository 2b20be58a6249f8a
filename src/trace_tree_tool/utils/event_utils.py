"""
事件排序与合并工具模块
"""

from bisect import bisect_right
from functools import reduce
from typing import Any, Dict, Iterable, List, Optional, Sequence
from urllib.parse import urlparse
import logging

from ..models import EventsInThread, Phase, ProfileNode, RendererProcessInfo, TraceEvent

logger = logging.getLogger(__name__)


def event_time_comparator(a: Any, b: Any) -> int:
    """
    事件时间比较器

    先按开始时间升序；开始时间相同时按结束时间降序（更长的事件在前，
    视为包含更短的事件）。dur 缺失时按 0 处理。

    Args:
        a: 具有 ts/dur 属性的事件
        b: 具有 ts/dur 属性的事件

    Returns:
        int: -1 表示 a 在前，1 表示 b 在前，0 表示相等
    """
    if a.ts < b.ts:
        return -1
    if a.ts > b.ts:
        return 1
    a_end = a.ts + (a.dur or 0)
    b_end = b.ts + (b.dur or 0)
    if a_end > b_end:
        return -1
    if a_end < b_end:
        return 1
    return 0


def _event_time_key(event: Any):
    # 与 event_time_comparator 给出相同的顺序
    return (event.ts, -(event.ts + (event.dur or 0)))


def sort_trace_events_in_place(events: List[Any]) -> List[Any]:
    """
    按 event_time_comparator 的顺序原地排序

    开始时间和结束时间都相同的事件保持输入中的相对顺序（list.sort 是稳定排序）。

    Args:
        events: 事件列表

    Returns:
        List: 排序后的同一个列表对象
    """
    events.sort(key=_event_time_key)
    return events


def merge_events_in_order(events_a: Sequence[Any], events_b: Sequence[Any]) -> List[Any]:
    """
    合并两个已排序的事件序列

    比较结果为相等时先输出 events_a 中的事件。

    Args:
        events_a: 已排序的事件序列
        events_b: 已排序的事件序列

    Returns:
        List: 合并后的有序事件列表
    """
    result = []
    i = 0
    j = 0
    while i < len(events_a) and j < len(events_b):
        if event_time_comparator(events_a[i], events_b[j]) <= 0:
            result.append(events_a[i])
            i += 1
        else:
            result.append(events_b[j])
            j += 1
    result.extend(events_a[i:])
    result.extend(events_b[j:])
    return result


def merge_event_streams(streams: Iterable[Sequence[Any]]) -> List[Any]:
    """
    依次合并多个已排序的事件流，排在前面的流在相等时优先

    Args:
        streams: 已排序的事件流

    Returns:
        List: 合并后的有序事件列表
    """
    return reduce(merge_events_in_order, streams, [])


def add_event_to_process_thread(event: Any, events_in_process_thread: Dict[int, EventsInThread]) -> None:
    """
    将事件按 pid/tid 归入 {pid: {tid: [events]}} 映射，线程内保持到达顺序

    Args:
        event: 事件
        events_in_process_thread: 进程/线程分组映射（原地修改）
    """
    events_in_thread = events_in_process_thread.setdefault(event.pid, {})
    events_in_thread.setdefault(event.tid, []).append(event)


def extract_origin_from_trace(first_navigation_url: str) -> Optional[str]:
    """
    从首次导航的 URL 中提取 host，去掉开头的 "www."

    Args:
        first_navigation_url: 导航 URL

    Returns:
        Optional[str]: host，URL 无法解析时返回 None
    """
    host = urlparse(first_navigation_url).hostname
    if not host:
        return None
    if host.startswith('www.'):
        return host[4:]
    return host


def get_navigation_for_trace_event(event: Any, event_frame_id: str,
                                   navigations_by_frame_id: Dict[str, List[TraceEvent]]) -> Optional[TraceEvent]:
    """
    查找事件所属的导航: 同一 frame 中 ts 不晚于事件的最后一次导航

    Args:
        event: 事件
        event_frame_id: 事件所属 frame 的 id
        navigations_by_frame_id: frame id 到按 ts 升序排列的导航事件列表

    Returns:
        Optional[TraceEvent]: 导航事件，找不到时返回 None
    """
    navigations = navigations_by_frame_id.get(event_frame_id)
    if not navigations or event_frame_id == '':
        return None

    index = bisect_right([navigation.ts for navigation in navigations], event.ts) - 1
    if index < 0:
        return None
    return navigations[index]


def active_url_for_frame_at_time(frame_id: str, time: int,
                                 renderer_processes_by_frame: Dict[str, Dict[int, List[RendererProcessInfo]]]) -> Optional[str]:
    """
    获取 frame 在指定时刻所在渲染进程的 URL

    Args:
        frame_id: frame id
        time: 时间（微秒）
        renderer_processes_by_frame: frame id 到 {pid: [进程信息]} 的映射

    Returns:
        Optional[str]: 时间窗口包含该时刻的第一个进程信息的 URL，没有时返回 None
    """
    process_data = renderer_processes_by_frame.get(frame_id)
    if not process_data:
        return None
    for processes in process_data.values():
        for process_info in processes:
            if process_info.window.min > time or process_info.window.max < time:
                continue
            return process_info.url
    return None


def make_profile_call(node: ProfileNode, ts: int, pid: int, tid: int) -> TraceEvent:
    """
    为 CPU profile 节点生成一个 ProfileCall 事件，dur 为 0，节点信息放在 args 中

    Args:
        node: CPU profile 节点
        ts: 开始时间（微秒）
        pid: 进程 id
        tid: 线程 id

    Returns:
        TraceEvent: COMPLETE 类型的 ProfileCall 事件
    """
    return TraceEvent(
        name='ProfileCall',
        cat='',
        ph=Phase.COMPLETE,
        pid=pid,
        tid=tid,
        ts=ts,
        dur=0,
        args={'nodeId': node.id, 'callFrame': node.call_frame, 'selfTime': 0},
    )
