"""
异步事件配对工具模块
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union
import logging

from ..models import Phase, SyntheticAsyncEvent, TraceEvent

logger = logging.getLogger(__name__)


@dataclass
class MatchedPair:
    """同一个合成 id 下的 begin/end 事件"""
    begin: Optional[TraceEvent] = None
    end: Optional[TraceEvent] = None


def extract_id(event: TraceEvent) -> Optional[Union[int, str]]:
    """
    获取异步事件的标识符: 优先 id，其次 id2.global，最后 id2.local

    Args:
        event: 异步事件

    Returns:
        标识符，没有任何标识符时返回 None
    """
    if event.id is not None:
        return event.id
    if event.id_global is not None:
        return event.id_global
    return event.id_local


def match_beginning_and_end_events(unpaired_events: Iterable[TraceEvent]) -> Dict[str, MatchedPair]:
    """
    按合成 id 归组 begin/end 事件

    合成 id 为 "cat:id:name"。同一 id 下后出现的同类事件覆盖先出现的。

    Args:
        unpaired_events: 未配对的异步事件

    Returns:
        Dict[str, MatchedPair]: 合成 id 到 begin/end 对的映射（按首次出现顺序）
    """
    matched_pairs: Dict[str, MatchedPair] = {}

    for event in unpaired_events:
        event_id = extract_id(event)
        if event_id is None:
            continue
        # 不同操作可能在同一 category 下复用同一个 id，因此 name 也要参与
        synthetic_id = f"{event.cat}:{event_id}:{event.name}"
        pair = matched_pairs.setdefault(synthetic_id, MatchedPair())

        if event.ph == Phase.ASYNC_NESTABLE_START:
            pair.begin = event
        elif event.ph == Phase.ASYNC_NESTABLE_END:
            pair.end = event

    return matched_pairs


def create_sorted_synthetic_events(matched_pairs: Dict[str, MatchedPair]) -> List[SyntheticAsyncEvent]:
    """
    由配对结果生成按开始时间排序的合成事件

    缺少 begin 或 end 的对，以及 end 早于 begin 的对都会被丢弃。

    Args:
        matched_pairs: match_beginning_and_end_events 的结果

    Returns:
        List[SyntheticAsyncEvent]: 按 ts 升序排列的合成事件
    """
    synthetic_events = []
    for synthetic_id, pair in matched_pairs.items():
        if pair.begin is None or pair.end is None:
            logger.debug(f"异步事件 {synthetic_id} 缺少 begin 或 end，丢弃")
            continue

        dur = pair.end.ts - pair.begin.ts
        if dur < 0:
            # 上游偶尔会重复发出 begin 或 end
            logger.debug(f"异步事件 {synthetic_id} 持续时间为负 ({dur})，丢弃")
            continue

        synthetic_events.append(SyntheticAsyncEvent(
            name=pair.begin.name,
            cat=pair.end.cat,
            ph=pair.end.ph,
            pid=pair.end.pid,
            tid=pair.end.tid,
            id=synthetic_id,
            ts=pair.begin.ts,
            dur=dur,
            begin_event=pair.begin,
            end_event=pair.end,
        ))

    synthetic_events.sort(key=lambda e: e.ts)
    return synthetic_events


def create_matched_sorted_synthetic_events(unpaired_events: Iterable[TraceEvent]) -> List[SyntheticAsyncEvent]:
    """将未配对的异步事件配对并生成排序后的合成事件"""
    matched_pairs = match_beginning_and_end_events(unpaired_events)
    return create_sorted_synthetic_events(matched_pairs)
