# -*- coding: utf-8 -*-
"""
Trace 数据模型定义
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any, Optional, Set, Tuple, Union


class Phase:
    """Chrome trace 事件的 ph 字段取值"""
    COMPLETE = 'X'
    INSTANT = 'I'
    METADATA = 'M'
    ASYNC_NESTABLE_START = 'b'
    ASYNC_NESTABLE_END = 'e'


# eq=False: 事件按对象身份比较和哈希，字段完全相同的两个事件仍然是不同的事件
@dataclass(frozen=True, eq=False)
class TraceEvent:
    """Trace 事件数据模型"""
    name: str
    cat: str
    ph: str
    pid: int
    tid: int
    ts: int
    dur: Optional[int] = None
    args: Dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None
    id2: Optional[Dict[str, Any]] = None

    @property
    def id_global(self) -> Optional[Union[int, str]]:
        """获取 id2.global"""
        return self.id2.get('global', None) if self.id2 else None

    @property
    def id_local(self) -> Optional[Union[int, str]]:
        """获取 id2.local"""
        return self.id2.get('local', None) if self.id2 else None

    @property
    def end_time(self) -> int:
        """结束时间，没有 dur 时视为 0"""
        return self.ts + (self.dur or 0)


@dataclass(frozen=True, eq=False)
class SyntheticAsyncEvent:
    """由一对 begin/end 异步事件合成的区间事件"""
    name: str
    cat: str
    ph: str
    pid: int
    tid: int
    id: str
    ts: int
    dur: int
    begin_event: TraceEvent
    end_event: TraceEvent

    @property
    def args(self) -> Dict[str, Any]:
        return {'data': {'beginEvent': self.begin_event, 'endEvent': self.end_event}}

    @property
    def end_time(self) -> int:
        return self.ts + self.dur


@dataclass
class EntryNode:
    """渲染树节点，引用唯一一个事件"""
    id: int
    entry: TraceEvent
    parent_id: Optional[int] = None
    children_ids: Set[int] = field(default_factory=set)
    depth: int = 0


@dataclass
class RendererTree:
    """渲染树: 节点 id 到节点的映射以及根节点集合"""
    nodes: Dict[int, EntryNode] = field(default_factory=dict)
    roots: Set[int] = field(default_factory=set)


@dataclass
class RendererThread:
    """单个线程的条目列表与对应的渲染树"""
    pid: int
    tid: int
    entries: Tuple[TraceEvent, ...]
    tree: Optional[RendererTree] = None


@dataclass
class ProfileNode:
    """CPU profile 中的调用节点"""
    id: int
    call_frame: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TraceWindow:
    """时间窗口 [min, max]，单位微秒"""
    min: int
    max: int


@dataclass
class RendererProcessInfo:
    """某个 frame 在渲染进程中存活的时间窗口及其 URL"""
    frame_id: str
    url: str
    window: TraceWindow


class ActionType(Enum):
    """用户对调用树的操作类型"""
    MERGE_FUNCTION = 'MERGE_FUNCTION'
    COLLAPSE_FUNCTION = 'COLLAPSE_FUNCTION'


class UserTreeAction:
    """
    用户对调用树的操作

    两个操作相等当且仅当类型相同且指向同一个事件对象（按身份比较）。
    """

    __slots__ = ('type', 'entry')

    def __init__(self, type: ActionType, entry: TraceEvent):
        self.type = type
        self.entry = entry

    def __eq__(self, other):
        if isinstance(other, UserTreeAction):
            return self.type == other.type and self.entry is other.entry
        return NotImplemented

    def __hash__(self):
        return hash((self.type, id(self.entry)))

    def __repr__(self):
        return f"UserTreeAction({self.type}, {self.entry.name}@{self.entry.ts})"


EntryToNodeMap = Dict[TraceEvent, EntryNode]
EventsInThread = Dict[int, List[Any]]
