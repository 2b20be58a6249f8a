"""
Trace Tree Tool Package
"""

from .models import (
    TraceEvent,
    SyntheticAsyncEvent,
    Phase,
    EntryNode,
    RendererTree,
    RendererThread,
    ActionType,
    UserTreeAction,
)
from .parser import parse_trace_file
from .renderer_tree_builder import build_renderer_threads, RendererTreeBuilder
from .tree_manipulator import TreeManipulator
from .utils.event_utils import sort_trace_events_in_place, merge_events_in_order, merge_event_streams
from .utils.async_utils import create_matched_sorted_synthetic_events

__all__ = [
    'TraceEvent',
    'SyntheticAsyncEvent',
    'Phase',
    'EntryNode',
    'RendererTree',
    'RendererThread',
    'ActionType',
    'UserTreeAction',
    'parse_trace_file',
    'build_renderer_threads',
    'RendererTreeBuilder',
    'TreeManipulator',
    'sort_trace_events_in_place',
    'merge_events_in_order',
    'merge_event_streams',
    'create_matched_sorted_synthetic_events',
]
