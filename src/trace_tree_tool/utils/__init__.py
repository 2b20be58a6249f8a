"""
工具模块
"""

from .event_utils import (
    event_time_comparator,
    sort_trace_events_in_place,
    merge_events_in_order,
    merge_event_streams,
    add_event_to_process_thread,
    extract_origin_from_trace,
    get_navigation_for_trace_event,
    active_url_for_frame_at_time,
    make_profile_call,
)
from .async_utils import (
    MatchedPair,
    extract_id,
    match_beginning_and_end_events,
    create_sorted_synthetic_events,
    create_matched_sorted_synthetic_events,
)
from .tree_utils import find_all_descendants_of_node

__all__ = [
    'event_time_comparator',
    'sort_trace_events_in_place',
    'merge_events_in_order',
    'merge_event_streams',
    'add_event_to_process_thread',
    'extract_origin_from_trace',
    'get_navigation_for_trace_event',
    'active_url_for_frame_at_time',
    'make_profile_call',
    'MatchedPair',
    'extract_id',
    'match_beginning_and_end_events',
    'create_sorted_synthetic_events',
    'create_matched_sorted_synthetic_events',
    'find_all_descendants_of_node',
]
