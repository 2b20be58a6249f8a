"""
基于扫描线的渲染树构建
时间复杂度: O(n log n)
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

from .models import EntryNode, EntryToNodeMap, Phase, RendererThread, RendererTree, TraceEvent
from .utils.event_utils import add_event_to_process_thread, sort_trace_events_in_place
from .utils.tree_utils import count_nodes, get_tree_depth

logger = logging.getLogger(__name__)

ThreadKey = Tuple[int, int]


class RendererTreeBuilder:
    """按 (pid, tid) 为 COMPLETE 事件构建渲染树"""

    def __init__(self):
        self.logger = logger
        self._next_node_id = 1

    def build_renderer_threads(self, events: List[TraceEvent]) -> Dict[ThreadKey, Tuple[RendererThread, EntryToNodeMap]]:
        """
        为所有线程构建渲染树

        Args:
            events: 事件列表

        Returns:
            Dict[Tuple[int, int], Tuple[RendererThread, EntryToNodeMap]]: 按(pid, tid)分组的线程及条目到节点的映射
        """
        events_in_process_thread: Dict[int, Dict[int, List[TraceEvent]]] = {}
        for event in events:
            if event.ph != Phase.COMPLETE:
                continue
            add_event_to_process_thread(event, events_in_process_thread)

        threads = {}
        for pid, events_in_thread in events_in_process_thread.items():
            for tid, thread_events in events_in_thread.items():
                self.logger.info(f"为进程 {pid} 线程 {tid} 构建渲染树，事件数: {len(thread_events)}")
                threads[(pid, tid)] = self.build_thread(pid, tid, thread_events)

        self.logger.info(f"成功构建 {len(threads)} 个线程的渲染树")
        return threads

    def build_thread(self, pid: int, tid: int, events: List[TraceEvent]) -> Tuple[RendererThread, EntryToNodeMap]:
        """
        使用扫描线算法为单个线程构建渲染树

        Args:
            pid: 进程 id
            tid: 线程 id
            events: 该线程的 COMPLETE 事件

        Returns:
            Tuple[RendererThread, EntryToNodeMap]: 线程和条目到节点的映射
        """
        entries = sort_trace_events_in_place(list(events))
        tree = RendererTree()
        entry_to_node: EntryToNodeMap = {}

        # 当前仍未结束的节点栈
        active_stack: List[EntryNode] = []
        for entry in entries:
            while active_stack and active_stack[-1].entry.end_time <= entry.ts:
                active_stack.pop()

            parent = self._find_parent_node(entry, active_stack)
            node = EntryNode(id=self._next_node_id, entry=entry)
            self._next_node_id += 1

            if parent is None:
                tree.roots.add(node.id)
            else:
                node.parent_id = parent.id
                node.depth = parent.depth + 1
                parent.children_ids.add(node.id)

            tree.nodes[node.id] = node
            entry_to_node[entry] = node
            active_stack.append(node)

        return RendererThread(pid=pid, tid=tid, entries=tuple(entries), tree=tree), entry_to_node

    def _find_parent_node(self, entry: TraceEvent, active_stack: List[EntryNode]) -> Optional[EntryNode]:
        """从栈顶向下查找第一个包含该条目的节点"""
        for candidate in reversed(active_stack):
            if self._contains(candidate.entry, entry):
                return candidate
        return None

    @staticmethod
    def _contains(parent_event: TraceEvent, child_event: TraceEvent) -> bool:
        return parent_event.ts <= child_event.ts and parent_event.end_time >= child_event.end_time

    def get_tree_statistics(self, threads: Dict[ThreadKey, Tuple[RendererThread, EntryToNodeMap]]) -> Dict[str, Any]:
        """
        获取渲染树的统计信息

        Args:
            threads: build_renderer_threads 的结果

        Returns:
            Dict[str, Any]: 统计信息
        """
        stats = {
            'total_trees': len(threads),
            'total_nodes': 0,
            'max_depth': 0,
            'avg_depth': 0.0,
            'tree_sizes': []
        }

        total_depth = 0
        for (pid, tid), (thread, _) in threads.items():
            tree = thread.tree
            tree_size = count_nodes(tree) if tree else 0
            tree_depth = get_tree_depth(tree) if tree else 0

            stats['total_nodes'] += tree_size
            stats['max_depth'] = max(stats['max_depth'], tree_depth)
            total_depth += tree_depth
            stats['tree_sizes'].append({
                'pid': pid,
                'tid': tid,
                'size': tree_size,
                'depth': tree_depth
            })

        if stats['total_trees'] > 0:
            stats['avg_depth'] = total_depth / stats['total_trees']

        return stats


def build_renderer_threads(events: List[TraceEvent]) -> Dict[ThreadKey, Tuple[RendererThread, EntryToNodeMap]]:
    """便捷函数: 为所有线程构建渲染树"""
    return RendererTreeBuilder().build_renderer_threads(events)
