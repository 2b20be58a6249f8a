# -*- coding: utf-8 -*-
"""
调用树可见性管理

TreeManipulator 持有一个线程的条目列表和渲染树，以及用户应用的一组操作
（合并函数、折叠函数），按需计算仍然可见的条目。操作不会修改原始树，
每个操作都独立地针对原始树计算需要隐藏的条目。
"""

from typing import List, Optional, Sequence, Set, Tuple
import logging

from .models import ActionType, EntryToNodeMap, RendererThread, TraceEvent, UserTreeAction
from .utils.tree_utils import find_all_descendants_of_node

logger = logging.getLogger(__name__)


class TreeManipulator:
    """
    对线程的调用树应用用户操作，并返回仍然可见的条目

    实例状态不加锁，调用方需要保证同一时间只有一个调用者。
    """

    def __init__(self, thread: RendererThread, entry_to_node: EntryToNodeMap):
        self._thread = thread
        self._entry_to_node = entry_to_node
        self._active_actions: List[UserTreeAction] = []
        # 上一次计算的可见条目，操作列表变化时清空
        self._last_visible_entries: Optional[Tuple[TraceEvent, ...]] = None

    @property
    def active_actions(self) -> Tuple[UserTreeAction, ...]:
        return tuple(self._active_actions)

    def apply_action(self, action: UserTreeAction) -> None:
        """
        应用一个操作并清空可见条目缓存

        如果相同类型、相同条目的操作已经生效，则什么也不做。

        Args:
            action: 用户操作
        """
        if action in self._active_actions:
            return

        self._active_actions.append(action)
        self._last_visible_entries = None
        logger.debug(f"应用操作 {action}，当前操作数: {len(self._active_actions)}")

    def remove_active_action(self, action: UserTreeAction) -> None:
        """
        移除类型和条目都匹配的操作

        没有找到匹配的操作时不清空缓存。

        Args:
            action: 用户操作
        """
        remaining = [active for active in self._active_actions if active != action]
        if len(remaining) == len(self._active_actions):
            return

        self._active_actions = remaining
        self._last_visible_entries = None
        logger.debug(f"移除操作 {action}，当前操作数: {len(self._active_actions)}")

    def visible_entries(self) -> Sequence[TraceEvent]:
        """
        当前操作下可见的条目，保持原始顺序

        没有任何操作时直接返回线程的全部条目。结果会被缓存，直到操作列表变化。

        Returns:
            Sequence[TraceEvent]: 只读的可见条目序列
        """
        if not self._active_actions:
            return self._thread.entries
        if self._last_visible_entries is not None:
            return self._last_visible_entries
        if self._thread.tree is None:
            # 没有树就无法应用操作
            return self._thread.entries

        entries_to_hide = self._collect_entries_to_hide()
        self._last_visible_entries = tuple(
            entry for entry in self._thread.entries if entry not in entries_to_hide
        )
        logger.debug(f"重新计算可见条目: {len(self._last_visible_entries)}/{len(self._thread.entries)}")
        return self._last_visible_entries

    def _collect_entries_to_hide(self) -> Set[TraceEvent]:
        entries_to_hide: Set[TraceEvent] = set()
        tree = self._thread.tree

        for action in self._active_actions:
            if action.type is ActionType.MERGE_FUNCTION:
                # 条目本身并入父节点，子节点保持可见
                entries_to_hide.add(action.entry)
            elif action.type is ActionType.COLLAPSE_FUNCTION:
                # 条目本身可见，所有后代隐藏
                entry_node = self._entry_to_node.get(action.entry)
                if entry_node is None:
                    logger.debug(f"操作 {action} 的条目不在树中，跳过")
                    continue
                entries_to_hide.update(find_all_descendants_of_node(tree, entry_node))
            else:
                raise AssertionError(f"未知的 TreeManipulator 操作: {action.type}")

        return entries_to_hide
