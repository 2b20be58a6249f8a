"""
可见条目命令模块
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..validators import parse_output_formats, parse_name_patterns, validate_thread_selection, \
    validate_action_names
from ..file_utils import parse_file_paths
from ...models import ActionType, EntryToNodeMap, RendererThread, UserTreeAction
from ...parser import parse_trace_file
from ...presenter import events_to_rows, generate_output_files, print_markdown_table
from ...renderer_tree_builder import RendererTreeBuilder
from ...tree_manipulator import TreeManipulator


def select_thread(threads: Dict[Tuple[int, int], Tuple[RendererThread, EntryToNodeMap]],
                  thread_key: Optional[Tuple[int, int]]) -> Optional[Tuple[RendererThread, EntryToNodeMap]]:
    """
    选择要处理的线程，未指定时选择条目最多的线程

    Returns:
        找不到线程时返回 None
    """
    if not threads:
        return None
    if thread_key is not None:
        return threads.get(thread_key)
    return max(threads.values(), key=lambda item: len(item[0].entries))


def build_actions(thread: RendererThread, names: List[str], action_type: ActionType) -> List[UserTreeAction]:
    """为线程中名称匹配的每个条目生成一个操作"""
    wanted = set(names)
    return [UserTreeAction(action_type, entry) for entry in thread.entries if entry.name in wanted]


class VisibleCommand:
    """可见条目命令处理器"""

    def run(self, args) -> int:
        """对单个文件中的一个线程应用操作并输出可见条目"""
        print("=== 可见条目 ===")
        print(f"文件: {args.file}")
        print(f"合并函数: {args.merge if args.merge else '无'}")
        print(f"折叠函数: {args.collapse if args.collapse else '无'}")
        print(f"输出格式: {args.output_format}")
        print(f"输出目录: {args.output_dir}")
        print()

        try:
            output_formats = parse_output_formats(args.output_format)
            thread_key = validate_thread_selection(args.pid, args.tid)
            merge_names = parse_name_patterns(args.merge)
            collapse_names = parse_name_patterns(args.collapse)
            validate_action_names(merge_names, collapse_names)
            file_path = parse_file_paths(args.file)[0]
        except ValueError as e:
            print(f"错误: 参数验证失败 - {e}")
            return 1

        parsed = parse_trace_file(file_path)
        if parsed is None:
            print(f"错误: 无法解析文件: {file_path}")
            return 1
        events, _ = parsed

        threads = RendererTreeBuilder().build_renderer_threads(events)
        selected = select_thread(threads, thread_key)
        if selected is None:
            if thread_key is None:
                print("错误: 文件中没有 COMPLETE 事件")
            else:
                print(f"错误: 没有找到线程 pid={thread_key[0]} tid={thread_key[1]}")
            return 1
        thread, entry_to_node = selected
        print(f"线程: pid={thread.pid} tid={thread.tid}，条目数: {len(thread.entries)}")

        manipulator = TreeManipulator(thread, entry_to_node)
        actions = build_actions(thread, merge_names, ActionType.MERGE_FUNCTION) + \
            build_actions(thread, collapse_names, ActionType.COLLAPSE_FUNCTION)
        for action in actions:
            manipulator.apply_action(action)
        print(f"应用了 {len(manipulator.active_actions)} 个操作")

        visible = manipulator.visible_entries()
        print(f"可见条目数: {len(visible)}")

        rows = events_to_rows(visible, entry_to_node)
        base_name = f"visible_{thread.pid}_{thread.tid}"
        if args.print_markdown:
            print_markdown_table(rows, f"可见条目 pid={thread.pid} tid={thread.tid}")

        generated_files = generate_output_files(rows, str(Path(args.output_dir)), base_name, output_formats)
        print("\n生成的文件:")
        for generated in generated_files:
            print(f"  {generated}")
        return 0
