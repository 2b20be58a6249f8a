"""
多文件事件合并命令模块
"""

from ..validators import parse_output_formats
from ..file_utils import parse_file_paths
from ...parser import parse_trace_file
from ...presenter import events_to_rows, generate_output_files, print_markdown_table
from ...utils.event_utils import merge_event_streams, sort_trace_events_in_place


class MergeCommand:
    """多文件事件合并命令处理器"""

    def run(self, args) -> int:
        """分别排序每个文件的事件，再按时间顺序合并"""
        print("=== 事件合并 ===")
        print(f"文件: {args.files}")
        print(f"输出格式: {args.output_format}")
        print(f"输出目录: {args.output_dir}")
        print()

        try:
            output_formats = parse_output_formats(args.output_format)
            file_paths = []
            for file_pattern in args.files:
                file_paths.extend(parse_file_paths(file_pattern))
        except ValueError as e:
            print(f"错误: 参数验证失败 - {e}")
            return 1

        streams = []
        for file_path in file_paths:
            parsed = parse_trace_file(file_path)
            if parsed is None:
                print(f"错误: 无法解析文件: {file_path}")
                return 1
            events, _ = parsed
            streams.append(sort_trace_events_in_place(events))

        merged = merge_event_streams(streams)
        print(f"合并了 {len(streams)} 个文件，共 {len(merged)} 个事件")

        rows = events_to_rows(merged)
        if args.print_markdown:
            print_markdown_table(rows, "合并后的事件")

        generated_files = generate_output_files(rows, args.output_dir, "merged_events", output_formats)
        print("\n生成的文件:")
        for generated in generated_files:
            print(f"  {generated}")
        return 0
