"""
异步事件配对命令模块
"""

from ..validators import parse_output_formats
from ..file_utils import parse_file_paths
from ...models import Phase
from ...parser import parse_trace_file
from ...presenter import synthetic_events_to_rows, generate_output_files, print_markdown_table
from ...utils.async_utils import create_matched_sorted_synthetic_events

ASYNC_PHASES = (Phase.ASYNC_NESTABLE_START, Phase.ASYNC_NESTABLE_END)


class AsyncCommand:
    """异步事件配对命令处理器"""

    def run(self, args) -> int:
        """将文件中的 begin/end 异步事件配对并输出"""
        print("=== 异步事件配对 ===")
        print(f"文件: {args.file}")
        print(f"输出格式: {args.output_format}")
        print(f"输出目录: {args.output_dir}")
        print()

        try:
            output_formats = parse_output_formats(args.output_format)
            file_path = parse_file_paths(args.file)[0]
        except ValueError as e:
            print(f"错误: 参数验证失败 - {e}")
            return 1

        parsed = parse_trace_file(file_path)
        if parsed is None:
            print(f"错误: 无法解析文件: {file_path}")
            return 1
        events, _ = parsed

        async_events = [event for event in events if event.ph in ASYNC_PHASES]
        synthetic_events = create_matched_sorted_synthetic_events(async_events)
        print(f"异步事件数: {len(async_events)}，配对成功: {len(synthetic_events)}")

        rows = synthetic_events_to_rows(synthetic_events)
        if args.print_markdown:
            print_markdown_table(rows, "异步事件")

        generated_files = generate_output_files(rows, args.output_dir, "async_events", output_formats)
        print("\n生成的文件:")
        for generated in generated_files:
            print(f"  {generated}")
        return 0
