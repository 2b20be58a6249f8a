"""
CLI主模块
"""

import argparse
import logging
import sys
from .commands import VisibleCommand, AsyncCommand, MergeCommand


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--output-format', default='json,xlsx',
                        help='输出格式，逗号分隔，支持 json, csv, xlsx (默认: json,xlsx)')
    parser.add_argument('--output-dir', default='.', help='输出目录 (默认: 当前目录)')
    parser.add_argument('--print-markdown', action='store_true',
                        help='是否在stdout中以markdown格式打印表格 (默认: False)')


def build_parser() -> argparse.ArgumentParser:
    """构建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        description="Trace Tree Tool - 对 trace 调用树应用合并/折叠操作，配对异步事件，合并事件流",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  # 输出条目最多的线程的全部条目
  trace-tree-tool visible trace.json

  # 折叠 RunTask 的子调用，并隐藏所有 FunctionCall 条目
  trace-tree-tool visible trace.json --pid 1 --tid 2 --collapse RunTask --merge FunctionCall --print-markdown

  # 配对 begin/end 异步事件
  trace-tree-tool async trace.json --output-format csv

  # 合并多个 trace 文件的事件
  trace-tree-tool merge a.json b.json.gz "dir/*.json" --output-format json,xlsx
        """
    )
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='日志级别 (默认: WARNING)')

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    visible_parser = subparsers.add_parser('visible', help='对调用树应用操作并输出可见条目')
    visible_parser.add_argument('file', help='trace JSON 文件路径')
    visible_parser.add_argument('--pid', type=int, default=None, help='进程 id，需与 --tid 同时指定')
    visible_parser.add_argument('--tid', type=int, default=None, help='线程 id，需与 --pid 同时指定')
    visible_parser.add_argument('--merge', default='',
                                help='合并到父调用的函数名，逗号分隔 (该条目隐藏，子调用保留)')
    visible_parser.add_argument('--collapse', default='',
                                help='折叠的函数名，逗号分隔 (该条目保留，所有子调用隐藏)')
    _add_output_arguments(visible_parser)

    async_parser = subparsers.add_parser('async', help='配对 begin/end 异步事件')
    async_parser.add_argument('file', help='trace JSON 文件路径')
    _add_output_arguments(async_parser)

    merge_parser = subparsers.add_parser('merge', help='按时间顺序合并多个 trace 文件的事件')
    merge_parser.add_argument('files', nargs='+', help='trace 文件列表，支持 glob 模式和目录')
    _add_output_arguments(merge_parser)

    return parser


def main(argv=None):
    """主函数"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    if not args.command:
        print("错误: 请指定命令 (visible, async, merge)")
        print("使用 --help 查看帮助信息")
        return 1

    if args.command == 'visible':
        command = VisibleCommand()
    elif args.command == 'async':
        command = AsyncCommand()
    elif args.command == 'merge':
        command = MergeCommand()
    else:
        print(f"错误: 未知命令: {args.command}")
        return 1
    return command.run(args)


if __name__ == "__main__":
    sys.exit(main())
