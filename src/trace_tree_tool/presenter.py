"""
结果展示与输出模块
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence
import logging

import pandas as pd

from .models import EntryToNodeMap, SyntheticAsyncEvent

logger = logging.getLogger(__name__)

SUPPORTED_OUTPUT_FORMATS = ('json', 'csv', 'xlsx')


def events_to_rows(events: Sequence[Any], entry_to_node: Optional[EntryToNodeMap] = None) -> List[Dict[str, Any]]:
    """
    将事件转换为表格行

    Args:
        events: 事件序列
        entry_to_node: 条目到节点的映射，提供时输出 depth 列

    Returns:
        List[Dict[str, Any]]: 数据行列表
    """
    rows = []
    for index, event in enumerate(events):
        row = {
            'index': index,
            'name': event.name,
            'cat': event.cat,
            'ph': event.ph,
            'pid': event.pid,
            'tid': event.tid,
            'ts': event.ts,
            'dur': event.dur,
        }
        if entry_to_node is not None:
            node = entry_to_node.get(event)
            row['depth'] = node.depth if node is not None else None
        rows.append(row)
    return rows


def synthetic_events_to_rows(events: Iterable[SyntheticAsyncEvent]) -> List[Dict[str, Any]]:
    """将合成的异步事件转换为表格行"""
    return [
        {
            'index': index,
            'id': event.id,
            'name': event.name,
            'cat': event.cat,
            'pid': event.pid,
            'tid': event.tid,
            'ts': event.ts,
            'dur': event.dur,
            'end_ts': event.end_time,
        }
        for index, event in enumerate(events)
    ]


def generate_output_files(rows: List[Dict[str, Any]], output_dir: str, base_name: str,
                          output_formats: Sequence[str] = ('json', 'xlsx')) -> List[Path]:
    """
    生成输出文件 (JSON、CSV和Excel)

    Args:
        rows: 数据行列表
        output_dir: 输出目录
        base_name: 基础文件名
        output_formats: 输出格式列表

    Returns:
        List[Path]: 生成的文件路径列表
    """
    if not rows:
        logger.warning("没有数据可供展示")
        return []

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    files = []

    if 'json' in output_formats:
        json_file = output_path / f"{base_name}.json"
        try:
            with open(json_file, 'w', encoding='utf-8') as f:
                json.dump(rows, f, ensure_ascii=False, indent=2)
            files.append(json_file)
            print(f"生成 JSON 文件: {json_file}")
        except (OSError, TypeError) as e:
            logger.error(f"生成 JSON 文件失败: {e}")

    df = pd.DataFrame(rows)

    if 'csv' in output_formats:
        csv_file = output_path / f"{base_name}.csv"
        try:
            df.to_csv(csv_file, index=False)
            files.append(csv_file)
            print(f"生成 CSV 文件: {csv_file}")
        except OSError as e:
            logger.error(f"生成 CSV 文件失败: {e}")

    if 'xlsx' in output_formats:
        excel_file = output_path / f"{base_name}.xlsx"
        try:
            with pd.ExcelWriter(excel_file, engine='openpyxl') as writer:
                df.to_excel(writer, sheet_name='events', index=False)
            files.append(excel_file)
            print(f"生成 Excel 文件: {excel_file}")
        except (OSError, ValueError) as e:
            logger.error(f"生成 Excel 文件失败: {e}")

    return files


def print_markdown_table(rows: List[Dict[str, Any]], title: str) -> None:
    """在stdout中以markdown格式打印表格"""
    if not rows:
        print(f"\n## {title}\n\n无数据可显示\n")
        return

    print(f"\n## {title}\n")

    columns = list(rows[0].keys())
    print("| " + " | ".join(columns) + " |")
    print("| " + " | ".join(["---"] * len(columns)) + " |")

    for row in rows:
        values = []
        for col in columns:
            value = row.get(col, "")
            if value is None:
                values.append("")
            elif isinstance(value, float):
                values.append(f"{value:.2f}")
            else:
                values.append(str(value).replace('|', '\\|'))
        print("| " + " | ".join(values) + " |")
    print()
