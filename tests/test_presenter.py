"""
结果展示模块单元测试
"""

import unittest
import io
import json
import tempfile
from contextlib import redirect_stdout
from pathlib import Path

import pandas as pd

from trace_tree_tool.models import EntryNode, Phase, TraceEvent
from trace_tree_tool.presenter import (
    events_to_rows,
    synthetic_events_to_rows,
    generate_output_files,
    print_markdown_table,
)
from trace_tree_tool.utils.async_utils import create_matched_sorted_synthetic_events


class TestPresenter(unittest.TestCase):
    def setUp(self):
        self.parent = TraceEvent(name="parent", cat="cpu_op", ph="X", pid=1, tid=1, ts=0, dur=10)
        self.child = TraceEvent(name="child", cat="cpu_op", ph="X", pid=1, tid=1, ts=2, dur=3)
        self.entry_to_node = {
            self.parent: EntryNode(id=1, entry=self.parent, children_ids={2}, depth=0),
            self.child: EntryNode(id=2, entry=self.child, parent_id=1, depth=1),
        }
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_events_to_rows(self):
        rows = events_to_rows([self.parent, self.child], self.entry_to_node)
        self.assertEqual(rows[1]['name'], "child")
        self.assertEqual(rows[1]['depth'], 1)
        self.assertEqual(rows[1]['index'], 1)
        self.assertNotIn('depth', events_to_rows([self.parent])[0])

    def test_synthetic_events_to_rows(self):
        synthetic = create_matched_sorted_synthetic_events([
            TraceEvent(name="load", cat="net", ph=Phase.ASYNC_NESTABLE_START, pid=1, tid=1, ts=5, id="1"),
            TraceEvent(name="load", cat="net", ph=Phase.ASYNC_NESTABLE_END, pid=1, tid=1, ts=9, id="1"),
        ])
        rows = synthetic_events_to_rows(synthetic)
        self.assertEqual(rows, [{
            'index': 0, 'id': "net:1:load", 'name': "load", 'cat': "net",
            'pid': 1, 'tid': 1, 'ts': 5, 'dur': 4, 'end_ts': 9,
        }])

    def test_generate_output_files(self):
        rows = events_to_rows([self.parent, self.child], self.entry_to_node)
        with redirect_stdout(io.StringIO()):
            files = generate_output_files(rows, self.temp_dir.name, "visible", ['json', 'csv', 'xlsx'])

        self.assertEqual([f.suffix for f in files], ['.json', '.csv', '.xlsx'])
        with open(files[0], encoding='utf-8') as f:
            self.assertEqual(json.load(f)[0]['name'], "parent")
        self.assertEqual(list(pd.read_csv(files[1])['name']), ["parent", "child"])
        self.assertEqual(list(pd.read_excel(files[2], engine='openpyxl')['depth']), [0, 1])

    def test_generate_output_files_selected_formats(self):
        rows = events_to_rows([self.parent])
        with redirect_stdout(io.StringIO()):
            files = generate_output_files(rows, self.temp_dir.name, "only_csv", ['csv'])
        self.assertEqual(files, [Path(self.temp_dir.name) / "only_csv.csv"])

    def test_generate_output_files_no_rows(self):
        self.assertEqual(generate_output_files([], self.temp_dir.name, "empty"), [])

    def test_print_markdown_table(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            print_markdown_table(events_to_rows([self.parent]), "可见条目")
        output = buffer.getvalue()
        self.assertIn("## 可见条目", output)
        self.assertIn("| index | name | cat | ph | pid | tid | ts | dur |", output)
        self.assertIn("| 0 | parent | cpu_op | X | 1 | 1 | 0 | 10 |", output)

    def test_print_markdown_table_empty(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            print_markdown_table([], "空表")
        self.assertIn("无数据可显示", buffer.getvalue())


if __name__ == '__main__':
    unittest.main()
