"""
CLI 单元测试
"""

import unittest
import io
import json
import tempfile
from contextlib import redirect_stdout
from pathlib import Path

from trace_tree_tool.cli.main import main
from trace_tree_tool.cli.validators import (
    parse_output_formats,
    parse_name_patterns,
    validate_thread_selection,
    validate_action_names,
)
from trace_tree_tool.cli.file_utils import parse_file_paths


TRACE_EVENTS = [
    {"name": "RunTask", "cat": "toplevel", "ph": "X", "pid": 1, "tid": 1, "ts": 0, "dur": 100},
    {"name": "FunctionCall", "cat": "v8", "ph": "X", "pid": 1, "tid": 1, "ts": 10, "dur": 50},
    {"name": "Compile", "cat": "v8", "ph": "X", "pid": 1, "tid": 1, "ts": 20, "dur": 10},
    {"name": "Layout", "cat": "blink", "ph": "X", "pid": 1, "tid": 1, "ts": 70, "dur": 20},
    {"name": "Idle", "cat": "toplevel", "ph": "X", "pid": 1, "tid": 9, "ts": 0, "dur": 5},
    {"name": "Fetch", "cat": "net", "ph": "b", "pid": 1, "tid": 1, "ts": 5, "id": "1"},
    {"name": "Fetch", "cat": "net", "ph": "e", "pid": 1, "tid": 1, "ts": 45, "id": "1"},
]


class TestValidators(unittest.TestCase):
    """测试参数验证"""

    def test_parse_output_formats(self):
        self.assertEqual(parse_output_formats("json, CSV"), ["json", "csv"])
        with self.assertRaises(ValueError):
            parse_output_formats("")
        with self.assertRaises(ValueError):
            parse_output_formats("json,pdf")
        with self.assertRaises(ValueError):
            parse_output_formats("json,json")

    def test_parse_name_patterns(self):
        self.assertEqual(parse_name_patterns(" a, ,b "), ["a", "b"])
        self.assertEqual(parse_name_patterns(None), [])

    def test_validate_thread_selection(self):
        self.assertIsNone(validate_thread_selection(None, None))
        self.assertEqual(validate_thread_selection(1, 2), (1, 2))
        with self.assertRaises(ValueError):
            validate_thread_selection(1, None)

    def test_validate_action_names(self):
        validate_action_names(["a"], ["b"])
        with self.assertRaises(ValueError):
            validate_action_names(["a", "b"], ["b"])


class TestCommands(unittest.TestCase):
    """测试命令执行"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir_path = Path(self.temp_dir.name)
        self.trace_file = self.dir_path / "trace.json"
        with open(self.trace_file, 'w', encoding='utf-8') as f:
            json.dump({"traceEvents": TRACE_EVENTS}, f)
        self.output_dir = self.dir_path / "out"

    def tearDown(self):
        self.temp_dir.cleanup()

    def _run(self, argv):
        with redirect_stdout(io.StringIO()):
            return main(argv)

    def _load_output(self, name):
        with open(self.output_dir / name, encoding='utf-8') as f:
            return json.load(f)

    def test_parse_file_paths(self):
        self.assertEqual(parse_file_paths(str(self.trace_file)), [str(self.trace_file)])
        self.assertEqual(parse_file_paths(str(self.dir_path / "*.json")), [str(self.trace_file)])
        with self.assertRaises(ValueError):
            parse_file_paths(str(self.dir_path / "missing.json"))

    def test_visible_without_actions(self):
        code = self._run(["visible", str(self.trace_file), "--output-format", "json",
                          "--output-dir", str(self.output_dir)])
        self.assertEqual(code, 0)
        rows = self._load_output("visible_1_1.json")
        self.assertEqual([row['name'] for row in rows], ["RunTask", "FunctionCall", "Compile", "Layout"])
        self.assertEqual([row['depth'] for row in rows], [0, 1, 2, 1])

    def test_visible_with_actions(self):
        code = self._run(["visible", str(self.trace_file), "--pid", "1", "--tid", "1",
                          "--collapse", "FunctionCall", "--merge", "RunTask",
                          "--output-format", "json", "--output-dir", str(self.output_dir)])
        self.assertEqual(code, 0)
        rows = self._load_output("visible_1_1.json")
        self.assertEqual([row['name'] for row in rows], ["FunctionCall", "Layout"])

    def test_visible_unknown_thread(self):
        code = self._run(["visible", str(self.trace_file), "--pid", "5", "--tid", "5",
                          "--output-dir", str(self.output_dir)])
        self.assertEqual(code, 1)

    def test_visible_invalid_arguments(self):
        self.assertEqual(self._run(["visible", str(self.trace_file), "--pid", "1"]), 1)
        self.assertEqual(self._run(["visible", str(self.trace_file), "--output-format", "pdf"]), 1)

    def test_async(self):
        code = self._run(["async", str(self.trace_file), "--output-format", "json",
                          "--output-dir", str(self.output_dir)])
        self.assertEqual(code, 0)
        rows = self._load_output("async_events.json")
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]['ts'], 5)
        self.assertEqual(rows[0]['dur'], 40)

    def test_merge(self):
        second_file = self.dir_path / "second.json"
        with open(second_file, 'w', encoding='utf-8') as f:
            json.dump([{"name": "GPUTask", "cat": "gpu", "ph": "X", "pid": 2, "tid": 1, "ts": 15, "dur": 1}], f)

        code = self._run(["merge", str(self.trace_file), str(second_file), "--output-format", "json",
                          "--output-dir", str(self.output_dir)])
        self.assertEqual(code, 0)
        rows = self._load_output("merged_events.json")
        self.assertEqual(len(rows), len(TRACE_EVENTS) + 1)
        timestamps = [row['ts'] for row in rows]
        self.assertEqual(timestamps, sorted(timestamps))
        self.assertEqual(rows[[row['name'] for row in rows].index("GPUTask") - 1]['name'], "FunctionCall")

    def test_visible_null_trace_events(self):
        broken_file = self.dir_path / "null_events.json"
        broken_file.write_text('{"traceEvents": null}', encoding='utf-8')
        code = self._run(["visible", str(broken_file), "--output-dir", str(self.output_dir)])
        self.assertEqual(code, 1)

    def test_no_command(self):
        self.assertEqual(self._run([]), 1)


if __name__ == '__main__':
    unittest.main()
