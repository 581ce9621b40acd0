"""Tests for JSON task-file loading and saving.

Malformed task files must raise a configuration error instead of silently
running nothing.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from treecopy import config
from treecopy.copy_model import ConflictPolicy, CopyTask, LogLevel
from treecopy.tasks import TaskConfigError


class TaskFileTests(unittest.TestCase):
    def test_saved_tasks_load_back_from_default_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "tasks.json"
            tasks = [
                CopyTask(
                    source=(Path("src/report"), Path("src/fonts")),
                    destination=Path("dist"),
                    max_depth=2,
                    conflict_policy=ConflictPolicy.RENAME,
                    log_level=LogLevel.BRIEF,
                )
            ]
            with mock.patch("treecopy.config.CONFIG_PATH", config_path):
                saved_to = config.save_task_file(tasks)
                loaded = config.load_tasks()

            self.assertEqual(saved_to, config_path)
            self.assertTrue(config_path.read_text(encoding="utf-8").endswith("\n"))
            self.assertEqual(loaded, tasks)

    def test_top_level_list_is_accepted(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "tasks.json"
            config_path.write_text(
                json.dumps([{"src": "./test/src/test/", "dest": "./dist/report/", "depth": 2}]),
                encoding="utf-8",
            )

            loaded = config.load_tasks(config_path)

            self.assertEqual(len(loaded), 1)
            self.assertEqual(loaded[0].max_depth, 2)
            self.assertEqual(loaded[0].destination, Path("dist/report"))

    def test_broken_task_files_raise(self) -> None:
        contents = {
            "malformed": "{not json",
            "wrong_shape": json.dumps({"tasks": "nope"}),
            "scalar_entry": json.dumps([1]),
            "missing_dest": json.dumps([{"src": "a"}]),
        }
        with tempfile.TemporaryDirectory() as tmp:
            for name, text in contents.items():
                config_path = Path(tmp) / f"{name}.json"
                config_path.write_text(text, encoding="utf-8")
                with self.subTest(name=name):
                    with self.assertRaises(TaskConfigError):
                        config.load_tasks(config_path)

            with self.assertRaises(TaskConfigError):
                config.load_task_file(Path(tmp) / "absent.json")


if __name__ == "__main__":
    unittest.main()
