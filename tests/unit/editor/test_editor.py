"""Editor argument convention and launch tests."""

from __future__ import annotations

import subprocess
import unittest
from pathlib import Path
from unittest import mock

from umm.editor import EDITOR_CONVENTIONS, GOTO, build_editor_args, build_editor_command, launch_editor
from umm.errors import ConfigurationError
from umm.selection import ResolvedTarget


class BuildEditorArgsTests(unittest.TestCase):
    def test_plus_line_convention(self) -> None:
        self.assertEqual(build_editor_args("vim", "/a.txt", 42), ["+42", "/a.txt"])

    def test_goto_convention(self) -> None:
        self.assertEqual(build_editor_args("code", "/a.txt", 42), ["--goto", "/a.txt:42"])

    def test_missing_line_omits_jump(self) -> None:
        self.assertEqual(build_editor_args("vim", "/a.txt", None), ["/a.txt"])
        self.assertEqual(build_editor_args("code", "/a.txt", None), ["/a.txt"])

    def test_path_suffix_convention(self) -> None:
        self.assertEqual(build_editor_args("subl", "/a.txt", 3), ["/a.txt:3"])

    def test_lookup_uses_base_name_of_full_path(self) -> None:
        self.assertEqual(build_editor_args("/usr/local/bin/code", "/a.txt", 1), ["--goto", "/a.txt:1"])

    def test_lookup_is_case_sensitive_and_defaults_to_plus_line(self) -> None:
        self.assertEqual(build_editor_args("Code", "/a.txt", 9), ["+9", "/a.txt"])
        self.assertEqual(build_editor_args("kak", "/a.txt", 9), ["+9", "/a.txt"])

    def test_editor_with_flags_uses_program_name(self) -> None:
        self.assertEqual(build_editor_args("code -w", "/a.txt", 5), ["--goto", "/a.txt:5"])

    def test_table_is_extensible(self) -> None:
        with mock.patch.dict(EDITOR_CONVENTIONS, {"zed": GOTO}):
            self.assertEqual(build_editor_args("zed", "/a.txt", 2), ["--goto", "/a.txt:2"])

    def test_unbalanced_quote_is_a_configuration_error(self) -> None:
        with self.assertRaises(ConfigurationError):
            build_editor_args("vim '", "/a.txt", 3)


class EditorCommandTests(unittest.TestCase):
    def test_secondary_targets_follow_primary_without_line(self) -> None:
        targets = [ResolvedTarget(Path("/a.txt"), 10), ResolvedTarget(Path("/b.txt"))]
        self.assertEqual(build_editor_command("nvim", targets), ["nvim", "+10", "/a.txt", "/b.txt"])

    def test_launch_runs_editor_and_returns_status(self) -> None:
        run = mock.Mock(return_value=subprocess.CompletedProcess(args=[], returncode=0))
        with self.assertLogs("umm.editor", level="INFO") as logs:
            status = launch_editor("code -w", [ResolvedTarget(Path("/a.txt"), 3)], run=run)
        self.assertEqual(status, 0)
        run.assert_called_once_with(["code", "-w", "--goto", "/a.txt:3"], check=False)
        self.assertIn("Opening /a.txt in code -w", logs.output[0])

    def test_launch_reports_file_count_for_multiple_targets(self) -> None:
        run = mock.Mock(return_value=subprocess.CompletedProcess(args=[], returncode=0))
        targets = [ResolvedTarget(Path("/a.txt"), 1), ResolvedTarget(Path("/b.txt"))]
        with self.assertLogs("umm.editor", level="INFO") as logs:
            launch_editor("vim", targets, run=run)
        self.assertIn("Opening 2 files in vim", logs.output[0])


if __name__ == "__main__":
    unittest.main()
