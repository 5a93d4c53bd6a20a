"""Repository preview dispatch tests.

git and pager subprocesses are faked so the fallback chain can be checked
independent of which tools the machine has.
"""

from __future__ import annotations

import subprocess
import unittest
from pathlib import Path
from unittest import mock

from umm.git.preview import branch_name, preview_line, stash_ref
from umm.tools import DiffPager

REPO = Path("/repo")


def _completed(args, returncode=0, stdout=""):
    return subprocess.CompletedProcess(args, returncode, stdout=stdout)


class PreviewDispatchTests(unittest.TestCase):
    def _preview(self, line: str, pager: DiffPager, git_stdout: str = "diff text\n", git_rc: int = 0):
        calls: list[list[str]] = []

        def fake_run_git(repo, args, timeout_seconds=10.0):
            calls.append(args)
            return _completed(args, git_rc, git_stdout)

        pager_run = mock.Mock(side_effect=lambda cmd, **kw: _completed(cmd, 0, "RENDERED:" + kw["input"]))
        with mock.patch("umm.git.preview.run_git", side_effect=fake_run_git), mock.patch(
            "umm.git.preview.subprocess.run", pager_run
        ):
            text = preview_line(REPO, line, pager)
        return text, calls, pager_run

    def test_plain_commit_preview_uses_stat_summary(self) -> None:
        text, calls, pager_run = self._preview("commit:  abc123 fix bug", DiffPager.PLAIN)
        self.assertEqual(calls, [["show", "--color=always", "--stat", "abc123"]])
        self.assertEqual(text, "diff text\n")
        pager_run.assert_not_called()

    def test_bat_commit_preview_uses_full_patch_through_pager(self) -> None:
        text, calls, pager_run = self._preview("commit:  abc123 fix bug", DiffPager.BAT)
        self.assertEqual(calls, [["show", "--color=always", "abc123"]])
        self.assertEqual(text, "RENDERED:diff text\n")
        self.assertEqual(pager_run.call_args.args[0][:2], ["bat", "--style=numbers,changes"])

    def test_delta_disables_git_color(self) -> None:
        _text, calls, pager_run = self._preview("tag:     v1.0 release", DiffPager.DELTA)
        self.assertEqual(calls, [["show", "--color=never", "v1.0"]])
        self.assertEqual(pager_run.call_args.args[0], ["delta"])

    def test_form_does_not_depend_on_object_type(self) -> None:
        for line in ("commit:  abc123 x", "tag:     v1 x", "reflog:  HEAD@{1} x"):
            with self.subTest(line=line):
                _text, calls, _pager = self._preview(line, DiffPager.PLAIN)
                self.assertIn("--stat", calls[0])
                _text, calls, _pager = self._preview(line, DiffPager.BAT)
                self.assertNotIn("--stat", calls[0])

    def test_branch_preview_shows_recent_commits(self) -> None:
        text, calls, _pager = self._preview("branch:  * main", DiffPager.DELTA, git_stdout="abc one\n")
        self.assertEqual(calls, [["log", "--oneline", "--color=always", "-10", "main"]])
        self.assertTrue(text.startswith("Recent commits on branch: main\n"))
        self.assertTrue(text.endswith("abc one\n"))

    def test_stash_preview_is_always_full_patch(self) -> None:
        text, calls, _pager = self._preview("stash:   stash@{2}: WIP on main: abc", DiffPager.PLAIN)
        self.assertEqual(calls, [["stash", "show", "-p", "--color=always", "stash@{2}"]])
        self.assertEqual(text, "diff text\n")

    def test_unresolvable_object_yields_message(self) -> None:
        text, _calls, _pager = self._preview("commit:  deadbeef gone", DiffPager.BAT, git_rc=128)
        self.assertEqual(text, "Error: Could not show commit deadbeef\n")

    def test_unknown_type(self) -> None:
        text, calls, _pager = self._preview("blob:    x", DiffPager.PLAIN)
        self.assertEqual(text, "Unknown type: blob\n")
        self.assertEqual(calls, [])

    def test_pager_failure_passes_raw_text_through(self) -> None:
        with mock.patch(
            "umm.git.preview.run_git", return_value=_completed(["show"], 0, "raw\n")
        ), mock.patch("umm.git.preview.subprocess.run", side_effect=OSError("gone")):
            self.assertEqual(preview_line(REPO, "commit:  abc x", DiffPager.DELTA), "raw\n")


class TokenExtractionTests(unittest.TestCase):
    def test_branch_name_strips_current_marker(self) -> None:
        self.assertEqual(branch_name("* main"), "main")
        self.assertEqual(branch_name("  remotes/origin/main"), "remotes/origin/main")

    def test_stash_ref(self) -> None:
        self.assertEqual(stash_ref("stash@{12}: On main: wip"), "stash@{12}")
        self.assertEqual(stash_ref("nothing"), "")


if __name__ == "__main__":
    unittest.main()
