"""Explorer session behavior driven through key tokens."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirpicker.file_tree_model import SelectionState
from dirpicker.runtime import ExplorerConfig, ExplorerSession
from dirpicker.runtime.app import NO_FILES_SELECTED, TITLE


def _touch(path: Path, data: bytes = b"text\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


class ExplorerSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        base = Path(self._tmp.name).resolve()
        self.root = base / "project"
        self.out_dir = base / "out"
        self.out_dir.mkdir()
        _touch(self.root / "alpha" / "one.txt", b"first file\n")
        _touch(self.root / "alpha" / "pic.png", b"\x89PNG\r\n\x1a\n\x00\x00")
        _touch(self.root / "alpha" / "two.txt", b"second file\n")
        _touch(self.root / "node_modules" / "pkg.json", b"{}\n")
        _touch(self.root / "readme.md", b"# readme\n")
        self.now = 100.0

    def _session(self, **config_overrides) -> ExplorerSession:
        config = ExplorerConfig(
            selection_filename=str(self.out_dir / "selected.txt"),
            content_filename=str(self.out_dir / "contents.txt"),
            **config_overrides,
        )
        return ExplorerSession.open(self.root, config, no_color=True, clock=lambda: self.now)

    def _paths(self, session: ExplorerSession) -> list[Path]:
        return [row.path for row in session.viewport.rows]

    def test_initial_rows_and_navigation(self) -> None:
        session = self._session()
        self.assertEqual(
            self._paths(session),
            [
                self.root,
                self.root / "alpha",
                self.root / "node_modules",
                self.root / "node_modules" / "...",
                self.root / "readme.md",
            ],
        )

        self.assertTrue(session.handle_key("DOWN"))
        self.assertTrue(session.handle_key("J"))
        self.assertEqual(session.viewport.cursor, 2)
        session.handle_key("END")
        self.assertEqual(session.viewport.cursor, 4)
        self.assertFalse(session.handle_key("DOWN"))
        session.handle_key("HOME")
        self.assertEqual(session.viewport.cursor, 0)
        self.assertFalse(session.handle_key("UP"))

    def test_root_cannot_be_collapsed(self) -> None:
        session = self._session()
        self.assertFalse(session.handle_key("ENTER"))
        self.assertFalse(session.handle_key("LEFT"))
        self.assertEqual(len(session.viewport), 5)

    def test_enter_toggles_directory(self) -> None:
        session = self._session()
        session.handle_key("DOWN")
        session.handle_key("ENTER")
        self.assertIn(self.root / "alpha" / "one.txt", self._paths(session))
        session.handle_key("ENTER")
        self.assertNotIn(self.root / "alpha" / "one.txt", self._paths(session))
        self.assertEqual(session.viewport.current().path, self.root / "alpha")

    def test_left_on_child_jumps_to_parent(self) -> None:
        session = self._session()
        session.handle_key("DOWN")
        session.handle_key("RIGHT")
        session.handle_key("DOWN")
        self.assertEqual(session.viewport.current().path, self.root / "alpha" / "one.txt")

        session.handle_key("LEFT")

        self.assertEqual(session.viewport.current().path, self.root / "alpha")

    def test_placeholder_expand_scans_deferred_directory(self) -> None:
        session = self._session()
        on_slow_load = mock.Mock()
        session.on_slow_load = on_slow_load
        for _ in range(3):
            session.handle_key("DOWN")
        self.assertTrue(session.viewport.current().is_placeholder)

        session.handle_key("ENTER")

        on_slow_load.assert_called_once_with(self.root / "node_modules")
        self.assertIn(self.root / "node_modules" / "pkg.json", self._paths(session))
        self.assertFalse(any(row.is_placeholder for row in session.viewport.rows))

    def test_left_on_placeholder_moves_to_its_directory(self) -> None:
        session = self._session()
        for _ in range(3):
            session.handle_key("DOWN")

        session.handle_key("LEFT")

        self.assertEqual(session.viewport.current().path, self.root / "node_modules")

    def test_space_selects_and_s_saves_selection(self) -> None:
        session = self._session()
        session.handle_key("DOWN")
        session.handle_key(" ")

        self.assertIs(session.model.lookup(self.root / "alpha").selection, SelectionState.FULL)
        self.assertIs(session.model.root.selection, SelectionState.PARTIAL)
        self.assertEqual(session.render(24, 120)[-1], "3 files selected")

        session.handle_key("S")

        saved = (self.out_dir / "selected.txt").read_text(encoding="utf-8").splitlines()
        self.assertEqual(
            saved,
            [
                str(self.root / "alpha"),
                str(self.root / "alpha" / "one.txt"),
                str(self.root / "alpha" / "pic.png"),
                str(self.root / "alpha" / "two.txt"),
            ],
        )
        self.assertIn("Selection saved", session.state.status_message)
        self.assertFalse(session.state.status_is_error)

    def test_redraws_reuse_cached_selected_count(self) -> None:
        session = self._session()
        session.handle_key("END")
        session.handle_key(" ")

        with mock.patch.object(session.selection, "selected_count") as selected_count:
            for _ in range(3):
                self.assertEqual(session.render(24, 120)[-1], "1 file selected")

        selected_count.assert_not_called()

    def test_count_follows_files_loaded_under_selected_deferred_directory(self) -> None:
        session = self._session()
        session.handle_key("DOWN")
        session.handle_key("DOWN")
        session.handle_key(" ")
        self.assertEqual(session.render(24, 120)[-1], "0 files selected")

        session.handle_key("ENTER")

        self.assertIs(session.model.lookup(self.root / "node_modules" / "pkg.json").selection, SelectionState.FULL)
        self.assertEqual(session.render(24, 120)[-1], "1 file selected")

    def test_save_selection_write_error_goes_to_status(self) -> None:
        session = ExplorerSession.open(
            self.root,
            ExplorerConfig(selection_filename=str(self.out_dir)),
            no_color=True,
            clock=lambda: self.now,
        )

        with self.assertLogs("dirpicker.export", level="WARNING"):
            session.handle_key("s")

        self.assertTrue(session.state.status_is_error)
        self.assertTrue(session.state.status_message.startswith("Error saving selection"))

    def test_status_message_expires(self) -> None:
        session = self._session()
        session.set_status("hello")
        session.expire_status(self.now + 1)
        self.assertEqual(session.state.status_message, "hello")
        session.expire_status(self.now + 3)
        self.assertEqual(session.state.status_message, "")

    def test_list_with_nothing_selected_shows_hint(self) -> None:
        session = self._session()
        session.handle_key("l")

        self.assertEqual(session.state.mode, "message")
        self.assertEqual(session.state.message_lines, [NO_FILES_SELECTED])
        session.handle_key("x")
        self.assertEqual(session.state.mode, "tree")

    def test_list_selected_files_is_numbered(self) -> None:
        session = self._session()
        session.handle_key("END")
        session.handle_key(" ")
        session.handle_key("l")

        lines = session.render(24, 200)

        self.assertEqual(lines[0], "Selected Files")
        self.assertIn(f"1. {self.root / 'readme.md'}", lines)
        self.assertIn("Total: 1 file(s) selected", lines)

    def test_content_menu_without_selection_shows_hint(self) -> None:
        session = self._session()
        session.handle_key("c")
        self.assertEqual(session.state.mode, "message")
        self.assertEqual(session.state.message_lines, [NO_FILES_SELECTED])

    def test_content_menu_escape_cancels(self) -> None:
        session = self._session()
        session.handle_key("END")
        session.handle_key(" ")
        session.handle_key("c")
        self.assertEqual(session.render(24, 80)[0], "View Content Options")

        session.handle_key("ESC")

        self.assertEqual(session.state.mode, "tree")

    def test_export_prompt_writes_content_file(self) -> None:
        session = self._session()
        session.handle_key("DOWN")
        session.handle_key(" ")
        session.handle_key("c")
        session.handle_key("2")
        self.assertEqual(session.state.mode, "prompt")
        self.assertEqual(session.state.prompt_text, str(self.out_dir / "contents.txt"))

        target = self.out_dir / "custom.txt"
        session.handle_key("CTRL_U")
        for ch in str(target):
            session.handle_key(ch)
        session.handle_key("ENTER")

        self.assertEqual(session.state.mode, "tree")
        text = target.read_text(encoding="utf-8")
        self.assertIn(f"FILE: {self.root / 'alpha' / 'one.txt'}", text)
        self.assertIn("second file\n", text)
        self.assertNotIn("pic.png", text)
        self.assertIn("Skipped 1 binary file(s).", session.state.status_message)

    def test_prompt_backspace_and_escape(self) -> None:
        session = self._session()
        session.handle_key("END")
        session.handle_key(" ")
        session.handle_key("c")
        session.handle_key("2")
        session.handle_key("CTRL_U")
        session.handle_key("a")
        session.handle_key("b")
        session.handle_key("BACKSPACE")
        self.assertEqual(session.state.prompt_text, "a")
        self.assertTrue(session.render(24, 80)[-1].endswith("a_"))

        session.handle_key("ESC")

        self.assertEqual(session.state.mode, "tree")
        self.assertFalse((self.out_dir / "contents.txt").exists())

    def test_prompt_keeps_typed_letter_case(self) -> None:
        session = self._session()
        session.handle_key("END")
        session.handle_key(" ")
        session.handle_key("c")
        session.handle_key("2")
        session.handle_key("CTRL_U")

        for key in ("S", "Q", "x"):
            self.assertTrue(session.handle_key(key))

        self.assertEqual(session.state.prompt_text, "SQx")
        self.assertEqual(session.state.mode, "prompt")
        self.assertFalse(session.state.quit_requested)
        self.assertFalse(session.handle_key("TAB"))

    def test_message_scrolls_then_any_other_key_closes(self) -> None:
        session = self._session()
        session._show_message("Selected Files", [f"line {idx}" for idx in range(30)])

        self.assertFalse(session.handle_key("UP", rows=10))
        self.assertTrue(session.handle_key("DOWN", rows=10))
        self.assertTrue(session.handle_key("PGDN", rows=10))
        self.assertEqual(session.state.message_start, 7)
        self.assertTrue(session.handle_key("x", rows=10))
        self.assertEqual(session.state.mode, "tree")

    def test_pager_shows_binary_warning_then_files(self) -> None:
        session = self._session()
        session.handle_key("DOWN")
        session.handle_key(" ")
        session.handle_key("c")
        session.handle_key("1")

        self.assertEqual(session.state.mode, "pager")
        self.assertEqual(session.render(24, 200)[0], "Skipping 1 binary file(s):")

        session.handle_key("x")
        lines = session.render(24, 200)
        self.assertEqual(lines[1], f"FILE: {self.root / 'alpha' / 'one.txt'} (1/2)")

        session.handle_key("n")
        session.handle_key("n")
        self.assertEqual(session.state.mode, "tree")
        self.assertIsNone(session.state.pager)

    def test_quit_and_debug_toggle(self) -> None:
        session = self._session()
        session.handle_key("d")
        self.assertTrue(session.state.show_debug)
        self.assertTrue(any(line.startswith("DEBUG INFO: Cursor Position") for line in session.render(40, 120)))

        session.handle_key("Q")

        self.assertTrue(session.state.quit_requested)

    def test_render_tree_frame(self) -> None:
        session = self._session()
        lines = session.render(24, 120)
        self.assertEqual(lines[0], TITLE)
        self.assertIn("› [ ] ▾ project/", lines)
        self.assertEqual(lines[-1], "0 files selected")

    def test_theme_cycle_disabled_without_color(self) -> None:
        session = self._session()
        with mock.patch("dirpicker.runtime.app.save_theme_name") as save_theme:
            self.assertFalse(session.handle_key("t"))
        save_theme.assert_not_called()

    def test_theme_cycle_persists_choice(self) -> None:
        config = ExplorerConfig(theme="default")
        session = ExplorerSession.open(self.root, config, clock=lambda: self.now)
        with mock.patch("dirpicker.runtime.app.save_theme_name") as save_theme:
            self.assertTrue(session.handle_key("t"))
        save_theme.assert_called_once_with("ocean")
        self.assertEqual(session.theme.name, "ocean")

    def test_unbuilt_model_is_rejected(self) -> None:
        from dirpicker.file_tree_model import TreeModel

        with self.assertRaises(ValueError):
            ExplorerSession(TreeModel())


if __name__ == "__main__":
    unittest.main()
