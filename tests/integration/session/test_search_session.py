"""Integration tests for ``searchpane.session`` wired through ``build_search_app``.

Drives typed patterns, debounced searches, keyboard navigation, clicks, and
disclosure changes, and checks the editor, tabs, and document store react.
"""

from __future__ import annotations

import unittest

from searchpane.results import VISIBILITY_CLOSED, VISIBILITY_FLATTENED, FileResult, Focus, MatchRecord
from searchpane.runtime import build_search_app, replay_keys
from searchpane.session import SearchSession
from searchpane.workspace import DocumentStore, WorkspaceFile

A_TEXT = "import x\n// TODO first\nconst y = 2\n// TODO second\n"
B_TEXT = "no markers here\n"
C_TEXT = "\n".join(f"row {idx} TODO" for idx in range(1, 41)) + "\n"


class _FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _app(corpus=None, **kwargs):
    clock = _FakeClock()
    if corpus is None:
        corpus = {
            "a.ts": WorkspaceFile(name="a.ts", text=A_TEXT),
            "b.ts": WorkspaceFile(name="b.ts", text=B_TEXT),
            "c.ts": WorkspaceFile(name="c.ts", text=C_TEXT),
        }
    app = build_search_app(corpus, delay_seconds=2.0, monotonic=clock, **kwargs)
    return app, clock


class TypingAndDebounceTests(unittest.TestCase):
    def test_typed_pattern_searches_once_after_quiet_period(self) -> None:
        calls: list[str] = []

        def search(pattern, corpus):
            calls.append(pattern)
            return {}

        app, clock = _app(search_content=search)
        session = app.session
        for key in "TODO":
            session.handle_key(key)
            clock.advance(0.5)
            session.poll()
        self.assertTrue(session.searching)
        self.assertEqual(session.status_text(), "Searching...")

        clock.advance(2.0)
        self.assertTrue(session.poll())
        self.assertEqual(calls, ["TODO"])
        self.assertFalse(session.searching)
        self.assertEqual(session.status_text(), "No Results")

    def test_blank_pattern_never_searches(self) -> None:
        calls: list[str] = []
        app, clock = _app(search_content=lambda p, c: calls.append(p) or {})
        replay_keys(app, [" ", " ", "BACKSPACE"])
        clock.advance(10.0)

        self.assertFalse(app.session.poll())
        self.assertFalse(app.session.searching)
        self.assertEqual(calls, [])

    def test_enter_in_input_runs_pending_search(self) -> None:
        app, _clock = _app()
        replay_keys(app, ["T", "O", "D", "O", "ENTER_CR"])

        self.assertEqual(list(app.session.results), ["a.ts", "c.ts"])
        self.assertEqual(app.session.results_pattern, "TODO")

    def test_ctrl_u_clears_pattern_and_cancels_search(self) -> None:
        app, clock = _app()
        replay_keys(app, ["x", "CTRL_U"])
        clock.advance(5.0)

        self.assertEqual(app.session.pattern, "")
        self.assertFalse(app.session.poll())

    def test_failed_search_keeps_previous_results_and_reports_error(self) -> None:
        app, _clock = _app()
        session = app.session
        session.on_pattern_change("TODO")
        session.run_pending_search()
        previous = session.results

        def broken(pattern, corpus):
            raise OSError("disk gone")

        session.search_content = broken
        session.on_pattern_change("zzz")
        with self.assertLogs("searchpane.session", level="WARNING"):
            session.run_pending_search()

        self.assertIs(session.results, previous)
        self.assertEqual(session.last_error, "disk gone")
        self.assertFalse(session.searching)

    def test_error_status_shows_when_nothing_visible(self) -> None:
        app, _clock = _app(search_content=lambda p, c: (_ for _ in ()).throw(RuntimeError("bad index")))
        app.session.on_pattern_change("TODO")
        with self.assertLogs("searchpane.session", level="WARNING"):
            app.session.run_pending_search()

        self.assertEqual(app.session.status_text(), "Search failed: bad index")


class SnapshotReplacementTests(unittest.TestCase):
    def test_new_search_clears_focus_and_disclosure_state(self) -> None:
        app, _clock = _app()
        session = app.session
        session.on_pattern_change("TODO")
        session.run_pending_search()
        replay_keys(app, ["TAB", "DOWN"])
        session.set_line_visibility("a.ts", 2)
        session.set_file_visibility("c.ts", VISIBILITY_CLOSED)
        self.assertEqual(app.store.hidden_lines, {"a.ts": {2}})

        session.on_pattern_change("TODO ")
        session.run_pending_search()

        self.assertIsNone(session.focus)
        self.assertEqual(app.store.file_visibility, {})
        self.assertEqual(app.store.hidden_lines, {})
        self.assertEqual(app.container.scroll_top, 0)

    def test_replace_results_forces_every_file_open(self) -> None:
        app, _clock = _app()
        flattened = FileResult(
            file_id="x",
            name="x",
            matches=(MatchRecord(line=1, index=0, text="TODO"),),
            visibility=VISIBILITY_FLATTENED,
        )
        app.session.replace_results({"x": flattened}, "TODO")

        self.assertEqual(app.session.results["x"].visibility, "open")


class KeyboardNavigationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app, _clock = _app()
        self.session = self.app.session
        self.session.on_pattern_change("TODO")
        self.session.run_pending_search()

    def test_tab_from_input_focuses_first_heading(self) -> None:
        replay_keys(self.app, ["TAB"])

        self.assertFalse(self.session.input_focused)
        self.assertEqual(self.session.focus, Focus(0))

    def test_enter_on_match_opens_editor_and_jumps(self) -> None:
        replay_keys(self.app, ["TAB", "DOWN", "DOWN", "ENTER_CR"])

        self.assertEqual(self.session.focus, Focus(0, 1))
        self.assertEqual(self.app.tabs.active_file_id, "a.ts")
        surface = self.app.editors.get("a.ts")
        self.assertIsNotNone(surface)
        start = A_TEXT.index("// TODO second") + 3
        self.assertEqual((surface.selection.start, surface.selection.end), (start, start + 4))

    def test_space_on_heading_activates_without_selection(self) -> None:
        replay_keys(self.app, ["TAB", " "])

        self.assertEqual(self.app.tabs.active_file_id, "a.ts")
        self.assertIsNone(self.app.editors.get("a.ts").selection)

    def test_left_flattens_and_right_reopens(self) -> None:
        replay_keys(self.app, ["TAB", "LEFT"])
        self.assertEqual(self.session.results["a.ts"].visibility, VISIBILITY_FLATTENED)
        self.assertEqual(len(self.session.results["a.ts"].matches), 2)
        self.assertEqual(self.app.store.file_visibility["a.ts"], (VISIBILITY_FLATTENED, "a.ts"))

        replay_keys(self.app, ["DOWN"])
        self.assertEqual(self.session.focus, Focus(1))

        replay_keys(self.app, ["UP", "RIGHT"])
        self.assertEqual(self.session.results["a.ts"].visibility, "open")
        self.assertEqual(self.session.focus, Focus(0))
        replay_keys(self.app, ["RIGHT"])
        self.assertEqual(self.session.focus, Focus(0, 0))

    def test_escape_returns_to_input(self) -> None:
        replay_keys(self.app, ["TAB", "ESC", "!"])

        self.assertTrue(self.session.input_focused)
        self.assertEqual(self.session.pattern, "TODO!")

    def test_focus_search_shortcut(self) -> None:
        replay_keys(self.app, ["TAB", "DOWN", "CTRL_F"])
        self.assertTrue(self.session.input_focused)

    def test_close_tab_key_evicts_editor_surface(self) -> None:
        replay_keys(self.app, ["TAB", "ENTER_CR", "DOWN", "DOWN", "DOWN", "ENTER_CR"])
        self.assertEqual(self.app.tabs.tab_list, ("a.ts", "c.ts"))
        self.assertIsNotNone(self.app.editors.get("c.ts"))

        replay_keys(self.app, ["CTRL_W"])

        self.assertEqual(self.app.tabs.tab_list, ("a.ts",))
        self.assertEqual(self.app.tabs.active_file_id, "a.ts")
        self.assertIsNone(self.app.editors.get("c.ts"))
        self.assertIsNotNone(self.app.editors.get("a.ts"))
        self.assertEqual(self.session.pattern, "TODO")

        replay_keys(self.app, ["CTRL_W"])
        self.assertIsNone(self.app.tabs.active_file_id)
        self.assertFalse(self.app.handle_key("CTRL_W"))

    def test_keys_are_noops_with_no_results(self) -> None:
        self.session.on_pattern_change("absent")
        self.session.run_pending_search()
        self.session.input_focused = False

        for key in ("TAB", "UP", "DOWN", "LEFT", "RIGHT", "ENTER", " "):
            self.assertFalse(self.session.handle_key(key))
        self.assertIsNone(self.session.focus)
        self.assertIsNone(self.app.tabs.active_file_id)

    def test_viewport_follows_focus_through_long_file(self) -> None:
        self.app.resize(results_rows=5, editor_rows=10)
        replay_keys(self.app, ["TAB", "DOWN", "DOWN", "DOWN"])
        replay_keys(self.app, ["DOWN"] * 10)

        focus = self.session.focus
        row = 3 + 1 + focus.match_index
        top = self.app.container.scroll_top
        self.assertEqual(focus, Focus(1, 9))
        self.assertTrue(top <= row < top + 5)

    def test_viewport_scrolls_to_second_match_on_shared_line(self) -> None:
        text = "".join(f"TODO {idx}\n" for idx in range(1, 5)) + "x\n" * 5 + "TODO TODO\n"
        app, _clock = _app({"a.py": WorkspaceFile(name="a.py", text=text)})
        app.session.on_pattern_change("TODO")
        app.session.run_pending_search()
        app.resize(results_rows=6, editor_rows=10)

        replay_keys(app, ["TAB"] + ["DOWN"] * 6)

        self.assertEqual(app.session.focus, Focus(0, 5))
        top = app.container.scroll_top
        self.assertGreater(top, 0)
        self.assertTrue(top <= 6 < top + 6)


class PointerAndVisibilityTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app, _clock = _app()
        self.session = self.app.session
        self.session.on_pattern_change("TODO")
        self.session.run_pending_search()

    def test_click_heading_focuses_and_activates(self) -> None:
        self.assertTrue(self.session.click_heading(1))
        self.assertEqual(self.session.focus, Focus(1))
        self.assertEqual(self.app.tabs.active_file_id, "c.ts")
        self.assertFalse(self.session.click_heading(5))

    def test_click_match_jumps_to_centered_line(self) -> None:
        self.app.resize(results_rows=10, editor_rows=10)
        self.assertTrue(self.session.click_match(1, 29))

        surface = self.app.editors.get("c.ts")
        line, column = surface.position_of(surface.selection.start)
        self.assertEqual((line, column), (30, C_TEXT.splitlines()[29].index("TODO")))
        self.assertEqual(surface.scroll_top, 29 - 5)

    def test_close_focused_file_moves_focus_to_previous(self) -> None:
        self.session.click_heading(1)
        self.assertTrue(self.session.click_close_file(1))

        self.assertEqual([f.file_id for f in self.session.visible_files()], ["a.ts"])
        self.assertEqual(self.session.focus, Focus(0))
        self.assertEqual(self.app.store.file_visibility["c.ts"], (VISIBILITY_CLOSED, None))
        self.assertEqual(len(self.session.results["c.ts"].matches), 40)

    def test_close_first_file_clears_focus(self) -> None:
        self.session.click_heading(0)
        self.session.click_close_file(0)
        self.assertIsNone(self.session.focus)

    def test_click_close_line_hides_match(self) -> None:
        self.session.click_match(0, 0)
        self.assertTrue(self.session.click_close_line(0, 0))

        shown = [m.line for m in self.session.results["a.ts"].matches if not m.hidden]
        self.assertEqual(shown, [4])
        self.assertEqual(self.session.focus, Focus(0, 0))
        self.assertEqual(self.app.store.hidden_lines, {"a.ts": {2}})

    def test_hiding_missing_line_raises(self) -> None:
        with self.assertRaises(ValueError):
            self.session.set_line_visibility("a.ts", 3)

    def test_set_file_visibility_on_unknown_file_is_rejected(self) -> None:
        self.assertFalse(self.session.set_file_visibility("zzz.ts", VISIBILITY_CLOSED))

    def test_dispose_cancels_pending_search(self) -> None:
        self.session.on_pattern_change("second")
        self.session.dispose()

        self.assertFalse(self.session.run_pending_search())
        self.assertEqual(self.session.results_pattern, "TODO")


class StandaloneSessionTests(unittest.TestCase):
    def test_jump_selects_match_after_form_feed_and_crlf_lines(self) -> None:
        app, _clock = _app(
            {
                "ff.txt": WorkspaceFile(name="ff.txt", text="a\x0cb\nfoo TODO\n"),
                "crlf.txt": WorkspaceFile(name="crlf.txt", text="one\r\ntwo\r\nx TODO y\r\n"),
            }
        )
        session = app.session
        session.on_pattern_change("TODO")
        session.run_pending_search()

        for file_index, file_id in enumerate(["crlf.txt", "ff.txt"]):
            self.assertTrue(session.click_match(file_index, 0))
            surface = app.editors.get(file_id)
            selection = surface.selection
            self.assertEqual(surface.text[selection.start : selection.end], "TODO")

    def test_jump_without_editor_surface_is_silent(self) -> None:
        store = DocumentStore(files={"a.ts": WorkspaceFile(name="a.ts", text=A_TEXT)})
        activated: list[str] = []
        session = SearchSession(store=store, set_active_file_id=activated.append, get_editor=lambda _fid: None)
        session.on_pattern_change("TODO")
        session.run_pending_search()

        self.assertTrue(session.click_match(0, 1))
        self.assertEqual(activated, ["a.ts"])
        self.assertEqual(session.focus, Focus(0, 1))


if __name__ == "__main__":
    unittest.main()
