"""End-to-end tree view tests: load, window, toggle, select and drag.

The text backend raises on any diff that disagrees with the elements it
holds, so every scenario here also checks reconcile consistency.
"""

from __future__ import annotations

import unittest

from lazytree import TreeEvents, TreeLoadError, TreeSettings, TreeView
from lazytree.scene import SceneDiff, TextSceneBackend
from lazytree.ui_theme import PLAIN_THEME

SAMPLE = {"identifier": "A", "children": [{"identifier": "B"}, {"identifier": "C"}]}


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _make_view(
    *,
    show_checkboxes: bool = False,
    events: TreeEvents | None = None,
    clock: FakeClock | None = None,
    height: float = 60,
) -> tuple[TreeView, TextSceneBackend]:
    settings = TreeSettings(show_checkboxes=show_checkboxes)
    backend = TextSceneBackend(row_height=settings.node_height, indent_width=settings.indent_width, theme=PLAIN_THEME)
    view = TreeView(settings, backend, events=events, monotonic=clock or FakeClock())
    view.resize(height)
    return view, backend


def _flat_forest(count: int) -> list[dict[str, object]]:
    return [{"identifier": f"n{idx}"} for idx in range(count)]


class TreeViewLoadTests(unittest.TestCase):
    def test_load_renders_every_row_of_small_tree(self) -> None:
        view, backend = _make_view()

        view.load(SAMPLE)

        self.assertEqual(backend.render_lines(), ["▾ A", "├─· B", "└─· C"])
        self.assertEqual(view.content_height, 60)
        self.assertEqual(backend.content_height, 60)

    def test_update_before_load_is_a_no_op(self) -> None:
        view, backend = _make_view()

        self.assertIsNone(view.update())
        self.assertEqual(backend.elements, {})

    def test_failed_load_keeps_previous_tree(self) -> None:
        view, backend = _make_view()
        view.load(SAMPLE)
        model = view.model

        with self.assertRaises(TreeLoadError):
            view.load({"identifier": "X", "children": [{"identifier": "X"}]})

        self.assertIs(view.model, model)
        self.assertEqual(backend.render_lines(), ["▾ A", "├─· B", "└─· C"])

    def test_reload_releases_rows_of_previous_tree(self) -> None:
        view, backend = _make_view()
        view.load(SAMPLE)

        view.load({"identifier": "A", "children": [{"identifier": "Z"}]})

        self.assertEqual(sorted(backend.elements), ["A", "Z"])
        self.assertEqual(backend.released_count, 2)
        self.assertEqual(backend.render_lines(), ["▾ A", "└─· Z"])

    def test_backend_errors_propagate(self) -> None:
        def failing_backend(_diff: SceneDiff) -> None:
            raise RuntimeError("backend down")

        view = TreeView(TreeSettings(), failing_backend)
        view.resize(60)

        with self.assertRaisesRegex(RuntimeError, "backend down"):
            view.load(SAMPLE)


class TreeViewToggleTests(unittest.TestCase):
    def test_collapse_root_hides_children(self) -> None:
        view, backend = _make_view()
        view.load(SAMPLE)

        view.set_open("A", False)

        self.assertEqual([node.identifier for node in view.visible], ["A"])
        self.assertEqual(backend.render_lines(), ["▸ A"])
        self.assertEqual(backend.released_count, 2)

    def test_expand_restores_children(self) -> None:
        view, backend = _make_view()
        view.load(SAMPLE)
        view.toggle_open("A")

        view.toggle_open("A")

        self.assertEqual(backend.render_lines(), ["▾ A", "├─· B", "└─· C"])

    def test_unchanged_open_state_emits_nothing(self) -> None:
        events = TreeEvents()
        toggled: list[str] = []
        events.after_toggle.subscribe(lambda node: toggled.append(node.identifier))
        view, _backend = _make_view(events=events)
        view.load(SAMPLE)

        view.set_open("A", True)
        view.set_open("A", False)

        self.assertEqual(toggled, ["A"])

    def test_unknown_identifier_raises_key_error(self) -> None:
        view, _backend = _make_view()
        view.load(SAMPLE)

        with self.assertRaises(KeyError):
            view.toggle_open("missing")


class TreeViewWindowTests(unittest.TestCase):
    def test_large_tree_materializes_bounded_window(self) -> None:
        view, backend = _make_view(height=200)
        view.load(_flat_forest(1000))

        for offset in range(0, 20000, 137):
            view.set_scroll(offset)
            self.assertLessEqual(len(backend.elements), 16)
            self.assertEqual(sorted(backend.elements), sorted(view.reconciler.materialized_ids))
            self.assertEqual(backend.created_count - backend.released_count, len(backend.elements))

    def test_small_scroll_is_attribute_only(self) -> None:
        view, backend = _make_view(height=200)
        view.load(_flat_forest(1000))
        view.set_scroll(1000)
        created = backend.created_count

        diff = view.set_scroll(1007)

        self.assertIsNotNone(diff)
        self.assertFalse(diff.structural)  # type: ignore[union-attr]
        self.assertEqual(backend.created_count, created)

    def test_scroll_by_one_row_swaps_one_element(self) -> None:
        view, backend = _make_view(height=200)
        view.load(_flat_forest(1000))
        view.set_scroll(1000)

        diff = view.set_scroll(1020)

        self.assertEqual(diff.exit, ("n45",))  # type: ignore[union-attr]
        self.assertEqual([record.identifier for record in diff.enter], ["n61"])  # type: ignore[union-attr]
        self.assertIn("n61", backend.elements)


class TreeViewSelectionTests(unittest.TestCase):
    def test_checking_child_marks_parent_indeterminate(self) -> None:
        events = TreeEvents()
        changes: list[list[str]] = []
        events.after_selection_change.subscribe(changes.append)
        view, backend = _make_view(show_checkboxes=True, events=events)
        view.load(SAMPLE)

        view.set_checked("B", True)

        model = view.model
        assert model is not None
        self.assertTrue(model.node("A").indeterminate)
        self.assertFalse(model.node("C").indeterminate)
        self.assertEqual(changes, [["B"]])
        self.assertEqual(
            backend.render_lines(),
            ["▾ [-] A (indeterminate)", "├─· [x] B (checked)", "└─· [ ] C"],
        )

    def test_toggle_checked_twice_clears_selection(self) -> None:
        view, _backend = _make_view(show_checkboxes=True)
        view.load(SAMPLE)

        view.toggle_checked("C")
        view.toggle_checked("C")

        self.assertEqual(view.checked_ids(), [])
        model = view.model
        assert model is not None
        self.assertFalse(model.node("A").indeterminate)

    def test_loaded_checked_state_is_settled_on_load(self) -> None:
        view, _backend = _make_view(show_checkboxes=True)

        view.load({"identifier": "A", "children": [{"identifier": "B", "children": [{"identifier": "C", "checked": True}]}]})

        self.assertEqual(view.checked_ids(), ["C"])
        model = view.model
        assert model is not None
        self.assertTrue(model.node("A").indeterminate)
        self.assertTrue(model.node("B").indeterminate)

    def test_selection_requires_checkboxes(self) -> None:
        view, _backend = _make_view()
        view.load(SAMPLE)

        with self.assertRaises(RuntimeError):
            view.set_checked("B", True)


class TreeViewEventTests(unittest.TestCase):
    def test_lifecycle_order_on_load(self) -> None:
        events = TreeEvents()
        seen: list[str] = []
        events.after_load.subscribe(lambda _model: seen.append("load"))
        events.before_update.subscribe(lambda window: seen.append(f"update:{window.start}:{len(window.nodes)}"))
        events.after_node_render.subscribe(lambda record: seen.append(f"render:{record.identifier}"))
        view, _backend = _make_view(events=events)

        view.load(SAMPLE)

        self.assertEqual(seen, ["load", "update:0:3", "render:A", "render:B", "render:C"])

    def test_unsubscribed_handler_is_not_called(self) -> None:
        events = TreeEvents()
        seen: list[object] = []
        unsubscribe = events.after_load.subscribe(seen.append)
        unsubscribe()
        view, _backend = _make_view(events=events)

        view.load(SAMPLE)

        self.assertEqual(seen, [])
        self.assertEqual(len(events.after_load), 0)

    def test_handler_errors_propagate(self) -> None:
        events = TreeEvents()

        def broken(_node: object) -> None:
            raise ValueError("handler failed")

        events.after_toggle.subscribe(broken)
        view, _backend = _make_view(events=events)
        view.load(SAMPLE)

        with self.assertRaises(ValueError):
            view.set_open("A", False)


class TreeViewDragTests(unittest.TestCase):
    def test_drag_moves_edge_and_indicator(self) -> None:
        clock = FakeClock()
        view, backend = _make_view(clock=clock)
        view.load(SAMPLE)

        view.drag_start("B")
        self.assertTrue(view.drag_move(41))

        self.assertEqual(backend.indicator.snapped_row, 2.0)  # type: ignore[union-attr]
        dragged = [edge for edge in backend.edges if edge.target_id == "B"]
        self.assertEqual(dragged[0].target, (16, 41))

        clock.now = 0.01
        self.assertFalse(view.drag_move(30))
        self.assertEqual(backend.indicator.snapped_row, 2.0)  # type: ignore[union-attr]
        clock.now = 0.05
        self.assertTrue(view.poll())
        self.assertEqual(backend.indicator.snapped_row, 1.5)  # type: ignore[union-attr]
        self.assertEqual(backend.render_lines()[2], "─" * backend.width)

        node = view.drag_end()

        self.assertIsNotNone(node)
        self.assertIsNone(backend.indicator)
        restored = [edge for edge in backend.edges if edge.target_id == "B"]
        self.assertEqual(restored[0].target, (16, 20))
        # Dropping leaves the tree order unchanged.
        self.assertEqual([n.identifier for n in view.visible], ["A", "B", "C"])

    def test_drag_move_without_start_does_nothing(self) -> None:
        view, backend = _make_view()
        view.load(SAMPLE)

        self.assertFalse(view.drag_move(10))
        self.assertIsNone(backend.indicator)

    def test_reload_ends_active_drag(self) -> None:
        view, _backend = _make_view()
        view.load(SAMPLE)
        view.drag_start("C")
        model = view.model
        assert model is not None

        view.load(SAMPLE)

        self.assertFalse(model.node("C").is_dragged)
        self.assertFalse(view.drag.active)


if __name__ == "__main__":
    unittest.main()
