"""Windowing bounds and viewport band tests."""

from __future__ import annotations

import unittest

from lazytree.tree_model import TreeNode
from lazytree.viewport import Viewport, compute_window, window_row_count


def _flat(count: int) -> list[TreeNode]:
    return [TreeNode(identifier=str(idx), name=f"node {idx}") for idx in range(count)]


class ComputeWindowTests(unittest.TestCase):
    def test_start_index_is_floor_of_offset_over_row_height(self) -> None:
        nodes = _flat(100)

        self.assertEqual(compute_window(nodes, 0, 200, 20).start, 0)
        self.assertEqual(compute_window(nodes, 19.9, 200, 20).start, 0)
        self.assertEqual(compute_window(nodes, 20, 200, 20).start, 1)
        self.assertEqual(compute_window(nodes, 415, 200, 20).start, 20)

    def test_negative_offset_clamps_to_zero(self) -> None:
        window = compute_window(_flat(10), -500, 100, 20)

        self.assertEqual(window.start, 0)
        self.assertEqual(window.nodes[0].identifier, "0")

    def test_row_count_includes_overscan_and_one_extra_row(self) -> None:
        self.assertEqual(window_row_count(200, 20), 16)
        self.assertEqual(window_row_count(60, 20), 6)
        self.assertEqual(window_row_count(210, 20), 17)
        self.assertEqual(window_row_count(200, 20, overscan=1.0), 11)
        self.assertEqual(window_row_count(0, 20), 1)

    def test_thousand_rows_with_ten_row_viewport_never_exceed_sixteen(self) -> None:
        nodes = _flat(1000)
        for offset in range(-40, 1000 * 20 + 400, 37):
            window = compute_window(nodes, offset, 200, 20)

            self.assertLessEqual(len(window.nodes), 16)
            self.assertGreaterEqual(window.start, 0)
            self.assertLessEqual(window.start + len(window.nodes), len(nodes))

    def test_offset_past_end_yields_empty_slice_at_list_length(self) -> None:
        window = compute_window(_flat(5), 10_000, 100, 20)

        self.assertEqual(window.start, 5)
        self.assertEqual(window.nodes, ())

    def test_empty_list(self) -> None:
        window = compute_window([], 0, 100, 20)

        self.assertEqual((window.start, window.nodes), (0, ()))

    def test_non_positive_row_height_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            compute_window(_flat(3), 0, 100, 0)

    def test_signature_tracks_start_rows_and_length(self) -> None:
        window = compute_window(_flat(30), 40, 100, 20)

        self.assertEqual(window.signature(), (2, 9, 9))


class ViewportTests(unittest.TestCase):
    def test_band_starts_half_a_viewport_above_the_page_offset(self) -> None:
        viewport = Viewport.from_page(1000, 200)

        self.assertEqual(viewport.scroll_top, 900)
        self.assertEqual(viewport.scroll_bottom, 1200)

    def test_band_top_never_goes_negative(self) -> None:
        viewport = Viewport.from_page(50, 200)

        self.assertEqual(viewport.scroll_top, 0)
        self.assertEqual(viewport.scroll_bottom, 300)

    def test_intersects_checks_span_overlap(self) -> None:
        viewport = Viewport.from_page(1000, 200)

        self.assertTrue(viewport.intersects(0, 900))
        self.assertTrue(viewport.intersects(1200, 1300))
        self.assertTrue(viewport.intersects(0, 5000))
        self.assertFalse(viewport.intersects(0, 880))
        self.assertFalse(viewport.intersects(1220, 1300))


if __name__ == "__main__":
    unittest.main()
