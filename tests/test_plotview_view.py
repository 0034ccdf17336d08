from __future__ import annotations

import math
import unittest
import xml.etree.ElementTree as ET

import numpy as np

from plotview import Axis, EmptyViewError, FaceShapeError, Line, Range, Representation, Scatter, View
from plotview.axis import EMPTY_RANGE
from plotview.text_render import TextBlock, blank_block, render_x_axis_strings, render_y_axis_strings


class _Boom(Representation):
    def range(self, dim: int) -> tuple[float, float]:
        return (0.0, 1.0)

    def to_svg(self, x_axis: Axis, y_axis: Axis, face_width: float, face_height: float) -> ET.Element:
        raise RuntimeError("svg boom")

    def to_text(self, x_axis: Axis, y_axis: Axis, face_width: int, face_height: int) -> TextBlock:
        raise RuntimeError("text boom")


class _WrongSize(Representation):
    def range(self, dim: int) -> tuple[float, float]:
        return (0.0, 1.0)

    def to_svg(self, x_axis: Axis, y_axis: Axis, face_width: float, face_height: float) -> ET.Element:
        return ET.Element("g")

    def to_text(self, x_axis: Axis, y_axis: Axis, face_width: int, face_height: int) -> TextBlock:
        return blank_block(face_width + 1, face_height)


class _Extent(Representation):
    """Fixed extents, draws nothing."""

    def __init__(self, x: tuple[float, float], y: tuple[float, float]) -> None:
        self.extents = (x, y)
        self.range_calls = 0

    def range(self, dim: int) -> tuple[float, float]:
        self.range_calls += 1
        return self.extents[dim]

    def to_svg(self, x_axis: Axis, y_axis: Axis, face_width: float, face_height: float) -> ET.Element:
        return ET.Element("g", {"class": "extent"})

    def to_text(self, x_axis: Axis, y_axis: Axis, face_width: int, face_height: int) -> TextBlock:
        return blank_block(face_width, face_height)


class RangeResolutionTests(unittest.TestCase):
    def test_default_range_spans_all_representations(self) -> None:
        view = View().add(_Extent((0.0, 4.0), (-1.0, 2.0))).add(_Extent((-3.0, 1.0), (0.5, 7.0)))
        self.assertEqual(view.default_x_range(), Range(-3.0, 4.0))
        self.assertEqual(view.default_y_range(), Range(-1.0, 7.0))

    def test_explicit_override_wins_over_data(self) -> None:
        view = View().add(Scatter([(0.1, 0.2), (0.9, 0.8)])).x_range(-10, 10).y_range(-10, 10)
        self.assertEqual(view.resolved_ranges(), (Range(-10.0, 10.0), Range(-10.0, 10.0)))
        x_axis, y_axis = view.axes()
        self.assertEqual((x_axis.lower, x_axis.upper), (-10.0, 10.0))
        self.assertEqual((y_axis.lower, y_axis.upper), (-10.0, 10.0))

    def test_override_is_used_verbatim_even_when_inverted(self) -> None:
        view = View().add(_Extent((0.0, 1.0), (0.0, 1.0))).x_range(5, -5)
        self.assertEqual(view.resolved_ranges()[0], Range(5.0, -5.0))
        with self.assertRaises(EmptyViewError):
            view.to_text(10, 5)

    def test_range_resolution_is_order_independent(self) -> None:
        a = Scatter([(0.0, 3.0), (2.0, 5.0)])
        b = Line([(-1.0, 4.0), (6.0, 1.0)])
        self.assertEqual(View().add(a).add(b).resolved_ranges(), View().add(b).add(a).resolved_ranges())

    def test_ranges_are_recomputed_on_every_render(self) -> None:
        rep = _Extent((0.0, 1.0), (0.0, 1.0))
        view = View().add(rep)
        view.to_text(5, 3)
        first = rep.range_calls
        view.to_text(5, 3)
        self.assertEqual(rep.range_calls, 2 * first)

    def test_empty_view_default_range_is_inverted_infinite(self) -> None:
        view = View()
        self.assertEqual(view.default_x_range(), Range(math.inf, -math.inf))
        self.assertEqual(view.default_y_range(), Range(math.inf, -math.inf))
        self.assertEqual(view.default_x_range(), EMPTY_RANGE)

    def test_representations_are_held_by_reference_in_order(self) -> None:
        a = _Extent((0.0, 1.0), (0.0, 1.0))
        b = _Extent((0.0, 1.0), (0.0, 1.0))
        view = View().add(a).add(b)
        self.assertIs(view.representations[0], a)
        self.assertIs(view.representations[1], b)


class EmptyViewTests(unittest.TestCase):
    def test_empty_view_text_render_fails_fast(self) -> None:
        with self.assertRaises(EmptyViewError) as ctx:
            View().to_text(10, 5)
        self.assertIn("x range", str(ctx.exception))

    def test_empty_view_svg_render_fails_fast(self) -> None:
        with self.assertRaises(EmptyViewError):
            View().to_svg(100.0, 50.0)

    def test_missing_single_dimension_is_named(self) -> None:
        with self.assertRaises(EmptyViewError) as ctx:
            View().x_range(0, 1).to_text(10, 5)
        self.assertIn("y range", str(ctx.exception))

    def test_overrides_without_representations_render_axes_only(self) -> None:
        text = View().x_range(0, 10).y_range(0, 10).to_text(21, 6)
        lines = text.split("\n")
        self.assertEqual(len(lines), 9)
        self.assertEqual(lines[0], "10 +" + " " * 22)


class TextRenderTests(unittest.TestCase):
    def test_text_render_layout(self) -> None:
        view = View().add(Scatter([(0.0, 0.0), (10.0, 10.0)], glyph="o")).x_range(0, 10).y_range(0, 10)
        expected = [
            "10 +" + " " * 20 + "o ",
            " 8 +" + " " * 22,
            " 6 +" + " " * 22,
            " 4 +" + " " * 22,
            " 2 +" + " " * 22,
            " 0 +o" + " " * 21,
            "   ++---+---+---+---+---+ ",
            "    0   2   4   6   8  10 ",
            " " * 26,
        ]
        self.assertEqual(view.to_text(21, 6).split("\n"), expected)

    def test_canvas_dimensions_follow_gutter_formula(self) -> None:
        view = View().add(Line([(-1234.5, 0.001), (98765.0, 0.002)]))
        x_axis, y_axis = view.axes()
        for face_width in (1, 5, 20, 47):
            for face_height in (1, 4, 13):
                _, longest = render_y_axis_strings(y_axis, face_height)
                _, start_offset = render_x_axis_strings(x_axis, face_width)
                gutter = max(longest + 1, -start_offset)
                block = view.to_text_block(face_width, face_height)
                self.assertEqual(block.shape, (face_height + 3, face_width + 2 + gutter))
                lines = view.to_text(face_width, face_height).split("\n")
                self.assertEqual(len(lines), face_height + 3)
                self.assertTrue(all(len(line) == face_width + 2 + gutter for line in lines))

    def test_later_representation_draws_on_top(self) -> None:
        dense = Line([(0.0, 5.0), (10.0, 5.0)], glyph="-")
        sparse = Scatter([(5.0, 5.0)], glyph="o")
        face_cols = slice(4, 4 + 21)

        on_top = View().add(dense).add(sparse).x_range(0, 10).y_range(0, 10).to_text_block(21, 5)
        under = View().add(sparse).add(dense).x_range(0, 10).y_range(0, 10).to_text_block(21, 5)

        row = 2
        self.assertEqual("".join(on_top[row, face_cols].tolist()), "-" * 10 + "o" + "-" * 10)
        self.assertEqual("".join(under[row, face_cols].tolist()), "-" * 21)

    def test_order_changes_only_overlapping_cells(self) -> None:
        a = Scatter([(0.0, 0.0), (3.0, 3.0)], glyph="a")
        b = Scatter([(3.0, 3.0), (6.0, 1.0)], glyph="b")
        ab = View().add(a).add(b).to_text_block(13, 7)
        ba = View().add(b).add(a).to_text_block(13, 7)
        self.assertEqual(ab.shape, ba.shape)
        diff = np.argwhere(ab != ba)
        self.assertEqual(len(diff), 1)
        r, c = diff[0]
        self.assertEqual({ab[r, c], ba[r, c]}, {"a", "b"})

    def test_wide_x_title_overhang_never_writes_out_of_bounds(self) -> None:
        title = "an x axis title much wider than the face"
        view = View().add(Scatter([(0.0, 0.0), (1.0, 1.0)])).x_label(title)
        x_axis, _ = view.axes()
        _, start_offset = render_x_axis_strings(x_axis, 4)
        self.assertLess(start_offset, -10)

        lines = view.to_text(4, 3).split("\n")
        gutter = -start_offset
        self.assertTrue(all(len(line) == 4 + 2 + gutter for line in lines))
        # Left overhang is absorbed by the gutter; the right end is clipped at the canvas edge.
        self.assertEqual(lines[-1], title[: len(lines[-1])])

    def test_negative_label_overhang_lands_left_of_rule(self) -> None:
        view = View().add(_Extent((-1000.0, 1000.0), (0.0, 1.0)))
        lines = view.to_text(11, 3).split("\n")
        # y labels are at most 3 wide ("0.4"), so the gutter is 4 and the rule sits in column 4.
        self.assertEqual(lines[0][4], "+")
        self.assertEqual(lines[3][4], "+")
        self.assertEqual(lines[4][3:8], "-1000")

    def test_last_x_label_keeps_all_its_digits(self) -> None:
        lines = View().add(Scatter([(0.0, 0.0), (10000.0, 1.0)])).to_text(41, 4).split("\n")
        self.assertTrue(lines[5].endswith("10000"))
        self.assertEqual(lines[5].split(), ["0", "2000", "4000", "6000", "8000", "10000"])

    def test_top_row_is_labelled_with_its_own_tick(self) -> None:
        lines = View().add(Scatter([(0.0, 0.0), (1.0, 1.0)], glyph="o")).to_text(11, 3).split("\n")
        self.assertEqual(lines[0], "  1 +" + " " * 10 + "o ")
        self.assertEqual(lines[2][:5], "  0 +")

    def test_face_of_wrong_size_fails_fast(self) -> None:
        with self.assertRaises(FaceShapeError):
            View().add(_WrongSize()).to_text(10, 5)

    def test_collaborator_failure_propagates(self) -> None:
        view = View().add(_Boom())
        with self.assertRaisesRegex(RuntimeError, "text boom"):
            view.to_text(10, 5)
        with self.assertRaisesRegex(RuntimeError, "svg boom"):
            view.to_svg(100.0, 50.0)

    def test_face_size_must_be_positive(self) -> None:
        view = View().add(_Extent((0.0, 1.0), (0.0, 1.0)))
        with self.assertRaises(ValueError):
            view.to_text(0, 5)
        with self.assertRaises(ValueError):
            view.to_svg(10.0, 0.0)

    def test_fractional_text_face_size_is_refused(self) -> None:
        view = View().add(_Extent((0.0, 1.0), (0.0, 1.0)))
        with self.assertRaisesRegex(ValueError, "face width"):
            view.to_text(10.7, 5)
        with self.assertRaisesRegex(ValueError, "face height"):
            view.to_text(10, 5.5)
        self.assertEqual(len(view.to_text(10.0, 5.0).split("\n")), 5 + 3)


class SvgRenderTests(unittest.TestCase):
    def test_svg_draws_representations_in_order_then_axes(self) -> None:
        first = _Extent((0.0, 1.0), (0.0, 1.0))
        second = Scatter([(0.5, 0.5)])
        group = View().add(first).add(second).to_svg(200.0, 100.0)
        classes = [child.get("class") for child in group]
        self.assertEqual(classes, ["extent", "points", "x-axis", "y-axis"])

    def test_svg_axis_labels_come_from_view(self) -> None:
        group = View().add(Scatter([(0.0, 0.0), (1.0, 1.0)])).x_label("time").y_label("value").to_svg(200.0, 100.0)
        texts = [el.text for el in group.iter("text")]
        self.assertIn("time", texts)
        self.assertIn("value", texts)


if __name__ == "__main__":
    unittest.main()
