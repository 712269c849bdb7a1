import unittest

from rich.style import Style

from clog.color import color_stop, default_percent_gradient
from clog.progress.bar import (
    BAR_BASIC,
    BAR_BLOCK,
    BAR_GRADIENT,
    BAR_SMOOTH,
    BAR_THIN,
    PRESETS,
    BarStyle,
    ResolutionMode,
    render_bar,
    resolve_width,
    visible_length,
)


def fixed(style: BarStyle, width: int = 10) -> BarStyle:
    return style.with_(width=width)


class TestResolveWidth(unittest.TestCase):
    def test_fixed_width_wins(self) -> None:
        self.assertEqual(resolve_width(BarStyle(width=7), 200), 7)

    def test_quarter_of_terminal(self) -> None:
        self.assertEqual(resolve_width(BarStyle(), 100), 25)

    def test_clamped_to_bounds(self) -> None:
        self.assertEqual(resolve_width(BarStyle(), 20), 10)
        self.assertEqual(resolve_width(BarStyle(), 400), 40)

    def test_unknown_terminal_uses_minimum(self) -> None:
        self.assertEqual(resolve_width(BarStyle(), 0), 10)
        self.assertEqual(resolve_width(BarStyle(min_width=12, max_width=30), 0), 12)

    def test_non_positive_bounds_fall_back_to_defaults(self) -> None:
        self.assertEqual(resolve_width(BarStyle(min_width=0, max_width=0), 1000), 40)


class TestThinBar(unittest.TestCase):
    def test_half_progress_uses_trailing_half_glyph(self) -> None:
        self.assertEqual(render_bar(5, 10, fixed(BAR_THIN)), "[━━━━━╺────]")

    def test_odd_half_step_uses_half_filled_head(self) -> None:
        self.assertEqual(render_bar(9, 20, fixed(BAR_THIN)), "[━━━━╸─────]")

    def test_zero_total_renders_empty(self) -> None:
        self.assertEqual(render_bar(0, 0, fixed(BAR_THIN)), "[──────────]")

    def test_overflow_renders_full(self) -> None:
        self.assertEqual(render_bar(20, 10, fixed(BAR_THIN)), "[━━━━━━━━━━]")

    def test_negative_renders_empty(self) -> None:
        self.assertEqual(render_bar(-5, 10, fixed(BAR_THIN)), "[──────────]")


class TestFullCellBars(unittest.TestCase):
    def test_block_half(self) -> None:
        self.assertEqual(render_bar(5, 10, fixed(BAR_BLOCK)), "[█████░░░░░]")

    def test_block_empty(self) -> None:
        self.assertEqual(render_bar(0, 10, fixed(BAR_BLOCK)), "[░░░░░░░░░░]")

    def test_basic_head(self) -> None:
        self.assertEqual(render_bar(5, 10, fixed(BAR_BASIC)), "[====>     ]")

    def test_head_not_drawn_when_complete(self) -> None:
        self.assertEqual(render_bar(10, 10, fixed(BAR_BASIC)), "[==========]")

    def test_block_with_head(self) -> None:
        self.assertEqual(render_bar(5, 10, fixed(BAR_BLOCK.with_(head_char=">"))), "[████>░░░░░]")

    def test_custom_chars_and_caps(self) -> None:
        style = BarStyle(filled_char="=", empty_char="-", left_cap="(", right_cap=")", width=4)
        self.assertEqual(render_bar(2, 4, style), "(==--)")

    def test_empty_glyphs_fall_back_to_defaults(self) -> None:
        style = BarStyle(filled_char="", empty_char="", width=4)
        self.assertEqual(render_bar(2, 4, style), "[━━──]")


class TestSubCellBars(unittest.TestCase):
    def test_smooth_half_cell(self) -> None:
        self.assertEqual(render_bar(9, 20, fixed(BAR_SMOOTH)), "[████▌     ]")

    def test_gradient_quarter(self) -> None:
        self.assertEqual(render_bar(25, 100, fixed(BAR_GRADIENT)), "[██▌       ]")

    def test_gradient_smallest_step(self) -> None:
        self.assertEqual(render_bar(1, 80, fixed(BAR_GRADIENT)), "[▏         ]")

    def test_gradient_exact_cell_boundary(self) -> None:
        self.assertEqual(render_bar(50, 100, fixed(BAR_GRADIENT)), "[█████     ]")

    def test_custom_fill_gradient(self) -> None:
        style = BarStyle(filled_char="█", empty_char=" ", fill_gradient=["░", "▒", "▓"], width=8)
        self.assertEqual(render_bar(1, 32, style), "[░       ]")
        self.assertEqual(render_bar(2, 32, style), "[▒       ]")
        self.assertEqual(render_bar(3, 32, style), "[▓       ]")
        self.assertEqual(render_bar(4, 32, style), "[█       ]")
        self.assertEqual(render_bar(50, 100, style), "[████    ]")

    def test_fill_gradient_overrides_half_filled(self) -> None:
        style = BarStyle(
            filled_char="█",
            empty_char=" ",
            half_filled="▌",
            fill_gradient=("▏", "▎", "▍", "▌", "▋", "▊", "▉"),
            width=10,
        )
        self.assertEqual(style.resolution, ResolutionMode.GRADIENT)
        self.assertEqual(render_bar(1, 80, style), "[▏         ]")


class TestProgressGradient(unittest.TestCase):
    def setUp(self) -> None:
        self.plain = BarStyle(filled_char="█", empty_char=" ", width=10)
        self.colored = self.plain.with_(progress_gradient=[
            color_stop(0.0, (255, 0, 0)),
            color_stop(1.0, (0, 255, 0)),
        ])

    def test_nothing_filled_has_no_escapes(self) -> None:
        self.assertEqual(render_bar(0, 100, self.colored), "[          ]")

    def test_filled_cells_are_colored(self) -> None:
        bar = render_bar(50, 100, self.colored)
        self.assertIn("\x1b[", bar)
        self.assertIn("█", bar)

    def test_color_follows_progress(self) -> None:
        self.assertNotEqual(render_bar(10, 100, self.colored), render_bar(90, 100, self.colored))

    def test_without_gradient_no_escapes(self) -> None:
        self.assertEqual(render_bar(50, 100, self.plain), "[█████     ]")

    def test_plain_color_system(self) -> None:
        self.assertEqual(render_bar(50, 100, self.colored, color_system=None), "[█████     ]")


class TestPresets(unittest.TestCase):
    def test_all_presets_registered(self) -> None:
        self.assertEqual(set(PRESETS), {"basic", "block", "dash", "gradient", "thin", "smooth"})

    def test_presets_render_requested_width(self) -> None:
        for name, style in PRESETS.items():
            with self.subTest(preset=name):
                bar = render_bar(3, 7, style.with_(width=12))
                inner = bar[len(style.left_cap):len(bar) - len(style.right_cap)]
                self.assertEqual(len(inner), 12)

    def test_presets_use_square_caps(self) -> None:
        for name, style in PRESETS.items():
            with self.subTest(preset=name):
                self.assertEqual((style.left_cap, style.right_cap), ("[", "]"))


PROPERTY_WIDTHS = (1, 2, 3, 7, 10, 17)
PROPERTY_TOTALS = (1, 3, 10, 37, 101)


def inner_cells(bar: str, style: BarStyle) -> str:
    return bar[len(style.left_cap):len(bar) - len(style.right_cap)]


class TestBarProperties(unittest.TestCase):
    def cases(self):
        for name, preset in PRESETS.items():
            for width in PROPERTY_WIDTHS:
                for total in PROPERTY_TOTALS:
                    yield name, preset.with_(width=width), total

    def test_filled_cells_never_decrease(self) -> None:
        for name, style, total in self.cases():
            with self.subTest(preset=name, width=style.width, total=total):
                previous = -1
                for current in range(-2, total + 3):
                    filled = render_bar(current, total, style, color_system=None).count(style.filled_char)
                    self.assertGreaterEqual(filled, previous, f"current={current}")
                    previous = filled

    def test_styled_bar_keeps_visible_length(self) -> None:
        for name, style, total in self.cases():
            styled = style.with_(
                filled_style=Style(bold=True),
                empty_style=Style(dim=True),
                cap_style=Style(color="blue"),
                progress_gradient=tuple(default_percent_gradient()),
            )
            expected = len(style.left_cap) + style.width + len(style.right_cap)
            with self.subTest(preset=name, width=style.width, total=total):
                for current in range(-2, total + 3):
                    self.assertEqual(visible_length(render_bar(current, total, styled)), expected, f"current={current}")

    def test_complete_bar_is_all_filled(self) -> None:
        for name, style, total in self.cases():
            boundary = set(style.fill_gradient) | {style.half_filled, style.half_empty, style.head_char}
            boundary.discard("")
            with self.subTest(preset=name, width=style.width, total=total):
                inner = inner_cells(render_bar(total, total, style, color_system=None), style)
                self.assertEqual(inner, style.filled_char * style.width)
                self.assertFalse(boundary & set(inner))

    def test_out_of_range_is_clamped(self) -> None:
        for name, style, total in self.cases():
            with self.subTest(preset=name, width=style.width, total=total):
                empty = render_bar(0, total, style)
                full = render_bar(total, total, style)
                self.assertEqual(render_bar(-1, total, style), empty)
                self.assertEqual(render_bar(-2, total, style), empty)
                self.assertEqual(render_bar(total + 1, total, style), full)
                self.assertEqual(render_bar(total + 2, total, style), full)

    def test_zero_total_acts_as_one(self) -> None:
        for name, preset in PRESETS.items():
            style = preset.with_(width=10)
            for current in (1, 2, 5, 50):
                with self.subTest(preset=name, current=current):
                    self.assertEqual(render_bar(current, 0, style), render_bar(current, 1, style))


if __name__ == "__main__":
    unittest.main()
