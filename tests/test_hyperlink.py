import os
import tempfile
import unittest
from unittest import mock

from clog import env
from clog.exceptions import InvalidHyperlinkPresetError
from clog.fields import ValueKind, format_value
from clog.hyperlink import (
    Link,
    PathLink,
    build_path_url,
    get_hyperlink_format,
    hyperlink,
    path_display_text,
    path_link,
    reset_hyperlinks,
    resolve_path_url,
    set_hyperlink_format,
    set_hyperlink_preset,
    set_hyperlinks_enabled,
    url_link,
)
from clog.logger import Logger
from clog.output import ColorMode, Output

OSC8_END = "\x1b]8;;\x1b\\"


class HyperlinkTestCase(unittest.TestCase):
    def setUp(self) -> None:
        reset_hyperlinks()

    def tearDown(self) -> None:
        reset_hyperlinks()


class TestPathUrls(HyperlinkTestCase):
    def test_default_is_file_url(self) -> None:
        self.assertEqual(build_path_url("/src/app.py"), "file:///src/app.py")
        self.assertEqual(build_path_url("/src/app.py", 12, 3), "file:///src/app.py")

    def test_vscode_preset(self) -> None:
        set_hyperlink_preset("VSCode")
        self.assertEqual(build_path_url("/src/app.py"), "vscode://file/src/app.py")
        self.assertEqual(build_path_url("/src/app.py", 12), "vscode://file/src/app.py:12")
        self.assertEqual(build_path_url("/src/app.py", 12, 3), "vscode://file/src/app.py:12:3")
        self.assertEqual(build_path_url("/src", is_dir=True), "vscode://file/src")

    def test_kitty_column_uses_line_fragment(self) -> None:
        set_hyperlink_preset("kitty")
        self.assertEqual(build_path_url("/a.py", 7, 2), "file:///a.py#7")

    def test_column_falls_back_to_line(self) -> None:
        set_hyperlink_format("line", "idea://open?file={path}&line={line}")
        self.assertEqual(build_path_url("/x.py", 3, 4), "idea://open?file=/x.py&line=3")

    def test_col_placeholder(self) -> None:
        set_hyperlink_format("column", "ed://{path}@{line},{col}")
        self.assertEqual(build_path_url("/x.py", 3, 4), "ed:///x.py@3,4")

    def test_file_and_dir_fall_back_to_path(self) -> None:
        set_hyperlink_format("path", "open://{path}")
        self.assertEqual(build_path_url("/x.py"), "open:///x.py")
        self.assertEqual(build_path_url("/d", is_dir=True), "open:///d")

    def test_slot_accepts_preset_name(self) -> None:
        set_hyperlink_format("file", "subl")
        self.assertEqual(get_hyperlink_format("file"), "subl://open?url=file://{path}")
        set_hyperlink_format("line", "subl")
        self.assertEqual(get_hyperlink_format("line"), "subl://open?url=file://{path}&line={line}")

    def test_individual_slot_overrides_preset(self) -> None:
        set_hyperlink_preset("cursor")
        set_hyperlink_format("line", "x://{path}#{line}")
        self.assertEqual(build_path_url("/a", 1), "x:///a#1")
        self.assertEqual(build_path_url("/a"), "cursor://file/a")

    def test_unknown_preset(self) -> None:
        with self.assertRaises(InvalidHyperlinkPresetError) as ctx:
            set_hyperlink_preset("notepad")
        self.assertIsInstance(ctx.exception, ValueError)
        self.assertIn("vscode", str(ctx.exception))

    def test_unknown_slot(self) -> None:
        with self.assertRaises(ValueError):
            set_hyperlink_format("url", "x")

    def test_relative_path_made_absolute(self) -> None:
        self.assertEqual(resolve_path_url("notes.txt"), "file://" + os.path.abspath("notes.txt"))

    def test_directory_uses_dir_slot(self) -> None:
        set_hyperlink_format("dir", "dir://{path}")
        set_hyperlink_format("file", "file-slot://{path}")
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(resolve_path_url(tmp), "dir://" + os.path.abspath(tmp))

    def test_display_text(self) -> None:
        self.assertEqual(path_display_text("a.py"), "a.py")
        self.assertEqual(path_display_text("a.py", 4), "a.py:4")
        self.assertEqual(path_display_text("a.py", 4, 2), "a.py:4:2")
        self.assertEqual(path_display_text("a.py", 0, 2), "a.py")


class TestRendering(HyperlinkTestCase):
    def test_plain_when_colors_disabled(self) -> None:
        out = Output.buffer()
        self.assertEqual(hyperlink("https://example.com", "docs", out), "docs")
        self.assertEqual(path_link("a.py", 3, output=out), "a.py:3")

    def test_osc8_when_colors_enabled(self) -> None:
        out = Output.buffer(ColorMode.ALWAYS)
        text = hyperlink("https://example.com", "docs", out)
        self.assertTrue(text.startswith("\x1b]8;"))
        self.assertIn(";https://example.com\x1b\\docs", text)
        self.assertTrue(text.endswith(OSC8_END))

    def test_disabled_globally(self) -> None:
        set_hyperlinks_enabled(False)
        out = Output.buffer(ColorMode.ALWAYS)
        self.assertEqual(hyperlink("https://example.com", "docs", out), "docs")
        self.assertEqual(path_link("a.py", 3, output=out), "a.py:3")

    def test_path_link_targets_resolved_url(self) -> None:
        set_hyperlink_preset("vscode")
        out = Output.buffer(ColorMode.ALWAYS)
        text = path_link("a.py", 9, output=out)
        self.assertIn(";vscode://file" + os.path.abspath("a.py") + ":9\x1b\\a.py:9", text)


class TestLinkFields(HyperlinkTestCase):
    def test_value_kinds(self) -> None:
        self.assertEqual(format_value(Link("https://x.dev", "x")), ("x", ValueKind.LINK))
        self.assertEqual(format_value(PathLink("a.py", 3)), ("a.py:3", ValueKind.LINK))
        self.assertEqual(format_value(url_link("https://x.dev")), ("https://x.dev", ValueKind.LINK))

    def test_plain_log_line(self) -> None:
        out = Output.buffer()
        Logger(out).info("saved", file=PathLink("out.txt", 12), docs=url_link("https://x.dev"))
        self.assertEqual(out.getvalue(), "INF ℹ️ saved file=out.txt:12 docs=https://x.dev\n")

    def test_display_text_with_spaces_not_quoted(self) -> None:
        out = Output.buffer()
        Logger(out).info("see", docs=Link("https://x.dev", "the docs"))
        self.assertEqual(out.getvalue(), "INF ℹ️ see docs=the docs\n")

    def test_colored_log_line_carries_link(self) -> None:
        out = Output.buffer(ColorMode.ALWAYS)
        Logger(out).info("open", docs=url_link("https://x.dev"))
        line = out.getvalue().rstrip("\n")
        self.assertIn("\x1b]8;", line)
        self.assertIn(";https://x.dev\x1b\\", line)
        self.assertTrue(line.endswith(OSC8_END))


class TestHyperlinkEnvironment(HyperlinkTestCase):
    def setUp(self) -> None:
        super().setUp()
        patcher = mock.patch.dict(os.environ, {}, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        for key in list(os.environ):
            if "HYPERLINK" in key:
                os.environ.pop(key)

    def test_preset_then_slot_override(self) -> None:
        os.environ["CLOG_HYPERLINK_FORMAT"] = "vscode"
        os.environ["CLOG_HYPERLINK_LINE_FORMAT"] = "idea://open?file={path}&line={line}"
        env.configure_hyperlinks_from_env()
        self.assertEqual(get_hyperlink_format("path"), "vscode://file{path}")
        self.assertEqual(get_hyperlink_format("line"), "idea://open?file={path}&line={line}")
        self.assertEqual(get_hyperlink_format("column"), "vscode://file{path}:{line}:{column}")

    def test_unknown_preset_logged(self) -> None:
        os.environ["CLOG_HYPERLINK_FORMAT"] = "notepad"
        with self.assertLogs("clog.env", level="WARNING"):
            env.configure_hyperlinks_from_env()
        self.assertIsNone(get_hyperlink_format("path"))

    def test_custom_prefix(self) -> None:
        os.environ["MYAPP_HYPERLINK_DIR_FORMAT"] = "cursor"
        with mock.patch.object(env, "_env_prefix", "MYAPP"):
            env.configure_hyperlinks_from_env()
        self.assertEqual(get_hyperlink_format("dir"), "cursor://file{path}")

    def test_configure_from_env_applies_hyperlinks(self) -> None:
        os.environ["CLOG_HYPERLINK_FORMAT"] = "subl"
        env.configure_from_env(Logger(Output.buffer()))
        self.assertEqual(get_hyperlink_format("file"), "subl://open?url=file://{path}")


if __name__ == "__main__":
    unittest.main()
