#!/usr/bin/env python3
"""
clog Demo - Main Entry Point

Shows log lines and each animation kind:
1. Progress bar driven through a ProgressUpdate handle
2. Spinner, pulse and shimmer around a blocking task
3. A group of animations drawn as one block
"""

import logging
import sys
import time

import clog
from clog.cli.config import parse_arguments
from clog.logging import LoggingManager
from clog.output import ColorMode, Output
from clog.progress.animations.shimmer import Direction
from clog.progress.animations.spinner import SPINNERS
from clog.progress.bar.presets import PRESETS
from clog.progress.config import update_config

logger = logging.getLogger(__name__)


def demo_bar(log: clog.Logger, style_name: str, steps: int) -> None:
    def download(update):
        for i in range(steps):
            time.sleep(0.05)
            update.increment()
            if i % 10 == 0:
                update.field("chunk", i).send()

    log.bar("Downloading", steps).style(PRESETS[style_name]).elapsed().progress(download).field(
        "saved", clog.PathLink("downloads/archive.tar.gz")
    ).field("source", clog.url_link("https://example.com/archive.tar.gz")).msg("Downloaded")


def demo_spinner(log: clog.Logger, spinner_name: str) -> None:
    log.spinner("Resolving dependencies", SPINNERS[spinner_name]).elapsed().wait(
        lambda: time.sleep(1.5)
    ).msg("Dependencies resolved")


def demo_pulse(log: clog.Logger) -> None:
    log.pulse("Waiting for the cluster").wait(lambda: time.sleep(1.5)).msg("Cluster ready")


def demo_shimmer(log: clog.Logger) -> None:
    def fail():
        time.sleep(1.5)
        raise RuntimeError("index corrupted")

    err = (
        log.shimmer("Rebuilding index")
        .shimmer_direction(Direction.MIDDLE_OUT)
        .wait(fail)
        .on_error_message("Rebuild failed")
        .on_error_level(clog.Level.WARN)
        .send()
    )
    logger.debug(f"Shimmer demo finished with {err!r}")


def demo_group(log: clog.Logger, style_name: str, steps: int) -> None:
    def fill(delay):
        def task(update):
            for _ in range(steps):
                time.sleep(delay)
                update.increment()
        return task

    group = log.group(timeout=30)
    results = [
        group.add(log.bar("Layer 1", steps).style(PRESETS[style_name])).progress(fill(0.03)),
        group.add(log.bar("Layer 2", steps).style(PRESETS[style_name])).progress(fill(0.05)),
        group.add(log.spinner("Verifying").elapsed()).run(lambda: time.sleep(1.0)),
    ]
    group.wait().on_success_message("All layers pulled").send()
    for result in results:
        result.on_success_level(clog.Level.DEBUG).send()


def main():
    """
    Main entry point - parse config and run the selected demos.

    Returns:
        Exit code: 0 for success, 2 for errors, 130 on interrupt
    """
    args = parse_arguments()

    output = Output(sys.stdout, ColorMode.parse(args.color))
    log = clog.Logger(output, level=clog.Level.DEBUG if args.verbose else clog.Level.INFO)
    clog.set_default(log)
    update_config(progress_mode=args.progress)

    logging_manager = LoggingManager.get_instance()
    logging_manager.setup(log, console_level=args.console_log_level, log_file=args.log_file)

    try:
        log.info("Starting demo", demo=args.demo, style=args.style, color=args.color)
        log.dry("Would delete cache", path="/tmp/cache")
        log.warn("Disk almost full", free="1.2 GB")

        demos = {
            'bar': lambda: demo_bar(log, args.style, args.steps),
            'spinner': lambda: demo_spinner(log, args.spinner),
            'pulse': lambda: demo_pulse(log),
            'shimmer': lambda: demo_shimmer(log),
            'group': lambda: demo_group(log, args.style, args.steps),
        }
        selected = list(demos) if args.demo == 'all' else [args.demo]
        for name in selected:
            demos[name]()

        log.info("Demo complete")
        return 0

    except KeyboardInterrupt:
        log.warn("Demo interrupted by user (Ctrl+C)")
        return 130

    except Exception as e:
        log.error("Unexpected error occurred", error=e)
        logger.debug("Full error details:", exc_info=True)
        return 2

    finally:
        logging_manager.cleanup()


if __name__ == '__main__':
    sys.exit(main())
