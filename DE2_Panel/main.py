# main.py

"""Entry point for launching the DE2 front panel, with or without a window."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any

from DE2_Panel.config import Config

# Internal Config attributes that should not be exposed as CLI flags
_PRIVATE_KEYS = {
    "base_dir",
    "input_dir",
    "config_file",
}

# Attributes whose default is ``None`` and therefore carries no type
_NULLABLE_TYPES = {"random_seed": int}


def _configure_logging() -> None:
    """Configure application logging and capture uncaught exceptions."""

    level = logging.DEBUG if Config.log_verbosity == "debug" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=Config.log_file,
        filemode="a",
    )

    def _log_excepthook(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).exception(
            "Uncaught exception", exc_info=(exc_type, exc, tb)
        )

    sys.excepthook = _log_excepthook


def _add_config_args(
    parser: argparse.ArgumentParser, data: dict[str, Any], prefix: str = ""
) -> None:
    """Recursively add CLI flags based on ``data`` keys."""
    for key, value in data.items():
        if key in _PRIVATE_KEYS:
            continue
        arg_name = f"--{prefix}{key}"
        dest = f"{prefix}{key}".replace(".", "_")
        if isinstance(value, dict):
            _add_config_args(parser, value, prefix=f"{prefix}{key}.")
            continue
        if isinstance(value, bool):
            parser.add_argument(arg_name, type=lambda x: x.lower() == "true", dest=dest)
        elif value is None:
            if dest in _NULLABLE_TYPES:
                parser.add_argument(arg_name, type=_NULLABLE_TYPES[dest], dest=dest)
        elif isinstance(value, (int, float, str)):
            parser.add_argument(arg_name, type=type(value), dest=dest)


def _config_defaults() -> dict[str, Any]:
    """Return a dictionary of all attributes defined on :class:`Config`."""
    defaults: dict[str, Any] = {}
    for key, value in Config.__dict__.items():
        if key.startswith("_") or key in _PRIVATE_KEYS:
            continue
        if callable(value) or isinstance(value, (staticmethod, classmethod)):
            continue
        defaults[key] = value
    return defaults


def _merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base`` returning a new dict."""
    result: dict[str, Any] = {}
    keys = set(base) | set(override)
    for key in keys:
        if isinstance(base.get(key), dict) and isinstance(override.get(key), dict):
            result[key] = _merge_configs(base[key], override[key])
        elif key in override:
            result[key] = override[key]
        else:
            result[key] = base[key]
    return result


def _apply_overrides(
    args: argparse.Namespace, data: dict[str, Any], prefix: str = ""
) -> None:
    """Apply CLI overrides back onto :class:`Config`."""
    for key, value in data.items():
        full = f"{prefix}{key}"
        dest = full.replace(".", "_")
        override = getattr(args, dest, None)
        if override is not None:
            parts = full.split(".")
            target = Config
            for part in parts[:-1]:
                target = getattr(target, part)
            if isinstance(target, dict):
                target[parts[-1]] = override
            else:
                setattr(target, parts[-1], override)
        elif isinstance(value, dict):
            _apply_overrides(args, value, prefix=f"{full}.")


@dataclass
class MainService:
    """Handle CLI parsing and runtime selection."""

    argv: list[str] | None = None

    def run(self) -> None:
        args, cfg = self._parse_args()
        _apply_overrides(args, cfg)
        _configure_logging()
        if args.no_gui:
            self._run_headless(args.ticks)
        else:
            self._launch_gui()

    # ------------------------------------------------------------------
    def _parse_args(self) -> tuple[argparse.Namespace, dict[str, Any]]:
        initial = argparse.ArgumentParser(add_help=False)
        initial.add_argument(
            "--config",
            default=Config.input_path("config.json"),
            help="Path to JSON configuration file",
        )
        initial.add_argument(
            "--no-gui",
            action="store_true",
            help="Run the demo simulation without opening a window",
        )
        known, _ = initial.parse_known_args(self.argv)

        config_data: dict[str, Any] = {}
        if known.config and os.path.exists(known.config):
            with open(known.config) as f:
                config_data = json.load(f)
            Config.load_from_file(known.config)

        parser = argparse.ArgumentParser(
            parents=[initial], description="Run the DE2 front panel"
        )
        defaults = _merge_configs(_config_defaults(), config_data)
        _add_config_args(parser, defaults)
        parser.add_argument(
            "--ticks",
            type=int,
            default=None,
            help="Ticks to run in --no-gui mode (defaults to headless_ticks)",
        )
        args = parser.parse_args(self.argv)
        return args, defaults

    # ------------------------------------------------------------------
    @staticmethod
    def _run_headless(ticks: int | None) -> None:
        """Run the demo simulation for ``ticks`` ticks and print the result."""
        from DE2_Panel import demo
        from DE2_Panel.engine.ui_state import UIState

        state = demo.install(UIState())
        count = Config.headless_ticks if ticks is None else ticks
        state.advance(count)
        snap = state.snapshot()
        print(state.cycle_text)
        print(f"LEDR {state.red_leds.label()}  LEDG {state.green_leds.label()}")
        print("HEX " + " ".join(f"{d:02x}" for d in reversed(snap.hex_digits)))

    # ------------------------------------------------------------------
    @staticmethod
    def _launch_gui() -> None:
        """Show the front panel in a Qt main window."""

        from PySide6.QtWidgets import QApplication, QMainWindow

        from DE2_Panel import demo
        from DE2_Panel.engine.ui_state import UIState
        from DE2_Panel.gui_pyside.board_panel import BoardPanel

        app = QApplication.instance() or QApplication(sys.argv[:1])
        state = demo.install(UIState())
        window = QMainWindow()
        window.setWindowTitle(Config.window_title)
        window.setCentralWidget(BoardPanel(state))
        window.show()
        logging.getLogger(__name__).info("front panel started")
        app.exec()


def main() -> None:
    """Entry point for external callers."""
    MainService().run()


if __name__ == "__main__":
    main()
