# config.py

import os


class Config:
    """Global defaults loaded from ``input/config.json``.

    Values here are read once when a :class:`~DE2_Panel.engine.ui_state.UIState`
    is constructed; changing them afterwards only affects new instances.

    Attributes
    ----------
    num_hex:
        Number of seven-segment HEX displays on the board.
    num_red_leds:
        Width of the red LED bank (LEDR).
    num_green_leds:
        Width of the green LED bank (LEDG).
    num_switches:
        Number of toggle switches (SW).
    num_keys:
        Number of momentary push-buttons (KEY).
    key_push_min_time:
        Minimum number of ticks a pushed key stays pressed.
    key_push_max_time:
        Span of the random extra hold time; a key is released between
        ``key_push_min_time`` and ``key_push_min_time + key_push_max_time``
        ticks after it is pushed.
    random_seed:
        Seed for the key-release random source. ``None`` uses system entropy.
    colors:
        RGBA values used by the Qt widgets for lit and unlit parts.
    headless_ticks:
        Number of ticks run by ``--no-gui`` mode.
    """

    # Base directories for package resources
    base_dir = os.path.abspath(os.path.dirname(__file__))
    input_dir = os.path.join(base_dir, "input")
    config_file = os.path.join(input_dir, "config.json")

    @staticmethod
    def input_path(*parts: str) -> str:
        """Return absolute path under the ``input`` directory."""
        return os.path.join(Config.input_dir, *parts)

    # Board geometry (DE2-115)
    num_hex = 8
    num_red_leds = 18
    num_green_leds = 9
    num_switches = 18
    num_keys = 4

    # Ticks until a pushed key is released
    key_push_min_time = 10
    key_push_max_time = 250

    random_seed: int | None = None

    colors = {
        "red_active": [200, 25, 25, 255],
        "red_inactive": [25, 15, 15, 64],
        "green_active": [25, 200, 25, 255],
        "green_inactive": [15, 25, 15, 64],
    }

    window_title = "de2gui demo"

    # ticks run by --no-gui
    headless_ticks = 100

    log_verbosity = "info"
    log_file = "de2_panel.log"

    @classmethod
    def load_from_file(cls, path: str) -> None:
        """Load configuration values from a JSON file.

        Only keys that already exist as attributes on ``Config`` will be
        assigned. Nested dictionaries are merged when the existing attribute
        is also a ``dict``.

        Parameters
        ----------
        path:
            Path to the JSON configuration file.
        """
        import json

        if not os.path.exists(path):
            raise FileNotFoundError(path)
        with open(path) as f:
            data = json.load(f)
        cls.config_file = os.path.abspath(path)

        for key, value in data.items():
            if not hasattr(cls, key) or key.startswith("_"):
                continue
            current = getattr(cls, key)
            if isinstance(current, dict) and isinstance(value, dict):
                current.update(value)
            else:
                setattr(cls, key, value)

    @classmethod
    def color(cls, name: str) -> tuple[int, int, int, int]:
        """Return the RGBA tuple registered under ``name``."""
        r, g, b, a = cls.colors[name]
        return (int(r), int(g), int(b), int(a))


def load_config(path: str | None = None) -> dict:
    """Load configuration from ``path`` and return the data."""
    if path is None:
        path = Config.input_path("config.json")
    Config.load_from_file(path)
    import json

    with open(path) as f:
        return json.load(f)
