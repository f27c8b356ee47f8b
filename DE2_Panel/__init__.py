"""DE2_Panel package initialization."""

from __future__ import annotations

from typing import Any

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from .engine.ui_state import UIState

__all__ = ["UIState"]


def __getattr__(name: str) -> Any:  # pragma: no cover - attribute access
    """Lazily expose UIState."""

    if name == "UIState":
        from .engine.ui_state import UIState as _UIState

        return _UIState
    raise AttributeError(name)
