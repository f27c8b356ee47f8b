"""PySide6 widgets rendering the board front panel."""
