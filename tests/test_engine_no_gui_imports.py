import ast
from pathlib import Path

ENGINE_DIR = Path(__file__).resolve().parents[1] / "DE2_Panel" / "engine"


def test_engine_has_no_gui_imports():
    for path in ENGINE_DIR.rglob("*.py"):
        tree = ast.parse(path.read_text())
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name.startswith(("DE2_Panel.gui", "PySide6")):
                        raise AssertionError(f"{path} imports {alias.name}")
            elif isinstance(node, ast.ImportFrom):
                module = node.module or ""
                if module.startswith(("DE2_Panel.gui", "PySide6")) or (
                    node.level > 0 and module.startswith("gui")
                ):
                    raise AssertionError(f"{path} imports {module}")
