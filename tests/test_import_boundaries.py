import ast
from pathlib import Path


def _offending_imports(source_dir: Path, forbidden_prefixes: tuple[str, ...]) -> list[str]:
    offenders: list[str] = []
    for path in sorted(source_dir.rglob("*.py")):
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    name = alias.name
                    if name.startswith(forbidden_prefixes):
                        offenders.append(f"{path}: import {name}")
            elif isinstance(node, ast.ImportFrom):
                if node.module is None:
                    continue
                module = node.module
                if module.startswith(forbidden_prefixes):
                    offenders.append(f"{path}: from {module} import ...")
    return offenders


def test_foundation_does_not_import_framework_or_app():
    repo_root = Path(__file__).resolve().parents[1]
    foundation_dir = repo_root / "build_constants" / "foundation"

    forbidden_prefixes = ("build_constants.framework", "build_constants.app", "build_constants.cli")

    assert _offending_imports(foundation_dir, forbidden_prefixes) == []


def test_framework_does_not_import_app_or_config_io():
    repo_root = Path(__file__).resolve().parents[1]
    framework_dir = repo_root / "build_constants" / "framework"

    forbidden_prefixes = ("build_constants.app", "build_constants.cli", "build_constants.foundation", "yaml")

    assert _offending_imports(framework_dir, forbidden_prefixes) == []
