"""Packaging correctness verification for json5-editor.

Tests validate that:
- The base install imports cleanly and the public functions work
- py.typed marker is present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import sys
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the base install works without any optional extras."""

    def test_import_json5_editor(self):  # type: ignore[no-untyped-def]
        """Top-level import succeeds."""
        import json5_editor

        assert hasattr(json5_editor, "Editor")
        assert hasattr(json5_editor, "format_json5")
        assert hasattr(json5_editor, "annotate_paths")
        assert hasattr(json5_editor, "match_brackets")

    def test_format_basic(self):  # type: ignore[no-untyped-def]
        """format_json5() works with the reference tokenizer."""
        from json5_editor import format_json5

        assert format_json5("{a:1}") == "{\n  a: 1,\n}"

    def test_editor_basic(self):  # type: ignore[no-untyped-def]
        """An Editor session can be opened, used and closed."""
        from json5_editor import Editor

        editor = Editor()
        sid = editor.open()
        assert [a.path for a in editor.set_value(sid, "{a: {b: 1}}")] == ["a", "a.b"]
        editor.close(sid)


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        result = subprocess.run(
            ["poetry", "build", "-f", "wheel"],
            cwd=str(PROJECT_ROOT),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """py.typed marker must be included in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            py_typed_files = [n for n in names if n.endswith("py.typed")]
            assert py_typed_files, f"py.typed not found in wheel. Contents: {names}"

    def test_no_pycache_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """__pycache__ directories must not be in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """All source modules must be present in the wheel."""
        expected_modules = [
            "json5_editor/__init__.py",
            "json5_editor/api.py",
            "json5_editor/config.py",
            "json5_editor/editor.py",
            "json5_editor/protocols.py",
            "json5_editor/result.py",
            "json5_editor/scheduling.py",
            "json5_editor/session.py",
            "json5_editor/lexer/__init__.py",
            "json5_editor/lexer/grammar.py",
            "json5_editor/lexer/tokens.py",
            "json5_editor/structure/__init__.py",
            "json5_editor/structure/brackets.py",
            "json5_editor/structure/paths.py",
            "json5_editor/formatting/__init__.py",
            "json5_editor/formatting/formatter.py",
            "json5_editor/editing/__init__.py",
            "json5_editor/editing/autoindent.py",
            "json5_editor/integrations/__init__.py",
            "json5_editor/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), (
                    f"Module {module} not found in wheel"
                )

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """Wheel metadata must include correct package info."""
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if "METADATA" in n]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "json5-editor" in metadata.lower() or "json5_editor" in metadata.lower()
            assert "0.1.0" in metadata


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        """pytest11 entry point must be registered for json5-editor."""
        from importlib.metadata import entry_points

        pytest11_eps = entry_points(group="pytest11")

        editor_eps = [ep for ep in pytest11_eps if "json5_editor" in str(ep.value)]
        assert editor_eps, (
            f"No pytest11 entry point found for json5-editor. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixture_available(self):  # type: ignore[no-untyped-def]
        """assert_json5_canonical fixture must be importable from plugin."""
        import importlib

        mod = importlib.import_module("json5_editor.integrations._pytest_plugin")
        assert hasattr(mod, "assert_json5_canonical")
        assert callable(mod.assert_json5_canonical)

    def test_plugin_discovery_via_pytest(self):  # type: ignore[no-untyped-def]
        """pytest --fixtures should list assert_json5_canonical."""
        result = subprocess.run(
            [sys.executable, "-m", "pytest", "--fixtures", "-q"],
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
        )
        assert "assert_json5_canonical" in result.stdout, (
            f"Fixture not found in pytest fixtures list. stdout: {result.stdout[:500]}"
        )


class TestPackageMetadata:
    """Verify pyproject.toml metadata completeness."""

    def test_version(self):  # type: ignore[no-untyped-def]
        """Package version must be 0.1.0."""
        import json5_editor

        assert json5_editor.__version__ == "0.1.0"

    def test_all_exports(self):  # type: ignore[no-untyped-def]
        """__all__ must include the documented public API."""
        import json5_editor

        expected = {
            "AutoIndentEngine",
            "BracketMatcher",
            "BracketPair",
            "Edit",
            "Editor",
            "EditorConfig",
            "FormatResult",
            "Formatter",
            "Json5Tokenizer",
            "KeyEvent",
            "LexicalToken",
            "PathAnnotator",
            "PropertyAnnotation",
            "Session",
            "SessionRegistry",
            "TokenKind",
            "annotate_paths",
            "format_json5",
            "format_json5_result",
            "match_brackets",
        }
        actual = set(json5_editor.__all__)
        assert expected == actual, (
            f"Missing: {expected - actual}, Extra: {actual - expected}"
        )
