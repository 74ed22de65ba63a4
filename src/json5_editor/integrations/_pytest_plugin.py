"""pytest plugin for json5-editor.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

import difflib
from typing import Any

import pytest

from json5_editor import EditorConfig, format_json5_result


@pytest.fixture(scope="session")
def assert_json5_canonical() -> Any:
    """Fixture that returns a callable canonical-form asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to format_json5_result() which builds a fresh Formatter per call).

    Usage in tests::

        def test_config_file_is_formatted(assert_json5_canonical):
            assert_json5_canonical(Path("settings.json5").read_text())

        def test_messy_text(assert_json5_canonical):
            with pytest.raises(AssertionError, match=r"not canonical"):
                assert_json5_canonical("{a:1}")

    Returns:
        A callable ``_assert(text, config=None) -> None`` that raises
        ``AssertionError`` when ``text`` is unbalanced or differs from its
        canonical form.
    """

    def _assert(text: str, config: EditorConfig | None = None) -> None:
        """Assert that ``text`` is already in canonical JSON5 form.

        Args:
            text:   The document text produced by the code under test.
            config: Optional EditorConfig (e.g. a custom indent width).

        Raises:
            AssertionError: When the text is unbalanced, or when formatting
                would change it; the message carries a unified diff.
        """
        result = format_json5_result(text, config=config)
        if not result.ok:
            raise AssertionError(f"JSON5 text is structurally unbalanced:\n{text}")
        if result.text != text:
            diff = "\n".join(
                difflib.unified_diff(
                    text.splitlines(),
                    result.text.splitlines(),
                    fromfile="actual",
                    tofile="canonical",
                    lineterm="",
                )
            )
            raise AssertionError(f"JSON5 text is not canonical:\n{diff}")

    return _assert
