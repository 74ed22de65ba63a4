"""Integrations subpackage for json5-editor.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``assert_json5_canonical`` fixture
"""

from __future__ import annotations

__all__: list[str] = []
