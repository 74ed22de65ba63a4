"""Tokenizer Protocol for the json5-editor tokenizer extension point.

Defines the structural interface every tokenizer must satisfy. Hosts can
plug in their own tokenizer without inheriting from any base class: any
object with a conformant ``tokenize`` method passes ``isinstance`` checks.

Example::

    from json5_editor.lexer import LexicalToken, TokenKind
    from json5_editor.protocols import Tokenizer

    class WordTokenizer:
        def tokenize(self, text: str) -> list[LexicalToken]:
            return [LexicalToken(TokenKind.UNKNOWN, text)] if text else []

    assert isinstance(WordTokenizer(), Tokenizer)  # True: structural conformance
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json5_editor.lexer.tokens import LexicalToken


@runtime_checkable
class Tokenizer(Protocol):
    """Structural protocol for tokenizers.

    The ``tokenize`` method must:
    - Accept the full document text.
    - Return the tokens in source order, covering the text without gaps.
    - Use PUNCTUATION for ``{ } [ ] ,``, OPERATOR for ``:``, SEPARATOR for
      ``| ( )`` and PROPERTY for object keys.
    """

    def tokenize(self, text: str) -> Sequence[LexicalToken]: ...
