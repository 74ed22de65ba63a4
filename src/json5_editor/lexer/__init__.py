"""Lexer subpackage for the JSON5 token stream.

Re-exports the public API for the lexer module:
- TokenKind: StrEnum of the token kinds the core understands
- LexicalToken: immutable (kind, content) token
- Json5Tokenizer: reference tokenizer for the editor's JSON5 dialect
"""

from json5_editor.lexer.grammar import Json5Tokenizer
from json5_editor.lexer.tokens import LexicalToken, TokenKind

__all__ = ["Json5Tokenizer", "LexicalToken", "TokenKind"]
