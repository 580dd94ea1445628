"""screenlex: incremental Fountain screenplay tokenizer.

screenlex classifies every character of a Fountain screenplay into typed
tokens (scene headings, character cues, dialogue, notes, boneyard, inline
emphasis, and so on), one line at a time, and derives a live scene outline
from the classified document.
"""

from .config import ScreenlexSettings, get_logger, get_settings
from .outline import Scene, SceneScanner, extract_scenes, scan_scenes
from .tokenizer import (
    Document,
    IncrementalTokenizer,
    Token,
    TokenizerState,
    TokenType,
    handle_blank_line,
    tokenize,
    tokenize_document,
)
from .tree import SyntaxTree, ensure_syntax_tree, syntax_tree

__version__ = "0.1.0"

__all__ = [
    "Document",
    "IncrementalTokenizer",
    "Scene",
    "SceneScanner",
    "ScreenlexSettings",
    "SyntaxTree",
    "Token",
    "TokenType",
    "TokenizerState",
    "__version__",
    "ensure_syntax_tree",
    "extract_scenes",
    "get_logger",
    "get_settings",
    "handle_blank_line",
    "scan_scenes",
    "syntax_tree",
    "tokenize",
    "tokenize_document",
]
