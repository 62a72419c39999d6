"""Collect class and attribute docstrings from Python source into a comment map."""

from __future__ import annotations

import ast
import importlib
import inspect
import logging
from collections.abc import Iterator
from types import ModuleType

LOGGER = logging.getLogger(__name__)


class CommentExtractionError(Exception):
    """Raised when the source of a module cannot be read or parsed."""


def collect_doc_comments(*modules: ModuleType | str) -> dict[str, str]:
    """Return documentation keyed by ``module.Qualname`` and ``module.Qualname.field``.

    Class docstrings document the class itself. A string literal placed right
    after an annotated class attribute documents that attribute::

        @dataclass
        class User:
            \"\"\"An account holder.\"\"\"

            name: str
            \"\"\"Display name.\"\"\"
    """
    comments: dict[str, str] = {}
    for module in modules:
        resolved = _import_module(module)
        tree = _parse_module(resolved)
        for key, text in _walk_classes(tree.body, resolved.__name__):
            comments[key] = text
        LOGGER.debug("Collected %d doc comments up to module %s", len(comments), resolved.__name__)
    return comments


def _import_module(module: ModuleType | str) -> ModuleType:
    if isinstance(module, ModuleType):
        return module
    try:
        return importlib.import_module(module)
    except ImportError as exc:
        raise CommentExtractionError(f"Cannot import module {module}: {exc}") from exc


def _parse_module(module: ModuleType) -> ast.Module:
    try:
        source = inspect.getsource(module)
    except (OSError, TypeError) as exc:
        raise CommentExtractionError(
            f"Source of {module.__name__} is not available: {exc}"
        ) from exc
    try:
        return ast.parse(source)
    except SyntaxError as exc:
        raise CommentExtractionError(
            f"Source of {module.__name__} cannot be parsed: {exc}"
        ) from exc


def _walk_classes(body: list[ast.stmt], prefix: str) -> Iterator[tuple[str, str]]:
    for node in body:
        if not isinstance(node, ast.ClassDef):
            continue
        qualified = f"{prefix}.{node.name}"
        docstring = ast.get_docstring(node)
        if docstring:
            yield qualified, docstring
        yield from _attribute_docstrings(node.body, qualified)
        yield from _walk_classes(node.body, qualified)


def _attribute_docstrings(body: list[ast.stmt], prefix: str) -> Iterator[tuple[str, str]]:
    for current, following in zip(body, body[1:]):
        if not isinstance(current, ast.AnnAssign) or not isinstance(current.target, ast.Name):
            continue
        if not isinstance(following, ast.Expr):
            continue
        value = following.value
        if isinstance(value, ast.Constant) and isinstance(value.value, str):
            yield f"{prefix}.{current.target.id}", inspect.cleandoc(value.value)
