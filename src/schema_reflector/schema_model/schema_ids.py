"""Schema identifier and naming helpers."""

from __future__ import annotations

from urllib.parse import urlsplit


class SchemaIDError(ValueError):
    """Raised when a schema identifier is not a usable absolute URL."""


class SchemaID(str):
    """Schema ``$id`` value with URL helpers."""

    __slots__ = ()

    def validate(self) -> None:
        """Check the identifier is an http(s) URL with a dotted host and a path."""
        try:
            parts = urlsplit(self)
            hostname = parts.hostname or ""
        except ValueError as exc:
            raise SchemaIDError(f"invalid URL: {exc}") from exc
        if not hostname:
            raise SchemaIDError("missing hostname")
        if "." not in hostname:
            raise SchemaIDError("hostname does not look valid")
        if not parts.path:
            raise SchemaIDError("path is expected")
        if parts.scheme not in ("https", "http"):
            raise SchemaIDError("unexpected schema")

    def is_valid(self) -> bool:
        try:
            self.validate()
        except SchemaIDError:
            return False
        return True

    def base(self) -> SchemaID:
        """Drop any fragment and trailing slashes."""
        base, _, _ = self.partition("#")
        return SchemaID(base.rstrip("/"))

    def add(self, path: str) -> SchemaID:
        """Append a path segment to the base identifier."""
        if not path.startswith("/"):
            path = "/" + path
        return SchemaID(self.base() + path)

    def anchor(self, name: str) -> SchemaID:
        return SchemaID(f"{self.base()}#{name}")

    def definition(self, name: str) -> SchemaID:
        return SchemaID(f"{self.base()}#/$defs/{name}")


EMPTY_ID = SchemaID("")


def to_snake_case(text: str) -> str:
    """Convert a CamelCase identifier into dash separated lower case.

    ``UserProfile`` becomes ``user-profile`` and ``HTTPServer`` becomes
    ``http-server``.
    """
    if not text:
        return ""
    out: list[str] = []
    previous = ""
    for index, char in enumerate(text):
        following = text[index + 1] if index + 1 < len(text) else ""
        if previous and _needs_dash(previous, char, following):
            out.append("-")
        out.append(char.lower())
        previous = char
    return "".join(out)


def _needs_dash(previous: str, current: str, following: str) -> bool:
    if current.isupper():
        return previous.islower() or previous.isdigit() or following.islower()
    if current.isdigit():
        return previous.islower()
    return False
