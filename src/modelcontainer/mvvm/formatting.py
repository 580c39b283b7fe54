"""
Format Table - display templates keyed by accessor name.

Templates use `str.format` positional placeholders. A missing or unusable
template falls back to "{0} {1} ... {n-1}" sized to the arguments.
"""
from typing import Any, Dict, Iterator, Mapping, Optional
from loguru import logger

from modelcontainer.core.exceptions import DuplicateKeyError

_FORMAT_ERRORS = (IndexError, KeyError, ValueError, TypeError, AttributeError)


class FormatTable:
    """
    Per-view-model collection of format templates.

    Example:
        table = FormatTable()
        table.add("price", "{0:.2f} {1}")
        table.format("price", 9.5, "EUR")     # "9.50 EUR"
        table.format("missing", 1, 2)         # "1 2"
    """

    def __init__(self, templates: Optional[Mapping[str, str]] = None, separator: str = " "):
        self._templates: Dict[str, str] = dict(templates or {})
        self.separator = separator

    def __contains__(self, key: str) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def template(self, key: Optional[str], args_count: int = 1) -> str:
        """Template registered for `key`, or the positional fallback."""
        if key is None:
            return self.default_template(args_count)
        return self._templates.get(key, self.default_template(args_count))

    def default_template(self, count: int) -> str:
        return self.separator.join(f"{{{i}}}" for i in range(count))

    def format(self, key: Optional[str], *args: Any) -> str:
        """Render `args` with the template for `key`; never raises on template errors."""
        template = self.template(key, len(args))
        try:
            return template.format(*args)
        except _FORMAT_ERRORS as e:
            logger.debug(f"Format template '{template}' for '{key}' failed ({e}); using positional fallback")
            return self.default_template(len(args)).format(*args)

    def add(self, key: Optional[str], template: str) -> None:
        """
        Register a template.

        Raises:
            DuplicateKeyError: if `key` already has a template.
        """
        if key is None:
            return
        if key in self._templates:
            raise DuplicateKeyError(f"Format template for '{key}' already exists")
        self._templates[key] = template

    def remove(self, key: Optional[str]) -> None:
        if key is None:
            return
        self._templates.pop(key, None)

    def modify(self, key: Optional[str], template: str) -> None:
        self.remove(key)
        self.add(key, template)

    def clear(self) -> None:
        self._templates.clear()
