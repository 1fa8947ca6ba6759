"""Collision-free names for promoted definitions."""

import re
from collections.abc import Mapping

from flatapi.flatten.diagnostics import Diagnostics

__all__ = ('NULL_UNIQUE_NAME', 'NameResolver', 'sanitize_model_name')

NULL_UNIQUE_NAME = 'NULL_UNIQUE_NAME'


def sanitize_model_name(key: str) -> str:
    """Turn a context key into a registry-safe name.

    - Replace path separators with underscores (``/me/videos`` -> ``_me_videos``)
    - Strip every character not allowed in a component name
    """
    key = key.replace('/', '_')
    return re.sub(r'[^A-Za-z0-9_.\-]', '', key)


class NameResolver:
    """Chooses names for new registry entries.

    The base name is the schema title when present, otherwise the context key
    built by the caller. A taken name gets ``_1``, ``_2``, ... appended until a
    free one is found.

    Example:
        >>> resolver = NameResolver({'Pet': pet})
        >>> resolver.resolve('Pet', 'createPet_requestBody')
        'Pet_1'
    """

    def __init__(self, registry: Mapping, diagnostics: Diagnostics | None = None):
        self.registry = registry
        self.diagnostics = diagnostics or Diagnostics()

    def candidate(self, title: str | None, key: str | None) -> str:
        """Return the sanitized base name, before uniqueness is enforced."""
        if title is not None:
            key = title
        if key is None:
            self.diagnostics.warning(
                f'null key found. Default to {NULL_UNIQUE_NAME}'
            )
            key = NULL_UNIQUE_NAME
        return sanitize_model_name(key) or NULL_UNIQUE_NAME

    def unique(self, name: str) -> str:
        count = 0
        while True:
            candidate = name if count == 0 else f'{name}_{count}'
            if candidate not in self.registry:
                return candidate
            count += 1

    def resolve(self, title: str | None, key: str | None) -> str:
        return self.unique(self.candidate(title, key))
