"""Serialization of flattened documents."""

import json
from pathlib import Path
from typing import Literal

import yaml
from upath import UPath

from flatapi.exceptions import OutputError
from flatapi.openapi.v3 import OpenAPI

OutputFormat = Literal['json', 'yaml']


def detect_format(path: UPath | Path | str) -> OutputFormat:
    suffix = UPath(path).suffix.lower()
    return 'yaml' if suffix in ('.yaml', '.yml') else 'json'


class DocumentWriter:
    """Writes OpenAPI documents as JSON or YAML.

    Paths go through ``UPath`` so any fsspec-supported location works.

    Example:
        >>> writer = DocumentWriter()
        >>> writer.write(document, 'flattened.yaml')
    """

    def dumps(self, document: OpenAPI, output_format: OutputFormat = 'json') -> str:
        data = document.to_dict()
        if output_format == 'yaml':
            return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        return json.dumps(data, indent=2, ensure_ascii=False) + '\n'

    def write(
        self,
        document: OpenAPI,
        path: UPath | Path | str,
        output_format: OutputFormat | None = None,
    ) -> UPath:
        """Write ``document`` to ``path``.

        The format defaults to YAML for ``.yaml``/``.yml`` suffixes and JSON
        otherwise.

        Raises:
            OutputError: If the file cannot be written.
        """
        path = UPath(path)
        content = self.dumps(document, output_format or detect_format(path))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise OutputError(str(path), cause=e)
        return path
