"""Loading of OpenAPI documents from files and URLs.

Documents are read as JSON or YAML from a local path or an http(s) URL,
optionally have their external ``$ref`` references inlined, and are then
validated into the OpenAPI 3.0 pydantic models the flattener works on.
"""

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urljoin, urlparse

import httpx
import yaml
from pydantic import TypeAdapter, ValidationError

from flatapi.exceptions import SchemaLoadError, SchemaValidationError
from flatapi.openapi.v3 import OpenAPI

logger = logging.getLogger(__name__)

__all__ = ['SchemaLoader']


class SchemaLoader:
    """Loads OpenAPI documents from URLs or file paths.

    Features:
        - Load from URLs (http/https) or local file paths
        - Support for both JSON and YAML formats
        - External $ref resolution for URLs and relative files
        - Caching of loaded external documents

    Example:
        >>> loader = SchemaLoader()
        >>> document = loader.load('https://api.example.com/openapi.json')
        >>> # or with external ref resolution
        >>> loader = SchemaLoader(resolve_external_refs=True)
        >>> document = loader.load('./api.yaml')
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        resolve_external_refs: bool = False,
        base_path: str | Path | None = None,
    ):
        """Initialize the schema loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
            resolve_external_refs: Whether to load and inline external $ref
                                  references (URLs and relative files).
            base_path: Base path for resolving relative file references.
                      Defaults to current working directory.
        """
        self._http_client = http_client
        self._resolve_external_refs = resolve_external_refs
        self._base_path = Path(base_path) if base_path else Path.cwd()
        self._external_cache: dict[str, Any] = {}

    def load(self, source: str) -> OpenAPI:
        """Load and validate an OpenAPI document from a URL or file path.

        Raises:
            SchemaLoadError: If the document cannot be loaded from the source.
            SchemaValidationError: If the document is not OpenAPI 3.0.
        """
        try:
            if self._is_url(source):
                content = self._load_from_url(source)
            else:
                source_path = Path(source)
                if not source_path.is_absolute():
                    source_path = self._base_path / source_path
                source = str(source_path)
                content = self._load_from_file(source)

            if self._resolve_external_refs:
                content = self._resolve_refs_recursive(content, source, set())

            return self.validate(content, source)

        except (SchemaLoadError, SchemaValidationError):
            raise
        except Exception as e:
            raise SchemaLoadError(source, cause=e)

    def validate(self, content: Any, source: str = '<memory>') -> OpenAPI:
        """Validate already parsed document content."""
        if not isinstance(content, dict):
            raise SchemaValidationError(source, errors=['Document root must be a mapping'])

        version = str(content.get('openapi', content.get('swagger', '')))
        if not version.startswith('3.0'):
            raise SchemaValidationError(
                source, errors=[f'Unsupported OpenAPI version {version or "(missing)"}']
            )

        try:
            return TypeAdapter(OpenAPI).validate_python(content)
        except ValidationError as e:
            raise SchemaValidationError(
                source, errors=[error['msg'] for error in e.errors()]
            )

    def _is_url(self, text: str) -> bool:
        try:
            result = urlparse(text)
            return result.scheme in ('http', 'https')
        except ValueError:
            return False

    def _load_from_url(self, url: str) -> Any:
        try:
            if self._http_client:
                response = self._http_client.get(url)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=30.0)

            response.raise_for_status()
            content_type = response.headers.get('content-type', '')
            content = response.text

            if 'yaml' in content_type or url.endswith(('.yaml', '.yml')):
                return yaml.safe_load(content)
            return json.loads(content)

        except httpx.HTTPError as e:
            raise SchemaLoadError(url, cause=e)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(url, cause=e)

    def _load_from_file(self, file_path: str) -> Any:
        path = Path(file_path)
        if not path.is_absolute():
            path = self._base_path / path

        if not path.exists():
            raise SchemaLoadError(
                str(file_path), cause=FileNotFoundError(f'File not found: {path}')
            )

        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix.lower() in ('.yaml', '.yml'):
                return yaml.safe_load(content)
            return json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(str(file_path), cause=e)
        except OSError as e:
            raise SchemaLoadError(str(file_path), cause=e)

    def _resolve_refs_recursive(self, obj: Any, base: str, visited: set[str]) -> Any:
        if isinstance(obj, dict):
            ref = obj.get('$ref')
            if isinstance(ref, str) and not ref.startswith('#'):
                return self._resolve_external_ref(ref, base, visited)
            return {
                key: self._resolve_refs_recursive(value, base, visited)
                for key, value in obj.items()
            }
        if isinstance(obj, list):
            return [self._resolve_refs_recursive(item, base, visited) for item in obj]
        return obj

    def _resolve_external_ref(self, ref: str, base: str, visited: set[str]) -> Any:
        file_part, _, pointer = ref.partition('#')

        if self._is_url(file_part):
            location = file_part
        elif self._is_url(base):
            location = urljoin(base, file_part)
        else:
            location = str(Path(base).parent / file_part)

        cache_key = f'{location}#{pointer}'
        if cache_key in visited:
            logger.warning(f'Circular reference detected: {cache_key}')
            return {'$ref': ref}
        visited = visited | {cache_key}

        if location not in self._external_cache:
            try:
                if self._is_url(location):
                    self._external_cache[location] = self._load_from_url(location)
                else:
                    self._external_cache[location] = self._load_from_file(location)
            except SchemaLoadError:
                logger.warning(f'Failed to resolve external reference: {ref}')
                return {'$ref': ref}

        content = self._external_cache[location]
        if pointer:
            content = self._resolve_json_pointer(content, pointer)

        return self._resolve_refs_recursive(content, location, visited)

    def _resolve_json_pointer(self, obj: Any, pointer: str) -> Any:
        if not pointer or pointer == '/':
            return obj

        current = obj
        for part in pointer.strip('/').split('/'):
            part = part.replace('~1', '/').replace('~0', '~')
            if isinstance(current, dict):
                if part not in current:
                    raise ValueError(f'JSON pointer path not found: {pointer}')
                current = current[part]
            elif isinstance(current, list):
                try:
                    current = current[int(part)]
                except (ValueError, IndexError):
                    raise ValueError(f'JSON pointer path not found: {pointer}')
            else:
                raise ValueError(f'JSON pointer path not found: {pointer}')

        return current
