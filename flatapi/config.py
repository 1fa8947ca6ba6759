import json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

from flatapi.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['flat.yaml', 'flat.yml']


class DocumentConfig(BaseModel):
    """Represents a single document to be flattened."""

    source: str = Field(..., description='Path or URL to the OpenAPI document.')

    output: str = Field(..., description='Path of the flattened document to write.')

    output_format: Literal['json', 'yaml'] | None = Field(
        None,
        description='Output format; inferred from the output suffix when omitted.',
    )


class FlattenConfig(BaseSettings):
    documents: list[DocumentConfig] = Field(
        ..., description='List of OpenAPI documents to process.'
    )

    resolve_external_refs: bool = Field(
        False, description='Whether to inline external $ref references on load.'
    )


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.safe_load(Path(path).read_text())


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text())


def _validate(data: dict, path: str | Path) -> FlattenConfig:
    try:
        return FlattenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(str(e), config_path=str(path))


def get_config(path: str | None = None) -> FlattenConfig:
    """Load configuration from a file, the working directory or pyproject.toml."""
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        if Path(path).suffix.lower() == '.json':
            return _validate(load_json(path), path)
        return _validate(load_yaml(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        path = Path(cwd) / filename
        if path.exists():
            return _validate(load_yaml(path), path)

    path = Path(os.getcwd()) / 'pyproject.toml'

    if path.exists():
        import tomllib

        pyproject = tomllib.loads(path.read_text())
        tools = pyproject.get('tool', {})

        if 'flatapi' in tools:
            return _validate(tools['flatapi'], path)

    raise ConfigurationError('config not found')
