"""Test configuration for flatapi package."""

import json

import pytest
import yaml

from flatapi.config import DocumentConfig, FlattenConfig, get_config
from flatapi.exceptions import ConfigurationError


class TestDocumentConfig:
    """Test DocumentConfig model."""

    def test_valid_document_config(self):
        """Test creating a valid DocumentConfig."""
        config = DocumentConfig(source='./openapi.yaml', output='./flat.yaml')
        assert config.source == './openapi.yaml'
        assert config.output == './flat.yaml'
        assert config.output_format is None

    def test_document_config_validation(self):
        """Test DocumentConfig validation."""
        with pytest.raises(ValueError):
            DocumentConfig()  # missing required fields

    def test_invalid_output_format(self):
        """Test that only json and yaml are accepted as formats."""
        with pytest.raises(ValueError):
            DocumentConfig(source='a.yaml', output='b.xml', output_format='xml')


class TestFlattenConfig:
    """Test FlattenConfig model."""

    def test_defaults(self):
        """Test FlattenConfig defaults."""
        config = FlattenConfig(
            documents=[DocumentConfig(source='a.yaml', output='b.yaml')]
        )
        assert len(config.documents) == 1
        assert config.resolve_external_refs is False


class TestGetConfig:
    """Test get_config function."""

    def test_explicit_yaml(self, tmp_path):
        """Test loading an explicit YAML file."""
        path = tmp_path / 'custom.yaml'
        path.write_text(
            yaml.safe_dump(
                {
                    'documents': [{'source': 'api.yaml', 'output': 'flat.yaml'}],
                    'resolve_external_refs': True,
                }
            )
        )

        config = get_config(str(path))

        assert config.documents[0].source == 'api.yaml'
        assert config.resolve_external_refs is True

    def test_explicit_json(self, tmp_path):
        """Test loading an explicit JSON file."""
        path = tmp_path / 'custom.json'
        path.write_text(
            json.dumps({'documents': [{'source': 'api.json', 'output': 'flat.json'}]})
        )

        config = get_config(str(path))

        assert config.documents[0].output == 'flat.json'

    def test_explicit_missing(self, tmp_path):
        """Test that a missing explicit file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match='not found'):
            get_config(str(tmp_path / 'nope.yaml'))

    def test_default_filename(self, tmp_path, monkeypatch):
        """Test that flat.yml in the working directory is discovered."""
        (tmp_path / 'flat.yml').write_text(
            yaml.safe_dump({'documents': [{'source': 'api.yaml', 'output': 'o.yaml'}]})
        )
        monkeypatch.chdir(tmp_path)

        config = get_config()

        assert config.documents[0].output == 'o.yaml'

    def test_pyproject(self, tmp_path, monkeypatch):
        """Test that the [tool.flatapi] table of pyproject.toml is used."""
        (tmp_path / 'pyproject.toml').write_text(
            '[tool.flatapi]\n'
            'resolve_external_refs = true\n'
            '\n'
            '[[tool.flatapi.documents]]\n'
            'source = "api.yaml"\n'
            'output = "flat.yaml"\n'
        )
        monkeypatch.chdir(tmp_path)

        config = get_config()

        assert config.documents[0].source == 'api.yaml'
        assert config.resolve_external_refs is True

    def test_not_found(self, tmp_path, monkeypatch):
        """Test that an empty directory raises ConfigurationError."""
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigurationError, match='config not found'):
            get_config()

    def test_invalid_content(self, tmp_path):
        """Test that invalid content names the offending file."""
        path = tmp_path / 'flat.yaml'
        path.write_text(yaml.safe_dump({'documents': [{'source': 'api.yaml'}]}))

        with pytest.raises(ConfigurationError) as exc_info:
            get_config(str(path))

        assert exc_info.value.config_path == str(path)
