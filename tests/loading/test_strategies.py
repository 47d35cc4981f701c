"""Tests for the loading strategies and the JSON document module loader."""

import json
import sys

import pytest
from wisp.loading import strategies
from wisp.loading.strategies import DOCUMENT_NAMESPACE
from wisp.loading.strategies import JsonDocumentLoader
from wisp.loading.strategies import default_export
from wisp.loading.strategies import document_module_name
from wisp.loading.strategies import import_with_type_assertion
from wisp.loading.strategies import import_with_type_attribute
from wisp.loading.strategies import read_json

SAMPLE = {"foo": "bar", "nested": {"ok": True}}


@pytest.fixture
def sample_url(sample_path):
    return sample_path.as_uri()


def registered_documents():
    return [name for name in sys.modules if name.startswith(DOCUMENT_NAMESPACE + ".")]


def test_module_names_are_stable_and_distinct(sample_url):
    name = document_module_name(sample_url)

    assert name.startswith(DOCUMENT_NAMESPACE + ".")
    assert name == document_module_name(sample_url)
    assert name != document_module_name(sample_url + "x")


@pytest.mark.parametrize("strategy", [import_with_type_attribute, import_with_type_assertion])
class TestImportStrategies:
    """Behavior shared by both import strategies."""

    def test_imports_document_as_module(self, strategy, sample_url, sample_path):
        module = strategy(sample_url, "json")

        assert default_export(module) == SAMPLE
        assert module.__file__ == str(sample_path)
        assert module.__name__ == document_module_name(sample_url)
        assert module.document_type == "json"

    def test_module_is_not_registered(self, strategy, sample_url):
        strategy(sample_url, "json")

        assert registered_documents() == []

    def test_each_call_reads_the_file(self, strategy, tmp_path):
        document = tmp_path / "doc.json"
        document.write_text(json.dumps({"v": 1}))
        first = strategy(document.as_uri(), "json")

        document.write_text(json.dumps({"v": 2}))
        second = strategy(document.as_uri(), "json")

        assert first is not second
        assert default_export(first) == {"v": 1}
        assert default_export(second) == {"v": 2}

    def test_unsupported_type(self, strategy, sample_url):
        with pytest.raises(ImportError, match="Unsupported document type 'css'"):
            strategy(sample_url, "css")

    def test_missing_file(self, strategy, tmp_path):
        with pytest.raises(FileNotFoundError):
            strategy((tmp_path / "missing.json").as_uri(), "json")

    def test_invalid_json(self, strategy, fixtures_dir):
        with pytest.raises(json.JSONDecodeError):
            strategy((fixtures_dir / "broken.json").as_uri(), "json")

    def test_rejects_non_standard_constants(self, strategy, tmp_path):
        document = tmp_path / "nan.json"
        document.write_text('{"ratio": NaN}')

        with pytest.raises(ValueError, match="Invalid JSON constant: NaN"):
            strategy(document.as_uri(), "json")


def test_type_carried_on_spec(sample_url):
    module = import_with_type_attribute(sample_url, "json")

    assert module.__spec__.loader_state == {"type": "json"}


def test_type_asserted_on_loader(sample_url):
    module = import_with_type_assertion(sample_url, "json")

    assert isinstance(module.__loader__, JsonDocumentLoader)
    assert module.__loader__.asserted_type == "json"


class TestReadJson:
    def test_reads_and_parses(self, sample_url):
        assert read_json(sample_url) == SAMPLE

    def test_applies_reviver(self, sample_url):
        value = read_json(sample_url, lambda k, v: "modified" if k == "foo" else v)

        assert value["foo"] == "modified"

    def test_is_not_registered(self, sample_url):
        read_json(sample_url)

        assert registered_documents() == []

    def test_non_file_url(self):
        with pytest.raises(ValueError):
            strategies.read_json("https://example.com/a.json")
