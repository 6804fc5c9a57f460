"""Test loading of API descriptions."""

import json

import httpx
import pytest
import yaml

from pontgen.codegen.schema_loader import SchemaLoader, extract_operations, extract_tags
from pontgen.codegen.types import Tag
from pontgen.exceptions import SchemaLoadError

from .fixtures import SWAGGER_SPEC, UNTAGGED_SPEC


def mock_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestSchemaLoader:
    """Test SchemaLoader.load."""

    def test_load_json_file(self, tmp_path):
        path = tmp_path / 'api.json'
        path.write_text(json.dumps(SWAGGER_SPEC))

        assert SchemaLoader().load(str(path)) == SWAGGER_SPEC

    def test_load_yaml_file_relative_to_base_path(self, tmp_path):
        (tmp_path / 'api.yaml').write_text(yaml.safe_dump(UNTAGGED_SPEC))

        assert SchemaLoader(base_path=tmp_path).load('api.yaml') == UNTAGGED_SPEC

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError) as exc_info:
            SchemaLoader().load(str(tmp_path / 'missing.json'))

        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / 'api.json'
        path.write_text('{"paths": ')

        with pytest.raises(SchemaLoadError):
            SchemaLoader().load(str(path))

    def test_document_without_paths(self, tmp_path):
        path = tmp_path / 'api.json'
        path.write_text(json.dumps({'openapi': '3.0.0'}))

        with pytest.raises(SchemaLoadError, match='paths'):
            SchemaLoader().load(str(path))

    def test_load_from_url(self):
        def handler(request):
            assert request.url == 'https://api.example.com/v2/api-docs'
            return httpx.Response(200, json=SWAGGER_SPEC)

        loader = SchemaLoader(http_client=mock_client(handler))
        assert loader.load('https://api.example.com/v2/api-docs') == SWAGGER_SPEC

    def test_load_yaml_from_url(self):
        def handler(request):
            return httpx.Response(
                200,
                text=yaml.safe_dump(UNTAGGED_SPEC),
                headers={'content-type': 'application/yaml'},
            )

        loader = SchemaLoader(http_client=mock_client(handler))
        assert loader.load('https://api.example.com/openapi') == UNTAGGED_SPEC

    def test_http_error(self):
        loader = SchemaLoader(
            http_client=mock_client(lambda request: httpx.Response(404))
        )

        with pytest.raises(SchemaLoadError) as exc_info:
            loader.load('https://api.example.com/v2/api-docs')

        assert exc_info.value.source == 'https://api.example.com/v2/api-docs'
        assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)


class TestExtractOperations:
    """Test extract_operations function."""

    def test_document_order(self):
        operations = extract_operations(SWAGGER_SPEC)

        assert [str(op) for op in operations] == [
            'GET /api/pet/list',
            'GET /api/pet/{petId}',
            'DELETE /api/pet/{petId}',
            'POST /api/store/order',
        ]

    def test_operation_fields(self):
        operation = extract_operations(SWAGGER_SPEC)[0]

        assert operation.operation_id == 'listPetsUsingGET'
        assert operation.description == 'List pets'
        assert operation.tags == ('pet-controller',)
        assert [p.name_sanitized for p in operation.query_parameters] == [
            'page_size',
            'status',
        ]

    def test_path_level_parameters_are_merged(self):
        get_pet = extract_operations(SWAGGER_SPEC)[1]

        assert [p.name for p in get_pet.path_parameters] == ['petId']
        assert get_pet.path_parameters[0].required is True

    def test_description_falls_back(self):
        operations = extract_operations(UNTAGGED_SPEC)

        assert operations[-1].description == 'Order items'
        assert operations[-1].operation_id is None
        assert operations[-1].tags == ()

    def test_references_and_non_operations_skipped(self):
        document = {
            'paths': {
                '/pets': {
                    'summary': 'Pets',
                    'parameters': [{'$ref': '#/components/parameters/Limit'}],
                    'get': {},
                }
            }
        }
        operations = extract_operations(document)

        assert len(operations) == 1
        assert operations[0].parameters == ()


class TestExtractTags:
    """Test extract_tags function."""

    def test_tags(self):
        assert extract_tags(SWAGGER_SPEC) == {
            'pet-controller': Tag('pet-controller', 'Pet Controller'),
            'store-order-controller': Tag(
                'store-order-controller', 'Store Order Controller'
            ),
        }

    def test_no_tags(self):
        assert extract_tags(UNTAGGED_SPEC) == {}
