"""Tests for schema nodes, hydration and compilation."""
import json
import pytest
import yaml
from nodes import (
    SchemaNode,
    MISSING,
    CompiledSchema,
    SchemaCompiler,
    compile_schema,
    compile_schema_file,
    hydrate_schema,
    log_validation_failure
)
from registry import PluginKind, PluginRegistry
from extractors import BooleanExtractor
from utils.exceptions import SchemaError, UnknownPluginError


class TestHydration:
    """Tests for schema hydration."""

    def test_resolves_kind_and_hook(self):
        """Test hydration resolves the kind and installs the default hook."""
        node = SchemaNode(kind='boolean', name='flag')
        assert hydrate_schema(node) is node
        assert node.kind is PluginKind.BOOLEAN
        assert node.on_validation_failed is log_validation_failure
        assert node.hydrated

    def test_idempotent(self):
        """Test a second hydration leaves the node untouched."""
        node = hydrate_schema(SchemaNode(kind='oneOf', items=('a', 'b')))
        items = node.items
        hook = node.on_validation_failed
        hydrate_schema(node)
        assert node.items is items
        assert node.on_validation_failed is hook

    def test_items_normalized_to_list(self):
        """Test tuple items become a list."""
        node = hydrate_schema(SchemaNode(kind='oneOf', items=(1, 2)))
        assert node.items == [1, 2]

    def test_keeps_custom_hook(self):
        """Test a supplied hook is preserved."""
        def hook(node, value, reason):
            return None

        node = hydrate_schema(SchemaNode(kind='boolean', on_validation_failed=hook))
        assert node.on_validation_failed is hook

    def test_one_of_without_items(self):
        """Test oneOf nodes need a list of items."""
        with pytest.raises(SchemaError):
            hydrate_schema(SchemaNode(kind='oneOf'))
        with pytest.raises(SchemaError):
            hydrate_schema(SchemaNode(kind='oneOf', items='abc'))

    def test_unknown_kind(self):
        """Test unknown type names are rejected."""
        with pytest.raises(UnknownPluginError):
            hydrate_schema(SchemaNode(kind='string'))

    def test_non_callable_hook(self):
        """Test a non-callable hook is rejected."""
        with pytest.raises(SchemaError):
            hydrate_schema(SchemaNode(kind='boolean', on_validation_failed='log'))


class TestSchemaNode:
    """Tests for schema node helpers."""

    def test_with_hook_copies(self):
        """Test binding a hook does not modify the original node."""
        node = hydrate_schema(SchemaNode(kind='boolean', name='flag'))
        calls = []
        bound = node.with_hook(lambda *args: calls.append(args))
        assert bound is not node
        assert bound.hydrated
        assert node.on_validation_failed is log_validation_failure

    def test_to_dict(self):
        """Test serialization of the declarative fields."""
        node = hydrate_schema(SchemaNode(kind='oneOf', name='color', items=['red'], default='red'))
        assert node.to_dict() == {
            'type': 'oneOf',
            'required': True,
            'items': ['red'],
            'default': 'red',
        }

    def test_missing_sentinel(self):
        """Test the missing sentinel is a falsy singleton."""
        assert not MISSING
        assert repr(MISSING) == 'MISSING'
        assert SchemaNode(kind='boolean').default is MISSING
        assert not SchemaNode(kind='boolean').has_default


class TestSchemaCompiler:
    """Tests for schema compilation."""

    def test_compile(self):
        """Test compiling a document produces hydrated nodes."""
        schema = compile_schema({
            'active': 'boolean',
            'color': {'type': 'oneOf', 'items': ['red', 'green'], 'required': False},
        }, name='widget')

        assert isinstance(schema, CompiledSchema)
        assert schema.name == 'widget'
        assert schema.field_names == ['active', 'color']
        assert all(node.hydrated for node in schema.nodes())
        assert schema['active'].kind is PluginKind.BOOLEAN
        assert schema['color'].name == 'color'
        assert not schema['color'].required

    @pytest.mark.parametrize('declaration', [
        42,
        {'items': [1]},
        {'type': 'boolean', 'choices': [True]},
        {'type': 'boolean', 'required': 'yes'},
    ])
    def test_invalid_declarations(self, declaration):
        """Test malformed declarations are rejected."""
        with pytest.raises(SchemaError):
            compile_schema({'field': declaration})

    def test_document_must_be_mapping(self):
        """Test non-mapping documents are rejected."""
        with pytest.raises(SchemaError):
            compile_schema(['boolean'])

    def test_unknown_type(self):
        """Test unknown type names are rejected."""
        with pytest.raises(UnknownPluginError):
            compile_schema({'name': 'string'})

    def test_kind_missing_from_registry(self):
        """Test kinds without a plugin in the registry are rejected."""
        compiler = SchemaCompiler(PluginRegistry([BooleanExtractor()]))
        with pytest.raises(UnknownPluginError):
            compiler.compile({'color': {'type': 'oneOf', 'items': ['red']}})

    def test_round_trip_document(self):
        """Test a compiled schema converts back to its document."""
        document = {'active': {'type': 'boolean', 'required': True}}
        assert compile_schema(document).to_dict() == document

    def test_compile_yaml_file(self, tmp_path):
        """Test compiling a YAML schema file."""
        path = tmp_path / 'widget.yaml'
        path.write_text(yaml.safe_dump({
            'active': {'type': 'boolean'},
            'size': {'type': 'oneOf', 'items': ['s', 'm', 'l']},
        }))

        schema = compile_schema_file(path)
        assert schema.name == 'widget'
        assert schema['size'].items == ['s', 'm', 'l']

    def test_compile_json_file(self, tmp_path):
        """Test compiling a JSON schema file."""
        path = tmp_path / 'flags.json'
        path.write_text(json.dumps({'enabled': 'boolean'}))
        assert compile_schema_file(path).field_names == ['enabled']

    def test_compile_file_errors(self, tmp_path):
        """Test missing files and unknown formats are rejected."""
        with pytest.raises(SchemaError):
            compile_schema_file(tmp_path / 'absent.yaml')

        path = tmp_path / 'schema.toml'
        path.write_text('')
        with pytest.raises(SchemaError):
            compile_schema_file(path)

    def test_valid_defaults(self):
        """Test defaults that pass their plugin compile."""
        schema = compile_schema({
            'archived': {'type': 'boolean', 'required': False, 'default': False},
            'color': {'type': 'oneOf', 'items': ['red', 'green'], 'default': 'green'},
        })
        assert schema['archived'].default is False
        assert schema['color'].default == 'green'

    @pytest.mark.parametrize('declaration, reason', [
        ({'type': 'boolean', 'default': 'yes'}, 'not_a_boolean'),
        ({'type': 'boolean', 'default': None}, 'not_a_boolean'),
        ({'type': 'oneOf', 'items': ['red'], 'default': 'purple'}, 'not_one_of'),
        ({'type': 'oneOf', 'items': [1, 2], 'default': True}, 'not_one_of'),
    ])
    def test_invalid_defaults(self, declaration, reason):
        """Test defaults that fail their plugin are rejected."""
        with pytest.raises(SchemaError) as exc_info:
            compile_schema({'field': {'required': False, **declaration}})
        assert exc_info.value.details['field'] == 'field'
        assert exc_info.value.details['reason'] == reason

    @pytest.mark.parametrize('filename, content', [
        ('broken.yaml', 'a: [unclosed\n'),
        ('broken.json', '{"a": '),
    ])
    def test_malformed_file(self, tmp_path, caplog, filename, content):
        """Test parse errors surface as schema errors and are logged."""
        path = tmp_path / filename
        path.write_text(content)

        with caplog.at_level('ERROR', logger='schemaplug'):
            with pytest.raises(SchemaError) as exc_info:
                compile_schema_file(path)

        assert exc_info.value.details['filepath'] == str(path)
        assert exc_info.value.__cause__ is not None
        assert f'compile schema {filename} failed' in caplog.text

    @pytest.mark.parametrize('content', ['[]\n', '0\n', 'false\n'])
    def test_non_mapping_file(self, tmp_path, content):
        """Test falsy non-mapping documents are not compiled as empty schemas."""
        path = tmp_path / 'schema.yaml'
        path.write_text(content)
        with pytest.raises(SchemaError):
            compile_schema_file(path)

    def test_empty_file(self, tmp_path):
        """Test an empty YAML file compiles to an empty schema."""
        path = tmp_path / 'empty.yaml'
        path.write_text('')
        schema = compile_schema_file(path)
        assert len(schema) == 0
        assert schema.name == 'empty'
