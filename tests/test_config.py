from objectql import SchemaSettings, build_schema
from tests.fixtures import graphql_type


def test_defaults():
    settings = SchemaSettings()
    assert settings.id_field == '_id'
    assert settings.related_prefix == 'related__'
    assert settings.users_object == 'users'
    assert settings.query_type_name == 'RootQueryType'
    assert settings.mutation_type_name == 'MutationRootType'
    assert settings.auto_camel_case is False
    assert settings.enable_mutations is True


def test_from_env_reads_prefixed_variables():
    settings = SchemaSettings.from_env(environ={
        'OBJECTQL_RELATED_PREFIX': 'rel_',
        'OBJECTQL_ENABLE_MUTATIONS': 'false',
        'OBJECTQL_AUTO_CAMEL_CASE': 'yes',
        'OTHER_ID_FIELD': 'id',
    })
    assert settings.related_prefix == 'rel_'
    assert settings.enable_mutations is False
    assert settings.auto_camel_case is True
    assert settings.id_field == '_id'


def test_from_env_custom_prefix_and_bad_bool():
    settings = SchemaSettings.from_env('APP_', environ={'APP_QUERY_TYPE_NAME': 'Query', 'APP_ENABLE_MUTATIONS': 'maybe'})
    assert settings.query_type_name == 'Query'
    assert settings.enable_mutations is True


def test_from_env_loads_dotenv_file(tmp_path, monkeypatch):
    # registered with monkeypatch so the value loaded from the file is undone
    monkeypatch.setenv('OBJECTQL_USERS_OBJECT', 'placeholder')
    monkeypatch.delenv('OBJECTQL_USERS_OBJECT')
    env_file = tmp_path / '.env'
    env_file.write_text('OBJECTQL_USERS_OBJECT=people\n')
    settings = SchemaSettings.from_env(env_file=str(env_file))
    assert settings.users_object == 'people'


def test_settings_drive_schema(registry):
    settings = SchemaSettings(related_prefix='rel_', mutation_type_name='Mutation')
    schema = build_schema(registry, settings=settings)
    assert 'rel_contacts' in graphql_type(schema, 'accounts').fields
    assert graphql_type(schema, 'Mutation') is not None
