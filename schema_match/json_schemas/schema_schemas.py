_schema_draft_version = 'https://json-schema.org/draft/2020-12/schema'
_entry_name_pattern = r'^[^/\\]+$'

# JSON schema for a directory schema file. Directory requirements nest
# through the "directory" definition.
DIRECTORY_SCHEMA_FILE_SCHEMA = {
    '$schema': _schema_draft_version,
    '$ref': '#/$defs/directory',
    '$defs': {
        'file': {
            'type': 'object',
            'properties': {
                'extensions': {
                    'type': 'array',
                    'items': {'type': 'string', 'pattern': r'^[^./\\][^/\\]*$'},
                    'minItems': 1,
                    'uniqueItems': True,
                },
                'quantifier': {
                    'type': 'string',
                    'enum': ['any', 'all', 'ANY', 'ALL'],
                },
                'mode': {'type': 'string', 'enum': ['any', 'all', 'ANY', 'ALL']},
            },
            'required': ['extensions'],
            'not': {'required': ['quantifier', 'mode']},
            'additionalProperties': False,
        },
        'directory': {
            'type': 'object',
            'properties': {
                'files': {
                    'type': 'object',
                    'propertyNames': {'pattern': _entry_name_pattern},
                    'additionalProperties': {'$ref': '#/$defs/file'},
                },
                'subdirs': {
                    'type': 'object',
                    'propertyNames': {'pattern': _entry_name_pattern},
                    'additionalProperties': {'$ref': '#/$defs/directory'},
                },
                'strict': {'type': 'boolean'},
            },
            'additionalProperties': False,
        },
    },
}

# JSON schema for the system configuration file. An empty file is allowed.
SYSTEM_CONFIG_SCHEMA = {
    '$schema': _schema_draft_version,
    'type': ['object', 'null'],
    'properties': {
        'message_delimiter': {'type': 'string', 'minLength': 1},
        'count_missing_recursively': {'type': 'boolean'},
        'log_level': {
            'type': 'string',
            'enum': ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        },
    },
    'additionalProperties': False,
}
