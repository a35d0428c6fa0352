"""
This module contains functions related to loading configuration and
schema files that are used in `main.py` to create a command-line
interface.

Functions:
    - `load_data`: Load data from a JSON or YAML file, validating it
    against a JSON schema

    - `load_schema`: Load a `DirectoryRequirement` from a file

    - `load_system_config`: Load the tool's `SystemConfig`
"""
from json import JSONDecodeError
from json import load as load_json
from pathlib import Path
from typing import Any, Literal

from jsonschema import ValidationError, validate
from pydantic import ValidationError as PydanticValidationError
from yaml import YAMLError
from yaml import safe_load as safe_load_yml

from .defaults import MESSAGE_DELIMITER, SCHEMA_FILE_SUFFIXES
from .json_schemas.schema_schemas import (
    DIRECTORY_SCHEMA_FILE_SCHEMA,
    SYSTEM_CONFIG_SCHEMA,
)
from .pydantic_model_config import StrictBaseModel
from .schema import DirectoryRequirement


class SchemaFileError(ValueError):
    """A schema or configuration file that cannot be used."""


class SystemConfig(StrictBaseModel, frozen=True):
    message_delimiter: str = MESSAGE_DELIMITER
    count_missing_recursively: bool = True
    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'INFO'


def load_data(data_path: Path, schema: dict = {}) -> Any:
    """
    Load data from a file, validating it against a schema

    :param data_path: Path to the file to load
    :type data_path: `pathlib.Path`
    :param schema: JSON schema to validate the data against, defaults
    to `{}`
    :type schema: `dict`, optional
    :raises `SchemaFileError`: If the file extension is not supported,
    the file cannot be parsed, or the data is invalid against the schema
    :return: The loaded data
    :rtype: Any
    """
    loaders = {'.json': load_json, '.yml': safe_load_yml, '.yaml': safe_load_yml}

    if data_path.suffix not in loaders:
        raise SchemaFileError(
            f'File extension {data_path.suffix!r} of {data_path} is not supported. Use one of {SCHEMA_FILE_SUFFIXES}.'
        )

    try:
        with data_path.open() as f:
            data = loaders[data_path.suffix](f)
    except (JSONDecodeError, YAMLError) as e:
        raise SchemaFileError(f'{data_path} could not be parsed:\n{e}') from e

    try:
        validate(data, schema=schema)
    except ValidationError as e:
        raise SchemaFileError(
            f'{data_path} is incorrectly formatted:\n{e.message}'
        ) from e

    return data


def load_schema(schema_path: Path) -> DirectoryRequirement:
    """
    Load a directory schema from a JSON or YAML file.

    :param schema_path: Path to the schema file
    :type schema_path: `pathlib.Path`
    :raises `SchemaFileError`: If the file cannot be used as a schema
    :return: The directory requirement the file describes
    :rtype: `DirectoryRequirement`
    """
    raw_schema = load_data(schema_path, schema=DIRECTORY_SCHEMA_FILE_SCHEMA)

    try:
        return DirectoryRequirement.model_validate(raw_schema)
    except PydanticValidationError as e:
        raise SchemaFileError(f'{schema_path} is not a valid schema:\n{e}') from e


def load_system_config(config_path: Path) -> SystemConfig:
    if not config_path.is_file():
        return SystemConfig()

    raw_system_config = load_data(config_path, schema=SYSTEM_CONFIG_SCHEMA)

    # An empty file is the default configuration
    return SystemConfig.model_validate(raw_system_config or {})
