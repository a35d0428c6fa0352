"""
This module contains some handy defaults for the `schema-match` package.
"""
from pathlib import Path

# Names that can never appear as a declared file or directory
RESERVED_ENTRY_NAMES = frozenset({'.', '..'})

# Report rendering
MESSAGE_DELIMITER = ';\n'

# Command-line defaults
CONFIG_DIR = Path.home() / '.config' / 'schema-match'
SYSTEM_CONFIG_FILENAME = 'system.yml'
LOG_FILENAME = 'schema_match.log'

# Schema files
SCHEMA_FILE_SUFFIXES = ('.json', '.yml', '.yaml')

# Texture pack layout
PACK_INFO_BASENAME = 'pack_info'
PACK_INFO_EXTENSIONS = ('txt', 'json')
COLOR_TEXTURES_DIRNAME = 'Color Textures'
SHADOW_TEXTURES_DIRNAME = 'Shadow Textures'
SHAPE_TEXTURES_DIRNAME = 'Shape Textures'
