import json
import logging
from pathlib import Path
from typing import Any

from .defaults import (
    COLOR_TEXTURES_DIRNAME,
    PACK_INFO_BASENAME,
    PACK_INFO_EXTENSIONS,
    SHADOW_TEXTURES_DIRNAME,
    SHAPE_TEXTURES_DIRNAME,
)
from .filesystem import LOCAL_FILESYSTEM, EntryKind, FileSystem
from .match_directory import match_directory
from .pydantic_model_config import StrictBaseModel
from .results import DirectoryScanResult
from .schema import DirectoryRequirement, FileRequirement, Quantifier

logger = logging.getLogger(f'{__package__}.texture_pack')

TEXTURE_DIRNAMES = (
    COLOR_TEXTURES_DIRNAME,
    SHADOW_TEXTURES_DIRNAME,
    SHAPE_TEXTURES_DIRNAME,
)

TEXTURE_PACK_SCHEMA = DirectoryRequirement(
    files={
        PACK_INFO_BASENAME: FileRequirement(
            extensions=list(PACK_INFO_EXTENSIONS), quantifier=Quantifier.ANY
        )
    },
    subdirs={dirname: DirectoryRequirement() for dirname in TEXTURE_DIRNAMES},
)


class SchemaMismatchError(RuntimeError):
    """A directory that does not have the layout it is required to have."""

    def __init__(self, message: str, result: DirectoryScanResult) -> None:
        super().__init__(message)
        self.result = result


class TexturePackContents(StrictBaseModel, frozen=True):
    root: Path
    pack_info_path: Path
    pack_info: Any
    # Texture directory name -> sorted paths of the files inside it
    textures: dict[str, list[Path]]


def _list_textures(directory: Path, filesystem: FileSystem) -> list[Path]:
    return sorted(
        directory / entry.name
        for entry in filesystem.list_dir(directory)
        if entry.kind == EntryKind.FILE
    )


def load_texture_pack(
    directory: Path | str, filesystem: FileSystem = LOCAL_FILESYSTEM
) -> TexturePackContents:
    """
    Validate a texture pack directory and collect the files it declares.

    The pack info file is parsed as JSON but its fields are not
    interpreted.

    :param directory: The texture pack directory
    :type directory: `pathlib.Path` | `str`
    :param filesystem: The filesystem to scan, defaults to the real one
    :type filesystem: `FileSystem`, optional
    :raises `SchemaMismatchError`: If the directory does not match
    `TEXTURE_PACK_SCHEMA`
    :raises `ValueError`: If the pack info file is not valid JSON
    :return: The resolved pack info and texture files
    :rtype: `TexturePackContents`
    """
    directory = Path(directory)
    result = match_directory(TEXTURE_PACK_SCHEMA, directory, filesystem=filesystem)

    if not result.success:
        raise SchemaMismatchError(
            f'Failed to match directory schema: {result.message}', result=result
        )

    # An uninspectable pack info file is reported but not missing
    if not result.present_files:
        raise SchemaMismatchError(
            f'Could not read pack info: {result.message}', result=result
        )

    # pack_info resolves to exactly one file under ANY
    (pack_info_name,) = result.present_files
    pack_info_path = directory / pack_info_name

    try:
        pack_info = json.loads(pack_info_path.read_text())
    except json.JSONDecodeError as e:
        logger.error(f'Error reading {pack_info_path}: {e}')
        raise ValueError(f'Invalid pack info file {pack_info_path}') from e

    textures = {
        dirname: _list_textures(directory / dirname, filesystem)
        for dirname in TEXTURE_DIRNAMES
    }

    return TexturePackContents(
        root=directory,
        pack_info_path=pack_info_path,
        pack_info=pack_info,
        textures=textures,
    )
