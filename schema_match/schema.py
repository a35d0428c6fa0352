"""
This module contains the declarative description of an expected
directory tree.

Classes:
    - `Quantifier`: How many accepted extensions of a file must exist

    - `FileRequirement`: Accepted extensions of one file and its
    quantifier

    - `DirectoryRequirement`: Files and subdirectories that must exist
    inside one directory
"""
from enum import Enum
from typing import Annotated

from pydantic import AliasChoices, Field, field_validator, model_validator

from .pydantic_model_config import StrictBaseModel
from .validated_types import EntryName, Extension


class Quantifier(str, Enum):
    ANY = 'any'
    ALL = 'all'


class FileRequirement(StrictBaseModel, frozen=True):
    """
    A file that must exist under one or more extensions.

    With `Quantifier.ANY`, one existing extension is enough. With
    `Quantifier.ALL`, every extension must exist as a separate file.
    Extensions are checked in the order they are declared.
    """

    extensions: Annotated[list[Extension], Field(min_length=1)]
    quantifier: Quantifier = Field(
        default=Quantifier.ALL, validation_alias=AliasChoices('quantifier', 'mode')
    )

    @field_validator('quantifier', mode='before')
    @classmethod
    def normalize_quantifier(cls, quantifier: object) -> object:
        return quantifier.lower() if isinstance(quantifier, str) else quantifier

    @field_validator('extensions', mode='after')
    @classmethod
    def validate_unique_extensions(cls, extensions: list[str]) -> list[str]:
        duplicates = {ext for ext in extensions if extensions.count(ext) > 1}
        if duplicates:
            raise ValueError(
                f'Extensions must be unique, but {sorted(duplicates)} are repeated'
            )

        return extensions

    def candidate_names(self, base_name: str) -> list[str]:
        return [f'{base_name}.{ext}' for ext in self.extensions]


class DirectoryRequirement(StrictBaseModel, frozen=True):
    """
    A directory with required files and required subdirectories.

    `files` maps a base file name (without extension) to its
    `FileRequirement`. `subdirs` maps a directory name to a nested
    `DirectoryRequirement`. When `strict` is set, real entries that
    are not declared here are reported as extras.
    """

    files: dict[EntryName, FileRequirement] = {}
    subdirs: dict[EntryName, 'DirectoryRequirement'] = {}
    strict: bool = False

    @model_validator(mode='after')
    def validate_disjoint_names(self) -> 'DirectoryRequirement':
        overlap = self.files.keys() & self.subdirs.keys()
        if overlap:
            raise ValueError(
                f'Names cannot be declared both as files and as subdirectories: {sorted(overlap)}'
            )

        return self

    @model_validator(mode='after')
    def validate_acyclic(self) -> 'DirectoryRequirement':
        ancestors: list[int] = []

        def visit(requirement: DirectoryRequirement, path: str) -> None:
            if id(requirement) in ancestors:
                raise ValueError(
                    f'Directory requirement at {path!r} contains itself as a descendant'
                )

            ancestors.append(id(requirement))
            for name, subdir in requirement.subdirs.items():
                visit(subdir, f'{path}/{name}')
            ancestors.pop()

        visit(self, '.')
        return self
