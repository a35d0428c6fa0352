"""
This module contains the reports produced by the matchers.

Classes:
    - `DiagnosticKind`: The taxonomy of discrepancies

    - `EntryDiagnostic`: A declared entry that is missing, or a real
    entry that was not declared

    - `AccessError`: An inspection that failed for a reason other than
    absence

    - `TypeMismatch`: An entry that exists as the wrong kind of object

    - `FileScanResult`: The outcome of matching one file requirement

    - `DirectoryScanResult`: The outcome of matching one directory
    requirement, with nested outcomes for its subdirectories
"""
from collections.abc import Iterable
from enum import Enum
from typing import Literal

from pydantic import NonNegativeInt

from .defaults import MESSAGE_DELIMITER
from .filesystem import EntryKind
from .pydantic_model_config import StrictBaseModel


class DiagnosticKind(str, Enum):
    STRUCTURAL_ABSENCE = 'structural_absence'
    TYPE_MISMATCH = 'type_mismatch'
    ACCESS_ERROR = 'access_error'
    EXTRA_ENTRY = 'extra_entry'


def pluralize(count: int, singular: str, plural: str) -> str:
    return f'{count} {singular if count == 1 else plural}'


def describe_contents(files: int, subdirs: int) -> str:
    return f"{pluralize(files, 'file', 'files')} and {pluralize(subdirs, 'subdirectory', 'subdirectories')}"


class EntryDiagnostic(StrictBaseModel, frozen=True):
    path: str
    kind: Literal[DiagnosticKind.STRUCTURAL_ABSENCE, DiagnosticKind.EXTRA_ENTRY]
    entry_type: EntryKind
    message: str
    files: NonNegativeInt | None = None
    subdirs: NonNegativeInt | None = None

    def render(self) -> str:
        return self.message


class AccessError(StrictBaseModel, frozen=True):
    path: str
    message: str
    kind: Literal[DiagnosticKind.ACCESS_ERROR] = DiagnosticKind.ACCESS_ERROR

    def render(self) -> str:
        return f"FS Access Error at '{self.path}': {self.message}"


class TypeMismatch(StrictBaseModel, frozen=True):
    path: str
    expected: EntryKind
    found: EntryKind
    kind: Literal[DiagnosticKind.TYPE_MISMATCH] = DiagnosticKind.TYPE_MISMATCH

    def render(self) -> str:
        return f"Type Mismatch at '{self.path}': expected {self.expected.value} but found {self.found.value}"


class FileScanResult(StrictBaseModel, frozen=True):
    success: bool
    missing_extensions: list[str] = []
    type_mismatches: list[TypeMismatch] = []
    access_errors: list[AccessError] = []
    resolved_extensions: frozenset[str] = frozenset()
    message: str = ''


class DirectoryScanResult(StrictBaseModel, frozen=True):
    success: bool
    missing_files: list[EntryDiagnostic] = []
    missing_dirs: list[EntryDiagnostic] = []
    extra_files: list[EntryDiagnostic] = []
    extra_dirs: list[EntryDiagnostic] = []
    access_errors: list[AccessError] = []
    type_mismatches: list[TypeMismatch] = []
    nested_results: dict[str, 'DirectoryScanResult'] = {}
    present_files: frozenset[str] = frozenset()
    message: str = ''

    @property
    def diagnostics(self) -> list[EntryDiagnostic | AccessError | TypeMismatch]:
        """Every diagnostic at this level, in the order they are rendered."""
        return [
            *self.missing_files,
            *self.missing_dirs,
            *self.extra_files,
            *self.extra_dirs,
            *self.access_errors,
            *self.type_mismatches,
        ]


def render_message(
    diagnostics: Iterable[EntryDiagnostic | AccessError | TypeMismatch],
    delimiter: str = MESSAGE_DELIMITER,
) -> str:
    return delimiter.join(diagnostic.render() for diagnostic in diagnostics)
