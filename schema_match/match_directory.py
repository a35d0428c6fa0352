"""
This module contains the recursive matcher that checks a real
directory tree against a `DirectoryRequirement`.

Functions:
    - `match_directory`: Match one directory and every declared
    subdirectory below it
"""
import logging
from pathlib import Path

from .counter import count_expected
from .defaults import MESSAGE_DELIMITER
from .filesystem import LOCAL_FILESYSTEM, DirEntry, EntryKind, FileSystem
from .match_file import match_file
from .results import (
    AccessError,
    DiagnosticKind,
    DirectoryScanResult,
    EntryDiagnostic,
    TypeMismatch,
    describe_contents,
    render_message,
)
from .schema import DirectoryRequirement, Quantifier

logger = logging.getLogger(f'{__package__}.match_directory')


def _missing_root_result(directory: Path) -> DirectoryScanResult:
    return DirectoryScanResult(
        success=False,
        access_errors=[
            AccessError(
                path=str(directory),
                message=f"Root target directory does not exist: '{directory.name}'",
            )
        ],
        message=f"Missing directory: '{directory.name}'",
    )


def _missing_dir_diagnostic(
    name: str, requirement: DirectoryRequirement, recursive: bool
) -> EntryDiagnostic:
    expected = count_expected(requirement, recursive=recursive)
    return EntryDiagnostic(
        path=name,
        kind=DiagnosticKind.STRUCTURAL_ABSENCE,
        entry_type=EntryKind.DIRECTORY,
        message=f"Missing directory: '{name}' with {describe_contents(expected.files, expected.subdirs)}",
        files=expected.files,
        subdirs=expected.subdirs,
    )


def _extra_dir_diagnostic(
    directory: Path, name: str, filesystem: FileSystem
) -> EntryDiagnostic:
    # Only the extra directory's own entries are counted, never its subtree
    try:
        entries = filesystem.list_dir(directory / name)
    except OSError as e:
        logger.debug(f'Could not count the contents of {directory / name}: {e}')
        return EntryDiagnostic(
            path=name,
            kind=DiagnosticKind.EXTRA_ENTRY,
            entry_type=EntryKind.DIRECTORY,
            message=f"Extra directory: '{name}'",
        )

    n_subdirs = sum(entry.kind == EntryKind.DIRECTORY for entry in entries)
    n_files = len(entries) - n_subdirs

    return EntryDiagnostic(
        path=name,
        kind=DiagnosticKind.EXTRA_ENTRY,
        entry_type=EntryKind.DIRECTORY,
        message=f"Extra directory: '{name}' with {describe_contents(n_files, n_subdirs)}",
        files=n_files,
        subdirs=n_subdirs,
    )


def _extra_file_diagnostic(entry: DirEntry) -> EntryDiagnostic:
    return EntryDiagnostic(
        path=entry.name,
        kind=DiagnosticKind.EXTRA_ENTRY,
        entry_type=entry.kind,
        message=f"Extra file: '{entry.name}'",
    )


def match_directory(
    requirement: DirectoryRequirement,
    directory: Path | str,
    filesystem: FileSystem = LOCAL_FILESYSTEM,
    delimiter: str = MESSAGE_DELIMITER,
    count_missing_recursively: bool = True,
) -> DirectoryScanResult:
    """
    Match `directory` against `requirement`, recursing into every
    declared subdirectory that exists.

    A nonexistent `directory` is reported in the returned result. Any
    other failure to list `directory` itself is raised. Failures below
    it, including failures to list a declared subdirectory, are
    captured in the result.

    :param requirement: The expected layout of `directory`
    :type requirement: `DirectoryRequirement`
    :param directory: The real directory to check
    :type directory: `pathlib.Path` | `str`
    :param filesystem: The filesystem to inspect, defaults to the real one
    :type filesystem: `FileSystem`, optional
    :param delimiter: Separator between rendered diagnostics, defaults
    to `defaults.MESSAGE_DELIMITER`
    :type delimiter: `str`, optional
    :param count_missing_recursively: Whether the expected size of a
    missing subdirectory includes everything declared below it,
    defaults to `True`
    :type count_missing_recursively: `bool`, optional
    :raises OSError: If `directory` exists but cannot be listed
    :return: A report for `directory`, with one nested report per
    declared subdirectory that could be scanned
    :rtype: `DirectoryScanResult`
    """
    directory = Path(directory)
    logger.debug(f'Scanning {directory}')

    try:
        dir_entries = filesystem.list_dir(directory)
    except FileNotFoundError:
        return _missing_root_result(directory)
    except OSError as e:
        logger.error(f'Could not list {directory}: {e}')
        raise

    entry_kinds: dict[str, EntryKind] = {entry.name: entry.kind for entry in dir_entries}

    success = True
    missing_files: list[EntryDiagnostic] = []
    missing_dirs: list[EntryDiagnostic] = []
    extra_files: list[EntryDiagnostic] = []
    extra_dirs: list[EntryDiagnostic] = []
    access_errors: list[AccessError] = []
    type_mismatches: list[TypeMismatch] = []
    nested_results: dict[str, DirectoryScanResult] = {}

    # Exact file names that satisfy a file requirement, and names
    # already reported as type mismatches or access errors. Neither can
    # be an extra.
    file_whitelist: set[str] = set()
    reported_names: set[str] = set()

    for base_name, file_requirement in requirement.files.items():
        file_result = match_file(
            file_requirement, directory, base_name, filesystem=filesystem
        )
        success = success and file_result.success

        file_whitelist.update(
            f'{base_name}.{ext}' for ext in file_result.resolved_extensions
        )
        access_errors.extend(file_result.access_errors)
        type_mismatches.extend(file_result.type_mismatches)
        reported_names.update(
            Path(diagnostic.path).name
            for diagnostic in [*file_result.type_mismatches, *file_result.access_errors]
        )

        if file_result.success:
            continue

        if file_requirement.quantifier == Quantifier.ANY:
            missing_files.append(
                EntryDiagnostic(
                    path=base_name,
                    kind=DiagnosticKind.STRUCTURAL_ABSENCE,
                    entry_type=EntryKind.FILE,
                    message=file_result.message,
                )
            )
            continue

        for ext in file_result.missing_extensions:
            file_name = f'{base_name}.{ext}'
            missing_files.append(
                EntryDiagnostic(
                    path=file_name,
                    kind=DiagnosticKind.STRUCTURAL_ABSENCE,
                    entry_type=EntryKind.FILE,
                    message=f"Missing file: '{file_name}'",
                )
            )

    for subdir_name, subdir_requirement in requirement.subdirs.items():
        subdir_path = directory / subdir_name
        kind = entry_kinds.get(subdir_name)

        if kind != EntryKind.DIRECTORY:
            success = False

            if kind is not None:
                type_mismatches.append(
                    TypeMismatch(
                        path=str(subdir_path), expected=EntryKind.DIRECTORY, found=kind
                    )
                )
                reported_names.add(subdir_name)

            # Nothing below a missing directory is scanned
            missing_dirs.append(
                _missing_dir_diagnostic(
                    subdir_name, subdir_requirement, recursive=count_missing_recursively
                )
            )
            continue

        try:
            subdir_result = match_directory(
                subdir_requirement,
                subdir_path,
                filesystem=filesystem,
                delimiter=delimiter,
                count_missing_recursively=count_missing_recursively,
            )
        except OSError as e:
            success = False
            access_errors.append(
                AccessError(path=str(subdir_path), message=f'Error listing {subdir_path}: {e}')
            )
            continue

        nested_results[subdir_name] = subdir_result
        success = success and subdir_result.success

    if requirement.strict:
        for entry in dir_entries:
            if entry.name in reported_names:
                continue

            if entry.kind == EntryKind.DIRECTORY:
                if entry.name not in requirement.subdirs:
                    extra_dirs.append(
                        _extra_dir_diagnostic(directory, entry.name, filesystem)
                    )
            elif entry.name not in file_whitelist:
                extra_files.append(_extra_file_diagnostic(entry))

        success = success and not (extra_files or extra_dirs)

    result_fields = dict(
        missing_files=missing_files,
        missing_dirs=missing_dirs,
        extra_files=extra_files,
        extra_dirs=extra_dirs,
        access_errors=access_errors,
        type_mismatches=type_mismatches,
    )
    message = render_message(
        (diagnostic for diagnostics in result_fields.values() for diagnostic in diagnostics),
        delimiter=delimiter,
    )

    logger.debug(f'Finished {directory}: success={success}')

    return DirectoryScanResult(
        success=success,
        nested_results=nested_results,
        present_files=frozenset(file_whitelist),
        message=message,
        **result_fields,
    )
