import logging
from pathlib import Path

from .filesystem import LOCAL_FILESYSTEM, EntryKind, FileSystem
from .results import AccessError, FileScanResult, TypeMismatch
from .schema import FileRequirement, Quantifier

logger = logging.getLogger(f'{__package__}.match_file')


def missing_file_message(
    requirement: FileRequirement, base_name: str, missing_extensions: list[str]
) -> str:
    if requirement.quantifier == Quantifier.ANY:
        return f"Missing file: '{base_name}' with any valid extension: {', '.join(requirement.extensions)}"

    return f"Missing file: '{base_name}' with missing extensions: {', '.join(missing_extensions)}"


def match_file(
    requirement: FileRequirement,
    directory: Path | str,
    base_name: str,
    filesystem: FileSystem = LOCAL_FILESYSTEM,
) -> FileScanResult:
    """
    Resolve one file requirement against `directory`.

    Each accepted extension is tried in declaration order. Under
    `Quantifier.ANY` the scan stops at the first extension that exists
    as a file, and nothing after it is inspected. A candidate that
    exists as something other than a file is a type mismatch and is
    counted as missing. A candidate that cannot be inspected is an
    access error, which is neither missing nor present.

    The requirement is satisfied when no extension is left missing.
    Under `ANY`, absent candidates stay missing until one resolves, so
    a requirement with every candidate absent fails.

    :param requirement: The file requirement to resolve
    :type requirement: `FileRequirement`
    :param directory: The directory expected to contain the file
    :type directory: `pathlib.Path` | `str`
    :param base_name: The file name without any extension
    :type base_name: `str`
    :param filesystem: The filesystem to inspect, defaults to the real one
    :type filesystem: `FileSystem`, optional
    :return: The outcome of the match. Never raises for filesystem
    failures
    :rtype: `FileScanResult`
    """
    directory = Path(directory)
    is_any = requirement.quantifier == Quantifier.ANY

    missing_extensions: list[str] = []
    type_mismatches: list[TypeMismatch] = []
    access_errors: list[AccessError] = []
    resolved_extensions: set[str] = set()

    for ext, candidate_name in zip(
        requirement.extensions, requirement.candidate_names(base_name)
    ):
        candidate = directory / candidate_name

        try:
            kind = filesystem.kind(candidate)
        except FileNotFoundError:
            missing_extensions.append(ext)
            continue
        except OSError as e:
            logger.debug(f'Could not inspect {candidate}: {e}')
            access_errors.append(
                AccessError(path=str(candidate), message=f'Error accessing {candidate}: {e}')
            )
            continue

        if kind == EntryKind.FILE:
            resolved_extensions.add(ext)

            if is_any:
                # One valid extension is enough
                missing_extensions.clear()
                break

            continue

        type_mismatches.append(
            TypeMismatch(path=str(candidate), expected=EntryKind.FILE, found=kind)
        )
        missing_extensions.append(ext)

    success = not missing_extensions

    return FileScanResult(
        success=success,
        missing_extensions=missing_extensions,
        type_mismatches=type_mismatches,
        access_errors=access_errors,
        resolved_extensions=frozenset(resolved_extensions),
        message=''
        if success
        else missing_file_message(requirement, base_name, missing_extensions),
    )
