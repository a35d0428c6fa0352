from pydantic import NonNegativeInt

from .pydantic_model_config import StrictBaseModel
from .schema import DirectoryRequirement


class ExpectedSize(StrictBaseModel, frozen=True):
    files: NonNegativeInt = 0
    subdirs: NonNegativeInt = 0


def count_expected(
    requirement: DirectoryRequirement, recursive: bool = False
) -> ExpectedSize:
    """
    Count the file and subdirectory requirements declared by
    `requirement`. Only the schema is inspected, never the filesystem.

    :param requirement: The directory requirement to count
    :type requirement: `DirectoryRequirement`
    :param recursive: Whether to also count everything declared by
    nested subdirectory requirements, defaults to `False`
    :type recursive: `bool`, optional
    :return: The number of files and subdirectories declared
    :rtype: `ExpectedSize`
    """
    n_files = len(requirement.files)
    n_subdirs = 0

    for subdir in requirement.subdirs.values():
        n_subdirs += 1

        if recursive:
            nested = count_expected(subdir, recursive=True)
            n_files += nested.files
            n_subdirs += nested.subdirs

    return ExpectedSize(files=n_files, subdirs=n_subdirs)
