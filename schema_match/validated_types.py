from typing import Annotated

from pydantic import AfterValidator, StringConstraints

from .defaults import RESERVED_ENTRY_NAMES


def _validate_entry_name(name: str) -> str:
    if name in RESERVED_ENTRY_NAMES:
        raise ValueError(f'{name!r} cannot be used as an entry name')

    return name


# A single extension without its leading dot, e.g. 'json' or 'tar.gz'
Extension = Annotated[
    str, StringConstraints(strip_whitespace=True, pattern=r'^[^./\\][^/\\]*$')
]

# A single path component
EntryName = Annotated[
    str,
    StringConstraints(min_length=1, pattern=r'^[^/\\]+$'),
    AfterValidator(_validate_entry_name),
]
