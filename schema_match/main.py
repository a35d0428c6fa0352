import logging
from functools import cached_property
from pathlib import Path

import fire
from pydantic import FilePath, computed_field, validate_call
from pydantic.dataclasses import dataclass
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.traceback import install

from .config import SchemaFileError, SystemConfig, load_schema, load_system_config
from .counter import count_expected
from .defaults import CONFIG_DIR, LOG_FILENAME, SYSTEM_CONFIG_FILENAME
from .match_directory import match_directory
from .pydantic_model_config import strict_config
from .report import render_report
from .results import describe_contents
from .texture_pack import SchemaMismatchError, load_texture_pack

console = Console()
install(console=console)


@dataclass(config=strict_config, frozen=True)
class SchemaMatch:
    """Command-line utilities that check directory trees against declarative schemas."""

    config_dir: Path = CONFIG_DIR
    log_dir: Path = Path.cwd() / 'schema-match_log'

    def __post_init__(self) -> None:
        self.log_dir.mkdir(exist_ok=True, parents=True)

        root_logger = logging.getLogger(__package__)
        root_logger.setLevel(self._system_config.log_level)

        handler = logging.FileHandler(self.log_dir / LOG_FILENAME, mode='w')
        handler.setFormatter(
            logging.Formatter('%(asctime)s %(name)s %(levelname)s: %(message)s')
        )
        root_logger.addHandler(handler)

    @computed_field
    @cached_property
    def _system_config_path(self) -> Path:
        return self.config_dir / SYSTEM_CONFIG_FILENAME

    @computed_field
    @cached_property
    def _system_config(self: 'SchemaMatch') -> SystemConfig:
        return load_system_config(self._system_config_path)

    @validate_call
    def check(self, schema_path: FilePath, target_dir: Path) -> None:
        """Check `target_dir` against the schema in `schema_path`."""
        try:
            schema = load_schema(schema_path)
        except SchemaFileError as e:
            console.print(f'[red]{escape(str(e))}[/]', highlight=False, soft_wrap=True)
            raise SystemExit(2)

        result = match_directory(
            schema,
            target_dir,
            delimiter=self._system_config.message_delimiter,
            count_missing_recursively=self._system_config.count_missing_recursively,
        )
        console.print(render_report(result, root_name=str(target_dir)))

        if not result.success:
            raise SystemExit(1)

    @validate_call
    def expected(self, schema_path: FilePath, recursive: bool = True) -> None:
        """Print how many files and subdirectories the schema in `schema_path` declares."""
        try:
            schema = load_schema(schema_path)
        except SchemaFileError as e:
            console.print(f'[red]{escape(str(e))}[/]', highlight=False, soft_wrap=True)
            raise SystemExit(2)

        expected_size = count_expected(schema, recursive=recursive)
        console.print(
            f'[green]{schema_path.name}[/] declares {describe_contents(expected_size.files, expected_size.subdirs)}.'
        )

    @validate_call
    def texture_pack(self, target_dir: Path) -> None:
        """Validate the texture pack in `target_dir` and summarize its textures."""
        try:
            contents = load_texture_pack(target_dir)
        except SchemaMismatchError as e:
            console.print(render_report(e.result, root_name=str(target_dir)))
            raise SystemExit(1)

        table = Table('Texture directory', 'Textures')
        for dirname, textures in contents.textures.items():
            table.add_row(dirname, str(len(textures)))

        console.print(f'Pack info: [green]{contents.pack_info_path.name}[/]', table, sep='\n')


def main():
    fire.Fire(SchemaMatch)
