import json
import logging
from pathlib import Path

from pydantic import ValidationError
from pytest import CaptureFixture, MonkeyPatch, fixture, raises
from yaml import safe_dump

from schema_match.main import SchemaMatch


@fixture
def cli(tmp_path: Path) -> SchemaMatch:
    config_dir = tmp_path / '.config'
    config_dir.mkdir()
    (config_dir / 'system.yml').write_text(safe_dump({'log_level': 'DEBUG'}))

    return SchemaMatch(config_dir=config_dir, log_dir=tmp_path / 'log')


@fixture
def schema_path(tmp_path: Path) -> Path:
    path = tmp_path / 'schema.yml'
    path.write_text(
        safe_dump(
            {
                'files': {'manifest': {'extensions': ['json'], 'quantifier': 'any'}},
                'subdirs': {'assets': {'files': {'icon': {'extensions': ['png']}}}},
                'strict': True,
            }
        )
    )

    return path


class TestSchemaMatch:
    def test_logging_configured(self, cli: SchemaMatch, tmp_path: Path):
        assert (tmp_path / 'log' / 'schema_match.log').exists()
        assert logging.getLogger('schema_match').level == logging.DEBUG

    def test_check_passes(
        self, cli: SchemaMatch, schema_path: Path, make_tree, capsys: CaptureFixture
    ):
        root = make_tree({'manifest.json': '{}', 'assets': {'icon.png': ''}})

        cli.check(schema_path, root)

        assert '✔' in capsys.readouterr().out

    def test_check_fails(
        self, cli: SchemaMatch, schema_path: Path, make_tree, capsys: CaptureFixture
    ):
        root = make_tree({'manifest.json': '{}', 'assets': {}, 'notes.txt': ''})

        with raises(SystemExit) as e:
            cli.check(schema_path, root)

        output = capsys.readouterr().out
        assert e.value.code == 1
        assert "Extra file: 'notes.txt'" in output
        assert "Missing file: 'icon.png'" in output

    def test_check_uses_configured_delimiter(
        self, tmp_path: Path, schema_path: Path, make_tree, monkeypatch: MonkeyPatch
    ):
        config_dir = tmp_path / 'custom'
        config_dir.mkdir()
        (config_dir / 'system.yml').write_text(safe_dump({'message_delimiter': ' | '}))
        cli = SchemaMatch(config_dir=config_dir, log_dir=tmp_path / 'log')

        messages = []
        monkeypatch.setattr(
            'schema_match.main.render_report',
            lambda result, root_name: messages.append(result.message) or '',
        )
        root = make_tree({'assets': {}, 'notes.txt': ''})

        with raises(SystemExit):
            cli.check(schema_path, root)

        assert messages == [
            "Missing file: 'manifest' with any valid extension: json | Extra file: 'notes.txt'"
        ]

    def test_check_invalid_schema(
        self, cli: SchemaMatch, tmp_path: Path, capsys: CaptureFixture
    ):
        schema_path = tmp_path / 'schema.json'
        schema_path.write_text(json.dumps({'files': {'a': {'extensions': []}}}))

        with raises(SystemExit) as e:
            cli.check(schema_path, tmp_path)

        assert e.value.code == 2
        assert 'incorrectly formatted' in capsys.readouterr().out

    def test_check_missing_schema_file(self, cli: SchemaMatch, tmp_path: Path):
        with raises(ValidationError):
            cli.check(tmp_path / 'absent.yml', tmp_path)

    def test_expected(
        self, cli: SchemaMatch, schema_path: Path, capsys: CaptureFixture
    ):
        cli.expected(schema_path)
        assert 'declares 2 files and 1 subdirectory' in capsys.readouterr().out

        cli.expected(schema_path, recursive=False)
        assert 'declares 1 file and 1 subdirectory' in capsys.readouterr().out

    def test_texture_pack(self, cli: SchemaMatch, make_tree, capsys: CaptureFixture):
        root = make_tree(
            {
                'pack_info.json': '{}',
                'Color Textures': {'Metal.png': ''},
                'Shadow Textures': {},
                'Shape Textures': {},
            }
        )

        cli.texture_pack(root)

        output = capsys.readouterr().out
        assert 'Color Textures' in output
        assert 'pack_info.json' in output

    def test_texture_pack_invalid(
        self, cli: SchemaMatch, make_tree, capsys: CaptureFixture
    ):
        root = make_tree({'pack_info.json': '{}'})

        with raises(SystemExit) as e:
            cli.texture_pack(root)

        assert e.value.code == 1
        assert 'Missing directory' in capsys.readouterr().out
