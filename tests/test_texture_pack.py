import json
from pathlib import Path

from pytest import fixture, raises

from schema_match.counter import count_expected
from schema_match.texture_pack import (
    TEXTURE_PACK_SCHEMA,
    SchemaMismatchError,
    load_texture_pack,
)


@fixture
def pack_tree() -> dict:
    return {
        'pack_info.txt': json.dumps({'DisplayName': 'Pixel Pack', 'Version': '1.0.0'}),
        'Color Textures': {'Metal.png': '', 'Wood.png': ''},
        'Shadow Textures': {},
        'Shape Textures': {'Nose Cone.png': '', 'Nose Cone.psd': '', 'old': {}},
    }


def test_texture_pack_schema_shape():
    expected = count_expected(TEXTURE_PACK_SCHEMA, recursive=True)

    assert (expected.files, expected.subdirs) == (1, 3)
    assert not TEXTURE_PACK_SCHEMA.strict


def test_load_texture_pack(make_tree, pack_tree: dict):
    root = make_tree(pack_tree)
    contents = load_texture_pack(root)

    assert contents.pack_info_path == root / 'pack_info.txt'
    assert contents.pack_info['DisplayName'] == 'Pixel Pack'
    assert contents.textures['Color Textures'] == [
        root / 'Color Textures' / 'Metal.png',
        root / 'Color Textures' / 'Wood.png',
    ]
    assert contents.textures['Shadow Textures'] == []
    assert contents.textures['Shape Textures'] == [
        root / 'Shape Textures' / 'Nose Cone.png',
        root / 'Shape Textures' / 'Nose Cone.psd',
    ]


def test_textures_sharing_a_name_are_all_kept(make_tree, pack_tree: dict):
    pack_tree['Color Textures'] = {'Metal.v2.png': '', 'Metal.psd': '', 'Metal.png': ''}
    root = make_tree(pack_tree)

    textures = load_texture_pack(root).textures['Color Textures']

    assert [path.name for path in textures] == ['Metal.png', 'Metal.psd', 'Metal.v2.png']


def test_json_pack_info(make_tree, pack_tree: dict):
    pack_tree['pack_info.json'] = pack_tree.pop('pack_info.txt')
    root = make_tree(pack_tree)

    assert load_texture_pack(root).pack_info_path == root / 'pack_info.json'


def test_missing_texture_directory(make_tree, pack_tree: dict):
    del pack_tree['Shadow Textures']
    root = make_tree(pack_tree)

    with raises(SchemaMismatchError, match="Missing directory: 'Shadow Textures'") as e:
        load_texture_pack(root)

    assert not e.value.result.success


def test_missing_pack_info(make_tree, pack_tree: dict):
    del pack_tree['pack_info.txt']
    root = make_tree(pack_tree)

    with raises(SchemaMismatchError, match='any valid extension: txt, json'):
        load_texture_pack(root)


def test_missing_pack(tmp_path: Path):
    with raises(SchemaMismatchError, match="Missing directory: 'absent'"):
        load_texture_pack(tmp_path / 'absent')


def test_invalid_pack_info(make_tree, pack_tree: dict):
    pack_tree['pack_info.txt'] = 'DisplayName = Pixel Pack'
    root = make_tree(pack_tree)

    with raises(ValueError, match='Invalid pack info file'):
        load_texture_pack(root)


def test_scans_injected_filesystem(memory_fs):
    fs = memory_fs({'pack_info.json': '{}', 'Color Textures': {}, 'Shape Textures': {}})

    with raises(SchemaMismatchError, match="Missing directory: 'Shadow Textures'"):
        load_texture_pack(fs.root, filesystem=fs)

    assert fs.listed[0] == fs.root


def test_uninspectable_pack_info(memory_fs):
    fs = memory_fs(
        {'Color Textures': {}, 'Shadow Textures': {}, 'Shape Textures': {}},
        errors={
            'pack_info.txt': PermissionError(13, 'Permission denied'),
            'pack_info.json': PermissionError(13, 'Permission denied'),
        },
    )

    with raises(SchemaMismatchError, match='Could not read pack info') as e:
        load_texture_pack(fs.root, filesystem=fs)

    assert len(e.value.result.access_errors) == 2
