from concurrent.futures import ThreadPoolExecutor

import pytest

from srepkit.models.sreps import InvalidArgument, interpolate
from srepkit.scene import SRepDisplay, SRepScene


def test_add_and_remove(srep):
    scene = SRepScene()
    first = scene.add_srep(srep)
    second = scene.add_srep(srep.copy())
    assert first != second
    assert scene.get(first).name == "SRep"
    assert scene.get(second).name == "SRep_1"
    scene.remove(first)
    assert len(scene) == 1
    with pytest.raises(KeyError):
        scene.get(first)


def test_interpolate_adds_a_node(srep):
    scene = SRepScene()
    node_id = scene.add_srep(srep, "hippocampus")
    new_id = scene.interpolate(node_id, 1)
    node = scene.get(new_id)
    assert node.name == "hippocampus_interpolated"
    assert node.srep == interpolate(srep, 1)
    assert scene.get(node_id).srep is srep


def test_failed_interpolation_adds_nothing(srep):
    scene = SRepScene()
    node_id = scene.add_srep(srep)
    with pytest.raises(InvalidArgument):
        scene.interpolate(node_id, 40)
    assert len(scene) == 1


def test_interpolate_into_keeps_node_and_display(make_srep):
    scene = SRepScene()
    source_id = scene.add_srep(make_srep(3, 3), "coarse")
    dest_id = scene.add_srep(make_srep(2, 2), "dense")
    dest = scene.get(dest_id)
    dest_srep = dest.srep
    dest.display.visibility = False
    dest.display.set_opacity(0.4)

    node = scene.interpolate_into(source_id, 2, dest_id)
    assert node is dest
    assert node.srep is dest_srep
    assert node.srep.grid.rows == 9
    assert (node.name, node.display.visibility, node.display.opacity) == ("dense", False, 0.4)


def test_opacity_range():
    with pytest.raises(InvalidArgument):
        SRepDisplay(opacity=1.5)
    display = SRepDisplay()
    with pytest.raises(InvalidArgument):
        display.set_opacity(-0.1)
    assert display.opacity == 1.0


def test_import_export(tmp_path, srep):
    scene = SRepScene()
    node_id = scene.add_srep(srep, "model")
    header = scene.export_srep(node_id, str(tmp_path), "model")
    imported_id = scene.import_srep(header)
    imported = scene.get(imported_id)
    assert imported.name == "SRep"
    assert imported.srep.grid.rows == 3
    assert len(imported.srep.crest) == 8


def test_concurrent_adds_get_unique_names(srep):
    scene = SRepScene()
    with ThreadPoolExecutor(max_workers=8) as pool:
        sizes = list(pool.map(lambda _: (scene.add_srep(srep.copy()), len(scene))[1], range(32)))
    assert len(scene) == 32
    assert all(1 <= size <= 32 for size in sizes)
    assert len({node.name for node in scene.nodes()}) == 32
