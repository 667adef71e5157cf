import numpy as np
import pytest

from polrts.mathutils import translation_matrix
from polrts.mesh import Mesh, Model, ModelManager, Vertex


class _Material:
    def __init__(self, kd):
        self.kd = kd


def _triangle_mesh():
    vertices = [
        Vertex([0, 0, 0], [0, 0, 1]),
        Vertex([1, 0, 0], [0, 0, 1]),
        Vertex([0, 1, 0], [0, 0, 1]),
    ]
    return Mesh(vertices, [0, 1, 2], _Material((1.0, 0.5, 0.25)))


def test_default_matrix_is_identity():
    mesh = _triangle_mesh()
    assert np.allclose(mesh.transformation_matrix(), np.identity(4))


def test_position_changes_matrix():
    mesh = _triangle_mesh()
    mesh.transformation_matrix()
    mesh.set_position([3, 4, 5])
    assert np.allclose(mesh.transformation_matrix(), translation_matrix([3, 4, 5]))


def test_size_scales_points():
    mesh = _triangle_mesh()
    mesh.set_size([2, 3, 4])
    m = mesh.transformation_matrix()
    assert np.allclose(m @ np.array([1, 1, 1, 1]), [2, 3, 4, 1])


def test_direction_rotates_points():
    model = Model([_triangle_mesh()])
    model.set_position([1, 1, 1])
    model.set_direction([0, 1, 0], [0, 0, 1])
    m = model.transformation_matrix()
    assert np.allclose(m @ np.array([1, 0, 0, 1]), [1, 2, 1, 1])
    assert np.allclose(model.meshes[0].transformation_matrix(), m)


def test_vertex_rejects_wrong_shape():
    with pytest.raises(ValueError):
        Vertex([1, 2])


def test_transform_translates_positions_keeps_normals():
    mesh = _triangle_mesh()
    before = [v.position.copy() for v in mesh.vertices]
    mesh.transform(translation_matrix([1, 2, 3]))
    for old, vertex in zip(before, mesh.vertices):
        assert np.allclose(vertex.position, old + np.array([1, 2, 3]))
        assert np.allclose(vertex.normal, [0, 0, 1])


def test_transform_singular_raises():
    mesh = _triangle_mesh()
    with pytest.raises(ValueError):
        mesh.transform(np.zeros((4, 4)))


def test_n_triangles_counts_indices():
    mesh = _triangle_mesh()
    assert mesh.n_triangles == len(mesh.triangles)


def test_mesh_copy_is_independent():
    mesh = _triangle_mesh()
    mesh.set_position([5, 5, 5])
    clone = mesh.copy()
    clone.transform(translation_matrix([1, 0, 0]))
    assert np.allclose(mesh.vertices[1].position, [1, 0, 0])
    assert clone.material is not mesh.material
    assert clone.material.kd == mesh.material.kd
    assert np.allclose(clone.transformation_matrix(), np.identity(4))


def test_model_set_position_propagates():
    model = Model([_triangle_mesh(), _triangle_mesh()])
    model.set_position([7, 8, 9])
    assert all(np.allclose(m.position, [7, 8, 9]) for m in model.meshes)


def test_model_set_direction_requires_unit_vectors():
    model = Model([_triangle_mesh()])
    with pytest.raises(ValueError):
        model.set_direction([2, 0, 0], [0, 0, 1])
    with pytest.raises(ValueError):
        model.set_direction([1, 0, 0], [0, 0, 3])


def test_model_size_propagates():
    model = Model([_triangle_mesh()])
    model.set_size([2, 2, 2])
    assert np.allclose(model.meshes[0].size, model.size)


def test_model_copy_keeps_placement_and_separates_meshes():
    model = Model([_triangle_mesh()])
    model.set_position([1, 2, 3])
    clone = model.copy()
    assert clone.cloned and not model.cloned
    assert np.allclose(clone.position, model.position)
    assert clone.meshes[0] is not model.meshes[0]
    clone.transform(translation_matrix([0, 0, 1]))
    assert np.allclose(model.meshes[0].vertices[0].position, [0, 0, 0])


def test_model_transform_applies_to_all_meshes():
    model = Model([_triangle_mesh(), _triangle_mesh()])
    model.add_mesh(_triangle_mesh())
    model.transform(translation_matrix([0, 0, 2]))
    assert len(model.meshes) == 3
    assert all(np.allclose(m.vertices[0].position, [0, 0, 2]) for m in model.meshes)


def test_manager_register_and_instantiate():
    manager = ModelManager()
    template = Model([_triangle_mesh()])
    assert manager.add_model("tank", template) is template
    assert manager.has_model("tank")
    assert manager.get_model("tank") is template
    instance = manager.instantiate_model("tank")
    assert instance is not template
    assert len(instance.meshes) == len(template.meshes)
    assert instance.meshes[0] is not template.meshes[0]


def test_manager_rejects_duplicates_and_unknown_names():
    manager = ModelManager()
    manager.add_model("rock", Model())
    with pytest.raises(ValueError):
        manager.add_model("rock", Model())
    assert not manager.has_model("truck")
    with pytest.raises(KeyError):
        manager.get_model("truck")
    with pytest.raises(KeyError):
        manager.instantiate_model("truck")