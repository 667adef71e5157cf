# polrts

The simulation core of a small real-time strategy game. It is a library of
plain Python objects built on numpy.

## Modules

- `polrts.mathutils`: 4×4 matrices as numpy arrays.
  `translation_matrix`, `direction_matrix` (takes x to a direction and z to
  an up vector), `scaling_matrix` and `normal_matrix` (raises `ValueError`
  for a singular matrix). `transform_point` applies a matrix to a 3-vector,
  treated as an affine point, or to a 4-vector. The module also has
  `res_to_screen` (pixel to normalised device coordinates), `calc_normal`
  (unit normal of a triangle), `deg` (degrees to radians), a `Ray` dataclass
  and the constants `PI`, `EPS`, `GRAVITY` and `IDENTITY`.
- `polrts.polysolver`: `find_polynomial_roots(coefficients)` returns the real
  roots of a polynomial. Coefficients run from the highest power down, and at
  most ten are accepted. Two coefficients are read as a monic linear term and
  three are solved with the quadratic formula. Larger polynomials are split at
  the roots of their derivative and searched by bisection, and their roots
  come back sorted.
- `polrts.pathfinding`: `PriorityQueue` is a binary min-heap over integer keys
  with `insert`, `decrease_key` (which inserts the key if it is absent), `pop`
  and `len()`. `find_path(terrain, start, destination)` runs an A* search over
  the eight-neighbour grid. When the destination cannot be reached, the path
  leads to the reached cell closest to it. `PathFindingQueue` passes
  `PathFindingRequest`s between threads. `submit` and `pop_result` borrow and
  return the requester in its scene, and `serve(terrain, stop_event)` answers
  requests until the event is set.
- `polrts.mesh`: `Vertex`; `Mesh`, a set of indexed triangles with a
  placement (position, direction, up, size), a cached
  `transformation_matrix()`, and `transform()` to write a matrix into its
  vertices; `Model`, a group of meshes placed together; and `ModelManager`,
  which stores named templates and returns copies from `instantiate_model`.
- `polrts.primitives`: `build_cylinder`, `build_cone`, `build_sphere` and
  `build_box` return `(vertices, indices)`. `create_*_model` wraps the same
  geometry in a one-mesh `Model`. The cylinder always runs from x = 0 to
  x = 1, and its size is set through the model's size. The sphere is a
  tetrahedron subdivided `n - 1` times.
- `polrts.particles`: `GunFireParticle`, `GroundExplosionParticle`,
  `UnitHitParticle` and `ConstructionParticle`. Each one takes an optional
  `random.Random`. Step a particle with `update(dt)`, ask it `is_alive()` and
  `is_visible()`, and call `serialize()` to get a `SerializedParticle`, whose
  `to_bytes()` packs eight little-endian floats.
- `polrts.scene`: `PointLight` and `Scene`. `add_entity` gives each entity an
  id and sets its `scene`. Removal of entities and lights is deferred.
  `update_entities()` drops removed entities and returns those that no
  thread has borrowed. `update_particles()` drops particles whose life time
  has run out.

## Installation

```
pip install .
```

## Example

```python
import random

from polrts.polysolver import find_polynomial_roots
from polrts.primitives import build_box
from polrts.particles import GroundExplosionParticle

print(find_polynomial_roots([1.0, 0.0, -1.0]))   # [-1.0, 1.0]

vertices, triangles = build_box(1.0, 1.0, 1.0)
print(len(vertices), len(triangles))             # 24 36

rng = random.Random(0)
particle = GroundExplosionParticle((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), rng)
while particle.is_alive():
    particle.update(0.01)
print(particle.serialize().to_bytes().hex())
```

## Terrain

`find_path` and `PathFindingQueue.serve` accept any terrain object that has
these members:

- `width` and `height`
- `closest_admissible(point)`, which returns an `(x, y)` cell
- `in_bounds(x, y)` and `is_admissible(x, y)`
- `straighten_path(path)`

## What this package does not do

There is no rendering, window, input handling or game loop. There is no
command to run. The package does not load model or material files, and it
has no terrain implementation, units, buildings or combat logic. Meshes,
models and particles hold data only. Materials are attached as opaque
objects.

## Tests

```
pip install .[test]
pytest
```