"""A* path finding on the terrain grid and the queue feeding its worker."""

from __future__ import annotations

import math
import queue
import threading
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from itertools import product
from typing import Any, Protocol

Point = tuple[float, float]

_lock = threading.Lock()


class _GridTerrain(Protocol):
    width: int
    height: int

    def closest_admissible(self, point: Point) -> tuple[int, int]: ...

    def in_bounds(self, x: int, y: int) -> bool: ...

    def is_admissible(self, x: int, y: int) -> bool: ...

    def straighten_path(self, path: list[Point]) -> Iterable[Point]: ...


class PriorityQueue:
    """Binary min-heap over integer keys in ``0..size`` with decrease-key."""

    def __init__(self, size: int) -> None:
        self._size = size
        self._heap: list[list] = []
        self._position: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, key: int) -> bool:
        return key in self._position

    def _check_key(self, key: int) -> None:
        if not 0 <= key <= self._size:
            raise IndexError(f"key {key} outside 0..{self._size}")

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._position[heap[i][1]] = i
        self._position[heap[j][1]] = j

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if self._heap[parent][0] <= self._heap[index][0]:
                break
            self._swap(parent, index)
            index = parent

    def insert(self, key: int, priority: float) -> None:
        """Add ``key`` with ``priority``."""
        self._check_key(key)
        if key in self._position:
            raise ValueError(f"key {key} is already queued")
        self._heap.append([priority, key])
        self._position[key] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def decrease_key(self, key: int, priority: float) -> None:
        """Lower the priority of ``key``, inserting it if it is absent."""
        index = self._position.get(key)
        if index is None:
            self.insert(key, priority)
            return
        self._heap[index][0] = priority
        self._sift_up(index)

    def pop(self) -> int:
        """Remove and return the key with the lowest priority."""
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        self._swap(0, len(self._heap) - 1)
        _, key = self._heap.pop()
        del self._position[key]

        heap = self._heap
        n = len(heap)
        k = 0
        while 2 * k + 1 < n:
            left, right = 2 * k + 1, 2 * k + 2
            child = right if right < n and heap[right][0] < heap[left][0] else left
            if heap[child][0] >= heap[k][0]:
                break
            self._swap(k, child)
            k = child
        return key


@dataclass
class PathFindingRequest:
    """A unit's request for a path from ``start`` to ``dest``."""

    requester: Any
    start: Point
    dest: Point
    path: deque = field(default_factory=deque)


class PathFindingQueue:
    """Thread-safe hand-over of requests to a worker and results back."""

    def __init__(self, poll_interval: float = 0.05) -> None:
        self._requests: queue.Queue[PathFindingRequest] = queue.Queue()
        self._results: queue.Queue[PathFindingRequest] = queue.Queue()
        self._poll_interval = poll_interval

    def submit(self, request: PathFindingRequest) -> None:
        """Queue a request, marking its requester as borrowed by its scene."""
        scene = getattr(request.requester, "scene", None)
        if scene is not None:
            scene.borrow(request.requester)
        self._requests.put(request)

    def pop_request(self) -> PathFindingRequest | None:
        """Return the oldest pending request, or None."""
        try:
            return self._requests.get_nowait()
        except queue.Empty:
            return None

    def add_result(self, request: PathFindingRequest) -> None:
        """Queue a request whose path has been filled in."""
        self._results.put(request)

    def pop_result(self) -> PathFindingRequest | None:
        """Return the oldest finished request, releasing its requester."""
        try:
            request = self._results.get_nowait()
        except queue.Empty:
            return None
        scene = getattr(request.requester, "scene", None)
        if scene is not None:
            scene.unborrow(request.requester)
        return request

    def serve(self, terrain: _GridTerrain, stop_event: threading.Event) -> None:
        """Answer requests on ``terrain`` until ``stop_event`` is set."""
        while not stop_event.is_set():
            try:
                request = self._requests.get(timeout=self._poll_interval)
            except queue.Empty:
                continue
            request.path = find_path(terrain, request.start, request.dest)
            self.add_result(request)


def _distance(x: int, y: int) -> float:
    return math.sqrt(x * x + y * y)


def find_path(terrain: _GridTerrain, start: Point, destination: Point) -> deque:
    """Find a path over admissible cells from ``start`` to ``destination``.

    If the destination cannot be reached, the path leads to the reached cell
    closest to it. The returned path runs from the start cell to the
    destination point and has been passed through ``terrain.straighten_path``.
    """
    with _lock:
        width, height = terrain.width, terrain.height
        cells = width * height
        visited = [False] * cells
        cost = [math.inf] * cells
        parent: list[tuple[int, int]] = [(-1, -1)] * cells

        closest_h = math.inf
        closest_cell = (-1, -1)

        pq = PriorityQueue(cells)

        start_x, start_y = terrain.closest_admissible(start)
        dest_x, dest_y = terrain.closest_admissible(destination)
        destination = (float(destination[0]), float(destination[1]))

        start_index = start_y * width + start_x
        end_index = dest_y * width + dest_x
        cost[start_index] = 0.0
        pq.insert(start_index, 0.0)

        while pq:
            i = pq.pop()
            x, y = i % width, i // width
            visited[i] = True
            if i == end_index:
                break

            for dx, dy in product((-1, 0, 1), repeat=2):
                nx, ny = x + dx, y + dy
                if not (dx or dy) or not terrain.in_bounds(nx, ny):
                    continue
                j = ny * width + nx
                if visited[j] or not terrain.is_admissible(nx, ny):
                    continue
                h = _distance(dest_x - nx, dest_y - ny)
                candidate = cost[i] + _distance(dx, dy)
                if candidate < cost[j]:
                    if closest_h > h:
                        closest_h = h
                        closest_cell = (nx, ny)
                    cost[j] = candidate
                    pq.decrease_key(j, candidate + h)
                    parent[j] = (x, y)

        if cost[dest_x + dest_y * width] == math.inf and closest_h < math.inf:
            dest_x, dest_y = closest_cell
            destination = (float(dest_x), float(dest_y))

        result: list[Point] = [destination]
        node = (dest_x, dest_y)
        while True:
            x, y = node
            result.append((float(x), float(y)))
            if (x == start_x and y == start_y) or (x == -1 and y == -1):
                break
            node = parent[x + y * width]

        result.reverse()
        return deque(terrain.straighten_path(result))