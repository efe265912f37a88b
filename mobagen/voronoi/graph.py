"""Voronoi graph: sites, edges, half edges and cells clipped to a bounding box."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

EPSILON = 1e-4


@dataclass(frozen=True)
class Vertex:
    """A 2D point; NaN coordinates mark a vertex that is not yet known."""

    x: float
    y: float

    def is_defined(self) -> bool:
        """True when neither coordinate is NaN."""
        return not math.isnan(self.x) and not math.isnan(self.y)


UNDEFINED = Vertex(math.nan, math.nan)


@dataclass
class Site:
    """An input point of the diagram and the index of the cell built around it."""

    x: float
    y: float
    cell: int = -1

    @property
    def position(self) -> Vertex:
        return Vertex(self.x, self.y)


@dataclass
class Edge:
    """A Voronoi edge between two sites; ``right_site`` is None on the border."""

    left_site: int
    right_site: int | None
    p0: Vertex = UNDEFINED
    p1: Vertex = UNDEFINED

    def set_startpoint(self, l_site: int, r_site: int | None, vertex: Vertex) -> None:
        """Record where the edge starts, as seen from ``l_site`` towards ``r_site``."""
        if not self.p0.is_defined() and not self.p1.is_defined():
            self.p0 = vertex
            self.left_site = l_site
            self.right_site = r_site
        elif self.left_site == r_site:
            self.p1 = vertex
        else:
            self.p0 = vertex

    def set_endpoint(self, l_site: int, r_site: int | None, vertex: Vertex) -> None:
        """Record where the edge ends, as seen from ``l_site`` towards ``r_site``."""
        self.set_startpoint(r_site, l_site, vertex)


@dataclass
class HalfEdge:
    """An edge as it relates to one of the sites it separates."""

    site: int
    edge: int
    angle: float


@dataclass
class Cell:
    """The region around a site, bounded by its half edges."""

    site: int
    half_edges: list[HalfEdge] = field(default_factory=list)
    close_me: bool = False


def _to_site(item: Site | Vertex | tuple[float, float]) -> Site:
    if isinstance(item, Site):
        return item
    if isinstance(item, Vertex):
        return Site(item.x, item.y)
    x, y = item
    return Site(float(x), float(y))


class Graph:
    """Voronoi cells of a set of sites within the box [0, x_bound] x [0, y_bound]."""

    def __init__(
        self,
        x_bound: float = 0.0,
        y_bound: float = 0.0,
        sites: Iterable[Site | Vertex | tuple[float, float]] = (),
    ) -> None:
        self.x_bound = float(x_bound)
        self.y_bound = float(y_bound)
        self.sites: list[Site] = [_to_site(s) for s in sites]
        self.edges: list[Edge] = []
        self.cells: list[Cell] = []

    def create_edge(
        self,
        left: int,
        right: int,
        va: Vertex = UNDEFINED,
        vb: Vertex = UNDEFINED,
    ) -> int:
        """Add an edge between two sites and a half edge to each of their cells."""
        edge = Edge(left, right)
        self.edges.append(edge)
        index = len(self.edges) - 1
        if va.is_defined():
            edge.set_startpoint(left, right, va)
        if vb.is_defined():
            edge.set_endpoint(left, right, vb)
        self.cells[self.sites[left].cell].half_edges.append(
            self.create_half_edge(index, left, right)
        )
        self.cells[self.sites[right].cell].half_edges.append(
            self.create_half_edge(index, right, left)
        )
        return index

    def create_border_edge(self, site: int, va: Vertex, vb: Vertex) -> int:
        """Add an edge along the bounding box, owned by ``site`` alone."""
        self.edges.append(Edge(site, None, va, vb))
        return len(self.edges) - 1

    def create_half_edge(self, edge: int, l_site: int, r_site: int | None) -> HalfEdge:
        """Build a half edge of ``edge`` for ``l_site``, with its sorting angle."""
        left = self.sites[l_site]
        if r_site is not None:
            right = self.sites[r_site]
            angle = math.atan2(right.y - left.y, right.x - left.x)
        else:
            ref = self.edges[edge]
            if ref.left_site == l_site:
                angle = math.atan2(ref.p1.x - ref.p0.x, ref.p0.y - ref.p1.y)
            else:
                angle = math.atan2(ref.p0.x - ref.p1.x, ref.p1.y - ref.p0.y)
        return HalfEdge(site=l_site, edge=edge, angle=angle)

    def connect_edge(self, edge_idx: int) -> bool:
        """Extend a dangling edge to the bounding box; False if it misses the box."""
        edge = self.edges[edge_idx]
        if edge.p1.is_defined():
            return True

        xl, xr, yt, yb = 0.0, self.x_bound, 0.0, self.y_bound
        l_site = self.sites[edge.left_site]
        r_site = self.sites[edge.right_site]
        lx, ly, rx, ry = l_site.x, l_site.y, r_site.x, r_site.y
        fx, fy = (lx + rx) / 2, (ly + ry) / 2

        self.cells[l_site.cell].close_me = True
        self.cells[r_site.cell].close_me = True

        p0 = edge.p0
        if ry == ly:
            if fx < xl or fx >= xr:
                return False
            if lx > rx:
                if not p0.is_defined() or p0.x < yt:
                    p0 = Vertex(fx, yt)
                elif p0.y >= yb:
                    return False
                p1 = Vertex(fx, yb)
            else:
                if not p0.is_defined() or p0.y > yb:
                    p0 = Vertex(fx, yb)
                elif p0.y < yt:
                    return False
                p1 = Vertex(fx, yt)
        else:
            fm = (lx - rx) / (ry - ly)
            fb = fy - fm * fx
            if fm < -1.0 or fm > 1.0:
                if lx > rx:
                    if not p0.is_defined() or p0.y < yt:
                        p0 = Vertex((yt - fb) / fm, yt)
                    elif p0.y >= yb:
                        return False
                    p1 = Vertex((yb - fb) / fm, yb)
                else:
                    if not p0.is_defined() or p0.y > yb:
                        p0 = Vertex((yb - fb) / fm, yb)
                    elif p0.y < yt:
                        return False
                    p1 = Vertex((yt - fb) / fm, yt)
            else:
                if ly < ry:
                    if not p0.is_defined() or p0.x < xl:
                        p0 = Vertex(xl, fm * xl + fb)
                    elif p0.x >= xr:
                        return False
                    p1 = Vertex(xr, fm * xr + fb)
                else:
                    if not p0.is_defined() or p0.x > xr:
                        p0 = Vertex(xr, fm * xr + fb)
                    elif p0.x < xl:
                        return False
                    p1 = Vertex(xl, fm * xl + fb)

        edge.p0 = p0
        edge.p1 = p1
        return True

    def clip_edge(self, edge_idx: int) -> bool:
        """Clip an edge to the bounding box (Liang-Barsky); False if wholly outside."""
        edge = self.edges[edge_idx]
        ax, ay = edge.p0.x, edge.p0.y
        bx, by = edge.p1.x, edge.p1.y
        dx, dy = bx - ax, by - ay
        t0, t1 = 0.0, 1.0

        # Each boundary: (distance to it, direction component, sign of the ratio).
        for q, d, entering_when_negative in (
            (ax, dx, True),
            (self.x_bound - ax, dx, False),
            (ay, dy, True),
            (self.y_bound - ay, dy, False),
        ):
            if d == 0.0:
                if q < 0:
                    return False
                continue
            r = -q / d if entering_when_negative else q / d
            exiting = d < 0.0 if entering_when_negative else d > 0.0
            if exiting:
                if r < t0:
                    return False
                if r < t1:
                    t1 = r
            else:
                if r > t1:
                    return False
                if r > t0:
                    t0 = r

        if t0 > 0.0:
            edge.p0 = _snap(Vertex(ax + t0 * dx, ay + t0 * dy))
        if t1 < 1.0:
            edge.p1 = _snap(Vertex(ax + t1 * dx, ay + t1 * dy))
        if t0 > 0.0 or t1 < 1.0:
            self.cells[self.sites[edge.left_site].cell].close_me = True
            self.cells[self.sites[edge.right_site].cell].close_me = True
        return True

    def clip_edges(self) -> None:
        """Connect and clip every edge; edges outside or point-like become undefined."""
        for index, edge in enumerate(self.edges):
            if (
                not self.connect_edge(index)
                or not self.clip_edge(index)
                or (
                    abs(edge.p0.x - edge.p1.x) < EPSILON
                    and abs(edge.p0.y - edge.p1.y) < EPSILON
                )
            ):
                edge.p0 = UNDEFINED
                edge.p1 = UNDEFINED

    def half_edge_startpoint(self, half_edge: HalfEdge) -> Vertex:
        edge = self.edges[half_edge.edge]
        return edge.p0 if edge.left_site == half_edge.site else edge.p1

    def half_edge_endpoint(self, half_edge: HalfEdge) -> Vertex:
        edge = self.edges[half_edge.edge]
        return edge.p1 if edge.left_site == half_edge.site else edge.p0

    def prepare_half_edges_for_cell(self, cell: int) -> bool:
        """Drop half edges of undefined edges, sort by descending angle.

        Returns whether the cell has any half edge left.
        """
        if cell >= len(self.cells):
            return False
        target = self.cells[cell]
        kept = [
            half_edge
            for half_edge in target.half_edges
            if self.edges[half_edge.edge].p0.is_defined()
            and self.edges[half_edge.edge].p1.is_defined()
        ]
        kept.sort(key=lambda half_edge: half_edge.angle, reverse=True)
        target.half_edges = kept
        return bool(kept)

    def close_cells(self) -> None:
        """Add border edges so every open cell becomes a closed polygon."""
        for index in reversed(range(len(self.cells))):
            cell = self.cells[index]
            if not self.prepare_half_edges_for_cell(index):
                continue
            if not cell.close_me:
                continue
            half_edges = cell.half_edges
            i_left = 0
            while i_left < len(half_edges):
                va = self.half_edge_endpoint(half_edges[i_left])
                vz = self.half_edge_startpoint(half_edges[(i_left + 1) % len(half_edges)])
                if abs(va.x - vz.x) >= EPSILON or abs(va.y - vz.y) >= EPSILON:
                    i_left = self._close_gap(cell, i_left, va, vz)
                i_left += 1
            cell.close_me = False

    def _close_gap(self, cell: Cell, i_left: int, va: Vertex, vz: Vertex) -> int:
        """Walk the box border from ``va`` to ``vz``, inserting border half edges."""
        xl, xr, yt, yb = 0.0, self.x_bound, 0.0, self.y_bound
        left = (
            lambda v: abs(v.x - xl) < EPSILON and (yb - v.y) > EPSILON,
            lambda v: abs(v.x - xl) < EPSILON,
            lambda v, last: Vertex(xl, v.y if last else yb),
        )
        bottom = (
            lambda v: abs(v.y - yb) < EPSILON and (xr - v.x) > EPSILON,
            lambda v: abs(v.y - yb) < EPSILON,
            lambda v, last: Vertex(v.x if last else xr, yb),
        )
        right = (
            lambda v: abs(v.x - xr) < EPSILON and (v.y - yt) > EPSILON,
            lambda v: abs(v.x - xr) < EPSILON,
            lambda v, last: Vertex(xr, v.y if last else yt),
        )
        top = (
            lambda v: abs(v.y - yt) < EPSILON and (v.x - xl) > EPSILON,
            lambda v: abs(v.y - yt) < EPSILON,
            lambda v, last: Vertex(v.x if last else xl, yt),
        )
        walk = (
            (left, True),
            (bottom, True),
            (right, True),
            (top, True),
            (left, False),
            (bottom, False),
            (right, False),
        )
        last = False
        for (starts_here, reaches, end), guarded in walk:
            if last:
                break
            if guarded and not starts_here(va):
                continue
            last = reaches(vz)
            vb = end(vz, last)
            edge_idx = self.create_border_edge(cell.site, va, vb)
            i_left += 1
            cell.half_edges.insert(i_left, self.create_half_edge(edge_idx, cell.site, None))
            va = vb
        return i_left


def _snap(vertex: Vertex) -> Vertex:
    """Snap coordinates within epsilon of zero (or below) to exactly zero."""
    return Vertex(
        0.0 if vertex.x < EPSILON else vertex.x,
        0.0 if vertex.y < EPSILON else vertex.y,
    )