import math

import pytest

from mobagen.voronoi.graph import (
    UNDEFINED,
    Cell,
    Edge,
    Graph,
    HalfEdge,
    Site,
    Vertex,
)


def _graph_with_cells(x_bound, y_bound, points):
    graph = Graph(x_bound, y_bound, points)
    for index, site in enumerate(graph.sites):
        graph.cells.append(Cell(index))
        site.cell = index
    return graph


def _polygon(graph, cell):
    return [graph.half_edge_startpoint(h) for h in cell.half_edges]


def _area(points):
    total = 0.0
    for a, b in zip(points, points[1:] + points[:1]):
        total += a.x * b.y - b.x * a.y
    return abs(total) / 2


def test_vertex_defined_and_undefined():
    assert Vertex(1.0, 2.0).is_defined()
    assert not UNDEFINED.is_defined()
    assert not Vertex(1.0, math.nan).is_defined()


def test_graph_converts_points_to_sites():
    graph = Graph(10, 10, [(1, 2), Vertex(3.0, 4.0), Site(5.0, 6.0)])
    assert [(s.x, s.y) for s in graph.sites] == [(1, 2), (3, 4), (5, 6)]
    assert all(s.cell == -1 for s in graph.sites)


def test_set_startpoint_on_fresh_edge_sets_p0_and_sites():
    edge = Edge(0, 1)
    edge.set_startpoint(2, 3, Vertex(1.0, 1.0))
    assert edge.p0 == Vertex(1.0, 1.0)
    assert (edge.left_site, edge.right_site) == (2, 3)
    assert not edge.p1.is_defined()


def test_set_endpoint_on_fresh_edge_swaps_sites():
    edge = Edge(0, 1)
    edge.set_endpoint(0, 1, Vertex(4.0, 5.0))
    assert edge.p0 == Vertex(4.0, 5.0)
    assert (edge.left_site, edge.right_site) == (1, 0)


def test_set_endpoint_after_start_sets_p1():
    edge = Edge(0, 1)
    edge.set_startpoint(0, 1, Vertex(1.0, 1.0))
    edge.set_endpoint(0, 1, Vertex(2.0, 2.0))
    assert edge.p0 == Vertex(1.0, 1.0)
    assert edge.p1 == Vertex(2.0, 2.0)


def test_create_edge_adds_half_edges_to_both_cells():
    graph = _graph_with_cells(10, 10, [(0, 0), (1, 0)])
    index = graph.create_edge(0, 1)
    assert index == 0
    left_half = graph.cells[0].half_edges[0]
    right_half = graph.cells[1].half_edges[0]
    assert (left_half.site, left_half.edge) == (0, 0)
    assert (right_half.site, right_half.edge) == (1, 0)
    assert left_half.angle == pytest.approx(0.0)
    assert right_half.angle == pytest.approx(math.pi)


def test_create_edge_with_vertices():
    graph = _graph_with_cells(10, 10, [(2, 5), (8, 5)])
    graph.create_edge(0, 1, Vertex(5.0, 10.0), Vertex(5.0, 0.0))
    edge = graph.edges[0]
    assert edge.p0 == Vertex(5.0, 10.0)
    assert edge.p1 == Vertex(5.0, 0.0)


def test_border_edge_has_no_right_site():
    graph = _graph_with_cells(10, 10, [(2, 5)])
    index = graph.create_border_edge(0, Vertex(0.0, 0.0), Vertex(0.0, 10.0))
    edge = graph.edges[index]
    assert edge.right_site is None
    assert edge.p0 == Vertex(0.0, 0.0)
    assert edge.p1 == Vertex(0.0, 10.0)
    half = graph.create_half_edge(index, 0, None)
    assert half.site == 0
    assert half.edge == index


def test_half_edge_start_and_end_depend_on_side():
    graph = _graph_with_cells(10, 10, [(2, 5), (8, 5)])
    graph.create_edge(0, 1, Vertex(5.0, 10.0), Vertex(5.0, 0.0))
    left_half, right_half = graph.cells[0].half_edges[0], graph.cells[1].half_edges[0]
    assert graph.half_edge_startpoint(left_half) == graph.half_edge_endpoint(right_half)
    assert graph.half_edge_endpoint(left_half) == graph.half_edge_startpoint(right_half)


def test_connect_edge_vertical_bisector_spans_box():
    graph = _graph_with_cells(10, 10, [(2, 5), (8, 5)])
    graph.create_edge(0, 1)
    assert graph.connect_edge(0)
    edge = graph.edges[0]
    assert edge.p0 == Vertex(5.0, 10.0)
    assert edge.p1 == Vertex(5.0, 0.0)
    assert graph.cells[0].close_me and graph.cells[1].close_me


def test_connect_edge_outside_box_fails():
    graph = _graph_with_cells(10, 10, [(12, 5), (18, 5)])
    graph.create_edge(0, 1)
    assert not graph.connect_edge(0)


def test_connect_edge_keeps_connected_edge():
    graph = _graph_with_cells(10, 10, [(2, 5), (8, 5)])
    graph.create_edge(0, 1, Vertex(5.0, 9.0), Vertex(5.0, 1.0))
    assert graph.connect_edge(0)
    assert graph.edges[0].p1 == Vertex(5.0, 1.0)
    assert not graph.cells[0].close_me


def test_clip_edge_trims_to_box():
    graph = _graph_with_cells(10, 10, [(5, 2), (5, 8)])
    graph.create_edge(0, 1, Vertex(-5.0, 5.0), Vertex(15.0, 5.0))
    assert graph.clip_edge(0)
    edge = graph.edges[0]
    assert edge.p0.x == pytest.approx(0.0) and edge.p0.y == pytest.approx(5.0)
    assert edge.p1.x == pytest.approx(10.0) and edge.p1.y == pytest.approx(5.0)
    assert graph.cells[0].close_me and graph.cells[1].close_me


def test_clip_edge_rejects_edge_outside_box():
    graph = _graph_with_cells(10, 10, [(5, 2), (5, 8)])
    graph.create_edge(0, 1, Vertex(-5.0, -5.0), Vertex(-1.0, -1.0))
    assert not graph.clip_edge(0)


def test_clip_edges_drops_point_like_edge():
    graph = _graph_with_cells(10, 10, [(5, 2), (5, 8)])
    graph.create_edge(0, 1, Vertex(3.0, 3.0), Vertex(3.0, 3.0))
    graph.clip_edges()
    assert not graph.edges[0].p0.is_defined()
    assert not graph.edges[0].p1.is_defined()


def test_prepare_half_edges_filters_and_sorts():
    graph = _graph_with_cells(10, 10, [(5, 5)])
    graph.edges.extend(
        [
            Edge(0, None, Vertex(0.0, 0.0), Vertex(1.0, 1.0)),
            Edge(0, None),
            Edge(0, None, Vertex(2.0, 2.0), Vertex(3.0, 3.0)),
        ]
    )
    graph.cells[0].half_edges = [
        HalfEdge(0, 0, -1.0),
        HalfEdge(0, 1, 3.0),
        HalfEdge(0, 2, 2.0),
    ]
    assert graph.prepare_half_edges_for_cell(0)
    assert [h.edge for h in graph.cells[0].half_edges] == [2, 0]


def test_prepare_half_edges_out_of_range_and_empty():
    graph = _graph_with_cells(10, 10, [(5, 5)])
    assert not graph.prepare_half_edges_for_cell(5)
    assert not graph.prepare_half_edges_for_cell(0)


def test_close_cells_two_sites_tiles_the_box():
    graph = _graph_with_cells(10, 10, [(2, 5), (8, 5)])
    graph.create_edge(0, 1)
    graph.clip_edges()
    graph.close_cells()
    total = 0.0
    for cell in graph.cells:
        halves = cell.half_edges
        assert len(halves) >= 3
        assert not cell.close_me
        for current, following in zip(halves, halves[1:] + halves[:1]):
            end = graph.half_edge_endpoint(current)
            start = graph.half_edge_startpoint(following)
            assert end.x == pytest.approx(start.x, abs=1e-4)
            assert end.y == pytest.approx(start.y, abs=1e-4)
        total += _area(_polygon(graph, cell))
    assert total == pytest.approx(100.0)
    assert _area(_polygon(graph, graph.cells[0])) == pytest.approx(
        _area(_polygon(graph, graph.cells[1]))
    )


def test_close_cells_skips_cells_not_marked():
    graph = _graph_with_cells(10, 10, [(2, 5), (8, 5)])
    graph.create_edge(0, 1, Vertex(5.0, 10.0), Vertex(5.0, 0.0))
    graph.close_cells()
    assert [len(c.half_edges) for c in graph.cells] == [1, 1]
    assert len(graph.edges) == 1