"""Fortune's sweep-line algorithm building a Voronoi graph from a set of sites."""

from __future__ import annotations

import math
from collections.abc import Iterable

from mobagen.voronoi.graph import (
    EPSILON,
    UNDEFINED,
    Cell,
    Graph,
    Site,
    Vertex,
)
from mobagen.voronoi.rbtree import RBNode, RBTree


def _div(numerator: float, denominator: float) -> float:
    """Floating-point division that yields inf or NaN instead of raising."""
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


class BeachArc(RBNode):
    """A parabolic section of the beach line belonging to one site."""

    def __init__(self, site: int) -> None:
        super().__init__()
        self.site = site
        self.edge = -1
        self.circle_event: CircleEvent | None = None


class CircleEvent(RBNode):
    """The point where an arc of the beach line will collapse."""

    def __init__(self, arc: BeachArc, site: int, x: float, y: float, y_center: float) -> None:
        super().__init__()
        self.arc = arc
        self.site = site
        self.x = x
        self.y = y
        self.y_center = y_center


class Fortune:
    """Beach line and circle-event queue of a sweep over a graph's sites."""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self.beachline: RBTree[BeachArc] = RBTree()
        self.circle_events: RBTree[CircleEvent] = RBTree()
        self._top_circle_event: CircleEvent | None = None

    @property
    def top_circle_event(self) -> CircleEvent | None:
        """The earliest pending circle event, or None."""
        return self._top_circle_event

    def _left_break_point(self, arc: BeachArc, directrix: float) -> float:
        site = self.graph.sites[arc.site]
        rfocx, rfocy = site.x, site.y
        pby2 = rfocy - directrix
        # Degenerate parabola: the focus lies on the directrix.
        if pby2 == 0.0:
            return rfocx
        left_arc = arc.previous
        if left_arc is None:
            return -math.inf
        left_site = self.graph.sites[left_arc.site]
        lfocx, lfocy = left_site.x, left_site.y
        plby2 = lfocy - directrix
        if plby2 == 0.0:
            return lfocx
        hl = lfocx - rfocx
        aby2 = 1 / pby2 - 1 / plby2
        b = hl / plby2
        if aby2 != 0.0:
            discriminant = b * b - 2 * aby2 * (
                hl * hl / (-2 * plby2) - lfocy + plby2 / 2 + rfocy - pby2 / 2
            )
            dist = math.sqrt(discriminant) if discriminant >= 0 else math.nan
            return (-b + dist) / aby2 + rfocx
        # Both parabolas are equally far from the directrix: break point is midway.
        return (rfocx + lfocx) / 2

    def _right_break_point(self, arc: BeachArc, directrix: float) -> float:
        right_arc = arc.next
        if right_arc is not None:
            return self._left_break_point(right_arc, directrix)
        site = self.graph.sites[arc.site]
        return site.x if site.y == directrix else math.inf

    def _attach_circle_event(self, arc: BeachArc) -> None:
        left_arc = arc.previous
        right_arc = arc.next
        if left_arc is None or right_arc is None:
            return
        if left_arc.site == right_arc.site:
            return

        sites = self.graph.sites
        left_site = sites[left_arc.site]
        center_site = sites[arc.site]
        right_site = sites[right_arc.site]

        bx, by = center_site.x, center_site.y
        ax, ay = left_site.x - bx, left_site.y - by
        cx, cy = right_site.x - bx, right_site.y - by

        # Clockwise triplets never converge.
        d = 2 * (ax * cy - ay * cx)
        if d >= -2e-9:
            return

        ha = ax * ax + ay * ay
        hc = cx * cx + cy * cy
        x = (cy * ha - ay * hc) / d
        y = (ax * hc - cx * ha) / d
        y_center = y + by

        event = CircleEvent(
            arc=arc,
            site=arc.site,
            x=x + bx,
            y=y_center + math.sqrt(x * x + y * y),
            y_center=y_center,
        )
        arc.circle_event = event

        predecessor: CircleEvent | None = None
        node = self.circle_events.root
        while node is not None:
            if event.y < node.y or (event.y == node.y and event.x <= node.x):
                if node.left is not None:
                    node = node.left
                else:
                    predecessor = node.previous
                    break
            else:
                if node.right is not None:
                    node = node.right
                else:
                    predecessor = node
                    break
        self.circle_events.insert(predecessor, event)
        if predecessor is None:
            self._top_circle_event = event

    def _detach_circle_event(self, arc: BeachArc) -> None:
        event = arc.circle_event
        if event is None:
            return
        if event.previous is None:
            self._top_circle_event = event.next
        self.circle_events.remove(event)
        arc.circle_event = None

    def _detach_beach_section(self, arc: BeachArc) -> None:
        self._detach_circle_event(arc)
        self.beachline.remove(arc)

    def add_beach_section(self, site_index: int) -> None:
        """Insert the parabola of a newly swept site into the beach line."""
        sites = self.graph.sites
        site = sites[site_index]
        x, directrix = site.x, site.y

        left_arc: BeachArc | None = None
        right_arc: BeachArc | None = None
        node = self.beachline.root
        while node is not None:
            dxl = self._left_break_point(node, directrix) - x
            if dxl > EPSILON:
                node = node.left
                continue
            dxr = x - self._right_break_point(node, directrix)
            if dxr > EPSILON:
                if node.right is None:
                    left_arc = node
                    break
                node = node.right
                continue
            if dxl > -EPSILON:
                left_arc = node.previous
                right_arc = node
            elif dxr > -EPSILON:
                left_arc = node
                right_arc = node.next
            else:
                left_arc = right_arc = node
            break

        new_arc = BeachArc(site_index)
        self.beachline.insert(left_arc, new_arc)

        if left_arc is None and right_arc is None:
            return

        if left_arc is right_arc:
            # The new arc splits an existing one in two.
            self._detach_circle_event(left_arc)
            right_arc = BeachArc(left_arc.site)
            self.beachline.insert(new_arc, right_arc)
            edge = self.graph.create_edge(left_arc.site, new_arc.site)
            new_arc.edge = edge
            right_arc.edge = edge
            self._attach_circle_event(left_arc)
            self._attach_circle_event(right_arc)
            return

        if left_arc is not None and right_arc is None:
            # The new arc becomes the last one on the beach line.
            new_arc.edge = self.graph.create_edge(left_arc.site, new_arc.site)
            return

        # The new arc falls exactly between two existing arcs.
        self._detach_circle_event(left_arc)
        self._detach_circle_event(right_arc)

        left_site = sites[left_arc.site]
        ax, ay = left_site.x, left_site.y
        bx, by = site.x - ax, site.y - ay
        right_site = sites[right_arc.site]
        cx, cy = right_site.x - ax, right_site.y - ay
        d = 2 * (bx * cy - by * cx)
        hb = bx * bx + by * by
        hc = cx * cx + cy * cy
        vertex = Vertex(ax + _div(cy * hb - by * hc, d), ay + _div(bx * hc - cx * hb, d))

        self.graph.edges[right_arc.edge].set_startpoint(left_arc.site, right_arc.site, vertex)
        new_arc.edge = self.graph.create_edge(left_arc.site, site_index, UNDEFINED, vertex)
        right_arc.edge = self.graph.create_edge(site_index, right_arc.site, UNDEFINED, vertex)

        self._attach_circle_event(left_arc)
        self._attach_circle_event(right_arc)

    def remove_beach_section(self, arc: BeachArc) -> None:
        """Collapse ``arc`` at its circle event, creating a Voronoi vertex."""
        event = arc.circle_event
        x, y = event.x, event.y_center
        vertex = Vertex(x, y)

        previous = arc.previous
        following = arc.next

        detached = [arc]
        self._detach_beach_section(arc)

        # Collect every arc collapsing at the same vertex on the left.
        left_arc = previous
        while (
            left_arc.circle_event is not None
            and abs(x - left_arc.circle_event.x) < EPSILON
            and abs(y - left_arc.circle_event.y_center) < EPSILON
        ):
            previous = left_arc.previous
            detached.insert(0, left_arc)
            self._detach_beach_section(left_arc)
            left_arc = previous
        detached.insert(0, left_arc)
        self._detach_circle_event(left_arc)

        # ... and on the right.
        right_arc = following
        while (
            right_arc.circle_event is not None
            and abs(x - right_arc.circle_event.x) < EPSILON
            and abs(y - right_arc.circle_event.y_center) < EPSILON
        ):
            following = right_arc.next
            detached.append(right_arc)
            self._detach_beach_section(right_arc)
            right_arc = following
        detached.append(right_arc)
        self._detach_circle_event(right_arc)

        edges = self.graph.edges
        for left, right in zip(detached, detached[1:]):
            edges[right.edge].set_startpoint(left.site, right.site, vertex)

        left_arc = detached[0]
        right_arc = detached[-1]
        right_arc.edge = self.graph.create_edge(
            left_arc.site, right_arc.site, UNDEFINED, vertex
        )
        self._attach_circle_event(left_arc)
        self._attach_circle_event(right_arc)


def build(
    sites: Iterable[Site | Vertex | tuple[float, float]],
    x_bound: float,
    y_bound: float,
) -> Graph:
    """Compute the Voronoi graph of ``sites`` clipped to [0, x_bound] x [0, y_bound].

    A site equal to the one right before it in the input is ignored.
    """
    graph = Graph(x_bound, y_bound, sites)
    graph_sites = graph.sites

    site_events: list[int] = []
    last: Site | None = None
    for index, site in enumerate(graph_sites):
        if last is None or (last.x, last.y) != (site.x, site.y):
            site_events.append(index)
        last = site
    site_events.sort(key=lambda i: (graph_sites[i].y, graph_sites[i].x))

    fortune = Fortune(graph)
    pending = iter(site_events)
    site_index = next(pending, None)
    while True:
        circle = fortune.top_circle_event
        site = graph_sites[site_index] if site_index is not None else None
        if site is not None and (
            circle is None
            or site.y < circle.y
            or (site.y == circle.y and site.x < circle.x)
        ):
            graph.cells.append(Cell(site_index))
            site.cell = len(graph.cells) - 1
            fortune.add_beach_section(site_index)
            site_index = next(pending, None)
        elif circle is not None:
            fortune.remove_beach_section(circle.arc)
        else:
            break

    graph.clip_edges()
    graph.close_cells()
    return graph