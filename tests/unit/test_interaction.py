"""Unit tests for pointer, zoom and selection handling."""

import pytest

from topicmap.graph import chain_profile, map_profile
from topicmap.models import Node, TopicGraph
from topicmap.simulation import (
    ForceSimulation,
    InteractionController,
    ScreenTransform,
    ZoomControl,
    screen_to_sim_space,
)


@pytest.fixture
def controller() -> InteractionController:
    profile = map_profile()
    graph = TopicGraph(nodes=[
        Node(id="a", label="Docker", radius=55.0, weight=1, color="#93c5fd", x=450.0, y=400.0),
        Node(id="b", label="Python", radius=55.0, weight=1, color="#c4b5fd", x=550.0, y=400.0),
    ])
    simulation = ForceSimulation(graph, profile.forces, profile.center)
    return InteractionController(simulation, ZoomControl(profile.zoom))


class TestScreenToSimSpace:
    """Tests for pointer coordinate mapping."""

    def test_identity(self) -> None:
        """Test an untransformed surface at scale 1."""
        assert screen_to_sim_space(ScreenTransform(), 1.0, (120.0, 80.0)) == (120.0, 80.0)

    def test_offset_and_scale(self) -> None:
        """Test origin offset, surface scale and zoom are all undone."""
        transform = ScreenTransform(scale_x=2.0, scale_y=2.0, origin_x=10.0, origin_y=20.0)
        assert screen_to_sim_space(transform, 0.5, (110.0, 220.0)) == pytest.approx((100.0, 200.0))


class TestZoomControl:
    """Tests for clamped zoom."""

    def test_map_bounds(self) -> None:
        """Test the map zoom stays within [0.4, 2]."""
        zoom = ZoomControl(map_profile().zoom)
        assert zoom.scale == 0.9
        assert zoom.zoom_in() == 1.0
        for _ in range(20):
            zoom.zoom_in()
        assert zoom.scale == 2.0
        for _ in range(30):
            zoom.zoom_out()
        assert zoom.scale == 0.4

    def test_chain_bounds(self) -> None:
        """Test the chain zoom floor is 0.5."""
        zoom = ZoomControl(chain_profile().zoom)
        for _ in range(10):
            zoom.zoom_out()
        assert zoom.scale == 0.5


class TestInteractionController:
    """Tests for InteractionController."""

    def test_initial_scale_applied(self, controller: InteractionController) -> None:
        """Test the simulation starts at the initial zoom."""
        assert controller.simulation.state.scale == 0.9

    def test_drag_cycle(self, controller: InteractionController) -> None:
        """Test down, move and up on a node."""
        assert controller.pointer_down("a")
        assert controller.dragged_id == "a"

        assert controller.pointer_move((90.0, 180.0), ScreenTransform())
        node = controller.simulation.state.node("a")
        assert (node.x, node.y) == pytest.approx((100.0, 200.0))
        assert (node.vx, node.vy) == (0.0, 0.0)

        controller.pointer_up()
        assert controller.dragged_id is None

    def test_pointer_leave_releases(self, controller: InteractionController) -> None:
        """Test leaving the surface ends the drag."""
        controller.pointer_down("b")
        controller.pointer_leave()
        assert controller.dragged_id is None

    def test_move_without_drag_ignored(self, controller: InteractionController) -> None:
        """Test pointer moves do nothing when no node is held."""
        before = controller.simulation.state
        assert not controller.pointer_move((10.0, 10.0), ScreenTransform())
        assert controller.simulation.state is before

    def test_drag_does_not_select(self, controller: InteractionController) -> None:
        """Test dragging leaves the selection alone."""
        controller.pointer_down("a")
        controller.pointer_move((10.0, 10.0), ScreenTransform())
        controller.pointer_up()
        assert controller.selected_node is None

    def test_click_selects(self, controller: InteractionController) -> None:
        """Test clicking a node selects it."""
        node = controller.click("b")
        assert node is not None and node.label == "Python"
        assert controller.selected_node.id == "b"

    def test_click_empty_clears(self, controller: InteractionController) -> None:
        """Test clicking the canvas or an unknown id clears the selection."""
        controller.click("a")
        assert controller.click(None) is None
        assert controller.selected_node is None

        controller.click("a")
        assert controller.click("ghost") is None
        assert controller.selected_id is None

    def test_selected_node_follows_layout(self, controller: InteractionController) -> None:
        """Test the selected node reflects the latest snapshot."""
        controller.click("a")
        controller.simulation.tick()
        assert controller.selected_node == controller.simulation.state.node("a")

    def test_zoom_updates_simulation(self, controller: InteractionController) -> None:
        """Test zooming changes the published scale and pointer mapping."""
        assert controller.zoom_in() == 1.0
        assert controller.simulation.state.scale == 1.0
        assert controller.zoom_out() == 0.9
        assert controller.simulation.state.scale == 0.9

        controller.pointer_down("a")
        controller.pointer_move((90.0, 180.0), ScreenTransform())
        node = controller.simulation.state.node("a")
        assert (node.x, node.y) == pytest.approx((100.0, 200.0))
