import pytest

from mobagen.maze.node import Node


def test_default_node_has_no_walls():
    assert Node().to_bits() == 0


def test_north_is_lowest_bit():
    assert Node(north=True).to_bits() == 1


def test_west_is_highest_bit():
    assert Node(west=True).to_bits() == 8


def test_all_walls_set_every_bit():
    assert Node(True, True, True, True).to_bits() == 0b1111


@pytest.mark.parametrize("bits", range(16))
def test_bits_round_trip(bits):
    assert Node.from_bits(bits).to_bits() == bits


@pytest.mark.parametrize(
    "node",
    [Node(True, False, True, False), Node(False, True, False, True), Node(south=True)],
)
def test_node_round_trip(node):
    assert Node.from_bits(node.to_bits()) == node


def test_setting_a_wall_changes_only_its_bit():
    node = Node(True, True, True, True)
    node.east = False
    assert node.to_bits() == Node(north=True, south=True, west=True).to_bits()
    assert Node.from_bits(node.to_bits()).east is False


@pytest.mark.parametrize("bits", [-1, 16, 255])
def test_out_of_range_bits_rejected(bits):
    with pytest.raises(ValueError):
        Node.from_bits(bits)