import pytest

from rmkit.graph import Graph, GraphConfig
from rmkit.protocol import GraphColor, GraphOperation, GraphType


def _sample_config():
    return GraphConfig(
        graphic_id=b"abc",
        operate_type=GraphOperation.UPDATE,
        graphic_type=GraphType.ARC,
        layer=3,
        color=GraphColor.CYAN,
        start_angle=30,
        end_angle=300,
        width=5,
        start_x=960,
        start_y=540,
        radius=100,
        end_x=1200,
        end_y=700,
    )


def test_config_round_trip():
    config = _sample_config()
    raw = config.to_bytes()
    assert len(raw) == GraphConfig.SIZE == 15
    assert GraphConfig.from_bytes(raw) == config


def test_default_config_is_all_zero():
    assert GraphConfig().to_bytes() == bytes(15)


def test_operation_occupies_low_bits_of_first_word():
    raw = GraphConfig(operate_type=GraphOperation.ADD).to_bytes()
    assert raw[3:7] == (1).to_bytes(4, "little")


def test_fields_truncate_to_bit_width():
    config = GraphConfig()
    config.layer = 17
    assert config.layer == 1


def test_graphic_id_length_checked():
    with pytest.raises(ValueError):
        GraphConfig(graphic_id=b"ab")


def test_from_bytes_too_short():
    with pytest.raises(ValueError):
        GraphConfig.from_bytes(bytes(10))


def test_set_content_sets_length():
    graph = Graph(title="hp:")
    graph.set_content("100")
    assert graph.characters() == "hp:100"
    assert graph.config.end_angle == len("hp:100")


def test_angles_outside_range_are_ignored():
    graph = Graph()
    graph.set_start_angle(90)
    graph.set_start_angle(400)
    graph.set_end_angle(-5)
    assert graph.config.start_angle == 90
    assert graph.config.end_angle == 0


def _decode(config):
    return config.radius | config.end_x << 10 | config.end_y << 21


def test_int_num_spreads_over_fields():
    graph = Graph()
    graph.set_int_num(123456)
    assert _decode(graph.config) == 123456


def test_negative_int_num_masks():
    graph = Graph()
    graph.set_int_num(-1)
    assert graph.config.radius == 1023
    assert graph.config.end_x == 2047
    assert graph.config.end_y == 2047


def test_float_num_in_thousandths():
    graph = Graph()
    graph.set_float_num(1.5)
    assert _decode(graph.config) == 1500


def test_is_repeated_tracks_changes():
    graph = Graph()
    assert graph.is_repeated()
    graph.config.color = GraphColor.PINK
    assert not graph.is_repeated()
    graph.update_last_config()
    assert graph.is_repeated()
    graph.set_content("x")
    assert not graph.is_repeated()


def test_last_config_is_a_copy():
    graph = Graph(config=_sample_config())
    graph.update_last_config()
    graph.config.start_x = 10
    assert graph.last_config.start_x == 960


def test_is_string():
    assert Graph(config=GraphConfig(graphic_type=GraphType.STRING)).is_string()
    assert not Graph(config=GraphConfig(graphic_type=GraphType.LINE)).is_string()