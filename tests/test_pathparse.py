"""Tests for export/pathparse.py path mini-language parsing."""
import math
from collections import Counter

import pytest
from export.pathparse import (
    SCALE, ParseError, to_fixed, from_fixed, tokenize, split_commands, parse_path,
)


# --- fixed point ---

def test_to_fixed_rounds():
    assert to_fixed((1.2344, 2.5)) == (1234, 2500)
    assert to_fixed((-3.0, 0.0)) == (-3000, 0)


def test_from_fixed():
    assert from_fixed((1500, -250)) == (1.5, -0.25)


def test_scale():
    assert SCALE == 1000


# --- tokenize / split_commands ---

def test_tokenize_compact_forms():
    kinds = [(k, t) for k, t, _ in tokenize("M0,0L10-5")]
    assert kinds == [("cmd", "M"), ("num", "0"), ("num", "0"),
                     ("cmd", "L"), ("num", "10"), ("num", "-5")]


def test_tokenize_leading_dot_numbers():
    assert [t for _, t, _ in tokenize("M.5.5")] == ["M", ".5", ".5"]


def test_tokenize_exponent():
    assert [t for _, t, _ in tokenize("M 1e1 -2.5E-1")] == ["M", "1e1", "-2.5E-1"]


def test_split_commands_positions():
    cmds = split_commands("M 1 2 L 3 4")
    assert cmds == [("M", [1.0, 2.0], 0), ("L", [3.0, 4.0], 6)]


class TestParseErrors:
    def test_must_start_with_move(self):
        with pytest.raises(ParseError, match="move-to") as exc:
            parse_path("L 1 1")
        assert exc.value.token == "L"
        assert exc.value.position == 0

    def test_wrong_argument_count(self):
        with pytest.raises(ParseError, match="multiple of 2") as exc:
            parse_path("M 0 0 L 1")
        assert exc.value.token == "L"
        assert exc.value.position == 6

    def test_missing_arguments(self):
        with pytest.raises(ParseError, match="multiple of 7"):
            parse_path("M 0 0 A 5 5 0 0 1")

    def test_unknown_command(self):
        with pytest.raises(ParseError, match="unrecognized") as exc:
            parse_path("M 0 0 Q 1 1 2 2")
        assert exc.value.token == "Q"
        assert exc.value.position == 6

    def test_number_before_command(self):
        with pytest.raises(ParseError, match="before any command") as exc:
            parse_path("5 5 L 1 1")
        assert exc.value.position == 0

    def test_bad_arc_flag(self):
        with pytest.raises(ParseError, match="arc flags"):
            parse_path("M 0 0 A 5 5 0 2 0 1 1")

    def test_close_takes_no_arguments(self):
        with pytest.raises(ParseError, match="no arguments"):
            parse_path("M 0 0 L 1 0 Z 3")

    def test_is_value_error(self):
        assert issubclass(ParseError, ValueError)


# --- parse_path ---

class TestParsePath:
    def test_empty(self):
        assert parse_path("") == []
        assert parse_path("   ") == []

    def test_absolute_lines(self):
        (seq,) = parse_path("M 0 0 L 10 0 L 10 10")
        assert seq.points == [(0, 0), (10000, 0), (10000, 10000)]
        assert not seq.closed

    def test_implicit_lineto_after_move(self):
        (seq,) = parse_path("M 0 0 5 5 10 0")
        assert seq.points == [(0, 0), (5000, 5000), (10000, 0)]

    def test_relative_and_axis_commands(self):
        (seq,) = parse_path("m 1 1 l 2 0 h 3 v -4 H 0 V 0")
        assert seq.points == [(1000, 1000), (3000, 1000), (6000, 1000),
                              (6000, -3000), (0, -3000), (0, 0)]

    def test_each_move_starts_sequence(self):
        seqs = parse_path("M 0 0 L 1 0 M 5 5 L 6 5 M 9 9 L 9 8")
        assert len(seqs) == 3
        assert [s.points[0] for s in seqs] == [(0, 0), (5000, 5000), (9000, 9000)]

    def test_close_path(self):
        (seq,) = parse_path("M 0 0 L 10 0 L 10 10 Z")
        assert seq.closed
        assert seq.points == [(0, 0), (10000, 0), (10000, 10000)]

    def test_close_drops_repeated_start(self):
        (seq,) = parse_path("M 0 0 L 10 0 L 10 10 L 0 0 z")
        assert seq.closed
        assert len(seq.points) == 3

    def test_drawing_after_close_restarts_at_subpath_start(self):
        first, second = parse_path("M 1 1 L 5 1 L 5 5 Z L 1 9")
        assert first.closed
        assert second.points == [(1000, 1000), (1000, 9000)]
        assert not second.closed

    def test_relative_move_after_close(self):
        _, second = parse_path("M 10 10 L 20 10 Z m 1 1 l 1 0")
        assert second.points == [(11000, 11000), (12000, 11000)]

    def test_semicircle_flattening(self):
        (seq,) = parse_path("M 10 0 A 10 10 0 0 1 -10 0")
        assert len(seq.points) == 33
        assert seq.points[-1] == (-10000, 0)
        for x, y in seq.points:
            assert math.hypot(x, y) == pytest.approx(10000, abs=1.5)

    def test_segments_per_arc(self):
        (coarse,) = parse_path("M 10 0 A 10 10 0 0 1 -10 0", segments_per_arc=8)
        assert len(coarse.points) == 9

    def test_relative_arc(self):
        (seq,) = parse_path("M 10 0 a 10 10 0 0 1 -10 10")
        assert seq.points[-1] == (0, 10000)
        assert len(seq.points) == 17

    def test_degenerate_arc_adds_nothing(self):
        (seq,) = parse_path("M 3 4 A 5 5 0 0 1 3 4 L 6 4")
        assert seq.points == [(3000, 4000), (6000, 4000)]

    def test_zero_radius_arc_is_line(self):
        (seq,) = parse_path("M 0 0 A 0 0 0 0 1 5 5")
        assert seq.points == [(0, 0), (5000, 5000)]

    def test_lone_move(self):
        (seq,) = parse_path("M 2 3")
        assert seq.points == [(2000, 3000)]


class TestScenarioRoundTrip:
    """Parsing the generated corridor path recovers the tree topology."""

    def test_one_sequence_per_chain(self, scenario_sequences):
        assert len(scenario_sequences) == 35
        assert not any(s.closed for s in scenario_sequences)

    def test_endpoints_are_junctions(self, scenario_model, scenario_tree, scenario_sequences):
        degree = Counter()
        for p, c in scenario_tree.edges:
            degree[p] += 1
            degree[c] += 1
        junctions = [i for i, d in degree.items() if d != 2]
        pos = {i: to_fixed((scenario_model.nodes[i].x, scenario_model.nodes[i].y))
               for i in junctions}

        def nearest(pt):
            i = min(junctions, key=lambda j: math.dist(pos[j], pt))
            assert math.dist(pos[i], pt) <= 10
            return i

        hits = Counter()
        for seq in scenario_sequences:
            hits[nearest(seq.points[0])] += 1
            hits[nearest(seq.points[-1])] += 1
        assert hits == Counter({i: degree[i] for i in junctions})

    def test_points_inside_disk(self, scenario_model, scenario_sequences):
        r_max = len(scenario_model.ring_sizes) - 1
        limit = (r_max * scenario_model.step_size + 0.01) * SCALE
        for seq in scenario_sequences:
            for x, y in seq.points:
                assert math.hypot(x, y) <= limit
