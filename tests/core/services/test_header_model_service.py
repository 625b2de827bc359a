import pytest

from header_toolkit.core.columns import pad_forest
from header_toolkit.core.models import EntryKind, HeaderModel, HeaderNode
from header_toolkit.core.services.header_model_service import Span, build_header_model


def _rows(model):
    return [
        (e.id, e.kind.value, e.leaf_start, e.leaf_end, e.depth_start, e.depth_end)
        for e in model.entries
    ]


def _assert_well_formed(model):
    for entry in model.entries:
        assert entry.leaf_start <= entry.leaf_end
        assert entry.depth_start <= entry.depth_end
    leaf_starts = sorted(e.leaf_start for e in model.leaves())
    assert leaf_starts == list(range(model.leaf_count))


def test_simple_header_is_flattened_in_display_order(simple_header):
    forest, _ = simple_header
    model = build_header_model(forest)

    assert _rows(model) == [
        ("G1", "group", 0, 1, 0, 0),
        ("c1", "leaf", 0, 0, 1, 1),
        ("c2", "leaf", 1, 1, 1, 1),
        ("c3", "leaf", 2, 2, 0, 1),
    ]
    assert model.min_depth == 0
    assert model.max_depth == 1
    assert model.leaf_count == 3
    _assert_well_formed(model)


def test_demo_header_spans_and_depths(demo_forest):
    model = build_header_model(demo_forest)
    rows = {row[0]: row[1:] for row in _rows(model)}

    assert [e.id for e in model.entries] == [
        "A1", "A1_1", "A1_2", "A1_3", "A1_3_1", "A1_3_2", "A2", "A3",
        "A4", "A4_1", "A4_2", "A4_3", "A4_4", "A4_5", "A4_6",
    ]
    assert rows["A1"] == ("group", 0, 3, 0, 0)
    assert rows["A1_3"] == ("group", 2, 3, 1, 1)
    assert rows["A1_3_2"] == ("leaf", 3, 3, 2, 2)
    assert rows["A1_1"] == ("leaf", 0, 0, 1, 2)
    assert rows["A2"] == ("leaf", 4, 4, 0, 2)
    assert rows["A4"] == ("group", 6, 11, 0, 0)
    assert rows["A4_6"] == ("leaf", 11, 11, 1, 2)
    assert model.max_depth == 2
    assert model.leaf_count == 12
    _assert_well_formed(model)


def test_group_span_is_union_of_children(demo_forest, by_id):
    model = build_header_model(demo_forest)
    nodes = by_id(demo_forest)

    for group in model.groups():
        child_ids = {child.id for child in nodes[group.id].children}
        children = [e for e in model.entries if e.id in child_ids]
        assert group.leaf_start == min(c.leaf_start for c in children)
        assert group.leaf_end == max(c.leaf_end for c in children)


def test_groups_precede_their_descendants(demo_forest):
    model = build_header_model(demo_forest)
    ids = [e.id for e in model.entries]

    assert ids.index("A1") < ids.index("A1_3") < ids.index("A1_3_1")
    assert ids.index("A4") < ids.index("A4_1")


def test_groups_occupy_one_row_and_leaves_reach_bottom(demo_forest):
    model = build_header_model(demo_forest)

    for entry in model.entries:
        if entry.kind is EntryKind.GROUP:
            assert entry.depth_end == entry.depth_start
        else:
            assert entry.depth_end == model.max_depth


def test_padding_group_is_transparent(make_forest):
    forest, _ = make_forest([("G1", ["c1", "c2"]), ("~", ["c3"])])
    model = build_header_model(forest)

    assert [e.id for e in model.entries] == ["G1", "c1", "c2", "c3"]
    c3 = model.entries[-1]
    assert (c3.leaf_start, c3.depth_start, c3.depth_end) == (2, 0, 1)


def test_children_of_padding_inside_group_keep_group_child_depth(make_forest):
    forest, _ = make_forest([("G1", [("~", ["c1"]), ("G2", ["c2"])])])
    model = build_header_model(forest)

    rows = {row[0]: row[1:] for row in _rows(model)}
    assert rows["c1"] == ("leaf", 0, 0, 1, 2)
    assert rows["G2"] == ("group", 1, 1, 1, 1)
    assert rows["c2"] == ("leaf", 1, 1, 2, 2)


def test_padded_forest_builds_identical_model(demo_forest):
    assert build_header_model(pad_forest(demo_forest)) == build_header_model(demo_forest)


def test_empty_group_is_discarded():
    forest = [
        HeaderNode.leaf("c1"),
        HeaderNode.group("empty", []),
        HeaderNode.leaf("c2"),
    ]
    model = build_header_model(forest)

    assert [e.id for e in model.entries] == ["c1", "c2"]
    assert [e.leaf_start for e in model.entries] == [0, 1]


def test_discarding_propagates_upward():
    forest = [
        HeaderNode.group("outer", [HeaderNode.group("inner", [HeaderNode.group("pad", [], padding=True)])]),
        HeaderNode.group("kept", [HeaderNode.group("gone", []), HeaderNode.leaf("c1")]),
    ]
    model = build_header_model(forest)

    assert _rows(model) == [
        ("kept", "group", 0, 0, 0, 0),
        ("c1", "leaf", 0, 0, 1, 1),
    ]


def test_empty_forest_gives_empty_model():
    assert build_header_model([]) == HeaderModel()
    assert build_header_model([HeaderNode.group("g", [])]).entries == ()


def test_build_does_not_mutate_input(simple_header):
    forest, _ = simple_header
    before = list(forest)

    build_header_model(forest)
    build_header_model(forest)

    assert forest == before


def test_rebuild_is_deterministic(demo_forest):
    assert build_header_model(demo_forest) == build_header_model(demo_forest)


def test_duplicate_ids_are_told_apart_by_instance():
    first = HeaderNode.leaf("dup")
    second = HeaderNode.leaf("dup")
    model = build_header_model([first, second])

    assert model.index_of(first.ref) == 0
    assert model.index_of(second.ref) == 1
    assert model.find(second.ref).leaf_start == 1


def test_labels_are_carried_over(demo_forest):
    model = build_header_model(demo_forest)

    assert model.entries[0].label == "A1"
    assert model.entries[1].label == "A1-1"


@pytest.mark.parametrize(
    "first, second, expected",
    [
        (Span(0, 1, 2), None, Span(0, 1, 2)),
        (Span(2, 3, 1), Span(0, 1, 2), Span(0, 3, 2)),
    ],
)
def test_span_merge(first, second, expected):
    assert first.merge(second) == expected
