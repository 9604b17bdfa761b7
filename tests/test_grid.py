from student_routine.conflicts import group_by_day
from student_routine.grid import build_grid, slot_span
from student_routine.models import (
    WEEK,
    BlockHead,
    BlockKind,
    BreakCell,
    EmptyCell,
    HiddenCell,
    ScheduleBlock,
    Weekday,
)
from student_routine.slots import DEFAULT_SLOTS
from student_routine.timemodel import parse_time


def make_block(start, end, day=Weekday.MONDAY, code="CSE220", kind=BlockKind.CLASS):
    return ScheduleBlock(
        course_code=code,
        section_name="A",
        kind=kind,
        day=day,
        start=parse_time(start),
        end=parse_time(end),
    )


def grid_for(*blocks):
    return build_grid(group_by_day(blocks), DEFAULT_SLOTS)


def states(grid, day):
    names = {BlockHead: "head", HiddenCell: "hidden", BreakCell: "break", EmptyCell: "empty"}
    return [names[type(c)] for c in grid.cells[day]]


def test_class_and_lab_share_a_head():
    cls = make_block("09:30", "10:50")
    lab = make_block("09:30", "12:20", kind=BlockKind.LAB)
    grid = grid_for(cls, lab)

    assert states(grid, Weekday.MONDAY) == [
        "empty", "head", "hidden", "empty", "empty", "empty", "empty"
    ]
    head = grid.cell(Weekday.MONDAY, 1)
    assert head.block == cls
    assert head.span == 1
    assert [(h.block, h.span) for h in head.stacked] == [(lab, 2)]
    assert head.row_span == 2
    assert head.blocks == (cls, lab)


def test_breaks_between_first_and_last_block():
    grid = grid_for(make_block("08:00", "09:20"), make_block("14:00", "15:20", code="MAT110"))
    assert states(grid, Weekday.MONDAY) == [
        "head", "break", "break", "break", "head", "empty", "empty"
    ]


def test_day_without_blocks_is_all_empty():
    grid = grid_for(make_block("08:00", "09:20"))
    for day in WEEK:
        if day is Weekday.MONDAY:
            continue
        assert states(grid, day) == ["empty"] * len(DEFAULT_SLOTS)


def test_unaligned_block_left_out_of_grid():
    odd = make_block("09:00", "10:00")
    grid = grid_for(odd)
    assert [u.block for u in grid.unaligned] == [odd]
    assert grid.heads(Weekday.MONDAY) == []
    # the block still bounds the day's break range
    assert states(grid, Weekday.MONDAY)[1] == "break"


def test_short_block_spans_one_slot():
    block = make_block("08:00", "08:30")
    assert slot_span(DEFAULT_SLOTS, 0, block) == 1
    assert grid_for(block).cell(Weekday.MONDAY, 0).span == 1


def test_block_starting_under_a_span_is_stacked():
    lab = make_block("08:00", "12:20", kind=BlockKind.LAB)
    cls = make_block("09:30", "10:50", code="MAT110")
    grid = grid_for(cls, lab)
    assert states(grid, Weekday.MONDAY) == [
        "head", "hidden", "hidden", "empty", "empty", "empty", "empty"
    ]
    head = grid.cell(Weekday.MONDAY, 0)
    assert head.block == lab
    assert head.span == 3
    assert [h.block for h in head.stacked] == [cls]
    assert head.row_span == 3


def test_stacked_block_extends_row_span():
    first = make_block("08:00", "10:50")
    second = make_block("09:30", "12:20", code="MAT110")
    head = grid_for(first, second).cell(Weekday.MONDAY, 0)
    assert head.span == 2
    assert head.stacked[0].span == 2
    assert head.row_span == 3


def test_every_aligned_block_has_one_head():
    blocks = [
        make_block("08:00", "12:20", kind=BlockKind.LAB),
        make_block("09:30", "10:50", code="B"),
        make_block("09:30", "10:50", code="C"),
        make_block("14:00", "16:50", code="D"),
        make_block("14:00", "15:20", day=Weekday.SUNDAY, code="E"),
    ]
    grid = grid_for(*blocks)
    placed = [b for day in WEEK for head in grid.heads(day) for b in head.blocks]
    assert sorted(b.course_code for b in placed) == sorted(b.course_code for b in blocks)


def test_grid_completeness_and_hidden_count():
    blocks = [
        make_block("08:00", "10:50"),
        make_block("11:00", "12:20", code="B"),
        make_block("14:00", "18:20", code="C", kind=BlockKind.LAB),
        make_block("09:30", "12:20", day=Weekday.WEDNESDAY, code="D"),
    ]
    grid = grid_for(*blocks)
    for day in WEEK:
        cells = grid.cells[day]
        assert len(cells) == len(DEFAULT_SLOTS)
        assert all(isinstance(c, (EmptyCell, BreakCell, BlockHead, HiddenCell)) for c in cells)
        hidden = sum(1 for c in cells if isinstance(c, HiddenCell))
        assert hidden == sum(h.row_span - 1 for h in grid.heads(day))


def test_span_covers_block_without_overshooting():
    slot_len = 80
    for start, end in [("09:30", "10:50"), ("09:30", "12:20"), ("08:00", "18:20"), ("14:00", "16:50")]:
        block = make_block(start, end)
        index = DEFAULT_SLOTS.index_starting_at(block.start)
        span = slot_span(DEFAULT_SLOTS, index, block)
        covered = DEFAULT_SLOTS[index + span - 1].end - DEFAULT_SLOTS[index].start
        assert block.duration <= covered < block.duration + slot_len


def test_break_cells_stay_inside_day_bounds():
    blocks = [make_block("09:30", "10:50"), make_block("15:30", "16:50", code="B")]
    grid = grid_for(*blocks)
    for slot, cells in grid.rows([Weekday.MONDAY]):
        if isinstance(cells[Weekday.MONDAY], BreakCell):
            assert 570 <= slot.start < 1010


def test_rows_follow_requested_days():
    grid = grid_for(make_block("08:00", "09:20"))
    rows = list(grid.rows([Weekday.MONDAY, Weekday.SUNDAY]))
    assert len(rows) == len(DEFAULT_SLOTS)
    assert list(rows[0][1]) == [Weekday.MONDAY, Weekday.SUNDAY]
