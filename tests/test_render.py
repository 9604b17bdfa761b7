from student_routine import render
from student_routine.models import WEEK, BlockKind, CatalogSection, ConflictPair, Pick, ScheduleBlock, TemporalSnapshot, Weekday
from student_routine.pipeline import compose_routine
from student_routine.resolver import CatalogIndex
from student_routine.temporal import Notice


def make_block(start, end, code="CSE220", kind=BlockKind.CLASS, room="UB20101"):
    return ScheduleBlock(
        course_code=code,
        section_name="A",
        kind=kind,
        day=Weekday.MONDAY,
        start=start,
        end=end,
        room=room,
        faculty="MHR",
    )


def test_describe_pair():
    pair = ConflictPair(
        day=Weekday.MONDAY,
        a=make_block(570, 650),
        b=make_block(570, 740, kind=BlockKind.LAB),
    )
    assert render.describe_pair(pair) == (
        "MONDAY: CSE220-A (9:30 AM-10:50 AM) clashes with CSE220-A (9:30 AM-12:20 PM)"
    )


def test_banner_text():
    lab = make_block(570, 740, kind=BlockKind.LAB, room="12F-31L")
    cls = make_block(570, 650)
    assert render.banner_text(Notice(current=lab, next=None, also_current=(cls,))) == (
        "NOW: CSE220 (Sec A) LAB Room 12F-31L (also CSE220-A (Class))"
    )
    assert render.banner_text(Notice(current=None, next=cls)) == (
        "Next: CSE220 (9:30 AM-10:50 AM) in UB20101"
    )
    assert render.banner_text(Notice(current=None, next=None)) == "No more classes today."


def test_today_first():
    order = render.today_first(Weekday.TUESDAY)
    assert order[0] is Weekday.TUESDAY
    assert order[1:] == [d for d in WEEK if d is not Weekday.TUESDAY]
    assert render.today_first(None) == list(WEEK)


def make_routine(minute=600):
    section = CatalogSection(
        courseCode="CSE220",
        sectionName="A",
        sectionSchedule={
            "classSchedules": [{"day": "MONDAY", "startTime": "09:30:00", "endTime": "10:50:00"}]
        },
        labSchedules=[{"day": "MONDAY", "startTime": "09:30:00", "endTime": "12:20:00"}],
    )
    return compose_routine(
        [Pick("CSE220", "A")],
        CatalogIndex([section]).lookup,
        TemporalSnapshot(Weekday.MONDAY, minute),
    )


def test_list_lines():
    lines = render.list_lines(make_routine(), [Weekday.SUNDAY, Weekday.MONDAY])
    assert lines[0] == "SUNDAY"
    assert lines[1] == "  No classes."
    assert lines[2] == "MONDAY (Today)"
    assert lines[3].startswith("  CSE220 (Sec A) CLASS NOW (CLASH) 9:30 AM-10:50 AM")
    assert lines[3].endswith("Faculty: TBA Room: ?")


def test_grid_lines():
    lines = render.grid_lines(make_routine(), [Weekday.MONDAY])
    assert lines[0].split() == ["TIME/DAY", "MONDAY"]
    assert len(lines) == 8
    assert "!CSE220 CLASS*" in lines[2]
    assert lines[3].endswith("|")


def test_grid_lines_mark_the_current_slot():
    lines = render.grid_lines(make_routine(), [Weekday.MONDAY])
    assert lines[2].startswith(">9:30 AM-10:50 AM")
    assert [line for line in lines if line.startswith(">")] == [lines[2]]

    evening = render.grid_lines(make_routine(minute=1200), [Weekday.MONDAY])
    assert not any(line.startswith(">") for line in evening)
