import pytest
from report import (
    SEPARATOR,
    THE_END,
    classify_density,
    count_on_off,
    format_state_line,
    render_density_classification,
    render_on_off_report,
    render_rule_table,
    render_states,
    stage_header,
)
from rules import RuleTable
from simulate import allocate_states, evolve_range

def test_delimiters():
    assert stage_header(0) == "==STAGE 0============================"
    assert stage_header(2) == "==STAGE 2============================"
    assert SEPARATOR == "-" * 37
    assert THE_END == "==THE END============================"

@pytest.mark.parametrize(
    "t,expected",
    [
        (0, "   0: *.."),
        (42, "  42: *.."),
        (1234, "1234: *.."),
        (12345, "12345: *.."),
    ],
)
def test_format_state_line(t, expected):
    assert format_state_line(t, "*..") == expected

def test_render_states_inclusive_range():
    states = ["*.", ".*", "**", ".."]
    assert render_states(states, 1, 3) == ["   1: .*", "   2: **", "   3: .."]
    assert render_states(states, 2, 2) == ["   2: **"]

def test_render_states_from_state_sequence():
    states = allocate_states(2, "*....")
    evolve_range(states, 0, 2, RuleTable.from_int(150))
    assert render_states(states, 0, 2) == ["   0: *....", "   1: **..*", "   2: *.**."]

def test_render_rule_table():
    codes, bits = render_rule_table(RuleTable.from_int(150))
    assert codes == " 000 001 010 011 100 101 110 111"
    assert bits == "  0   1   1   0   1   0   0   1 "

def test_on_off_report_counts():
    states = ["*.", ".*", "*."]
    assert count_on_off(states, 0, 2, 0) == (2, 1)
    assert render_on_off_report(states, 0, 2, 0) == ["#ON=2 #OFF=1 CELL#0 START@0"]
    assert render_on_off_report(states, 1, 2, 1) == ["#ON=1 #OFF=1 CELL#1 START@1"]

def test_on_off_report_empty_range():
    assert render_on_off_report(["*"], 3, 2, 0) == ["#ON=0 #OFF=0 CELL#0 START@3"]

@pytest.mark.parametrize(
    "final,op",
    [
        ("**...", ">"),
        (".....", "<"),
        ("..***", "<"),
        ("*.*.*", "="),
        (".*.*.", "="),
        ("*", "="),
        (".", "="),
    ],
)
def test_classify_density(final, op):
    assert classify_density(final) == op

def test_render_density_classification():
    states = ["*.*..", "..*..", "....."]
    assert render_density_classification(states, 0, 2) == [
        "   0: *.*..",
        "AT T=0: #ON/#CELLS < 1/2",
    ]
    states = [".*.*.", "*****"]
    assert render_density_classification(states, 0, 1)[1] == "AT T=0: #ON/#CELLS > 1/2"
