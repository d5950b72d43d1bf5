import pytest

from main import main
from tour import MOVES


def parse_rows(out):
    return [[int(tok) for tok in line.split()] for line in out.splitlines()]


def test_default_run_prints_interior(capsys):
    assert main(['--start', '2', '2']) == 0
    out = capsys.readouterr().out
    rows = parse_rows(out)
    assert len(rows) == 12
    assert rows[:2] == [[], []] and rows[10:] == [[], []]
    values = [v for row in rows for v in row]
    assert sorted(values) == list(range(1, 65))
    assert rows[2][0] == 1

    cells = {v: (r, c) for r, row in enumerate(rows) for c, v in enumerate(row)}
    for k in range(1, 64):
        (r1, c1), (r2, c2) = cells[k], cells[k + 1]
        assert (r2 - r1, c2 - c1) in MOVES


def test_seeded_runs_match(capsys):
    main(['--seed', '3'])
    first = capsys.readouterr().out
    main(['--seed', '3', '--iterative'])
    assert capsys.readouterr().out == first


def test_failure_prints_no_result(capsys):
    assert main(['--size', '6', '--margin', '1', '--start', '1', '1']) == 0
    assert capsys.readouterr().out == 'no result\n'


def test_configuration_error_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        main(['--size', '4'])
    assert exc.value.code == 2
    assert '没有空格' in capsys.readouterr().err
