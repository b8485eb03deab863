from emojisearch.core.directions import FORWARD_DIRECTIONS, SCAN_DIRECTIONS, get_directions


def test_forward_only():
    directions = get_directions(False)
    assert len(directions) == 4
    assert all(not d.is_backward for d in directions)
    assert [d.vector for d in directions] == [(0, 1), (1, 0), (1, 1), (-1, 1)]


def test_with_backwards():
    directions = get_directions(True)
    assert len(directions) == 8
    backward = [d for d in directions if d.is_backward]
    assert len(backward) == 4
    # mesmo vetor, só a ordem de escrita muda
    assert [d.vector for d in backward] == [d.vector for d in FORWARD_DIRECTIONS]


def test_get_directions_returns_fresh_list():
    first = get_directions(False)
    first.reverse()
    assert get_directions(False)[0].vector == (0, 1)


def test_scan_directions_cover_compass():
    assert len(set(SCAN_DIRECTIONS)) == 8
    assert (0, 0) not in SCAN_DIRECTIONS
    assert all(dr in (-1, 0, 1) and dc in (-1, 0, 1) for dr, dc in SCAN_DIRECTIONS)
