from milestone.flow import Point, Size, chip_rows, measure_chips, pack


def test_pack_wraps_third_item_when_it_would_cross_the_edge():
    result = pack(120, [(50, 20)] * 3, spacing=10)

    assert result.offsets == [Point(0, 0), Point(60, 0), Point(0, 30)]
    assert result.size == Size(120, 50)
    assert result.line_count == 2
    assert result.lines() == [[0, 1], [2]]


def test_pack_total_height_sums_line_heights_and_spacing():
    items = [(40, 10), (40, 25), (60, 15), (100, 30)]
    result = pack(100, items, spacing=5)

    assert result.offsets == [Point(0, 0), Point(45, 0), Point(0, 30), Point(0, 50)]
    assert result.size.height == 25 + 15 + 30 + 5 * 2


def test_pack_places_oversized_item_alone_at_line_start():
    result = pack(100, [(30, 10), (200, 10), (30, 10)], spacing=10)

    assert result.offsets == [Point(0, 0), Point(0, 20), Point(0, 40)]
    assert result.size.height == 50


def test_pack_does_not_wrap_an_oversized_first_item():
    result = pack(100, [(200, 10), (30, 10)], spacing=10)

    assert result.offsets[0] == Point(0, 0)
    assert result.offsets[1] == Point(0, 20)


def test_pack_empty_sequence():
    result = pack(300, [], spacing=8)

    assert result.offsets == []
    assert result.size == Size(300, 0)
    assert result.line_count == 0


def test_pack_non_positive_width_puts_one_item_per_line():
    result = pack(0, [(10, 5), (10, 5), (10, 5)], spacing=2)

    assert [point.x for point in result.offsets] == [0, 0, 0]
    assert [point.y for point in result.offsets] == [0, 7, 14]
    assert result.size.height == 19


def test_pack_items_on_a_line_do_not_overlap():
    items = [(33, 12), (17, 12), (58, 14), (9, 10), (71, 12), (40, 11), (25, 13)]
    spacing = 6
    result = pack(150, items, spacing=spacing)

    for line in result.lines():
        for left, right in zip(line, line[1:]):
            assert result.offsets[left].y == result.offsets[right].y
            assert result.offsets[left].x + items[left][0] + spacing <= result.offsets[right].x
        for index in line[1:]:
            assert result.offsets[index].x + items[index][0] <= 150


def test_pack_is_idempotent():
    items = [(33, 12), (17, 12), (58, 14), (9, 10)]

    assert pack(80, items, spacing=4) == pack(80, items, spacing=4)


def test_measure_chips_scales_with_label_length():
    sizes = measure_chips(["Go", "Python"], char_width=7, padding=12, height=28)

    assert sizes == [Size(38, 28), Size(66, 28)]


def test_chip_rows_groups_labels_by_line():
    rows = chip_rows(["Python", "Flask", "SQLite"], max_width=16, spacing=1)

    assert rows == [["Python", "Flask"], ["SQLite"]]
