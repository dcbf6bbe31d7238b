import pytest

from condo_signage.services.ids import contains_id, ids_to_csv, parse_id_list


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("", []),
        ("1,2,3", [1, 2, 3]),
        (" 4 , 5 ,, x, 6 ", [4, 5, 6]),
        ("[7, 8]", [7, 8]),
        ('["9", "10"]', [9, 10]),
        ("[11, 12", [11, 12]),
        ([3, "4", None, "a"], [3, 4]),
        (5, [5]),
        ("2,1,2,1", [2, 1]),
    ],
)
def test_parse_id_list(raw, expected):
    assert parse_id_list(raw) == expected


def test_malformed_json_array_falls_back_to_csv():
    assert parse_id_list("[1, 2, oops]") == [1, 2]


def test_booleans_are_not_ids():
    assert parse_id_list([True, 3]) == [3]


def test_csv_round_trip_keeps_order():
    assert ids_to_csv([3, 1, 2]) == "3,1,2"
    assert parse_id_list(ids_to_csv([3, 1, 2])) == [3, 1, 2]
    assert ids_to_csv([]) == ""


def test_contains_id():
    assert contains_id("1,2,3", 2)
    assert contains_id("[4]", 4)
    assert not contains_id("10,20", 2)
