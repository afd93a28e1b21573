from src.custom_data_structures.double_array_trie.tail_store import TailStore


def test_append_returns_offsets_and_advances():
    tail = TailStore()

    assert tail.append("achelor") == 1
    assert tail.append("ar") == 9
    assert tail.append("") == 12
    assert tail.position == 13
    assert "".join(tail.values[1:13]) == "achelor#ar##"


def test_append_grows_by_doubling():
    tail = TailStore(4)

    tail.append("abcdefghij")

    assert len(tail) == 16
    assert tail.read(1) == "abcdefghij"


def test_matches():
    tail = TailStore()
    offset = tail.append("helor")

    assert tail.matches(offset, "helor") is True
    assert tail.matches(offset, "helo") is False
    assert tail.matches(offset, "helors") is False
    assert tail.matches(offset, "hx") is False
    assert tail.matches(offset + 5, "") is True


def test_matches_out_of_range_is_false():
    tail = TailStore.from_values("0ab")

    assert tail.matches(1, "ab") is False
    assert tail.matches(40, "") is False


def test_common_prefix_length():
    tail = TailStore()
    offset = tail.append("achelor")

    assert tail.common_prefix_length(offset, "adge") == 1
    assert tail.common_prefix_length(offset, "ach") == 3
    assert tail.common_prefix_length(offset, "xyz") == 0
    assert tail.common_prefix_length(offset, "achelor") == 8


def test_shift_moves_run_and_tombstones_rest():
    tail = TailStore()
    tail.append("achelor")
    tail.append("ar")

    tail.shift(1, 2)

    assert "".join(tail.values[1:12]) == "helor#??ar#"
    assert tail.read(1) == "helor"
    assert tail.position == 12


def test_shift_whole_run_leaves_empty_run():
    tail = TailStore()
    tail.append("ach")

    tail.shift(1, 4)

    assert "".join(tail.values[1:5]) == "#???"
    assert tail.matches(1, "") is True
