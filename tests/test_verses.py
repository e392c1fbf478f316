import pytest

from music_library_api.app.services.verses import paginate_verses, split_verses

LYRICS = "one\n\ntwo\n\nthree\n\nfour\n\nfive"


def test_split_verses_keeps_order():
    assert split_verses(LYRICS) == ["one", "two", "three", "four", "five"]


def test_split_verses_single_newline_is_not_a_delimiter():
    assert split_verses("line a\nline b\n\nline c") == ["line a\nline b", "line c"]


def test_empty_text_is_one_empty_verse():
    assert split_verses("") == [""]
    assert paginate_verses("", 1, 1) == ([""], 1)


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (1, 1, ["one"]),
        (2, 2, ["three", "four"]),
        (3, 2, ["five"]),
        (1, 10, ["one", "two", "three", "four", "five"]),
    ],
)
def test_page_slices(page, limit, expected):
    verses, total = paginate_verses(LYRICS, page, limit)
    assert verses == expected
    assert total == 5


def test_page_beyond_end_is_empty_with_total():
    assert paginate_verses(LYRICS, 6, 1) == ([], 5)
    assert paginate_verses(LYRICS, 4, 2) == ([], 5)


def test_slices_match_list_slicing_for_every_page():
    verses = split_verses(LYRICS)
    for limit in range(1, 7):
        for page in range(1, 8):
            start = (page - 1) * limit
            expected = verses[start:min(page * limit, len(verses))] if start < len(verses) else []
            assert paginate_verses(LYRICS, page, limit) == (expected, len(verses))


@pytest.mark.parametrize("page, limit", [(0, 1), (1, 0), (-1, 5)])
def test_non_positive_arguments_are_rejected(page, limit):
    with pytest.raises(ValueError):
        paginate_verses(LYRICS, page, limit)
