from services.extraction import select_imei


def test_valid_candidate_beats_short_raw_reading():
    selection = select_imei("35960506823410", ["359605068234106"])

    assert selection.value == "359605068234106"
    assert selection.warnings == []


def test_valid_reading_without_candidates():
    selection = select_imei("490154203237518")

    assert selection.value == "490154203237518"
    assert selection.warnings == []


def test_checksum_valid_candidate_beats_invalid_raw():
    selection = select_imei("490154203237519", ["490154203237518"])

    assert selection.value == "490154203237518"
    assert selection.warnings == []


def test_fifteen_digits_failing_checksum_is_kept_with_warning():
    selection = select_imei("359605068234107")

    assert selection.value == "359605068234107"
    assert len(selection.warnings) == 1
    assert "checksum" in selection.warnings[0]


def test_wrong_length_returns_longest_with_digit_count():
    selection = select_imei("1234567", ["35960506823410"])

    assert selection.value == "35960506823410"
    assert len(selection.warnings) == 1
    assert "14 digits" in selection.warnings[0]
    assert "15" in selection.warnings[0]


def test_longest_tie_keeps_primary_reading():
    selection = select_imei("11111111111111", ["22222222222222"])

    assert selection.value == "11111111111111"


def test_confusable_letters_are_corrected():
    selection = select_imei("49O154-2O3-237-5l8")

    assert selection.value == "490154203237518"
    assert selection.warnings == []


def test_separators_are_stripped_and_duplicates_collapse():
    selection = select_imei("490 154 203 237 518", ["490154203237518", "490-154-203-237-518"])

    assert selection.value == "490154203237518"
    assert selection.warnings == []


def test_no_digits_at_all():
    selection = select_imei("N/A", ["", "--"])

    assert selection.value == ""
    assert len(selection.warnings) == 1
    assert "no IMEI" in selection.warnings[0]


def test_nothing_provided():
    selection = select_imei()

    assert selection.value == ""
    assert selection.warnings
