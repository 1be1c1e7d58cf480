from datetime import date

import pytest

from intake.parsing.dates import find_date, find_date_candidates, parse_date


class TestFindDate:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Date: 2024-01-15", ("2024-01-15", "yyyy-MM-dd")),
            ("Date: 15/01/2024", ("2024-01-15", "dd/MM/yyyy")),
            ("Date: 01/15/2024", ("2024-01-15", "MM/dd/yyyy")),
            ("Datum: 15.01.2024", ("2024-01-15", "dd.MM.yyyy")),
            ("Issued 15 January 2024", ("2024-01-15", "d MMMM yyyy")),
            ("Issued 5 Jan 2024", ("2024-01-05", "d MMM yyyy")),
            ("Issued January 15, 2024", ("2024-01-15", "MMMM d, yyyy")),
            ("Issued Jan 5, 2024", ("2024-01-05", "MMM d, yyyy")),
        ],
    )
    def test_supported_formats(self, text: str, expected: tuple[str, str]) -> None:
        assert find_date(text) == expected

    def test_ambiguous_slash_date_reads_day_first(self) -> None:
        assert find_date("03/04/2024") == ("2024-04-03", "dd/MM/yyyy")

    def test_iso_shape_is_preferred_over_slash_shape(self) -> None:
        assert find_date("Due 15/01/2024, issued 2024-02-01") == ("2024-02-01", "yyyy-MM-dd")

    def test_invalid_candidate_is_skipped(self) -> None:
        assert find_date("Ref 2024-13-45, paid 20/03/2024") == ("2024-03-20", "dd/MM/yyyy")

    def test_impossible_calendar_date(self) -> None:
        assert find_date("Date: 31/02/2024") is None

    def test_no_date(self) -> None:
        assert find_date("Thank you for your business") is None


class TestParseDate:
    def test_collapses_inner_whitespace(self) -> None:
        assert parse_date("15   January  2024") == (date(2024, 1, 15), "d MMMM yyyy")

    def test_unknown_month_name(self) -> None:
        assert parse_date("15 Smarch 2024") is None


class TestFindDateCandidates:
    def test_collects_in_shape_order(self) -> None:
        text = "15.01.2024, 2024-01-16; 17/01/2024"
        assert find_date_candidates(text) == ["2024-01-16", "17/01/2024", "15.01.2024"]
