"""Tests for exit code helpers."""

from selectdo.utils import exit_codes


def test_codes_are_distinct():
    codes = [
        exit_codes.SUCCESS,
        exit_codes.ERROR_GENERAL,
        exit_codes.ERROR_INVALID_ARGS,
        exit_codes.ERROR_NOT_FOUND,
        exit_codes.ERROR_CONFLICT,
    ]
    assert len(set(codes)) == len(codes)


def test_names():
    assert exit_codes.get_exit_code_name(0) == "SUCCESS"
    assert exit_codes.get_exit_code_name(5) == "ERROR_NOT_FOUND"
    assert exit_codes.get_exit_code_name(42) == "UNKNOWN(42)"

