"""Tests for the custom job address block in job descriptions."""

from landscaper.domain.policies.job_address import (
    JobAddress,
    format_job_address_block,
    parse_job_address,
    strip_job_address,
)

DESCRIPTION = """Spring cleanup, front and back beds.

---JOB_ADDRESS---
742 Evergreen Terrace
Springfield, IL 62704
---END_ADDRESS---
"""


def test_parse_block_from_description():
    addr = parse_job_address(DESCRIPTION)
    assert addr == JobAddress(
        street="742 Evergreen Terrace",
        city="Springfield",
        state="IL",
        zip_code="62704",
    )
    assert addr.one_line() == "742 Evergreen Terrace, Springfield, IL 62704"


def test_parse_multiword_city():
    text = "---JOB_ADDRESS---\n1 Ocean Dr\nSan Luis Obispo, CA 93401\n---END_ADDRESS---"
    addr = parse_job_address(text)
    assert addr is not None
    assert addr.city == "San Luis Obispo"
    assert addr.state == "CA"
    assert addr.zip_code == "93401"


def test_no_description():
    assert parse_job_address(None) is None
    assert parse_job_address("") is None


def test_no_markers():
    assert parse_job_address("Mow the lawn at 5 Elm St, Dover, DE 19901") is None


def test_missing_end_marker():
    text = "---JOB_ADDRESS---\n5 Elm St\nDover, DE 19901\n"
    assert parse_job_address(text) is None


def test_missing_begin_marker():
    text = "5 Elm St\nDover, DE 19901\n---END_ADDRESS---"
    assert parse_job_address(text) is None


def test_wrong_line_count():
    one_line = "---JOB_ADDRESS---\nDover, DE 19901\n---END_ADDRESS---"
    three_lines = "---JOB_ADDRESS---\n5 Elm St\nApt 2\nDover, DE 19901\n---END_ADDRESS---"
    assert parse_job_address(one_line) is None
    assert parse_job_address(three_lines) is None


def test_city_line_without_comma():
    text = "---JOB_ADDRESS---\n5 Elm St\nDover DE 19901\n---END_ADDRESS---"
    assert parse_job_address(text) is None


def test_city_line_without_zip():
    text = "---JOB_ADDRESS---\n5 Elm St\nDover, DE\n---END_ADDRESS---"
    assert parse_job_address(text) is None


def test_format_round_trips_through_parser():
    addr = JobAddress(street="5 Elm St", city="Dover", state="DE", zip_code="19901")
    block = format_job_address_block(addr)
    assert block.splitlines() == [
        "---JOB_ADDRESS---",
        "5 Elm St",
        "Dover, DE 19901",
        "---END_ADDRESS---",
    ]
    assert parse_job_address(block) == addr


def test_strip_removes_block():
    assert strip_job_address(DESCRIPTION) == "Spring cleanup, front and back beds."
    assert strip_job_address(None) == ""
    assert strip_job_address("Plain text") == "Plain text"
