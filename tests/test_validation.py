"""Tests for count checks on assistant replies."""

from src.chat.validation import check_response_counts, validate_count
from src.data.statistics import calculate_statistics


class TestValidateCount:
    def test_match(self):
        assert validate_count(3, ["a", "b", "c"]) is None

    def test_mismatch(self):
        assert validate_count(4, ["a", "b"]) == "Count mismatch: claimed 4 institutions but provided 2"


class TestCheckResponseCounts:
    def test_no_claims(self, dataset):
        stats = calculate_statistics(dataset, include_metadata=True)
        assert check_response_counts("MIT has the largest budget.", stats) is None

    def test_list_mismatch(self, dataset):
        stats = calculate_statistics(dataset)
        text = "There are 3 institutions in California:\n1. UC Davis\n2. CSUN\n3. SF State\n4. SMC"
        warning = check_response_counts(text, stats)
        assert warning == "Response claimed 3 institutions but listed 4. The actual count is 4."

    def test_list_match(self, dataset):
        stats = calculate_statistics(dataset)
        text = "There are 2 institutions:\n1. Duke\n2. MIT"
        assert check_response_counts(text, stats) is None

    def test_wrong_r1_count(self, dataset):
        stats = calculate_statistics(dataset, include_metadata=True)
        warning = check_response_counts("The dataset has 8 R1 institutions.", stats)
        assert warning == "Response claimed 8 R1 institutions. The correct count is 9 R1 institutions."

    def test_correct_r1_count(self, dataset):
        stats = calculate_statistics(dataset, include_metadata=True)
        assert check_response_counts("The dataset has 9 R1 institutions.", stats) is None

    def test_r1_check_needs_metadata(self, dataset):
        stats = calculate_statistics(dataset)
        assert check_response_counts("The dataset has 8 R1 institutions.", stats) is None
