"""Tests for the alternative-key credential lookup."""

import pytest

from redis_target_discovery.discovery.lookup import get_alternative
from redis_target_discovery.exceptions import CredentialLookupError


class TestGetAlternative:
    def test_falls_back_to_later_candidate(self):
        assert get_alternative({"hostname": "x"}, "host", "hostname") == "x"

    def test_first_present_candidate_wins(self):
        creds = {"host": "primary", "hostname": "secondary"}
        assert get_alternative(creds, "host", "hostname") == "primary"

    def test_empty_mapping_returns_empty_string(self):
        assert get_alternative({}, "host", "hostname") == ""
        assert get_alternative({}, "password") == ""

    def test_empty_string_value_is_returned_as_present(self):
        assert get_alternative({"host": "", "hostname": "h"}, "host", "hostname") == ""

    def test_non_string_value_raises(self):
        with pytest.raises(CredentialLookupError, match="port") as excinfo:
            get_alternative({"port": 6379}, "port")
        assert excinfo.value.key == "port"
        assert excinfo.value.value_type == "int"

    def test_non_string_only_checked_for_chosen_key(self):
        assert get_alternative({"host": "h", "hostname": 1}, "host", "hostname") == "h"
