"""Tests for delimited argument parsing."""

from redis_target_discovery.discovery.args import load_redis_args


class TestLoadRedisArgs:
    def test_empty_addr_uses_default(self):
        targets = load_redis_args("", "", "", ",")
        assert targets.addrs == ["redis://localhost:6379"]
        assert targets.secrets == [""]
        assert targets.aliases == [""]

    def test_single_secret_broadcast(self):
        targets = load_redis_args("a,b,c", "x", "", ",")
        assert targets.addrs == ["a", "b", "c"]
        assert targets.secrets == ["x", "x", "x"]
        assert targets.aliases == ["", "", ""]

    def test_partial_list_repeats_first_value(self):
        targets = load_redis_args("a,b,c", "p1,p2", "n1,n2", ",")
        assert targets.secrets == ["p1", "p2", "p1"]
        assert targets.aliases == ["n1", "n2", "n1"]

    def test_lengths_match_after_broadcast(self):
        for addr in ("a", "a,b", "a,b,c,d,e"):
            targets = load_redis_args(addr, "pw", "alias", ",")
            assert len(targets.addrs) == len(targets.secrets) == len(targets.aliases)

    def test_surplus_secrets_are_kept(self):
        targets = load_redis_args("a", "p1,p2,p3", "n1,n2", ",")
        assert targets.addrs == ["a"]
        assert targets.secrets == ["p1", "p2", "p3"]
        assert targets.aliases == ["n1", "n2"]
        assert len(targets.targets()) == 1

    def test_custom_separator(self):
        targets = load_redis_args("redis://a:6379;redis://b:6379", "s1;s2", "one;two", ";")
        assert targets.addrs == ["redis://a:6379", "redis://b:6379"]
        assert targets.secrets == ["s1", "s2"]
        assert targets.aliases == ["one", "two"]

    def test_separator_absent_from_value_gives_single_element(self):
        targets = load_redis_args("redis://a:6379,redis://b:6379", "pw", "", ";")
        assert targets.addrs == ["redis://a:6379,redis://b:6379"]

    def test_empty_separator_splits_characters(self):
        targets = load_redis_args("ab", "", "", "")
        assert targets.addrs == ["a", "b"]
        assert targets.secrets == ["", ""]

    def test_repeated_calls_are_identical(self):
        first = load_redis_args("a,b", "x", "n", ",")
        second = load_redis_args("a,b", "x", "n", ",")
        assert first == second
