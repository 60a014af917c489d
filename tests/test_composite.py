"""Tests for CompositePropertyMatcher and ObjectMatcher.

Covers:
- Partial specification and full wildcards
- Path-annotated mismatches at arbitrary nesting depth
- Type and shape mismatches
- Registration rules
- Evaluation cost of deep failing graphs
- Integration with hamcrest's assert_that
"""

from __future__ import annotations

from typing import Any

import pytest
from hamcrest import assert_that, greater_than, has_length, starts_with
from hamcrest.core.string_description import StringDescription

from graphmatch import (
    CompositePropertyMatcher,
    MatcherError,
    ObjectMatcher,
    PropertyMatcher,
    an_object,
)
from sample_matchers import (
    Account,
    CountingMatcher,
    Ledger,
    PostCode,
    Transfer,
    a_postcode_that,
    a_transfer_that,
    an_account_that,
)


def expectation_of(matcher: object) -> str:
    description = StringDescription()
    description.append_description_of(matcher)
    return str(description)


def mismatch_of(matcher: CompositePropertyMatcher[object], item: object) -> str:
    description = StringDescription()
    matcher.describe_mismatch(item, description)
    return str(description)


def transfer(to_owner: str = "fred", to_balance: int = 50) -> Transfer:
    return Transfer(
        from_account=Account("bob", 100),
        to_account=Account(to_owner, to_balance),
        amount=25,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Verdicts
# ═══════════════════════════════════════════════════════════════════════════════


class TestVerdict:
    def test_flat_match(self) -> None:
        m = an_account_that().has_owner("bob").has_balance(100)
        assert m.matches(Account("bob", 100)) is True

    def test_flat_mismatch(self) -> None:
        m = an_account_that().has_owner("bob").has_balance(-50)
        assert m.matches(Account("bob", 100)) is False

    def test_unspecified_tree_matches_any_instance(self) -> None:
        assert an_account_that().matches(Account("anyone", -1)) is True
        assert a_transfer_that().matches(transfer()) is True

    @pytest.mark.parametrize(
        "candidate",
        [Account("bob", 1), {"x": 1}, "text", 42, [1, 2], object()],
    )
    def test_untyped_unspecified_tree_matches_any_shape(self, candidate: object) -> None:
        assert an_object("anything").matches(candidate) is True

    def test_untyped_unspecified_tree_rejects_none(self) -> None:
        m = an_object("anything")
        assert m.matches(None) is False
        assert mismatch_of(m, None) == "was <None>"

    def test_hamcrest_inner_matchers(self) -> None:
        m = an_account_that().has_owner(starts_with("b")).has_balance(greater_than(0))
        assert m.matches(Account("bob", 1)) is True
        assert m.matches(Account("bob", 0)) is False

    def test_nested_match(self) -> None:
        m = a_transfer_that().has_to_account(an_account_that().has_owner("fred"))
        assert m.matches(transfer()) is True

    def test_plain_value_for_nested_property_uses_equality(self) -> None:
        m = a_transfer_that().has_to_account(Account("fred", 50))
        assert m.matches(transfer()) is True
        assert m.matches(transfer(to_balance=51)) is False


# ═══════════════════════════════════════════════════════════════════════════════
# Descriptions
# ═══════════════════════════════════════════════════════════════════════════════


class TestDescriptions:
    def test_expectation_lists_specified_properties(self) -> None:
        m = an_account_that().has_owner("bob").has_balance(-50)
        assert expectation_of(m) == "an Account (has owner ('bob') and has balance (<-50>))"

    def test_expectation_skips_unspecified_properties(self) -> None:
        m = an_account_that().has_balance(-50)
        assert expectation_of(m) == "an Account (has balance (<-50>))"

    def test_expectation_nests(self) -> None:
        m = a_transfer_that().has_to_account(an_account_that().has_owner("tracy")).has_amount(5)
        assert expectation_of(m) == (
            "a Transfer (has to_account (an Account (has owner ('tracy'))) and has amount (<5>))"
        )

    def test_expectation_without_specified_properties_is_the_label(self) -> None:
        assert expectation_of(an_object("a Box")) == "a Box"
        assert expectation_of(an_account_that()) == "an Account"

    def test_flat_mismatch_text(self) -> None:
        m = an_account_that().has_owner("bob").has_balance(-50)
        assert mismatch_of(m, Account("bob", 100)) == "balance was <100> (expected <-50>)"

    def test_nested_mismatch_follows_registration_order(self) -> None:
        # has_balance is called first, but owner is registered first
        m = a_transfer_that().has_to_account(
            an_account_that().has_balance(150).has_owner("tracy")
        )
        assert m.matches(transfer()) is False
        assert mismatch_of(m, transfer()) == (
            "to_account.owner was 'fred' (expected 'tracy') and "
            "to_account.balance was <50> (expected <150>)"
        )

    def test_three_level_path(self) -> None:
        m = an_object("a Ledger").has(
            "latest", a_transfer_that().has_from_account(an_account_that().has_balance(10))
        )
        ledger = Ledger("main", latest=transfer())
        assert m.matches(ledger) is False
        assert mismatch_of(m, ledger) == "latest.from_account.balance was <100> (expected <10>)"

    def test_every_failing_leaf_is_reported(self) -> None:
        m = (
            a_transfer_that()
            .has_from_account(an_account_that().has_owner("alice"))
            .has_to_account(an_account_that().has_balance(0))
            .has_amount(99)
        )
        text = mismatch_of(m, transfer())
        assert text.count(" and ") == 2
        assert text == (
            "from_account.owner was 'bob' (expected 'alice') and "
            "to_account.balance was <50> (expected <0>) and "
            "amount was <25> (expected <99>)"
        )

    def test_same_matcher_reports_identically_twice(self) -> None:
        m = a_transfer_that().has_to_account(an_account_that().has_owner("tracy"))
        candidate = transfer()
        first = (m.matches(candidate), mismatch_of(m, candidate))
        second = (m.matches(candidate), mismatch_of(m, candidate))
        assert first == second

    def test_explicit_property_reads(self) -> None:
        m = a_postcode_that().has_outer("SW1A").has_inner("1AA")
        assert m.matches(PostCode("SW1A", "1AA")) is True
        assert mismatch_of(m, PostCode("SW1A", "2BB")) == "inner was '2BB' (expected '1AA')"

    def test_non_composite_inner_with_nested_values(self) -> None:
        m = an_object("a Ledger").has("transfers", has_length(2))
        text = mismatch_of(m, Ledger("main", transfers=[transfer()]))
        assert text.startswith("transfers was <[Transfer(")
        assert text.endswith(" (expected an object with length of <2>)")


# ═══════════════════════════════════════════════════════════════════════════════
# Type and shape mismatches
# ═══════════════════════════════════════════════════════════════════════════════


class TestShapeMismatch:
    def test_wrong_type_is_false_not_an_exception(self) -> None:
        m = an_account_that().has_owner("bob")
        assert m.matches("not an account") is False

    def test_wrong_type_mismatch_is_top_level(self) -> None:
        m = an_account_that().has_owner("bob").has_balance(1)
        assert mismatch_of(m, "not an account") == "was a str ('not an account')"

    def test_none_candidate(self) -> None:
        m = an_account_that()
        assert m.matches(None) is False
        assert mismatch_of(m, None) == "was <None>"

    def test_nested_wrong_type_carries_path(self) -> None:
        m = a_transfer_that().has_to_account(an_account_that().has_owner("fred"))
        bad = Transfer(
            from_account=Account("bob", 1), to_account="nobody", amount=1  # type: ignore[arg-type]
        )
        assert m.matches(bad) is False
        assert mismatch_of(m, bad) == "to_account was a str ('nobody')"

    def test_missing_attribute_reported_as_missing(self) -> None:
        m = an_object("a thing").has("nickname", "bo")
        assert m.matches(Account("bob", 1)) is False
        assert mismatch_of(m, Account("bob", 1)) == "nickname was <missing> (expected 'bo')"

    def test_mapping_candidates_are_read_by_key(self) -> None:
        m = an_object("an Account").has("owner", "bob").has("balance", 100)
        assert m.matches({"owner": "bob", "balance": 100}) is True
        assert mismatch_of(m, {"owner": "bob", "balance": 5}) == "balance was <5> (expected <100>)"

    def test_has_like_compares_structurally(self) -> None:
        m = an_object("an Account").has_like("owner", {"name": "bob", "tags": ["vip"]})
        assert m.matches({"owner": {"name": "bob", "tags": ["vip"]}}) is True
        assert mismatch_of(m, {"owner": {"name": "bob", "tags": []}}) == (
            "owner was {'name': 'bob', 'tags': []} "
            "(expected {'name': 'bob', 'tags': ['vip']})"
        )

    def test_naming_a_property_again_replaces_its_matcher(self) -> None:
        m = an_object("an Account").has("owner", "bob").has("owner", "fred")
        assert len(m.property_matchers) == 1
        assert m.matches({"owner": "fred"}) is True


# ═══════════════════════════════════════════════════════════════════════════════
# Registration and wiring
# ═══════════════════════════════════════════════════════════════════════════════


class TestRegistration:
    def test_register_sets_path_provider(self) -> None:
        pm: PropertyMatcher[int] = PropertyMatcher("size")
        composite: CompositePropertyMatcher[object] = CompositePropertyMatcher("a Box")
        composite.register(pm)
        assert pm.path_provider is composite
        assert composite.property_matchers == (pm,)

    def test_root_path_is_empty(self) -> None:
        assert an_account_that().get_path() == ""

    def test_register_after_first_use_raises(self) -> None:
        composite: CompositePropertyMatcher[object] = CompositePropertyMatcher("a Box")
        composite.matches(object())
        with pytest.raises(MatcherError, match="after first use"):
            composite.register(PropertyMatcher("size"))

    def test_has_after_first_use_raises(self) -> None:
        m = an_object("a Box").has("size", 1)
        m.matches({"size": 1})
        with pytest.raises(MatcherError):
            m.has("colour", "red")

    def test_reconfiguring_a_registered_property_is_allowed(self) -> None:
        m = an_object("a Box").has("size", 1)
        m.matches({"size": 1})
        m.has("size", 2)
        assert m.matches({"size": 2}) is True

    def test_duplicate_property_name_raises(self) -> None:
        composite: CompositePropertyMatcher[object] = CompositePropertyMatcher("a Box")
        composite.register(PropertyMatcher("size"))
        with pytest.raises(MatcherError, match="already registered"):
            composite.register(PropertyMatcher("size"))

    def test_property_matcher_has_one_owner(self) -> None:
        pm: PropertyMatcher[int] = PropertyMatcher("size")
        CompositePropertyMatcher("a Box").register(pm)
        with pytest.raises(MatcherError, match="owned by another"):
            CompositePropertyMatcher("a Crate").register(pm)

    def test_describe_to_does_not_freeze(self) -> None:
        m = an_object("a Box").has("size", 1)
        expectation_of(m)
        m.has("colour", "red")
        assert len(m.property_matchers) == 2


# ═══════════════════════════════════════════════════════════════════════════════
# Evaluation cost
# ═══════════════════════════════════════════════════════════════════════════════


def chain(depth: int, leaf: CountingMatcher) -> tuple[ObjectMatcher[Any], dict[str, Any]]:
    """A matcher ``depth`` objects deep over a candidate whose leaf is 2."""
    matcher = an_object().has("leaf", leaf)
    candidate: dict[str, Any] = {"leaf": 2}
    for _ in range(depth - 1):
        matcher = an_object().has("child", matcher)
        candidate = {"child": candidate}
    return matcher, candidate


class TestEvaluationCost:
    def test_failing_match_evaluates_each_leaf_once(self) -> None:
        leaf = CountingMatcher(1)
        m, candidate = chain(32, leaf)
        assert m.matches(candidate) is False
        assert leaf.calls == 1

    def test_describing_a_deep_mismatch_is_linear_in_depth(self) -> None:
        leaf = CountingMatcher(1)
        m, candidate = chain(32, leaf)
        text = mismatch_of(m, candidate)
        assert text == "child." * 31 + "leaf was <2> (expected <1>)"
        assert leaf.calls == 32

    def test_no_short_circuit_in_verdict_pass(self) -> None:
        first, second = CountingMatcher(1), CountingMatcher(1)
        m = an_object().has("a", first).has("b", second)
        assert m.matches({"a": 2, "b": 2}) is False
        assert (first.calls, second.calls) == (1, 1)


# ═══════════════════════════════════════════════════════════════════════════════
# hamcrest integration
# ═══════════════════════════════════════════════════════════════════════════════


class TestAssertThat:
    def test_passing_assertion(self) -> None:
        assert_that(Account("bob", 100), an_account_that().has_owner("bob"))

    def test_failing_assertion_message(self) -> None:
        m = an_account_that().has_owner("bob").has_balance(-50)
        with pytest.raises(AssertionError) as exc_info:
            assert_that(Account("bob", 100), m)
        message = str(exc_info.value)
        assert "Expected: an Account (has owner ('bob') and has balance (<-50>))" in message
        assert "but: balance was <100> (expected <-50>)" in message

    def test_failing_nested_assertion_message(self) -> None:
        m = a_transfer_that().has_to_account(
            an_account_that().has_owner("tracy").has_balance(150)
        )
        with pytest.raises(AssertionError) as exc_info:
            assert_that(transfer(), m)
        assert (
            "but: to_account.owner was 'fred' (expected 'tracy') and "
            "to_account.balance was <50> (expected <150>)"
        ) in str(exc_info.value)
