import pytest

from whenmock import ConfigurationError, MatcherAssertionError
from whenmock.evaluate import (
    AllArgsPredicate,
    Predicate,
    accepts_equals,
    all_args,
    evaluate,
    evaluate_all,
    matches,
    predicate,
    same_patterns,
)
from whenmock.matchers import anything, string_containing


def is_even(n):
    return n % 2 == 0


def test_literal_patterns_use_equality():
    assert evaluate(1, 1)
    assert not evaluate(1, 2)
    assert evaluate({"a": anything()}, {"a": 3})


def test_plain_functions_are_literals_and_never_called():
    calls = []

    def fn(value):
        calls.append(value)
        return True

    assert not evaluate(fn, "x")
    assert evaluate(fn, fn)
    assert calls == []


def test_predicate_patterns_are_called_with_the_argument():
    assert evaluate(predicate(is_even), 4)
    assert not evaluate(predicate(is_even), 3)


def test_predicate_gets_equals_when_it_takes_two_parameters():
    seen = {}

    def structurally(actual, equals):
        seen["equals"] = equals
        return equals(actual, {"a": 1})

    assert accepts_equals(structurally)
    assert not accepts_equals(is_even)
    assert evaluate(predicate(structurally), {"a": 1})
    assert callable(seen["equals"])


def test_predicate_on_builtin_without_signature_gets_one_argument():
    assert evaluate(predicate(callable), print)
    assert not evaluate(predicate(callable), 1)


def test_predicate_requires_a_callable():
    with pytest.raises(TypeError):
        predicate(1)
    with pytest.raises(TypeError):
        all_args("nope")


def test_asserting_literal_mismatch_raises_with_both_values():
    with pytest.raises(MatcherAssertionError, match="expected 1 but received 2"):
        evaluate(1, 2, assert_on_mismatch=True)


def test_asserting_predicate_mismatch_raises():
    with pytest.raises(MatcherAssertionError, match=r"expected when\(is_even\) to match but received 3"):
        evaluate(predicate(is_even), 3, assert_on_mismatch=True)


def test_asserting_match_returns_true():
    assert evaluate(1, 1, assert_on_mismatch=True) is True
    assert evaluate(predicate(is_even), 2, assert_on_mismatch=True) is True


def test_all_args_predicate_in_a_positional_slot_is_a_configuration_error():
    with pytest.raises(ConfigurationError, match="one and only matcher"):
        evaluate(all_args(lambda args: True), 1)


def test_evaluate_all_receives_the_whole_list():
    divisible_by_three = all_args(lambda args: all(a % 3 == 0 for a in args))
    assert evaluate_all(divisible_by_three, (3, 6, 9))
    assert not evaluate_all(divisible_by_three, (3, 6, 10))


def test_matches_requires_exact_arity():
    assert matches((1, 2), {}, (1, 2), {})
    assert not matches((1, 2), {}, (1,), {})
    assert not matches((1, 2), {}, (1, 2, 3), {})


def test_matches_requires_exact_keyword_names():
    assert matches((1,), {"key": "v"}, (1,), {"key": "v"})
    assert not matches((1,), {"key": "v"}, (1,), {})
    assert not matches((1,), {}, (1,), {"key": "v"})
    assert not matches((1,), {"key": "v"}, (1,), {"key": "w"})


def test_wrong_arity_never_asserts():
    assert not matches((1,), {}, (2, 3), {}, assert_on_mismatch=True)


def test_matches_stops_at_first_mismatch():
    calls = []

    def spy(value):
        calls.append(value)
        return True

    assert not matches((1, predicate(spy)), {}, (2, "later"), {})
    assert calls == []


def test_matches_asserts_on_first_mismatched_position():
    with pytest.raises(MatcherAssertionError, match="expected 'b' but received 'x'"):
        matches(("a", "b", "c"), {}, ("a", "x", "y"), {}, assert_on_mismatch=True)


def test_matches_all_args_skips_the_arity_check():
    any_length = all_args(lambda args: len(args) > 1)
    assert matches((any_length,), {}, (1, 2, 3), {})
    assert not matches((any_length,), {}, (1,), {})


def test_matches_all_args_with_other_patterns_is_a_configuration_error():
    everything = all_args(lambda args: True)
    with pytest.raises(ConfigurationError):
        matches((everything, 1), {}, (1, 1), {})
    with pytest.raises(ConfigurationError):
        matches((1, everything), {}, (1, 1), {})
    with pytest.raises(ConfigurationError):
        matches((everything,), {"key": 1}, (1,), {"key": 1})


def test_predicate_wrappers_are_distinct_and_compare_by_function():
    assert Predicate(is_even) == Predicate(is_even)
    assert Predicate(is_even) != AllArgsPredicate(is_even)
    assert repr(Predicate(is_even)) == "when(is_even)"
    assert repr(AllArgsPredicate(is_even)) == "when.all_args(is_even)"


def test_same_patterns_is_structural_and_type_strict():
    assert same_patterns((1, "a"), (1, "a"))
    assert same_patterns((string_containing("a"),), (string_containing("a"),))
    assert same_patterns(({"a": [1]},), ({"a": [1]},))
    assert not same_patterns((1,), (True,))
    assert not same_patterns((1,), (1, 2))
    assert not same_patterns((anything(),), (1,))
    assert not same_patterns((predicate(is_even),), (predicate(lambda n: True),))


def test_evaluate_all_asserts_with_the_argument_list():
    divisible_by_three = all_args(lambda args: all(a % 3 == 0 for a in args))

    assert evaluate_all(divisible_by_three, (3, 6), assert_on_mismatch=True)
    with pytest.raises(MatcherAssertionError, match=r"received \[3, 6, 10\]"):
        evaluate_all(divisible_by_three, (3, 6, 10), assert_on_mismatch=True)


def test_all_args_accepts_asymmetric_matchers():
    whole_list = all_args(anything())

    assert repr(whole_list) == "when.all_args(Anything())"
    assert matches((whole_list,), {}, (1, 2), {})
    assert matches((all_args(string_containing("a")),), {}, (), {}) is False
