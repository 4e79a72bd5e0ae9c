#SYSTEM
import threading
import unittest
from decimal import Decimal
from fractions import Fraction

#PLURALS
from plurals.cldr import plural_rule_parser
from plurals.cldr.plural_rule_parser import (
    ParseError,
    ParseState,
    choice,
    evaluate,
    is_valid_rule,
    literal,
    pattern,
    repeat,
    sequence,
    transform,
)


class CombinatorTests(unittest.TestCase):

    def test_literal_advances_only_on_match(self):
        state = ParseState("and or", None)
        self.assertIsNone(literal("or")(state))
        self.assertEqual(state.pos, 0)

        self.assertEqual(literal("and")(state), "and")
        self.assertEqual(state.pos, 3)

    def test_pattern_is_anchored_at_the_cursor(self):
        state = ParseState("n 42", None)
        self.assertIsNone(pattern(r'\d+')(state))

        state.pos = 2
        self.assertEqual(pattern(r'\d+')(state), "42")
        self.assertEqual(state.pos, 4)

    def test_sequence_restores_position_on_failure(self):
        state = ParseState("n is x", None)
        parser = sequence(literal("n"), literal(" is "), pattern(r'\d+'))

        self.assertIsNone(parser(state))
        self.assertEqual(state.pos, 0)
        # The furthest position is kept for error messages
        self.assertEqual(state.furthest, 5)

    def test_choice_returns_first_match(self):
        state = ParseState("within", None)
        parser = choice(literal("is"), literal("with"), literal("within"))
        self.assertEqual(parser(state), "with")

    def test_repeat_requires_minimum(self):
        parser = repeat(2, literal("a"))

        state = ParseState("ab", None)
        self.assertIsNone(parser(state))
        self.assertEqual(state.pos, 0)

        state = ParseState("aab", None)
        self.assertEqual(parser(state), ["a", "a"])
        self.assertEqual(state.pos, 2)

    def test_repeat_stops_on_empty_matches(self):
        state = ParseState("abc", None)
        self.assertEqual(repeat(0, pattern(r'\s*'))(state), [""])

    def test_transform_can_reject_a_match(self):
        state = ParseState("0", None)
        parser = transform(pattern(r'\d+'), lambda digits, state: int(digits) or None)
        self.assertIsNone(parser(state))
        self.assertEqual(state.pos, 0)

    def test_false_is_a_result(self):
        state = ParseState("x", None)
        parser = choice(transform(literal("x"), lambda result, state: False), literal("x"))
        self.assertIs(parser(state), False)


class EvaluateTests(unittest.TestCase):

    def test_empty_rule_always_matches(self):
        for number in (0, 1, 2.5, "1.20", Decimal("7")):
            self.assertTrue(evaluate("", number))
            self.assertTrue(evaluate("   ", number))
            self.assertTrue(evaluate(" @integer 0~15, 100, … @decimal 0.0~1.5, 10.0, …", number))

    def test_samples_are_ignored(self):
        self.assertTrue(evaluate("i = 1 and v = 0 @integer 1", 1))
        self.assertFalse(evaluate("i = 1 and v = 0 @integer 2, 3", 2))

    def test_integer_operand(self):
        self.assertTrue(evaluate("i = 1", 1))
        self.assertFalse(evaluate("i = 1", 2))
        self.assertTrue(evaluate("i = 1", 1.5))
        self.assertTrue(evaluate("i = 0 and v = 0", 0))

    def test_modulo(self):
        rule = "n % 10 = 1 and n % 100 != 11"
        self.assertTrue(evaluate(rule, 21))
        self.assertTrue(evaluate(rule, 101))
        self.assertFalse(evaluate(rule, 11))
        self.assertFalse(evaluate(rule, 111))
        self.assertFalse(evaluate(rule, "21.5"))

    def test_mod_keyword(self):
        self.assertTrue(evaluate("n mod 10 = 3", 13))
        self.assertTrue(evaluate("i mod 100 is 13", 113))

    def test_modulo_keeps_fraction_digits(self):
        self.assertTrue(evaluate("n % 10 within 3..4", "13.5"))
        self.assertFalse(evaluate("n % 10 = 3", "13.5"))
        self.assertTrue(evaluate("f % 10 = 1", "0.21"))

    def test_modulo_of_large_numbers(self):
        self.assertTrue(evaluate("n % 10 = 1", 10 ** 30 + 1))
        self.assertTrue(evaluate("i % 1000000 = 0", 10 ** 30))

    def test_visible_fraction_digits(self):
        self.assertTrue(evaluate("v = 0", 2.0))
        self.assertTrue(evaluate("v = 0", 2))
        self.assertFalse(evaluate("v = 0", "2.0"))
        self.assertFalse(evaluate("v = 0", Decimal("2.0")))
        self.assertTrue(evaluate("v = 1", 0.1))
        self.assertTrue(evaluate("f = 1", 0.1))

    def test_fraction_operands(self):
        self.assertTrue(evaluate("f = 20", "1.20"))
        self.assertTrue(evaluate("t = 2", "1.20"))
        self.assertTrue(evaluate("v = 2", "1.20"))
        self.assertTrue(evaluate("w = 1", "1.20"))
        self.assertTrue(evaluate("t = 0 and w = 0", "1.000"))

    def test_range_membership(self):
        rule = "n in 1,3..5"
        self.assertTrue(evaluate(rule, 1))
        self.assertTrue(evaluate(rule, 3))
        self.assertTrue(evaluate(rule, 5))
        self.assertFalse(evaluate(rule, 2))
        self.assertFalse(evaluate(rule, 6))
        # Only integers are members of a range
        self.assertFalse(evaluate(rule, "3.5"))
        self.assertTrue(evaluate(rule, "3.0"))

    def test_equals_is_in(self):
        for number in (0, 1, 2, 3, 4, 5, "2.5"):
            self.assertEqual(evaluate("n = 2..4", number), evaluate("n in 2..4", number))

    def test_not_in_and_not_equals(self):
        for number in (1, 2, 3, 4, 5, "3.5"):
            expected = not evaluate("n in 2..4", number)
            self.assertEqual(evaluate("n not in 2..4", number), expected)
            self.assertEqual(evaluate("n != 2..4", number), expected)

        # The exact value is compared, not its integer part
        self.assertTrue(evaluate("n != 1", "1.5"))

    def test_is_and_is_not(self):
        self.assertTrue(evaluate("n is 1", 1))
        self.assertFalse(evaluate("n is 1", 2))
        self.assertFalse(evaluate("n is not 1", 1))
        self.assertTrue(evaluate("n is not 1", 2))

    def test_within_has_an_exclusive_upper_bound(self):
        self.assertTrue(evaluate("n within 1..5", 1))
        self.assertTrue(evaluate("n within 1..5", 4.999))
        self.assertFalse(evaluate("n within 1..5", 5))
        self.assertFalse(evaluate("n within 1..5", 0.5))
        self.assertTrue(evaluate("n not within 1..5", 5))
        self.assertFalse(evaluate("n not within 1..5", "2.5"))

    def test_within_only_uses_the_outer_bounds(self):
        self.assertTrue(evaluate("n within 1..2, 8..10", 5))
        self.assertFalse(evaluate("n in 1..2, 8..10", 5))
        self.assertTrue(evaluate("n within 0, 3..4, 7", 6))

    def test_and_binds_tighter_than_or(self):
        self.assertTrue(evaluate("n = 1 or n = 2 and n = 3", 1))
        self.assertTrue(evaluate("n = 1 and n = 2 or n = 3 and n = 3", 3))
        self.assertFalse(evaluate("n = 3 and n = 1 or n = 1", 3))
        # All the or-ed conditions count, not only the first one
        self.assertTrue(evaluate("n = 1 or n = 2 or n = 3", 3))

    def test_whitespace_around_symbols_is_optional(self):
        self.assertTrue(evaluate("n=1", 1))
        self.assertTrue(evaluate("i%10=1", 21))
        self.assertTrue(evaluate("n  =  1,  2", 2))
        self.assertTrue(evaluate("n = 1 .. 3", 2))
        self.assertTrue(evaluate("i = 1 and  v = 0", 1))

    def test_negative_numbers_use_their_absolute_value(self):
        self.assertTrue(evaluate("n = 1", -1))
        self.assertTrue(evaluate("i = 1 and v = 1", "-1.5"))

    def test_fractions(self):
        self.assertTrue(evaluate("n = 1", Fraction(1)))
        self.assertTrue(evaluate("i = 0 and f = 25", Fraction(1, 4)))

    def test_evaluation_is_idempotent(self):
        rule = "v = 0 and i % 10 = 2..4 and i % 100 != 12..14"
        results = set()
        for _ in range(10):
            results.add(evaluate(rule, 22))
            evaluate("n = 0", 0)
        self.assertEqual(results, {True})

    def test_concurrent_evaluation(self):
        rule = "n % 10 = 1 and n % 100 != 11"
        expected = [evaluate(rule, number) for number in range(200)]
        results = {}

        def run(index):
            results[index] = [evaluate(rule, number) for number in range(200)]

        threads = [threading.Thread(target=run, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for index in range(8):
            self.assertEqual(results[index], expected)


class ParseErrorTests(unittest.TestCase):

    def test_unknown_operand(self):
        self.assertRaises(ParseError, evaluate, "x = 1", 1)

    def test_unbalanced_range(self):
        with self.assertRaises(ParseError) as context:
            evaluate("n in ..5 @integer 1", 1)

        self.assertEqual(context.exception.rule, "n in ..5")
        self.assertEqual(context.exception.position, 5)
        self.assertEqual(str(context.exception), "Parse error at position 5 for rule: n in ..5")

    def test_missing_range_list(self):
        self.assertRaises(ParseError, evaluate, "n = ", 1)
        self.assertRaises(ParseError, evaluate, "and", 1)

    def test_modulo_by_zero(self):
        self.assertRaises(ParseError, evaluate, "n % 0 = 0", 1)

    def test_parse_error_is_a_value_error(self):
        self.assertTrue(issubclass(ParseError, ValueError))

    def test_incomplete_parse_is_a_warning(self):
        with self.assertLogs(plural_rule_parser.logger, level="WARNING") as logs:
            self.assertTrue(evaluate("n = 1 or", 1))
            self.assertFalse(evaluate("n = 1..", 2))

        self.assertEqual(len(logs.output), 2)
        self.assertIn("position 5", logs.output[0])
        self.assertIn("' or'", logs.output[0])

    def test_is_valid_rule(self):
        self.assertTrue(is_valid_rule("n = 1"))
        self.assertTrue(is_valid_rule(""))
        self.assertTrue(is_valid_rule("v = 0 and i % 10 = 1 @integer 1, 21"))
        self.assertFalse(is_valid_rule("n = 1 or"))
        self.assertFalse(is_valid_rule("x = 1"))
