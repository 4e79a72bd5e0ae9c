"""
    Evaluates CLDR plural rules (http://unicode.org/reports/tr35/tr35-numbers.html#Language_Plural_Rules)
    for a number.

        condition       = and_condition ('or' and_condition)*
                          ('@integer' samples)?
                          ('@decimal' samples)?
        and_condition   = relation ('and' relation)*
        relation        = is_relation | in_relation | within_relation
        is_relation     = expr 'is' ('not')? value
        in_relation     = expr (('not')? 'in' | '=' | '!=') range_list
        within_relation = expr ('not')? 'within' range_list
        expr            = operand (('mod' | '%') value)?
        operand         = 'n' | 'i' | 'f' | 't' | 'v' | 'w'
        range_list      = (range | value) (',' range_list)*
        range           = value'..'value
        value           = digit+

    There is no separate AST: the grammar is a set of backtracking parser combinators which compute
    the value of what they match while parsing. A parser is a callable taking a `ParseState` and
    returning either its result or None. On None the state's position must be left where it was.

    The samples are never evaluated, see `plurals.cldr.samples` for those.
"""
import logging
import re
from decimal import localcontext

from plurals.cldr.operands import plural_operands

logger = logging.getLogger(__file__)


class ParseError(ValueError):
    def __init__(self, position, rule):
        self.position = position
        self.rule = rule
        super(ParseError, self).__init__(
            "Parse error at position %s for rule: %s" % (position, rule)
        )


class ParseState(object):
    """ The cursor into the rule text, together with the operands of the number being tested. """

    def __init__(self, rule, operands):
        self.rule = rule
        self.operands = operands
        self.pos = 0
        # Furthest position any terminal got to, reported on parse errors
        self.furthest = 0

    def advance(self, length):
        self.pos += length
        self.furthest = max(self.furthest, self.pos)


# Combinators

def literal(text):
    def parse(state):
        if state.rule.startswith(text, state.pos):
            state.advance(len(text))
            return text
        return None
    return parse


def pattern(regex):
    compiled = re.compile(regex)

    def parse(state):
        match = compiled.match(state.rule, state.pos)
        if match is None:
            return None
        state.advance(match.end() - state.pos)
        return match.group(0)
    return parse


def choice(*parsers):
    """ Try the parsers in order, returning the first result. """
    def parse(state):
        for parser in parsers:
            result = parser(state)
            if result is not None:
                return result
        return None
    return parse


def sequence(*parsers):
    """ All the parsers must match, one after the other. Returns the list of their results. """
    def parse(state):
        start = state.pos
        results = []
        for parser in parsers:
            result = parser(state)
            if result is None:
                state.pos = start
                return None
            results.append(result)
        return results
    return parse


def repeat(minimum, parser):
    """ Run the parser until it fails. It must match at least `minimum` times. """
    def parse(state):
        start = state.pos
        results = []
        while True:
            before = state.pos
            result = parser(state)
            if result is None:
                break
            results.append(result)
            if state.pos == before:
                # Matched nothing, it would match nothing forever
                break

        if len(results) < minimum:
            state.pos = start
            return None
        return results
    return parse


def optional(parser):
    """ The parser's result, or an empty string if it didn't match. """
    def parse(state):
        result = parser(state)
        return "" if result is None else result
    return parse


def transform(parser, function):
    """ Compute a value from what the parser matched. `function` can reject the match by returning None. """
    def parse(state):
        start = state.pos
        result = parser(state)
        if result is None:
            return None

        value = function(result, state)
        if value is None:
            state.pos = start
        return value
    return parse


# Arithmetic on operand values

def _modulo(value, divisor):
    """ Remainder with the sign of the dividend, exact for decimal operands. """
    if isinstance(value, int):
        # i, f, t, v and w are never negative
        return value % divisor

    with localcontext() as context:
        # The integer part of the quotient has to fit in the context precision
        context.prec = max(context.prec, len(value.as_tuple().digits) + 1)
        return value % divisor


def _is_integral(value):
    return isinstance(value, int) or value == value.to_integral_value()


def _in_range_list(value, range_list):
    """ Membership in the integers enumerated by the range list. """
    if not _is_integral(value):
        return False
    return any(low <= value <= high for low, high in range_list)


def _within_range_list(value, range_list):
    """ Membership in [first low bound, last high bound), non integers included. """
    low = range_list[0][0]
    high = range_list[-1][1]
    return low <= value < high


class PluralRuleGrammar(object):
    """
        The CLDR plural rule grammar, built once from the combinators above.

        Calling `condition(state)` parses and evaluates a whole rule for the operands held by the state.
    """

    def __init__(self):
        whitespace = pattern(r'\s+')
        padding = pattern(r'\s*')

        def keyword(word):
            return sequence(whitespace, literal(word), whitespace)

        def symbol(text):
            return sequence(padding, literal(text), padding)

        value = transform(pattern(r'\d+'), lambda digits, state: int(digits))

        # operand = 'n' | 'i' | 'f' | 't' | 'v' | 'w'
        self.operand = choice(*[self._operand(letter) for letter in 'nifvtw'])

        # expr = operand (('mod' | '%') value)?
        self.mod = transform(
            sequence(self.operand, choice(keyword('mod'), symbol('%')), value),
            self._mod,
        )
        self.expression = choice(self.mod, self.operand)

        # range_list = (range | value) (',' range_list)*
        range_ = transform(
            sequence(value, symbol('..'), value),
            lambda result, state: (result[0], result[2]),
        )
        single_value = transform(value, lambda result, state: (result, result))
        range_item = choice(range_, single_value)
        self.range_list = transform(
            sequence(range_item, repeat(0, sequence(symbol(','), range_item))),
            lambda result, state: [result[0]] + [item for _, item in result[1]],
        )

        negation = optional(sequence(whitespace, literal('not')))

        # is_relation = expr 'is' ('not')? value
        self.is_relation = transform(
            sequence(
                self.expression, keyword('is'), optional(sequence(literal('not'), whitespace)), value
            ),
            self._is,
        )

        # in_relation = expr (('not')? 'in' | '=' | '!=') range_list
        self.in_relation = choice(
            transform(
                sequence(self.expression, negation, keyword('in'), self.range_list),
                lambda result, state: _in_range_list(result[0], result[3]) != bool(result[1]),
            ),
            transform(
                sequence(self.expression, symbol('!='), self.range_list),
                lambda result, state: not _in_range_list(result[0], result[2]),
            ),
            transform(
                sequence(self.expression, symbol('='), self.range_list),
                lambda result, state: _in_range_list(result[0], result[2]),
            ),
        )

        # within_relation = expr ('not')? 'within' range_list
        self.within_relation = transform(
            sequence(self.expression, negation, keyword('within'), self.range_list),
            lambda result, state: _within_range_list(result[0], result[3]) != bool(result[1]),
        )

        self.relation = choice(self.is_relation, self.in_relation, self.within_relation)

        # and_condition = relation ('and' relation)*
        self.and_condition = transform(
            sequence(self.relation, repeat(0, sequence(keyword('and'), self.relation))),
            lambda result, state: all([result[0]] + [relation for _, relation in result[1]]),
        )

        # condition = and_condition ('or' and_condition)*
        self.condition = transform(
            sequence(self.and_condition, repeat(0, sequence(keyword('or'), self.and_condition))),
            lambda result, state: any([result[0]] + [condition for _, condition in result[1]]),
        )

    @staticmethod
    def _operand(letter):
        return transform(literal(letter), lambda result, state: getattr(state.operands, letter))

    @staticmethod
    def _mod(result, state):
        operand, _, divisor = result
        if divisor == 0:
            logger.debug("Modulo by zero at position %s of %r", state.pos, state.rule)
            return None
        return _modulo(operand, divisor)

    @staticmethod
    def _is(result, state):
        operand, _, negated, expected = result
        logger.debug("%s is %s%s", operand, "not " if negated else "", expected)
        return (operand == expected) != bool(negated)


GRAMMAR = PluralRuleGrammar()


def strip_samples(rule):
    """ The condition part of a rule, without its @integer / @decimal samples. """
    return rule.split('@', 1)[0].strip()


def parse_rule(rule, number):
    """ Parse and evaluate `rule` for `number`, returning (result, state). """
    state = ParseState(strip_samples(rule), plural_operands(number))
    if not state.rule:
        # Empty rule, or the 'other' rule
        return True, state

    result = GRAMMAR.condition(state)
    if result is None:
        raise ParseError(state.furthest, state.rule)
    return result, state


def evaluate(rule, number):
    """
        Return whether `number` satisfies the CLDR plural `rule`.

        `number` can be an int, a float, a Decimal or a string of decimal text. Use the last two when
        visible fraction digits matter ("1.0" isn't the same as "1" for the v, w, f and t operands).

        Raises ParseError if the rule can't be parsed at all. Trailing text that couldn't be parsed is
        only logged.
    """
    result, state = parse_rule(rule, number)
    if state.pos != len(state.rule):
        logger.warning(
            "Rule not parsed completely, stopped at position %s before %r for rule: %s",
            state.pos, state.rule[state.pos:], state.rule
        )
    return result


def is_valid_rule(rule):
    """ Whether the rule parses completely. """
    try:
        result, state = parse_rule(rule, 0)
    except ParseError:
        return False
    return state.pos == len(state.rule)
