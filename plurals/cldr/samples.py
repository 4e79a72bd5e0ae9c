"""
    The @integer and @decimal sample sections of CLDR plural rules:

        samples       = sampleRange (',' sampleRange)* (',' ('…'|'...'))?
        sampleRange   = decimalValue ('~' decimalValue)?
        decimalValue  = value ('.' value)?

    e.g. "i = 1 and v = 0 @integer 1" or "@integer 0, 2~16, 100, 1000, … @decimal 0.0~1.5, 10.0, …"

    Samples are kept as decimal text, so "1.0" and "1" stay different numbers for the plural operands.
"""
import re
from decimal import Decimal


INTEGER, DECIMAL = 'integer', 'decimal'
SAMPLE_TYPES = (INTEGER, DECIMAL)

RE_SAMPLE_VALUE = {
    INTEGER: re.compile(r'^\d+$'),
    DECIMAL: re.compile(r'^\d+(\.\d+)?$'),
}
ELLIPSES = ('…', '...')


def _bad_example(rule):
    return ValueError('Bad example data: %s' % rule)


def _expand_range(start, end):
    """ All the values from start to end, both included, in steps of start's last visible digit. """
    exponent = Decimal(start).as_tuple().exponent
    step = Decimal(1).scaleb(exponent)
    value, last = Decimal(start), Decimal(end)

    result = []
    while value <= last:
        result.append(format(value, "f"))
        value += step
    return result


def parse_samples(rule):
    """ Return a dict with the list of integer and decimal samples of a rule. """
    samples = {INTEGER: [], DECIMAL: []}

    for section in rule.split('@')[1:]:
        sample_type, _, values = section.strip().partition(' ')
        if sample_type not in SAMPLE_TYPES:
            raise _bad_example(rule)

        for sample in values.split(','):
            sample = sample.strip()
            if sample in ELLIPSES:
                continue

            bounds = sample.split('~')
            if len(bounds) > 2 or not all(RE_SAMPLE_VALUE[sample_type].match(b) for b in bounds):
                raise _bad_example(rule)

            if len(bounds) == 1:
                samples[sample_type].append(sample)
                continue

            start, end = bounds
            if Decimal(start) > Decimal(end):
                raise _bad_example(rule)
            samples[sample_type].extend(_expand_range(start, end))

    return samples


def iter_samples(rule):
    """ All the samples of a rule, integers first. """
    samples = parse_samples(rule)
    for sample_type in SAMPLE_TYPES:
        for sample in samples[sample_type]:
            yield sample
