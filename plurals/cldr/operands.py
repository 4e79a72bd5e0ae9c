"""
    Plural operands of a number, as defined by the CLDR plural rules:

        n: absolute value of the source number (integer and decimals)
        i: integer digits of n
        v: number of visible fraction digits in n, with trailing zeros
        w: number of visible fraction digits in n, without trailing zeros
        f: visible fractional digits in n, with trailing zeros
        t: visible fractional digits in n, without trailing zeros

    Which fraction digits are "visible" depends on how the number was written, so "1.0" and "1"
    differ (v = 1 and v = 0). Pass a string or a Decimal to keep that information. Integer-valued
    floats are treated as integers (2.0 has no visible fraction digits) and other floats use their
    shortest repr (0.1 is "0.1", not the binary expansion). Other real numbers (Fractions, numpy
    scalars...) are treated as integers when integral and like their float value otherwise.
"""
import math
import numbers
from collections import namedtuple
from decimal import Decimal, InvalidOperation


PluralOperands = namedtuple('PluralOperands', 'n i f t v w')


def _decimal_text(number):
    """ Render the absolute value of `number` as plain decimal text, without exponent. """
    if isinstance(number, bool):
        raise TypeError("Expected a number, got a bool: %r" % number)

    if isinstance(number, numbers.Integral):
        return str(abs(int(number)))

    if isinstance(number, numbers.Rational) and number.denominator == 1:
        return str(abs(int(number)))

    if isinstance(number, numbers.Real) and not isinstance(number, float):
        # Fractions and other real types are written like their float value
        number = float(number)

    if isinstance(number, float):
        if not math.isfinite(number):
            raise ValueError("Plural operands are undefined for %r" % number)
        if number.is_integer():
            return str(abs(int(number)))
        number = Decimal(repr(number))

    elif isinstance(number, str):
        try:
            number = Decimal(number.strip())
        except InvalidOperation:
            raise ValueError("Not a decimal number: %r" % number)

    elif not isinstance(number, Decimal):
        raise TypeError("Unsupported number type: %s" % type(number).__name__)

    if not number.is_finite():
        raise ValueError("Plural operands are undefined for %r" % number)
    return format(abs(number), 'f')


def plural_operands(number):
    text = _decimal_text(number)
    integer_digits, _, fraction_digits = text.partition('.')
    significant_digits = fraction_digits.rstrip('0')

    return PluralOperands(
        n=Decimal(text),
        i=int(integer_digits),
        f=int(fraction_digits or 0),
        t=int(significant_digits or 0),
        v=len(fraction_digits),
        w=len(significant_digits),
    )
