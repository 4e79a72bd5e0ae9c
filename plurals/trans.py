import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings

from plurals.cldr.operands import plural_operands
from plurals.cldr.rules import OTHER, get_plural_category

logger = logging.getLogger(__file__)


def _explicit_value(key):
    """ The number of an explicit ICU case key ("=1", "=42"), or None for plural form keywords. """
    if not key.startswith("="):
        return None
    try:
        return Decimal(key[1:])
    except InvalidOperation:
        raise ValueError("Invalid explicit plural case: %r" % key)


def select_plural(forms, count, language_code=None):
    """
        Pick the message variant for `count` out of `forms`, a dict of messages keyed by plural form
        ("one", "few", "other"...) and optionally by explicit ICU cases ("=0", "=1").

        An explicit case matching the count wins. Otherwise the language's plural rules pick the form,
        falling back to the "other" form if the translation doesn't have that one.
    """
    from django.utils.translation import get_language

    number = plural_operands(count).n
    for key, message in forms.items():
        explicit = _explicit_value(key)
        if explicit is not None and explicit == number:
            return message

    # With translations deactivated use the site's language
    language_code = language_code or get_language() or settings.LANGUAGE_CODE
    form = get_plural_category(language_code, count)
    if form in forms:
        return forms[form]

    logger.debug(
        "No %r form for %s in %s, falling back to %r", form, count, language_code, OTHER
    )
    return forms[OTHER]
