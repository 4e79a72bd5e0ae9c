from django import template
from django.conf import settings
from django.utils.translation import get_language

from plurals.cldr.rules import get_plural_category
from plurals.trans import select_plural

register = template.Library()


def _count(value):
    # Values that aren't set in the template render as an empty string, so we assume 1 for those
    if value == '':
        return 1
    return value


@register.filter
def plural_category(value, language_code=None):
    """
        The CLDR plural form of a number for the active language (or the one given as argument):

            {{ count|plural_category }} {{ count|plural_category:"pl" }}
    """
    language_code = language_code or get_language() or settings.LANGUAGE_CODE
    return get_plural_category(language_code, _count(value))


@register.simple_tag
def plural(count, **forms):
    """
        Renders the message variant for the count, keyed by plural form:

            {% plural count one="One result" few="A few results" other="Some results" %}

        The variant is escaped, like any other simple tag output.
    """
    return select_plural(forms, _count(count))
