"""
    CLDR plural rules according to: http://www.unicode.org/cldr/charts/latest/supplemental/language_plural_rules.html

    Each language maps to a `PluralRules` instance holding the CLDR rule text (samples included) for each of
    its plural forms, in the order they're tested. The rules below are typed out from the CLDR data for the
    languages we support out of the box. Sites can add or override languages with settings:

        CLDR_PLURAL_RULES = {"xx": [("one", "n = 1 @integer 1"), ("other", "")]}
        CLDR_PLURALS_XML = "/path/to/cldr/common/supplemental/plurals.xml"

    Rules from CLDR_PLURAL_RULES take precedence over the ones from CLDR_PLURALS_XML, which take precedence
    over the bundled ones.
"""
import logging
import threading
import xml.etree.ElementTree as ET
from collections import OrderedDict

from django.conf import settings

from plurals.cldr.plural_rule_parser import evaluate
from plurals.cldr.samples import iter_samples

logger = logging.getLogger(__file__)

ZERO, ONE, TWO, FEW, MANY, OTHER = 'zero', 'one', 'two', 'few', 'many', 'other'
PLURAL_FORMS = (ZERO, ONE, TWO, FEW, MANY, OTHER)
LANGUAGE_LOOKUPS = {}


class PluralRules(object):
    """ The plural rules of a language: an ordered list of (plural form, CLDR rule) pairs. """

    def __init__(self, rules):
        self.rules = OrderedDict(rules)
        unknown = [form for form in self.rules if form not in PLURAL_FORMS]
        if unknown:
            raise ValueError("Unknown plural forms: %s" % ", ".join(unknown))

    def __call__(self, number):
        """ The plural form for the number. Falls back to OTHER when no rule matches. """
        for form, rule in self.rules.items():
            if evaluate(rule, number):
                return form
        return OTHER

    def __repr__(self):
        return "<PluralRules: %s>" % ", ".join(self.rules)

    @property
    def plurals_used(self):
        return set(self.rules) | {OTHER}

    def samples(self):
        """ Yields a (plural_form, sample) tuple for each sample number listed in the rules. """
        for form, rule in self.rules.items():
            for sample in iter_samples(rule):
                yield form, sample


def lookup(*langs):
    def _decorator(rules):
        for l in langs:
            LANGUAGE_LOOKUPS[l] = rules
        return rules
    return _decorator


def example_numbers(rules):
    """ Return a list of (plural_form, example_number) tuples for the given language rules. """
    seen_plurals = set()
    result = []
    for form, sample in rules.samples():
        if form not in seen_plurals:
            result.append((form, sample))
            seen_plurals.add(form)
    return result


_default = PluralRules([(OTHER, '')])


l_no_plurals = lookup('id', 'ja', 'km', 'ko', 'lo', 'ms', 'my', 'th', 'vi', 'yo', 'zh')(PluralRules([
    (OTHER, '@integer 0~15, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

l_one_or_many = lookup(
    'af', 'az', 'bg', 'el', 'es', 'eu', 'hu', 'ka', 'kk', 'ml', 'mn', 'nb', 'ne', 'nn', 'no', 'sq', 'ta', 'te', 'tr', 'uz'
)(PluralRules([
    (ONE, 'n = 1 @integer 1 @decimal 1.0, 1.00, 1.000, 1.0000'),
    (OTHER, '@integer 0, 2~16, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0~0.9, 1.1~1.6, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

l_one_or_many_or_fraction = lookup(
    'ca', 'de', 'en', 'et', 'fi', 'gl', 'it', 'nl', 'pt-pt', 'sv', 'sw', 'ur'
)(PluralRules([
    (ONE, 'i = 1 and v = 0 @integer 1'),
    (OTHER, '@integer 0, 2~16, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

fr_lookup = lookup('ff', 'fr', 'hy', 'kab')(PluralRules([
    (ONE, 'i = 0,1 @integer 0, 1 @decimal 0.0~1.5'),
    (OTHER, '@integer 2~17, 100, 1000, 10000, 100000, 1000000, … @decimal 2.0~3.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

pt_lookup = lookup('pt')(PluralRules([
    (ONE, 'i = 0..1 @integer 0, 1 @decimal 0.0~1.5'),
    (OTHER, '@integer 2~17, 100, 1000, 10000, 100000, 1000000, … @decimal 2.0~3.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

da_lookup = lookup('da')(PluralRules([
    (ONE, 'n = 1 or t != 0 and i = 0,1 @integer 1 @decimal 0.1~1.6'),
    (OTHER, '@integer 0, 2~16, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0, 2.0~3.4, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

hi_lookup = lookup('am', 'as', 'bn', 'fa', 'gu', 'hi', 'kn', 'zu')(PluralRules([
    (ONE, 'i = 0 or n = 1 @integer 0, 1 @decimal 0.0~1.0, 0.00~0.04'),
    (OTHER, '@integer 2~17, 100, 1000, 10000, 100000, 1000000, … @decimal 1.1~2.6, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

is_lookup = lookup('is')(PluralRules([
    (ONE, 't = 0 and i % 10 = 1 and i % 100 != 11 or t != 0 @integer 1, 21, 31, 41, 51, 61, 71, 81, 101, 1001, … @decimal 0.1~1.6, 10.1, 100.1, 1000.1, …'),
    (OTHER, '@integer 0, 2~16, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

si_lookup = lookup('si')(PluralRules([
    (ONE, 'n = 0,1 or i = 0 and f = 1 @integer 0, 1 @decimal 0.0, 0.1, 1.0, 0.00, 0.01, 1.00, 0.000, 0.001, 1.000, 0.0000, 0.0001, 1.0000'),
    (OTHER, '@integer 2~17, 100, 1000, 10000, 100000, 1000000, … @decimal 0.2~0.9, 1.1~1.8, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

tl_lookup = lookup('fil', 'tl')(PluralRules([
    (ONE, 'v = 0 and i = 1,2,3 or v = 0 and i % 10 != 4,6,9 or v != 0 and f % 10 != 4,6,9 @integer 0~3, 5, 7, 8, 10~13, 15, 17, 18, 20, 21, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0~0.3, 0.5, 0.7, 0.8, 1.0~1.3, 1.5, 1.7, 1.8, 2.0, 2.1, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
    (OTHER, '@integer 4, 6, 9, 14, 16, 19, 24, 26, 104, 1004, … @decimal 0.4, 0.6, 0.9, 1.4, 1.6, 1.9, 2.4, 2.6, 10.4, 100.4, 1000.4, …'),
]))

pl_lookup = lookup('pl')(PluralRules([
    (ONE, 'i = 1 and v = 0 @integer 1'),
    (FEW, 'v = 0 and i % 10 = 2..4 and i % 100 != 12..14 @integer 2~4, 22~24, 32~34, 42~44, 52~54, 62, 102, 1002, …'),
    (MANY, 'v = 0 and i != 1 and i % 10 = 0..1 or v = 0 and i % 10 = 5..9 or v = 0 and i % 100 = 12..14 @integer 0, 5~19, 100, 1000, 10000, 100000, 1000000, …'),
    (OTHER, '@decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

ru_lookup = lookup('ru', 'uk')(PluralRules([
    (ONE, 'v = 0 and i % 10 = 1 and i % 100 != 11 @integer 1, 21, 31, 41, 51, 61, 71, 81, 101, 1001, …'),
    (FEW, 'v = 0 and i % 10 = 2..4 and i % 100 != 12..14 @integer 2~4, 22~24, 32~34, 42~44, 52~54, 62, 102, 1002, …'),
    (MANY, 'v = 0 and i % 10 = 0 or v = 0 and i % 10 = 5..9 or v = 0 and i % 100 = 11..14 @integer 0, 5~19, 100, 1000, 10000, 100000, 1000000, …'),
    (OTHER, '@decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

cs_lookup = lookup('cs', 'sk')(PluralRules([
    (ONE, 'i = 1 and v = 0 @integer 1'),
    (FEW, 'i = 2..4 and v = 0 @integer 2~4'),
    (MANY, 'v != 0 @decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
    (OTHER, '@integer 0, 5~19, 100, 1000, 10000, 100000, 1000000, …'),
]))

hr_lookup = lookup('bs', 'hr', 'sh', 'sr')(PluralRules([
    (ONE, 'v = 0 and i % 10 = 1 and i % 100 != 11 or f % 10 = 1 and f % 100 != 11 @integer 1, 21, 31, 41, 51, 61, 71, 81, 101, 1001, … @decimal 0.1, 1.1, 2.1, 3.1, 4.1, 5.1, 6.1, 7.1, 10.1, 100.1, 1000.1, …'),
    (FEW, 'v = 0 and i % 10 = 2..4 and i % 100 != 12..14 or f % 10 = 2..4 and f % 100 != 12..14 @integer 2~4, 22~24, 32~34, 42~44, 52~54, 62, 102, 1002, … @decimal 0.2~0.4, 1.2~1.4, 2.2~2.4, 3.2~3.4, 4.2~4.4, 5.2, 10.2, 100.2, 1000.2, …'),
    (OTHER, '@integer 0, 5~19, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0, 0.5~1.0, 1.5~2.0, 2.5~2.7, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

sl_lookup = lookup('sl')(PluralRules([
    (ONE, 'v = 0 and i % 100 = 1 @integer 1, 101, 201, 301, 401, 501, 601, 701, 1001, …'),
    (TWO, 'v = 0 and i % 100 = 2 @integer 2, 102, 202, 302, 402, 502, 602, 702, 1002, …'),
    (FEW, 'v = 0 and i % 100 = 3..4 or v != 0 @integer 3, 4, 103, 104, 203, 204, 303, 304, 403, 404, 503, 504, 603, 604, 703, 704, 1003, … @decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
    (OTHER, '@integer 0, 5~19, 100, 1000, 10000, 100000, 1000000, …'),
]))

lt_lookup = lookup('lt')(PluralRules([
    (ONE, 'n % 10 = 1 and n % 100 != 11..19 @integer 1, 21, 31, 41, 51, 61, 71, 81, 101, 1001, … @decimal 1.0, 21.0, 31.0, 41.0, 51.0, 61.0, 71.0, 81.0, 101.0, 1001.0, …'),
    (FEW, 'n % 10 = 2..9 and n % 100 != 11..19 @integer 2~9, 22~29, 102, 1002, … @decimal 2.0, 22.0, 102.0, 1002.0, …'),
    (MANY, 'f != 0 @decimal 0.1~0.9, 1.1~1.7, 10.1, 100.1, 1000.1, …'),
    (OTHER, '@integer 0, 10~20, 30, 40, 50, 60, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0, 10.0, 11.0, 12.0, 13.0, 14.0, 15.0, 16.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

lv_lookup = lookup('lv', 'prg')(PluralRules([
    (ZERO, 'n % 10 = 0 or n % 100 = 11..19 or v = 2 and f % 100 = 11..19 @integer 0, 10~20, 30, 40, 50, 60, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0, 10.0, 11.0, 12.0, 13.0, 14.0, 15.0, 16.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
    (ONE, 'n % 10 = 1 and n % 100 != 11 or v = 2 and f % 10 = 1 and f % 100 != 11 or v != 2 and f % 10 = 1 @integer 1, 21, 31, 41, 51, 61, 71, 81, 101, 1001, … @decimal 0.1, 1.0, 1.1, 2.1, 3.1, 4.1, 5.1, 6.1, 7.1, 10.1, 100.1, 1000.1, …'),
    (OTHER, '@integer 2~9, 22~29, 102, 1002, … @decimal 0.2~0.9, 1.2~1.9, 10.2, 100.2, 1000.2, …'),
]))

mo_lookup = lookup('mo', 'ro')(PluralRules([
    (ONE, 'i = 1 and v = 0 @integer 1'),
    (FEW, 'v != 0 or n = 0 or n != 1 and n % 100 = 1..19 @integer 0, 2~16, 101, 1001, … @decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
    (OTHER, '@integer 20~35, 100, 1000, 10000, 100000, 1000000, …'),
]))

he_lookup = lookup('he', 'iw')(PluralRules([
    (ONE, 'i = 1 and v = 0 @integer 1'),
    (TWO, 'i = 2 and v = 0 @integer 2'),
    (MANY, 'v = 0 and n != 0..10 and n % 10 = 0 @integer 20, 30, 40, 50, 60, 70, 80, 90, 100, 1000, 10000, 100000, 1000000, …'),
    (OTHER, '@integer 0, 3~17, 101, 1001, … @decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

ar_lookup = lookup('ar', 'ars')(PluralRules([
    (ZERO, 'n = 0 @integer 0 @decimal 0.0, 0.00, 0.000, 0.0000'),
    (ONE, 'n = 1 @integer 1 @decimal 1.0, 1.00, 1.000, 1.0000'),
    (TWO, 'n = 2 @integer 2 @decimal 2.0, 2.00, 2.000, 2.0000'),
    (FEW, 'n % 100 = 3..10 @integer 3~10, 103~110, 1003, … @decimal 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0, 103.0, 1003.0, …'),
    (MANY, 'n % 100 = 11..99 @integer 11~26, 111, 1011, … @decimal 11.0, 12.0, 13.0, 14.0, 15.0, 16.0, 17.0, 18.0, 111.0, 1011.0, …'),
    (OTHER, '@integer 100~102, 200~202, 300~302, 400~402, 500~502, 600, 1000, 10000, 100000, 1000000, … @decimal 0.1~0.9, 1.1~1.7, 10.1, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

ga_lookup = lookup('ga')(PluralRules([
    (ONE, 'n = 1 @integer 1 @decimal 1.0, 1.00, 1.000, 1.0000'),
    (TWO, 'n = 2 @integer 2 @decimal 2.0, 2.00, 2.000, 2.0000'),
    (FEW, 'n = 3..6 @integer 3~6 @decimal 3.0, 4.0, 5.0, 6.0, 3.00, 4.00, 5.00, 6.00, 3.000, 4.000, 5.000, 6.000, 3.0000, 4.0000, 5.0000, 6.0000'),
    (MANY, 'n = 7..10 @integer 7~10 @decimal 7.0, 8.0, 9.0, 10.0, 7.00, 8.00, 9.00, 10.00, 7.000, 8.000, 9.000, 10.000, 7.0000, 8.0000, 9.0000, 10.0000'),
    (OTHER, '@integer 0, 11~25, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0~0.9, 1.1~1.6, 10.1, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))

cy_lookup = lookup('cy')(PluralRules([
    (ZERO, 'n = 0 @integer 0 @decimal 0.0, 0.00, 0.000, 0.0000'),
    (ONE, 'n = 1 @integer 1 @decimal 1.0, 1.00, 1.000, 1.0000'),
    (TWO, 'n = 2 @integer 2 @decimal 2.0, 2.00, 2.000, 2.0000'),
    (FEW, 'n = 3 @integer 3 @decimal 3.0, 3.00, 3.000, 3.0000'),
    (MANY, 'n = 6 @integer 6 @decimal 6.0, 6.00, 6.000, 6.0000'),
    (OTHER, '@integer 4, 5, 7~20, 100, 1000, 10000, 100000, 1000000, … @decimal 0.1~0.9, 1.1~1.7, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …'),
]))


def normalize_language_code(language_code):
    return language_code.replace('_', '-').lower()


def load_plurals_xml(source):
    """
        Load the cardinal plural rules from a CLDR plurals.xml file (a path or a file object).
        Returns a dict of {language_code: PluralRules}.
    """
    root = ET.parse(source).getroot()

    result = {}
    for plurals in root.iter('plurals'):
        if plurals.attrib.get('type', 'cardinal') != 'cardinal':
            continue

        for ruleset in plurals.iter('pluralRules'):
            forms = []
            for rule in ruleset.iter('pluralRule'):
                if 'count' not in rule.attrib:
                    raise ValueError("Malformed plurals.xml: pluralRule without a count in %s" % source)
                forms.append((rule.attrib['count'], rule.text or ''))

            if 'locales' not in ruleset.attrib:
                raise ValueError("Malformed plurals.xml: pluralRules without locales in %s" % source)

            rules = PluralRules(forms)
            for locale in ruleset.attrib['locales'].split():
                result[normalize_language_code(locale)] = rules

    logger.debug("Loaded plural rules for %s languages from %s", len(result), source)
    return result


class ConfiguredRules(object):
    """ Plural rules from the settings, loaded on first use. """

    def __init__(self):
        self._write_lock = threading.Lock()
        self._rules = None

    def _load(self):
        rules = {}

        xml_path = getattr(settings, 'CLDR_PLURALS_XML', None)
        if xml_path:
            rules.update(load_plurals_xml(xml_path))

        for language_code, forms in getattr(settings, 'CLDR_PLURAL_RULES', {}).items():
            rules[normalize_language_code(language_code)] = PluralRules(forms)
        return rules

    def get(self):
        with self._write_lock:
            if self._rules is None:
                self._rules = self._load()
            return self._rules

    def invalidate(self):
        with self._write_lock:
            self._rules = None


CONFIGURED_RULES = ConfiguredRules()


def reset_rules_cache(sender=None, setting=None, **kwargs):
    """ Connected to the setting_changed signal, so overridden settings are picked up. """
    if setting in (None, 'CLDR_PLURAL_RULES', 'CLDR_PLURALS_XML'):
        CONFIGURED_RULES.invalidate()


def get_rules_for_language(language_code):
    """ The PluralRules for the language, falling back to the root language ("pt-br" -> "pt"). """
    language_code = normalize_language_code(language_code)
    configured = CONFIGURED_RULES.get()

    for code in (language_code, language_code.split('-')[0]):
        for table in (configured, LANGUAGE_LOOKUPS):
            if code in table:
                return table[code]
    return _default


def get_plural_category(language_code, value):
    return get_rules_for_language(language_code)(value)
