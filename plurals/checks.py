from django.conf import settings
from django.core import checks

from plurals.cldr.plural_rule_parser import ParseError, parse_rule
from plurals.cldr.rules import PluralRules, load_plurals_xml


def _check_rules(language_code, rules, origin):
    errors = []
    for form, rule in rules.items():
        try:
            _, state = parse_rule(rule, 0)
        except ParseError as e:
            errors.append(checks.Error(
                "Invalid plural rule for %r (%s) in %s: %s" % (language_code, form, origin, e),
                hint="Rules must follow the CLDR plural rule syntax.",
                id="plurals.E001",
            ))
            continue

        if state.pos != len(state.rule):
            errors.append(checks.Warning(
                "Plural rule for %r (%s) in %s isn't parsed completely: %r" % (language_code, form, origin, rule),
                hint="Trailing text is ignored when the rule is evaluated.",
                id="plurals.W001",
            ))
    return errors


def check_plural_rules(app_configs=None, **kwargs):
    """ Every plural rule given in the settings must be a valid CLDR rule. """
    errors = []

    xml_path = getattr(settings, 'CLDR_PLURALS_XML', None)
    if xml_path:
        try:
            xml_rules = load_plurals_xml(xml_path)
        except (IOError, SyntaxError, ValueError) as e:
            errors.append(checks.Error(
                "Unable to load CLDR_PLURALS_XML %r: %s" % (xml_path, e),
                id="plurals.E002",
            ))
        else:
            for language_code, rules in sorted(xml_rules.items()):
                errors.extend(_check_rules(language_code, rules.rules, xml_path))

    for language_code, forms in sorted(getattr(settings, 'CLDR_PLURAL_RULES', {}).items()):
        try:
            rules = PluralRules(forms)
        except ValueError as e:
            errors.append(checks.Error(
                "Invalid plural forms for %r in CLDR_PLURAL_RULES: %s" % (language_code, e),
                hint="Plural forms are zero, one, two, few, many and other.",
                id="plurals.E003",
            ))
            continue
        errors.extend(_check_rules(language_code, rules.rules, "CLDR_PLURAL_RULES"))

    return errors
