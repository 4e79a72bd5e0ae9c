#LIBRARIES
from django.core.management.base import BaseCommand, CommandError

#PLURALS
from plurals.cldr.rules import (
    CONFIGURED_RULES,
    LANGUAGE_LOOKUPS,
    example_numbers,
    get_rules_for_language,
    normalize_language_code,
)


def check_samples(rules):
    """
        Returns a list of (expected_form, sample, computed_form) tuples for every sample listed in the
        rules which the rules put in a different plural form.
    """
    failures = []
    for form, sample in rules.samples():
        computed = rules(sample)
        if computed != form:
            failures.append((form, sample, computed))
    return failures


class Command(BaseCommand):
    help = (
        "Checks the plural rules of each language against the @integer and @decimal samples listed with them. "
        "Checks all the known languages unless some language codes are given."
    )

    def add_arguments(self, parser):
        parser.add_argument('language_codes', nargs='*', metavar='language_code')

    def handle(self, *args, **options):
        verbosity = int(options.get('verbosity'))
        language_codes = options.get('language_codes') or sorted(
            set(LANGUAGE_LOOKUPS) | set(CONFIGURED_RULES.get())
        )

        failed = []
        for language_code in language_codes:
            language_code = normalize_language_code(language_code)
            rules = get_rules_for_language(language_code)

            try:
                failures = check_samples(rules)
            except ValueError as e:
                # Unparseable rules or bad sample data
                self.stderr.write("%s: %s" % (language_code, e))
                failed.append(language_code)
                continue

            for form, sample, computed in failures:
                self.stderr.write(
                    "%s: %s is listed as %r but the rules say %r" % (language_code, sample, form, computed)
                )
            if failures:
                failed.append(language_code)
            elif verbosity > 0:
                self.stdout.write("%s: OK" % language_code)

            if verbosity > 1:
                examples = ", ".join("%s=%s" % example for example in example_numbers(rules))
                self.stdout.write("    %s" % examples)

        if failed:
            raise CommandError("Plural rules don't match their samples for: %s" % ", ".join(failed))
