from plurals.cldr.plural_rule_parser import ParseError, evaluate  # noqa
