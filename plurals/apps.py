from django.apps import AppConfig


class PluralsAppConfig(AppConfig):
    name = "plurals"

    def ready(self):
        from django.core import checks
        from django.test.signals import setting_changed
        from plurals.checks import check_plural_rules
        from plurals.cldr.rules import reset_rules_cache
        setting_changed.connect(reset_rules_cache, dispatch_uid="plurals.reset_rules_cache")
        checks.register(check_plural_rules)
