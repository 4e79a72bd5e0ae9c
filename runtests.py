#!/usr/bin/env python

import os
import sys

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
sys.path.append(BASE_DIR)


TEST_SETTINGS = dict(
    TEMPLATES=[
        {
            'BACKEND': 'django.template.backends.django.DjangoTemplates',
            'DIRS': [],
            'APP_DIRS': True,
        }
    ],
    SECRET_KEY="django_tests_secret_key",
    DEBUG=False,
    ALLOWED_HOSTS=[],
    INSTALLED_APPS=(
        'plurals',
    ),
    DATABASES={},
    LANGUAGE_CODE='en-us',
    LANGUAGES=[
        ('en', 'English'),
        ('pl', 'Polish'),
        ('ar', 'Arabic'),
    ],
    TIME_ZONE='UTC',
    USE_I18N=True,
    USE_TZ=True,
)


def configure():
    import django
    from django.conf import settings

    if not settings.configured:
        settings.configure(**TEST_SETTINGS)
        django.setup()


def main(argv):
    configure()

    from django.conf import settings
    from django.test.utils import get_runner

    # Current module (``tests``) and its submodules.
    test_cases = ['plurals']
    if len(argv) > 1 and not argv[1].startswith('-'):
        test_cases = [argv[1]]

    TestRunner = get_runner(settings)
    # ``verbosity`` can be overwritten from the environment.
    test_runner = TestRunner(verbosity=int(os.environ.get('VERBOSITY', 2)))
    failures = test_runner.run_tests(test_cases)
    sys.exit(bool(failures))


if __name__ == '__main__':
    main(sys.argv)
