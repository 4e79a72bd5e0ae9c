import os
from setuptools import setup, find_packages

NAME = 'plurals'
PACKAGES = find_packages()
DESCRIPTION = 'CLDR plural rules for Django'
URL = "https://github.com/potatolondon/plurals"
LONG_DESCRIPTION = open(os.path.join(os.path.dirname(__file__), 'README.md')).read()
AUTHOR = 'Potato London Ltd.'

setup(
    name=NAME,
    version='0.1.0',
    packages=PACKAGES,
    package_data={'plurals': ['tests/*.xml']},
    include_package_data=True,
    install_requires=[
        'Django>=3.2',
    ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.7',
    # metadata for upload to PyPI
    author=AUTHOR,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    keywords=["django", "translation", "cldr", "plurals", "i18n"],
    url=URL,
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Framework :: Django',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ]
)
