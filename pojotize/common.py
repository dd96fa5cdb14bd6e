"""
Common utility functions for pojotize.
"""

# pylint: disable=line-too-long

import os
import re
from typing import Any

import inflection
import jinja2


def singularize(word: str) -> str:
    """
    Returns the singular form of an English plural noun.

    Words that are already singular, or that the inflection rules do not
    recognize, are returned unchanged.

    Args:
        word (str): The word to singularize.

    Returns:
        str: The singular form.
    """
    if not word:
        return word
    return inflection.singularize(word)


def field_sort_key(field: Any) -> str:
    """Sort key for fields within a class: the original JSON property name."""
    return field.property_name


def pascal(string):
    """
    Convert a string to PascalCase from snake_case, camelCase, or PascalCase.
    The string can contain dots, which are preserved in the output.
    Underscores at the beginning of the string are preserved in the output, but
    underscores in the middle of the string are removed.

    Args:
        string (str): The string to convert.

    Returns:
        str: The string in PascalCase.
    """
    if '.' in string:
        strings = string.split('.')
        return '.'.join(pascal(s) for s in strings)
    if not string or len(string) == 0:
        return string
    words = []
    startswith_under = string[0] == '_'
    if '_' in string:
        # snake_case
        words = re.split(r'_', string)
    elif string[0].isupper():
        # PascalCase
        words = re.findall(r'[A-Z][a-z0-9_]*\.?', string)
    else:
        # camelCase
        words = re.findall(r'[a-z0-9]+\.?|[A-Z][a-z0-9_]*\.?', string)
    result = ''.join(word.capitalize() for word in words)
    if startswith_under:
        result = '_' + result
    return result


def lower_first(string: str) -> str:
    """Lower-cases the first character of a string and leaves the rest untouched."""
    if not string:
        return string
    return string[0].lower() + string[1:]


def upper_first(string: str) -> str:
    """Upper-cases the first character of a string and leaves the rest untouched."""
    if not string:
        return string
    return string[0].upper() + string[1:]


def process_template(file_path: str, **kvargs) -> str:
    """
    Process a file as a Jinja2 template with the given object as input.

    Args:
        file_path (str): The path to the file, relative to the package directory.
        **kvargs: The values to render the template with.

    Returns:
        str: The processed template as a string.
    """
    file_dir = os.path.dirname(__file__)
    template_loader = jinja2.FileSystemLoader(searchpath=file_dir)
    template_env = jinja2.Environment(loader=template_loader, keep_trailing_newline=True,
                                      trim_blocks=True, lstrip_blocks=True)
    template_env.filters['pascal'] = pascal

    template = template_env.get_template(file_path)
    return template.render(**kvargs)

