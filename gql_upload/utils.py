"""Utilities to manipulate several python objects."""

from typing import List


def str_first_element(errors: List) -> str:
    try:
        first_error = errors[0]
    except (KeyError, TypeError):
        first_error = errors

    return str(first_error)
