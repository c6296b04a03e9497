"""Shared type aliases for request parameters and decoded payloads."""

from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any
from typing import Union

# A single value in a parameter bag: scalars, nested mappings or lists.
ParamValue = Union[
    str,
    int,
    float,
    bool,
    None,
    Mapping[str, "ParamValue"],
    Sequence["ParamValue"],
]

Params = dict[str, ParamValue]

# Decoded JSON returned by the API. Resources are passed through untouched.
Payload = Any
