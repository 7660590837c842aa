# -*- coding: utf-8 -*-
import re

from ansible.module_utils.common.arg_spec import ArgumentSpecValidator

from cassandra_provider.errors import ValidationError


def matches(pattern, message):
    """Build a check failing with `message` when a value does not match `pattern`.

    `message` may reference the offending value as ``{value}``.
    """
    regex = re.compile(pattern)

    def check(value):
        if not regex.fullmatch(value):
            return message.format(value=value)

    return check


def compiles(message):
    def check(value):
        try:
            re.compile(value)
        except re.error:
            return message.format(value=value)

    return check


def validate_attributes(argument_spec, params, mutually_exclusive=None, checks=None):
    """Validate `params` against an Ansible argument spec plus per-attribute checks.

    Unset (None) values and keys outside of `argument_spec` are ignored, so the
    full parameter dict of an Ansible module can be passed in. Returns the
    validated parameters with defaults applied; raises ValidationError listing
    every problem found. Per-attribute checks only run once the spec itself
    validates, so they always see converted values.
    """
    known = set(argument_spec)
    for spec in argument_spec.values():
        known.update(spec.get('aliases', ()))

    supplied = dict((key, value) for key, value in params.items()
                    if key in known and value is not None)

    validator = ArgumentSpecValidator(argument_spec, mutually_exclusive=mutually_exclusive)
    result = validator.validate(supplied)

    errors = list(result.error_messages)
    validated = result.validated_parameters

    if errors:
        raise ValidationError(errors)

    for name, check in (checks or {}).items():
        value = validated.get(name)
        if value is None:
            continue
        message = check(value)
        if message:
            errors.append(message)

    if errors:
        raise ValidationError(errors)

    return validated
