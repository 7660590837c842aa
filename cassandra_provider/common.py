# -*- coding: utf-8 -*-
import hashlib


def fingerprint(text):
    return hashlib.sha256(text.encode('utf-8')).hexdigest()


def first_row(rows):
    for row in rows:
        return row


def quote_identifier(name):
    return '"%s"' % name.replace('"', '""')
