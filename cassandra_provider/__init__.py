# -*- coding: utf-8 -*-
"""Declarative keyspace, role and grant management for Cassandra."""

__version__ = '0.3.0'
