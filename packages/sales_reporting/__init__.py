"""Multi-tenant sales reporting and analytics engine.

The stable import surface is :mod:`sales_reporting.api`.
"""
