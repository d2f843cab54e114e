"""Radiant Waves CRM package.

This package is organized by feature modules (users, customers, attendance, reports)
with a thin Flask controller layer on top of a single state container (``state.store``)
that mirrors every mutation into a key-value persisted store.
"""
