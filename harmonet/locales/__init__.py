"""Locale package for i18n JSON resources.

Holds the base dictionaries (ja.json, en.json, zh.json) read through
importlib.resources. Keeping this a real package makes the files
discoverable both from a checkout and from an installed wheel.
"""
