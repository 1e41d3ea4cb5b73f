"""Tabular preview helpers.

This module turns delimited text into rows and decides how cell
values should be dereferenced and displayed.
"""
