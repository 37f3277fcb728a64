"""Congregation attendance package.

Organized by feature modules (people, attendance, reports, imports, ...)
with a thin Flask controller layer over service/repository layers.
"""
