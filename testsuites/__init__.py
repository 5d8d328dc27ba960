"""
Test suites package.

Kept importable so unit tests can share the fake Playwright objects in
`testsuites.unit.fakes`.
"""
