"""Domain layer for taskpie.

Everything below this package is pure: no I/O, no side effects beyond
the frame scheduler callbacks the animation package owns.
"""
