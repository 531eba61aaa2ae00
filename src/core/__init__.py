"""
Core domain models, contracts and error types of the vending automaton.

Everything here is independent of the presentation layer: no rendering,
no timers, no user interaction.
"""
