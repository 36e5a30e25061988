"""Dice expression domain: terms, validation, tokenizing, evaluation.

Pure logic with no I/O. The service layer composes these pieces and the
CLI renders the outcome.
"""
