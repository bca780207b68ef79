"""Domain layer for cadence.

Pure models and logic (no I/O): the Result monad, the error taxonomy,
task/todo models, log events and the due date predictor.
"""
