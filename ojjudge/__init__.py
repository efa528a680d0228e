"""Judging worker for an online judge backed by a go-judge sandbox."""

__version__ = "0.1.0"