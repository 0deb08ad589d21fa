"""Timebank package.

Punch registration, worked-time computation and hour-bank balance, organized
by feature modules (punches, worktime, balance, reports, ...) with thin Flask
controllers over service/repository layers.
"""
