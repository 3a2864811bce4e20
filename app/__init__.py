"""
LittleSteps Forecaster backend.
"""
