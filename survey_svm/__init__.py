"""
Survey SVM Analysis.

Trains cost-sensitive support vector machines that predict diabetes and
cancer presence from demographic and lifestyle survey variables, tunes them
by cross-validation against an F1 objective, and reports accuracy, ROC and
decision-boundary results.

DISCLAIMER: This is a statistical analysis of survey data. It does NOT
provide medical diagnoses or replace professional medical advice.
"""

__version__ = "0.1.0"
