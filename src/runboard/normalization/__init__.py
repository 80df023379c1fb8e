"""
Normalization of headers and dates.

Provides canonical column naming and date handling for uploaded
run logs.
"""
