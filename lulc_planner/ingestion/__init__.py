"""
Ingestion boundary for the two source tables.

csv_loader : parse_transition_csv() + parse_timeseries_csv() — validate every
             row into frozen pydantic models; reject malformed input with one
             ValueError listing the failing rows.
"""
