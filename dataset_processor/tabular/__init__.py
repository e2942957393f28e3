"""Tabular (CSV / XLSX) input reading."""
