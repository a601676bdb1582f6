"""Test-suite for report-pivot."""
